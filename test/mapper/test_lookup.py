# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import datetime

from decimal import Decimal

import pytest

from frozendict import frozendict
from pydantic import ValidationError

from test.fixtures.broker import DATE
from wsledger.broker import Asset, AssetType, TransactionType
from wsledger.ledger import AccountName, AccountType, Amount, Balance, Cost, Posting, Price, Transaction
from wsledger.mapper import (
    AccountNotFound,
    DuplicateLedgerTag,
    MissingAssetAccount,
    MissingCommodity,
    MissingExpenseAccount,
    MapperConfig,
    MissingIncomeAccount,
    UnsupportedTransactionType,
)


def amount(number: str, commodity: str = "CAD", precision: int = 2) -> Amount:
    return Amount(number=Decimal(number), commodity=commodity, precision=precision)


@pytest.mark.lookup
class TestSymbols:
    def test_commodity_by_broker_symbol(self, ledger):
        lookup = ledger.lookup()
        assert lookup.ledger_symbol("AAPL") == "APPLE"
        assert lookup.ledger_symbol(Asset(symbol="ABC", type=AssetType.EQUITY)) == "ABC"

    def test_currency_is_its_own_commodity(self, ledger):
        assert ledger.lookup().ledger_symbol(Asset(symbol="USD", type=AssetType.CURRENCY)) == "USD"

    def test_missing_commodity(self, ledger):
        with pytest.raises(MissingCommodity) as info:
            ledger.lookup().ledger_symbol("XYZ")
        assert info.value.symbol == "XYZ"
        assert "external-id: XYZ" in str(info.value)

    def test_untagged_commodity_is_ignored(self, ledger):
        ledger.add_commodity("XYZ")
        with pytest.raises(MissingCommodity):
            ledger.lookup().ledger_symbol("XYZ")


@pytest.mark.lookup
class TestAccounts:
    def test_cash_account_defaults_to_base_currency(self, ledger, broker):
        assert ledger.lookup().asset_account(broker.account()) == "Assets:Wealthsimple:TFSA:Cash"

    def test_accounts_by_role(self, ledger, broker):
        lookup = ledger.lookup()
        account = broker.account()
        assert lookup.asset_account(account, "ABC") == "Assets:Wealthsimple:TFSA:ABC"
        assert lookup.income_account(account, "ABC") == "Income:Wealthsimple:TFSA:ABC:Dividend"
        assert lookup.expense_account(account, "fee") == "Expenses:Wealthsimple:TFSA:Fee"

    @pytest.mark.parametrize(
        ("role", "error"),
        [
            (AccountType.ASSETS, MissingAssetAccount),
            (AccountType.INCOME, MissingIncomeAccount),
            (AccountType.EXPENSES, MissingExpenseAccount),
        ],
    )
    def test_missing_account(self, ledger, broker, role, error):
        with pytest.raises(error) as info:
            ledger.lookup().ledger_account_name(broker.account(), role, "XYZ")
        assert info.value.symbol == "XYZ"
        assert info.value.account_type == "ca_tfsa"
        assert f"{error.role} account" in str(info.value)

    def test_account_type_must_match(self, ledger, broker):
        with pytest.raises(MissingAssetAccount):
            ledger.lookup().asset_account(broker.account(type="ca_rrsp"))

    def test_unsupported_role(self, ledger, broker):
        with pytest.raises(ValueError, match="Unsupported account role"):
            ledger.lookup().ledger_account_name(broker.account(), AccountType.LIABILITIES, "CAD")


@pytest.mark.lookup
class TestDuplicateTags:
    def test_duplicate_account(self, ledger):
        ledger.add_account("Assets:Wealthsimple:TFSA:Cash2", "CAD")
        with pytest.raises(DuplicateLedgerTag) as info:
            ledger.lookup()
        assert len(info.value.conflicts) == 1
        assert "Assets:Wealthsimple:TFSA:Cash2" in info.value.conflicts[0]

    def test_duplicate_commodity(self, ledger):
        ledger.add_commodity("ABC2", "ABC")
        with pytest.raises(DuplicateLedgerTag, match="ABC2"):
            ledger.lookup()

    def test_all_conflicts_reported(self, ledger):
        ledger.add_account("Assets:Wealthsimple:TFSA:Cash2", "CAD")
        ledger.add_commodity("ABC2", "ABC")
        with pytest.raises(DuplicateLedgerTag) as info:
            ledger.lookup()
        assert len(info.value.conflicts) == 2

    def test_same_tags_with_different_roles(self, ledger, broker):
        ledger.add_account("Income:Wealthsimple:TFSA:Cash", "CAD")
        lookup = ledger.lookup()
        assert lookup.income_account(broker.account(), "CAD") == "Income:Wealthsimple:TFSA:Cash"


@pytest.mark.lookup
class TestExistence:
    def test_price_exists(self, ledger):
        ledger.prices.append(Price(date=DATE, commodity="ABC", amount=amount("25.30", "USD")))
        lookup = ledger.lookup()
        assert lookup.price_exists(Price(date=DATE, commodity="ABC", amount=amount("25.300", "USD", 3)))
        assert not lookup.price_exists(Price(date=DATE, commodity="ABC", amount=amount("25.31", "USD")))

    def test_balance_exists(self, ledger):
        balance = Balance(date=DATE, account=AccountName("Assets:Wealthsimple:TFSA:ABC"), amount=amount("10.5", "ABC", 3))
        ledger.balances.append(balance)
        lookup = ledger.lookup()
        assert lookup.balance_exists(balance)
        assert not lookup.balance_exists(balance.model_copy(update={"date": DATE + datetime.timedelta(days=1)}))

    def test_transaction_exists(self, ledger, broker):
        ledger.transactions.append(Transaction(date=DATE, metadata=frozendict({"wealthsimple-id": "tx-1", "wealthsimple-id-nrwt": "tx-2"})))
        ledger.transactions.append(Transaction(date=DATE, metadata=frozendict({"other": "tx-3"})))
        lookup = ledger.lookup()

        assert lookup.transaction_exists("tx-1")
        assert lookup.transaction_exists(broker.buy())
        assert lookup.transaction_exists("tx-2")
        assert not lookup.transaction_exists("tx-3")
        assert lookup.transaction_exists(Transaction(date=DATE, metadata=frozendict({"wealthsimple-id": "tx-2"})))
        assert not lookup.transaction_exists(Transaction(date=DATE))


@pytest.mark.lookup
class TestBalancing:
    def transaction(self, *postings: Posting) -> Transaction:
        return Transaction(date=DATE, postings=postings)

    def test_balanced(self, ledger):
        transaction = self.transaction(
            Posting(account=AccountName("Assets:Cash"), amount=amount("-253.00")),
            Posting(account=AccountName("Assets:ABC"), amount=amount("10", "ABC", 0), cost=Cost(amount=amount("25.30"))),
        )
        lookup = ledger.lookup()
        assert lookup.residuals(transaction) == {"CAD": Decimal(0)}
        assert lookup.is_balanced(transaction)
        assert lookup.rounding_amounts(transaction) == ()

    def test_within_tolerance(self, ledger):
        transaction = self.transaction(
            Posting(account=AccountName("Assets:Cash"), amount=amount("-10.00")),
            Posting(account=AccountName("Expenses:Fee"), amount=amount("10.004", precision=3)),
        )
        assert ledger.lookup().is_balanced(transaction)

    def test_rounding_amount(self, ledger):
        transaction = self.transaction(
            Posting(account=AccountName("Assets:Cash"), amount=amount("-10.00")),
            Posting(account=AccountName("Expenses:Fee"), amount=amount("9.9871", precision=4)),
        )
        lookup = ledger.lookup()
        assert not lookup.is_balanced(transaction)
        assert lookup.display_precision(transaction, "CAD") == 4
        assert lookup.rounding_amounts(transaction) == (amount("0.0129", precision=4),)

    def test_configurable_tolerance(self, ledger):
        transaction = self.transaction(
            Posting(account=AccountName("Assets:Cash"), amount=amount("-10.00")),
            Posting(account=AccountName("Expenses:Fee"), amount=amount("9.99")),
        )
        assert not ledger.lookup().is_balanced(transaction)
        assert ledger.lookup({"tolerance": "0.01"}).is_balanced(transaction)

    def test_tolerance_must_cover_display_precision(self):
        # Residuals between the tolerance and half a cent would round away to nothing
        with pytest.raises(ValidationError, match="tolerance"):
            MapperConfig(tolerance="0.001")
        assert MapperConfig(tolerance="0.0005", minimum_precision=3).tolerance == Decimal("0.0005")


@pytest.mark.lookup
class TestCoverage:
    def test_complete_ledger(self, ledger, broker):
        transactions = [
            broker.buy(),
            broker.sell(),
            broker.dividend(),
            broker.foreign_dividend(),
            broker.nrwt(),
            broker.cash(TransactionType.FEE, "-4.99"),
            broker.cash(TransactionType.CONTRIBUTION, "100.00"),
            broker.cash(TransactionType.DEPOSIT, "100.00"),
            broker.cash(TransactionType.REFUND, "4.99"),
        ]
        errors = ledger.lookup().check_coverage([broker.account()], [broker.position()], transactions)
        assert errors == []

    def test_missing_entries(self, ledger, broker):
        ledger.remove_account("Expenses:Wealthsimple:TFSA:NRWT")
        errors = ledger.lookup().check_coverage(
            [broker.account()],
            [broker.position(symbol="XYZ")],
            [broker.nrwt(), broker.nrwt(), broker.transaction(TransactionType.WITHDRAWAL)],
        )
        assert sorted(type(error).__name__ for error in errors) == [
            "MissingAssetAccount",
            "MissingCommodity",
            "MissingExpenseAccount",
            "UnsupportedTransactionType",
        ]

    def test_unknown_account(self, ledger, broker):
        errors = ledger.lookup().check_coverage([], [], [broker.buy(account_id="other")])
        assert len(errors) == 1
        assert isinstance(errors[0], AccountNotFound)
        assert errors[0].account_id == "other"

    def test_cash_account_without_positions(self, ledger, broker):
        ledger.remove_account("Assets:Wealthsimple:TFSA:Cash")
        errors = ledger.lookup().check_coverage([broker.account()])
        assert len(errors) == 1
        assert isinstance(errors[0], MissingAssetAccount)
        assert errors[0].symbol == "CAD"

    def test_unsupported_kind(self, ledger, broker):
        errors = ledger.lookup().check_coverage([broker.account()], [], [broker.transaction(TransactionType.INTEREST)])
        assert [type(error) for error in errors] == [UnsupportedTransactionType]

    def test_missing_rounding_account(self, ledger, broker):
        ledger.remove_account("Expenses:Wealthsimple:TFSA:Rounding")
        errors = ledger.lookup().check_coverage([broker.account()], [], [broker.cash(TransactionType.FEE, "-4.99"), broker.buy()])
        assert len(errors) == 1
        assert isinstance(errors[0], MissingExpenseAccount)
        assert errors[0].symbol == "rounding"
