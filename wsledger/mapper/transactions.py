# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

"""Per-kind mapping of broker transactions to balanced ledger transactions."""

from collections.abc import Callable, Mapping
from typing import NamedTuple

from frozendict import frozendict

from ..broker import BrokerAccount, BrokerTransaction, TransactionType
from ..ledger import AccountName, Amount, Cost, Flag, Posting, Price, Transaction
from ..util.mixins import LoggableMixin
from .amount_parser import AmountParser
from .config import MapperConfig
from .descriptions import DescriptionParser, DividendDescription, WithholdingTaxDescription, description_parser
from .errors import UnsupportedTransactionType
from .lookup import LedgerLookup


class MappedTransaction(NamedTuple):
    price: Price | None
    transaction: Transaction


class _Draft(NamedTuple):
    postings: tuple[Posting, ...]
    metadata: Mapping[str, str] = frozendict()
    price: Price | None = None
    payee: str | None = None
    narration: str = ""


class TransactionTypeMapper(LoggableMixin):
    """Maps one broker transaction to a ledger transaction, plus the market price it reveals, if any.

    Every transaction gets a cash posting on the account's base currency asset account and a counter posting chosen by its
    kind. A transaction that does not balance within tolerance gets an extra posting on the rounding expense account.
    """

    def __init__(self, lookup: LedgerLookup, config: MapperConfig | None = None, amounts: AmountParser | None = None) -> None:
        self.lookup = lookup
        self.config = config if config is not None else lookup.config
        self.amounts = amounts if amounts is not None else AmountParser(self.config, lookup.decimal)

        self.dividend_parser: DescriptionParser[DividendDescription] = description_parser(TransactionType.DIVIDEND, self.amounts)
        self.withholding_parser: DescriptionParser[WithholdingTaxDescription] = description_parser(TransactionType.NRWT, self.amounts)

        self._mappers: dict[TransactionType, Callable[[BrokerTransaction, BrokerAccount, AccountName], _Draft]] = {
            TransactionType.BUY: self._map_buy,
            TransactionType.SELL: self._map_sell,
            TransactionType.DIVIDEND: self._map_dividend,
            TransactionType.FEE: self._map_fee,
            TransactionType.CONTRIBUTION: self._map_transfer,
            TransactionType.DEPOSIT: self._map_transfer,
            TransactionType.REFUND: self._map_refund,
            TransactionType.NRWT: self._map_withholding_tax,
        }

    # MARK: Entry point
    def map(self, transaction: BrokerTransaction, account: BrokerAccount) -> MappedTransaction:
        if (mapper := self._mappers.get(transaction.type)) is None:
            raise UnsupportedTransactionType(transaction.type.value)

        cash_account = self.lookup.asset_account(account)
        draft = mapper(transaction, account, cash_account)

        metadata = {self.config.keys.id: transaction.id, **draft.metadata}
        ledger_transaction = Transaction(
            date=transaction.effective_date,
            payee=draft.payee,
            narration=draft.narration,
            flag=Flag.COMPLETE,
            metadata=frozendict(metadata),
            postings=draft.postings,
        )
        ledger_transaction = self.balance(ledger_transaction, account)

        self.log.debug("Mapped %s transaction %s to %d postings", transaction.type, transaction.id, len(ledger_transaction.postings))
        return MappedTransaction(price=draft.price, transaction=ledger_transaction)

    def balance(self, transaction: Transaction, account: BrokerAccount) -> Transaction:
        """Return ``transaction`` with a rounding posting added for each commodity that does not balance."""
        if self.lookup.is_balanced(transaction):
            return transaction

        rounding_account = self.lookup.expense_account(account, self.config.rounding_symbol)
        rounding = tuple(Posting(account=rounding_account, amount=amount) for amount in self.lookup.rounding_amounts(transaction))
        self.log.debug("Adding %d rounding postings to transaction %s", len(rounding), transaction.metadata.get(self.config.keys.id))
        return transaction.model_copy(update={"postings": transaction.postings + rounding})

    # MARK: Amounts
    def net_cash(self, transaction: BrokerTransaction) -> Amount:
        return self.amounts.amount(transaction.net_cash_amount, transaction.net_cash_currency)

    def market_price(self, transaction: BrokerTransaction) -> Amount:
        return self.amounts.amount(transaction.market_price_amount, transaction.market_price_currency)

    def fx_price(self, transaction: BrokerTransaction, commodity: str | None = None) -> Amount:
        """Return the price of one unit of cash, the inverse of the broker's exchange rate."""
        return self.amounts.amount(transaction.fx_rate, commodity or transaction.market_price_currency, invert=True)

    def quantity(self, transaction: BrokerTransaction) -> Amount:
        symbol = self.lookup.ledger_symbol(transaction.symbol)
        return self.amounts.amount(transaction.quantity, symbol)

    # MARK: Trades
    def _map_trade(self, transaction: BrokerTransaction, account: BrokerAccount, cash_account: AccountName, *, buy: bool) -> _Draft:
        market_price = self.market_price(transaction)
        quantity = self.quantity(transaction)

        cash = Posting(account=cash_account, amount=self.net_cash(transaction), price=self.fx_price(transaction) if transaction.uses_fx else None)
        security_account = self.lookup.asset_account(account, transaction.symbol)
        if buy:
            security = Posting(account=security_account, amount=quantity, cost=Cost(amount=market_price))
        else:
            security = Posting(account=security_account, amount=quantity, price=market_price, cost=Cost())

        price = Price(date=transaction.process_date, commodity=quantity.commodity, amount=market_price)
        return _Draft(postings=(cash, security), price=price)

    def _map_buy(self, transaction: BrokerTransaction, account: BrokerAccount, cash_account: AccountName) -> _Draft:
        return self._map_trade(transaction, account, cash_account, buy=True)

    def _map_sell(self, transaction: BrokerTransaction, account: BrokerAccount, cash_account: AccountName) -> _Draft:
        return self._map_trade(transaction, account, cash_account, buy=False)

    # MARK: Income
    def _map_dividend(self, transaction: BrokerTransaction, account: BrokerAccount, cash_account: AccountName) -> _Draft:
        description = self.dividend_parser.parse(transaction.description)
        net_cash = self.net_cash(transaction)

        if (income := description.foreign_gross) is not None:
            cash_price = self.fx_price(transaction, income.commodity)
        else:
            income = -net_cash
            cash_price = None

        keys = self.config.keys
        return _Draft(
            postings=(
                Posting(account=cash_account, amount=net_cash, price=cash_price),
                Posting(account=self.lookup.income_account(account, transaction.symbol), amount=income),
            ),
            metadata={keys.record_date: description.record_date, keys.shares: description.shares},
        )

    def _map_refund(self, transaction: BrokerTransaction, account: BrokerAccount, cash_account: AccountName) -> _Draft:
        net_cash = self.net_cash(transaction)
        return _Draft(
            postings=(
                Posting(account=cash_account, amount=net_cash),
                Posting(account=self.lookup.income_account(account, transaction.type.value), amount=-net_cash),
            )
        )

    # MARK: Expenses
    def _map_fee(self, transaction: BrokerTransaction, account: BrokerAccount, cash_account: AccountName) -> _Draft:
        net_cash = self.net_cash(transaction)
        return _Draft(
            postings=(
                Posting(account=cash_account, amount=net_cash),
                Posting(account=self.lookup.expense_account(account, transaction.type.value), amount=-net_cash),
            ),
            payee=self.config.payee,
            narration=transaction.description,
        )

    def _map_withholding_tax(self, transaction: BrokerTransaction, account: BrokerAccount, cash_account: AccountName) -> _Draft:
        withheld = self.withholding_parser.parse(transaction.description).withheld
        return _Draft(
            postings=(
                Posting(account=cash_account, amount=self.net_cash(transaction), price=self.fx_price(transaction, withheld.commodity)),
                Posting(account=self.lookup.expense_account(account, transaction.type.value), amount=withheld),
            ),
            metadata={self.config.keys.symbol: transaction.symbol},
        )

    # MARK: Transfers
    def _map_transfer(self, transaction: BrokerTransaction, account: BrokerAccount, cash_account: AccountName) -> _Draft:
        net_cash = self.net_cash(transaction)
        return _Draft(
            postings=(
                Posting(account=cash_account, amount=net_cash),
                Posting(account=self.lookup.asset_account(account, transaction.type.value), amount=-net_cash),
            )
        )
