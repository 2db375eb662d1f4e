# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

"""Resolution of broker identities to ledger accounts and commodities, and the existence checks used for deduplication."""

from collections import defaultdict
from collections.abc import Callable, Iterable
from decimal import Decimal

from ..broker import Asset, BrokerAccount, BrokerTransaction, Position, TransactionType
from ..ledger import AccountName, AccountType, Amount, Balance, LedgerSnapshot, Price, Transaction
from ..util.helpers.decimal import DecimalFactory
from ..util.mixins import LoggableMixin
from .config import MapperConfig
from .errors import (
    AccountNotFound,
    DuplicateLedgerTag,
    MappingError,
    MissingAccount,
    MissingAssetAccount,
    MissingCommodity,
    MissingExpenseAccount,
    MissingIncomeAccount,
    UnsupportedTransactionType,
)


MISSING_ACCOUNT_ERRORS: dict[AccountType, type[MissingAccount]] = {
    AccountType.ASSETS: MissingAssetAccount,
    AccountType.INCOME: MissingIncomeAccount,
    AccountType.EXPENSES: MissingExpenseAccount,
}

type AccountKey = tuple[AccountType, str, str]


class LedgerLookup(LoggableMixin):
    """Read-only index over a ledger snapshot.

    Accounts are matched by role plus two metadata tags (the broker account type and a symbol), commodities by the broker
    symbol they are tagged with. The index is built once, so a lookup can be shared between threads mapping different accounts.
    """

    def __init__(self, snapshot: LedgerSnapshot, config: MapperConfig | None = None, decimal_factory: DecimalFactory | None = None) -> None:
        self.snapshot = snapshot
        self.config = config if config is not None else MapperConfig()
        self.decimal = decimal_factory if decimal_factory is not None else DecimalFactory(self.config.decimal)

        self._build_indices()

    # MARK: Index
    def _build_indices(self) -> None:
        keys = self.config.keys
        conflicts: list[str] = []

        accounts: dict[AccountKey, AccountName] = {}
        for account in self.snapshot.accounts:
            account_type = account.metadata.get(keys.account_type)
            symbol = account.metadata.get(keys.account_symbol)
            if account_type is None or symbol is None:
                continue

            key = (account.name.role, account_type, symbol)
            if (existing := accounts.get(key)) is not None and existing != account.name:
                conflicts.append(f"accounts {existing} and {account.name} are both tagged {keys.account_type}: {account_type}, {keys.account_symbol}: {symbol}")
                continue
            accounts[key] = account.name

        commodities: dict[str, str] = {}
        for commodity in self.snapshot.commodities:
            if (broker_symbol := commodity.metadata.get(keys.commodity_id)) is None:
                continue

            if (existing_symbol := commodities.get(broker_symbol)) is not None and existing_symbol != commodity.symbol:
                conflicts.append(f"commodities {existing_symbol} and {commodity.symbol} are both tagged {keys.commodity_id}: {broker_symbol}")
                continue
            commodities[broker_symbol] = commodity.symbol

        if conflicts:
            raise DuplicateLedgerTag(conflicts)

        self._accounts = accounts
        self._commodities = commodities
        self._prices = frozenset(self.snapshot.prices)
        self._balances = frozenset(self.snapshot.balances)
        self._transaction_ids = frozenset(
            value for transaction in self.snapshot.transactions for key in (keys.id, keys.nrwt_id) if (value := transaction.metadata.get(key)) is not None
        )

        self.log.debug("Indexed %d accounts, %d commodities, %d existing transactions", len(accounts), len(commodities), len(self._transaction_ids))

    # MARK: Symbols
    def ledger_symbol(self, asset: Asset | str) -> str:
        """Return the ledger commodity for a broker asset. Currencies are their own commodity."""
        if isinstance(asset, Asset):
            if asset.is_currency:
                return asset.symbol
            asset = asset.symbol

        if (symbol := self._commodities.get(asset)) is None:
            raise MissingCommodity(asset)
        return symbol

    # MARK: Accounts
    def ledger_account_name(self, account: BrokerAccount, role: AccountType, symbol: str | None = None) -> AccountName:
        """Return the ledger account of ``role`` tagged with ``account``'s type and ``symbol`` (default: its base currency)."""
        if (error := MISSING_ACCOUNT_ERRORS.get(role)) is None:
            msg = f"Unsupported account role for broker mapping: {role}"
            raise ValueError(msg)

        symbol = account.currency if symbol is None else symbol
        if (name := self._accounts.get((role, account.type, symbol))) is None:
            raise error(symbol, account.type)
        return name

    def asset_account(self, account: BrokerAccount, symbol: str | None = None) -> AccountName:
        return self.ledger_account_name(account, AccountType.ASSETS, symbol)

    def income_account(self, account: BrokerAccount, symbol: str) -> AccountName:
        return self.ledger_account_name(account, AccountType.INCOME, symbol)

    def expense_account(self, account: BrokerAccount, symbol: str) -> AccountName:
        return self.ledger_account_name(account, AccountType.EXPENSES, symbol)

    # MARK: Existence
    def price_exists(self, price: Price) -> bool:
        return price in self._prices

    def balance_exists(self, balance: Balance) -> bool:
        return balance in self._balances

    def transaction_exists(self, transaction: Transaction | BrokerTransaction | str) -> bool:
        """Whether the broker transaction has already been imported, on its own or merged into another transaction."""
        if isinstance(transaction, str):
            broker_id = transaction
        elif isinstance(transaction, BrokerTransaction):
            broker_id = transaction.id
        else:
            broker_id = transaction.metadata.get(self.config.keys.id)
            if broker_id is None:
                return False
        return broker_id in self._transaction_ids

    # MARK: Balancing
    def residuals(self, transaction: Transaction) -> dict[str, Decimal]:
        """Return the signed sum of posting weights for each commodity."""
        context = self.decimal.context
        sums: dict[str, Decimal] = defaultdict(Decimal)
        for posting in transaction.postings:
            weight = posting.weight(context)
            sums[weight.commodity] = context.add(sums[weight.commodity], weight.number)
        return dict(sums)

    def is_balanced(self, transaction: Transaction) -> bool:
        tolerance = self.config.tolerance
        return all(abs(residual) <= tolerance for residual in self.residuals(transaction).values())

    def display_precision(self, transaction: Transaction, commodity: str) -> int:
        """Return the largest precision ``commodity`` is written with in ``transaction``."""
        precisions = [self.config.minimum_precision]
        for posting in transaction.postings:
            amounts = (posting.amount, posting.price, posting.cost.amount if posting.cost is not None else None)
            precisions.extend(amount.precision for amount in amounts if amount is not None and amount.commodity == commodity)
        return max(precisions)

    def rounding_amounts(self, transaction: Transaction) -> tuple[Amount, ...]:
        """Return, per unbalanced commodity, the amount that brings the transaction back to balance."""
        tolerance = self.config.tolerance
        amounts = []
        for commodity, residual in self.residuals(transaction).items():
            if abs(residual) <= tolerance:
                continue
            precision = self.display_precision(transaction, commodity)
            number = self.decimal.quantize(residual.copy_negate(), precision)
            if number.is_zero():
                continue
            amounts.append(Amount(number=number, commodity=commodity, precision=precision))
        return tuple(amounts)

    # MARK: Coverage
    def check_coverage(
        self, accounts: Iterable[BrokerAccount], positions: Iterable[Position] = (), transactions: Iterable[BrokerTransaction] = ()
    ) -> list[MappingError]:
        """Return every missing account or commodity that mapping the given data would need, without mapping anything."""
        by_id = {account.id: account for account in accounts}
        errors: dict[str, MappingError] = {}

        def check(fn: Callable[[], object]) -> None:
            try:
                fn()
            except MappingError as err:
                errors.setdefault(f"{type(err).__name__}: {err}", err)

        def owner(account_id: str) -> BrokerAccount | None:
            if (account := by_id.get(account_id)) is None:
                errors.setdefault(f"AccountNotFound: {account_id}", AccountNotFound(account_id))
            return account

        positions_by_account: dict[str, int] = dict.fromkeys(by_id, 0)
        for position in positions:
            if (account := owner(position.account_id)) is None:
                continue
            positions_by_account[account.id] = positions_by_account.get(account.id, 0) + 1
            check(lambda p=position: self.ledger_symbol(p.asset))
            check(lambda a=account, p=position: self.asset_account(a, p.asset.symbol))

        # Accounts without positions still get a zero balance on their cash account
        for account_id, count in positions_by_account.items():
            if count == 0:
                check(lambda a=by_id[account_id]: self.asset_account(a))

        for transaction in transactions:
            if (account := owner(transaction.account_id)) is None:
                continue
            for requirement in self._transaction_requirements(transaction, account):
                check(requirement)

        return list(errors.values())

    def _transaction_requirements(self, transaction: BrokerTransaction, account: BrokerAccount) -> list[Callable[[], object]]:
        kind = transaction.type
        # Every transaction needs the cash account, and the rounding account in case it does not balance
        requirements: list[Callable[[], object]] = [
            lambda: self.asset_account(account),
            lambda: self.expense_account(account, self.config.rounding_symbol),
        ]

        match kind:
            case TransactionType.BUY | TransactionType.SELL:
                requirements.append(lambda: self.ledger_symbol(transaction.symbol))
                requirements.append(lambda: self.asset_account(account, transaction.symbol))
            case TransactionType.DIVIDEND:
                requirements.append(lambda: self.income_account(account, transaction.symbol))
            case TransactionType.FEE | TransactionType.NRWT:
                requirements.append(lambda: self.expense_account(account, kind.value))
            case TransactionType.CONTRIBUTION | TransactionType.DEPOSIT:
                requirements.append(lambda: self.asset_account(account, kind.value))
            case TransactionType.REFUND:
                requirements.append(lambda: self.income_account(account, kind.value))
            case _:

                def unsupported() -> None:
                    raise UnsupportedTransactionType(kind.value)

                requirements.append(unsupported)

        return requirements
