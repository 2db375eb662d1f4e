# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

"""Mapping of many broker accounts against one ledger snapshot."""

import datetime

from collections import defaultdict
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from ..broker import BrokerAccount, BrokerTransaction, Position
from ..ledger import Balance, LedgerSnapshot, Price, Transaction
from ..util.mixins import LoggableMixin
from .account_mapper import AccountMapper
from .config import MapperConfig
from .errors import AccountNotFound, MappingError
from .lookup import LedgerLookup


# MARK: Results
@dataclass(frozen=True)
class AccountResult:
    account_id: str
    prices: list[Price] = field(default_factory=list)
    balances: list[Balance] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)


@dataclass(frozen=True)
class ImportResult:
    results: dict[str, AccountResult] = field(default_factory=dict)
    failures: dict[str, MappingError] = field(default_factory=dict)
    coverage: list[MappingError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def prices(self) -> list[Price]:
        prices: list[Price] = []
        for result in self.results.values():
            prices.extend(price for price in result.prices if price not in prices)
        return sorted(prices, key=lambda price: price.date)

    @property
    def balances(self) -> list[Balance]:
        return sorted((balance for result in self.results.values() for balance in result.balances), key=lambda balance: balance.date)

    @property
    def transactions(self) -> list[Transaction]:
        return sorted((tx for result in self.results.values() for tx in result.transactions), key=lambda tx: tx.date)


# MARK: Runner
class ImportRunner(LoggableMixin):
    """Maps every account independently: one account failing never prevents the others from being mapped."""

    def __init__(self, ledger: LedgerSnapshot | LedgerLookup, config: MapperConfig | None = None) -> None:
        if config is None:
            config = ledger.config if isinstance(ledger, LedgerLookup) else self.default_config()
        self.config = config
        self.lookup = ledger if isinstance(ledger, LedgerLookup) else LedgerLookup(ledger, config)

    @staticmethod
    def default_config() -> MapperConfig:
        from ..config import CFG

        return CFG.mapper if CFG.loaded else MapperConfig()

    def run(
        self,
        accounts: Sequence[BrokerAccount],
        positions: Iterable[Position] = (),
        transactions: Iterable[BrokerTransaction] = (),
        *,
        as_of: datetime.date | None = None,
    ) -> ImportResult:
        positions = list(positions)
        transactions = list(transactions)

        coverage: list[MappingError] = []
        if self.config.preflight:
            coverage = self.lookup.check_coverage(accounts, positions, transactions)
            for error in coverage:
                self.log.warning("%s", error)

        mapper = AccountMapper(self.lookup, accounts)
        known = {account.id for account in accounts}

        positions_by_account: dict[str, list[Position]] = defaultdict(list)
        for position in positions:
            positions_by_account[position.account_id].append(position)
        transactions_by_account: dict[str, list[BrokerTransaction]] = defaultdict(list)
        for transaction in transactions:
            transactions_by_account[transaction.account_id].append(transaction)

        failures: dict[str, MappingError] = {
            account_id: AccountNotFound(account_id) for account_id in (positions_by_account.keys() | transactions_by_account.keys()) - known
        }

        def map_account(account: BrokerAccount) -> AccountResult | MappingError:
            with self.lookup.decimal.context_manager():
                try:
                    mapped_positions = mapper.map_positions(positions_by_account.get(account.id, []), account, as_of=as_of)
                    mapped_transactions = mapper.map_transactions(transactions_by_account.get(account.id, []))
                except MappingError as err:
                    self.log.warning("Account could not be mapped: %s", err, extra={"account": account.id})
                    return err

            prices = list(mapped_positions.prices)
            prices.extend(price for price in mapped_transactions.prices if price not in prices)
            return AccountResult(
                account_id=account.id,
                prices=prices,
                balances=mapped_positions.balances,
                transactions=mapped_transactions.transactions,
            )

        if self.config.workers > 1 and len(accounts) > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers, thread_name_prefix="wsledger") as executor:
                outcomes = list(executor.map(map_account, accounts))
        else:
            outcomes = [map_account(account) for account in accounts]

        results: dict[str, AccountResult] = {}
        for account, outcome in zip(accounts, outcomes, strict=True):
            if isinstance(outcome, MappingError):
                failures[account.id] = outcome
            else:
                results[account.id] = outcome

        self.log.info("Mapped %d accounts, %d failed", len(results), len(failures))
        return ImportResult(results=results, failures=failures, coverage=coverage)
