# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import datetime

from collections.abc import Iterable, Sequence
from typing import NamedTuple

from ..broker import BrokerAccount, BrokerTransaction, Position
from ..ledger import Price, Transaction
from ..util.mixins import LoggableMixin
from .amount_parser import AmountParser
from .errors import AccountNotFound
from .lookup import LedgerLookup
from .nrwt import NRWTMerger
from .positions import MappedPositions, PositionMapper
from .transactions import TransactionTypeMapper


class MappedTransactions(NamedTuple):
    prices: list[Price]
    transactions: list[Transaction]


class AccountMapper(LoggableMixin):
    """Maps the positions and transactions of one broker account at a time against a shared ledger lookup.

    Withholding tax transactions are merged into their dividend where possible and emitted on their own otherwise. Anything
    already present in the ledger is dropped.
    """

    def __init__(self, lookup: LedgerLookup, accounts: Iterable[BrokerAccount]) -> None:
        self.lookup = lookup
        self.accounts: dict[str, BrokerAccount] = {account.id: account for account in accounts}

        amounts = AmountParser(lookup.config, lookup.decimal)
        self.transaction_mapper = TransactionTypeMapper(lookup, amounts=amounts)
        self.position_mapper = PositionMapper(lookup, amounts=amounts)

    def account(self, account_id: str) -> BrokerAccount:
        if (account := self.accounts.get(account_id)) is None:
            raise AccountNotFound(account_id)
        return account

    # MARK: Positions
    def map_positions(
        self, positions: Sequence[Position], account: BrokerAccount | str | None = None, *, as_of: datetime.date | None = None
    ) -> MappedPositions:
        """Map the positions of one account.

        ``account`` is only needed when ``positions`` is empty; otherwise it is taken from the first position.
        """
        if isinstance(account, str):
            account = self.account(account)
        elif account is None:
            if not positions:
                msg = "An account is required to map an empty list of positions"
                raise ValueError(msg)
            account = self.account(positions[0].account_id)

        return self.position_mapper.map(positions, account, as_of=as_of)

    # MARK: Transactions
    def map_transactions(self, transactions: Sequence[BrokerTransaction]) -> MappedTransactions:
        """Map the transactions of one account."""
        if not transactions:
            return MappedTransactions(prices=[], transactions=[])
        account = self.account(transactions[0].account_id)

        if (foreign := next((tx for tx in transactions if tx.account_id != account.id), None)) is not None:
            msg = f"Transaction {foreign.id} of account {foreign.account_id} passed while mapping account {account.id}"
            raise ValueError(msg)

        # Withholding tax already in the ledger, standalone or merged, must not be merged again
        merger = NRWTMerger(self.transaction_mapper, [tx for tx in transactions if not self.lookup.transaction_exists(tx)])

        prices: list[Price] = []
        mapped: list[Transaction] = []

        def add_price(price: Price | None) -> None:
            if price is not None and price not in prices and not self.lookup.price_exists(price):
                prices.append(price)

        for transaction in transactions:
            if transaction.type.nrwt:
                continue

            price, ledger_transaction = self.transaction_mapper.map(transaction, account)
            if not self.lookup.transaction_exists(ledger_transaction):
                if transaction.type.dividend:
                    ledger_transaction = merger.merge_into(transaction, ledger_transaction, account)
                mapped.append(ledger_transaction)
            add_price(price)

        # Withholding tax transactions without a dividend to merge into
        for transaction in list(merger.candidates):
            price, ledger_transaction = self.transaction_mapper.map(transaction, account)
            if not self.lookup.transaction_exists(ledger_transaction):
                mapped.append(ledger_transaction)
            add_price(price)

        self.log.info("%d transactions mapped to %d new transactions and %d prices", len(transactions), len(mapped), len(prices), extra={"account": account.id})
        return MappedTransactions(prices=prices, transactions=mapped)
