# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

"""Merging of non-resident withholding tax (NRWT) transactions into the dividend they were withheld from."""

from collections.abc import Iterable

from ..broker import BrokerAccount, BrokerTransaction
from ..ledger import AccountType, Posting, Transaction
from ..util.mixins import LoggableMixin
from .lookup import LedgerLookup
from .transactions import TransactionTypeMapper


class NRWTMerger(LoggableMixin):
    """Pairs withholding tax transactions with dividends sharing their symbol and process date.

    Candidates are consumed as they merge, so each withholding tax transaction is merged into at most one dividend.
    """

    def __init__(self, mapper: TransactionTypeMapper, candidates: Iterable[BrokerTransaction] = ()) -> None:
        self.mapper = mapper
        self.candidates: list[BrokerTransaction] = [candidate for candidate in candidates if candidate.type.nrwt]

    @property
    def lookup(self) -> LedgerLookup:
        return self.mapper.lookup

    def find(self, dividend: BrokerTransaction) -> BrokerTransaction | None:
        return next(
            (candidate for candidate in self.candidates if candidate.symbol == dividend.symbol and candidate.process_date == dividend.process_date),
            None,
        )

    def merge_into(self, dividend: BrokerTransaction, transaction: Transaction, account: BrokerAccount) -> Transaction:
        """Merge the matching withholding tax transaction, if any, into the mapped ``dividend``."""
        if (candidate := self.find(dividend)) is None:
            return transaction

        merged = self.merge(candidate, transaction, account)
        if merged is transaction:
            return transaction

        self.candidates.remove(candidate)
        self.log.debug("Merged withholding tax transaction %s into dividend %s", candidate.id, dividend.id)
        return merged

    def merge(self, withholding: BrokerTransaction, dividend: Transaction, account: BrokerAccount) -> Transaction:
        """Return ``dividend`` with an expense posting for the tax withheld and its cash posting reduced accordingly.

        Any rounding posting of the dividend is dropped and recomputed for the merged transaction.
        """
        mapper = self.mapper
        income = dividend.first_posting_for(AccountType.INCOME)
        cash = dividend.first_posting_for(AccountType.ASSETS)
        if income is None or cash is None:
            msg = f"Dividend transaction {dividend.metadata.get(mapper.config.keys.id)} is missing its income or cash posting"
            raise ValueError(msg)

        net_cash = mapper.net_cash(withholding)
        if net_cash.commodity != cash.amount.commodity:
            self.log.warning(
                "Not merging withholding tax transaction %s: its cash is in %s while the dividend's is in %s",
                withholding.id,
                net_cash.commodity,
                cash.amount.commodity,
            )
            return dividend

        withheld = mapper.withholding_parser.parse(withholding.description).withheld
        expense = Posting(account=self.lookup.expense_account(account, withholding.type.value), amount=withheld)

        number = self.lookup.decimal.context.add(cash.amount.number, net_cash.number)
        reduced = cash.model_copy(update={"amount": cash.amount.with_number(number, max(cash.amount.precision, net_cash.precision))})

        keys = mapper.config.keys
        merged = dividend.model_copy(
            update={
                "postings": (income, expense, reduced),
                "metadata": dividend.metadata.set(keys.nrwt_id, withholding.id),
            }
        )
        return mapper.balance(merged, account)
