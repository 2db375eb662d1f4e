# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

"""Errors raised while mapping broker data onto a ledger.

All of them describe data or configuration problems (a missing tag, an unexpected vendor text) and are not retryable.
"""

from collections.abc import Iterable


class MappingError(Exception):
    """Base class for all mapping failures."""


# MARK: Missing ledger entries
class MissingLedgerEntry(MappingError):
    """A broker identity has no ledger account or commodity tagged for it."""


class MissingCommodity(MissingLedgerEntry):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"The commodity for symbol {symbol} was not found. Please make sure a commodity with the metadata external-id: {symbol} exists")


class MissingAccount(MissingLedgerEntry):
    role: str = "account"

    def __init__(self, symbol: str, account_type: str) -> None:
        self.symbol = symbol
        self.account_type = account_type
        super().__init__(
            f"The {self.role} account for account type {account_type} and symbol {symbol} was not found. "
            f"Please make sure an {self.role} account with the metadata external-type: {account_type} and external-symbol: {symbol} exists"
        )


class MissingAssetAccount(MissingAccount):
    role = "asset"


class MissingIncomeAccount(MissingAccount):
    role = "income"


class MissingExpenseAccount(MissingAccount):
    role = "expense"


# MARK: Broker data
class UnsupportedTransactionType(MappingError):
    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Transactions of type {kind} are currently not supported")


class UnexpectedDescription(MappingError):
    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(f"A transaction description could not be parsed: {description}")


class AccountNotFound(MappingError):
    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__(f"The broker account with the id {account_id} was not found")


class InvalidAmount(MappingError):
    def __init__(self, text: str, reason: str = "not a decimal number") -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid amount '{text}': {reason}")


# MARK: Ledger configuration
class DuplicateLedgerTag(MappingError):
    """More than one ledger account or commodity claims the same broker identity."""

    def __init__(self, conflicts: Iterable[str]) -> None:
        self.conflicts = tuple(conflicts)
        super().__init__("Ambiguous ledger metadata tags:\n" + "\n".join(f"  - {conflict}" for conflict in self.conflicts))
