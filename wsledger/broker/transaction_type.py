# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from enum import StrEnum
from typing import override


class TransactionType(StrEnum):
    """Kinds of transactions reported by the broker."""

    # fmt: off
    BUY           = "buy"
    SELL          = "sell"
    DIVIDEND      = "dividend"
    FEE           = "fee"
    CONTRIBUTION  = "contribution"
    DEPOSIT       = "deposit"
    REFUND        = "refund"
    NRWT          = "nrwt"
    WITHDRAWAL    = "withdrawal"
    INTEREST      = "interest"
    TRANSFER_IN   = "transfer_in"
    TRANSFER_OUT  = "transfer_out"
    REIMBURSEMENT = "reimbursement"
    CUSTODIAN_FEE = "custodian_fee"
    STOCK_SPLIT   = "stock_split"
    # fmt: on

    # MARK: Trades
    @property
    def trade(self) -> bool:
        return self in {TransactionType.BUY, TransactionType.SELL}

    # MARK: Income
    @property
    def dividend(self) -> bool:
        return self is TransactionType.DIVIDEND

    # MARK: Withholding tax
    @property
    def nrwt(self) -> bool:
        return self is TransactionType.NRWT

    # MARK: Cash movements
    @property
    def cash(self) -> bool:
        """Whether the transaction's quantity is denominated in its own symbol rather than a security."""
        return self in {TransactionType.FEE, TransactionType.CONTRIBUTION, TransactionType.DEPOSIT, TransactionType.REFUND}

    # MARK: Support
    @property
    def supported(self) -> bool:
        return self in SUPPORTED_TRANSACTION_TYPES

    # MARK: Utilities
    @override
    def __str__(self) -> str:
        return self.value

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self.name}"


SUPPORTED_TRANSACTION_TYPES = frozenset(
    {
        TransactionType.BUY,
        TransactionType.SELL,
        TransactionType.DIVIDEND,
        TransactionType.FEE,
        TransactionType.CONTRIBUTION,
        TransactionType.DEPOSIT,
        TransactionType.REFUND,
        TransactionType.NRWT,
    }
)
