# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from .account_mapper import AccountMapper, MappedTransactions
from .amount_parser import AmountParser
from .config import MapperConfig, MetadataKeysConfig
from .descriptions import (
    DESCRIPTION_PARSERS,
    DescriptionParser,
    DividendDescription,
    DividendDescriptionParser,
    WithholdingTaxDescription,
    WithholdingTaxDescriptionParser,
    description_parser,
)
from .errors import (
    AccountNotFound,
    DuplicateLedgerTag,
    InvalidAmount,
    MappingError,
    MissingAccount,
    MissingAssetAccount,
    MissingCommodity,
    MissingExpenseAccount,
    MissingIncomeAccount,
    MissingLedgerEntry,
    UnexpectedDescription,
    UnsupportedTransactionType,
)
from .lookup import LedgerLookup
from .nrwt import NRWTMerger
from .positions import MappedPositions, PositionMapper
from .runner import AccountResult, ImportResult, ImportRunner
from .transactions import MappedTransaction, TransactionTypeMapper


__all__ = [
    "DESCRIPTION_PARSERS",
    "AccountMapper",
    "AccountNotFound",
    "AccountResult",
    "AmountParser",
    "DescriptionParser",
    "DividendDescription",
    "DividendDescriptionParser",
    "DuplicateLedgerTag",
    "ImportResult",
    "ImportRunner",
    "InvalidAmount",
    "LedgerLookup",
    "MappedPositions",
    "MappedTransaction",
    "MappedTransactions",
    "MapperConfig",
    "MappingError",
    "MetadataKeysConfig",
    "MissingAccount",
    "MissingAssetAccount",
    "MissingCommodity",
    "MissingExpenseAccount",
    "MissingIncomeAccount",
    "MissingLedgerEntry",
    "NRWTMerger",
    "PositionMapper",
    "TransactionTypeMapper",
    "UnexpectedDescription",
    "UnsupportedTransactionType",
    "WithholdingTaxDescription",
    "WithholdingTaxDescriptionParser",
    "description_parser",
]
