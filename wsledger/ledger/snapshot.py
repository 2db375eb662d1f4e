# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from pydantic import Field

from .directives import Balance, Price
from .entities import Commodity, LedgerAccount
from .model import LedgerModel
from .transaction import Transaction


class LedgerSnapshot(LedgerModel):
    """The parts of an existing ledger that mapping reads: tagged accounts and commodities, and the records already imported."""

    # fmt: off
    accounts     : tuple[LedgerAccount, ...] = Field(default_factory=tuple, description="Open accounts")
    commodities  : tuple[Commodity, ...]     = Field(default_factory=tuple, description="Declared commodities")
    prices       : tuple[Price, ...]         = Field(default_factory=tuple, description="Existing prices")
    balances     : tuple[Balance, ...]       = Field(default_factory=tuple, description="Existing balance assertions")
    transactions : tuple[Transaction, ...]   = Field(default_factory=tuple, description="Existing transactions")
    # fmt: on
