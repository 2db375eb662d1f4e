# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from frozendict import frozendict
from pydantic import Field

from ..util.helpers.frozendict import FrozenDict
from .account_name import AccountName
from .model import LedgerModel


class LedgerAccount(LedgerModel):
    # fmt: off
    name     : AccountName          = Field(description="Account name")
    metadata : FrozenDict[str, str] = Field(default_factory=frozendict, description="Account metadata, including the tags used to match broker accounts")
    # fmt: on


class Commodity(LedgerModel):
    # fmt: off
    symbol   : str                  = Field(min_length=1, description="Ledger-local commodity symbol")
    metadata : FrozenDict[str, str] = Field(default_factory=frozendict, description="Commodity metadata, including the broker symbol it maps to")
    # fmt: on
