# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import datetime

from enum import StrEnum
from typing import override

from frozendict import frozendict
from pydantic import Field

from ..util.helpers.frozendict import FrozenDict
from .account_name import AccountType
from .model import LedgerModel
from .posting import Posting


class Flag(StrEnum):
    # fmt: off
    COMPLETE   = "*"
    INCOMPLETE = "!"
    # fmt: on

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self.name}"


class Transaction(LedgerModel):
    # fmt: off
    date      : datetime.date          = Field(description="Date the transaction is booked on")
    payee     : str | None             = Field(default=None, description="Transaction payee")
    narration : str                    = Field(default="", description="Transaction narration")
    flag      : Flag                   = Field(default=Flag.COMPLETE, description="Whether the transaction is complete")
    tags      : tuple[str, ...]        = Field(default_factory=tuple, description="Transaction tags")
    metadata  : FrozenDict[str, str]   = Field(default_factory=frozendict, description="Transaction metadata")
    postings  : tuple[Posting, ...]    = Field(default_factory=tuple, description="Ordered postings")
    # fmt: on

    def postings_for(self, role: AccountType) -> tuple[Posting, ...]:
        return tuple(posting for posting in self.postings if posting.account.role is role)

    def first_posting_for(self, role: AccountType) -> Posting | None:
        return next((posting for posting in self.postings if posting.account.role is role), None)
