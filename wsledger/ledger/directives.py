# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import datetime

from pydantic import Field

from .account_name import AccountName
from .amount import Amount
from .model import LedgerModel


class Price(LedgerModel):
    """The price of one unit of ``commodity`` on ``date``. Equal prices are the same record."""

    # fmt: off
    date      : datetime.date = Field(description="Date of the quote")
    commodity : str           = Field(min_length=1, description="The priced ledger commodity")
    amount    : Amount        = Field(description="Price per unit")
    # fmt: on


class Balance(LedgerModel):
    """An assertion that ``account`` holds ``amount`` at the start of ``date``."""

    # fmt: off
    date    : datetime.date = Field(description="Date of the assertion")
    account : AccountName   = Field(description="The asserted account")
    amount  : Amount        = Field(description="Expected balance")
    # fmt: on
