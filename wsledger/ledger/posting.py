# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import datetime
import decimal

from frozendict import frozendict
from pydantic import Field

from ..util.helpers.frozendict import FrozenDict
from .account_name import AccountName
from .amount import Amount
from .model import LedgerModel


class Cost(LedgerModel):
    """Cost basis of a lot. All parts are optional: an empty cost (``{}``) reduces any matching lot."""

    # fmt: off
    amount : Amount | None        = Field(default=None, description="Per-unit cost")
    date   : datetime.date | None = Field(default=None, description="Acquisition date of the lot")
    label  : str | None           = Field(default=None, description="Lot label")
    # fmt: on

    @property
    def is_empty(self) -> bool:
        return self.amount is None and self.date is None and self.label is None


class Posting(LedgerModel):
    # fmt: off
    account  : AccountName           = Field(description="The account this leg books to")
    amount   : Amount                = Field(description="Units booked to the account")
    price    : Amount | None         = Field(default=None, description="Per-unit price, for exchange rates or market prices")
    cost     : Cost | None           = Field(default=None, description="Cost basis of the units")
    metadata : FrozenDict[str, str]  = Field(default_factory=frozendict, description="Posting metadata")
    # fmt: on

    def weight(self, context: decimal.Context | None = None) -> Amount:
        """Return the amount this posting contributes to the balance of its transaction.

        Postings held at cost weigh ``units × cost``; postings with a price weigh ``units × price`` in the price commodity;
        any other posting weighs its own amount.
        """
        if self.cost is not None and self.cost.amount is not None:
            factor = self.cost.amount
        elif self.price is not None:
            factor = self.price
        else:
            return self.amount

        number = self.amount.number * factor.number if context is None else context.multiply(self.amount.number, factor.number)
        return Amount(number=number, commodity=factor.commodity, precision=factor.precision)
