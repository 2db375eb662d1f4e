# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import datetime

from pydantic import Field

from .model import BrokerModel, DecimalString
from .transaction_type import TransactionType


class BrokerTransaction(BrokerModel):
    # fmt: off
    id                    : str             = Field(min_length=1, description="Broker transaction identifier")
    account_id            : str             = Field(min_length=1, description="Owning broker account identifier")
    type                  : TransactionType = Field(description="Transaction kind")
    symbol                : str             = Field(description="Security or cash symbol the transaction refers to")
    description           : str             = Field(default="", description="Vendor free-text description")
    effective_date        : datetime.date   = Field(description="Date the transaction took effect")
    process_date          : datetime.date   = Field(description="Date the broker processed the transaction")
    net_cash_amount       : DecimalString   = Field(description="Net cash movement")
    net_cash_currency     : str             = Field(min_length=1, description="Currency of the net cash movement")
    market_price_amount   : DecimalString   = Field(default="0", description="Market price of one unit")
    market_price_currency : str             = Field(min_length=1, description="Currency of the market price")
    market_value_currency : str             = Field(min_length=1, description="Currency of the market value")
    fx_rate               : DecimalString   = Field(default="1", description="Exchange rate from the market currency to the cash currency")
    quantity              : DecimalString   = Field(default="0", description="Units traded")
    # fmt: on

    @property
    def uses_fx(self) -> bool:
        return self.market_value_currency != self.net_cash_currency
