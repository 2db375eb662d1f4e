# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import datetime

from pydantic import Field

from .asset import Asset
from .model import BrokerModel, DecimalString


class Position(BrokerModel):
    # fmt: off
    account_id     : str           = Field(min_length=1, description="Owning broker account identifier")
    asset          : Asset         = Field(description="The held asset")
    quantity       : DecimalString = Field(description="Units held")
    price_amount   : DecimalString = Field(description="Price of one unit")
    price_currency : str           = Field(min_length=1, description="Currency of the price")
    position_date  : datetime.date = Field(description="Date the position was reported for")
    # fmt: on
