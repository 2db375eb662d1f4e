# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from enum import StrEnum
from typing import override

from pydantic import Field

from .model import BrokerModel


class AssetType(StrEnum):
    # fmt: off
    CURRENCY             = "currency"
    EQUITY               = "equity"
    EXCHANGE_TRADED_FUND = "exchange_traded_fund"
    MUTUAL_FUND          = "mutual_fund"
    BOND                 = "bond"
    OPTION               = "option"
    # fmt: on

    @property
    def currency(self) -> bool:
        return self is AssetType.CURRENCY

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self.name}"


class Asset(BrokerModel):
    # fmt: off
    symbol : str       = Field(min_length=1, description="Broker symbol")
    type   : AssetType = Field(description="Asset class")
    # fmt: on

    @property
    def is_currency(self) -> bool:
        return self.type.currency
