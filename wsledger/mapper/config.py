# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from decimal import Decimal

from pydantic import Field, NonNegativeInt, PositiveInt, field_validator, model_validator

from ..util.config import BaseConfigModel
from ..util.helpers.decimal import DecimalConfig


class MetadataKeysConfig(BaseConfigModel):
    """Metadata keys read from and written to the ledger."""

    # fmt: off
    id             : str = Field(default="wealthsimple-id"     , min_length=1, description="Transaction metadata key holding the broker transaction id")
    nrwt_id        : str = Field(default="wealthsimple-id-nrwt", min_length=1, description="Transaction metadata key holding the id of a merged withholding tax transaction")
    record_date    : str = Field(default="record-date"         , min_length=1, description="Transaction metadata key holding a dividend's record date")
    shares         : str = Field(default="shares"              , min_length=1, description="Transaction metadata key holding the number of shares a dividend was paid on")
    symbol         : str = Field(default="symbol"              , min_length=1, description="Transaction metadata key holding the symbol of a withholding tax transaction")
    account_type   : str = Field(default="external-type"       , min_length=1, description="Account metadata key matched against the broker account type")
    account_symbol : str = Field(default="external-symbol"     , min_length=1, description="Account metadata key matched against a symbol or transaction kind")
    commodity_id   : str = Field(default="external-id"         , min_length=1, description="Commodity metadata key matched against the broker symbol")
    # fmt: on


class MapperConfig(BaseConfigModel):
    payee: str = Field(default="Wealthsimple", min_length=1, description="Payee of broker fee transactions")
    rounding_symbol: str = Field(default="rounding", min_length=1, description="Tag of the expense account that absorbs rounding differences")
    tolerance: Decimal = Field(default=Decimal("0.005"), ge=0, description="Largest per-commodity imbalance still considered balanced")
    minimum_precision: NonNegativeInt = Field(default=2, description="Fewest fractional digits of any parsed amount")
    preflight: bool = Field(default=True, description="Check that every account and commodity a run needs is tagged before mapping")
    workers: PositiveInt = Field(default=1, description="Number of accounts mapped in parallel")

    keys: MetadataKeysConfig = Field(default_factory=MetadataKeysConfig, description="Metadata key names")
    decimal: DecimalConfig = Field(default_factory=DecimalConfig, description="Decimal arithmetic context")

    @field_validator("tolerance", mode="before")
    @classmethod
    def validate_tolerance(cls, value: object) -> object:
        # YAML reads 0.005 as a float
        if isinstance(value, float):
            return str(value)
        return value

    @model_validator(mode="after")
    def validate_tolerance_covers_precision(self) -> "MapperConfig":
        # Any residual above the tolerance must survive quantization, or no rounding posting could absorb it
        half_quantum = Decimal(5).scaleb(-(self.minimum_precision + 1))
        if self.tolerance < half_quantum:
            msg = f"tolerance {self.tolerance} is below half the smallest amount at {self.minimum_precision} digits ({half_quantum})"
            raise ValueError(msg)
        return self
