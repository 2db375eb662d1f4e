# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import decimal

from enum import Enum
from typing import TYPE_CHECKING, Any, override

from pydantic import Field, PositiveInt, field_validator
from pydantic_core import PydanticUseDefault

from ..config.base_model import BaseConfigModel


if TYPE_CHECKING:
    from contextlib import AbstractContextManager


# MARK: Enumerations
class DecimalRounding(Enum):
    """Decimal rounding modes, used when quantizing amounts to their display precision."""

    CEILING = decimal.ROUND_CEILING
    DOWN = decimal.ROUND_DOWN
    FLOOR = decimal.ROUND_FLOOR
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    HALF_EVEN = decimal.ROUND_HALF_EVEN
    HALF_UP = decimal.ROUND_HALF_UP
    UP = decimal.ROUND_UP
    UP05 = decimal.ROUND_05UP

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self.name}"


class DecimalSignals(Enum):
    """Decimal signals that may be trapped (raised as exceptions) by a context."""

    CLAMPED = decimal.Clamped
    DIVISION_BY_ZERO = decimal.DivisionByZero
    INEXACT = decimal.Inexact
    INVALID_OP = decimal.InvalidOperation
    OVERFLOW = decimal.Overflow
    ROUNDED = decimal.Rounded
    SUBNORMAL = decimal.Subnormal
    UNDERFLOW = decimal.Underflow
    FLOAT_OP = decimal.FloatOperation

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self.name}"


# Reciprocals of exchange rates are rarely exact, so inexact and rounded results must not raise
UNTRAPPED_SIGNALS = frozenset({DecimalSignals.INEXACT, DecimalSignals.ROUNDED})


def default_traps() -> dict[DecimalSignals, bool]:
    return {signal: signal not in UNTRAPPED_SIGNALS for signal in DecimalSignals}


# MARK: Configuration
class DecimalConfig(BaseConfigModel):
    precision: PositiveInt = Field(default=32, description="Number of significant digits used in arithmetic")
    rounding: DecimalRounding = Field(default=DecimalRounding.HALF_EVEN, description="Rounding mode")
    traps: dict[DecimalSignals, bool] = Field(default_factory=default_traps, description="Which decimal signals raise exceptions")
    emin: int | None = Field(default=None, description="Minimum exponent")
    emax: int | None = Field(default=None, description="Maximum exponent")
    capitals: bool | None = Field(default=None, description="Use capital 'E' in exponents")
    clamp: bool | None = Field(default=None, description="Clamp exponents to the representable range")

    @field_validator("rounding", mode="before")
    @classmethod
    def validate_rounding(cls, value: str | DecimalRounding | None) -> DecimalRounding | str | None:
        if value is None:
            raise PydanticUseDefault
        if isinstance(value, DecimalRounding):
            return value
        try:
            return DecimalRounding[value]
        except KeyError:
            return value

    @field_validator("traps", mode="before")
    @classmethod
    def validate_traps(cls, value: Any) -> dict[DecimalSignals, bool]:
        if value is None:
            raise PydanticUseDefault
        if not isinstance(value, dict):
            msg = f"Expected a dictionary for traps, got {type(value).__name__}"
            raise TypeError(msg)

        signals = default_traps()
        for key, enabled in value.items():
            if isinstance(key, str):
                try:
                    key = DecimalSignals[key.upper()]
                except KeyError as err:
                    msg = f"Invalid signal name: {key}"
                    raise ValueError(msg) from err
            signals[key] = enabled
        return signals

    @property
    def traps_value(self) -> list[type]:
        return [signal.value for signal, enabled in self.traps.items() if enabled]

    @property
    def kwargs(self) -> dict[str, Any]:
        return {
            "prec": self.precision,
            "rounding": self.rounding.value,
            "traps": self.traps_value,
            "Emin": self.emin,
            "Emax": self.emax,
            "capitals": self.capitals,
            "clamp": self.clamp,
        }


# MARK: Factory
class DecimalFactory:
    """Creates Decimal values and performs arithmetic under an explicit, configured context.

    Mapping code never relies on the thread-local decimal context, which keeps results identical across worker threads.
    """

    def __init__(self, config: DecimalConfig | None = None, **kwargs) -> None:
        super().__init__()

        if config is not None and kwargs:
            msg = "Either provide a decimal config or keyword arguments, not both."
            raise ValueError(msg)
        if config is None:
            config = DecimalConfig.model_validate(kwargs)

        self.config = config
        self.context = decimal.Context(**self.config.kwargs)

    def apply_context(self) -> None:
        decimal.setcontext(self.context)

    def context_manager(self) -> "AbstractContextManager[decimal.Context]":
        return decimal.localcontext(self.context)

    def __call__(self, value: str | int | decimal.Decimal) -> decimal.Decimal:
        return self.decimal(value)

    def decimal(self, value: str | int | decimal.Decimal) -> decimal.Decimal:
        """Create a Decimal instance, signalling through the configured context on malformed input."""
        return decimal.Decimal(value, context=self.context)

    def quantum(self, digits: int) -> "decimal.Decimal":
        """Return the smallest step representable with ``digits`` fractional digits.

        >>> DecimalFactory().quantum(2)
        Decimal('0.01')
        """
        return decimal.Decimal(1).scaleb(-digits, context=self.context)

    def quantize(self, value: "decimal.Decimal", digits: int) -> "decimal.Decimal":
        return value.quantize(self.quantum(digits), context=self.context)
