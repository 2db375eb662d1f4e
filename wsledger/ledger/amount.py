# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import decimal

from decimal import Decimal
from typing import Self, override

from pydantic import Field, NonNegativeInt, field_validator

from .model import LedgerModel


class Amount(LedgerModel):
    """An exact decimal number in a commodity, with the number of fractional digits used to display it.

    The display precision is presentation only: two amounts are equal when their number and commodity are.

    >>> str(Amount(number=Decimal("10.5"), commodity="CAD", precision=2))
    '10.50 CAD'
    >>> Amount(number=Decimal("10.5"), commodity="CAD", precision=2) == Amount(number=Decimal("10.500"), commodity="CAD", precision=3)
    True
    """

    # fmt: off
    number    : Decimal         = Field(description="The exact decimal value")
    commodity : str             = Field(min_length=1, description="The commodity or currency symbol")
    precision : NonNegativeInt  = Field(description="Number of fractional digits used for display")
    # fmt: on

    @field_validator("number", mode="before")
    @classmethod
    def validate_number(cls, value: object) -> object:
        if isinstance(value, float):
            msg = "Amounts must not be constructed from binary floating point values"
            raise ValueError(msg)
        return value

    @field_validator("number", mode="after")
    @classmethod
    def validate_finite(cls, value: Decimal) -> Decimal:
        if not value.is_finite():
            msg = f"Amount must be finite, got {value}"
            raise ValueError(msg)
        return value

    # MARK: Derived values
    @property
    def is_zero(self) -> bool:
        return self.number.is_zero()

    def quantized(self, context: decimal.Context | None = None) -> Decimal:
        """Return the number rounded to its display precision."""
        return self.number.quantize(Decimal(1).scaleb(-self.precision), context=context)

    def with_number(self, number: Decimal, precision: int | None = None) -> Self:
        return self.model_copy(update={"number": number, "precision": self.precision if precision is None else precision})

    # MARK: Arithmetic
    def __neg__(self) -> Self:
        return self.with_number(self.number.copy_negate())

    def __add__(self, other: object) -> Self:
        if not isinstance(other, Amount):
            return NotImplemented
        if other.commodity != self.commodity:
            msg = f"Cannot add amounts in different commodities: {self.commodity} and {other.commodity}"
            raise ValueError(msg)
        return self.with_number(self.number + other.number, max(self.precision, other.precision))

    def __sub__(self, other: object) -> Self:
        if not isinstance(other, Amount):
            return NotImplemented
        return self + (-other)

    # MARK: Equality
    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        return self.number == other.number and self.commodity == other.commodity

    @override
    def __hash__(self) -> int:
        return hash((self.number, self.commodity))

    @override
    def __str__(self) -> str:
        return f"{self.quantized()} {self.commodity}"
