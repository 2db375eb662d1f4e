# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

"""Parsing of broker decimal strings into ledger amounts.

The broker drops a trailing zero in the second fractional digit, so amounts are always given at least two fractional digits:

>>> parser = AmountParser()
>>> str(parser.amount("10.5", "CAD"))
'10.50 CAD'
>>> str(parser.amount("1,234.5678", "USD", negate=True))
'-1234.5678 USD'
"""

import decimal
import re

from decimal import Decimal

from ..ledger import Amount
from ..util.helpers.decimal import DecimalFactory
from ..util.mixins import LoggableMixin
from .config import MapperConfig
from .errors import InvalidAmount


AMOUNT_PATTERN = re.compile(r"^[-+]?[0-9]+(?:\.([0-9]+))?$")


class AmountParser(LoggableMixin):
    def __init__(self, config: MapperConfig | None = None, decimal_factory: DecimalFactory | None = None) -> None:
        self.config = config if config is not None else MapperConfig()
        self.decimal = decimal_factory if decimal_factory is not None else DecimalFactory(self.config.decimal)

    @property
    def context(self) -> decimal.Context:
        return self.decimal.context

    def parse_amount(self, text: str) -> tuple[Decimal, int]:
        """Parse ``text`` into an exact decimal and its display precision."""
        cleaned = text.strip().replace(",", "")
        if (match := AMOUNT_PATTERN.match(cleaned)) is None:
            raise InvalidAmount(text)

        try:
            value = self.decimal(cleaned)
        except decimal.DecimalException as err:
            raise InvalidAmount(text, str(err) or type(err).__name__) from err

        fraction = match.group(1)
        precision = max(len(fraction) if fraction else 0, self.config.minimum_precision)
        return value, precision

    def amount(self, text: str, commodity: str, *, negate: bool = False, invert: bool = False) -> Amount:
        """Parse ``text`` into an amount of ``commodity``.

        ``negate`` flips the sign and ``invert`` takes the reciprocal (turning an exchange rate into a price), in that order.
        The precision always follows the digits given in ``text``.
        """
        value, precision = self.parse_amount(text)

        if negate:
            value = value.copy_negate()
        if invert:
            if value.is_zero():
                raise InvalidAmount(text, "cannot invert zero")
            value = self.context.divide(Decimal(1), value)

        return Amount(number=value, commodity=commodity, precision=precision)
