# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

"""Extraction of structured data from the broker's free-text transaction descriptions.

Each supported transaction kind has one parser; a description that does not match its parser's pattern is rejected.
"""

import datetime
import re

from abc import ABCMeta, abstractmethod
from typing import ClassVar, NamedTuple, override

from ..broker import TransactionType
from ..ledger import Amount
from ..util.helpers.currency import Currency
from ..util.mixins import LoggableMixin
from .amount_parser import AmountParser
from .errors import InvalidAmount, UnexpectedDescription


# MARK: Results
class DividendDescription(NamedTuple):
    record_date: str
    shares: str
    foreign_gross: Amount | None


class WithholdingTaxDescription(NamedTuple):
    withheld: Amount


# MARK: Parsers
class DescriptionParser[T](LoggableMixin, metaclass=ABCMeta):
    kind: ClassVar[TransactionType]
    pattern: ClassVar[re.Pattern[str]]

    _MONTHS: ClassVar[dict[str, int]] = {
        "JAN": 1,
        "FEB": 2,
        "MAR": 3,
        "APR": 4,
        "MAY": 5,
        "JUN": 6,
        "JUL": 7,
        "AUG": 8,
        "SEP": 9,
        "OCT": 10,
        "NOV": 11,
        "DEC": 12,
    }

    # Two-digit years from 69 onwards belong to the previous century
    _CENTURY_PIVOT: ClassVar[int] = 69

    def __init__(self, amounts: AmountParser) -> None:
        self.amounts = amounts

    def parse(self, description: str) -> T:
        if (match := self.pattern.fullmatch(description.strip())) is None:
            raise UnexpectedDescription(description)
        try:
            return self._extract(match)
        except (ValueError, InvalidAmount) as err:
            raise UnexpectedDescription(description) from err

    @abstractmethod
    def _extract(self, match: re.Match[str]) -> T: ...

    def _parse_date(self, text: str) -> datetime.date:
        """Parse a ``dd-Mon-yy`` date such as ``17-Jun-20``."""
        parts = text.split("-")
        if len(parts) != 3:  # noqa: PLR2004
            msg = f"Invalid date format: {text!r}"
            raise ValueError(msg)

        day_str, month_abbr, year_str = parts
        if (month := self._MONTHS.get(month_abbr.upper())) is None:
            msg = f"Invalid month abbreviation in date: {text!r}"
            raise ValueError(msg)

        day = int(day_str)
        year = int(year_str)
        if len(year_str) == 2:  # noqa: PLR2004
            year += 1900 if year >= self._CENTURY_PIVOT else 2000

        return datetime.date(year, month, day)

    def _amount(self, text: str, currency: str, *, negate: bool = False) -> Amount:
        if not Currency.is_known(currency):
            msg = f"Unknown currency: {currency}"
            raise ValueError(msg)
        return self.amounts.amount(text, currency, negate=negate)


class DividendDescriptionParser(DescriptionParser[DividendDescription]):
    """Parses ``"<symbol>: <dd-Mon-yy> (record date) <n> shares[, gross <amount> <currency>, convert to ...]"``.

    The gross amount is only present for dividends paid in a foreign currency, and is returned negated since it is income.
    """

    kind = TransactionType.DIVIDEND
    pattern = re.compile(
        r"^[^:]*:\s+(?P<record_date>\S+)\s+\(record date\)\s+(?P<shares>\S+)\s+shares"
        r"(?:,\s+gross\s+(?P<amount>[-+]?[0-9]+(?:,[0-9]{3})*(?:\.[0-9]+)?)\s+(?P<currency>\S+), convert to\s+.*)?$"
    )

    @override
    def _extract(self, match: re.Match[str]) -> DividendDescription:
        record_date = self._parse_date(match["record_date"]).isoformat()

        foreign_gross = None
        if match["amount"] is not None:
            foreign_gross = self._amount(match["amount"], match["currency"], negate=True)

        return DividendDescription(record_date=record_date, shares=match["shares"], foreign_gross=foreign_gross)


class WithholdingTaxDescriptionParser(DescriptionParser[WithholdingTaxDescription]):
    """Parses ``"<symbol>: Non-resident tax withheld at source (<amount> <currency>, convert to ...)"``."""

    kind = TransactionType.NRWT
    pattern = re.compile(
        r"^[^:]*: Non-resident tax withheld at source \((?P<amount>[-+]?[0-9]+(?:,[0-9]{3})*(?:\.[0-9]+)?)\s+(?P<currency>\S+), convert to\s+.*$"
    )

    @override
    def _extract(self, match: re.Match[str]) -> WithholdingTaxDescription:
        return WithholdingTaxDescription(withheld=self._amount(match["amount"], match["currency"]))


DESCRIPTION_PARSERS: dict[TransactionType, type[DescriptionParser]] = {
    parser.kind: parser for parser in (DividendDescriptionParser, WithholdingTaxDescriptionParser)
}


def description_parser(kind: TransactionType, amounts: AmountParser) -> DescriptionParser:
    if (parser := DESCRIPTION_PARSERS.get(kind)) is None:
        msg = f"No description parser for transactions of type {kind}"
        raise KeyError(msg)
    return parser(amounts)
