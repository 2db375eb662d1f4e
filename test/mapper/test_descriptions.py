# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from decimal import Decimal

import pytest

from test.fixtures.broker import DIVIDEND_DESCRIPTION, FOREIGN_DIVIDEND_DESCRIPTION, NRWT_DESCRIPTION
from wsledger.broker import TransactionType
from wsledger.mapper import (
    AmountParser,
    DividendDescriptionParser,
    UnexpectedDescription,
    WithholdingTaxDescriptionParser,
    description_parser,
)


@pytest.fixture
def amounts() -> AmountParser:
    return AmountParser()


@pytest.mark.descriptions
class TestDividendDescription:
    def test_domestic(self, amounts):
        result = DividendDescriptionParser(amounts).parse(DIVIDEND_DESCRIPTION)
        assert result.record_date == "2020-06-17"
        assert result.shares == "100"
        assert result.foreign_gross is None

    def test_foreign(self, amounts):
        result = DividendDescriptionParser(amounts).parse(FOREIGN_DIVIDEND_DESCRIPTION)
        assert result.shares == "10"
        assert result.foreign_gross is not None
        assert result.foreign_gross.number == Decimal("-8.20")
        assert result.foreign_gross.commodity == "USD"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("31-Dec-99", "1999-12-31"),
            ("01-jan-00", "2000-01-01"),
            ("5-Mar-68", "2068-03-05"),
            ("5-Mar-69", "1969-03-05"),
            ("5-Mar-2021", "2021-03-05"),
        ],
    )
    def test_record_dates(self, amounts, text, expected):
        result = DividendDescriptionParser(amounts).parse(f"ABC: {text} (record date) 1 shares")
        assert result.record_date == expected

    @pytest.mark.parametrize(
        "description",
        [
            "",
            "Dividend paid",
            "ABC: 17-Foo-20 (record date) 100 shares",
            "ABC: 31-Feb-20 (record date) 100 shares",
            "ABC: 2020-06-17 (record date) 100 shares",
            "AAPL: 17-Jun-20 (record date) 10 shares, gross 8.20 XXQ, convert to CAD @ 1.3500",
            "AAPL: 17-Jun-20 (record date) 10 shares, gross eight USD, convert to CAD @ 1.3500",
        ],
    )
    def test_unexpected(self, amounts, description):
        with pytest.raises(UnexpectedDescription) as info:
            DividendDescriptionParser(amounts).parse(description)
        assert info.value.description == description


@pytest.mark.descriptions
class TestWithholdingTaxDescription:
    def test_parse(self, amounts):
        result = WithholdingTaxDescriptionParser(amounts).parse(NRWT_DESCRIPTION)
        assert result.withheld.number == Decimal("1.23")
        assert result.withheld.commodity == "USD"

    def test_unexpected(self, amounts):
        with pytest.raises(UnexpectedDescription):
            WithholdingTaxDescriptionParser(amounts).parse("AAPL: tax withheld")


@pytest.mark.descriptions
class TestDescriptionParserRegistry:
    def test_lookup(self, amounts):
        assert isinstance(description_parser(TransactionType.DIVIDEND, amounts), DividendDescriptionParser)
        assert isinstance(description_parser(TransactionType.NRWT, amounts), WithholdingTaxDescriptionParser)

    def test_unknown_kind(self, amounts):
        with pytest.raises(KeyError):
            description_parser(TransactionType.BUY, amounts)
