# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import decimal

import pytest

from wsledger.util.helpers.decimal import DecimalConfig, DecimalFactory, DecimalRounding, DecimalSignals


@pytest.mark.helpers
@pytest.mark.decimal
class TestDecimalFactory:
    def test_default_config(self):
        factory = DecimalFactory()

        assert factory.config.precision == 32
        assert factory.config.rounding is DecimalRounding.HALF_EVEN

        for trap in DecimalSignals:
            value = factory.config.traps.get(trap)
            if trap in (DecimalSignals.INEXACT, DecimalSignals.ROUNDED):
                assert value is False
            else:
                assert value is True

        assert factory.context.prec == 32
        assert factory.context.rounding == decimal.ROUND_HALF_EVEN

    def test_configure_with_kwargs(self):
        factory = DecimalFactory(precision=5, rounding=DecimalRounding.UP)
        assert factory.config.precision == 5
        assert factory.config.rounding == DecimalRounding.UP
        assert factory.context.prec == 5
        assert factory.context.rounding == decimal.ROUND_UP

    def test_configure_with_config(self):
        config = DecimalConfig(precision=7, rounding=DecimalRounding.FLOOR)
        factory = DecimalFactory(config)
        assert factory.config.precision == 7
        assert factory.context.rounding == decimal.ROUND_FLOOR

    def test_configure_rounding_by_name(self):
        config = DecimalConfig.model_validate({"rounding": "HALF_UP"})
        assert config.rounding is DecimalRounding.HALF_UP

    def test_configure_traps_by_name(self):
        config = DecimalConfig.model_validate({"traps": {"inexact": True}})
        assert config.traps[DecimalSignals.INEXACT] is True
        assert config.traps[DecimalSignals.ROUNDED] is False
        assert config.traps[DecimalSignals.FLOAT_OP] is True

    def test_configure_invalid_trap(self):
        with pytest.raises(ValueError, match=r"Invalid signal name: banana"):
            DecimalConfig.model_validate({"traps": {"banana": True}})

    def test_configure_raises_on_both(self):
        config = DecimalConfig(precision=3)
        with pytest.raises(ValueError, match=r"Either provide a decimal config or keyword arguments, not both."):
            _ = DecimalFactory(config, precision=5)

    def test_with_context(self):
        factory = DecimalFactory(precision=6)
        with factory.context_manager():
            assert decimal.getcontext().prec == 6
        assert decimal.getcontext().prec != 6

    def test_call(self):
        factory = DecimalFactory(precision=3)
        d = factory("1.23456")
        assert isinstance(d, decimal.Decimal)
        assert str(d) == "1.23456"

    def test_invalid_input_is_trapped(self):
        factory = DecimalFactory()
        with pytest.raises(decimal.InvalidOperation):
            factory("not a number")

    def test_inexact_division_is_not_trapped(self):
        factory = DecimalFactory(precision=10)
        assert factory.context.divide(decimal.Decimal(1), decimal.Decimal(3)) == decimal.Decimal("0.3333333333")

    def test_quantize(self):
        factory = DecimalFactory()
        assert factory.quantize(decimal.Decimal("0.04696789"), 4) == decimal.Decimal("0.0470")
        assert factory.quantize(decimal.Decimal("2.5"), 0) == decimal.Decimal(2)
