# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import logging

from decimal import Decimal
from typing import TYPE_CHECKING

import pytest

from pydantic import ValidationError

from wsledger.mapper import ImportRunner, MapperConfig
from wsledger.util.helpers.decimal import DecimalRounding


if TYPE_CHECKING:
    from .fixture import ConfigFixture


@pytest.mark.config
class TestConfigLoader:
    def test_config_loads_yaml(self, config: "ConfigFixture"):
        config.load("""
            logging:
                levels:
                    tty: INFO
            mapper:
                payee: Broker
                tolerance: 0.01
                decimal:
                    rounding: HALF_UP
        """)

        assert config.logging.levels.tty == logging.INFO
        assert config.mapper.payee == "Broker"
        assert config.mapper.tolerance == Decimal("0.01")
        assert config.mapper.decimal.rounding is DecimalRounding.HALF_UP

    def test_config_defaults(self, config: "ConfigFixture"):
        assert config.mapper == MapperConfig()
        assert config.mapper.keys.id == "wealthsimple-id"
        assert config.mapper.keys.nrwt_id == "wealthsimple-id-nrwt"
        assert config.mapper.rounding_symbol == "rounding"
        assert config.mapper.minimum_precision == 2

    def test_config_extra_keys(self, config: "ConfigFixture"):
        with pytest.raises(ValidationError, match=r"Extra inputs are not permitted"):
            config.load("""
                any: text
            """)

    def test_config_invalid_log_level(self, config: "ConfigFixture"):
        with pytest.raises(ValueError, match=r"Unknown logging level string: banana"):
            config.load("""
                logging:
                  levels:
                    tty: banana
            """)

    def test_config_empty(self, config: "ConfigFixture"):
        with pytest.raises(ValueError, match="Configuration is empty"):
            config.load("")

    def test_config_is_frozen(self, config: "ConfigFixture"):
        with pytest.raises(ValidationError):
            config.mapper.payee = "Other"  # pyright: ignore[reportAttributeAccessIssue]

    def test_config_open_with_include(self, config: "ConfigFixture", tmp_path):
        (tmp_path / "mapper.yaml").write_text("payee: Included\nworkers: 3\n", encoding="UTF-8")
        path = tmp_path / "config.yaml"
        path.write_text("mapper: !include mapper.yaml\n", encoding="UTF-8")

        config.config.reset()
        loaded = config.config.open(path)

        assert loaded.mapper.payee == "Included"
        assert loaded.mapper.workers == 3

    def test_runner_uses_loaded_config(self, config: "ConfigFixture", ledger):
        config.load({"mapper": {"payee": "Configured"}})

        runner = ImportRunner(ledger.snapshot())
        assert runner.config.payee == "Configured"
