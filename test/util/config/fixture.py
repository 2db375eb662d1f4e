# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from typing import Any

import pytest

from wsledger.config import Config, ConfigManager


class ConfigFixture:
    def __init__(self) -> None:
        from wsledger.config import CFG

        self.config: ConfigManager[Config] = CFG
        self.config.reset()
        self.config.load({})

    def create(self, data: dict[str, Any] | str) -> ConfigManager[Config]:
        """Reset and load the configuration with the provided data."""
        self.config.reset()
        self.config.load(data)
        return self.config

    def load(self, data: dict[str, Any] | str) -> Config:
        self.config.reset()
        return self.config.load(data)

    def cleanup(self) -> None:
        self.config.reset()

    def __getattr__(self, name: str) -> Any:
        return getattr(self.config, name)


@pytest.fixture
def config():
    fixture = ConfigFixture()
    yield fixture
    fixture.cleanup()
