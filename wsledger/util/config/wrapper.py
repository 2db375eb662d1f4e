# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import pathlib

from typing import Any

from ..helpers import script_info
from .base_model import BaseConfigModel
from .loader import ConfigFileLoader


class ConfigManager[C: BaseConfigModel]:
    """Process-wide holder for the active configuration.

    Attribute access is forwarded to the loaded configuration model, so ``CFG.mapper`` reads the ``mapper`` section.
    """

    def __init__(self, config_class: type[C]) -> None:
        self.config_class = config_class
        self.config: C | None = None

    @property
    def loaded(self) -> bool:
        return self.config is not None

    def open(self, path: pathlib.Path | str) -> C:
        self.config = ConfigFileLoader(self.config_class).open(path)
        return self.config

    def load(self, config: str | dict[str, Any] | C) -> C:
        if isinstance(config, self.config_class):
            self.config = config
        elif isinstance(config, (str, dict)):
            self.config = ConfigFileLoader(self.config_class).load(config)
        else:
            msg = f"Expected {self.config_class.__name__}, str or dict, got {type(config).__name__}"
            raise TypeError(msg)
        return self.config

    def reset(self) -> None:
        if not script_info.is_unit_test():
            msg = "Cannot reset configuration outside of unit tests"
            raise RuntimeError(msg)
        self.config = None

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not found on the manager itself
        if name.startswith("__") or name in ("config", "config_class"):
            raise AttributeError(name)
        if self.config is None:
            msg = "Configuration not initialized. Call 'load()' or 'open()' first."
            raise RuntimeError(msg)
        return getattr(self.config, name)
