# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import pathlib

from typing import Any

import yaml

from ..helpers import script_info
from ..mixins import LoggableMixin
from .base_model import BaseConfigModel
from .yaml_loader import IncludeLoader


class ConfigFileLoader[C: BaseConfigModel](LoggableMixin):
    """Loads a configuration model from a mapping, YAML text or a YAML file.

    A loader is single-use: once a configuration has been produced it refuses to load another.
    """

    def __init__(self, config_class: type[C]) -> None:
        self.config_class = config_class
        self.config: C | None = None
        self.path: pathlib.Path | None = None

    def open(self, path: pathlib.Path | str) -> C:
        if self.config is not None:
            msg = "Configuration already loaded. Cannot load again."
            raise RuntimeError(msg)

        self.path = pathlib.Path(path)
        with self.path.open(encoding="UTF-8") as f:
            data = yaml.load(f, IncludeLoader)  # noqa: S506 as IncludeLoader extends yaml.SafeLoader

        if data is not None and not isinstance(data, dict):
            msg = f"Invalid configuration file format. Expected a dictionary, got {type(data).__name__}"
            raise TypeError(msg)

        return self.load(data)

    def load(self, data: dict[str, Any] | str | None) -> C:
        if self.config is not None:
            msg = "Configuration already loaded. Cannot load again."
            raise RuntimeError(msg)

        if isinstance(data, str):
            data = yaml.load(data, IncludeLoader)  # noqa: S506 as IncludeLoader extends yaml.SafeLoader

        if data is None:
            msg = "Configuration is empty"
            raise ValueError(msg)
        if not isinstance(data, dict):
            msg = f"Invalid configuration format. Expected a dictionary, got {type(data).__name__}"
            raise TypeError(msg)

        self.data: dict[str, Any] = dict(data)

        self._init_logging_manager()

        self.config = self.config_class.model_validate(self.data)
        self.log.info("Configuration loaded successfully")

        debug = getattr(self.config, "debug", None)
        if callable(debug) and not script_info.is_unit_test():
            debug()

        return self.config

    def _init_logging_manager(self) -> None:
        # Unit tests bring up their own logging manager
        if script_info.is_unit_test():
            return

        from ..logging.manager import LoggingManager
        from .models import ConfigLoggingOnly

        manager = LoggingManager()
        if manager.initialized:
            return

        config = ConfigLoggingOnly(logging=self.data.get("logging") or {})
        self.data["logging"] = config.logging
        manager.initialize(config.logging)
