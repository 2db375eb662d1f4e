# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

"""Logging configuration for wsledger.

Configures file and TTY logging, and per-logger levels selected by regular expressions on the logger name.
"""

import logging
import pathlib
import sys

from typing import Any, ClassVar, Self
from typing import cast as typing_cast

from ..helpers import script_info
from .config import LoggingConfig
from .handlers import AccountFormatter, HandlerFilter
from .levels import LoggingLevel


# MARK: Constants
LOG_FILE_NAME: str = f"{script_info.get_script_name()}.log"


# MARK: Logging Manager
class LoggingManager:
    _instance: ClassVar["LoggingManager | None"] = None

    initialized: bool
    fh: logging.Handler | None
    ch: logging.Handler | None

    def __new__(cls) -> Self:
        if (instance := cls._instance) is None:
            instance = cls._instance = super().__new__(cls)
            instance.initialized = False
            instance.fh = None
            instance.ch = None
        return typing_cast("Self", instance)

    def initialize(self, config: LoggingConfig | dict[str, Any]) -> None:
        if not isinstance(config, LoggingConfig):
            config = LoggingConfig.model_validate(config)

        if self.initialized:
            msg = f"Must not initialise {type(self).__name__} twice"
            raise RuntimeError(msg)
        self.initialized = True

        self.config = config
        self.log_file_path = config.dir / LOG_FILE_NAME

        self._configure_root_logger()
        self._configure_file_handler()
        self._configure_tty_handler()
        self._configure_custom_logger_levels()

    def _configure_root_logger(self) -> None:
        logging.captureWarnings(capture=True)
        logging.root.setLevel(max(self.config.levels.root.value, logging.NOTSET))

    def _configure_file_handler(self) -> None:
        self.fh = None
        if not self.config.levels.file.enabled:
            return

        pathlib.Path(self.log_file_path).parent.mkdir(parents=True, exist_ok=True)

        self.fh = logging.FileHandler(self.log_file_path, mode="w")
        self.fh.setLevel(self.config.levels.file.value)
        self.fh.setFormatter(AccountFormatter("%(asctime)s [%(levelname)s:%(name)s] %(message)s"))
        self.fh.addFilter(HandlerFilter("file"))
        logging.root.addHandler(self.fh)

    def _configure_tty_handler(self) -> None:
        self.ch = None
        if not self.config.levels.tty.enabled:
            return

        if self.config.rich:
            from .rich_handler import CustomRichHandler

            self.ch = CustomRichHandler()
        else:
            self.ch = logging.StreamHandler(sys.stderr)
            self.ch.setFormatter(AccountFormatter("[%(levelname).1s:%(name)s] %(message)s"))

        self.ch.setLevel(self.config.levels.tty.value)
        self.ch.addFilter(HandlerFilter("tty"))

        # pytest captures log output itself
        if not script_info.is_unit_test():
            logging.root.addHandler(self.ch)

    def apply_logging_level(self, logger: logging.Logger) -> None:
        # Explicitly set levels win
        if logger.level != logging.NOTSET:
            return

        # The longest matching pattern wins
        level: LoggingLevel = self.config.levels.default
        matched = 0
        for pattern, custom in self.config.levels.custom.items():
            if (match := pattern.match(logger.name)) is not None and len(match.group(0)) > matched:
                level = custom
                matched = len(match.group(0))

        if level == logging.NOTSET:
            return
        logger.setLevel(level.value if level.enabled else logging.CRITICAL + 1)

    def _configure_custom_logger_levels(self) -> None:
        for name in list(logging.root.manager.loggerDict):
            self.apply_logging_level(logging.getLogger(name))

    def reset(self) -> None:
        for handler in (self.fh, self.ch):
            if handler is not None:
                logging.root.removeHandler(handler)
                handler.close()
        self.fh = None
        self.ch = None
        self.initialized = False
