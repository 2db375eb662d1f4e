# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import logging

from reprlib import Repr

from pydantic import Field

from ..logging.config import LoggingConfig
from .base_model import BaseConfigModel


class ConfigLoggingOnly(BaseConfigModel):
    """The subset of the configuration needed to bring up logging before the rest is validated."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")


class ConfigBase(ConfigLoggingOnly):
    def debug(self) -> None:
        if not self.log.isEnabledFor(logging.DEBUG):
            return
        self.log.debug("Configuration: %s", Repr(indent=4).repr(self.model_dump()))
