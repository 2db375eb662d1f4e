# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from pydantic import Field

from ..mapper.config import MapperConfig
from ..util.config.models import ConfigBase


# MARK: Main Config
class Config(ConfigBase):
    mapper: MapperConfig = Field(default_factory=MapperConfig, description="Broker to ledger mapping configuration")
