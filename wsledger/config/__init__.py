# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from ..util.config import ConfigManager
from .main import Config


# Process-wide configuration
CFG = ConfigManager(Config)


__all__ = [
    "CFG",
    "Config",
    "ConfigManager",
]
