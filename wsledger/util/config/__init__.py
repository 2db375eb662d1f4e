# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from .base_model import BaseConfigModel
from .loader import ConfigFileLoader
from .wrapper import ConfigManager


__all__ = [
    "BaseConfigModel",
    "ConfigFileLoader",
    "ConfigManager",
]
