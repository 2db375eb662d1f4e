# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from .levels import LoggingLevel
from .logger import LoggableProtocol
from .logger import Logger, getLogger


__all__ = [
    "LoggableProtocol",
    "Logger",
    "LoggingLevel",
    "getLogger",
]
