# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from ..helpers.classinstanceproperty import classinstanceproperty
from ..logging import LoggableProtocol, Logger, getLogger


class LoggableMixin:
    """Mixin that adds a ``.log`` property to a class and its instances.

    The logger is named after the class. Instances may define ``log_parent`` (a logger or another loggable) to nest their
    logger under it, and ``log_name`` to override the name.
    """

    # MARK: Logging
    @classinstanceproperty
    def log(self) -> Logger:
        parent = None
        if not isinstance(self, type):
            parent = getattr(self, "log_parent", None)
            if parent is not None and not isinstance(parent, LoggableProtocol):
                parent = None
        return getLogger(self.__log_name__, parent=parent)

    @classinstanceproperty
    def __log_name__(self) -> str:
        if not isinstance(self, type):
            name = getattr(self, "log_name", None)
            if isinstance(name, str) and name:
                return name
            return type(self).__name__
        return f"T({self.__name__})"
