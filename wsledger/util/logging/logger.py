# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import functools
import logging

from typing import Any, Protocol, override, runtime_checkable


@runtime_checkable
class LoggableProtocol(Protocol):
    """Anything exposing a ``log`` logger, usable as the parent of a new logger."""

    @property
    def log(self) -> logging.Logger: ...


class Logger(logging.Logger):
    @override
    def isEnabledFor(self, level: int, *, handler: str | None = None) -> bool:
        if handler is None:
            return super().isEnabledFor(level)
        if handler == "tty":
            return self.isEnabledForTty(level)
        if handler == "file":
            return self.isEnabledForFile(level)
        msg = f"Unknown handler: {handler}. Expected 'tty' or 'file'."
        raise ValueError(msg)

    def isEnabledForTty(self, level: int) -> bool:  # noqa: N802 which matches isEnabledFor
        from .manager import LoggingManager

        ch = LoggingManager().ch
        if ch is None or ch.level > level:
            return False
        return super().isEnabledFor(level)

    def isEnabledForFile(self, level: int) -> bool:  # noqa: N802 which matches isEnabledFor
        from .manager import LoggingManager

        fh = LoggingManager().fh
        if fh is None or fh.level > level:
            return False
        return super().isEnabledFor(level)


logging.setLoggerClass(Logger)


original_logging_getLogger = logging.getLogger  # noqa: N816


def _getLogger(obj: object, parent: Any = None, name: str | None = None) -> logging.Logger:  # noqa: N802
    if name is None:
        name = obj if isinstance(obj, str) else type(obj).__name__

    if isinstance(parent, logging.Logger):
        logger = parent.getChild(name)
    elif isinstance(parent, LoggableProtocol):
        logger = parent.log.getChild(name)
    else:
        logger = original_logging_getLogger(name)

    # Loggers created after the manager was initialised still pick up their configured level
    from .manager import LoggingManager

    manager = LoggingManager()
    if manager.initialized:
        manager.apply_logging_level(logger)

    return logger


def getLogger(obj: object, parent: Any = None, name: str | None = None) -> Logger:  # noqa: N802
    """Obtain a project logger for ``obj``.

    ``obj`` is either the logger name or an object whose class name is used. When ``parent`` is a logger (or something with a
    ``.log`` property) the new logger is created as its child.
    """
    logger = _getLogger(obj, parent=parent, name=name)

    if not isinstance(logger, Logger):
        msg = f"Expected a Logger instance, got: {type(logger)}"
        raise TypeError(msg)

    return logger


@functools.wraps(logging.getLogger)
def logging_getLogger_wrapper(name: str | None = None) -> logging.Logger:  # noqa: N802
    if name is None:
        return logging.root
    return _getLogger(name)


logging.getLogger = logging_getLogger_wrapper
