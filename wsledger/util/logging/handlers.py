# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

"""Filters and formatters shared by the file and TTY handlers.

Records may carry two extras:

- ``handler``: only the handler of that name (``"file"`` or ``"tty"``) emits the record;
- ``account``: the broker account being mapped, shown in front of the message.
"""

import logging

from typing import override


class HandlerFilter(logging.Filter):
    def __init__(self, handler_name: str) -> None:
        super().__init__()
        self.handler_name = handler_name

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        target = getattr(record, "handler", None)
        return target is None or target == self.handler_name


class AccountFormatter(logging.Formatter):
    """Prefixes the message with the broker account id of records logged while mapping an account.

    >>> record = logging.LogRecord("T(AccountMapper)", logging.INFO, "mapper.py", 1, "2 transactions", None, None)
    >>> record.account = "tfsa-1"
    >>> AccountFormatter("%(levelname)s %(message)s").format(record)
    'INFO [tfsa-1] 2 transactions'
    """

    @override
    def formatMessage(self, record: logging.LogRecord) -> str:
        if (account := getattr(record, "account", None)) is not None:
            record = logging.makeLogRecord({**record.__dict__, "message": f"[{account}] {record.message}"})
        return super().formatMessage(record)
