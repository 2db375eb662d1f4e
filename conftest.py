# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

# Shared pytest fixtures, doctest collection, and the session-wide logging manager
from doctest import ELLIPSIS, IGNORE_EXCEPTION_DETAIL
from typing import TYPE_CHECKING

import pytest

from sybil import Sybil
from sybil.parsers.rest import DocTestParser, PythonCodeBlockParser

from test.fixtures.broker import *
from test.fixtures.ledger import *
from test.util.config.fixture import *


if TYPE_CHECKING:
    from wsledger.util.logging.manager import LoggingManager


# Automatically provide a logging manager for all tests
@pytest.fixture(autouse=True, scope="session")
def logging_manager() -> "LoggingManager":
    from wsledger.util.logging.manager import LoggingManager

    manager = LoggingManager()
    manager.initialize(
        {
            "levels": {
                "file": "OFF",
                "tty": "NOTSET",
                "default": "NOTSET",
            },
            "rich": False,
        }
    )
    return manager


pytest_collect_file = Sybil(
    parsers=[
        DocTestParser(optionflags=ELLIPSIS | IGNORE_EXCEPTION_DETAIL),
        PythonCodeBlockParser(),
    ],
    patterns=["*.py"],
).pytest()
