# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import os
import pathlib
import re
import sys


_IS_UNIT_TEST = None

SCRIPT_NAME = "wsledger"


def is_unit_test() -> bool:
    """Test whether running in a unit test environment.

    Returns:
        bool: True if running under pytest or with ``UNIT_TEST`` set, False otherwise.

    """
    global _IS_UNIT_TEST  # noqa: PLW0603

    if _IS_UNIT_TEST is None:
        _IS_UNIT_TEST = _is_unit_test()
    return _IS_UNIT_TEST


def _is_unit_test() -> bool:
    if os.environ.get("PYTEST_VERSION", None) is not None:
        return True

    env = os.environ.get("UNIT_TEST", "").strip()
    if not env:
        return False
    return env.lower() not in ("false", "0", "no")


def get_script_name() -> str:
    if (not is_unit_test()) and len(sys.argv) > 0 and sys.argv[0]:
        name = pathlib.Path(sys.argv[0]).name
        name = re.sub(r"\.py$", "", name, flags=re.IGNORECASE)
        if name and name != "__main__":
            return name
    return SCRIPT_NAME
