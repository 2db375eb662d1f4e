# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from . import script_info
from .classinstanceproperty import classinstanceproperty
from .frozendict import FrozenDict


__all__ = [
    "FrozenDict",
    "classinstanceproperty",
    "script_info",
]
