# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from enum import Enum
from typing import Any

import iso4217


CURRENCIES: dict[str, str] = {currency.code: currency.currency_name for currency in iso4217.Currency}


def _update_enum_dict(locals_: dict[str, Any]) -> None:
    locals_.update({code: code for code in CURRENCIES})


class Currency(Enum):
    """ISO 4217 currencies, keyed by their three-letter code.

    >>> Currency("CAD").code
    'CAD'
    """

    _update_enum_dict(locals())

    @property
    def code(self) -> str:
        return self.value

    @property
    def currency_name(self) -> str:
        return CURRENCIES[self.value]

    @classmethod
    def is_known(cls, code: str) -> bool:
        return code in CURRENCIES
