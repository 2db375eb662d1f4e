# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import re

from enum import StrEnum
from typing import Any, Self, override

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema


class AccountType(StrEnum):
    """The role of a ledger account, given by the first component of its name."""

    # fmt: off
    ASSETS      = "Assets"
    LIABILITIES = "Liabilities"
    INCOME      = "Income"
    EXPENSES    = "Expenses"
    EQUITY      = "Equity"
    # fmt: on

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self.name}"


COMPONENT_PATTERN = re.compile(r"^[A-Z0-9][A-Za-z0-9-]*$")


class AccountName(str):
    """A colon-delimited ledger account name such as ``Assets:Wealthsimple:TFSA:Cash``.

    >>> name = AccountName("Assets:Wealthsimple:TFSA:Cash")
    >>> name.role
    AccountType.ASSETS
    >>> name.leaf
    'Cash'
    """

    __slots__ = ()

    def __new__(cls, value: str) -> Self:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            msg = f"Account name must be a string, got {type(value).__name__}"
            raise TypeError(msg)

        components = value.split(":")
        try:
            AccountType(components[0])
        except ValueError as err:
            msg = f"Invalid account name '{value}': must start with one of {', '.join(t.value for t in AccountType)}"
            raise ValueError(msg) from err

        if len(components) < 2:  # noqa: PLR2004
            msg = f"Invalid account name '{value}': must have at least two components"
            raise ValueError(msg)
        for component in components[1:]:
            if not COMPONENT_PATTERN.match(component):
                msg = f"Invalid account name '{value}': invalid component '{component}'"
                raise ValueError(msg)

        return super().__new__(cls, value)

    @property
    def components(self) -> tuple[str, ...]:
        return tuple(self.split(":"))

    @property
    def role(self) -> AccountType:
        return AccountType(self.components[0])

    @property
    def leaf(self) -> str:
        return self.components[-1]

    @property
    def parent(self) -> "AccountName | None":
        components = self.components
        if len(components) <= 2:  # noqa: PLR2004
            return None
        return AccountName(":".join(components[:-1]))

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )
