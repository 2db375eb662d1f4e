# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from typing import TYPE_CHECKING, override

from pydantic import BaseModel, ConfigDict

from ..mixins import LoggableMixin


if TYPE_CHECKING:
    import rich.repr


class BaseConfigModel(LoggableMixin, BaseModel):
    """Base class for all configuration models.

    Configuration is immutable once validated and rejects unknown keys, so typos in configuration files fail loudly.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    def __rich_repr__(self) -> "rich.repr.Result":
        for attr, info in type(self).model_fields.items():
            if info.repr is False:
                continue
            yield attr, getattr(self, attr, None)

    @override
    def __repr__(self) -> str:
        return BaseModel.__repr__(self)

    @override
    def __str__(self) -> str:
        return BaseModel.__str__(self)
