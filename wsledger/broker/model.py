# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel


# A decimal number as sent by the broker, optionally signed and with thousands separators
DECIMAL_STRING_PATTERN = r"^[-+]?[0-9]+(,[0-9]{3})*(\.[0-9]+)?$"

DecimalString = Annotated[str, StringConstraints(strip_whitespace=True, pattern=DECIMAL_STRING_PATTERN)]


class BrokerModel(BaseModel):
    """Base class for records received from the broker.

    Records are read-only. Fields accept both their Python name and the broker's camelCase name, and unknown fields are ignored.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
