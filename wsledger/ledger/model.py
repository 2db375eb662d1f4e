# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from pydantic import BaseModel, ConfigDict


class LedgerModel(BaseModel):
    """Base class for ledger value objects, which are immutable once constructed."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )
