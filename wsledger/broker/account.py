# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from pydantic import Field

from .model import BrokerModel


class BrokerAccount(BrokerModel):
    # fmt: off
    id       : str = Field(min_length=1, description="Broker account identifier")
    type     : str = Field(min_length=1, description="Account type tag, e.g. 'ca_tfsa'")
    currency : str = Field(min_length=1, description="Base currency of the account")
    # fmt: on
