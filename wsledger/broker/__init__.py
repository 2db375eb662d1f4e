# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from .account import BrokerAccount
from .asset import Asset, AssetType
from .model import DecimalString
from .position import Position
from .transaction import BrokerTransaction
from .transaction_type import TransactionType


__all__ = [
    "Asset",
    "AssetType",
    "BrokerAccount",
    "BrokerTransaction",
    "DecimalString",
    "Position",
    "TransactionType",
]
