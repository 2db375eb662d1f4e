# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

from .account_name import AccountName, AccountType
from .amount import Amount
from .directives import Balance, Price
from .entities import Commodity, LedgerAccount
from .posting import Cost, Posting
from .snapshot import LedgerSnapshot
from .transaction import Flag, Transaction


__all__ = [
    "AccountName",
    "AccountType",
    "Amount",
    "Balance",
    "Commodity",
    "Cost",
    "Flag",
    "LedgerAccount",
    "LedgerSnapshot",
    "Posting",
    "Price",
    "Transaction",
]
