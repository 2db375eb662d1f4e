# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import datetime

from collections.abc import Sequence
from decimal import Decimal
from typing import NamedTuple

from ..broker import BrokerAccount, Position
from ..ledger import Amount, Balance, Price
from ..util.mixins import LoggableMixin
from .amount_parser import AmountParser
from .lookup import LedgerLookup


class MappedPositions(NamedTuple):
    prices: list[Price]
    balances: list[Balance]


class PositionMapper(LoggableMixin):
    """Maps the positions of one broker account to prices and balance assertions.

    Records that already exist in the ledger are left out.
    """

    def __init__(self, lookup: LedgerLookup, amounts: AmountParser | None = None) -> None:
        self.lookup = lookup
        self.amounts = amounts if amounts is not None else AmountParser(lookup.config, lookup.decimal)

    def map(self, positions: Sequence[Position], account: BrokerAccount, *, as_of: datetime.date | None = None) -> MappedPositions:
        """Map ``positions``, which must all belong to ``account``.

        An account without positions still gets a zero balance assertion on its cash account, dated ``as_of`` (default: today).
        """
        if (foreign := next((position for position in positions if position.account_id != account.id), None)) is not None:
            msg = f"Position for account {foreign.account_id} passed while mapping account {account.id}"
            raise ValueError(msg)

        prices: list[Price] = []
        balances: list[Balance] = []

        for position in positions:
            symbol = self.lookup.ledger_symbol(position.asset)

            if not position.asset.is_currency:
                price = Price(
                    date=position.position_date,
                    commodity=symbol,
                    amount=self.amounts.amount(position.price_amount, position.price_currency),
                )
                if not self.lookup.price_exists(price):
                    prices.append(price)

            balance = Balance(
                date=position.position_date,
                account=self.lookup.asset_account(account, position.asset.symbol),
                amount=self.amounts.amount(position.quantity, symbol),
            )
            if not self.lookup.balance_exists(balance):
                balances.append(balance)

        if not positions:
            balance = Balance(
                date=as_of if as_of is not None else datetime.date.today(),  # noqa: DTZ011
                account=self.lookup.asset_account(account),
                amount=Amount(number=Decimal(0), commodity=account.currency, precision=0),
            )
            if not self.lookup.balance_exists(balance):
                balances.append(balance)

        self.log.debug("%d positions mapped to %d prices and %d balances", len(positions), len(prices), len(balances), extra={"account": account.id})
        return MappedPositions(prices=prices, balances=balances)
