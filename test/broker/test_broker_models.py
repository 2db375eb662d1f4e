# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import datetime

import pytest

from pydantic import ValidationError

from wsledger.broker import Asset, AssetType, BrokerAccount, BrokerTransaction, Position, TransactionType


@pytest.mark.broker
class TestTransactionType:
    @pytest.mark.parametrize(
        "kind",
        [
            TransactionType.BUY,
            TransactionType.SELL,
            TransactionType.DIVIDEND,
            TransactionType.FEE,
            TransactionType.CONTRIBUTION,
            TransactionType.DEPOSIT,
            TransactionType.REFUND,
            TransactionType.NRWT,
        ],
    )
    def test_supported(self, kind):
        assert kind.supported

    @pytest.mark.parametrize("kind", [TransactionType.WITHDRAWAL, TransactionType.INTEREST, TransactionType.TRANSFER_IN, TransactionType.STOCK_SPLIT])
    def test_unsupported(self, kind):
        assert not kind.supported

    def test_cash_kinds(self):
        assert {kind for kind in TransactionType if kind.cash} == {
            TransactionType.FEE,
            TransactionType.CONTRIBUTION,
            TransactionType.DEPOSIT,
            TransactionType.REFUND,
        }

    def test_str(self):
        assert str(TransactionType.NRWT) == "nrwt"
        assert repr(TransactionType.NRWT) == "TransactionType.NRWT"
        assert TransactionType("dividend") is TransactionType.DIVIDEND


@pytest.mark.broker
class TestBrokerModels:
    def test_account(self):
        account = BrokerAccount(id="tfsa-1", type="ca_tfsa", currency="CAD")
        assert account.currency == "CAD"

    def test_asset_is_currency(self):
        assert Asset(symbol="CAD", type=AssetType.CURRENCY).is_currency
        assert not Asset(symbol="ABC", type="exchange_traded_fund").is_currency  # pyright: ignore[reportArgumentType]

    def test_position_from_camel_case(self):
        position = Position.model_validate(
            {
                "accountId": "tfsa-1",
                "asset": {"symbol": "ABC", "type": "equity"},
                "quantity": "10.500",
                "priceAmount": "25.30",
                "priceCurrency": "USD",
                "positionDate": "2020-06-17",
                "somethingElse": "ignored",
            }
        )
        assert position.account_id == "tfsa-1"
        assert position.asset.type is AssetType.EQUITY
        assert position.position_date == datetime.date(2020, 6, 17)

    def test_transaction_from_camel_case(self, broker):
        transaction = BrokerTransaction.model_validate(
            {
                "id": "tx-1",
                "accountId": "tfsa-1",
                "type": "buy",
                "symbol": "ABC",
                "description": "",
                "effectiveDate": "2020-06-17",
                "processDate": "2020-06-18",
                "netCashAmount": "-1,253.00",
                "netCashCurrency": "CAD",
                "marketPriceAmount": "125.30",
                "marketPriceCurrency": "USD",
                "marketValueCurrency": "USD",
                "fxRate": "1.35",
                "quantity": "10",
            }
        )
        assert transaction.type is TransactionType.BUY
        assert transaction.process_date == datetime.date(2020, 6, 18)
        assert transaction.net_cash_amount == "-1,253.00"
        assert transaction.uses_fx

    @pytest.mark.parametrize("value", ["abc", "1.2.3", "1e5", "", "12,34"])
    def test_rejects_malformed_decimal_strings(self, broker, value):
        with pytest.raises(ValidationError):
            broker.buy(net_cash_amount=value)

    def test_is_frozen(self, broker):
        transaction = broker.buy()
        with pytest.raises(ValidationError):
            transaction.symbol = "XYZ"

    def test_unknown_type(self, broker):
        with pytest.raises(ValidationError):
            broker.transaction(type="teleport")
