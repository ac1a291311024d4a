from __future__ import annotations

from typing import Dict

from .errors import ProtocolError, ValidationError
from .http_client import CleverHttpClient
from .models import HttpMethod, OrderBook, Ticker, Visibility

ORDER_TYPES = ("bid", "ask")


class CleverCoinService:
    """Endpoint layer: maps market and account calls onto the generic executor."""

    def __init__(self, http_client: CleverHttpClient, *, logger=None) -> None:
        self.http_client = http_client
        self.logger = logger

    def _log(self, level: str, msg: str, *args) -> None:
        if self.logger:
            getattr(self.logger, level)(msg, *args)

    @staticmethod
    def _require(payload: Dict, field: str):
        if field not in payload:
            raise ProtocolError(f"response is missing '{field}'", body=str(payload))
        return payload[field]

    # Public calls
    def get_ticker(self) -> Ticker:
        payload = self.http_client.execute(Visibility.PUBLIC, HttpMethod.GET, "ticker")
        return Ticker.from_payload(payload)

    def get_order_book(self, group: bool = True) -> OrderBook:
        payload = self.http_client.execute(
            Visibility.PUBLIC, HttpMethod.GET, "orderbook", {"group": "1" if group else "0"}
        )
        return OrderBook.from_payload(payload)

    # Private calls
    def get_bitcoin_deposit_address(self) -> str:
        payload = self.http_client.execute(Visibility.PRIVATE, HttpMethod.GET, "bitcoin/depositAddress")
        return str(self._require(payload, "address"))

    def create_limited_order(self, order_type: str, amount: str, price: str) -> int:
        if order_type not in ORDER_TYPES:
            raise ValidationError("Order type must be 'bid' or 'ask'.")
        payload = self.http_client.execute(
            Visibility.PRIVATE,
            HttpMethod.POST,
            "orders/limited",
            body_params={"type": order_type, "amount": str(amount), "price": str(price)},
        )
        order_id = int(self._require(payload, "orderID"))
        self._log("info", "Created %s order %s: %s @ %s", order_type, order_id, amount, price)
        return order_id

    def cancel_limited_order(self, order_id: int) -> str:
        payload = self.http_client.execute(
            Visibility.PRIVATE, HttpMethod.DELETE, "orders/limited", {"orderID": str(order_id)}
        )
        self._log("info", "Cancelled order %s", order_id)
        return str(self._require(payload, "result"))

    def create_bitcoin_withdrawal(self, amount: str, to_address: str) -> int:
        payload = self.http_client.execute(
            Visibility.PRIVATE,
            HttpMethod.POST,
            "bitcoin/withdrawal",
            body_params={"amount": str(amount), "toAddress": to_address},
        )
        withdrawal_id = int(self._require(payload, "withdrawalID"))
        self._log("info", "Requested withdrawal %s of %s BTC", withdrawal_id, amount)
        return withdrawal_id
