from __future__ import annotations

from typing import Any

from ..models import Order
from .base import BaseClient, list_items


class OrdersClient(BaseClient):
    module = "orders"

    def list_orders(self, query: dict[str, Any] | None = None) -> list[Order]:
        payload = self._request("GET", "/orders", params=query or None, module=self.module, operation="orders.list")
        return [Order.model_validate(item) for item in list_items(payload)]

    def get_order(self, order_id: int) -> Order:
        payload = self._request("GET", f"/orders/{order_id}", module=self.module, operation="orders.get")
        return Order.model_validate(payload)

    def create_order(self, payload: dict[str, Any]) -> Order:
        data = self._request("POST", "/orders", json_body=payload, module=self.module, operation="orders.create")
        return Order.model_validate(data)

    def update_order(self, order_id: int, payload: dict[str, Any]) -> Order:
        data = self._request(
            "PATCH", f"/orders/{order_id}", json_body=payload, module=self.module, operation="orders.update"
        )
        return Order.model_validate(data)
