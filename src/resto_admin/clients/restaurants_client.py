from __future__ import annotations

from typing import Any

from ..models import Restaurant
from .base import BaseClient, list_items


class RestaurantsClient(BaseClient):
    module = "restaurants"

    def list_restaurants(self, query: dict[str, Any] | None = None) -> list[Restaurant]:
        payload = self._request(
            "GET", "/restaurants", params=query or None, module=self.module, operation="restaurants.list"
        )
        return [Restaurant.model_validate(item) for item in list_items(payload)]

    def get_restaurant(self, restaurant_id: int) -> Restaurant:
        payload = self._request(
            "GET", f"/restaurants/{restaurant_id}", module=self.module, operation="restaurants.get"
        )
        return Restaurant.model_validate(payload)

    def create_restaurant(self, payload: dict[str, Any]) -> Restaurant:
        data = self._request(
            "POST", "/restaurants", json_body=payload, module=self.module, operation="restaurants.create"
        )
        return Restaurant.model_validate(data)

    def update_restaurant(self, restaurant_id: int, payload: dict[str, Any]) -> Restaurant:
        data = self._request(
            "PATCH",
            f"/restaurants/{restaurant_id}",
            json_body=payload,
            module=self.module,
            operation="restaurants.update",
        )
        return Restaurant.model_validate(data)
