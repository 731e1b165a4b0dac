from __future__ import annotations

from typing import Any

from ..models import User
from .base import BaseClient, list_items


class UsersClient(BaseClient):
    module = "users"

    def list_users(self, query: dict[str, Any] | None = None) -> list[User]:
        payload = self._request("GET", "/users", params=query or None, module=self.module, operation="users.list")
        return [User.model_validate(item) for item in list_items(payload)]

    def get_user(self, user_id: int) -> User:
        payload = self._request("GET", f"/users/{user_id}", module=self.module, operation="users.get")
        return User.model_validate(payload)

    def create_user(self, payload: dict[str, Any]) -> User:
        data = self._request("POST", "/users", json_body=payload, module=self.module, operation="users.create")
        return User.model_validate(data)

    def update_user(self, user_id: int, payload: dict[str, Any]) -> User:
        data = self._request(
            "PATCH", f"/users/{user_id}", json_body=payload, module=self.module, operation="users.update"
        )
        return User.model_validate(data)
