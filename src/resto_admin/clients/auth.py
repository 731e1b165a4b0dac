from __future__ import annotations

from ..models import LoginResponse, User
from .base import BaseClient


class AuthClient(BaseClient):
    module = "auth"

    def login(self, email: str, password: str) -> LoginResponse:
        payload = {"email": email, "password": password}
        data = self.http.request("POST", "/auth/login", json_body=payload, module=self.module, operation="login")
        return LoginResponse.model_validate(data)

    def me(self) -> User:
        data = self._request("GET", "/auth/me", module=self.module, operation="me")
        return User.model_validate(data)
