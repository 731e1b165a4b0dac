from __future__ import annotations

from dataclasses import dataclass

from .clients.auth import AuthClient
from .clients.orders_client import OrdersClient
from .clients.restaurants_client import RestaurantsClient
from .clients.users_client import UsersClient
from .config import ClientConfig
from .http_client import HttpClient
from .models import User
from .session import SessionStore


@dataclass
class ApiSession:
    config: ClientConfig
    session: SessionStore
    http: HttpClient | None = None

    def __post_init__(self) -> None:
        self.http = self.http or HttpClient(config=self.config)

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http, access_token=self.session.token)

    def users_client(self) -> UsersClient:
        return UsersClient(http=self.http, access_token=self.session.token)

    def restaurants_client(self) -> RestaurantsClient:
        return RestaurantsClient(http=self.http, access_token=self.session.token)

    def orders_client(self) -> OrdersClient:
        return OrdersClient(http=self.http, access_token=self.session.token)

    def sign_in(self, email: str, password: str) -> User:
        response = self.auth_client().login(email, password)
        self.session.login(response.token, response.user)
        return response.user

    def sign_out(self) -> None:
        self.session.logout()
