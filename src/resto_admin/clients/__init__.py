from .auth import AuthClient
from .orders_client import OrdersClient
from .restaurants_client import RestaurantsClient
from .users_client import UsersClient

__all__ = ["AuthClient", "OrdersClient", "RestaurantsClient", "UsersClient"]
