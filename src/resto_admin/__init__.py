from .api import ApiSession
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    NotFoundError,
    PermissionDeniedError,
    SessionContextError,
    TransportError,
    ValidationError,
)
from .http_client import HttpClient
from .models import LoginResponse, Order, OrderStatus, Restaurant, RestaurantRef, SortDirection, User
from .notifications import NotificationCenter
from .session import SessionEvent, SessionEventKind, SessionStore, current_session, session_scope
from .session_guard import SessionGuard
from .storage import FileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthError",
    "ClientConfig",
    "ConfigError",
    "FileStorage",
    "HttpClient",
    "KeyValueStorage",
    "LoginResponse",
    "MemoryStorage",
    "NotFoundError",
    "NotificationCenter",
    "Order",
    "OrderStatus",
    "PermissionDeniedError",
    "Restaurant",
    "RestaurantRef",
    "SessionContextError",
    "SessionEvent",
    "SessionEventKind",
    "SessionGuard",
    "SessionStore",
    "SortDirection",
    "TransportError",
    "User",
    "ValidationError",
    "current_session",
    "load_config",
    "session_scope",
]
