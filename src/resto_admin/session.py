"""Signed-in identity and active restaurant, mirrored to persistent storage.

Storage is always written before the in-memory fields so both copies agree
after every mutation.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import SessionContextError
from .logger import get_logger, log_action
from .models import RestaurantRef, User
from .storage import KeyValueStorage

TOKEN_KEY = "token"
USER_KEY = "user"
SELECTED_RESTAURANT_KEY = "selectedRestaurant"
SESSION_KEYS = (TOKEN_KEY, USER_KEY, SELECTED_RESTAURANT_KEY)


class SessionEventKind(str, Enum):
    INITIALIZED = "initialized"
    LOGIN = "login"
    LOGOUT = "logout"
    RESTAURANT_SELECTED = "restaurant_selected"


@dataclass(frozen=True)
class SessionEvent:
    kind: SessionEventKind
    selected_restaurant: RestaurantRef | None


SessionListener = Callable[[SessionEvent], None]


def _as_user(user: User | dict[str, Any]) -> User:
    return user if isinstance(user, User) else User.model_validate(user)


def _as_restaurant(restaurant: RestaurantRef | dict[str, Any]) -> RestaurantRef:
    return restaurant if isinstance(restaurant, RestaurantRef) else RestaurantRef.model_validate(restaurant)


class SessionStore:
    def __init__(self, storage: KeyValueStorage, logger: logging.Logger | None = None) -> None:
        self.storage = storage
        self.logger = logger or get_logger()
        self._token: str | None = None
        self._user: User | None = None
        self._selected_restaurant: RestaurantRef | None = None
        self._listeners: list[SessionListener] = []

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def selected_restaurant(self) -> RestaurantRef | None:
        return self._selected_restaurant

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token) and self._user is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def initialize(self) -> bool:
        """Restore the session from storage; False means the caller must send the user to login."""
        token = self.storage.get(TOKEN_KEY)
        raw_user = self.storage.get(USER_KEY)
        user: User | None = None
        if raw_user:
            try:
                user = User.model_validate(json.loads(raw_user))
            except ValueError:
                for key in SESSION_KEYS:
                    self.storage.remove(key)
                self._log("initialize", "corrupt_session", level=logging.WARNING)

        if not token or user is None:
            self._token = None
            self._user = None
            self._selected_restaurant = None
            self._notify(SessionEventKind.INITIALIZED)
            return False

        selection = self._restore_selection(user)
        if selection is None and user.restaurants:
            selection = user.restaurants[0]
            self.storage.set(SELECTED_RESTAURANT_KEY, json.dumps(selection.to_wire()))

        self._token = token
        self._user = user
        self._selected_restaurant = selection
        self._log("initialize", "restored")
        self._notify(SessionEventKind.INITIALIZED)
        return True

    def _restore_selection(self, user: User) -> RestaurantRef | None:
        raw = self.storage.get(SELECTED_RESTAURANT_KEY)
        if not raw:
            return None
        try:
            stored = RestaurantRef.model_validate(json.loads(raw))
        except ValueError:
            self.storage.remove(SELECTED_RESTAURANT_KEY)
            self._log("initialize", "corrupt_selection", level=logging.WARNING)
            return None
        member = user.find_restaurant(stored.id)
        if member is None:
            self.storage.remove(SELECTED_RESTAURANT_KEY)
            self._log("initialize", "foreign_selection_dropped", level=logging.WARNING)
        return member

    def login(self, token: str, user: User | dict[str, Any]) -> None:
        if not token:
            raise ValueError("token must be a non-empty string")
        resolved = _as_user(user)
        selection = resolved.restaurants[0] if resolved.restaurants else None

        self.storage.set(TOKEN_KEY, token)
        self.storage.set(USER_KEY, json.dumps(resolved.to_wire()))
        if selection is not None:
            self.storage.set(SELECTED_RESTAURANT_KEY, json.dumps(selection.to_wire()))
        else:
            self.storage.remove(SELECTED_RESTAURANT_KEY)

        self._token = token
        self._user = resolved
        self._selected_restaurant = selection
        self._log("login", "success")
        self._notify(SessionEventKind.LOGIN)

    def logout(self) -> None:
        user_id = self._user.id if self._user else None
        for key in SESSION_KEYS:
            self.storage.remove(key)
        self._token = None
        self._user = None
        self._selected_restaurant = None
        log_action(self.logger, "session", "logout", user_id, None, None, "success")
        self._notify(SessionEventKind.LOGOUT)

    def set_selected_restaurant(self, restaurant: RestaurantRef | dict[str, Any] | None) -> None:
        if restaurant is None:
            self.storage.remove(SELECTED_RESTAURANT_KEY)
            self._selected_restaurant = None
            self._log("select_restaurant", "cleared")
            self._notify(SessionEventKind.RESTAURANT_SELECTED)
            return

        candidate = _as_restaurant(restaurant)
        if self._user is None:
            raise ValueError("Cannot select a restaurant without a signed-in user")
        member = self._user.find_restaurant(candidate.id)
        if member is None:
            raise ValueError(f"Restaurant {candidate.id} is not assigned to user {self._user.id}")

        self.storage.set(SELECTED_RESTAURANT_KEY, json.dumps(member.to_wire()))
        self._selected_restaurant = member
        self._log("select_restaurant", "success")
        self._notify(SessionEventKind.RESTAURANT_SELECTED)

    def select_restaurant_by_id(self, restaurant_id: int) -> RestaurantRef:
        if self._user is None:
            raise ValueError("Cannot select a restaurant without a signed-in user")
        member = self._user.find_restaurant(int(restaurant_id))
        if member is None:
            raise ValueError(f"Restaurant {restaurant_id} is not assigned to user {self._user.id}")
        self.set_selected_restaurant(member)
        return member

    def ensure_default_selection(self) -> RestaurantRef | None:
        if self._user is not None and self._user.restaurants and self._selected_restaurant is None:
            self.set_selected_restaurant(self._user.restaurants[0])
        return self._selected_restaurant

    def _notify(self, kind: SessionEventKind) -> None:
        event = SessionEvent(kind=kind, selected_restaurant=self._selected_restaurant)
        for listener in list(self._listeners):
            listener(event)

    def _log(self, action: str, outcome: str, level: int = logging.INFO) -> None:
        log_action(
            self.logger,
            "session",
            action,
            self._user.id if self._user else None,
            self._selected_restaurant.id if self._selected_restaurant else None,
            None,
            outcome,
            level=level,
        )


_active_session: ContextVar[SessionStore | None] = ContextVar("resto_admin_session", default=None)


@contextmanager
def session_scope(store: SessionStore) -> Iterator[SessionStore]:
    token = _active_session.set(store)
    try:
        yield store
    finally:
        _active_session.reset(token)


def current_session() -> SessionStore:
    store = _active_session.get()
    if store is None:
        raise SessionContextError("current_session() must be called inside session_scope()")
    return store
