from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .session import SessionStore


@dataclass(frozen=True)
class SessionValidation:
    valid: bool
    reason: str | None = None


def validate_session(store: SessionStore) -> SessionValidation:
    if not store.token:
        return SessionValidation(valid=False, reason="missing_session")
    if store.user is None:
        return SessionValidation(valid=False, reason="missing_session")
    return SessionValidation(valid=True)


class SessionGuard:
    """Sends screens that need a session to the login boundary when there is none."""

    def __init__(self, on_invalid_session: Callable[[str], None]) -> None:
        self._on_invalid_session = on_invalid_session
        self.current_module: str | None = None

    def require_session(self, store: SessionStore, module: str) -> bool:
        self.current_module = module
        validation = validate_session(store)
        if validation.valid:
            return True
        self._on_invalid_session(validation.reason or "missing_session")
        return False
