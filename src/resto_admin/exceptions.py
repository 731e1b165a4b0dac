from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None = None
    trace_id: str | None = None
    status_code: int = 0
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class AuthError(ApiError):
    """Credentials rejected or the session token is no longer accepted."""


class PermissionDeniedError(ApiError):
    """The API refused the operation for the signed-in user."""


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ConflictError(ApiError):
    pass


class RateLimitError(ApiError):
    pass


class ServerError(ApiError):
    pass


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class SessionContextError(RuntimeError):
    """Session accessed outside an active session scope."""


STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthError,
    403: PermissionDeniedError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def error_class_for(status_code: int) -> type[ApiError]:
    if status_code >= 500:
        return ServerError
    return STATUS_ERRORS.get(status_code, ApiError)
