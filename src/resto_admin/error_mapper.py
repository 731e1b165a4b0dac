from __future__ import annotations

from typing import Any, Mapping

from .exceptions import ApiError, error_class_for


def _message_text(value: Any) -> str | None:
    if isinstance(value, list):
        return "; ".join(str(item) for item in value) or None
    return str(value) if value else None


def map_error(
    status_code: int,
    payload: Mapping[str, Any] | None,
    trace_id: str | None,
    reason: str | None = None,
) -> ApiError:
    """Typed error for a non-2xx response.

    The API answers with ``{"statusCode", "message", "error"}`` where ``message`` is a
    list of field messages on validation failures. ``code`` and ``traceId`` are used
    when present; otherwise the HTTP reason phrase stands in for the code.
    """
    body = dict(payload or {})
    raw_message = body.get("message")
    details = body.get("details")
    if details is None and isinstance(raw_message, list):
        details = raw_message
    server_trace = body.get("traceId") or body.get("trace_id")
    return error_class_for(status_code)(
        code=str(body.get("code") or body.get("error") or reason or "HTTP_ERROR"),
        message=_message_text(raw_message) or reason or "Request failed",
        details=details,
        trace_id=str(server_trace) if server_trace else trace_id,
        status_code=status_code,
        raw_payload=body,
    )


def describe_error(error: Exception, *, fallback: str) -> str:
    """Short user-facing text for a failed request."""
    if isinstance(error, ApiError):
        if error.status_code:
            return f"{fallback}: {error.status_code} {error.code}"
        return f"{fallback}: {error.message}"
    return fallback
