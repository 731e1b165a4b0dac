from __future__ import annotations

import json
import time
import uuid
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    trace_id: str | None


@dataclass
class HttpClient:
    config: ClientConfig
    session: requests.Session | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_id = str(uuid.uuid4())
        request_headers = {"Accept": "application/json", REQUEST_ID_HEADER: request_id}
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        url = self._build_url(path)
        attempts = self.config.retries + 1 if normalized_method in {"GET", "HEAD"} else 1

        started = time.monotonic()
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body,
                    params=params,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    self._record_operation(module, operation, started, "error", request_id)
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        trace_id=request_id,
                        status_code=0,
                    ) from exc
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError("HTTP request finished without a response")

        trace_id = response.headers.get(REQUEST_ID_HEADER) or request_id
        if response.ok:
            self._record_operation(module, operation, started, "success", trace_id)
            if not response.content:
                return None
            return response.json()

        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError):
            payload = {"message": response.text or response.reason}
        if not isinstance(payload, dict):
            payload = {"details": payload}
        self._record_operation(module, operation, started, "error", trace_id)
        raise map_error(response.status_code, payload, trace_id, reason=response.reason)

    def _record_operation(self, module: str, operation: str, started: float, result: str, trace_id: str | None) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=trace_id,
        )
