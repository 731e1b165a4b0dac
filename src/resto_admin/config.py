from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 2
    retry_backoff_seconds: float = 0.3
    verify_ssl: bool = True
    app_name: str = "resto_admin"

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("RESTO_ENV") or "dev").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"RESTO_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("RESTO_API_BASE_URL") or "").strip()
    )
    _validate(bool(api_base_url), "Missing required config value: RESTO_API_BASE_URL")

    timeout_seconds = _read_float("RESTO_TIMEOUT_SECONDS", "15")
    _validate(timeout_seconds > 0, f"Invalid RESTO_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}")

    connect_timeout_seconds = _read_float("RESTO_CONNECT_TIMEOUT_SECONDS", str(min(timeout_seconds, 5.0)))
    _validate(
        connect_timeout_seconds > 0,
        f"Invalid RESTO_CONNECT_TIMEOUT_SECONDS: expected > 0, got {connect_timeout_seconds}",
    )

    read_timeout_seconds = _read_float("RESTO_READ_TIMEOUT_SECONDS", str(timeout_seconds))
    _validate(
        read_timeout_seconds > 0,
        f"Invalid RESTO_READ_TIMEOUT_SECONDS: expected > 0, got {read_timeout_seconds}",
    )

    retries = _read_int("RESTO_RETRIES", "2")
    _validate(retries >= 0, f"Invalid RESTO_RETRIES: expected >= 0, got {retries}")

    retry_backoff_seconds = _read_float("RESTO_RETRY_BACKOFF_SECONDS", "0.3")
    _validate(
        retry_backoff_seconds >= 0,
        f"Invalid RESTO_RETRY_BACKOFF_SECONDS: expected >= 0, got {retry_backoff_seconds}",
    )

    app_name = (os.getenv("RESTO_APP_NAME") or "resto_admin").strip() or "resto_admin"

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout_seconds,
        read_timeout_seconds=read_timeout_seconds,
        retries=retries,
        retry_backoff_seconds=retry_backoff_seconds,
        verify_ssl=_coerce_bool(os.getenv("RESTO_VERIFY_SSL"), True),
        app_name=app_name,
    )
