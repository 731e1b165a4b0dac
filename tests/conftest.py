from __future__ import annotations

import logging

import pytest

from resto_admin.config import ClientConfig
from resto_admin.session import SessionStore
from resto_admin.storage import MemoryStorage

BASE_URL = "https://api.example.com"


def make_user(*restaurants: tuple[int, str], user_id: int = 7) -> dict:
    return {
        "id": user_id,
        "firstName": "Aylar",
        "lastName": "Orazova",
        "role": "manager",
        "status": "active",
        "createdAt": "2024-01-10T09:00:00Z",
        "email": "aylar@example.com",
        "phonenumber": 99361234567,
        "isSuperUser": False,
        "validUntil": "2025-01-10",
        "restaurants": [{"id": rid, "name": name} for rid, name in restaurants],
    }


@pytest.fixture
def quiet_logger() -> logging.Logger:
    logger = logging.getLogger("resto_admin.tests")
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage, quiet_logger: logging.Logger) -> SessionStore:
    return SessionStore(storage, logger=quiet_logger)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL, retries=2, retry_backoff_seconds=0)


@pytest.fixture
def user_factory():
    return make_user
