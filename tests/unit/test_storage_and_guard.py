from __future__ import annotations

import json
import os
import stat
from pathlib import Path

import pytest

from resto_admin.session import SessionStore
from resto_admin.session_guard import SessionGuard, validate_session
from resto_admin.storage import FileStorage


def test_file_storage_is_visible_to_a_new_instance(tmp_path: Path) -> None:
    FileStorage(base_dir=tmp_path).set("token", "abc")

    assert FileStorage(base_dir=tmp_path).get("token") == "abc"


def test_file_storage_remove_last_key_deletes_file(tmp_path: Path) -> None:
    storage = FileStorage(base_dir=tmp_path)
    storage.set("token", "abc")

    storage.remove("token")
    storage.remove("token")

    assert storage.get("token") is None
    assert not (tmp_path / "session.json").exists()


def test_file_storage_treats_corrupt_file_as_empty(tmp_path: Path) -> None:
    (tmp_path / "session.json").write_text("{broken", encoding="utf-8")
    storage = FileStorage(base_dir=tmp_path)

    assert storage.get("token") is None

    storage.set("token", "abc")
    assert json.loads((tmp_path / "session.json").read_text(encoding="utf-8")) == {"token": "abc"}


def test_file_storage_read_does_not_create_directory(tmp_path: Path) -> None:
    base = tmp_path / "not-yet"
    storage = FileStorage(base_dir=base)

    assert storage.get("token") is None
    storage.remove("token")
    assert not base.exists()

    storage.set("token", "abc")
    assert (base / "session.json").exists()


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions only")
def test_file_storage_is_private(tmp_path: Path) -> None:
    FileStorage(base_dir=tmp_path).set("token", "abc")

    mode = stat.S_IMODE((tmp_path / "session.json").stat().st_mode)
    assert mode == 0o600


def test_session_round_trips_through_file_storage(tmp_path: Path, quiet_logger, user_factory) -> None:
    first = SessionStore(FileStorage(base_dir=tmp_path), logger=quiet_logger)
    first.login("token-1", user_factory((1, "Ak Öý"), (2, "Nusay")))
    first.select_restaurant_by_id(2)

    second = SessionStore(FileStorage(base_dir=tmp_path), logger=quiet_logger)

    assert second.initialize() is True
    assert second.selected_restaurant.id == 2


def test_guard_redirects_when_session_missing(store) -> None:
    reasons: list[str] = []
    guard = SessionGuard(on_invalid_session=reasons.append)

    allowed = guard.require_session(store, module="orders")

    assert allowed is False
    assert reasons == ["missing_session"]
    assert guard.current_module == "orders"


def test_guard_allows_authenticated_session(store, user_factory) -> None:
    store.login("token-1", user_factory((1, "Ak Öý")))
    reasons: list[str] = []

    assert SessionGuard(on_invalid_session=reasons.append).require_session(store, module="users") is True
    assert reasons == []
    assert validate_session(store).valid is True
