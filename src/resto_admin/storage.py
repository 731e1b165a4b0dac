from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from platformdirs import user_data_dir


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


@dataclass
class MemoryStorage:
    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


@dataclass
class FileStorage:
    """String key/value pairs kept in a single JSON file.

    Every write goes straight to disk so a new process sees the same values.
    """

    app_name: str = "resto_admin"
    filename: str = "session.json"
    base_dir: Path | None = None

    def _path(self) -> Path:
        base = self.base_dir or Path(user_data_dir(self.app_name, appauthor=False))
        return base / self.filename

    def _read_all(self) -> dict[str, str]:
        path = self._path()
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (ValueError, OSError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        path = self._path()
        if not data:
            if path.exists():
                path.unlink()
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        try:
            path.chmod(0o600)
        except OSError:
            pass

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key not in data:
            return
        del data[key]
        self._write_all(data)
