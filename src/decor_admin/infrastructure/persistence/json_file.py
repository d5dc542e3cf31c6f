"""Shared file handling for the JSON-backed repositories."""

from __future__ import annotations

import json
import os
from pathlib import Path
from threading import Lock, RLock

from decor_admin.domain.exceptions import PersistenceError

_registry_guard = Lock()
_file_locks: dict[Path, RLock] = {}


def _lock_for(path: Path) -> RLock:
    with _registry_guard:
        return _file_locks.setdefault(path, RLock())


class JsonFile:
    """A JSON array on disk with locked read-modify-write.

    Hold ``lock`` around a ``load``/``persist`` pair to make the update
    atomic with respect to other repositories on the same file.
    """

    def __init__(self, file_path: Path) -> None:
        self.path = file_path.resolve()
        self.lock = _lock_for(self.path)
        self._ensure_file()

    def load(self) -> list[dict]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read {self.path.name}: {exc}") from exc
        if not isinstance(data, list):
            raise PersistenceError(f"{self.path.name} must contain a JSON array")
        return data

    def persist(self, records: list[dict]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self.path.name}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self.path.exists():
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text("[]", encoding="utf-8")
            except OSError as exc:
                raise PersistenceError(f"Cannot create {self.path}: {exc}") from exc
