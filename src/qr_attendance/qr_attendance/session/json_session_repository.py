from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, Mapping, Optional

from ..core.exceptions import StorageError
from .repository import SessionRepository


class JsonFileSessionRepository(SessionRepository):
    """Keeps session entries in a single JSON object on disk.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so readers never observe half of an update.
    """

    def __init__(self, path: str | os.PathLike[str]):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"cannot read {self._path}: {e}") from e

        try:
            data = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as e:
            raise StorageError(f"corrupt session file {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"corrupt session file {self._path}: expected an object")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: Mapping[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".session-", dir=str(self._path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(dict(data), fh)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"cannot write {self._path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_many(self, entries: Mapping[str, str]) -> None:
        try:
            data = self._read_all()
        except StorageError:
            # a corrupt file is overwritten; an unreadable one fails on write below
            data = {}
        data.update(entries)
        self._write_all(data)

    def delete_many(self, keys: Iterable[str]) -> None:
        data = self._read_all()
        changed = False
        for key in keys:
            if key in data:
                del data[key]
                changed = True
        if changed:
            self._write_all(data)
