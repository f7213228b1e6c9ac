"""Local key-value store (one JSON file per key, fcntl.flock + atomic write)."""

import fcntl
import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from lingua_educate.errors import PersistenceReadFailure

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonKeyValueStore:
    """Persists JSON-encodable values under string keys.

    Reads take a shared lock; writes go to a temp file in the same directory
    and are swapped in with ``os.replace``, so a reader never sees a
    half-written value. Concurrent writers are last-writer-wins.

    Args:
        directory: Folder holding ``<key>.json`` files (created on demand).
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid store key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Any | None:
        """Return the decoded value, or None if the key was never set.

        Raises:
            PersistenceReadFailure: If the stored file is not UTF-8 encoded JSON.
        """
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, "rb") as f:
            fcntl.flock(f, fcntl.LOCK_SH)
            try:
                raw = f.read()
            finally:
                fcntl.flock(f, fcntl.LOCK_UN)
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceReadFailure(key, str(e)) from e

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        with tempfile.NamedTemporaryFile(
            "w", dir=self.directory, delete=False, suffix=".tmp", encoding="utf-8"
        ) as tmp:
            json.dump(value, tmp, indent=2, ensure_ascii=False)
        os.replace(tmp.name, path)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        return sorted(p.stem for p in self.directory.glob("*.json"))

    def clear(self) -> None:
        for key in self.keys():
            self.delete(key)
