"""JSON file key-value storage backend.

Persists every key as its own ``<key>.json`` file inside a data directory,
so a crash while writing one record leaves the others intact.
"""

import os
import re
import tempfile
from pathlib import Path

from .base import KeyValueStorage

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class JSONFileStorage(KeyValueStorage):
    """File-backed key-value storage.

    Each write goes to a temporary file which then replaces the record,
    so readers never observe a half-written document.
    """

    def __init__(self, path: str | Path = "~/.mentorchat"):
        self._root = Path(path).expanduser()

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._root / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        self._root.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        if not self._root.exists():
            return []
        return sorted(p.stem for p in self._root.glob("*.json"))

    @property
    def backend_type(self) -> str:
        return "json"

    @property
    def root(self) -> Path:
        return self._root
