"""In-memory key-value storage backend.

Simple dict-based storage for session-only use.
Data is lost when the application exits.
"""

from .base import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """In-memory key-value storage (session-only).

    Suitable for single-session use or testing.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._records: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._records.get(key)

    def set(self, key: str, value: str) -> None:
        self._records[key] = value

    def delete(self, key: str) -> None:
        self._records.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._records)

    @property
    def backend_type(self) -> str:
        return "memory"
