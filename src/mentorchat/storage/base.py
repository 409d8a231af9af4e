"""Abstract base class for key-value storage backends.

This module defines the interface for durable document storage.
The abstraction hides:
- Storage medium (process memory, JSON files on disk)
- Serialization of documents
- Location of the persisted records
"""

import json
from abc import ABC, abstractmethod
from typing import Any


class KeyValueStorage(ABC):
    """Abstract key-value storage backend.

    Each key maps to one self-contained JSON-compatible document.
    Writes are independent: there is no transactional grouping across keys.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the raw serialized document stored under ``key``, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a raw serialized document under ``key``."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""

    @abstractmethod
    def keys(self) -> list[str]:
        """List the keys currently stored."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    def get_json(self, key: str) -> Any:
        """Decode the document stored under ``key``.

        Returns:
            The decoded document, or None if the key is absent

        Raises:
            ValueError: If the stored document is not valid JSON
        """
        raw = self.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set_json(self, key: str, value: Any) -> None:
        """Encode ``value`` as JSON and store it under ``key``."""
        self.set(key, json.dumps(value, ensure_ascii=False))
