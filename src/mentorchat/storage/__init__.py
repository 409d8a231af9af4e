"""Durable key-value storage for mentorchat.

Provides the local document store that conversations and the profile persist to.
"""

from .base import KeyValueStorage
from .factory import create_storage
from .in_memory import InMemoryStorage
from .json_file import JSONFileStorage

__all__ = [
    "KeyValueStorage",
    "InMemoryStorage",
    "JSONFileStorage",
    "create_storage",
]
