"""Factory for creating key-value storage backends."""

from typing import Any

from .base import KeyValueStorage


def create_storage(
    backend: str = "json",
    **kwargs: Any
) -> KeyValueStorage:
    """Create a key-value storage backend.

    Args:
        backend: Backend type ("json" or "memory")
        **kwargs: Backend-specific configuration
            For json:
                - path: str | Path (default: '~/.mentorchat')
            For memory:
                - initial: dict[str, str] | None

    Returns:
        KeyValueStorage instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryStorage
        return InMemoryStorage(**kwargs)

    elif backend == "json":
        from .json_file import JSONFileStorage
        return JSONFileStorage(**kwargs)

    raise ValueError(
        f"Unsupported storage backend: {backend}. "
        f"Supported backends: json, memory"
    )
