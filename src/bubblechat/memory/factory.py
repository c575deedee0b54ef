"""Factory for creating chat store backends."""

from typing import Any

from .base import ChatStore


def create_chat_store(
    backend: str = "sqlite",
    **kwargs: Any
) -> ChatStore:
    """Create a chat store backend.

    Args:
        backend: Backend type ("memory" or "sqlite")
        **kwargs: Backend-specific configuration

    Returns:
        ChatStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryChatStore
        return InMemoryChatStore(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLiteChatStore
        return SQLiteChatStore(**kwargs)

    raise ValueError(
        f"Unsupported chat store backend: {backend}. "
        f"Supported backends: memory, sqlite"
    )
