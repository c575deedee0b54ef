"""Abstract base class for chat store backends.

This module defines the interface for note and history storage.
The abstraction hides:
- Storage format
- Persistence mechanism (file, database, in-memory)
- Full-text search implementation
- Connection management
"""

from abc import ABC, abstractmethod

from .models import HistoryRecord, MemoryEntry


class ChatStore(ABC):
    """Abstract chat store.

    Keeps named notes ("memories") and every conversation turn, and lets
    callers search past turns.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the store."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the store gracefully."""

    @abstractmethod
    async def set_memory(self, name: str, value: str) -> None:
        """Create or overwrite a note."""

    @abstractmethod
    async def get_memory(self, name: str) -> str:
        """Get a note's value, or an empty string if it does not exist."""

    @abstractmethod
    async def list_memories(self) -> list[MemoryEntry]:
        """List all notes in creation order."""

    @abstractmethod
    async def add_history(self, role: str, content: str) -> HistoryRecord:
        """Append a conversation turn."""

    @abstractmethod
    async def search_history(self, query: str, limit: int = 10) -> list[HistoryRecord]:
        """Full-text search over past turns, best match first."""

    @abstractmethod
    async def get_history_context(self, record_id: int, radius: int = 2) -> list[HistoryRecord]:
        """Get a turn plus up to `radius` turns before and after it."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
