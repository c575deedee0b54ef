"""In-memory chat store backend.

Simple list/dict storage for session-only use.
Data is lost when the application exits.
"""

from .base import ChatStore
from .models import HistoryRecord, MemoryEntry


class InMemoryChatStore(ChatStore):
    """In-memory chat store (session-only).

    Search matches records containing every query term, case-insensitively,
    ranked by how often the terms occur.
    """

    def __init__(self) -> None:
        self._memories: dict[str, MemoryEntry] = {}
        self._history: list[HistoryRecord] = []

    async def connect(self) -> None:
        """Initialize store (no-op for in-memory)."""
        pass

    async def disconnect(self) -> None:
        """Close store (no-op for in-memory)."""
        pass

    async def set_memory(self, name: str, value: str) -> None:
        existing = self._memories.get(name)
        if existing is not None:
            self._memories[name] = existing.model_copy(update={"value": value})
        else:
            self._memories[name] = MemoryEntry(name=name, value=value)

    async def get_memory(self, name: str) -> str:
        entry = self._memories.get(name)
        return entry.value if entry else ""

    async def list_memories(self) -> list[MemoryEntry]:
        return list(self._memories.values())

    async def add_history(self, role: str, content: str) -> HistoryRecord:
        record = HistoryRecord(id=len(self._history) + 1, role=role, content=content)
        self._history.append(record)
        return record

    async def search_history(self, query: str, limit: int = 10) -> list[HistoryRecord]:
        terms = query.casefold().split()
        if not terms:
            return []

        scored = []
        for record in self._history:
            text = record.content.casefold()
            if all(term in text for term in terms):
                scored.append((sum(text.count(term) for term in terms), record))

        scored.sort(key=lambda item: -item[0])
        return [record for _, record in scored[:limit]]

    async def get_history_context(self, record_id: int, radius: int = 2) -> list[HistoryRecord]:
        low, high = record_id - radius, record_id + radius
        return [record for record in self._history if low <= record.id <= high]

    @property
    def backend_type(self) -> str:
        return "memory"
