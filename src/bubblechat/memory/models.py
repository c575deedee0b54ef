"""Data models for the chat store.

These models define the structure of remembered notes and history rows,
independent of the storage backend used.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class MemoryEntry(BaseModel):
    """A named note kept across sessions."""

    name: str = Field(description="Unique key of the note")
    value: str = Field(description="Stored text")
    created_at: datetime = Field(default_factory=datetime.utcnow)


class HistoryRecord(BaseModel):
    """One persisted conversation turn."""

    id: int = Field(description="Sequential row identifier")
    role: str = Field(description="'user' or 'assistant'")
    content: str = Field(description="Text of the turn")
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def to_line(self, limit: int = 200) -> str:
        """Single-line summary for listings."""
        text = " ".join(self.content.split())
        if len(text) > limit:
            text = text[:limit] + "..."
        return f"#{self.id} [{self.role}] {text}"
