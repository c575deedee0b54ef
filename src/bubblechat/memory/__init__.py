"""Chat store module for bubblechat.

Provides note ("memory") storage and searchable conversation history.
"""

from .base import ChatStore
from .factory import create_chat_store
from .models import HistoryRecord, MemoryEntry

__all__ = [
    "ChatStore",
    "HistoryRecord",
    "MemoryEntry",
    "create_chat_store",
]
