"""SQLite chat store backend.

Provides persistent notes and history using a SQLite database file.
Uses aiosqlite for async access and an FTS5 table for history search.
"""

from datetime import datetime
from pathlib import Path

try:
    import aiosqlite
    AIOSQLITE_AVAILABLE = True
except ImportError:
    AIOSQLITE_AVAILABLE = False
    aiosqlite = None

from .base import ChatStore
from .models import HistoryRecord, MemoryEntry


def to_fts_query(query: str) -> str:
    """Quote each term so user text never trips FTS5 query syntax.

    Terms are AND-ed, matching the implicit operator of FTS5.
    """
    terms = query.split()
    return " ".join('"' + term.replace('"', '""') + '"' for term in terms)


class SQLiteChatStore(ChatStore):
    """SQLite-backed chat store.

    Stores notes and history in a SQLite database file.
    Supports persistent storage across sessions.
    """

    def __init__(self, path: str | Path = "./memory.db"):
        if not AIOSQLITE_AVAILABLE:
            raise ImportError(
                "SQLite chat store requires aiosqlite. "
                "Install with: pip install aiosqlite"
            )

        self._db_path = Path(path)
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Initialize database connection and schema."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        await self._create_schema()

    async def _create_schema(self) -> None:
        """Create tables, the history search index and its sync trigger."""
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS memories (
                name TEXT UNIQUE NOT NULL,
                value TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        """)

        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS history (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                role TEXT NOT NULL,
                content TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        """)

        await self._connection.execute("""
            CREATE VIRTUAL TABLE IF NOT EXISTS history_fts USING fts5(
                content,
                content='history',
                content_rowid='id',
                tokenize='porter unicode61 remove_diacritics 2'
            )
        """)

        await self._connection.execute("""
            CREATE TRIGGER IF NOT EXISTS history_ai AFTER INSERT ON history BEGIN
                INSERT INTO history_fts(rowid, content) VALUES (new.id, new.content);
            END
        """)

        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def set_memory(self, name: str, value: str) -> None:
        await self._connection.execute("""
            INSERT INTO memories (name, value, created_at) VALUES (?, ?, ?)
            ON CONFLICT(name) DO UPDATE SET value = excluded.value
        """, (name, value, datetime.utcnow().isoformat()))
        await self._connection.commit()

    async def get_memory(self, name: str) -> str:
        async with self._connection.execute(
            "SELECT value FROM memories WHERE name = ?",
            (name,)
        ) as cursor:
            row = await cursor.fetchone()
        return row[0] if row else ""

    async def list_memories(self) -> list[MemoryEntry]:
        async with self._connection.execute(
            "SELECT name, value, created_at FROM memories ORDER BY created_at, rowid"
        ) as cursor:
            rows = await cursor.fetchall()

        return [
            MemoryEntry(name=name, value=value, created_at=datetime.fromisoformat(created_at))
            for name, value, created_at in rows
        ]

    async def add_history(self, role: str, content: str) -> HistoryRecord:
        created_at = datetime.utcnow()
        cursor = await self._connection.execute(
            "INSERT INTO history (role, content, created_at) VALUES (?, ?, ?)",
            (role, content, created_at.isoformat())
        )
        record_id = cursor.lastrowid
        await cursor.close()
        await self._connection.commit()
        return HistoryRecord(id=record_id, role=role, content=content, created_at=created_at)

    async def search_history(self, query: str, limit: int = 10) -> list[HistoryRecord]:
        fts_query = to_fts_query(query)
        if not fts_query:
            return []

        async with self._connection.execute(
            """
            SELECT h.id, h.role, h.content, h.created_at
            FROM history_fts f
            JOIN history h ON h.id = f.rowid
            WHERE history_fts MATCH ?
            ORDER BY rank
            LIMIT ?
            """,
            (fts_query, limit)
        ) as cursor:
            rows = await cursor.fetchall()

        return [self._row_to_record(row) for row in rows]

    async def get_history_context(self, record_id: int, radius: int = 2) -> list[HistoryRecord]:
        async with self._connection.execute(
            """
            SELECT id, role, content, created_at FROM history
            WHERE id BETWEEN ? AND ?
            ORDER BY id
            """,
            (record_id - radius, record_id + radius)
        ) as cursor:
            rows = await cursor.fetchall()

        return [self._row_to_record(row) for row in rows]

    @staticmethod
    def _row_to_record(row: tuple) -> HistoryRecord:
        record_id, role, content, created_at = row
        return HistoryRecord(
            id=record_id,
            role=role,
            content=content,
            created_at=datetime.fromisoformat(created_at),
        )

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
