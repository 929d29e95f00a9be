"""SQLite database layer: connection management and the key-value store."""

from shared.db.connection import Database
from shared.db.store import SqliteStore

__all__ = [
    "Database",
    "SqliteStore",
]
