"""SQLite-backed key-value store."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shared.db.connection import Database

logger = structlog.get_logger()


class SqliteStore:
    """SQLite implementation of the KeyValueStore protocol.

    put_many runs inside a single transaction, so a batch either lands
    completely or not at all.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    def get(self, key: str) -> str | None:
        row = self._db.connection.execute("SELECT data FROM records WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        return row[0]

    def put(self, key: str, value: str) -> None:
        self.put_many({key: value})

    def put_many(self, items: Mapping[str, str]) -> None:
        conn = self._db.connection
        try:
            conn.execute("BEGIN")
            conn.executemany(
                "INSERT INTO records (key, data) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET data = excluded.data",
                list(items.items()),
            )
            conn.execute("COMMIT")
        except Exception:
            conn.execute("ROLLBACK")
            logger.exception("write batch rolled back", keys=sorted(items))
            raise

    def list_keys(self, prefix: str = "") -> set[str]:
        # substr comparison keeps LIKE wildcards in the prefix literal
        rows = self._db.connection.execute(
            "SELECT key FROM records WHERE substr(key, 1, ?) = ?",
            (len(prefix), prefix),
        ).fetchall()
        return {row[0] for row in rows}
