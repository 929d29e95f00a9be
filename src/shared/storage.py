"""Key-value storage abstraction for game and ladder records.

Records are stored as JSON text under string keys. Stores must be strongly
consistent for a single key within one operation; no multi-key
transactional guarantee is required beyond what put_many offers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import structlog

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = structlog.get_logger()


class KeyValueStore(Protocol):
    """Protocol for persisting records by key."""

    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str) -> None: ...

    def put_many(self, items: Mapping[str, str]) -> None: ...

    def list_keys(self, prefix: str = "") -> set[str]: ...


class MemoryStore:
    """Dict-backed store for tests and throwaway servers."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def put_many(self, items: Mapping[str, str]) -> None:
        self._data.update(items)

    def list_keys(self, prefix: str = "") -> set[str]:
        return {key for key in self._data if key.startswith(prefix)}

    def snapshot(self) -> dict[str, str]:
        """Return a copy of every stored record."""
        return dict(self._data)


class WriteBatch:
    """Collects writes for a single operation and commits them together.

    Nothing reaches the store until commit(). A later put for the same key
    replaces the earlier one.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._pending: dict[str, str] = {}

    def put(self, key: str, value: str) -> None:
        self._pending[key] = value

    def commit(self) -> None:
        if not self._pending:
            return
        self._store.put_many(self._pending)
        logger.debug("committed write batch", keys=sorted(self._pending))
        self._pending = {}
