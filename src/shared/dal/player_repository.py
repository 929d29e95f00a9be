"""Player ladder persistence on top of a key-value store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shared.dal.models import PlayerStats

if TYPE_CHECKING:
    from shared.storage import KeyValueStore, WriteBatch

PLAYER_KEY_PREFIX = "player:"


def player_key(player_id: str) -> str:
    return f"{PLAYER_KEY_PREFIX}{player_id}"


class PlayerStatsRepository:
    """Reads ladder records from the store; writes are staged on a WriteBatch."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def get_stats(self, player_id: str) -> PlayerStats | None:
        raw = self._store.get(player_key(player_id))
        if raw is None:
            return None
        return PlayerStats.model_validate_json(raw)

    def list_stats(self) -> list[PlayerStats]:
        """Return every ladder record, in no particular order."""
        players = []
        for key in self._store.list_keys(PLAYER_KEY_PREFIX):
            raw = self._store.get(key)
            if raw is not None:
                players.append(PlayerStats.model_validate_json(raw))
        return players

    def stage_stats(self, batch: WriteBatch, stats: PlayerStats) -> None:
        batch.put(player_key(stats.player_id), stats.model_dump_json())
