"""Game record persistence on top of a key-value store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shared.dal.models import GameRecord, GameStatus

if TYPE_CHECKING:
    from shared.storage import KeyValueStore, WriteBatch

GAME_KEY_PREFIX = "game:"
NEXT_GAME_ID_KEY = "meta:next_game_id"
FIRST_GAME_ID = 1


def game_key(game_id: int) -> str:
    return f"{GAME_KEY_PREFIX}{game_id}"


class GameRepository:
    """Reads games directly from the store; writes are staged on a WriteBatch."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def get_game(self, game_id: int) -> GameRecord | None:
        raw = self._store.get(game_key(game_id))
        if raw is None:
            return None
        return GameRecord.model_validate_json(raw)

    def list_games(self) -> list[GameRecord]:
        """Return every stored game, in no particular order."""
        games = []
        for key in self._store.list_keys(GAME_KEY_PREFIX):
            raw = self._store.get(key)
            if raw is not None:
                games.append(GameRecord.model_validate_json(raw))
        return games

    def count_open_games(self, creator: str) -> int:
        """Count games created by creator that have not finished yet."""
        return sum(1 for game in self.list_games() if game.white == creator and game.status != GameStatus.FINISHED)

    def next_game_id(self) -> int:
        raw = self._store.get(NEXT_GAME_ID_KEY)
        if raw is None:
            return FIRST_GAME_ID
        return int(raw)

    def stage_game(self, batch: WriteBatch, game: GameRecord) -> None:
        batch.put(game_key(game.game_id), game.model_dump_json())

    def stage_next_game_id(self, batch: WriteBatch, next_id: int) -> None:
        batch.put(NEXT_GAME_ID_KEY, str(next_id))
