"""
DuelService: the operation surface over the match state machine.

Loads snapshots through the repositories, runs the pure lifecycle
functions, settles finished games on the ladder, and commits every write of
an operation in a single batch. Rule violations come back as unsuccessful
DuelResponse objects; storage failures propagate to the caller untouched.
"""

from __future__ import annotations

import contextlib
import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog

from duel.logic import ledger, lifecycle
from duel.logic.exceptions import GameNotFoundError, GameRuleError
from duel.logic.settings import GameSettings, validate_settings
from duel.logic.types import DuelResponse, GameView
from shared.dal import GameRepository, PlayerStatsRepository
from shared.storage import WriteBatch

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from duel.logic.lifecycle import Transition
    from shared.dal.models import GameRecord
    from shared.storage import KeyValueStore

logger = structlog.get_logger()


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class DuelService:
    """
    Runs create / join / submit-move / resign against a key-value store.

    Operations are serialized by an internal lock, which provides the
    single-writer-per-game guarantee within one process.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        settings: GameSettings | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if settings is None:
            settings = GameSettings()
        validate_settings(settings)

        self._store = store
        self._settings = settings
        self._clock = clock
        self._games = GameRepository(store)
        self._players = PlayerStatsRepository(store)
        self._lock = threading.Lock()

    @property
    def games(self) -> GameRepository:
        return self._games

    @property
    def players(self) -> PlayerStatsRepository:
        return self._players

    def get_game(self, game_id: int) -> GameView | None:
        game = self._games.get_game(game_id)
        return GameView.from_record(game) if game is not None else None

    def create_game(self, caller: str, *, metadata: str | None = None, play_vs_ai: bool = False) -> DuelResponse:
        with self._operation("create_game", player_id=caller):
            try:
                game_id = self._games.next_game_id()
                game = lifecycle.create_game(
                    game_id,
                    caller,
                    self._games.count_open_games(caller),
                    now=self._clock(),
                    settings=self._settings,
                    metadata=metadata,
                    ai_black=play_vs_ai,
                )
            except GameRuleError as err:
                return self._rejected(err)

            batch = WriteBatch(self._store)
            self._games.stage_game(batch, game)
            self._games.stage_next_game_id(batch, game_id + 1)
            batch.commit()

            logger.info("game created", game_id=game_id, ai_black=play_vs_ai, status=game.status)
            return DuelResponse.ok("Game lobby created", game)

    def join_game(self, caller: str, game_id: int) -> DuelResponse:
        with self._operation("join_game", player_id=caller, game_id=game_id):
            try:
                game = lifecycle.join_game(self._load(game_id), caller, now=self._clock())
            except GameRuleError as err:
                return self._rejected(err)

            batch = WriteBatch(self._store)
            self._games.stage_game(batch, game)
            batch.commit()

            logger.info("game joined")
            return DuelResponse.ok("Joined game successfully", game)

    def submit_move(
        self,
        caller: str,
        game_id: int,
        uci: str,
        promotion: str | None = None,
    ) -> DuelResponse:
        with self._operation("submit_move", player_id=caller, game_id=game_id, uci=uci):
            try:
                transition = lifecycle.submit_move(self._load(game_id), caller, uci, promotion, now=self._clock())
            except GameRuleError as err:
                return self._rejected(err)

            self._commit(transition)
            logger.info(
                "move accepted",
                plies=len(transition.game.moves),
                status=transition.game.status,
                turn=transition.game.turn,
            )
            return DuelResponse.ok("Move accepted", transition.game)

    def resign(self, caller: str, game_id: int) -> DuelResponse:
        with self._operation("resign", player_id=caller, game_id=game_id):
            try:
                transition = lifecycle.resign_game(self._load(game_id), caller, now=self._clock())
            except GameRuleError as err:
                return self._rejected(err)

            self._commit(transition)
            logger.info("player resigned", winner=transition.game.winner)
            return DuelResponse.ok("Resigned successfully", transition.game)

    @contextlib.contextmanager
    def _operation(self, name: str, **context: object) -> Iterator[None]:
        """Hold the service lock and bind log context for one operation."""
        with self._lock, structlog.contextvars.bound_contextvars(operation=name, **context):
            yield

    def _load(self, game_id: int) -> GameRecord:
        game = self._games.get_game(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    def _commit(self, transition: Transition) -> None:
        """Stage the game and, for a finished game, both ladder entries; then write once."""
        batch = WriteBatch(self._store)
        self._games.stage_game(batch, transition.game)

        if transition.result is not None:
            for player_id, outcome in ledger.participant_outcomes(transition.game, transition.result):
                stats = ledger.record(self._players.get_stats(player_id), player_id, outcome, self._settings)
                self._players.stage_stats(batch, stats)
                logger.info("ladder updated", ladder_player=player_id, outcome=outcome, rating=stats.rating)

        batch.commit()

    @staticmethod
    def _rejected(err: GameRuleError) -> DuelResponse:
        logger.info("operation rejected", error=err.code, reason=str(err))
        return DuelResponse.from_error(err)
