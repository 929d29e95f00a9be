"""
Match state machine: lobby -> active -> finished.

Every function takes an immutable GameRecord snapshot and returns the next
one; nothing here touches storage. Intent checks (status, seat, turn) run
before board legality, and all of them run before a new snapshot is built,
so a rejected operation never yields a modified game.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import structlog

from duel.logic.exceptions import (
    AlreadyFinishedError,
    InvalidMoveError,
    LobbyLimitReachedError,
    MissingOpponentError,
    NotJoinableError,
    NotParticipantError,
    NotYourTurnError,
)
from duel.logic.opponent import choose_move
from duel.logic.types import MatchResult
from duel.logic.validator import apply_move
from shared.dal.models import GameRecord, GameStatus, MoveRecord, Seat

if TYPE_CHECKING:
    from datetime import datetime

    from duel.logic.settings import GameSettings
    from duel.logic.validator import MoveComputation

logger = structlog.get_logger()


class Transition(NamedTuple):
    """New game snapshot plus the terminal result it reached, if any."""

    game: GameRecord
    result: MatchResult | None = None


def resolve_seat(game: GameRecord, caller: str) -> Seat:
    """Map a caller to the seat they occupy. Raises NotParticipantError otherwise."""
    if caller == game.white:
        return Seat.WHITE
    if game.black is not None and caller == game.black:
        return Seat.BLACK
    raise NotParticipantError


def create_game(  # noqa: PLR0913
    game_id: int,
    creator: str,
    open_games: int,
    *,
    now: datetime,
    settings: GameSettings,
    metadata: str | None = None,
    ai_black: bool = False,
) -> GameRecord:
    """
    Build a new game owned by creator.

    open_games is the number of unfinished games creator already created.
    Games against the built-in opponent start active; others wait in the lobby.
    """
    if open_games >= settings.max_open_games:
        raise LobbyLimitReachedError(settings.max_open_games)

    return GameRecord(
        game_id=game_id,
        white=creator,
        black=None,
        ai_black=ai_black,
        board_fen=settings.starting_fen,
        turn=Seat.WHITE,
        status=GameStatus.ACTIVE if ai_black else GameStatus.LOBBY,
        created_at=now,
        updated_at=now,
        metadata=metadata,
    )


def join_game(game: GameRecord, joiner: str, *, now: datetime) -> GameRecord:
    """Seat joiner as black and start the game."""
    if (
        game.ai_black
        or game.status != GameStatus.LOBBY
        or game.black is not None
        or joiner == game.white
    ):
        raise NotJoinableError(game.game_id)

    return game.model_copy(update={"black": joiner, "status": GameStatus.ACTIVE, "updated_at": now})


def finish_game(game: GameRecord, result: MatchResult, *, now: datetime) -> GameRecord:
    return game.model_copy(update={"status": GameStatus.FINISHED, "winner": result.winner, "updated_at": now})


def _record_move(game: GameRecord, seat: Seat, computation: MoveComputation, now: datetime) -> Transition:
    """Append an accepted move, flip the turn, and finish the game if it ended."""
    move = MoveRecord(uci=computation.uci, san=computation.san, played_by=seat, played_at=now)
    game = game.model_copy(
        update={
            "board_fen": computation.fen,
            "turn": seat.other(),
            "moves": (*game.moves, move),
            "updated_at": now,
        }
    )
    if computation.result is not None:
        game = finish_game(game, computation.result, now=now)
    return Transition(game, computation.result)


def _is_opponent_turn(game: GameRecord) -> bool:
    return game.ai_black and game.status == GameStatus.ACTIVE and game.turn == Seat.BLACK


def _play_opponent_reply(game: GameRecord, *, now: datetime) -> Transition:
    """Let the built-in opponent answer. An unusable reply is skipped."""
    reply = choose_move(game.board_fen)
    if reply is None:
        logger.warning("opponent has no move", game_id=game.game_id, fen=game.board_fen)
        return Transition(game)
    try:
        computation = apply_move(game.board_fen, reply)
    except InvalidMoveError as exc:
        logger.warning("opponent reply rejected", game_id=game.game_id, uci=reply, reason=exc.reason)
        return Transition(game)
    return _record_move(game, Seat.BLACK, computation, now)


def submit_move(  # noqa: PLR0913
    game: GameRecord,
    caller: str,
    move_text: str,
    promotion: str | None = None,
    *,
    now: datetime,
) -> Transition:
    """
    Play caller's move and, in games against the built-in opponent, its reply.

    Checks run in a fixed order: finished, lobby, participant, turn, legality.
    """
    if game.status == GameStatus.FINISHED:
        raise AlreadyFinishedError
    if game.status == GameStatus.LOBBY:
        raise MissingOpponentError

    seat = resolve_seat(game, caller)
    if seat != game.turn:
        raise NotYourTurnError

    transition = _record_move(game, seat, apply_move(game.board_fen, move_text, promotion), now)

    if _is_opponent_turn(transition.game):
        transition = _play_opponent_reply(transition.game, now=now)
    return transition


def resign_game(game: GameRecord, caller: str, *, now: datetime) -> Transition:
    """Finish the game in favour of the seat opposite caller, whatever the board says."""
    if game.status == GameStatus.FINISHED:
        raise AlreadyFinishedError

    seat = resolve_seat(game, caller)
    result = MatchResult(winner=seat.other())
    return Transition(finish_game(game, result, now=now), result)
