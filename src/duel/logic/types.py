"""
Pydantic models that cross component boundaries.

Contains the match result handed from the lifecycle to the ledger, the
public game projection, and the response envelope returned by every
operation.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel

from duel.logic.enums import ErrorCode  # noqa: TC001
from duel.logic.exceptions import GameRuleError  # noqa: TC001
from shared.dal.models import GameRecord, GameStatus, MoveRecord, Seat  # noqa: TC001


class MatchResult(BaseModel, frozen=True):
    """Terminal result of a game: a winning seat, or None for a draw."""

    winner: Seat | None = None

    @property
    def is_draw(self) -> bool:
        return self.winner is None


DRAW = MatchResult()


class GameView(BaseModel):
    """Public view of a game."""

    game_id: int
    white: str
    black: str | None
    ai_black: bool
    board_fen: str
    moves: list[MoveRecord]
    turn: Seat
    status: GameStatus
    winner: Seat | None
    created_at: datetime
    updated_at: datetime
    metadata: str | None

    @classmethod
    def from_record(cls, game: GameRecord) -> GameView:
        return cls(
            game_id=game.game_id,
            white=game.white,
            black=game.black,
            ai_black=game.ai_black,
            board_fen=game.board_fen,
            moves=list(game.moves),
            turn=game.turn,
            status=game.status,
            winner=game.winner,
            created_at=game.created_at,
            updated_at=game.updated_at,
            metadata=game.metadata,
        )


class DuelResponse(BaseModel):
    """Public information returned after each operation."""

    success: bool
    message: str
    game: GameView | None = None
    error: ErrorCode | None = None

    @classmethod
    def ok(cls, message: str, game: GameRecord | None = None) -> DuelResponse:
        return cls(
            success=True,
            message=message,
            game=GameView.from_record(game) if game is not None else None,
        )

    @classmethod
    def from_error(cls, err: GameRuleError) -> DuelResponse:
        return cls(success=False, message=str(err), error=err.code)
