"""Persistence models for the data access layer."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class Seat(StrEnum):
    """One of the two playing roles; white always moves first."""

    WHITE = "white"
    BLACK = "black"

    def other(self) -> Seat:
        return Seat.BLACK if self is Seat.WHITE else Seat.WHITE


class GameStatus(StrEnum):
    LOBBY = "lobby"
    ACTIVE = "active"
    FINISHED = "finished"


class MoveRecord(BaseModel, frozen=True):
    """A single accepted ply."""

    uci: str
    san: str | None = None  # simplified label, see duel.logic.notation
    played_by: Seat
    played_at: datetime


class GameRecord(BaseModel, frozen=True):
    """Full game snapshot persisted under game:<id>."""

    game_id: int
    white: str
    black: str | None = None  # None while in lobby, and forever when ai_black
    ai_black: bool = False
    board_fen: str
    moves: tuple[MoveRecord, ...] = ()
    turn: Seat = Seat.WHITE
    status: GameStatus
    winner: Seat | None = None  # only for decisive finished games
    created_at: datetime
    updated_at: datetime
    metadata: str | None = None

    def player_for(self, seat: Seat) -> str | None:
        """Identity sitting at seat, or None for an empty or automated seat."""
        return self.white if seat is Seat.WHITE else self.black


class PlayerStats(BaseModel, frozen=True):
    """Ladder record for one player identity, persisted under player:<id>."""

    player_id: str
    wins: int = 0
    losses: int = 0
    draws: int = 0
    games_played: int = 0
    rating: int = 0
