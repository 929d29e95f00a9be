"""Centralized match rules: starting position, lobby ceiling and rating deltas."""

from __future__ import annotations

import chess
from pydantic import BaseModel, ConfigDict

from duel.logic.exceptions import UnsupportedSettingsError

DEFAULT_FEN = chess.STARTING_FEN
MAX_OPEN_GAMES_PER_PLAYER = 64


class GameSettings(BaseModel):
    """
    Configuration for match rules and ladder scoring.

    All fields default to the production values.
    """

    model_config = ConfigDict(frozen=True)

    # --- Game Structure ---
    starting_fen: str = DEFAULT_FEN
    max_open_games: int = MAX_OPEN_GAMES_PER_PLAYER

    # --- Ladder Scoring ---
    win_rating_delta: int = 10
    loss_rating_delta: int = -5
    draw_rating_delta: int = 1


def validate_settings(settings: GameSettings) -> None:
    """Reject settings the engine cannot play with.

    Raises UnsupportedSettingsError listing every problem found.
    """
    errors: list[str] = []

    if settings.max_open_games < 1:
        errors.append(f"max_open_games={settings.max_open_games} must be at least 1")

    try:
        board = chess.Board(settings.starting_fen)
    except ValueError as exc:
        errors.append(f"starting_fen is not a valid FEN: {exc}")
    else:
        if not board.is_valid():
            errors.append(f"starting_fen is not a legal position: {board.status()!r}")
        elif board.is_checkmate() or board.is_stalemate():
            errors.append("starting_fen must not be a finished position")

    if errors:
        raise UnsupportedSettingsError("; ".join(errors))
