"""
String enum definitions for match outcomes and error reporting.
"""

from enum import StrEnum


class Outcome(StrEnum):
    """Result of a finished game from one participant's point of view."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


class ErrorCode(StrEnum):
    """Machine-readable failure kinds returned to callers."""

    NOT_FOUND = "not_found"
    NOT_JOINABLE = "not_joinable"
    WRONG_TURN = "wrong_turn"
    ALREADY_FINISHED = "already_finished"
    MISSING_OPPONENT = "missing_opponent"
    INVALID_MOVE = "invalid_move"
    NOT_PARTICIPANT = "not_participant"
    LOBBY_LIMIT_REACHED = "lobby_limit_reached"
