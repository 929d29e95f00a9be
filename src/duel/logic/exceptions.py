"""Typed domain exceptions for match rule violations.

Every user-facing failure is a GameRuleError subclass carrying an
ErrorCode. They are raised by the pure lifecycle and validator functions
before anything is written, and converted to DuelResponse objects at the
service boundary. Storage failures are not GameRuleErrors.
"""

from typing import ClassVar

from duel.logic.enums import ErrorCode


class GameRuleError(Exception):
    """Base exception for match rule violations."""

    code: ClassVar[ErrorCode]


class GameNotFoundError(GameRuleError):
    code = ErrorCode.NOT_FOUND

    def __init__(self, game_id: int) -> None:
        self.game_id = game_id
        super().__init__(f"game {game_id} was not found")


class NotJoinableError(GameRuleError):
    """Game is active or finished, already filled, automated, or the joiner created it."""

    code = ErrorCode.NOT_JOINABLE

    def __init__(self, game_id: int) -> None:
        self.game_id = game_id
        super().__init__(f"game {game_id} is not joinable")


class NotYourTurnError(GameRuleError):
    code = ErrorCode.WRONG_TURN

    def __init__(self) -> None:
        super().__init__("it is not your turn")


class AlreadyFinishedError(GameRuleError):
    code = ErrorCode.ALREADY_FINISHED

    def __init__(self) -> None:
        super().__init__("game is already finished")


class MissingOpponentError(GameRuleError):
    """Move submitted while the game is still in the lobby."""

    code = ErrorCode.MISSING_OPPONENT

    def __init__(self) -> None:
        super().__init__("game is still waiting for an opponent")


class InvalidMoveError(GameRuleError):
    """Move text is malformed or the move is illegal in the current position."""

    code = ErrorCode.INVALID_MOVE

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"invalid move: {reason}")


class NotParticipantError(GameRuleError):
    code = ErrorCode.NOT_PARTICIPANT

    def __init__(self) -> None:
        super().__init__("you are not a participant in this game")


class LobbyLimitReachedError(GameRuleError):
    code = ErrorCode.LOBBY_LIMIT_REACHED

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"cannot create more than {limit} concurrent games per player")


class UnsupportedSettingsError(Exception):
    """Game settings contain values the engine cannot honour."""
