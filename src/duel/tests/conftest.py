from datetime import UTC, datetime, timedelta

import pytest

from duel.logic.service import DuelService
from duel.logic.settings import GameSettings
from shared.dal.models import GameRecord, GameStatus, Seat
from shared.storage import MemoryStore

FIXED_NOW = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

# 1. f3 e5 2. g4 Qh4#
FOOLS_MATE = ("f2f3", "e7e5", "g2g4", "d8h4")

# white to move; Qb1-b6 leaves the a8 king with no legal move
STALEMATE_IN_ONE_FEN = "k7/8/2K5/8/8/8/8/1Q6 w - - 0 1"
STALEMATE_MOVE = "b1b6"


class TickingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = FIXED_NOW) -> None:
        self._current = start

    def __call__(self) -> datetime:
        now = self._current
        self._current += timedelta(seconds=1)
        return now


def create_game_record(  # noqa: PLR0913
    *,
    game_id: int = 1,
    white: str = "alice",
    black: str | None = "bob",
    ai_black: bool = False,
    board_fen: str | None = None,
    turn: Seat = Seat.WHITE,
    status: GameStatus = GameStatus.ACTIVE,
    winner: Seat | None = None,
) -> GameRecord:
    """Create a GameRecord with sensible defaults for testing."""
    return GameRecord(
        game_id=game_id,
        white=white,
        black=black,
        ai_black=ai_black,
        board_fen=board_fen if board_fen is not None else GameSettings().starting_fen,
        turn=turn,
        status=status,
        winner=winner,
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )


@pytest.fixture
def settings():
    return GameSettings()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def service(store):
    return DuelService(store, clock=TickingClock())


@pytest.fixture
def active_game_id(service):
    """Id of an active alice (white) vs bob (black) game."""
    game_id = service.create_game("alice").game.game_id
    service.join_game("bob", game_id)
    return game_id
