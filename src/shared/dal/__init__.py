"""Data access layer: repositories and shared persistence models."""

from shared.dal.game_repository import GameRepository
from shared.dal.models import GameRecord, GameStatus, MoveRecord, PlayerStats, Seat
from shared.dal.player_repository import PlayerStatsRepository

__all__ = [
    "GameRecord",
    "GameRepository",
    "GameStatus",
    "MoveRecord",
    "PlayerStats",
    "PlayerStatsRepository",
    "Seat",
]
