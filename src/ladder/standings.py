"""Read-only views over stored games and the rating ladder."""

from __future__ import annotations

from typing import TYPE_CHECKING

from duel.logic.types import GameView

if TYPE_CHECKING:
    from shared.dal import GameRepository, PlayerStatsRepository
    from shared.dal.models import PlayerStats

DEFAULT_LEADERBOARD_LIMIT = 10


def list_games(games: GameRepository) -> list[GameView]:
    """Every stored game, ascending by id."""
    return [GameView.from_record(game) for game in sorted(games.list_games(), key=lambda g: g.game_id)]


def top_players(players: PlayerStatsRepository, limit: int = DEFAULT_LEADERBOARD_LIMIT) -> list[PlayerStats]:
    """
    Highest-rated players first, at most limit entries.

    Equal ratings are ordered by ascending player id so the listing is stable.
    """
    if limit <= 0:
        return []
    ranked = sorted(players.list_stats(), key=lambda p: (-p.rating, p.player_id))
    return ranked[:limit]
