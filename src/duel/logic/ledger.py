"""
Rating ladder updates.

Each finished game produces at most two ledger entries, one per seat with a
resolvable identity; the automated seat has none and is skipped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from duel.logic.enums import Outcome
from shared.dal.models import PlayerStats, Seat

if TYPE_CHECKING:
    from duel.logic.settings import GameSettings
    from duel.logic.types import MatchResult
    from shared.dal.models import GameRecord


def record(
    stats: PlayerStats | None,
    player_id: str,
    outcome: Outcome,
    settings: GameSettings,
) -> PlayerStats:
    """Return the player's ladder record after one more finished game."""
    if stats is None:
        stats = PlayerStats(player_id=player_id)

    if outcome == Outcome.WIN:
        return stats.model_copy(
            update={
                "wins": stats.wins + 1,
                "games_played": stats.games_played + 1,
                "rating": stats.rating + settings.win_rating_delta,
            }
        )
    if outcome == Outcome.LOSS:
        return stats.model_copy(
            update={
                "losses": stats.losses + 1,
                "games_played": stats.games_played + 1,
                "rating": stats.rating + settings.loss_rating_delta,
            }
        )
    return stats.model_copy(
        update={
            "draws": stats.draws + 1,
            "games_played": stats.games_played + 1,
            "rating": stats.rating + settings.draw_rating_delta,
        }
    )


def participant_outcomes(game: GameRecord, result: MatchResult) -> list[tuple[str, Outcome]]:
    """Pair every seated identity with its outcome, white first."""
    outcomes: list[tuple[str, Outcome]] = []
    for seat in (Seat.WHITE, Seat.BLACK):
        player_id = game.player_for(seat)
        if player_id is None:
            continue
        if result.is_draw:
            outcome = Outcome.DRAW
        elif result.winner == seat:
            outcome = Outcome.WIN
        else:
            outcome = Outcome.LOSS
        outcomes.append((player_id, outcome))
    return outcomes
