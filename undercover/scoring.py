"""Cumulative score table."""

from typing import Union

from undercover.rules import WIN_BONUS, Role
from undercover.state import Player


def apply_winner(
    scores: dict[str, int],
    players: list[Player],
    winning_role: Union[Role, str],
) -> dict[str, int]:
    """
    Return a new score table with the win bonus added for every player of
    the winning role. Every roster name ends up in the table (missing ones
    start at 0); nobody loses points. Call once per finished game.
    """
    new_scores = dict(scores)
    bonus = WIN_BONUS.get(winning_role, 0)
    for p in players:
        new_scores.setdefault(p.name, 0)
        if p.role == winning_role:
            new_scores[p.name] += bonus
    return new_scores


def leaderboard(scores: dict[str, int]) -> list[tuple[str, int]]:
    """Scores sorted best first, ties by name."""
    return sorted(scores.items(), key=lambda item: (-item[1], item[0]))


def suggested_names(scores: dict[str, int], default: list[str]) -> list[str]:
    """Pre-fill the setup roster with known players when there are enough of them."""
    names = [name for name, _ in leaderboard(scores)]
    return names if len(names) >= 3 else list(default)
