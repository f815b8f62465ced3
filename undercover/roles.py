"""Role dealing and roster construction."""

import random
from typing import Optional

from undercover.errors import InvalidSetup
from undercover.rules import (
    MAX_MR_WHITES,
    MAX_PLAYERS,
    MIN_PLAYERS,
    MR_WHITE_MIN_PLAYERS,
    PLAYER_COLORS,
    Role,
)
from undercover.state import GameSettings, Player, WordPair


def validate_setup(names: list[str], settings: GameSettings) -> None:
    """Raise InvalidSetup if the names and role counts cannot start a game."""
    counts = (settings.civils, settings.undercovers, settings.mr_whites)
    if any(c < 0 for c in counts):
        raise InvalidSetup("Role counts must not be negative")
    if settings.total != len(names):
        raise InvalidSetup(
            f"Role counts add up to {settings.total} but {len(names)} players were given"
        )
    if len(names) < MIN_PLAYERS:
        raise InvalidSetup(f"At least {MIN_PLAYERS} players required")
    if len(names) > MAX_PLAYERS:
        raise InvalidSetup(f"At most {MAX_PLAYERS} players allowed")
    if settings.civils < 1:
        raise InvalidSetup("At least one civilian is required")
    if settings.mr_whites > MAX_MR_WHITES:
        raise InvalidSetup(f"At most {MAX_MR_WHITES} Mr. White allowed")
    if settings.mr_whites and len(names) < MR_WHITE_MIN_PLAYERS:
        raise InvalidSetup(f"Mr. White needs at least {MR_WHITE_MIN_PLAYERS} players")


def recommend_settings(num_players: int) -> GameSettings:
    """Default role split for a table of num_players: about a quarter undercovers, Mr. White from 5."""
    undercovers = max(1, num_players // 4)
    mr_whites = 1 if num_players >= MR_WHITE_MIN_PLAYERS else 0
    civils = max(2, num_players - undercovers - mr_whites)
    if civils + undercovers + mr_whites != num_players:
        undercovers = num_players - civils - mr_whites
    return GameSettings(civils=civils, undercovers=undercovers, mr_whites=mr_whites)


def assign_roles(settings: GameSettings, rng: Optional[random.Random] = None) -> list[Role]:
    """Return exactly the requested roles in uniformly shuffled order."""
    rng = rng or random.Random()
    roles: list[Role] = []
    roles.extend([Role.CIVIL] * settings.civils)
    roles.extend([Role.UNDERCOVER] * settings.undercovers)
    roles.extend([Role.MR_WHITE] * settings.mr_whites)
    rng.shuffle(roles)
    return roles


def word_for(role: Role, pair: WordPair) -> str:
    if role == Role.CIVIL:
        return pair.civil
    if role == Role.UNDERCOVER:
        return pair.undercover
    return ""


def build_roster(names: list[str], roles: list[Role], pair: WordPair) -> list[Player]:
    """Seat players in name order with their dealt role and word. Turn positions are set later."""
    if len(names) != len(roles):
        raise ValueError("names and roles must have same length")
    return [
        Player(
            id=f"player_{i}",
            name=name,
            role=role,
            word=word_for(role, pair),
            color=PLAYER_COLORS[i % len(PLAYER_COLORS)],
        )
        for i, (name, role) in enumerate(zip(names, roles))
    ]
