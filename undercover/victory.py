"""Victory conditions."""

from typing import Optional

from undercover.rules import Role
from undercover.state import Player, Winner


def _names_with_role(players: list[Player], role: Role) -> tuple[str, ...]:
    # Eliminated members of the winning faction still win
    return tuple(p.name for p in players if p.role == role)


def evaluate(players: list[Player]) -> Optional[Winner]:
    """
    Return the Winner if the game is decided, else None.

    Undercovers win once they are not outnumbered by active civilians.
    Civilians win when no undercover and no Mr. White is left. Mr. White
    never wins by attrition; see mr_white_wins.
    """
    active = [p for p in players if not p.eliminated]
    civils = sum(1 for p in active if p.role == Role.CIVIL)
    undercovers = sum(1 for p in active if p.role == Role.UNDERCOVER)
    mr_whites = sum(1 for p in active if p.role == Role.MR_WHITE)

    if undercovers > 0 and undercovers >= civils:
        return Winner(role=Role.UNDERCOVER, winner_names=_names_with_role(players, Role.UNDERCOVER))
    if undercovers == 0 and mr_whites == 0:
        return Winner(role=Role.CIVIL, winner_names=_names_with_role(players, Role.CIVIL))
    return None


def mr_white_wins(players: list[Player]) -> Winner:
    """Winner after a correct Mr. White guess."""
    return Winner(role=Role.MR_WHITE, winner_names=_names_with_role(players, Role.MR_WHITE))
