"""Discussion order: who speaks first and in which sequence."""

import dataclasses
import random
from typing import Optional

from undercover.rules import Role
from undercover.state import Player


def pick_starter(players: list[Player], rng: Optional[random.Random] = None) -> Player:
    """Pick the opening speaker uniformly among players who hold a word."""
    rng = rng or random.Random()
    candidates = [p for p in players if p.role != Role.MR_WHITE]
    if not candidates:
        raise ValueError("No player without the Mr. White role to start discussion")
    return rng.choice(candidates)


def order(players: list[Player], starter: Player, rng: Optional[random.Random] = None) -> list[Player]:
    """
    Assign turn positions: starter is 1, everyone else is shuffled into 2..N.
    Returned players keep their seat order.
    """
    rng = rng or random.Random()
    others = [p.id for p in players if p.id != starter.id]
    rng.shuffle(others)
    positions = {pid: pos for pos, pid in enumerate([starter.id] + others, start=1)}
    return [dataclasses.replace(p, turn_position=positions[p.id]) for p in players]


def pick_next_speaker(players: list[Player], rng: Optional[random.Random] = None) -> Optional[Player]:
    """Pick who reopens discussion after an elimination, among active players."""
    rng = rng or random.Random()
    active = [p for p in players if not p.eliminated]
    if not active:
        return None
    return rng.choice(active)


def discussion_order(players: list[Player], starting_player_id: Optional[str]) -> list[str]:
    """Active player ids by turn position, rotated so the current starter speaks first."""
    active = sorted((p for p in players if not p.eliminated), key=lambda p: p.turn_position)
    ids = [p.id for p in active]
    if starting_player_id in ids:
        idx = ids.index(starting_player_id)
        ids = ids[idx:] + ids[:idx]
    return ids
