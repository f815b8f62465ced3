"""Tests for victory evaluation and the score table."""

import dataclasses

from undercover.roles import build_roster
from undercover.rules import TIE, Role
from undercover.scoring import apply_winner, leaderboard, suggested_names
from undercover.state import WordPair
from undercover.victory import evaluate, mr_white_wins

PAIR = WordPair(civil="Honey", undercover="Jam")


def _roster(roles, eliminated=()):
    players = build_roster([f"P{i}" for i in range(len(roles))], roles, PAIR)
    return [dataclasses.replace(p, eliminated=p.id in eliminated) for p in players]


def test_no_winner_at_start():
    assert evaluate(_roster([Role.CIVIL] * 3 + [Role.UNDERCOVER])) is None


def test_undercovers_win_when_equal_to_civils():
    roster = _roster([Role.CIVIL] * 3 + [Role.UNDERCOVER] * 2, eliminated={"player_0"})
    winner = evaluate(roster)
    assert winner.role == Role.UNDERCOVER
    assert winner.winner_names == ("P3", "P4")


def test_eliminated_undercovers_still_listed_as_winners():
    roles = [Role.CIVIL, Role.CIVIL, Role.CIVIL, Role.UNDERCOVER, Role.UNDERCOVER]
    roster = _roster(roles, eliminated={"player_0", "player_1", "player_3"})
    winner = evaluate(roster)
    assert winner.role == Role.UNDERCOVER
    assert winner.winner_names == ("P3", "P4")


def test_civilians_win_when_no_undercover_or_mr_white_left():
    roster = _roster([Role.CIVIL] * 3 + [Role.UNDERCOVER], eliminated={"player_3"})
    winner = evaluate(roster)
    assert winner.role == Role.CIVIL
    assert winner.winner_names == ("P0", "P1", "P2")


def test_active_mr_white_blocks_civilian_win():
    roster = _roster([Role.CIVIL] * 3 + [Role.UNDERCOVER, Role.MR_WHITE], eliminated={"player_3"})
    assert evaluate(roster) is None


def test_mr_white_never_wins_by_attrition():
    roster = _roster([Role.CIVIL] * 3 + [Role.MR_WHITE], eliminated={"player_0", "player_1"})
    assert evaluate(roster) is None
    assert mr_white_wins(roster).winner_names == ("P3",)


def test_apply_winner_civil_bonus():
    roster = _roster([Role.CIVIL, Role.CIVIL, Role.UNDERCOVER, Role.MR_WHITE])
    scores = {"P0": 5, "P2": 30, "Someone": 7}
    new_scores = apply_winner(scores, roster, Role.CIVIL)
    assert new_scores == {"P0": 7, "P1": 2, "P2": 30, "P3": 0, "Someone": 7}
    assert scores == {"P0": 5, "P2": 30, "Someone": 7}


def test_apply_winner_undercover_and_mr_white_bonus():
    roster = _roster([Role.CIVIL, Role.CIVIL, Role.UNDERCOVER, Role.MR_WHITE])
    assert apply_winner({}, roster, Role.UNDERCOVER)["P2"] == 10
    assert apply_winner({}, roster, Role.MR_WHITE)["P3"] == 10
    assert apply_winner({}, roster, Role.MR_WHITE)["P0"] == 0


def test_apply_winner_shared_name_accumulates():
    roster = build_roster(["Sam", "Sam", "Kim"], [Role.CIVIL, Role.CIVIL, Role.UNDERCOVER], PAIR)
    assert apply_winner({}, roster, Role.CIVIL) == {"Sam": 4, "Kim": 0}


def test_apply_winner_tie_adds_nothing():
    roster = _roster([Role.CIVIL, Role.UNDERCOVER, Role.CIVIL])
    assert apply_winner({"P0": 1}, roster, TIE) == {"P0": 1, "P1": 0, "P2": 0}


def test_leaderboard_and_suggested_names():
    scores = {"Bob": 4, "Alice": 12, "Carl": 4}
    assert leaderboard(scores) == [("Alice", 12), ("Bob", 4), ("Carl", 4)]
    assert suggested_names(scores, ["X"]) == ["Alice", "Bob", "Carl"]
    assert suggested_names({"Bob": 1}, ["X", "Y", "Z"]) == ["X", "Y", "Z"]
