"""Game engine for Bettercover."""

from undercover.engine import (
    new_game,
    start_game,
    reroll_words,
    finish_reveal,
    open_voting,
    countdown_finished,
    cast_votes,
    eliminate,
    acknowledge_elimination,
    guess_mr_white,
    reset_game,
    set_language,
    ballot_ids,
    is_game_over,
    get_winner,
)
from undercover.errors import (
    GameError,
    InvalidSetup,
    PreconditionViolation,
    InvalidBallot,
    CatalogError,
)
from undercover.rules import Role, Phase, Feedback
from undercover.session import GameSession
from undercover.state import GameState, GameSettings, Player, WordPair, Winner, Event

__all__ = [
    "new_game",
    "start_game",
    "reroll_words",
    "finish_reveal",
    "open_voting",
    "countdown_finished",
    "cast_votes",
    "eliminate",
    "acknowledge_elimination",
    "guess_mr_white",
    "reset_game",
    "set_language",
    "ballot_ids",
    "is_game_over",
    "get_winner",
    "GameError",
    "InvalidSetup",
    "PreconditionViolation",
    "InvalidBallot",
    "CatalogError",
    "Role",
    "Phase",
    "Feedback",
    "GameSession",
    "GameState",
    "GameSettings",
    "Player",
    "WordPair",
    "Winner",
    "Event",
]
