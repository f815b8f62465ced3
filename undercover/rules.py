"""Game rules and constants for Bettercover."""

from enum import Enum


class Role(str, Enum):
    """Secret role dealt to each player."""

    CIVIL = "civil"
    UNDERCOVER = "undercover"
    MR_WHITE = "mr_white"


class Phase(str, Enum):
    """Current game phase."""

    SETUP = "setup"
    REVEAL = "reveal"
    DISCUSSION = "discussion"
    VOTING_COUNTDOWN = "voting_countdown"
    VOTING = "voting"
    ELIMINATION_RESULT = "elimination_result"
    MR_WHITE_GUESS = "mr_white_guess"
    GAME_OVER = "game_over"


class Feedback(str, Enum):
    """Transient vote feedback shown after a tied ballot."""

    TIE_REVOTE = "tie_revote"
    PERSISTENT_TIE = "persistent_tie"


# Winner marker for a drawn game (kept for presentation; the rules never produce it)
TIE = "tie"

SUPPORTED_LANGUAGES = ("en", "fr")
DEFAULT_LANGUAGE = "en"

MIN_PLAYERS = 3
MAX_PLAYERS = 16

# Mr. White is only dealt from this roster size, and at most once
MR_WHITE_MIN_PLAYERS = 5
MAX_MR_WHITES = 1

# Points added to each player of the winning faction
WIN_BONUS = {
    Role.CIVIL: 2,
    Role.UNDERCOVER: 10,
    Role.MR_WHITE: 10,
}

PLAYER_COLORS = (
    "rose",
    "sky",
    "amber",
    "emerald",
    "violet",
    "orange",
    "teal",
    "fuchsia",
    "lime",
    "indigo",
)

DEFAULT_NAMES = ["Alice", "Bob", "Charlie", "David", "Eve"]
