"""Game state types for Bettercover."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from undercover.rules import DEFAULT_LANGUAGE, Feedback, Phase, Role


@dataclass(frozen=True)
class WordPair:
    """Linked words for one session: civilians get `civil`, undercovers get `undercover`."""

    civil: str
    undercover: str


@dataclass(frozen=True)
class GameSettings:
    """Requested number of players per role."""

    civils: int
    undercovers: int
    mr_whites: int = 0

    @property
    def total(self) -> int:
        return self.civils + self.undercovers + self.mr_whites


@dataclass(frozen=True)
class Player:
    """A seat at the table."""

    id: str
    name: str
    role: Role
    word: str
    color: str
    turn_position: int = 0
    eliminated: bool = False


@dataclass(frozen=True)
class Winner:
    """Final outcome. `role` is a Role, or rules.TIE."""

    role: Union[Role, str]
    winner_names: tuple[str, ...]


class EventKind(str, Enum):
    """Type of game event."""

    GAME_START = "game_start"
    WORDS_REROLLED = "words_rerolled"
    PHASE_CHANGE = "phase_change"
    TIE = "tie"
    PERSISTENT_TIE = "persistent_tie"
    ELIMINATED = "eliminated"
    MR_WHITE_GUESS = "mr_white_guess"
    GAME_OVER = "game_over"


@dataclass
class Event:
    """A single game event for history."""

    kind: EventKind
    round_index: int
    phase: Phase
    message: str
    player_id: Optional[str] = None
    extra: Optional[dict] = None


@dataclass
class GameState:
    """Full game state. Engine functions return a new copy on every transition."""

    game_id: str
    language: str = DEFAULT_LANGUAGE
    phase: Phase = Phase.SETUP
    players: list[Player] = field(default_factory=list)
    word_pair: Optional[WordPair] = None
    used_word_indices: list[int] = field(default_factory=list)  # persisted across sessions
    starting_player_id: Optional[str] = None
    eliminated_player_id: Optional[str] = None  # most recent elimination
    tie_ids: list[str] = field(default_factory=list)  # previous tied set; also narrows the ballot
    feedback: Optional[Feedback] = None
    winner: Optional[Winner] = None
    last_guess: Optional[str] = None
    round_index: int = 0
    events: list[Event] = field(default_factory=list)

    def get_active_players(self) -> list[Player]:
        """Return players not yet eliminated."""
        return [p for p in self.players if not p.eliminated]

    def get_player(self, player_id: str) -> Optional[Player]:
        """Return player by id or None."""
        for p in self.players:
            if p.id == player_id:
                return p
        return None
