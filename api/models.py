"""Pydantic request/response models for the API."""

from pydantic import BaseModel, Field, field_validator, model_validator

from api.messages import feedback_text, victory_text
from undercover.engine import ballot_ids
from undercover.rules import MAX_PLAYERS, MIN_PLAYERS, SUPPORTED_LANGUAGES, Phase, Role
from undercover.state import GameSettings, GameState
from undercover.turns import discussion_order

# Validation constants (no magic numbers in validation)
MAX_PLAYER_NAME_LENGTH = 50
MAX_GUESS_LENGTH = 100


def _check_language(v: str) -> str:
    if v not in SUPPORTED_LANGUAGES:
        raise ValueError(f"language must be one of {SUPPORTED_LANGUAGES}")
    return v


class SettingsBody(BaseModel):
    """Role counts for a new game."""

    civils: int = Field(..., ge=0, le=MAX_PLAYERS)
    undercovers: int = Field(..., ge=0, le=MAX_PLAYERS)
    mr_whites: int = Field(default=0, ge=0, le=MAX_PLAYERS)

    def to_settings(self) -> GameSettings:
        return GameSettings(civils=self.civils, undercovers=self.undercovers, mr_whites=self.mr_whites)


class GameCreateRequest(BaseModel):
    """Body for POST /games."""

    language: str | None = Field(default=None, description="en or fr; defaults to the saved or configured language")

    @field_validator("language")
    @classmethod
    def language_supported(cls, v: str | None) -> str | None:
        return v if v is None else _check_language(v)


class StartRequest(BaseModel):
    """Body for POST /games/{id}/start."""

    names: list[str] = Field(..., min_length=MIN_PLAYERS, max_length=MAX_PLAYERS)
    settings: SettingsBody | None = Field(
        default=None,
        description="Role counts; omitted means the recommended split for this many players",
    )

    @field_validator("names")
    @classmethod
    def names_not_blank(cls, v: list[str]) -> list[str]:
        names = [n.strip() for n in v]
        for n in names:
            if not n:
                raise ValueError("player names must not be blank")
            if len(n) > MAX_PLAYER_NAME_LENGTH:
                raise ValueError(f"player names must be at most {MAX_PLAYER_NAME_LENGTH} characters")
        return names


class VoteRequest(BaseModel):
    """Body for POST /games/{id}/votes: player id -> number of votes."""

    tally: dict[str, int]

    @model_validator(mode="after")
    def counts_not_negative(self) -> "VoteRequest":
        if any(c < 0 for c in self.tally.values()):
            raise ValueError("vote counts must not be negative")
        return self


class EliminateRequest(BaseModel):
    player_id: str


class GuessRequest(BaseModel):
    guess: str = Field(..., max_length=MAX_GUESS_LENGTH)


class LanguageRequest(BaseModel):
    language: str

    @field_validator("language")
    @classmethod
    def language_supported(cls, v: str) -> str:
        return _check_language(v)


class PlayerPublic(BaseModel):
    """Player as shown to the device. Role is only revealed once out or at game end."""

    id: str
    name: str
    color: str
    turn_position: int
    eliminated: bool
    word: str = Field(description="Secret word; the client shows it only to its owner during reveal")
    role: str | None = Field(default=None, description="Only set when eliminated or game over")


class EventPublic(BaseModel):
    kind: str
    round_index: int
    phase: str
    message: str
    player_id: str | None = None
    extra: dict | None = Field(default=None, description="Event details: tied ids, revealed role, guess result")


class WinnerPublic(BaseModel):
    role: str
    winner_names: list[str]
    message: str


class ScoreEntry(BaseModel):
    name: str
    score: int


class WordStockResponse(BaseModel):
    language: str
    total: int
    remaining: int


class GameStateResponse(BaseModel):
    """Public game state for GET /games/{id}."""

    game_id: str
    language: str
    phase: str
    round_index: int
    players: list[PlayerPublic]
    ballot_ids: list[str] = Field(default_factory=list, description="Players who may receive votes (during voting)")
    starting_player_id: str | None = None
    eliminated_player_id: str | None = None
    discussion_order: list[str] = Field(default_factory=list)
    winner: WinnerPublic | None = None
    feedback: str | None = Field(default=None, description="tie_revote or persistent_tie after a tied ballot")
    feedback_message: str | None = None
    civil_word: str | None = Field(default=None, description="Revealed at game over")
    events: list[EventPublic] = Field(default_factory=list)


def game_state_to_public(state: GameState) -> GameStateResponse:
    """Build public response from GameState."""
    game_over = state.phase == Phase.GAME_OVER
    players_public = [
        PlayerPublic(
            id=p.id,
            name=p.name,
            color=p.color,
            turn_position=p.turn_position,
            eliminated=p.eliminated,
            word=p.word,
            role=p.role.value if (game_over or p.eliminated) else None,
        )
        for p in state.players
    ]
    events_public = [
        EventPublic(
            kind=e.kind.value,
            round_index=e.round_index,
            phase=e.phase.value,
            message=e.message,
            player_id=e.player_id,
            extra=e.extra,
        )
        for e in state.events
    ]
    winner = None
    if state.winner is not None:
        role = state.winner.role
        winner = WinnerPublic(
            role=role.value if isinstance(role, Role) else role,
            winner_names=list(state.winner.winner_names),
            message=victory_text(role, state.language),
        )
    voting = state.phase in (Phase.VOTING_COUNTDOWN, Phase.VOTING)
    return GameStateResponse(
        game_id=state.game_id,
        language=state.language,
        phase=state.phase.value,
        round_index=state.round_index,
        players=players_public,
        ballot_ids=ballot_ids(state) if voting else [],
        starting_player_id=state.starting_player_id,
        eliminated_player_id=state.eliminated_player_id,
        discussion_order=discussion_order(state.players, state.starting_player_id),
        winner=winner,
        feedback=state.feedback.value if state.feedback else None,
        feedback_message=feedback_text(state.feedback, state.language),
        civil_word=state.word_pair.civil if (game_over and state.word_pair) else None,
        events=events_public,
    )
