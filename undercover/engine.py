"""Game engine: pure state transitions driven by presentation events."""

import copy
import dataclasses
import logging
import random
from typing import Optional

from undercover.errors import InvalidBallot, PreconditionViolation
from undercover.roles import assign_roles, build_roster, validate_setup, word_for
from undercover.rules import DEFAULT_LANGUAGE, Feedback, Phase, Role
from undercover.state import (
    Event,
    EventKind,
    GameSettings,
    GameState,
    Player,
    Winner,
)
from undercover.turns import order, pick_next_speaker, pick_starter
from undercover.victory import evaluate, mr_white_wins
from undercover.words import fetch_catalog, pick_pair

logger = logging.getLogger(__name__)


def _emit(state: GameState, event: Event) -> None:
    """Append event to state (mutates state)."""
    state.events.append(event)


def _require_phase(state: GameState, operation: str, *phases: Phase) -> None:
    if state.phase not in phases:
        allowed = ", ".join(p.value for p in phases)
        raise PreconditionViolation(
            operation, f"not allowed in phase {state.phase.value} (expected {allowed})"
        )


def _next(state: GameState) -> GameState:
    """Copy state for a transition; feedback only lives for one snapshot."""
    state = copy.deepcopy(state)
    state.feedback = None
    return state


def _set_phase(state: GameState, phase: Phase, message: str) -> None:
    state.phase = phase
    _emit(
        state,
        Event(kind=EventKind.PHASE_CHANGE, round_index=state.round_index, phase=phase, message=message),
    )


def _finish(state: GameState, winner: Winner) -> None:
    state.phase = Phase.GAME_OVER
    state.winner = winner
    state.tie_ids = []
    role = winner.role.value if isinstance(winner.role, Role) else winner.role
    _emit(
        state,
        Event(
            kind=EventKind.GAME_OVER,
            round_index=state.round_index,
            phase=Phase.GAME_OVER,
            message=f"Game over: {role} wins.",
            extra={"role": role, "winner_names": list(winner.winner_names)},
        ),
    )
    logger.info("Game %s over: %s wins (%s)", state.game_id, role, ", ".join(winner.winner_names))


def new_game(
    game_id: str,
    language: str = DEFAULT_LANGUAGE,
    used_word_indices: Optional[list[int]] = None,
) -> GameState:
    """Create an empty session in SETUP carrying the persisted language and used words."""
    fetch_catalog(language)
    return GameState(
        game_id=game_id,
        language=language,
        used_word_indices=list(used_word_indices or []),
    )


def start_game(
    state: GameState,
    names: list[str],
    settings: GameSettings,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Deal roles and words, pick the opening speaker and fix turn order.
    Raises InvalidSetup (state untouched) if names and settings do not match.
    """
    _require_phase(state, "start_game", Phase.SETUP)
    validate_setup(names, settings)
    rng = rng or random.Random()

    state = _next(state)
    pair, used = pick_pair(state.language, state.used_word_indices, rng)
    roles = assign_roles(settings, rng)
    players = build_roster(names, roles, pair)
    starter = pick_starter(players, rng)

    state.players = order(players, starter, rng)
    state.word_pair = pair
    state.used_word_indices = used
    state.starting_player_id = starter.id
    state.eliminated_player_id = None
    state.tie_ids = []
    state.winner = None
    state.last_guess = None
    state.round_index = 0
    _emit(
        state,
        Event(
            kind=EventKind.GAME_START,
            round_index=0,
            phase=Phase.REVEAL,
            message=f"Game started with {len(players)} players.",
            extra={
                "civils": settings.civils,
                "undercovers": settings.undercovers,
                "mr_whites": settings.mr_whites,
            },
        ),
    )
    _set_phase(state, Phase.REVEAL, "Secret words are being revealed.")
    logger.info("Game %s started with %d players", state.game_id, len(players))
    return state


def reroll_words(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Draw a new word pair during reveal. Roles, ids and turn order stay as dealt."""
    _require_phase(state, "reroll_words", Phase.REVEAL)
    state = _next(state)
    pair, used = pick_pair(state.language, state.used_word_indices, rng)
    state.word_pair = pair
    state.used_word_indices = used
    state.players = [dataclasses.replace(p, word=word_for(p.role, pair)) for p in state.players]
    _emit(
        state,
        Event(
            kind=EventKind.WORDS_REROLLED,
            round_index=state.round_index,
            phase=state.phase,
            message="New secret words were drawn.",
        ),
    )
    return state


def finish_reveal(state: GameState) -> GameState:
    _require_phase(state, "finish_reveal", Phase.REVEAL)
    state = _next(state)
    _set_phase(state, Phase.DISCUSSION, f"Round {state.round_index + 1}: discussion.")
    return state


def open_voting(state: GameState) -> GameState:
    _require_phase(state, "open_voting", Phase.DISCUSSION)
    state = _next(state)
    _set_phase(state, Phase.VOTING_COUNTDOWN, "Voting is about to open.")
    return state


def countdown_finished(state: GameState) -> GameState:
    _require_phase(state, "countdown_finished", Phase.VOTING_COUNTDOWN)
    state = _next(state)
    _set_phase(state, Phase.VOTING, "Voting is open.")
    return state


def ballot_ids(state: GameState) -> list[str]:
    """Ids that may receive votes: the tied players during a re-vote, else every active player."""
    if state.tie_ids:
        return list(state.tie_ids)
    return [p.id for p in state.get_active_players()]


def _validate_tally(state: GameState, tally: dict[str, int]) -> None:
    allowed = set(ballot_ids(state))
    for player_id, count in tally.items():
        if count < 0:
            raise InvalidBallot(f"Negative vote count for {player_id}")
        if count and player_id not in allowed:
            raise InvalidBallot(f"{player_id} cannot receive votes in this ballot")
    total = sum(tally.values())
    active = len(state.get_active_players())
    if total != active:
        raise InvalidBallot(f"Ballot has {total} votes; every one of the {active} active players must vote")


def cast_votes(
    state: GameState,
    tally: dict[str, int],
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Resolve a completed ballot (player id -> votes).

    A single top player is eliminated. A tie narrows the next ballot to the
    tied players; the same tie twice in a row sends the table back to
    discussion with nobody eliminated. An empty ballot is ignored and the
    input state is returned as is.
    """
    _require_phase(state, "cast_votes", Phase.VOTING)
    if all(count == 0 for count in tally.values()):
        logger.warning("Game %s: empty ballot ignored", state.game_id)
        return state
    _validate_tally(state, tally)

    max_votes = max(tally.values())
    top = sorted(pid for pid, count in tally.items() if count == max_votes)
    if len(top) == 1:
        state = _next(state)
        _eliminate(state, top[0], rng)
        return state

    state = _next(state)
    if set(top) == set(state.tie_ids):
        state.tie_ids = []
        state.feedback = Feedback.PERSISTENT_TIE
        _emit(
            state,
            Event(
                kind=EventKind.PERSISTENT_TIE,
                round_index=state.round_index,
                phase=Phase.VOTING,
                message="The tie persists; back to discussion.",
                extra={"tied_ids": top},
            ),
        )
        _set_phase(state, Phase.DISCUSSION, f"Round {state.round_index + 1}: discussion resumes.")
        return state

    state.tie_ids = top
    state.feedback = Feedback.TIE_REVOTE
    _emit(
        state,
        Event(
            kind=EventKind.TIE,
            round_index=state.round_index,
            phase=Phase.VOTING,
            message=f"Tie between {len(top)} players; vote again among them.",
            extra={"tied_ids": top},
        ),
    )
    return state


def _eliminate(state: GameState, player_id: str, rng: Optional[random.Random]) -> None:
    """Eliminate player_id on an already-copied state and pick the next phase."""
    target = state.get_player(player_id)
    if target is None:
        raise PreconditionViolation("eliminate", f"unknown player {player_id}")
    if target.eliminated:
        raise PreconditionViolation("eliminate", f"{player_id} is already eliminated")

    state.players = [
        dataclasses.replace(p, eliminated=True) if p.id == player_id else p for p in state.players
    ]
    state.eliminated_player_id = player_id
    state.tie_ids = []
    next_speaker = pick_next_speaker(state.players, rng)
    if next_speaker is not None:
        state.starting_player_id = next_speaker.id
    _emit(
        state,
        Event(
            kind=EventKind.ELIMINATED,
            round_index=state.round_index,
            phase=Phase.VOTING,
            message=f"{target.name} was eliminated by vote.",
            player_id=player_id,
            extra={"role": target.role.value},
        ),
    )
    logger.info("Game %s: %s eliminated", state.game_id, player_id)

    if target.role == Role.MR_WHITE:
        _set_phase(state, Phase.MR_WHITE_GUESS, f"{target.name} gets one guess at the civilian word.")
        return
    winner = evaluate(state.players)
    if winner is not None:
        _finish(state, winner)
        return
    _set_phase(state, Phase.ELIMINATION_RESULT, f"{target.name} was a {target.role.value}.")


def eliminate(state: GameState, player_id: str, rng: Optional[random.Random] = None) -> GameState:
    """Eliminate a player directly from the ballot (one clear vote winner). Returns new state."""
    _require_phase(state, "eliminate", Phase.VOTING)
    if state.tie_ids and player_id not in state.tie_ids:
        raise PreconditionViolation("eliminate", f"{player_id} is not on the tied ballot")
    state = _next(state)
    _eliminate(state, player_id, rng)
    return state


def acknowledge_elimination(state: GameState) -> GameState:
    """Leave the elimination screen: end the game if decided, else start the next discussion round."""
    _require_phase(state, "acknowledge_elimination", Phase.ELIMINATION_RESULT)
    state = _next(state)
    winner = evaluate(state.players)
    if winner is not None:
        _finish(state, winner)
        return state
    state.round_index += 1
    _set_phase(state, Phase.DISCUSSION, f"Round {state.round_index + 1}: discussion.")
    return state


def _normalize(word: str) -> str:
    return word.strip().casefold()


def guess_mr_white(state: GameState, guess: str) -> GameState:
    """
    Last chance for an eliminated Mr. White. Naming the civilian word wins
    outright; a wrong guess falls back to the normal victory check.
    """
    _require_phase(state, "guess_mr_white", Phase.MR_WHITE_GUESS)
    state = _next(state)
    state.last_guess = guess
    correct = state.word_pair is not None and _normalize(guess) == _normalize(state.word_pair.civil)
    _emit(
        state,
        Event(
            kind=EventKind.MR_WHITE_GUESS,
            round_index=state.round_index,
            phase=Phase.MR_WHITE_GUESS,
            message="Mr. White found the word!" if correct else "Mr. White guessed wrong.",
            player_id=state.eliminated_player_id,
            extra={"correct": correct},
        ),
    )
    if correct:
        _finish(state, mr_white_wins(state.players))
        return state
    winner = evaluate(state.players)
    if winner is not None:
        _finish(state, winner)
        return state
    _set_phase(state, Phase.ELIMINATION_RESULT, "Mr. White is out.")
    return state


def reset_game(state: GameState) -> GameState:
    """Discard the current game and go back to SETUP, keeping language and used words."""
    return new_game(state.game_id, state.language, state.used_word_indices)


def set_language(state: GameState, language: str) -> GameState:
    """Switch word catalog. Used indices refer to the old catalog, so they are cleared."""
    _require_phase(state, "set_language", Phase.SETUP)
    fetch_catalog(language)
    state = _next(state)
    state.language = language
    state.used_word_indices = []
    return state


def is_game_over(state: GameState) -> bool:
    return state.phase == Phase.GAME_OVER and state.winner is not None


def get_winner(state: GameState) -> Optional[Winner]:
    """Return the Winner, or None if the game is not over."""
    return state.winner if is_game_over(state) else None


def get_eliminated_player(state: GameState) -> Optional[Player]:
    if state.eliminated_player_id is None:
        return None
    return state.get_player(state.eliminated_player_id)


def get_starter(state: GameState) -> Optional[Player]:
    """Player who opens the current discussion round."""
    if state.starting_player_id is None:
        return None
    return state.get_player(state.starting_player_id)
