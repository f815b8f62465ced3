"""Caller-side session: feeds persisted state into the engine and writes results back."""

import logging
import random
from typing import Callable, Optional

from undercover import engine
from undercover.rules import DEFAULT_LANGUAGE
from undercover.scoring import apply_winner, leaderboard
from undercover.state import GameSettings, GameState
from undercover.storage import (
    KeyValueStore,
    MemoryStore,
    clear_scores,
    load_language,
    load_scores,
    load_used_indices,
    save_language,
    save_scores,
    save_used_indices,
)
from undercover.words import remaining_pairs

logger = logging.getLogger(__name__)


class GameSession:
    """One table of players. Owns the store and random source; the engine stays pure."""

    def __init__(
        self,
        game_id: str,
        store: Optional[KeyValueStore] = None,
        rng: Optional[random.Random] = None,
        default_language: str = DEFAULT_LANGUAGE,
    ):
        self.store = store if store is not None else MemoryStore()
        self.rng = rng or random.Random()
        language = load_language(self.store, default_language)
        self.state: GameState = engine.new_game(game_id, language, load_used_indices(self.store))
        self.scores_applied = False

    @property
    def game_id(self) -> str:
        return self.state.game_id

    def _commit(self, new_state: GameState) -> GameState:
        """Adopt new_state, persist what changed, and credit scores once per finished game."""
        old = self.state
        self.state = new_state
        if new_state.used_word_indices != old.used_word_indices:
            save_used_indices(self.store, new_state.used_word_indices)
        if new_state.language != old.language:
            save_language(self.store, new_state.language)
        if engine.is_game_over(new_state) and not self.scores_applied:
            winner = new_state.winner
            scores = apply_winner(load_scores(self.store), new_state.players, winner.role)
            save_scores(self.store, scores)
            self.scores_applied = True
            logger.info("Game %s: scores updated for %d players", self.game_id, len(new_state.players))
        return new_state

    def _apply(self, transition: Callable[..., GameState], *args) -> GameState:
        return self._commit(transition(self.state, *args))

    def start(self, names: list[str], settings: GameSettings) -> GameState:
        return self._apply(engine.start_game, names, settings, self.rng)

    def reroll_words(self) -> GameState:
        return self._apply(engine.reroll_words, self.rng)

    def finish_reveal(self) -> GameState:
        return self._apply(engine.finish_reveal)

    def open_voting(self) -> GameState:
        return self._apply(engine.open_voting)

    def countdown_finished(self) -> GameState:
        return self._apply(engine.countdown_finished)

    def cast_votes(self, tally: dict[str, int]) -> GameState:
        return self._apply(engine.cast_votes, tally, self.rng)

    def eliminate_direct(self, player_id: str) -> GameState:
        return self._apply(engine.eliminate, player_id, self.rng)

    def acknowledge_elimination(self) -> GameState:
        return self._apply(engine.acknowledge_elimination)

    def guess_mr_white(self, guess: str) -> GameState:
        return self._apply(engine.guess_mr_white, guess)

    def reset(self) -> GameState:
        self.scores_applied = False
        return self._apply(engine.reset_game)

    def set_language(self, language: str) -> GameState:
        return self._apply(engine.set_language, language)

    def scores(self) -> dict[str, int]:
        return load_scores(self.store)

    def leaderboard(self) -> list[tuple[str, int]]:
        return leaderboard(self.scores())

    def reset_scores(self) -> None:
        clear_scores(self.store)

    def remaining_words(self) -> int:
        return remaining_pairs(self.state.language, self.state.used_word_indices)
