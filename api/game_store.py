"""In-memory session registry. Scores and used words go to the shared key/value store."""

import random

from undercover.config import get_default_language, get_seed, get_store_path
from undercover.session import GameSession
from undercover.storage import JsonFileStore, KeyValueStore, MemoryStore

# game_id -> GameSession
_store: dict[str, GameSession] = {}
_backing: KeyValueStore | None = None


def backing_store() -> KeyValueStore:
    """Shared persistence for every session (JSON file if configured, else memory)."""
    global _backing
    if _backing is None:
        path = get_store_path()
        _backing = JsonFileStore(path) if path else MemoryStore()
    return _backing


def set_backing_store(store: KeyValueStore | None) -> None:
    """Swap the shared store (tests); None rebuilds it from config on next use."""
    global _backing
    _backing = store


def create(game_id: str, language: str | None = None) -> GameSession:
    seed = get_seed()
    session = GameSession(
        game_id,
        store=backing_store(),
        rng=random.Random(seed) if seed is not None else None,
        default_language=get_default_language(),
    )
    if language is not None and language != session.state.language:
        session.set_language(language)
    _store[game_id] = session
    return session


def get(game_id: str) -> GameSession | None:
    return _store.get(game_id)


def delete(game_id: str) -> None:
    _store.pop(game_id, None)


def list_games() -> list[str]:
    return list(_store.keys())
