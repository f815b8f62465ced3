"""Key/value persistence for scores, used word pairs and language."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

from undercover.rules import SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)

SCORES_KEY = "bettercover_scores"
USED_WORDS_KEY = "bettercover_used_words"
LANGUAGE_KEY = "bettercover_lang"


class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Process-local store. Values are kept as given."""

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """Single JSON object on disk, rewritten whole on every write."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read store %s: %s; starting empty", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store %s does not hold a JSON object; starting empty", self.path)
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


def load_scores(store: KeyValueStore) -> dict[str, int]:
    raw = store.get(SCORES_KEY) or {}
    return {str(name): int(score) for name, score in raw.items()}


def save_scores(store: KeyValueStore, scores: dict[str, int]) -> None:
    store.set(SCORES_KEY, dict(scores))


def clear_scores(store: KeyValueStore) -> None:
    store.delete(SCORES_KEY)


def load_used_indices(store: KeyValueStore) -> list[int]:
    return [int(i) for i in store.get(USED_WORDS_KEY) or []]


def save_used_indices(store: KeyValueStore, indices: list[int]) -> None:
    store.set(USED_WORDS_KEY, list(indices))


def load_language(store: KeyValueStore, default: str) -> str:
    """Return the saved language, or default if nothing usable is stored."""
    language = store.get(LANGUAGE_KEY)
    return language if language in SUPPORTED_LANGUAGES else default


def save_language(store: KeyValueStore, language: str) -> None:
    store.set(LANGUAGE_KEY, language)
