"""Environment configuration for Bettercover."""

import os

from undercover.rules import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

# Default env var names
ENV_STORE_PATH = "UNDERCOVER_STORE_PATH"
ENV_DEFAULT_LANGUAGE = "UNDERCOVER_DEFAULT_LANGUAGE"
ENV_SEED = "UNDERCOVER_SEED"
ENV_LOG_LEVEL = "UNDERCOVER_LOG_LEVEL"


def get_store_path() -> str | None:
    """JSON store file; None means keep everything in memory."""
    return os.environ.get(ENV_STORE_PATH) or None


def get_default_language() -> str:
    language = os.environ.get(ENV_DEFAULT_LANGUAGE, DEFAULT_LANGUAGE)
    return language if language in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def get_seed() -> int | None:
    raw = os.environ.get(ENV_SEED)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def get_log_level() -> str:
    return os.environ.get(ENV_LOG_LEVEL, "INFO").upper()
