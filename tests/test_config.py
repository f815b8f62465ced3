"""Tests for environment configuration."""

from undercover.config import (
    ENV_DEFAULT_LANGUAGE,
    ENV_LOG_LEVEL,
    ENV_SEED,
    ENV_STORE_PATH,
    get_default_language,
    get_log_level,
    get_seed,
    get_store_path,
)


def test_defaults(monkeypatch):
    for name in (ENV_STORE_PATH, ENV_DEFAULT_LANGUAGE, ENV_SEED, ENV_LOG_LEVEL):
        monkeypatch.delenv(name, raising=False)
    assert get_store_path() is None
    assert get_default_language() == "en"
    assert get_seed() is None
    assert get_log_level() == "INFO"


def test_values_from_env(monkeypatch):
    monkeypatch.setenv(ENV_STORE_PATH, "/tmp/bettercover.json")
    monkeypatch.setenv(ENV_DEFAULT_LANGUAGE, "fr")
    monkeypatch.setenv(ENV_SEED, "42")
    monkeypatch.setenv(ENV_LOG_LEVEL, "debug")
    assert get_store_path() == "/tmp/bettercover.json"
    assert get_default_language() == "fr"
    assert get_seed() == 42
    assert get_log_level() == "DEBUG"


def test_bad_values_fall_back(monkeypatch):
    monkeypatch.setenv(ENV_DEFAULT_LANGUAGE, "de")
    monkeypatch.setenv(ENV_SEED, "not-a-number")
    assert get_default_language() == "en"
    assert get_seed() is None
