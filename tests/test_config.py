"""Tests for settings loading and logging setup."""
import logging
import os
from pathlib import Path

import pytest

from termchat.config import API_KEY_ENV, load_settings
from termchat.errors import ConfigError, TermchatError
from termchat.logging_config import level_from_string, setup_logging

_ENV_VARS = [
    API_KEY_ENV,
    "GEMINI_MODEL",
    "TERMCHAT_HISTORY_FILE",
    "TERMCHAT_DB_PATH",
    "TERMCHAT_WORD_WRAP",
    "TERMCHAT_LOG_LEVEL",
    "TERMCHAT_LOG_FILE",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Unset every setting variable and restore the environment afterwards.

    Setting each variable first makes monkeypatch record it, so values that
    load_dotenv writes into os.environ are removed again at teardown.
    """
    for name in _ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_api_key_is_fatal(self, clean_env):
        with pytest.raises(ConfigError, match=API_KEY_ENV):
            load_settings(env_file=None)

    def test_config_error_is_termchat_error(self):
        assert issubclass(ConfigError, TermchatError)

    def test_api_key_optional_when_not_required(self, clean_env):
        settings = load_settings(env_file=None, require_api_key=False)

        assert settings.api_key is None

    def test_defaults(self, clean_env):
        clean_env.setenv(API_KEY_ENV, "test-key")

        settings = load_settings(env_file=None)

        assert settings.api_key == "test-key"
        assert settings.model == "gemini-2.5-flash"
        assert settings.history_file == Path("chat_history.json")
        assert settings.db_path == Path("db.sql")
        assert settings.word_wrap == 100
        assert settings.log_level == "warning"

    def test_api_key_hidden_from_repr(self, clean_env):
        clean_env.setenv(API_KEY_ENV, "very-secret")

        assert "very-secret" not in repr(load_settings(env_file=None))

    def test_environment_overrides(self, clean_env, tmp_path):
        clean_env.setenv(API_KEY_ENV, "test-key")
        clean_env.setenv("GEMINI_MODEL", "gemini-2.5-pro")
        clean_env.setenv("TERMCHAT_HISTORY_FILE", str(tmp_path / "h.json"))
        clean_env.setenv("TERMCHAT_DB_PATH", str(tmp_path / "rooms.sql"))
        clean_env.setenv("TERMCHAT_WORD_WRAP", "72")
        clean_env.setenv("TERMCHAT_LOG_LEVEL", "debug")

        settings = load_settings(env_file=None)

        assert settings.model == "gemini-2.5-pro"
        assert settings.history_file == tmp_path / "h.json"
        assert settings.db_path == tmp_path / "rooms.sql"
        assert settings.word_wrap == 72
        assert settings.log_level == "debug"

    @pytest.mark.parametrize("value", ["5", "not-a-number"])
    def test_invalid_word_wrap(self, clean_env, value):
        clean_env.setenv("TERMCHAT_WORD_WRAP", value)

        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_settings(env_file=None, require_api_key=False)

    def test_reads_dotenv_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(f"{API_KEY_ENV}=from-dotenv\n")

        assert load_settings(env_file=env_file).api_key == "from-dotenv"

    def test_environment_wins_over_dotenv(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(f"{API_KEY_ENV}=from-dotenv\n")
        clean_env.setenv(API_KEY_ENV, "from-shell")

        assert load_settings(env_file=env_file).api_key == "from-shell"

    def test_missing_dotenv_file_is_not_fatal(self, clean_env, tmp_path):
        clean_env.setenv(API_KEY_ENV, "test-key")

        assert load_settings(env_file=tmp_path / "absent.env").api_key == "test-key"


@pytest.fixture
def termchat_logger():
    logger = logging.getLogger("termchat")
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)


class TestLogging:
    """Tests for logging setup."""

    @pytest.mark.parametrize(
        ("name", "level"),
        [("debug", logging.DEBUG), ("INFO", logging.INFO), ("warning", logging.WARNING),
         ("error", logging.ERROR), ("chatty", logging.WARNING)],
    )
    def test_level_from_string(self, name, level):
        assert level_from_string(name) == level

    def test_writes_to_log_file(self, termchat_logger, tmp_path):
        log_file = tmp_path / "logs" / "termchat.log"
        setup_logging("info", log_file)

        logging.getLogger("termchat.repl").info("hello log")
        for handler in termchat_logger.handlers:
            handler.flush()

        assert "hello log" in log_file.read_text()

    def test_repeated_setup_replaces_handlers(self, termchat_logger, tmp_path):
        setup_logging("info", tmp_path / "a.log", stderr=True)
        setup_logging("debug", tmp_path / "b.log", stderr=True)

        assert len(termchat_logger.handlers) == 2
        assert termchat_logger.level == logging.DEBUG

    def test_quiets_noisy_libraries(self, termchat_logger):
        setup_logging("debug")

        assert logging.getLogger("httpx").level == logging.WARNING


def test_dotenv_values_do_not_leak_between_tests(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(f"{API_KEY_ENV}=from-dotenv\n")
    load_settings(env_file=env_file)

    clean_env.undo()

    assert os.getenv(API_KEY_ENV) != "from-dotenv"
