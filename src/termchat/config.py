"""Runtime configuration.

Settings come from the process environment, optionally seeded from a
``.env`` file. Environment variables:
    GEMINI_API_KEY: Gemini API key (required)
    GEMINI_MODEL: Model name (default: gemini-2.5-flash)
    TERMCHAT_HISTORY_FILE: JSON history path (default: chat_history.json)
    TERMCHAT_DB_PATH: SQLite chat room database (default: db.sql)
    TERMCHAT_WORD_WRAP: Markdown wrap width (default: 100)
    TERMCHAT_LOG_LEVEL: debug, info, warning or error (default: warning)
    TERMCHAT_LOG_FILE: Log file path (default: user log directory)
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_log_dir
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .history.json_store import DEFAULT_HISTORY_FILE
from .history.rooms import DEFAULT_DB_PATH
from .llm.providers.gemini import DEFAULT_MODEL
from .render.markdown import DEFAULT_WORD_WRAP

logger = logging.getLogger(__name__)

API_KEY_ENV = "GEMINI_API_KEY"


def default_log_file() -> Path:
    return Path(user_log_dir("termchat")) / "termchat.log"


class Settings(BaseModel):
    """Validated application settings."""

    model_config = ConfigDict(frozen=True)

    api_key: str | None = Field(default=None, repr=False)
    model: str = DEFAULT_MODEL
    history_file: Path = Path(DEFAULT_HISTORY_FILE)
    db_path: Path = Path(DEFAULT_DB_PATH)
    word_wrap: int = Field(default=DEFAULT_WORD_WRAP, ge=20, le=1000)
    log_level: str = "warning"
    log_file: Path = Field(default_factory=default_log_file)


def load_settings(
    env_file: str | Path | None = ".env",
    require_api_key: bool = True,
) -> Settings:
    """Build settings from the environment.

    Args:
        env_file: Dotenv file to load first (None to skip). Variables
            already set in the environment take precedence.
        require_api_key: Fail if GEMINI_API_KEY is unset (commands that
            never call the model pass False)

    Returns:
        Validated Settings

    Raises:
        ConfigError: If the API key is missing or a value is invalid
    """
    if env_file is not None:
        if Path(env_file).exists():
            load_dotenv(env_file)
        else:
            logger.info("No %s file found; using process environment only", env_file)

    api_key = os.getenv(API_KEY_ENV)
    if require_api_key and not api_key:
        raise ConfigError(f"{API_KEY_ENV} is not set in the environment")

    values: dict[str, object] = {"api_key": api_key or None}
    optional = {
        "model": "GEMINI_MODEL",
        "history_file": "TERMCHAT_HISTORY_FILE",
        "db_path": "TERMCHAT_DB_PATH",
        "word_wrap": "TERMCHAT_WORD_WRAP",
        "log_level": "TERMCHAT_LOG_LEVEL",
        "log_file": "TERMCHAT_LOG_FILE",
    }
    for field_name, env_name in optional.items():
        value = os.getenv(env_name)
        if value:
            values[field_name] = value

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
