"""JSON file history backend.

Stores the conversation as an indented JSON document at a fixed path.
Writes go to a temporary file in the same directory and are moved into
place, so a failed save leaves the previous file untouched.
"""

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from .base import HistoryStore
from .models import ChatHistory

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_FILE = "chat_history.json"


class JsonHistoryStore(HistoryStore):
    """History persisted to a JSON file."""

    def __init__(self, path: str | Path = DEFAULT_HISTORY_FILE):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ChatHistory:
        try:
            data = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No existing chat history found at %s. Starting a new conversation.", self._path)
            return ChatHistory()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read chat history file %s: %s. Starting with an empty history.", self._path, e)
            return ChatHistory()

        try:
            history = ChatHistory.model_validate_json(data)
        except ValidationError as e:
            logger.warning(
                "Error occurred while parsing chat history %s: %s. Starting with an empty history.",
                self._path,
                e.errors()[0]["msg"],
            )
            return ChatHistory()

        logger.info("Successfully loaded chat history with %d messages.", len(history.messages))
        return history

    def save(self, history: ChatHistory) -> bool:
        data = history.model_dump_json(indent=2)
        directory = self._path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{self._path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp_name, self._path)
        except OSError as e:
            logger.error("Failed to save chat history to %s: %s. Check file permissions or disk space.", self._path, e)
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            return False

        logger.debug("Chat history saved to %s (%d messages).", self._path, len(history.messages))
        return True

    @property
    def backend_type(self) -> str:
        return "json"
