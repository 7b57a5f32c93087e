"""In-memory history backend.

Data is lost when the application exits.
Suitable for single-session use or testing.
"""

from .base import HistoryStore
from .models import ChatHistory


class InMemoryHistoryStore(HistoryStore):
    """History kept in memory only (session-only)."""

    def __init__(self, history: ChatHistory | None = None):
        self._history = history.model_copy(deep=True) if history else ChatHistory()
        self.save_count = 0

    def load(self) -> ChatHistory:
        return self._history.model_copy(deep=True)

    def save(self, history: ChatHistory) -> bool:
        self._history = history.model_copy(deep=True)
        self.save_count += 1
        return True

    @property
    def backend_type(self) -> str:
        return "memory"
