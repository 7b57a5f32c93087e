"""Abstract base class for history backends.

The abstraction hides:
- Storage format (JSON file, in-memory)
- Where the history lives on disk
- How failures are reported (logged, never raised to the caller)
"""

from abc import ABC, abstractmethod

from .models import ChatHistory


class HistoryStore(ABC):
    """Abstract store for the single global conversation."""

    @abstractmethod
    def load(self) -> ChatHistory:
        """Load the stored history.

        Never raises: a missing or unreadable store yields an empty history.
        """

    @abstractmethod
    def save(self, history: ChatHistory) -> bool:
        """Persist the history.

        Returns:
            True if the history was written, False if the write failed
        """

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
