"""Exception hierarchy shared across termchat."""


class TermchatError(Exception):
    """Base class for termchat errors."""


class ConfigError(TermchatError):
    """Raised when required configuration is missing or invalid."""


class ProviderError(TermchatError):
    """Raised when an LLM provider cannot be constructed."""
