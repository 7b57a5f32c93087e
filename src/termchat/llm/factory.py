"""Provider lookup by name."""

from typing import Any

from .base import LLMProvider
from .providers import GeminiProvider

_PROVIDERS: dict[str, type[LLMProvider]] = {
    "gemini": GeminiProvider,
}


def available_providers() -> list[str]:
    """Names accepted by ``create_llm_provider``."""
    return sorted(_PROVIDERS)


def create_llm_provider(name: str, **config: Any) -> LLMProvider:
    """Build a provider by name (case-insensitive).

    Args:
        name: Provider name, e.g. ``"gemini"``
        **config: Passed to the provider; ``api_key`` is required

    Raises:
        ValueError: If no provider has that name
        TypeError: If ``api_key`` is missing
        ProviderError: If the provider's client could not be built

    Examples:
        >>> provider = create_llm_provider("gemini", api_key="...")
    """
    provider_cls = _PROVIDERS.get(name.lower())
    if provider_cls is None:
        raise ValueError(
            f"Unsupported provider: {name}. Available: {', '.join(available_providers())}"
        )
    if "api_key" not in config:
        raise TypeError(f"{name} provider requires 'api_key'")
    return provider_cls(**config)
