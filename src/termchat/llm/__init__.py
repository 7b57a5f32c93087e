from .base import LLMProvider
from .factory import available_providers, create_llm_provider
from .models import GenerationOptions, ReplyStream, TokenUsage
from .providers import GeminiProvider

__all__ = [
    "GeminiProvider",
    "GenerationOptions",
    "LLMProvider",
    "ReplyStream",
    "TokenUsage",
    "available_providers",
    "create_llm_provider",
]
