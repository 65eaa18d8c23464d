"""LLM provider abstraction package."""

from moodlog.infrastructure.llm.provider import (
    LLMProvider,
    LLMResponse,
    LLMProviderError,
    RateLimitError,
    ContentFilterError,
)
from moodlog.infrastructure.llm.provider_factory import get_llm_provider, LLMProviderType

__all__ = [
    # Base types
    "LLMProvider",
    "LLMResponse",
    "LLMProviderError",
    "RateLimitError",
    "ContentFilterError",
    # Factory
    "get_llm_provider",
    "LLMProviderType",
]
