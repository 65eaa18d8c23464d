"""
LLM Provider Factory

Creates the LLM provider selected by configuration. Called once at
application startup; the result is injected into AnalysisEngine.

CONFIGURATION:
    MOODLOG_LLM_PROVIDER=gemini  # or: openai
"""

from enum import StrEnum
from typing import Optional

from moodlog.config import get_settings
from moodlog.config.logging_config import get_logger
from moodlog.infrastructure.llm.provider import LLMProvider

logger = get_logger(__name__)


class LLMProviderType(StrEnum):
    """Supported LLM provider types."""

    GEMINI = "gemini"
    OPENAI = "openai"


def get_llm_provider(provider_type: Optional[LLMProviderType] = None) -> LLMProvider:
    """
    Create an LLM provider instance.

    Provider type defaults to MOODLOG_LLM_PROVIDER.

    Args:
        provider_type: Override provider type

    Returns:
        Configured LLM provider

    Raises:
        ValueError: If unknown provider type
    """
    if provider_type is None:
        provider_str = get_settings().llm_provider
        try:
            provider_type = LLMProviderType(provider_str)
        except ValueError:
            logger.warning(
                "Unknown LLM provider, defaulting to gemini",
                requested=provider_str,
            )
            provider_type = LLMProviderType.GEMINI

    provider = _create_provider(provider_type)

    logger.info(
        "LLM provider initialized",
        provider=provider_type.value,
        model=provider.default_model,
        configured=provider.is_configured(),
    )

    return provider


def _create_provider(provider_type: LLMProviderType) -> LLMProvider:
    """Create provider instance by type."""
    if provider_type == LLMProviderType.GEMINI:
        from moodlog.infrastructure.llm.gemini_provider import GeminiProvider
        return GeminiProvider()

    elif provider_type == LLMProviderType.OPENAI:
        from moodlog.infrastructure.llm.openai_provider import OpenAIProvider
        return OpenAIProvider()

    else:
        raise ValueError(f"Unknown provider type: {provider_type}")
