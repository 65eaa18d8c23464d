"""
Google Gemini LLM Provider

Default provider for conversation analysis. Uses the Gemini Flash
family for low-latency single-shot completions.

ARCHITECTURE: Implements the LLMProvider interface. No retries here;
a failed call surfaces immediately so the caller can signal
"try again later".
"""

import time
from typing import Optional

import google.generativeai as genai
from google.generativeai.types import GenerationConfig, HarmCategory, HarmBlockThreshold

from moodlog.config import get_settings
from moodlog.config.logging_config import get_logger
from moodlog.infrastructure.llm.provider import (
    LLMProvider,
    LLMResponse,
    LLMProviderError,
    RateLimitError,
    ContentFilterError,
)

logger = get_logger(__name__)


class GeminiProvider(LLMProvider):
    """
    Google Gemini provider for wellness conversation analysis.

    Usage:
        provider = GeminiProvider()
        response = await provider.generate(prompt)
    """

    DEFAULT_MODEL = "gemini-2.0-flash"

    # Lower temperature for consistent, structured output
    DEFAULT_TEMPERATURE = 0.4

    DEFAULT_MAX_TOKENS = 1024

    # Conversations routinely discuss distress; only block the most harmful content
    SAFETY_SETTINGS = {
        HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
        HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
        HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
        HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_ONLY_HIGH,
    }

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> None:
        """
        Initialize Gemini provider.

        Args:
            api_key: Gemini API key (defaults to env MOODLOG_GEMINI_API_KEY)
            model: Model identifier (defaults to settings)
            max_tokens: Default max output tokens
            temperature: Default temperature
        """
        settings = get_settings()

        self._api_key = api_key or settings.gemini.api_key.get_secret_value()
        self._default_model = model or settings.gemini.model or self.DEFAULT_MODEL
        self._default_max_tokens = max_tokens or settings.gemini.max_output_tokens
        self._default_temperature = (
            temperature if temperature is not None else settings.gemini.temperature
        )
        self._configured = False
        self._model_instance: Optional[genai.GenerativeModel] = None

        if self._api_key and self._api_key != "CHANGE_ME":
            genai.configure(api_key=self._api_key)
            self._configured = True
            self._model_instance = genai.GenerativeModel(
                model_name=self._default_model,
                safety_settings=self.SAFETY_SETTINGS,
            )
            logger.info("Gemini model initialized", model=self._default_model)

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def default_model(self) -> str:
        return self._default_model

    def is_configured(self) -> bool:
        return self._configured

    async def generate(
        self,
        prompt: str,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        """
        Generate completion using Gemini.

        Args:
            prompt: Complete instruction text
            model: Model override
            max_tokens: Max output tokens override
            temperature: Temperature override

        Returns:
            LLMResponse with generated content
        """
        if not self.is_configured():
            raise LLMProviderError(
                "Gemini API key not configured",
                provider=self.provider_name,
            )

        model_name = model or self._default_model

        if self._model_instance and model_name == self._default_model:
            gemini_model = self._model_instance
        else:
            gemini_model = genai.GenerativeModel(
                model_name=model_name,
                safety_settings=self.SAFETY_SETTINGS,
            )

        start_time = time.time()

        try:
            generation_config = GenerationConfig(
                max_output_tokens=max_tokens or self._default_max_tokens,
                temperature=temperature if temperature is not None else self._default_temperature,
            )

            response = await gemini_model.generate_content_async(
                prompt,
                generation_config=generation_config,
            )

            latency_ms = int((time.time() - start_time) * 1000)

            if response.prompt_feedback:
                block_reason = getattr(response.prompt_feedback, "block_reason", None)
                if block_reason:
                    logger.warning("Gemini content blocked", reason=str(block_reason))
                    raise ContentFilterError(
                        provider=self.provider_name,
                        filter_reason=str(block_reason),
                    )

            content = ""
            finish_reason = "stop"
            if response.candidates:
                candidate = response.candidates[0]
                if candidate.content and candidate.content.parts:
                    content = "".join(part.text or "" for part in candidate.content.parts)

                finish_reason = str(getattr(candidate, "finish_reason", "STOP"))
                if "SAFETY" in finish_reason:
                    raise ContentFilterError(
                        provider=self.provider_name,
                        filter_reason="Response blocked by safety filters",
                    )

            usage = self._usage_from_metadata(response, prompt, content)

            logger.debug(
                "Gemini response generated",
                model=model_name,
                latency_ms=latency_ms,
                content_length=len(content),
            )

            return LLMResponse(
                content=content,
                finish_reason=finish_reason.lower(),
                usage=usage,
                model=model_name,
                provider=self.provider_name,
                latency_ms=latency_ms,
                raw_response=response,
            )

        except LLMProviderError:
            raise
        except Exception as e:
            raise self._translate_error(e) from e

    def _usage_from_metadata(self, response, input_text: str, output_text: str) -> dict:
        """Token usage from response metadata, estimated when absent."""
        metadata = getattr(response, "usage_metadata", None)
        if metadata is not None and getattr(metadata, "total_token_count", None):
            return {
                "prompt_tokens": metadata.prompt_token_count,
                "completion_tokens": metadata.candidates_token_count,
                "total_tokens": metadata.total_token_count,
            }

        # Rough estimate: ~1.3 tokens per word
        input_tokens = int(len(input_text.split()) * 1.3)
        output_tokens = int(len(output_text.split()) * 1.3)
        return {
            "prompt_tokens": input_tokens,
            "completion_tokens": output_tokens,
            "total_tokens": input_tokens + output_tokens,
        }

    def _translate_error(self, error: Exception) -> LLMProviderError:
        """Map SDK errors to provider error types."""
        error_msg = str(error).lower()

        if "quota" in error_msg or "rate" in error_msg or "429" in error_msg:
            logger.warning("Gemini rate limit", error=str(error))
            return RateLimitError(
                provider=self.provider_name,
                retry_after_seconds=30,
            )

        if "safety" in error_msg or "blocked" in error_msg:
            return ContentFilterError(
                provider=self.provider_name,
                filter_reason=str(error),
            )

        logger.error("Gemini API error", error=str(error))
        return LLMProviderError(
            f"Gemini error: {str(error)}",
            provider=self.provider_name,
            is_retryable=True,
            original_error=error,
        )

    async def health_check(self) -> bool:
        """Check Gemini availability by listing models."""
        if not self.is_configured():
            return False

        try:
            models = list(genai.list_models())
            return any(self._default_model in m.name for m in models)
        except Exception as e:
            logger.warning("Gemini health check failed", error=str(e))
            return False
