"""
Analysis Engine

Orchestrates a single conversation analysis:
    PromptBuilder -> LLMProvider.generate -> ResponseValidator -> metadata

ARCHITECTURE: The provider is injected at construction and is read-only
afterwards. The engine only surfaces invocation-level failures
(ModelInvocationError). Unparseable responses never fail here; the
validator substitutes its fallback record.

No retries and no canned local responses at this layer. Deciding whether
to retry belongs to the caller.
"""

import time
from typing import Optional

from moodlog.config.logging_config import get_logger
from moodlog.domain.exceptions import ModelInvocationError
from moodlog.domain.models.analysis import AnalysisMetadata, AnalysisResult, QuickMoodResult
from moodlog.infrastructure.llm.provider import LLMProvider, LLMProviderError, RateLimitError
from moodlog.infrastructure.metrics import track_analysis_mood, track_llm_request
from moodlog.services.analysis.response_validator import ResponseValidator
from moodlog.services.prompt.prompt_builder import PromptBuilder

logger = get_logger(__name__)


class AnalysisEngine:
    """
    Runs conversation transcripts through the LLM.

    Usage:
        engine = AnalysisEngine(provider)
        result = await engine.analyze(transcript, user_id)
    """

    def __init__(
        self,
        provider: LLMProvider,
        prompt_builder: Optional[PromptBuilder] = None,
        validator: Optional[ResponseValidator] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            provider: LLM capability used for every analysis
            prompt_builder: Prompt renderer (default instance if omitted)
            validator: Response validator (default instance if omitted)
        """
        self._provider = provider
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._validator = validator or ResponseValidator()

    @property
    def model(self) -> str:
        """Model identifier used when the provider does not report one."""
        return self._provider.default_model

    @property
    def provider(self) -> LLMProvider:
        return self._provider

    async def analyze(self, transcript: str, user_id: str) -> AnalysisResult:
        """
        Analyze a conversation transcript.

        Args:
            transcript: Speaker-tagged conversation text
            user_id: Originating user id (recorded in metadata)

        Returns:
            Validated AnalysisResult with metadata attached

        Raises:
            ModelInvocationError: If the provider call fails
        """
        start_time = time.perf_counter()
        prompt = self._prompt_builder.build_prompt(transcript)

        raw_text, model_name = await self._invoke(prompt, start_time)

        analysis = self._validator.parse(raw_text)
        processing_time = int((time.perf_counter() - start_time) * 1000)

        track_analysis_mood(analysis.overall_mood.value)

        logger.info(
            "Conversation analyzed",
            user_id=user_id,
            model=model_name,
            overall_mood=analysis.overall_mood.value,
            mood_score=analysis.mood_score,
            processing_time_ms=processing_time,
        )

        return analysis.with_metadata(
            AnalysisMetadata(
                processing_time=processing_time,
                model=model_name,
                user_id=user_id,
            )
        )

    async def quick_mood(self, transcript: str) -> QuickMoodResult:
        """
        Rate the mood of a short conversation.

        Unlike analyze(), provider failures are absorbed: the result
        degrades to neutral / 5 and the failure is logged.
        """
        prompt = self._prompt_builder.build_quick_mood_prompt(transcript)

        try:
            raw_text, _ = await self._invoke(prompt, time.perf_counter())
        except ModelInvocationError as e:
            logger.warning("Quick mood analysis failed", error=str(e))
            return self._validator.quick_mood_fallback()

        return self._validator.parse_quick_mood(raw_text)

    async def health_check(self) -> bool:
        """Check whether the underlying provider is reachable."""
        return await self._provider.health_check()

    async def _invoke(self, prompt: str, start_time: float) -> tuple[str, str]:
        """Call the provider once; map any failure to ModelInvocationError."""
        provider_name = self._provider.provider_name

        try:
            response = await self._provider.generate(prompt)
        except Exception as e:
            status = "rate_limited" if isinstance(e, RateLimitError) else "error"
            track_llm_request(provider_name, status, time.perf_counter() - start_time)

            logger.error(
                "Model invocation failed",
                provider=provider_name,
                error_type=type(e).__name__,
                error=str(e),
                retryable=e.is_retryable if isinstance(e, LLMProviderError) else None,
            )
            raise ModelInvocationError(
                f"Failed to analyze conversation: {e}",
                cause=e,
            ) from e

        track_llm_request(
            provider_name,
            "success",
            time.perf_counter() - start_time,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
        )
        logger.debug(
            "Model responded",
            provider=provider_name,
            total_tokens=response.total_tokens,
            response_length=len(response.content or ""),
        )

        return response.content or "", response.model or self.model
