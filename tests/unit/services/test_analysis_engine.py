"""
Unit Tests for Analysis Engine

Uses an in-process fake provider; no network calls.
"""

import pytest
from prometheus_client import REGISTRY

from moodlog.domain.enums.mood import OverallMood
from moodlog.domain.exceptions import ModelInvocationError
from moodlog.infrastructure.llm.provider import LLMProviderError, LLMResponse, RateLimitError
from moodlog.services.analysis.analysis_engine import AnalysisEngine
from moodlog.services.analysis.response_validator import ResponseValidator

from tests.fakes import SAMPLE_CONVERSATION, FakeLLMProvider


class TestAnalysisEngine:
    """Test suite for AnalysisEngine.analyze."""

    async def test_analyze_returns_validated_result_with_metadata(
        self,
        analysis_engine: AnalysisEngine,
        fake_provider: FakeLLMProvider,
    ) -> None:
        result = await analysis_engine.analyze(SAMPLE_CONVERSATION, "user-1")

        assert result.overall_mood == OverallMood.POSITIVE
        assert result.mood_score == 7
        assert result.key_topics == ["work", "sleep"]
        assert result.metadata is not None
        assert result.metadata.user_id == "user-1"
        assert result.metadata.model == "fake-model-1"
        assert result.metadata.processing_time >= 0

    async def test_prompt_contains_transcript(
        self,
        analysis_engine: AnalysisEngine,
        fake_provider: FakeLLMProvider,
    ) -> None:
        await analysis_engine.analyze(SAMPLE_CONVERSATION, "user-1")

        assert len(fake_provider.prompts) == 1
        assert SAMPLE_CONVERSATION in fake_provider.prompts[0]

    async def test_unparseable_response_yields_fallback(self) -> None:
        """Test that garbage text is not an error."""
        engine = AnalysisEngine(FakeLLMProvider(content="Sorry, something went wrong."))

        result = await engine.analyze(SAMPLE_CONVERSATION, "user-2")

        expected = ResponseValidator().fallback()
        assert result.overall_mood == expected.overall_mood
        assert result.mood_score == expected.mood_score
        assert result.suggestions == expected.suggestions
        assert result.metadata.user_id == "user-2"

    @pytest.mark.parametrize("error", [
        LLMProviderError("boom", provider="fake"),
        RateLimitError(provider="fake", retry_after_seconds=5),
        ConnectionError("network down"),
    ])
    async def test_provider_failure_raises_model_invocation_error(self, error: Exception) -> None:
        provider = FakeLLMProvider(error=error)
        engine = AnalysisEngine(provider)

        with pytest.raises(ModelInvocationError) as exc_info:
            await engine.analyze(SAMPLE_CONVERSATION, "user-3")

        assert exc_info.value.cause is error
        # One attempt only; no retries at this layer
        assert len(provider.prompts) == 1


class TestQuickMood:
    """Test suite for AnalysisEngine.quick_mood."""

    async def test_quick_mood_parses_response(self) -> None:
        engine = AnalysisEngine(FakeLLMProvider(content='{"mood": "mixed", "score": 6}'))

        result = await engine.quick_mood(SAMPLE_CONVERSATION)

        assert result.overall_mood == OverallMood.MIXED
        assert result.mood_score == 6

    async def test_quick_mood_absorbs_provider_failure(self) -> None:
        engine = AnalysisEngine(FakeLLMProvider(error=ConnectionError("down")))

        result = await engine.quick_mood(SAMPLE_CONVERSATION)

        assert result.overall_mood == OverallMood.NEUTRAL
        assert result.mood_score == 5

    async def test_health_check_delegates_to_provider(self) -> None:
        assert await AnalysisEngine(FakeLLMProvider(healthy=False)).health_check() is False
        assert await AnalysisEngine(FakeLLMProvider()).health_check() is True


class TestTokenAccounting:
    """Test suite for LLM token metrics."""

    @staticmethod
    def _tokens(kind: str) -> float:
        value = REGISTRY.get_sample_value(
            "moodlog_llm_tokens_total",
            {"provider": "fake", "type": kind},
        )
        return value or 0.0

    async def test_usage_recorded_per_call(self, analysis_engine: AnalysisEngine) -> None:
        input_before = self._tokens("input")
        output_before = self._tokens("output")

        await analysis_engine.analyze(SAMPLE_CONVERSATION, "user-5")

        assert self._tokens("input") - input_before == 10
        assert self._tokens("output") - output_before == 20

    def test_response_token_properties(self) -> None:
        response = LLMResponse(
            content="{}",
            usage={"prompt_tokens": 3, "completion_tokens": 4, "total_tokens": 7},
        )

        assert (response.input_tokens, response.output_tokens, response.total_tokens) == (3, 4, 7)
        assert LLMResponse(content="").total_tokens == 0
