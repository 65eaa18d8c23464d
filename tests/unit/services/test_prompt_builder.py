"""
Unit Tests for Prompt Builder
"""

import pytest

from moodlog.services.prompt.prompt_builder import PromptBuilder


class TestPromptBuilder:
    """Test suite for PromptBuilder."""

    @pytest.fixture
    def builder(self) -> PromptBuilder:
        return PromptBuilder()

    def test_transcript_embedded_verbatim(self, builder: PromptBuilder) -> None:
        transcript = "User: I feel {weird} today\nAssistant: Tell me more."

        prompt = builder.build_prompt(transcript)

        assert transcript in prompt
        assert prompt.count(transcript) == 1

    def test_prompt_names_every_output_key(self, builder: PromptBuilder) -> None:
        prompt = builder.build_prompt("User: hello there")

        for key in (
            "overallMood",
            "moodScore",
            "stressTriggers",
            "suggestions",
            "keyTopics",
            "aiGeneratedSummary",
        ):
            assert f'"{key}"' in prompt
        assert "positive|neutral|negative|mixed" in prompt

    def test_prompt_is_deterministic(self, builder: PromptBuilder) -> None:
        assert builder.build_prompt("User: same") == builder.build_prompt("User: same")

    def test_empty_transcript_still_renders(self, builder: PromptBuilder) -> None:
        prompt = builder.build_prompt("")

        assert "CONVERSATION:" in prompt

    def test_quick_mood_prompt(self, builder: PromptBuilder) -> None:
        prompt = builder.build_quick_mood_prompt("User: fine, thanks")

        assert "User: fine, thanks" in prompt
        assert '{"mood": "positive|neutral|negative|mixed", "score": <1-10>}' in prompt
