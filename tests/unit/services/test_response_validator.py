"""
Unit Tests for Response Validator

Tests parsing and coercion of untrusted model output.
"""

import json

import pytest

from moodlog.domain.enums.mood import OverallMood
from moodlog.services.analysis.response_validator import ResponseValidator


class TestResponseValidatorParse:
    """Test suite for ResponseValidator.parse."""

    @pytest.fixture
    def validator(self) -> ResponseValidator:
        return ResponseValidator()

    def test_valid_object_passes_through(self, validator: ResponseValidator) -> None:
        """Test that a well-formed response is kept as is."""
        raw = json.dumps({
            "overallMood": "negative",
            "moodScore": 3,
            "stressTriggers": ["exams"],
            "suggestions": ["Sleep more"],
            "keyTopics": ["school"],
            "aiGeneratedSummary": "Stressed about exams.",
        })

        result = validator.parse(raw)

        assert result.overall_mood == OverallMood.NEGATIVE
        assert result.mood_score == 3
        assert result.stress_triggers == ["exams"]
        assert result.suggestions == ["Sleep more"]
        assert result.key_topics == ["school"]
        assert result.ai_generated_summary == "Stressed about exams."
        assert result.metadata is None

    def test_object_wrapped_in_prose_and_fences(self, validator: ResponseValidator) -> None:
        """Test that the object is recovered from surrounding text."""
        raw = (
            "Here is the analysis:\n```json\n"
            '{"overallMood": "mixed", "moodScore": 6, "aiGeneratedSummary": "Ups and downs."}'
            "\n```\nHope this helps."
        )

        result = validator.parse(raw)

        assert result.overall_mood == OverallMood.MIXED
        assert result.mood_score == 6
        assert result.ai_generated_summary == "Ups and downs."

    def test_invalid_mood_and_score_use_defaults(self, validator: ResponseValidator) -> None:
        """Test that bad fields are replaced individually."""
        raw = '{"overallMood": "Happy", "moodScore": 15, "aiGeneratedSummary": "x"}'

        result = validator.parse(raw)

        assert result.overall_mood == OverallMood.NEUTRAL
        assert result.mood_score == 5
        assert result.stress_triggers == []
        assert result.suggestions == []
        assert result.key_topics == []
        assert result.ai_generated_summary == "x"

    def test_mood_match_is_case_sensitive(self, validator: ResponseValidator) -> None:
        result = validator.parse('{"overallMood": "POSITIVE", "moodScore": 8}')

        assert result.overall_mood == OverallMood.NEUTRAL
        assert result.mood_score == 8

    def test_missing_summary_uses_default(self, validator: ResponseValidator) -> None:
        result = validator.parse('{"overallMood": "positive", "aiGeneratedSummary": ""}')

        assert result.ai_generated_summary == ResponseValidator.DEFAULT_SUMMARY

    def test_lists_are_truncated(self, validator: ResponseValidator) -> None:
        """Test item count and item length limits."""
        raw = json.dumps({
            "stressTriggers": [f"trigger {i}" for i in range(8)],
            "suggestions": ["s" * 1500] + [f"tip {i}" for i in range(6)],
            "keyTopics": [f"topic {i}" for i in range(12)] ,
            "aiGeneratedSummary": "y" * 2500,
        })

        result = validator.parse(raw)

        assert result.stress_triggers == [f"trigger {i}" for i in range(5)]
        assert len(result.suggestions) == 5
        assert len(result.suggestions[0]) == 1000
        assert result.key_topics == [f"topic {i}" for i in range(10)]
        assert len(result.ai_generated_summary) == 2000

    def test_non_list_collections_become_empty(self, validator: ResponseValidator) -> None:
        raw = '{"stressTriggers": "work", "suggestions": {"a": 1}, "keyTopics": null}'

        result = validator.parse(raw)

        assert result.stress_triggers == []
        assert result.suggestions == []
        assert result.key_topics == []

    def test_non_string_items_are_stringified(self, validator: ResponseValidator) -> None:
        result = validator.parse('{"keyTopics": [42, true, null, "sleep"]}')

        assert result.key_topics == ["42", "true", "null", "sleep"]

    def test_unparseable_text_returns_fallback(self, validator: ResponseValidator) -> None:
        """Test that prose without JSON yields the fallback record."""
        result = validator.parse("I'm sorry, I can't help with that.")

        assert result == validator.fallback()
        assert result.overall_mood == OverallMood.NEUTRAL
        assert result.mood_score == 5
        assert result.stress_triggers == []
        assert result.suggestions == [
            "Continue expressing your feelings",
            "Practice mindfulness exercises",
            "Maintain regular sleep schedule",
        ]
        assert result.key_topics == ["general wellness", "emotional support"]
        assert result.ai_generated_summary.startswith("The user engaged in a wellness conversation.")

    @pytest.mark.parametrize("raw", [
        "",
        "{not json}",
        '{"overallMood": "positive"',
        "[1, 2, 3]",
    ])
    def test_malformed_responses_return_fallback(self, validator: ResponseValidator, raw: str) -> None:
        assert validator.parse(raw) == validator.fallback()

    def test_deeply_nested_payload_returns_fallback(self, validator: ResponseValidator) -> None:
        """Test that decoder stack exhaustion does not escape parse()."""
        raw = '{"keyTopics": ' + "[" * 200_000 + "]" * 200_000 + "}"

        assert validator.parse(raw) == validator.fallback()

    @pytest.mark.parametrize("summary", [{}, [], 0, None])
    def test_empty_summary_values_use_default(self, validator: ResponseValidator, summary) -> None:
        result = validator.parse(json.dumps({"aiGeneratedSummary": summary}))

        assert result.ai_generated_summary == ResponseValidator.DEFAULT_SUMMARY

    def test_greedy_match_spanning_two_objects_falls_back(self, validator: ResponseValidator) -> None:
        """Test that two separate objects are not silently merged."""
        raw = '{"overallMood": "positive"} and also {"moodScore": 9}'

        assert validator.parse(raw) == validator.fallback()


class TestMoodScoreValidation:
    """Test suite for mood score coercion."""

    @pytest.mark.parametrize("value,expected", [
        (1, 1),
        (10, 10),
        (7.0, 7),
        ("7", 7),
        (" 4 ", 4),
    ])
    def test_accepted_scores(self, value, expected) -> None:
        assert ResponseValidator.validate_mood_score(value) == expected

    @pytest.mark.parametrize("value", [0, 11, -3, 6.5, "abc", "", None, True, False, float("nan"), [7]])
    def test_rejected_scores(self, value) -> None:
        assert ResponseValidator.validate_mood_score(value) is None


class TestQuickMoodParse:
    """Test suite for quick mood parsing."""

    @pytest.fixture
    def validator(self) -> ResponseValidator:
        return ResponseValidator()

    def test_valid_quick_mood(self, validator: ResponseValidator) -> None:
        result = validator.parse_quick_mood('{"mood": "negative", "score": 2}')

        assert result.overall_mood == OverallMood.NEGATIVE
        assert result.mood_score == 2

    def test_invalid_quick_mood_defaults(self, validator: ResponseValidator) -> None:
        result = validator.parse_quick_mood("no idea")

        assert result.overall_mood == OverallMood.NEUTRAL
        assert result.mood_score == 5
