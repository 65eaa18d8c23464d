"""
Response Validator

Sole gate between untrusted model text and the service's data contract.
Turns a raw completion into a fully populated AnalysisResult.

ARCHITECTURE: parse() never raises. Each field is validated on its own
and replaced by its documented default when invalid. When no JSON object
can be recovered at all, the deterministic fallback record is returned.
"""

import json
import math
import re
from typing import Any, Optional

from moodlog.config.logging_config import get_logger
from moodlog.domain.enums.mood import DEFAULT_MOOD, OverallMood
from moodlog.domain.models.analysis import (
    AnalysisResult,
    QuickMoodResult,
    DEFAULT_MOOD_SCORE,
    MIN_MOOD_SCORE,
    MAX_MOOD_SCORE,
    MAX_STRESS_TRIGGERS,
    MAX_STRESS_TRIGGER_LENGTH,
    MAX_SUGGESTIONS,
    MAX_SUGGESTION_LENGTH,
    MAX_KEY_TOPICS,
    MAX_KEY_TOPIC_LENGTH,
    MAX_SUMMARY_LENGTH,
)
from moodlog.infrastructure.metrics import track_analysis_fallback

logger = get_logger(__name__)

# Greedy: first "{" to last "}"
_JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


class ResponseValidator:
    """
    Validates and coerces LLM output into analysis records.

    Usage:
        validator = ResponseValidator()
        result = validator.parse(raw_model_text)
    """

    DEFAULT_SUMMARY: str = "Conversation analyzed successfully."

    FALLBACK_SUGGESTIONS: tuple[str, ...] = (
        "Continue expressing your feelings",
        "Practice mindfulness exercises",
        "Maintain regular sleep schedule",
    )

    FALLBACK_TOPICS: tuple[str, ...] = (
        "general wellness",
        "emotional support",
    )

    FALLBACK_SUMMARY: str = (
        "The user engaged in a wellness conversation. Analysis details could "
        "not be fully processed, but the interaction shows positive engagement "
        "with mental health support."
    )

    def parse(self, raw_text: str) -> AnalysisResult:
        """
        Parse raw model output into an AnalysisResult.

        Args:
            raw_text: Completion text, possibly wrapped in prose or fences

        Returns:
            Validated record (never partially populated), without metadata
        """
        data = self._extract_json_object(raw_text)
        if data is None:
            track_analysis_fallback("unparseable")
            logger.warning(
                "Model response could not be parsed, using fallback analysis",
                response_length=len(raw_text) if isinstance(raw_text, str) else 0,
            )
            return self.fallback()

        return AnalysisResult(
            overall_mood=self.validate_mood(data.get("overallMood")) or DEFAULT_MOOD,
            mood_score=self.validate_mood_score(data.get("moodScore")) or DEFAULT_MOOD_SCORE,
            stress_triggers=self._bounded_strings(
                data.get("stressTriggers"),
                MAX_STRESS_TRIGGERS,
                MAX_STRESS_TRIGGER_LENGTH,
            ),
            suggestions=self._bounded_strings(
                data.get("suggestions"),
                MAX_SUGGESTIONS,
                MAX_SUGGESTION_LENGTH,
            ),
            key_topics=self._bounded_strings(
                data.get("keyTopics"),
                MAX_KEY_TOPICS,
                MAX_KEY_TOPIC_LENGTH,
            ),
            ai_generated_summary=self._summary(data.get("aiGeneratedSummary")),
        )

    def parse_quick_mood(self, raw_text: str) -> QuickMoodResult:
        """Parse a quick mood response ({"mood": ..., "score": ...})."""
        data = self._extract_json_object(raw_text)
        if data is None:
            return self.quick_mood_fallback()

        return QuickMoodResult(
            overall_mood=self.validate_mood(data.get("mood")) or DEFAULT_MOOD,
            mood_score=self.validate_mood_score(data.get("score")) or DEFAULT_MOOD_SCORE,
        )

    def fallback(self) -> AnalysisResult:
        """Deterministic record used when the response is unusable."""
        return AnalysisResult(
            overall_mood=DEFAULT_MOOD,
            mood_score=DEFAULT_MOOD_SCORE,
            stress_triggers=[],
            suggestions=list(self.FALLBACK_SUGGESTIONS),
            key_topics=list(self.FALLBACK_TOPICS),
            ai_generated_summary=self.FALLBACK_SUMMARY,
        )

    @staticmethod
    def quick_mood_fallback() -> QuickMoodResult:
        return QuickMoodResult(overall_mood=DEFAULT_MOOD, mood_score=DEFAULT_MOOD_SCORE)

    @staticmethod
    def validate_mood(value: Any) -> Optional[OverallMood]:
        """Exact, case-sensitive enum match; None otherwise."""
        return OverallMood.from_value(value)

    @staticmethod
    def validate_mood_score(value: Any) -> Optional[int]:
        """
        Coerce a score to an integer in [1, 10].

        Accepts ints, integral floats (7.0) and numeric strings ("7").
        Booleans, fractions and anything out of range return None.
        """
        if value is None or isinstance(value, bool):
            return None

        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                value = float(text)
            except ValueError:
                return None

        if isinstance(value, float):
            if not math.isfinite(value) or not value.is_integer():
                return None
            value = int(value)

        if not isinstance(value, int):
            return None

        if MIN_MOOD_SCORE <= value <= MAX_MOOD_SCORE:
            return value
        return None

    @staticmethod
    def _extract_json_object(raw_text: Any) -> Optional[dict]:
        if not isinstance(raw_text, str):
            return None

        match = _JSON_OBJECT_PATTERN.search(raw_text)
        if not match:
            return None

        try:
            parsed = json.loads(match.group(0))
        except (ValueError, RecursionError):
            # Deeply nested payloads exhaust the decoder stack
            return None

        if not isinstance(parsed, dict):
            return None
        return parsed

    @classmethod
    def _bounded_strings(cls, value: Any, max_items: int, max_length: int) -> list[str]:
        if not isinstance(value, list):
            return []
        return [cls._stringify(item)[:max_length] for item in value[:max_items]]

    @classmethod
    def _summary(cls, value: Any) -> str:
        # {} and [] count as missing here, same as "" and null
        if not value:
            return cls.DEFAULT_SUMMARY
        return cls._stringify(value)[:MAX_SUMMARY_LENGTH]

    @staticmethod
    def _stringify(value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, bool) or value is None or isinstance(value, (dict, list)):
            try:
                return json.dumps(value, ensure_ascii=False)
            except RecursionError:
                return ""
        return str(value)
