"""
Analysis Domain Model

Structured result of running a conversation transcript through the
LLM and the response validator.

INVARIANT: Every field of an AnalysisResult is always populated with a
policy-conformant value. Records are built by ResponseValidator, which
either accepts a field or substitutes its documented default.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from moodlog.domain.enums.mood import OverallMood


# Size policy for validated analysis fields
MIN_MOOD_SCORE: int = 1
MAX_MOOD_SCORE: int = 10
DEFAULT_MOOD_SCORE: int = 5

MAX_STRESS_TRIGGERS: int = 5
MAX_STRESS_TRIGGER_LENGTH: int = 500

MAX_SUGGESTIONS: int = 5
MAX_SUGGESTION_LENGTH: int = 1000

MAX_KEY_TOPICS: int = 10
MAX_KEY_TOPIC_LENGTH: int = 100

MAX_SUMMARY_LENGTH: int = 2000


@dataclass(frozen=True)
class AnalysisMetadata:
    """
    Processing details attached by the analysis engine.

    Attributes:
        processing_time: Wall-clock analysis time in milliseconds
        model: Model identifier that produced the analysis
        user_id: Originating user id
    """

    processing_time: int
    model: str
    user_id: str

    def to_dict(self) -> dict:
        return {
            "processingTime": self.processing_time,
            "model": self.model,
            "userId": self.user_id,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """
    Validated analysis of a single conversation.

    Attributes:
        overall_mood: Dominant emotional tone
        mood_score: 1 (very negative) to 10 (very positive)
        stress_triggers: Up to 5 identified stressors
        suggestions: Up to 5 wellness suggestions
        key_topics: Up to 10 discussed themes
        ai_generated_summary: Narrative summary (max 2000 chars)
        metadata: Attached by AnalysisEngine; None straight out of the validator
    """

    overall_mood: OverallMood
    mood_score: int
    stress_triggers: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    key_topics: list[str] = field(default_factory=list)
    ai_generated_summary: str = ""
    metadata: Optional[AnalysisMetadata] = None

    def with_metadata(self, metadata: AnalysisMetadata) -> "AnalysisResult":
        """Return a copy carrying the given metadata."""
        return replace(self, metadata=metadata)

    def to_dict(self) -> dict:
        """Serialize the summary fields (without metadata)."""
        return {
            "overallMood": self.overall_mood.value,
            "moodScore": self.mood_score,
            "stressTriggers": list(self.stress_triggers),
            "suggestions": list(self.suggestions),
            "keyTopics": list(self.key_topics),
            "aiGeneratedSummary": self.ai_generated_summary,
        }


@dataclass(frozen=True)
class QuickMoodResult:
    """Lightweight mood rating for short conversations."""

    overall_mood: OverallMood
    mood_score: int

    def to_dict(self) -> dict:
        return {
            "overallMood": self.overall_mood.value,
            "moodScore": self.mood_score,
        }
