"""Domain models package."""

from moodlog.domain.models.analysis import (
    AnalysisResult,
    AnalysisMetadata,
    QuickMoodResult,
)
from moodlog.domain.models.session import (
    Session,
    SessionMetadata,
    SessionSummaryView,
    SessionPage,
    SessionResponse,
    new_session_id,
)
from moodlog.domain.models.mood_analytics import (
    MoodAggregate,
    MoodAnalytics,
    MoodTrendPoint,
)

__all__ = [
    # Analysis
    "AnalysisResult",
    "AnalysisMetadata",
    "QuickMoodResult",
    # Session
    "Session",
    "SessionMetadata",
    "SessionSummaryView",
    "SessionPage",
    "SessionResponse",
    "new_session_id",
    # Analytics
    "MoodAggregate",
    "MoodAnalytics",
    "MoodTrendPoint",
]
