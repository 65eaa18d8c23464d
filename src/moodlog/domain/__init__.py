"""
MoodLog Domain Layer

Core business entities, value objects and the error taxonomy.
These models represent the domain logic independent of infrastructure.
"""

from moodlog.domain.enums.mood import OverallMood
from moodlog.domain.models.analysis import AnalysisResult, AnalysisMetadata, QuickMoodResult
from moodlog.domain.models.session import (
    Session,
    SessionMetadata,
    SessionSummaryView,
    SessionPage,
    SessionResponse,
)
from moodlog.domain.models.mood_analytics import MoodAggregate, MoodAnalytics, MoodTrendPoint
from moodlog.domain.exceptions import (
    MoodLogError,
    FieldViolation,
    ValidationError,
    ModelInvocationError,
    PersistenceError,
    SessionNotFoundError,
)

__all__ = [
    # Enums
    "OverallMood",
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
    # Analytics
    "MoodAggregate",
    "MoodAnalytics",
    "MoodTrendPoint",
    # Errors
    "MoodLogError",
    "FieldViolation",
    "ValidationError",
    "ModelInvocationError",
    "PersistenceError",
    "SessionNotFoundError",
]
