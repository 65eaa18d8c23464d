"""
Session Domain Model

A Session is one persisted analysis of a conversation transcript.
Sessions are created once per save request and never mutated afterwards.

PRIVACY: conversation_text is the raw transcript. It is kept for audit
only and is excluded from every outward-facing projection.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from moodlog.domain.models.analysis import AnalysisResult


MAX_CONVERSATION_LENGTH: int = 50_000


def new_session_id() -> str:
    """Generate a globally unique session identifier."""
    return str(uuid4())


@dataclass(frozen=True)
class SessionMetadata:
    """
    Derived session details.

    Attributes:
        message_count: Number of speaker lines (at least 1)
        session_duration: Conversation length in minutes (at least 0)
        model: Model identifier used for the analysis
        processing_time: Analysis time in milliseconds
    """

    message_count: int
    session_duration: float = 0
    model: str = ""
    processing_time: int = 0

    def to_dict(self) -> dict:
        return {
            "messageCount": self.message_count,
            "sessionDuration": self.session_duration,
            "model": self.model,
            "processingTime": self.processing_time,
        }


@dataclass(frozen=True)
class Session:
    """
    Persisted session entity.

    Attributes:
        session_id: Unique identifier (assigned by the store if empty)
        user_id: Opaque caller-supplied user identifier
        date: Creation timestamp (UTC)
        conversation_text: Raw transcript (max 50,000 chars)
        summary: Validated analysis
        metadata: Derived session details
    """

    user_id: str
    conversation_text: str
    summary: AnalysisResult
    metadata: SessionMetadata
    session_id: str = ""
    date: datetime = field(default_factory=datetime.utcnow)

    @property
    def has_conversation_text(self) -> bool:
        return bool(self.conversation_text)

    def to_public_dict(self) -> dict:
        """Full record minus the raw transcript."""
        return {
            "sessionId": self.session_id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "summary": self.summary.to_dict(),
            "metadata": self.metadata.to_dict(),
            "hasConversationText": self.has_conversation_text,
        }


@dataclass(frozen=True)
class SessionSummaryView:
    """Listing projection of a session (summary fields only)."""

    session_id: str
    user_id: str
    date: datetime
    overall_mood: str
    mood_score: int
    message_count: int
    ai_generated_summary: str
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "sessionId": self.session_id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "overallMood": self.overall_mood,
            "moodScore": self.mood_score,
            "messageCount": self.message_count,
            "aiGeneratedSummary": self.ai_generated_summary,
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class SessionPage:
    """One page of a user's sessions, newest first."""

    items: list[SessionSummaryView]
    total: int
    limit: int
    skip: int

    @property
    def has_more(self) -> bool:
        return self.total > self.skip + self.limit

    def to_dict(self) -> dict:
        return {
            "sessions": [item.to_dict() for item in self.items],
            "pagination": {
                "total": self.total,
                "limit": self.limit,
                "skip": self.skip,
                "hasMore": self.has_more,
            },
        }


@dataclass(frozen=True)
class SessionResponse:
    """
    Result of a successful save, returned to the caller.

    Never contains the conversation text.
    """

    session: Session
    total_processing_time: int
    message: Optional[str] = "Session saved successfully"

    @property
    def session_id(self) -> str:
        return self.session.session_id

    def to_dict(self) -> dict:
        metadata = self.session.metadata.to_dict()
        metadata["totalProcessingTime"] = self.total_processing_time
        return {
            "sessionId": self.session.session_id,
            "userId": self.session.user_id,
            "date": self.session.date.isoformat(),
            "summary": self.session.summary.to_dict(),
            "metadata": metadata,
            "message": self.message,
        }
