"""
Session Database Model

SQLAlchemy ORM model for analyzed conversation sessions.
Analysis lists are stored as JSON (JSONB on PostgreSQL).

PRIVACY: conversation_text holds the raw transcript and should be
encrypted at rest. It is never copied into API projections.
"""

from datetime import datetime

from sqlalchemy import (
    JSON,
    BigInteger,
    CheckConstraint,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from moodlog.domain.enums.mood import OverallMood
from moodlog.domain.models.analysis import AnalysisResult
from moodlog.domain.models.session import Session, SessionMetadata, SessionSummaryView
from moodlog.infrastructure.database.connection import Base

JSONList = JSON().with_variant(JSONB(), "postgresql")


class SessionModel(Base):
    """
    Session table ORM model.

    One row per saved conversation. Rows are append-only.

    Table: sessions
    """

    __tablename__ = "sessions"
    __table_args__ = (
        Index("ix_sessions_user_id_date", "user_id", "date"),
        Index("ix_sessions_overall_mood_date", "overall_mood", "date"),
        CheckConstraint("mood_score >= 1 AND mood_score <= 10", name="ck_sessions_mood_score"),
        CheckConstraint("message_count >= 1", name="ck_sessions_message_count"),
        CheckConstraint("session_duration >= 0", name="ck_sessions_session_duration"),
    )

    # Surrogate key; also the insertion order used to break date ties
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    session_id: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
        doc="Public session identifier"
    )
    user_id: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        doc="Opaque caller-supplied user id"
    )
    date: Mapped[datetime] = mapped_column(
        DateTime(),
        nullable=False,
        index=True,
        doc="Creation timestamp (UTC)"
    )
    conversation_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        deferred=True,
        doc="Raw transcript (max 50,000 chars)"
    )

    # Analysis summary
    overall_mood: Mapped[str] = mapped_column(String(10), nullable=False)
    mood_score: Mapped[int] = mapped_column(Integer, nullable=False)
    stress_triggers: Mapped[list] = mapped_column(JSONList, nullable=False, default=list)
    suggestions: Mapped[list] = mapped_column(JSONList, nullable=False, default=list)
    key_topics: Mapped[list] = mapped_column(JSONList, nullable=False, default=list)
    ai_generated_summary: Mapped[str] = mapped_column(Text, nullable=False)

    # Session metadata
    message_count: Mapped[int] = mapped_column(Integer, nullable=False)
    session_duration: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    model: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    processing_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<SessionModel(session_id={self.session_id}, user_id={self.user_id}, mood='{self.overall_mood}')>"

    @classmethod
    def from_domain(cls, session: Session) -> "SessionModel":
        """Build a row from a domain session."""
        summary = session.summary
        return cls(
            session_id=session.session_id,
            user_id=session.user_id,
            date=session.date,
            conversation_text=session.conversation_text,
            overall_mood=str(summary.overall_mood),
            mood_score=summary.mood_score,
            stress_triggers=list(summary.stress_triggers),
            suggestions=list(summary.suggestions),
            key_topics=list(summary.key_topics),
            ai_generated_summary=summary.ai_generated_summary,
            message_count=session.metadata.message_count,
            session_duration=session.metadata.session_duration,
            model=session.metadata.model,
            processing_time=session.metadata.processing_time,
        )

    def to_domain(self) -> Session:
        """Convert the row back to a domain session."""
        return Session(
            session_id=self.session_id,
            user_id=self.user_id,
            date=self.date,
            conversation_text=self.conversation_text,
            summary=AnalysisResult(
                overall_mood=OverallMood(self.overall_mood),
                mood_score=self.mood_score,
                stress_triggers=list(self.stress_triggers or []),
                suggestions=list(self.suggestions or []),
                key_topics=list(self.key_topics or []),
                ai_generated_summary=self.ai_generated_summary,
            ),
            metadata=SessionMetadata(
                message_count=self.message_count,
                session_duration=self.session_duration,
                model=self.model,
                processing_time=self.processing_time,
            ),
        )

    def to_summary_view(self) -> SessionSummaryView:
        """Listing projection (no transcript)."""
        return SessionSummaryView(
            session_id=self.session_id,
            user_id=self.user_id,
            date=self.date,
            overall_mood=self.overall_mood,
            mood_score=self.mood_score,
            message_count=self.message_count,
            ai_generated_summary=self.ai_generated_summary,
            suggestions=list(self.suggestions or []),
        )
