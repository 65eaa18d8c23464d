"""
Session Store

Data access layer for persisted sessions: append-only writes, lookup by
id, paginated per-user history and mood aggregation over a time window.

Ordering: "newest first" sorts by date descending; rows sharing a
timestamp keep insertion order (surrogate key ascending).
"""

from dataclasses import replace
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from moodlog.config.logging_config import get_logger
from moodlog.domain.enums.mood import OverallMood
from moodlog.domain.exceptions import PersistenceError
from moodlog.domain.models.analysis import (
    MAX_KEY_TOPICS,
    MAX_KEY_TOPIC_LENGTH,
    MAX_MOOD_SCORE,
    MAX_STRESS_TRIGGERS,
    MAX_STRESS_TRIGGER_LENGTH,
    MAX_SUGGESTIONS,
    MAX_SUGGESTION_LENGTH,
    MAX_SUMMARY_LENGTH,
    MIN_MOOD_SCORE,
)
from moodlog.domain.models.mood_analytics import MoodAggregate, MoodTrendPoint
from moodlog.domain.models.session import (
    MAX_CONVERSATION_LENGTH,
    Session,
    SessionPage,
    new_session_id,
)
from moodlog.infrastructure.database.models.session_model import SessionModel
from moodlog.infrastructure.database.repositories.base import BaseRepository

logger = get_logger(__name__)


class SessionStore(BaseRepository[SessionModel]):
    """
    Repository for session records.

    The store is the only owner of persisted sessions. Uniqueness of
    session ids is enforced by the database, not by application locks.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with session model."""
        super().__init__(SessionModel, session)

    async def save(self, session: Session) -> Session:
        """
        Persist a new session.

        Assigns a session id when the record has none.

        Args:
            session: Fully built domain session

        Returns:
            The stored session

        Raises:
            PersistenceError: On constraint violation or storage failure
        """
        if not session.session_id:
            session = replace(session, session_id=new_session_id())

        self._check_constraints(session)

        try:
            row = await self.create(SessionModel.from_domain(session))
        except IntegrityError as e:
            logger.warning(
                "Session constraint violation",
                session_id=session.session_id,
                error_type=type(e.orig).__name__ if e.orig else type(e).__name__,
            )
            raise PersistenceError(
                f"Session {session.session_id} violates a storage constraint",
                cause=e,
            ) from e
        except SQLAlchemyError as e:
            logger.error("Session write failed", session_id=session.session_id, error=str(e))
            raise PersistenceError("Session storage unavailable", cause=e) from e

        logger.debug("Session persisted", session_id=row.session_id, user_id=row.user_id)
        return session

    async def find_by_id(self, session_id: str) -> Optional[Session]:
        """
        Get a session by its public id, including the transcript.

        Returns:
            Session if found, None otherwise
        """
        row = await self.get_one_by(
            SessionModel.session_id == session_id,
            options=(undefer(SessionModel.conversation_text),),
        )
        return row.to_domain() if row else None

    async def find_by_user(
        self,
        user_id: str,
        limit: int = 10,
        skip: int = 0,
    ) -> SessionPage:
        """
        Get a page of a user's sessions, newest first.

        Args:
            user_id: User whose sessions to list
            limit: Maximum items on the page
            skip: Items to skip

        Returns:
            SessionPage with summary projections and total count
        """
        result = await self._session.execute(
            select(SessionModel)
            .where(SessionModel.user_id == user_id)
            .order_by(SessionModel.date.desc(), SessionModel.id.asc())
            .offset(skip)
            .limit(limit)
        )
        rows = result.scalars().all()
        total = await self.count(SessionModel.user_id == user_id)

        return SessionPage(
            items=[row.to_summary_view() for row in rows],
            total=total,
            limit=limit,
            skip=skip,
        )

    async def aggregate_mood(self, user_id: str, since: datetime) -> MoodAggregate:
        """
        Aggregate a user's moods for sessions dated on or after ``since``.

        Returns:
            MoodAggregate with count, mean score, distribution and an
            oldest-first trend. Empty windows give count 0 and average 0.
        """
        result = await self._session.execute(
            select(SessionModel.date, SessionModel.overall_mood, SessionModel.mood_score)
            .where(
                SessionModel.user_id == user_id,
                SessionModel.date >= since,
            )
            .order_by(SessionModel.date.asc(), SessionModel.id.asc())
        )

        points = [
            MoodTrendPoint(date=row.date, mood=row.overall_mood, score=row.mood_score)
            for row in result.all()
        ]
        return MoodAggregate.from_points(points)

    @staticmethod
    def _check_constraints(session: Session) -> None:
        """Reject records that would violate the stored schema."""
        violations: list[str] = []
        summary = session.summary

        if len(session.conversation_text) > MAX_CONVERSATION_LENGTH:
            violations.append("conversation_text exceeds maximum length")
        if not session.user_id:
            violations.append("user_id is required")
        if OverallMood.from_value(summary.overall_mood) is None:
            violations.append("overall_mood is not a valid mood")
        if not (MIN_MOOD_SCORE <= summary.mood_score <= MAX_MOOD_SCORE):
            violations.append("mood_score out of range")

        for name, values, max_items, max_length in (
            ("stress_triggers", summary.stress_triggers, MAX_STRESS_TRIGGERS, MAX_STRESS_TRIGGER_LENGTH),
            ("suggestions", summary.suggestions, MAX_SUGGESTIONS, MAX_SUGGESTION_LENGTH),
            ("key_topics", summary.key_topics, MAX_KEY_TOPICS, MAX_KEY_TOPIC_LENGTH),
        ):
            if len(values) > max_items or any(len(v) > max_length for v in values):
                violations.append(f"{name} exceeds size policy")

        if not summary.ai_generated_summary or len(summary.ai_generated_summary) > MAX_SUMMARY_LENGTH:
            violations.append("ai_generated_summary missing or too long")
        if session.metadata.message_count < 1:
            violations.append("message_count must be at least 1")
        if session.metadata.session_duration < 0:
            violations.append("session_duration must not be negative")

        if violations:
            raise PersistenceError(
                f"Session {session.session_id} rejected: " + "; ".join(violations)
            )
