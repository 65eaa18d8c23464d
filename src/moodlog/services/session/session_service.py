"""
Session Service

Boundary-facing orchestrator for conversation sessions:
    validate -> analyze -> derive metadata -> persist -> project

ARCHITECTURE: Each call is independent. The only shared state is the
database, and every persistence step opens its own AsyncSession.
Save-frequency policies (per-day limits, cooldowns) are deliberately
not enforced here.
"""

import time
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from moodlog.config.logging_config import get_logger
from moodlog.domain.exceptions import (
    ModelInvocationError,
    PersistenceError,
    SessionNotFoundError,
    ValidationError,
)
from moodlog.domain.models.analysis import QuickMoodResult
from moodlog.domain.models.mood_analytics import MoodAnalytics
from moodlog.domain.models.session import (
    Session,
    SessionMetadata,
    SessionPage,
    SessionResponse,
    new_session_id,
)
from moodlog.infrastructure.database.connection import DatabaseManager
from moodlog.infrastructure.database.repositories.session_store import SessionStore
from moodlog.infrastructure.metrics import track_session_save
from moodlog.services.analysis.analysis_engine import AnalysisEngine
from moodlog.services.session.session_request import SaveSessionRequest

logger = get_logger(__name__)

SPEAKER_TAGS: tuple[str, ...] = ("User:", "Assistant:")


def count_messages(conversation_text: str) -> int:
    """
    Count speaker-tagged lines in a transcript.

    A line counts when it is not blank and contains "User:" or
    "Assistant:". Returns 1 when no such line exists.
    """
    count = sum(
        1
        for line in conversation_text.split("\n")
        if line.strip() and any(tag in line for tag in SPEAKER_TAGS)
    )
    return count or 1


class SessionService:
    """
    Saves and queries analyzed conversation sessions.

    Usage:
        service = SessionService(engine, db)
        response = await service.save_session({"conversationText": ..., "userId": ...})
    """

    def __init__(
        self,
        engine: AnalysisEngine,
        db: DatabaseManager,
        default_page_size: int = 10,
        max_page_size: int = 100,
        default_analytics_days: int = 30,
    ) -> None:
        self._engine = engine
        self._db = db
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        self._default_analytics_days = default_analytics_days

    async def save_session(self, request: Mapping[str, Any] | SaveSessionRequest) -> SessionResponse:
        """
        Analyze and persist a conversation.

        Args:
            request: Raw payload ({conversationText, userId,
                sessionDuration?, messageCount?}) or a validated request

        Returns:
            SessionResponse without the conversation text

        Raises:
            ValidationError: Input malformed (nothing analyzed or stored)
            ModelInvocationError: LLM provider unavailable
            PersistenceError: Session could not be stored
        """
        start_time = time.perf_counter()

        try:
            if not isinstance(request, SaveSessionRequest):
                request = SaveSessionRequest.from_payload(request)
        except ValidationError as e:
            track_session_save("invalid")
            logger.info("Session save rejected", fields=e.fields)
            raise

        session_id = new_session_id()
        message_count = request.message_count or count_messages(request.conversation_text)

        logger.info(
            "Processing session",
            session_id=session_id,
            user_id=request.user_id,
            conversation_length=len(request.conversation_text),
        )

        try:
            analysis = await self._engine.analyze(request.conversation_text, request.user_id)
        except ModelInvocationError:
            track_session_save("model_unavailable")
            raise

        session = Session(
            session_id=session_id,
            user_id=request.user_id,
            date=datetime.utcnow(),
            conversation_text=request.conversation_text,
            summary=analysis,
            metadata=SessionMetadata(
                message_count=message_count,
                session_duration=request.session_duration or 0,
                model=analysis.metadata.model if analysis.metadata else self._engine.model,
                processing_time=analysis.metadata.processing_time if analysis.metadata else 0,
            ),
        )

        try:
            async with self._db.session() as db_session:
                stored = await SessionStore(db_session).save(session)
        except PersistenceError:
            track_session_save("persistence_error")
            raise
        except SQLAlchemyError as e:
            track_session_save("persistence_error")
            logger.error("Session commit failed", session_id=session_id, error=str(e))
            raise PersistenceError("Session storage unavailable", cause=e) from e

        elapsed = time.perf_counter() - start_time
        total_processing_time = int(elapsed * 1000)
        track_session_save("saved", elapsed)

        logger.info(
            "Session saved",
            session_id=stored.session_id,
            user_id=stored.user_id,
            message_count=message_count,
            total_processing_time_ms=total_processing_time,
        )

        return SessionResponse(session=stored, total_processing_time=total_processing_time)

    async def get_session(self, session_id: str) -> dict[str, Any]:
        """
        Fetch a stored session, projected without the transcript.

        Raises:
            SessionNotFoundError: No session with this id
            PersistenceError: Storage unavailable
        """
        try:
            async with self._db.session() as db_session:
                session = await SessionStore(db_session).find_by_id(session_id)
        except SQLAlchemyError as e:
            logger.error("Session lookup failed", session_id=session_id, error=str(e))
            raise PersistenceError("Failed to fetch session", cause=e) from e

        if session is None:
            raise SessionNotFoundError(session_id)
        return session.to_public_dict()

    async def list_user_sessions(
        self,
        user_id: str,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> SessionPage:
        """Page through a user's sessions, newest first."""
        limit = self._default_page_size if limit is None else limit
        limit = max(1, min(limit, self._max_page_size))
        skip = max(0, skip)

        try:
            async with self._db.session() as db_session:
                return await SessionStore(db_session).find_by_user(user_id, limit=limit, skip=skip)
        except SQLAlchemyError as e:
            logger.error("Session listing failed", user_id=user_id, error=str(e))
            raise PersistenceError("Failed to fetch sessions", cause=e) from e

    async def mood_analytics(self, user_id: str, days: Optional[int] = None) -> MoodAnalytics:
        """Aggregate a user's moods over the trailing ``days`` days."""
        days = self._default_analytics_days if days is None else days
        since = datetime.utcnow() - timedelta(days=days)

        try:
            async with self._db.session() as db_session:
                aggregate = await SessionStore(db_session).aggregate_mood(user_id, since)
        except SQLAlchemyError as e:
            logger.error("Mood analytics failed", user_id=user_id, error=str(e))
            raise PersistenceError("Failed to fetch analytics", cause=e) from e

        return MoodAnalytics(days=days, aggregate=aggregate)

    async def quick_mood(self, conversation_text: str) -> QuickMoodResult:
        """Quick mood rating without persisting anything."""
        return await self._engine.quick_mood(conversation_text)
