"""
Integration Tests - Session Store

Runs the repository against a real SQLite database.
"""

from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from moodlog.domain.enums.mood import OverallMood
from moodlog.domain.exceptions import PersistenceError
from moodlog.domain.models.analysis import AnalysisResult
from moodlog.domain.models.session import Session, SessionMetadata, new_session_id
from moodlog.infrastructure.database import DatabaseManager
from moodlog.infrastructure.database.repositories import SessionStore

from tests.fakes import SAMPLE_CONVERSATION


def make_session(
    user_id: str = "user-1",
    date: datetime | None = None,
    mood: OverallMood = OverallMood.POSITIVE,
    score: int = 7,
    session_id: str | None = None,
    session_duration: float = 5,
) -> Session:
    return Session(
        session_id=new_session_id() if session_id is None else session_id,
        user_id=user_id,
        date=date or datetime.utcnow(),
        conversation_text=SAMPLE_CONVERSATION,
        summary=AnalysisResult(
            overall_mood=mood,
            mood_score=score,
            stress_triggers=["work"],
            suggestions=["Rest"],
            key_topics=["job"],
            ai_generated_summary="Summary.",
        ),
        metadata=SessionMetadata(
            message_count=3,
            session_duration=session_duration,
            model="fake-model-1",
            processing_time=12,
        ),
    )


async def save(db: DatabaseManager, session: Session) -> Session:
    async with db.session() as db_session:
        return await SessionStore(db_session).save(session)


class TestSessionStoreSave:
    """Test suite for SessionStore.save and find_by_id."""

    async def test_save_and_find_round_trip(self, db: DatabaseManager) -> None:
        session = make_session()

        await save(db, session)
        async with db.session() as db_session:
            found = await SessionStore(db_session).find_by_id(session.session_id)

        assert found is not None
        assert found.session_id == session.session_id
        assert found.conversation_text == SAMPLE_CONVERSATION
        assert found.summary.overall_mood == OverallMood.POSITIVE
        assert found.summary.key_topics == ["job"]
        assert found.metadata.message_count == 3

    async def test_missing_id_is_assigned(self, db: DatabaseManager) -> None:
        stored = await save(db, make_session(session_id=""))

        assert stored.session_id

    async def test_find_unknown_returns_none(self, db: DatabaseManager) -> None:
        async with db.session() as db_session:
            assert await SessionStore(db_session).find_by_id("does-not-exist") is None

    async def test_duplicate_session_id_rejected(self, db: DatabaseManager) -> None:
        session = make_session()
        await save(db, session)

        with pytest.raises(PersistenceError):
            await save(db, replace(session, user_id="user-2"))

    @pytest.mark.parametrize("changes", [
        {"metadata": SessionMetadata(message_count=0)},
        {"metadata": SessionMetadata(message_count=1, session_duration=-1)},
        {"conversation_text": "x" * 50_001},
        {"user_id": ""},
    ])
    async def test_constraint_violations_rejected(self, db: DatabaseManager, changes: dict) -> None:
        with pytest.raises(PersistenceError):
            await save(db, replace(make_session(), **changes))

    async def test_out_of_range_score_rejected(self, db: DatabaseManager) -> None:
        with pytest.raises(PersistenceError):
            await save(db, make_session(score=11))


class TestSessionStoreQueries:
    """Test suite for per-user listing and mood aggregation."""

    async def test_find_by_user_newest_first(self, db: DatabaseManager) -> None:
        now = datetime.utcnow()
        oldest = await save(db, make_session(date=now - timedelta(days=2)))
        newest = await save(db, make_session(date=now))
        middle = await save(db, make_session(date=now - timedelta(days=1)))
        await save(db, make_session(user_id="someone-else"))

        async with db.session() as db_session:
            page = await SessionStore(db_session).find_by_user("user-1")

        assert [item.session_id for item in page.items] == [
            newest.session_id,
            middle.session_id,
            oldest.session_id,
        ]
        assert page.total == 3
        assert page.has_more is False

    async def test_equal_dates_keep_insertion_order(self, db: DatabaseManager) -> None:
        when = datetime(2026, 3, 1, 12, 0, 0)
        first = await save(db, make_session(date=when))
        second = await save(db, make_session(date=when))

        async with db.session() as db_session:
            page = await SessionStore(db_session).find_by_user("user-1")

        assert [item.session_id for item in page.items] == [first.session_id, second.session_id]

    async def test_pagination(self, db: DatabaseManager) -> None:
        now = datetime.utcnow()
        for offset in range(5):
            await save(db, make_session(date=now - timedelta(hours=offset)))

        async with db.session() as db_session:
            page = await SessionStore(db_session).find_by_user("user-1", limit=2, skip=2)

        assert len(page.items) == 2
        assert page.total == 5
        assert page.has_more is True
        assert page.to_dict()["pagination"] == {"total": 5, "limit": 2, "skip": 2, "hasMore": True}

    async def test_listing_excludes_transcript(self, db: DatabaseManager) -> None:
        await save(db, make_session())

        async with db.session() as db_session:
            page = await SessionStore(db_session).find_by_user("user-1")

        assert "conversationText" not in page.to_dict()["sessions"][0]

    async def test_aggregate_mood(self, db: DatabaseManager) -> None:
        now = datetime.utcnow()
        await save(db, make_session(date=now - timedelta(days=3), mood=OverallMood.NEGATIVE, score=3))
        await save(db, make_session(date=now - timedelta(days=1), mood=OverallMood.POSITIVE, score=8))
        await save(db, make_session(date=now, mood=OverallMood.POSITIVE, score=6))
        await save(db, make_session(date=now - timedelta(days=40), mood=OverallMood.MIXED, score=1))

        async with db.session() as db_session:
            aggregate = await SessionStore(db_session).aggregate_mood(
                "user-1", since=now - timedelta(days=30)
            )

        assert aggregate.count == 3
        assert aggregate.average_score == pytest.approx(17 / 3)
        assert aggregate.mood_distribution == {"negative": 1, "positive": 2}
        assert [point.score for point in aggregate.trend] == [3, 8, 6]

    async def test_aggregate_mood_empty_window(self, db: DatabaseManager) -> None:
        async with db.session() as db_session:
            aggregate = await SessionStore(db_session).aggregate_mood(
                "nobody", since=datetime.utcnow() - timedelta(days=30)
            )

        assert aggregate.count == 0
        assert aggregate.average_score == 0
        assert aggregate.mood_distribution == {}
        assert aggregate.trend == []
