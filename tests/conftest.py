"""Tests configuration and fixtures."""

from pathlib import Path
from typing import AsyncGenerator

import pytest

from moodlog.infrastructure.database import DatabaseManager
from moodlog.services.analysis.analysis_engine import AnalysisEngine
from moodlog.services.session.session_service import SessionService

from tests.fakes import FakeLLMProvider


@pytest.fixture
def fake_provider() -> FakeLLMProvider:
    """Provider answering with a valid analysis."""
    return FakeLLMProvider()


@pytest.fixture
def analysis_engine(fake_provider: FakeLLMProvider) -> AnalysisEngine:
    return AnalysisEngine(fake_provider)


@pytest.fixture
async def db(tmp_path: Path) -> AsyncGenerator[DatabaseManager, None]:
    """
    File-backed SQLite database with the schema created.

    A file (not :memory:) lets concurrent sessions see each other's commits.
    """
    manager = DatabaseManager()
    await manager.initialize(f"sqlite+aiosqlite:///{tmp_path / 'moodlog.db'}")
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
def session_service(analysis_engine: AnalysisEngine, db: DatabaseManager) -> SessionService:
    return SessionService(analysis_engine, db)
