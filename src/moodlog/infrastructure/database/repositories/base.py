"""
Base Repository Pattern

Provides generic async data access operations for all repositories.
Implements the Repository pattern for clean separation between
domain logic and data access.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from moodlog.infrastructure.database.connection import Base

# Type variable for model types
ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Generic base repository with async operations.

    Subclass and specify the model type for entity-specific repositories.

    Usage:
        class SessionStore(BaseRepository[SessionModel]):
            pass

        store = SessionStore(session)
        row = await store.get_one_by(SessionModel.session_id == "...")
    """

    def __init__(self, model: Type[ModelT], session: AsyncSession) -> None:
        """
        Initialize repository with model class and session.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self._model = model
        self._session = session

    async def get_one_by(self, *criteria: Any, options: tuple = ()) -> Optional[ModelT]:
        """
        Get a single entity matching all criteria.

        Args:
            criteria: SQLAlchemy filter expressions
            options: Loader options (e.g. undefer)

        Returns:
            Entity if found, None otherwise
        """
        query = select(self._model).where(*criteria)
        if options:
            query = query.options(*options)
        result = await self._session.execute(query)
        return result.scalar_one_or_none()

    async def create(self, entity: ModelT) -> ModelT:
        """
        Insert a new entity and flush so constraint violations surface here.

        Args:
            entity: Entity instance to create

        Returns:
            Created entity with generated keys populated
        """
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def count(self, *criteria: Any) -> int:
        """
        Count entities matching all criteria.

        Returns:
            Matching entity count
        """
        result = await self._session.execute(
            select(func.count()).select_from(self._model).where(*criteria)
        )
        return result.scalar_one()
