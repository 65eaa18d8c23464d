"""
Repository pattern implementations package.
"""

from moodlog.infrastructure.database.repositories.base import BaseRepository
from moodlog.infrastructure.database.repositories.session_store import SessionStore

__all__ = [
    "BaseRepository",
    "SessionStore",
]
