"""
Database ORM models package.
"""

from moodlog.infrastructure.database.models.session_model import SessionModel

__all__ = [
    "SessionModel",
]
