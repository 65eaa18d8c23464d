"""
Session Services

Validation, analysis and persistence of conversation sessions.
"""

from moodlog.services.session.session_request import SaveSessionRequest
from moodlog.services.session.session_service import SessionService, count_messages

__all__ = [
    "SaveSessionRequest",
    "SessionService",
    "count_messages",
]
