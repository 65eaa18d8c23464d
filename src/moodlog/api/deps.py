"""
API Dependencies

Resolves long-lived components built during application startup.
Components live on ``app.state`` so tests can install their own.
"""

from fastapi import Request

from moodlog.services.session.session_service import SessionService


def get_session_service(request: Request) -> SessionService:
    """Get the application's session service."""
    service = getattr(request.app.state, "session_service", None)
    if service is None:
        raise RuntimeError("session_service not initialized")
    return service
