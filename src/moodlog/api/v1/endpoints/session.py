"""
Session Endpoints

Save analyzed conversations and query a user's history.

Domain errors raised by the service are translated to HTTP responses by
the handlers in moodlog.api.middleware.error_handler.
"""

from fastapi import APIRouter, Depends, Query, Request, status

from moodlog.api.deps import get_session_service
from moodlog.config import get_settings
from moodlog.config.logging_config import get_logger
from moodlog.domain.exceptions import FieldViolation, ValidationError
from moodlog.services.session.session_service import SessionService

logger = get_logger(__name__)
router = APIRouter()

_analysis_settings = get_settings().analysis

INVALID_BODY_MESSAGE = "Request body must be a valid JSON object"


@router.post(
    "/save",
    status_code=status.HTTP_201_CREATED,
    summary="Analyze and save a conversation",
)
async def save_session(
    request: Request,
    service: SessionService = Depends(get_session_service),
) -> dict:
    """
    Analyze a conversation transcript and store the result.

    The body is read raw and validated by the service so that every
    invalid field is reported together, in the same 400 format as an
    undecodable body.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError([FieldViolation(field="body", message=INVALID_BODY_MESSAGE)]) from None

    if not isinstance(payload, dict):
        payload = {}
    response = await service.save_session(payload)
    return response.to_dict()


@router.get(
    "/user/{user_id}",
    summary="List a user's sessions, newest first",
)
async def list_user_sessions(
    user_id: str,
    limit: int = Query(_analysis_settings.default_page_size, ge=1, le=_analysis_settings.max_page_size),
    skip: int = Query(0, ge=0),
    service: SessionService = Depends(get_session_service),
) -> dict:
    page = await service.list_user_sessions(user_id, limit=limit, skip=skip)
    return page.to_dict()


@router.get(
    "/analytics/{user_id}",
    summary="Mood analytics over a trailing window",
)
async def mood_analytics(
    user_id: str,
    days: int = Query(_analysis_settings.default_analytics_days, ge=1, le=365),
    service: SessionService = Depends(get_session_service),
) -> dict:
    analytics = await service.mood_analytics(user_id, days=days)
    return analytics.to_dict()


@router.get(
    "/{session_id}",
    summary="Get a single session",
)
async def get_session(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> dict:
    """Return the stored session without its transcript."""
    return await service.get_session(session_id)
