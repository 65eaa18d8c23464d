"""
Health Check Endpoints

Provides system health and readiness endpoints for:
- Load balancer health checks
- Kubernetes liveness and readiness checks
- Monitoring systems
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from moodlog import __version__
from moodlog.config import get_settings
from moodlog.config.logging_config import get_logger

logger = get_logger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response with component health."""

    ready: bool
    components: dict[str, bool]


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Basic health check endpoint for load balancers",
)
async def health_check() -> HealthResponse:
    """Returns 200 if the application is running."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=get_settings().env,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Readiness check including database and LLM provider",
)
async def readiness_check(request: Request) -> ReadinessResponse:
    """
    Detailed readiness check.

    Ready only when the database answers and the LLM provider reports
    itself healthy. A failing component is reported, not raised.
    """
    components: dict[str, bool] = {}

    db = getattr(request.app.state, "db", None)
    try:
        components["database"] = bool(db) and await db.health_check()
    except Exception as e:
        logger.warning("Database readiness check failed", error=str(e))
        components["database"] = False

    engine = getattr(request.app.state, "analysis_engine", None)
    try:
        components["llm_available"] = bool(engine) and await engine.health_check()
    except Exception as e:
        logger.warning("LLM readiness check failed", error=str(e))
        components["llm_available"] = False

    return ReadinessResponse(
        ready=components["database"] and components["llm_available"],
        components=components,
    )


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Kubernetes liveness check endpoint",
)
async def liveness_check() -> HealthResponse:
    """Returns 200 if the application process is alive."""
    return HealthResponse(
        status="alive",
        version=__version__,
        environment=get_settings().env,
    )
