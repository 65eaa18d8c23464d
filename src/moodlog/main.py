"""
MoodLog FastAPI Application Entry Point

Main application initialization with:
- Lifespan management (startup/shutdown)
- CORS configuration
- Error handling middleware and domain exception handlers
- Router registration
- Metrics endpoint

This is the production entry point for the MoodLog backend.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moodlog import __version__
from moodlog.api.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from moodlog.api.v1.router import api_router
from moodlog.config import get_settings
from moodlog.config.logging_config import configure_logging, get_logger
from moodlog.infrastructure.database import get_db_manager
from moodlog.infrastructure.llm import get_llm_provider
from moodlog.infrastructure.metrics import metrics_router, update_system_info
from moodlog.infrastructure.monitoring import init_sentry
from moodlog.services.analysis.analysis_engine import AnalysisEngine
from moodlog.services.session.session_service import SessionService

# Initialize settings and logging
settings = get_settings()
configure_logging(settings)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Builds the database manager, LLM provider, analysis engine and
    session service once and publishes them on ``app.state``.
    """
    logger.info("Starting MoodLog application", env=settings.env, version=__version__)

    init_sentry(
        dsn=settings.sentry.dsn,
        environment=settings.env,
        sample_rate=settings.sentry.sample_rate,
        traces_sample_rate=settings.sentry.traces_sample_rate,
    )
    update_system_info(settings.env)

    db = get_db_manager()
    try:
        await db.initialize()
        if settings.database.create_tables:
            await db.create_tables()
        logger.info("Database connection initialized")

        engine = AnalysisEngine(get_llm_provider())
        app.state.db = db
        app.state.analysis_engine = engine
        app.state.session_service = SessionService(
            engine,
            db,
            default_page_size=settings.analysis.default_page_size,
            max_page_size=settings.analysis.max_page_size,
            default_analytics_days=settings.analysis.default_analytics_days,
        )
        logger.info("Session service initialized", provider=engine.provider.provider_name)

        yield

    finally:
        logger.info("Shutting down MoodLog application")
        await db.close()
        logger.info("MoodLog application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="MoodLog API",
        description="Conversation transcript analysis and mood history",
        version=__version__,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(ErrorHandlerMiddleware)
    register_exception_handlers(app)

    app.include_router(
        api_router,
        prefix=f"/api/{settings.api_version}",
    )
    app.include_router(metrics_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint - basic info."""
        return {
            "name": "MoodLog API",
            "version": __version__,
            "status": "operational",
        }

    return app


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "moodlog.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )
