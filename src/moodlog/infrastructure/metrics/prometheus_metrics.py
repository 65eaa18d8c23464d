"""
Prometheus Metrics

Metrics for the session analysis pipeline.
Exposes metrics at /metrics endpoint for Prometheus scraping.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
"""

from prometheus_client import (
    Counter,
    Histogram,
    Info,
    generate_latest,
    CONTENT_TYPE_LATEST,
    REGISTRY,
)
from fastapi import APIRouter, Response

from moodlog import __version__

# =============================================================================
# LLM METRICS
# =============================================================================

LLM_REQUESTS_TOTAL = Counter(
    "moodlog_llm_requests_total",
    "Total LLM requests by provider",
    ["provider", "status"],  # success, error, rate_limited
)

LLM_LATENCY = Histogram(
    "moodlog_llm_latency_seconds",
    "LLM response latency",
    ["provider"],
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)

LLM_TOKENS_USED = Counter(
    "moodlog_llm_tokens_total",
    "Total tokens used by LLM",
    ["provider", "type"],  # input, output
)

# =============================================================================
# ANALYSIS METRICS
# =============================================================================

ANALYSIS_FALLBACKS_TOTAL = Counter(
    "moodlog_analysis_fallbacks_total",
    "Model responses replaced by the fallback analysis",
    ["reason"],
)

ANALYSIS_MOOD_TOTAL = Counter(
    "moodlog_analysis_mood_total",
    "Completed analyses by overall mood",
    ["mood"],
)

# =============================================================================
# SESSION METRICS
# =============================================================================

SESSIONS_SAVED_TOTAL = Counter(
    "moodlog_sessions_saved_total",
    "Session save requests by outcome",
    ["outcome"],  # saved, invalid, model_unavailable, persistence_error
)

SESSION_SAVE_DURATION = Histogram(
    "moodlog_session_save_duration_seconds",
    "End-to-end session save duration",
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "moodlog_system",
    "MoodLog system information",
)

SYSTEM_INFO.info({
    "version": __version__,
    "environment": "development",  # Updated at runtime
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_llm_request(
    provider: str,
    status: str,
    duration_seconds: float,
    input_tokens: int = 0,
    output_tokens: int = 0,
) -> None:
    """Record a single LLM call."""
    LLM_REQUESTS_TOTAL.labels(provider=provider, status=status).inc()
    LLM_LATENCY.labels(provider=provider).observe(duration_seconds)

    if input_tokens:
        LLM_TOKENS_USED.labels(provider=provider, type="input").inc(input_tokens)
    if output_tokens:
        LLM_TOKENS_USED.labels(provider=provider, type="output").inc(output_tokens)


def track_analysis_fallback(reason: str) -> None:
    """Record a fallback analysis."""
    ANALYSIS_FALLBACKS_TOTAL.labels(reason=reason).inc()


def track_analysis_mood(mood: str) -> None:
    """Record the mood of a completed analysis."""
    ANALYSIS_MOOD_TOTAL.labels(mood=mood).inc()


def track_session_save(outcome: str, duration_seconds: float | None = None) -> None:
    """Record session save outcome and duration."""
    SESSIONS_SAVED_TOTAL.labels(outcome=outcome).inc()
    if duration_seconds is not None:
        SESSION_SAVE_DURATION.observe(duration_seconds)


def update_system_info(environment: str, version: str = __version__) -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )
