"""Metrics infrastructure package."""

from moodlog.infrastructure.metrics.prometheus_metrics import (
    # LLM metrics
    LLM_REQUESTS_TOTAL,
    LLM_LATENCY,
    LLM_TOKENS_USED,
    # Analysis metrics
    ANALYSIS_FALLBACKS_TOTAL,
    ANALYSIS_MOOD_TOTAL,
    # Session metrics
    SESSIONS_SAVED_TOTAL,
    SESSION_SAVE_DURATION,
    # Helpers
    track_llm_request,
    track_analysis_fallback,
    track_analysis_mood,
    track_session_save,
    update_system_info,
    # Router
    metrics_router,
)

__all__ = [
    "LLM_REQUESTS_TOTAL",
    "LLM_LATENCY",
    "LLM_TOKENS_USED",
    "ANALYSIS_FALLBACKS_TOTAL",
    "ANALYSIS_MOOD_TOTAL",
    "SESSIONS_SAVED_TOTAL",
    "SESSION_SAVE_DURATION",
    "track_llm_request",
    "track_analysis_fallback",
    "track_analysis_mood",
    "track_session_save",
    "update_system_info",
    "metrics_router",
]
