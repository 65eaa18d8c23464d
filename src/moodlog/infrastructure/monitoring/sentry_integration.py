"""
Sentry Error Tracking Integration

Optional error tracking with sensitive data scrubbing. Events are
correlated by session id and user id only.

PRIVACY: Conversation transcripts are never sent. Request bodies and
extras carrying conversation text are replaced before the event leaves
the process.
"""

import re
from typing import Any, Optional

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from moodlog import __version__
from moodlog.config.logging_config import get_logger

logger = get_logger(__name__)

REDACTED = "[REDACTED]"

# Patterns for sensitive data scrubbing inside free text
SENSITIVE_PATTERNS = [
    r"password[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"api[_-]?key[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"token[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"secret[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"bearer\s+[a-zA-Z0-9\-._~+/]+=*",
]

# Compared against keys lowercased with "-" and "_" removed
SENSITIVE_KEYS = frozenset({
    "password",
    "token",
    "secret",
    "apikey",
    "authorization",
    "credential",
    "conversationtext",
    "rawtext",
    "prompt",
})


def _normalize_key(key: Any) -> str:
    return str(key).lower().replace("-", "").replace("_", "")


def _scrub_string(value: str) -> str:
    """Scrub sensitive patterns from string."""
    result = value
    for pattern in SENSITIVE_PATTERNS:
        result = re.sub(pattern, REDACTED, result, flags=re.IGNORECASE)
    return result


def _scrub_value(value: Any) -> Any:
    if isinstance(value, dict):
        return _scrub_dict(value)
    if isinstance(value, list):
        return [_scrub_value(item) for item in value]
    if isinstance(value, str):
        return _scrub_string(value)
    return value


def _scrub_dict(data: dict) -> dict:
    """Recursively scrub sensitive data from dictionary."""
    return {
        key: REDACTED
        if any(sensitive in _normalize_key(key) for sensitive in SENSITIVE_KEYS)
        else _scrub_value(value)
        for key, value in data.items()
    }


def before_send(event: dict, hint: dict) -> Optional[dict]:
    """
    Process event before sending to Sentry.

    Request bodies are dropped entirely when they are not a mapping,
    since a raw body may hold the transcript.
    """
    request = event.get("request")
    if request:
        if "data" in request:
            data = request["data"]
            request["data"] = _scrub_dict(data) if isinstance(data, dict) else REDACTED
        if "headers" in request:
            request["headers"] = _scrub_dict(request["headers"])

    for breadcrumb in event.get("breadcrumbs", {}).get("values", []):
        if isinstance(breadcrumb.get("data"), dict):
            breadcrumb["data"] = _scrub_dict(breadcrumb["data"])
        if isinstance(breadcrumb.get("message"), str):
            breadcrumb["message"] = _scrub_string(breadcrumb["message"])

    if "extra" in event:
        event["extra"] = _scrub_dict(event["extra"])

    return event


def init_sentry(
    dsn: str,
    environment: str = "development",
    release: str = f"moodlog@{__version__}",
    sample_rate: float = 1.0,
    traces_sample_rate: float = 0.1,
) -> bool:
    """
    Initialize Sentry error tracking.

    Args:
        dsn: Sentry DSN (empty disables tracking)
        environment: Environment name
        release: Release version
        sample_rate: Error sample rate (1.0 = all errors)
        traces_sample_rate: Performance tracing rate

    Returns:
        True if Sentry was initialized
    """
    if not dsn:
        logger.info("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        sample_rate=sample_rate,
        traces_sample_rate=traces_sample_rate,
        before_send=before_send,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            AsyncioIntegration(),
            LoggingIntegration(
                level=None,  # Don't capture logs as breadcrumbs
                event_level=None,  # Don't capture logs as events
            ),
        ],
        send_default_pii=False,
        max_breadcrumbs=50,
    )

    logger.info("Sentry initialized", environment=environment, release=release)
    return True


def set_session_context(session_id: str, user_id: Optional[str] = None) -> None:
    """Attach session identifiers (never content) to subsequent events."""
    sentry_sdk.set_context("session", {
        "session_id": session_id,
        "user_id": user_id,
    })


def capture_exception_with_context(
    exception: BaseException,
    session_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> Optional[str]:
    """
    Capture exception with additional context.

    Returns: Sentry event ID (None when Sentry is disabled)
    """
    with sentry_sdk.new_scope() as scope:
        if session_id:
            scope.set_tag("session_id", session_id)
        if extra:
            for key, value in _scrub_dict(extra).items():
                scope.set_extra(key, value)

        return sentry_sdk.capture_exception(exception)
