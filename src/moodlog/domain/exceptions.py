"""
Domain Exceptions

Error taxonomy for the session analysis pipeline:

- ValidationError: caller input malformed (bad request)
- ModelInvocationError: LLM provider unreachable or refusing (retry later)
- PersistenceError: storage constraint violated or unavailable (internal)
- SessionNotFoundError: unknown session id (not found)

Malformed model output is NOT an error; the response validator
absorbs it with a fallback record.

PRIVACY: No exception message may contain conversation text.
"""

from dataclasses import dataclass
from typing import Optional


class MoodLogError(Exception):
    """Base exception for all MoodLog domain errors."""


@dataclass(frozen=True)
class FieldViolation:
    """A single field-level validation failure."""

    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class ValidationError(MoodLogError):
    """Caller input failed validation; carries one entry per violated field."""

    def __init__(self, violations: list[FieldViolation]) -> None:
        fields = ", ".join(v.field for v in violations)
        super().__init__(f"Validation failed for: {fields}")
        self.violations = violations

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]

    def to_list(self) -> list[dict]:
        return [v.to_dict() for v in self.violations]


class ModelInvocationError(MoodLogError):
    """
    The LLM call itself failed (network, auth, quota, provider error).

    Not retried inside the core. The underlying error is kept on
    ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class PersistenceError(MoodLogError):
    """Storing or reading a session failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class SessionNotFoundError(MoodLogError):
    """No session exists with the requested id."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id
