"""
Mood Classification Enumeration

Closed set of mood labels an analysis may carry. Values arriving from
the model outside this set are never stored; they fall back to neutral.
"""

from enum import StrEnum
from typing import Any, Optional


class OverallMood(StrEnum):
    """
    Dominant emotional tone of a conversation.

    Values are the exact lowercase literals used on the wire and in storage.
    """

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    MIXED = "mixed"
    """Both positive and negative tones with no clear dominant one."""

    @classmethod
    def from_value(cls, value: Any) -> Optional["OverallMood"]:
        """
        Return the matching mood, or None.

        Matching is exact and case-sensitive: "Positive" is not a mood.
        """
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


DEFAULT_MOOD: OverallMood = OverallMood.NEUTRAL
