"""Domain enums package."""

from moodlog.domain.enums.mood import OverallMood, DEFAULT_MOOD

__all__ = ["OverallMood", "DEFAULT_MOOD"]
