"""
Mood Analytics Models

Aggregations of a user's sessions over a trailing time window.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class MoodTrendPoint:
    """A single session's mood in a trend series."""

    date: datetime
    mood: str
    score: int

    def to_dict(self) -> dict:
        return {
            "date": self.date.date().isoformat(),
            "mood": self.mood,
            "score": self.score,
        }


@dataclass(frozen=True)
class MoodAggregate:
    """
    Raw aggregation over a user's sessions since a given date.

    Attributes:
        count: Number of sessions in the window
        average_score: Arithmetic mean mood score (0 for an empty window)
        mood_distribution: Session count per mood present in the window
        trend: Per-session points, oldest first
    """

    count: int = 0
    average_score: float = 0
    mood_distribution: dict[str, int] = field(default_factory=dict)
    trend: list[MoodTrendPoint] = field(default_factory=list)

    @classmethod
    def from_points(cls, points: list[MoodTrendPoint]) -> "MoodAggregate":
        """Build the aggregate from trend points already ordered oldest first."""
        if not points:
            return cls()

        distribution: dict[str, int] = {}
        for point in points:
            distribution[point.mood] = distribution.get(point.mood, 0) + 1

        return cls(
            count=len(points),
            average_score=sum(p.score for p in points) / len(points),
            mood_distribution=distribution,
            trend=list(points),
        )


@dataclass(frozen=True)
class MoodAnalytics:
    """Analytics response for a trailing window of N days."""

    days: int
    aggregate: MoodAggregate

    @property
    def period(self) -> str:
        return f"{self.days} days"

    @property
    def average_mood_score(self) -> float:
        return round(self.aggregate.average_score, 2)

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "totalSessions": self.aggregate.count,
            "averageMoodScore": self.average_mood_score,
            "moodDistribution": dict(self.aggregate.mood_distribution),
            "moodTrend": [point.to_dict() for point in self.aggregate.trend],
        }
