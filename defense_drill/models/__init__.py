"""Domain models: drills and weekly hour policies."""

from defense_drill.models.drill import Confidence, Drill
from defense_drill.models.policy import (
    HOURS_PER_WEEK,
    MAX_WEEKLY_HOUR,
    Frequency,
    WeeklyHourPolicy,
)

__all__ = [
    "HOURS_PER_WEEK",
    "MAX_WEEKLY_HOUR",
    "Confidence",
    "Drill",
    "Frequency",
    "WeeklyHourPolicy",
]
