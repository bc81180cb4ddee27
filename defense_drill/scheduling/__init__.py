"""Weekly-policy alarm scheduling."""

from defense_drill.scheduling.policy_scheduler import PolicyScheduler, active_sorted_policies
from defense_drill.scheduling.timer import AlarmTimer, AsyncioAlarmTimer, system_clock_millis
from defense_drill.scheduling.weekly_hour import (
    day_of_week,
    next_occurrence_start,
    weekly_hour_of,
)

__all__ = [
    "AlarmTimer",
    "AsyncioAlarmTimer",
    "PolicyScheduler",
    "active_sorted_policies",
    "day_of_week",
    "next_occurrence_start",
    "system_clock_millis",
    "weekly_hour_of",
]
