from .metric import (
    GoalType,
    IntervalUnit,
    Metric,
    MetricType,
    ScheduleFrequency,
    migrate_legacy_schedule,
    sanitize_schedule,
)
from .daily_log import DailyLog
from .goal import Goal

__all__ = [
    "GoalType",
    "IntervalUnit",
    "Metric",
    "MetricType",
    "ScheduleFrequency",
    "migrate_legacy_schedule",
    "sanitize_schedule",
    "DailyLog",
    "Goal",
]
