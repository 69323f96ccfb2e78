"""
Recurrence evaluator: is a metric due on a given calendar day?

Rules (first applicable rule decides)
-------------------------------------
  1. No recurrence fields set        → due every day.
  2. Outside [start_date, end_date]  → not due (both bounds inclusive).
  3. By `schedule_frequency`:
       daily     → due
       weekly    → weekday in schedule_days (empty list → due)
       interval  → every N days / weeks / months from start_date
       custom    → weekday in schedule_days (empty list → not due)
       unset     → weekday in schedule_days if any, else due
       unknown   → same as unset

Weekdays are numbered Sunday=0 … Saturday=6.

Week and month intervals are anchored: the start date plus the elapsed
number of units must land exactly on the day being checked, so a metric
started on Jan 31 with a 1-month interval is due on Feb 29 (clamped) and
Mar 31, and never on Mar 30.

Nothing here raises for bad configuration. Unreadable days and stored
bounds (`schedule_unreadable`) fail closed with a debug log line, as do
unknown interval units.

Public API
----------
is_due(metric, day)                  -> bool
is_on_calendar(metric, day)          -> bool
due_dates(metric, start, end)        -> list[date]
weekday_index(day)                   -> int
parse_schedule_days(days)            -> list[int]
format_schedule_days(days)           -> str
toggle_calendar_tracking(metric)     -> Metric
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Iterable, Optional

import structlog
from dateutil.relativedelta import relativedelta

from tracker.models.fields import read_day
from tracker.models.metric import IntervalUnit, Metric, ScheduleFrequency

logger = structlog.get_logger()

DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
_WEEKDAYS = frozenset({1, 2, 3, 4, 5})
_WEEKEND = frozenset({0, 6})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def weekday_index(day: date) -> int:
    """Sunday=0 … Saturday=6."""
    return day.isoweekday() % 7


def parse_schedule_days(days: Optional[Iterable[Any]]) -> list[int]:
    """Keep only valid weekday numbers (0..6), in their original order."""
    if not days:
        return []
    return [
        d for d in days
        if isinstance(d, int) and not isinstance(d, bool) and 0 <= d <= 6
    ]


def format_schedule_days(days: Optional[Iterable[int]]) -> str:
    selected = parse_schedule_days(days)
    if not selected:
        return "No days selected"
    unique = set(selected)
    if len(unique) == 7:
        return "Every day"
    if unique == _WEEKDAYS:
        return "Weekdays"
    if unique == _WEEKEND:
        return "Weekends"
    return ", ".join(DAY_NAMES[d] for d in selected)


def _has_recurrence(metric: Metric, days: list[int]) -> bool:
    return (
        metric.schedule_frequency is not None
        or metric.schedule_start_date is not None
        or metric.schedule_end_date is not None
        or bool(days)
    )


def _is_interval_due(metric: Metric, day: date) -> bool:
    start = metric.schedule_start_date
    every = metric.schedule_interval_value
    if start is None or not every or every < 1:
        return False
    if day < start:
        return False

    unit = metric.schedule_interval_unit or IntervalUnit.days

    if unit == IntervalUnit.days:
        return (day - start).days % every == 0

    if unit == IntervalUnit.weeks:
        elapsed = (day - start).days // 7
        anchor = start + relativedelta(weeks=elapsed)
    elif unit == IntervalUnit.months:
        delta = relativedelta(day, start)
        elapsed = delta.years * 12 + delta.months
        anchor = start + relativedelta(months=elapsed)
    else:
        logger.debug("Unknown interval unit", metric_id=metric.id, unit=unit)
        return False

    return elapsed % every == 0 and anchor == day


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def is_due(metric: Metric, day: Any) -> bool:
    """Whether `metric` is scheduled on the calendar day of `day`."""
    target = read_day(day, metric_id=metric.id)
    if target is None or metric.schedule_unreadable:
        return False

    days = parse_schedule_days(metric.schedule_days)
    if not _has_recurrence(metric, days):
        return True

    if metric.schedule_start_date is not None and target < metric.schedule_start_date:
        return False
    if metric.schedule_end_date is not None and target > metric.schedule_end_date:
        return False

    frequency = metric.schedule_frequency
    if frequency == ScheduleFrequency.daily:
        return True
    if frequency == ScheduleFrequency.interval:
        return _is_interval_due(metric, target)
    if frequency == ScheduleFrequency.custom:
        return bool(days) and weekday_index(target) in days

    # weekly, unset or unrecognised: the weekday list decides, empty means due
    if frequency not in (None, ScheduleFrequency.weekly):
        logger.debug("Unknown schedule frequency", metric_id=metric.id, frequency=frequency)
    return weekday_index(target) in days if days else True


def is_on_calendar(metric: Metric, day: Any) -> bool:
    """Due, active and not opted out of calendar tracking."""
    if not metric.active or metric.excluded_from_calendar:
        return False
    return is_due(metric, day)


def due_dates(metric: Metric, start: date, end: date) -> list[date]:
    """Every day in [start, end] (inclusive) on which `metric` is due."""
    span = (end - start).days
    return [
        start + timedelta(days=i)
        for i in range(span + 1)
        if is_due(metric, start + timedelta(days=i))
    ]


def toggle_calendar_tracking(metric: Metric) -> Metric:
    """Return a copy with calendar tracking switched on/off."""
    return metric.model_copy(
        update={"excluded_from_calendar": not metric.excluded_from_calendar}
    )
