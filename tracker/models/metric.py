from __future__ import annotations

import enum
from typing import Any, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, model_validator

from tracker.models.fields import CalendarDay, read_day

logger = structlog.get_logger()

# Legacy marker stored inside schedule_days meaning "keep off the calendar".
LEGACY_CALENDAR_OPT_OUT = -1


class MetricType(str, enum.Enum):
    number = "number"
    boolean = "boolean"
    time = "time"
    percentage = "percentage"
    text = "text"


NUMERIC_TYPES = frozenset({MetricType.number, MetricType.percentage, MetricType.time})


class ScheduleFrequency(str, enum.Enum):
    daily = "daily"
    weekly = "weekly"
    interval = "interval"
    custom = "custom"


class IntervalUnit(str, enum.Enum):
    days = "days"
    weeks = "weeks"
    months = "months"


class GoalType(str, enum.Enum):
    minimum = "minimum"
    maximum = "maximum"
    exact = "exact"
    boolean = "boolean"


def migrate_legacy_schedule(record: dict[str, Any]) -> dict[str, Any]:
    """
    Move the legacy `-1` opt-out marker out of `schedule_days` into
    `excluded_from_calendar`, dropping anything that is not a weekday 0..6.
    Returns a new dict; the input is left untouched.
    """
    days = record.get("schedule_days")
    if not isinstance(days, (list, tuple)):
        return record

    migrated = dict(record)
    if LEGACY_CALENDAR_OPT_OUT in days:
        migrated["excluded_from_calendar"] = True
    migrated["schedule_days"] = [
        d for d in days
        if isinstance(d, int) and not isinstance(d, bool) and 0 <= d <= 6
    ]
    return migrated


def _is_member(value: Any, enum_cls: type[enum.Enum]) -> bool:
    try:
        enum_cls(value)
    except ValueError:
        return False
    return True


def sanitize_schedule(record: dict[str, Any]) -> dict[str, Any]:
    """
    Make stored recurrence fields loadable without ever widening the schedule.

      unknown schedule_frequency     -> None, so the weekday rule decides
      unknown schedule_interval_unit -> interval disabled (never due by interval)
      unreadable start/end date      -> dropped and `schedule_unreadable` set,
                                        so the metric is never due
    Returns a new dict; the input is left untouched.
    """
    cleaned = dict(record)
    metric_id = record.get("id")

    frequency = cleaned.get("schedule_frequency")
    if frequency is not None and not _is_member(frequency, ScheduleFrequency):
        logger.debug("Unknown schedule frequency", metric_id=metric_id, frequency=frequency)
        cleaned["schedule_frequency"] = None

    unit = cleaned.get("schedule_interval_unit")
    if unit is not None and not _is_member(unit, IntervalUnit):
        logger.debug("Unknown interval unit", metric_id=metric_id, unit=unit)
        cleaned["schedule_interval_unit"] = None
        cleaned["schedule_interval_value"] = None

    for key in ("schedule_start_date", "schedule_end_date"):
        value = cleaned.get(key)
        if value == "":
            cleaned[key] = None
        elif value is not None and read_day(value, metric_id=metric_id, field=key) is None:
            cleaned[key] = None
            cleaned["schedule_unreadable"] = True
    return cleaned


class Metric(BaseModel):
    """A tracked quantity definition, as supplied by the metric store."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str = ""
    description: Optional[str] = None
    type: MetricType
    unit: Optional[str] = None
    default_value: Optional[str] = None
    active: bool = True

    # Recurrence. All unset means "due every day".
    schedule_frequency: Optional[ScheduleFrequency] = None
    schedule_start_date: Optional[CalendarDay] = None
    schedule_end_date: Optional[CalendarDay] = None
    schedule_days: Optional[list[int]] = Field(
        default=None,
        description="Weekdays, Sunday=0 … Saturday=6.",
    )
    schedule_interval_value: Optional[int] = None
    schedule_interval_unit: Optional[IntervalUnit] = None
    excluded_from_calendar: bool = False
    schedule_unreadable: bool = Field(
        default=False,
        description="Set on load when a stored schedule date could not be read. Never due.",
    )

    # Default goal
    goal_value: Optional[str] = None
    goal_type: Optional[GoalType] = None

    @model_validator(mode="before")
    @classmethod
    def _load_stored_schedule(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return sanitize_schedule(migrate_legacy_schedule(data))
        return data
