"""
Schedule schemas.

POST /schedule/is-due    → IsDueRequest    → IsDueResponse
POST /schedule/calendar  → CalendarRequest → CalendarResponse
"""
from datetime import date

from pydantic import BaseModel, Field

from tracker.models.metric import Metric


class IsDueRequest(BaseModel):
    metric: Metric
    day: date = Field(description="Calendar day to check.", examples=["2024-01-04"])


class IsDueResponse(BaseModel):
    metric_id: str
    day: str
    is_due: bool = Field(description="True if the recurrence rule schedules the metric this day.")
    on_calendar: bool = Field(
        description="is_due, and the metric is active and not excluded from the calendar."
    )


class CalendarRequest(BaseModel):
    metrics: list[Metric]
    start: date = Field(description="First day of the range (inclusive).", examples=["2024-01-01"])
    end: date = Field(description="Last day of the range (inclusive).", examples=["2024-01-31"])
    include_excluded: bool = Field(
        default=False,
        description="Also list inactive metrics and metrics excluded from the calendar.",
    )


class CalendarDayOut(BaseModel):
    day: str
    due_metric_ids: list[str]


class CalendarResponse(BaseModel):
    start: str
    end: str
    days: list[CalendarDayOut] = Field(description="One item per day, oldest first.")
