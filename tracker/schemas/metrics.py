"""
Metric reporting schemas.

POST /metrics/day-summary → DaySummaryRequest → DaySummaryResponse
"""
from datetime import date

from pydantic import BaseModel, Field

from tracker.models.daily_log import DailyLog
from tracker.models.metric import Metric


class DaySummaryRequest(BaseModel):
    metrics: list[Metric]
    logs: list[DailyLog] = Field(default_factory=list)
    day: date


class DaySummaryResponse(BaseModel):
    day: str
    active_metrics: int
    scheduled_metrics: int = Field(description="Active metrics due on this day and on the calendar.")
    logged_metrics: int = Field(description="Metrics with a log that differs from the default.")
    goal_metrics: int
    completed_goals: int
    completion_percentage: float = Field(description="Scheduled boolean metrics marked done, 0–100.")
    goal_completion_percentage: float = Field(description="Scheduled goals met, 0–100.")
    logs_exist: bool
