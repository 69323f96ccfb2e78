"""
Streak schemas.

POST /streaks → StreakRequest → StreakResponse
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from tracker.models.daily_log import DailyLog
from tracker.models.metric import Metric


class StreakRequest(BaseModel):
    metric: Metric
    logs: list[DailyLog] = Field(default_factory=list)
    as_of: Optional[date] = Field(
        default=None,
        description="Reference day for the current streak. Defaults to today (UTC).",
        examples=["2024-03-10"],
    )


class StreakResponse(BaseModel):
    metric_id: str
    as_of: str
    current_streak: int
    longest_streak: int
