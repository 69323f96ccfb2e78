from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tracker.models.fields import CalendarDay, encode_value
from tracker.models.metric import GoalType


class DailyLog(BaseModel):
    """One logged value for a (metric, calendar day) pair."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: Optional[str] = None
    metric_id: str
    day: CalendarDay = Field(alias="date")
    value: str = Field(default="", description="JSON text of the logged value.")
    notes: Optional[str] = None

    # Per-entry goal override
    goal_value: Optional[str] = None
    goal_type: Optional[GoalType] = None

    @field_validator("value", mode="before")
    @classmethod
    def encode(cls, v: Any) -> Any:
        return encode_value(v)
