"""
Goal schemas.

POST /goals/evaluate  → GoalEvaluationRequest → GoalEvaluationResponse
POST /goals/summary   → GoalSummaryRequest    → GoalSummaryResponse
"""
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tracker.models.daily_log import DailyLog
from tracker.models.metric import GoalType, Metric, MetricType
from tracker.models.fields import encode_value


class GoalEvaluationRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    value_type: MetricType
    value: str = Field(description="JSON text of the logged value.", examples=["8", "true"])
    goal_value: str = Field(examples=["10"])
    goal_type: GoalType
    unit: Optional[str] = None
    tolerance: Optional[float] = Field(
        default=None,
        gt=0,
        description="Fraction of the goal allowed for exact goals. Defaults to server config.",
    )

    @field_validator("value", mode="before")
    @classmethod
    def encode(cls, v: Any) -> Any:
        return encode_value(v)


class GoalEvaluationResponse(BaseModel):
    satisfied: bool
    progress: float = Field(description="0–100.")
    applicable: bool = Field(description="False when the goal type does not fit the value type.")
    label: str


class GoalSummaryRequest(BaseModel):
    metrics: list[Metric]
    logs: list[DailyLog] = Field(default_factory=list)
    day: date


class GoalSummaryResponse(BaseModel):
    day: str
    metrics_with_goals: list[str] = Field(description="Ids of metrics that have a goal.")
    completed_goals: int
