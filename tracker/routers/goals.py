"""
Goals router.

POST /goals/evaluate  : evaluate one value against one goal
POST /goals/summary   : metrics with goals and goals met on a day
"""
from __future__ import annotations

from fastapi import APIRouter

from tracker.models.goal import Goal
from tracker.routers.common import check_snapshot
from tracker.schemas.common import ErrorResponse
from tracker.schemas.goals import (
    GoalEvaluationRequest,
    GoalEvaluationResponse,
    GoalSummaryRequest,
    GoalSummaryResponse,
)
from tracker.services.aggregation import goals_met_on_day, metrics_with_goals
from tracker.services.goals import evaluate_goal, goal_label

router = APIRouter(prefix="/goals", tags=["goals"])


@router.post(
    "/evaluate",
    response_model=GoalEvaluationResponse,
    summary="Evaluate a value against a goal",
    responses={200: {"description": "Satisfaction, progress (0–100) and a display label."}},
)
def goals_evaluate(payload: GoalEvaluationRequest):
    """
    Evaluate `value` against the goal.

    ### Goal types
    | Type | Satisfied when | Applies to |
    |---|---|---|
    | `minimum` | value ≥ goal | number, percentage, time |
    | `maximum` | value ≤ goal | number, percentage, time |
    | `exact`   | within tolerance × goal | number, percentage, time |
    | `boolean` | value is `true` | boolean |
    """
    goal = Goal(value=payload.goal_value, kind=payload.goal_type)
    result = evaluate_goal(payload.value_type, payload.value, goal, payload.tolerance)
    return GoalEvaluationResponse(
        satisfied=result.satisfied,
        progress=result.progress,
        applicable=result.applicable,
        label=goal_label(payload.value_type, payload.value, goal, payload.unit),
    )


@router.post(
    "/summary",
    response_model=GoalSummaryResponse,
    summary="Goals met on a day",
    responses={
        200: {"description": "Ids of metrics with goals and the number met on `day`."},
        422: {"model": ErrorResponse, "description": "Snapshot too large."},
    },
)
def goals_summary(payload: GoalSummaryRequest):
    """
    Count the metrics whose log for `day` satisfies their goal. A log's own
    goal overrides the metric's default goal. With several logs for the day,
    any one meeting the goal counts. Metrics without a log for the day are
    evaluated against their default value.
    """
    check_snapshot(payload.logs)
    with_goals = metrics_with_goals(payload.metrics)
    completed = goals_met_on_day(payload.metrics, payload.logs, payload.day)
    return GoalSummaryResponse(
        day=str(payload.day),
        metrics_with_goals=[m.id for m in with_goals],
        completed_goals=completed,
    )
