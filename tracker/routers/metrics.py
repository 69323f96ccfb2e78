"""
Metrics router: per-day reporting over a metric/log snapshot.

POST /metrics/day-summary   : breakdown shown on a calendar cell
"""
from __future__ import annotations

from fastapi import APIRouter

from tracker.routers.common import check_snapshot
from tracker.schemas.common import ErrorResponse
from tracker.schemas.metrics import DaySummaryRequest, DaySummaryResponse
from tracker.services.aggregation import DaySummary, day_summary

router = APIRouter(prefix="/metrics", tags=["metrics"])


def _summary_to_response(s: DaySummary) -> DaySummaryResponse:
    return DaySummaryResponse(
        day=str(s.day),
        active_metrics=s.active_metrics,
        scheduled_metrics=s.scheduled_metrics,
        logged_metrics=s.logged_metrics,
        goal_metrics=s.goal_metrics,
        completed_goals=s.completed_goals,
        completion_percentage=s.completion_percentage,
        goal_completion_percentage=s.goal_completion_percentage,
        logs_exist=s.logs_exist,
    )


@router.post(
    "/day-summary",
    response_model=DaySummaryResponse,
    summary="Per-day metric and goal breakdown",
    responses={
        200: {"description": "Counts and completion percentages for `day`."},
        422: {"model": ErrorResponse, "description": "Snapshot too large."},
    },
)
def metrics_day_summary(payload: DaySummaryRequest):
    """
    Summarize one calendar day:

    - **scheduled_metrics**: active metrics due that day and on the calendar.
    - **logged_metrics**: metrics with a log that differs from the default
      value or carries notes.
    - **completed_goals / goal_metrics**: scheduled goals met.
    - **completion_percentage**: scheduled boolean metrics marked done.
    """
    check_snapshot(payload.logs)
    result = day_summary(payload.metrics, payload.logs, payload.day)
    return _summary_to_response(result)
