"""
Streaks router.

POST /streaks : current and longest streak for one metric
"""
from __future__ import annotations

from fastapi import APIRouter

from tracker.models.goal import Goal
from tracker.routers.common import check_snapshot, today
from tracker.schemas.common import ErrorResponse
from tracker.schemas.streaks import StreakRequest, StreakResponse
from tracker.services.streaks import compute_streaks

router = APIRouter(prefix="/streaks", tags=["streaks"])


@router.post(
    "",
    response_model=StreakResponse,
    summary="Current and longest streak for a metric",
    responses={
        200: {"description": "Consecutive completed days, now and best ever."},
        422: {"model": ErrorResponse, "description": "Snapshot too large."},
    },
)
def streaks(payload: StreakRequest):
    """
    Compute streaks over the supplied logs. Logs for other metrics are
    ignored, so a whole log collection can be posted as-is.

    A day is *completed* when the value is `true` (boolean metrics), meets
    the goal (the log's own goal, else the metric's), equals 0 for a
    zero-target goal, or is greater than 0 otherwise.

    The current streak tolerates a missing log for `as_of` itself: if the
    last log was yesterday, yesterday's run still counts.
    """
    check_snapshot(payload.logs)
    as_of = payload.as_of or today()
    result = compute_streaks(
        payload.logs,
        metric_id=payload.metric.id,
        value_type=payload.metric.type,
        as_of=as_of,
        goal=Goal.from_record(payload.metric),
    )
    return StreakResponse(
        metric_id=payload.metric.id,
        as_of=str(as_of),
        current_streak=result.current,
        longest_streak=result.longest,
    )
