"""
Schedule router.

POST /schedule/is-due     : is a metric due on a day?
POST /schedule/calendar   : due metrics per day over a date range
"""
from __future__ import annotations

from datetime import timedelta

import structlog
from fastapi import APIRouter

from tracker.core.errors import CalendarRangeTooLargeError, InvalidDateRangeError
from tracker.schemas.common import CALENDAR_MAX_DAYS, ErrorResponse
from tracker.schemas.schedule import (
    CalendarDayOut,
    CalendarRequest,
    CalendarResponse,
    IsDueRequest,
    IsDueResponse,
)
from tracker.services.recurrence import is_due, is_on_calendar

logger = structlog.get_logger()

router = APIRouter(prefix="/schedule", tags=["schedule"])


# ---------------------------------------------------------------------------
# POST /schedule/is-due
# ---------------------------------------------------------------------------

@router.post(
    "/is-due",
    response_model=IsDueResponse,
    summary="Check whether a metric is due on a day",
    responses={200: {"description": "Recurrence decision for the metric and day."}},
)
def schedule_is_due(payload: IsDueRequest):
    """
    Evaluate the metric's recurrence rule for `day`.

    `on_calendar` additionally requires the metric to be active and not
    excluded from calendar tracking.
    """
    return IsDueResponse(
        metric_id=payload.metric.id,
        day=str(payload.day),
        is_due=is_due(payload.metric, payload.day),
        on_calendar=is_on_calendar(payload.metric, payload.day),
    )


# ---------------------------------------------------------------------------
# POST /schedule/calendar
# ---------------------------------------------------------------------------

@router.post(
    "/calendar",
    response_model=CalendarResponse,
    summary="Due metrics for every day in a range",
    responses={
        200: {"description": "Per-day list of due metric ids, oldest first."},
        422: {"model": ErrorResponse, "description": "Range is inverted or longer than the maximum."},
    },
)
def schedule_calendar(payload: CalendarRequest):
    """
    Build a calendar grid: for each day in `[start, end]`, the ids of the
    metrics due that day. By default only active metrics that are on the
    calendar are listed.
    """
    if payload.end < payload.start:
        raise InvalidDateRangeError(start=payload.start, end=payload.end)
    span = (payload.end - payload.start).days + 1
    if span > CALENDAR_MAX_DAYS:
        raise CalendarRangeTooLargeError(max_days=CALENDAR_MAX_DAYS, requested=span)

    check = is_due if payload.include_excluded else is_on_calendar
    days = []
    for i in range(span):
        day = payload.start + timedelta(days=i)
        days.append(CalendarDayOut(
            day=str(day),
            due_metric_ids=[m.id for m in payload.metrics if check(m, day)],
        ))

    logger.debug("Calendar built", days=span, metrics=len(payload.metrics))
    return CalendarResponse(start=str(payload.start), end=str(payload.end), days=days)
