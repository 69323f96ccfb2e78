"""
Custom exception hierarchy for the tracker API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

The evaluators in `tracker.services` never raise these; they fall back to
safe defaults. Only request-level problems (oversized snapshots, bad
ranges) surface as errors.
"""
from __future__ import annotations

from datetime import date
from typing import Any

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class TrackerException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class SnapshotTooLargeError(TrackerException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "SNAPSHOT_TOO_LARGE"

    def __init__(self, max_items: int, received: int):
        super().__init__(
            message=f"Snapshot exceeds maximum size of {max_items} logs. Received {received}.",
            details={"max_items": max_items, "received": received},
        )


class InvalidDateRangeError(TrackerException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_DATE_RANGE"

    def __init__(self, start: date, end: date):
        super().__init__(
            message=f"Range start {start} is after range end {end}.",
            details={"start": str(start), "end": str(end)},
        )


class CalendarRangeTooLargeError(TrackerException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "CALENDAR_RANGE_TOO_LARGE"

    def __init__(self, max_days: int, requested: int):
        super().__init__(
            message=f"Calendar range exceeds {max_days} days. Requested {requested}.",
            details={"max_days": max_days, "requested": requested},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def tracker_exception_handler(request: Request, exc: TrackerException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
