"""
Shared field types for the in-memory records.

Every date the core compares is reduced to a calendar day first, so a log
stamped "2024-03-01T23:15:00+02:00" and the plain date 2024-03-01 match.
"""
from __future__ import annotations

import json
from datetime import date, datetime
from typing import Annotated, Any, Optional

import structlog
from dateutil.parser import isoparse
from pydantic import BeforeValidator

logger = structlog.get_logger()


def as_day(value: Any) -> date:
    """Reduce a date, datetime or ISO string to its (year, month, day)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return isoparse(value.strip()).date()
        except (ValueError, OverflowError) as exc:
            raise ValueError(f"not an ISO date: {value!r}") from exc
    raise ValueError(f"cannot read a calendar day from {type(value).__name__}")


def read_day(value: Any, **context: Any) -> Optional[date]:
    """`as_day` that fails closed: None, with a debug line, for unreadable input."""
    try:
        return as_day(value)
    except ValueError:
        logger.debug("Unreadable calendar day", value=value, **context)
        return None


CalendarDay = Annotated[date, BeforeValidator(as_day)]


def encode_value(value: Any) -> str:
    """JSON text for a logged value; strings are taken as already encoded."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)
