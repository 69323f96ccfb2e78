"""
Reading stored log values.

Log values arrive as JSON text (`"8"`, `"true"`, `"\"went for a run\""`).
A value that does not decode for its metric's declared type is read as
that type's zero-value (0.0, False or ""); it never raises.
"""
from __future__ import annotations

import json
from typing import Any, Union

import structlog

from tracker.models.metric import NUMERIC_TYPES, MetricType

logger = structlog.get_logger()

LogValue = Union[bool, float, str]

UNDECODABLE = object()


def decode_raw(raw: Any) -> Any:
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except (ValueError, TypeError):
        return UNDECODABLE


def _as_float(decoded: Any) -> float | None:
    if isinstance(decoded, bool):
        return None
    if isinstance(decoded, (int, float)):
        return float(decoded)
    if isinstance(decoded, str):
        try:
            return float(decoded.strip())
        except ValueError:
            return None
    return None


def to_number(raw: Any) -> float:
    """Numeric reading of a stored value or goal value; 0.0 when there is none."""
    decoded = decode_raw(raw)
    if decoded is UNDECODABLE:
        # Not JSON (e.g. "08"); try a plain float read.
        decoded = raw
    number = _as_float(decoded)
    if number is None or number != number:  # NaN
        return 0.0
    return number


def zero_value(metric_type: MetricType) -> LogValue:
    if metric_type == MetricType.boolean:
        return False
    if metric_type in NUMERIC_TYPES:
        return 0.0
    return ""


def parse_value(metric_type: MetricType, raw: Any) -> LogValue:
    """Decode a stored value for `metric_type`, falling back to the zero-value."""
    metric_type = MetricType(metric_type)
    decoded = decode_raw(raw)

    if metric_type == MetricType.boolean:
        if isinstance(decoded, bool):
            return decoded
    elif metric_type in NUMERIC_TYPES:
        number = _as_float(raw if decoded is UNDECODABLE else decoded)
        if number is not None and number == number:
            return number
    elif metric_type == MetricType.text:
        if isinstance(decoded, str):
            return decoded

    if raw not in (None, ""):
        logger.debug("Unreadable log value", metric_type=metric_type.value, raw=raw)
    return zero_value(metric_type)
