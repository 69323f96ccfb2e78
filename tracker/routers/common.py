"""
Helpers shared by the routers.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Sized

from tracker.core.errors import SnapshotTooLargeError
from tracker.schemas.common import SNAPSHOT_MAX_LOGS


def today() -> date:
    return datetime.now(tz=timezone.utc).date()


def check_snapshot(logs: Sized) -> None:
    """Reject snapshots above SNAPSHOT_MAX_LOGS before evaluating anything."""
    if len(logs) > SNAPSHOT_MAX_LOGS:
        raise SnapshotTooLargeError(max_items=SNAPSHOT_MAX_LOGS, received=len(logs))
