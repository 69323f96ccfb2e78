from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tracker.models.metric import GoalType


@dataclass(frozen=True)
class Goal:
    """A goal resolved at evaluation time. Never stored on its own."""
    value: str
    kind: GoalType

    @classmethod
    def from_record(cls, record) -> Optional["Goal"]:
        """Build from anything carrying goal_value/goal_type (Metric, DailyLog)."""
        if record is None:
            return None
        value = getattr(record, "goal_value", None)
        kind = getattr(record, "goal_type", None)
        if value is None or kind is None:
            return None
        return cls(value=str(value), kind=GoalType(kind))
