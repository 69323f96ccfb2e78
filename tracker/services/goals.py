"""
Goal evaluator.

Given a metric's value type, a logged value and a goal, decide whether the
goal is satisfied and how far along the value is (progress 0–100).

  minimum  (number / percentage / time)
      satisfied: value >= goal
      progress : 100 * value / goal, capped at 100 (goal 0 → 0)
  maximum  (number / percentage / time), lower is better
      satisfied: value <= goal
      progress : 100 - 100 * value / goal, floored at 0 (goal 0 → 100)
  exact    (number / percentage / time)
      satisfied: |value - goal| <= tolerance * |goal|
      progress : 100 - 100 * |value - goal| / (tolerance * |goal|), 0..100
  boolean  (boolean only)
      satisfied: value is true; progress 100 or 0

Any other (kind, value type) pair is *not applicable*: never satisfied,
progress 0.

A record "has a goal" only when both goal_value and goal_type are set and
goal_value is neither "" nor "0". A goal value of "0" is the zero-target
convention used by streaks ("keep this at zero"), not a goal here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from tracker.core.config import settings
from tracker.models.daily_log import DailyLog
from tracker.models.goal import Goal
from tracker.models.metric import NUMERIC_TYPES, GoalType, Metric, MetricType
from tracker.services.values import parse_value, to_number

_NO_GOAL_VALUES = ("", "0")


@dataclass(frozen=True)
class GoalEvaluation:
    satisfied: bool
    progress: float        # 0.0 – 100.0
    applicable: bool = True


_NOT_APPLICABLE = GoalEvaluation(satisfied=False, progress=0.0, applicable=False)


# ---------------------------------------------------------------------------
# Goal resolution
# ---------------------------------------------------------------------------

def _as_goal(record: Any) -> Optional[Goal]:
    if record is None or isinstance(record, Goal):
        return record
    return Goal.from_record(record)


def has_goal(record: Metric | DailyLog | Goal | None) -> bool:
    """True when `record` carries a usable goal (see module docstring)."""
    goal = _as_goal(record)
    if goal is None:
        return False
    return goal.value.strip() not in _NO_GOAL_VALUES


def is_zero_target(record: Metric | DailyLog | Goal | None) -> bool:
    goal = _as_goal(record)
    return goal is not None and goal.value.strip() == "0"


def resolve_goal(
    metric: Metric | Goal | None,
    log: Optional[DailyLog] = None,
) -> Optional[Goal]:
    """The log's own goal when it has one, else the metric's default goal."""
    if log is not None and has_goal(log):
        return Goal.from_record(log)
    return _as_goal(metric)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def _clamp(progress: float) -> float:
    return max(0.0, min(100.0, progress))


def _typed(value_type: MetricType, value: Any) -> Any:
    if isinstance(value, str) or value is None:
        return parse_value(value_type, value)
    return value


def evaluate_goal(
    value_type: MetricType,
    value: Any,
    goal: Goal,
    tolerance: Optional[float] = None,
) -> GoalEvaluation:
    """
    Evaluate `value` (JSON text as stored on a log, or an already-typed
    value) against `goal`. `tolerance` defaults to EXACT_GOAL_TOLERANCE.
    """
    value_type = MetricType(value_type)
    kind = GoalType(goal.kind)

    if kind == GoalType.boolean:
        if value_type != MetricType.boolean:
            return _NOT_APPLICABLE
        done = _typed(value_type, value) is True
        return GoalEvaluation(satisfied=done, progress=100.0 if done else 0.0)

    if value_type not in NUMERIC_TYPES:
        return _NOT_APPLICABLE

    logged = to_number(_typed(value_type, value))
    target = to_number(goal.value)

    if kind == GoalType.minimum:
        progress = 0.0 if target == 0 else 100 * logged / target
        return GoalEvaluation(satisfied=logged >= target, progress=_clamp(progress))

    if kind == GoalType.maximum:
        progress = 100.0 if target == 0 else 100 - 100 * logged / target
        return GoalEvaluation(satisfied=logged <= target, progress=_clamp(progress))

    if kind == GoalType.exact:
        fraction = settings.EXACT_GOAL_TOLERANCE if tolerance is None else tolerance
        allowed = abs(target) * fraction
        diff = abs(logged - target)
        if allowed == 0:
            progress = 100.0 if diff == 0 else 0.0
        else:
            progress = 100 - 100 * diff / allowed
        return GoalEvaluation(satisfied=diff <= allowed, progress=_clamp(progress))

    return _NOT_APPLICABLE


def _format_number(number: float) -> str:
    return str(int(number)) if number.is_integer() else str(number)


def goal_label(
    value_type: MetricType,
    value: Any,
    goal: Goal,
    unit: Optional[str] = None,
) -> str:
    """Short progress text, e.g. "8/10 (min)", "45%/50% (max)", "Completed"."""
    value_type = MetricType(value_type)
    kind = GoalType(goal.kind)

    if kind == GoalType.boolean:
        done = _typed(value_type, value) is True
        return "Completed" if done else "Not completed"

    if value_type == MetricType.percentage:
        suffix = "%"
    elif unit:
        suffix = f" {unit}"
    else:
        suffix = ""

    current = _format_number(to_number(_typed(value_type, value)))
    target = _format_number(to_number(goal.value))
    short = {GoalType.minimum: "min", GoalType.maximum: "max", GoalType.exact: "exact"}[kind]
    return f"{current}{suffix}/{target}{suffix} ({short})"
