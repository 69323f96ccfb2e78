"""
Streak calculator.

Definitions
-----------
A log is *completed* when:
  - boolean metric: the logged value is true;
  - otherwise, with a goal (the log's own override wins over the goal
    passed in): the goal evaluator reports it satisfied;
  - otherwise, with a zero-target goal ("0", the log's own taking
    precedence): the logged value is 0;
  - otherwise: numeric value > 0 (text metrics: non-empty text).

Logs are grouped by calendar day. A day is completed when ANY of its logs
is completed, so duplicate logs for one day never break a streak.

Current streak
  lastDay = most recent day with a log. If as_of is more than one day past
  lastDay the streak is 0. Otherwise walk backwards from lastDay (when it
  was exactly yesterday, a one-day grace for "not logged yet today") or
  from as_of, counting completed days, stopping at the first day with no
  log or no completed log.

Longest streak
  Walk the logged days oldest first. A completed day adjacent to the
  previous logged day extends the run, a completed day after a gap starts
  a new run at 1, an uncompleted day resets the run to 0.

as_of is always explicit; nothing here reads the clock. An unreadable
as_of gives no streak at all.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from tracker.models.daily_log import DailyLog
from tracker.models.fields import read_day
from tracker.models.goal import Goal
from tracker.models.metric import MetricType
from tracker.services.goals import evaluate_goal, has_goal, is_zero_target
from tracker.services.values import parse_value, to_number

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class StreakResult:
    current: int
    longest: int


# ---------------------------------------------------------------------------
# Completion predicate
# ---------------------------------------------------------------------------

def is_log_completed(
    log: DailyLog,
    value_type: MetricType,
    goal: Optional[Goal] = None,
    tolerance: Optional[float] = None,
) -> bool:
    value_type = MetricType(value_type)

    if value_type == MetricType.boolean:
        return parse_value(value_type, log.value) is True

    # A log's own goal, zero-target included, overrides the metric's.
    if has_goal(log) or is_zero_target(log):
        effective = Goal.from_record(log)
    else:
        effective = goal
    if has_goal(effective):
        return evaluate_goal(value_type, log.value, effective, tolerance).satisfied

    value = parse_value(value_type, log.value)
    if value_type == MetricType.text:
        return bool(value.strip())
    if is_zero_target(effective):
        return to_number(value) == 0
    return to_number(value) > 0


# ---------------------------------------------------------------------------
# Streaks
# ---------------------------------------------------------------------------

def _completed_by_day(
    logs: Iterable[DailyLog],
    metric_id: str,
    value_type: MetricType,
    goal: Optional[Goal],
    tolerance: Optional[float],
) -> dict[date, bool]:
    by_day: dict[date, bool] = defaultdict(bool)
    for log in logs:
        if log.metric_id != metric_id:
            continue
        done = is_log_completed(log, value_type, goal, tolerance)
        by_day[log.day] = by_day[log.day] or done
    return dict(by_day)


def _current_streak(completed: dict[date, bool], as_of: date) -> int:
    last_day = max(completed)
    gap = (as_of - last_day).days
    if gap > 1:
        return 0

    check = last_day if gap == 1 else as_of
    streak = 0
    while completed.get(check):
        streak += 1
        check -= _ONE_DAY
    return streak


def _longest_streak(completed: dict[date, bool]) -> int:
    longest = 0
    run = 0
    previous: Optional[date] = None
    for day in sorted(completed):
        if not completed[day]:
            run = 0
        elif previous is not None and day - previous == _ONE_DAY:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def compute_streaks(
    logs: Iterable[DailyLog],
    metric_id: str,
    value_type: MetricType,
    as_of: date,
    goal: Optional[Goal] = None,
    tolerance: Optional[float] = None,
) -> StreakResult:
    """Current and longest run of consecutive completed days for `metric_id`."""
    reference = read_day(as_of, metric_id=metric_id)
    if reference is None:
        return StreakResult(current=0, longest=0)

    completed = _completed_by_day(logs, str(metric_id), value_type, goal, tolerance)
    if not completed:
        return StreakResult(current=0, longest=0)

    return StreakResult(
        current=_current_streak(completed, reference),
        longest=_longest_streak(completed),
    )
