"""
Aggregation helpers for reporting views.

Thin compositions over metrics + logs: which metrics have goals, how many
goals were met on a day, and the per-day breakdown shown on calendar cells.

Public API
----------
metrics_with_goals(metrics)                      -> list[Metric]
completed_goals_count(metrics_with_logs)         -> int
goals_met_on_day(metrics, logs, day)             -> int
is_log_meaningful(log, metric)                   -> bool
day_summary(metrics, logs, day)                  -> DaySummary
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from tracker.models.daily_log import DailyLog
from tracker.models.fields import as_day
from tracker.models.metric import NUMERIC_TYPES, Metric, MetricType
from tracker.services.goals import evaluate_goal, has_goal, resolve_goal
from tracker.services.recurrence import is_on_calendar
from tracker.services.values import UNDECODABLE, decode_raw, parse_value


@dataclass
class MetricWithLog:
    """A metric paired with its log for one day (None when nothing was logged)."""
    metric: Metric
    log: Optional[DailyLog] = None

    @property
    def value(self) -> Optional[str]:
        if self.log is not None:
            return self.log.value
        return self.metric.default_value


@dataclass
class DaySummary:
    day: date
    active_metrics: int
    scheduled_metrics: int
    logged_metrics: int
    goal_metrics: int
    completed_goals: int
    completion_percentage: float       # boolean metrics done / scheduled boolean metrics
    goal_completion_percentage: float  # goals met / scheduled metrics with goals

    @property
    def logs_exist(self) -> bool:
        return self.logged_metrics > 0


# ---------------------------------------------------------------------------
# Goal helpers
# ---------------------------------------------------------------------------

def metrics_with_goals(metrics: Iterable[Metric]) -> list[Metric]:
    return [m for m in metrics if has_goal(m)]


def _goal_met(item: MetricWithLog, tolerance: Optional[float] = None) -> bool:
    goal = resolve_goal(item.metric, item.log)
    if not has_goal(goal):
        return False
    return evaluate_goal(item.metric.type, item.value, goal, tolerance).satisfied


def completed_goals_count(
    metrics_with_logs: Iterable[MetricWithLog],
    tolerance: Optional[float] = None,
) -> int:
    """Number of metrics whose value for the day satisfies its goal."""
    return sum(1 for item in metrics_with_logs if _goal_met(item, tolerance))


def _met_by_any(
    metric: Metric,
    logs: list[DailyLog],
    tolerance: Optional[float] = None,
) -> bool:
    candidates = [MetricWithLog(metric, log) for log in logs] or [MetricWithLog(metric)]
    return any(_goal_met(item, tolerance) for item in candidates)


def _logs_for_day(logs: Iterable[DailyLog], day: date) -> dict[str, list[DailyLog]]:
    by_metric: dict[str, list[DailyLog]] = defaultdict(list)
    for log in logs:
        if log.day == day:
            by_metric[log.metric_id].append(log)
    return by_metric


def goals_met_on_day(
    metrics: Iterable[Metric],
    logs: Iterable[DailyLog],
    day: date,
    tolerance: Optional[float] = None,
) -> int:
    """
    Number of metrics whose goal is met on `day`. When a metric has several
    logs that day, any one meeting the goal is enough; with none, its
    default value is evaluated.
    """
    todays = _logs_for_day(logs, as_day(day))
    return sum(1 for m in metrics if _met_by_any(m, todays.get(m.id, []), tolerance))


# ---------------------------------------------------------------------------
# Day summary
# ---------------------------------------------------------------------------

def _has_notes(log: DailyLog) -> bool:
    return bool(log.notes and log.notes.strip())


def is_log_meaningful(log: Optional[DailyLog], metric: Optional[Metric]) -> bool:
    """
    Whether a log records something beyond the metric's default: a value
    that differs from `default_value`, or notes.
    """
    if log is None or metric is None:
        return False
    if _has_notes(log):
        return True

    logged = decode_raw(log.value)
    default = decode_raw(metric.default_value) if metric.default_value else None
    if logged is UNDECODABLE:
        return log.value not in ("", "0", metric.default_value or "")

    if metric.type == MetricType.boolean:
        return logged is True or logged != default
    if metric.type in NUMERIC_TYPES:
        return logged != default
    return logged != default and logged not in ("", None)


def day_summary(
    metrics: Iterable[Metric],
    logs: Iterable[DailyLog],
    day: date,
    tolerance: Optional[float] = None,
) -> DaySummary:
    """Per-day breakdown: scheduled metrics, logged metrics, goal completion."""
    target = as_day(day)
    metrics = list(metrics)
    by_id = {m.id: m for m in metrics}

    # Duplicate logs for a day are all kept; any one of them can complete it.
    logs_today: dict[str, list[DailyLog]] = {}
    for metric_id, entries in _logs_for_day(logs, target).items():
        metric = by_id.get(metric_id)
        meaningful = [log for log in entries if is_log_meaningful(log, metric)]
        if meaningful:
            logs_today[metric_id] = meaningful

    active = [m for m in metrics if m.active]
    scheduled = [m for m in active if is_on_calendar(m, target)]
    with_goals = [m for m in scheduled if has_goal(m)]
    completed = sum(
        1 for m in with_goals
        if m.id in logs_today and _met_by_any(m, logs_today[m.id], tolerance)
    )

    booleans = [m for m in scheduled if m.type == MetricType.boolean]
    booleans_done = sum(
        1 for m in booleans
        if any(parse_value(m.type, log.value) is True for log in logs_today.get(m.id, []))
    )

    return DaySummary(
        day=target,
        active_metrics=len(active),
        scheduled_metrics=len(scheduled),
        logged_metrics=len(logs_today),
        goal_metrics=len(with_goals),
        completed_goals=completed,
        completion_percentage=100 * booleans_done / len(booleans) if booleans else 0.0,
        goal_completion_percentage=100 * completed / len(with_goals) if with_goals else 0.0,
    )
