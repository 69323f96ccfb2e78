"""
Tests for the goal evaluator, goal resolution and progress labels.
"""
from __future__ import annotations

import pytest

from tracker.models.daily_log import DailyLog
from tracker.models.goal import Goal
from tracker.models.metric import GoalType, Metric, MetricType
from tracker.services.goals import (
    evaluate_goal,
    goal_label,
    has_goal,
    is_zero_target,
    resolve_goal,
)


def goal(value: str, kind: str) -> Goal:
    return Goal(value=value, kind=GoalType(kind))


def make_metric(**fields) -> Metric:
    data = {"id": "m1", "name": "Steps", "type": "number"}
    data.update(fields)
    return Metric.model_validate(data)


def make_log(value="1", **fields) -> DailyLog:
    data = {"metric_id": "m1", "date": "2024-01-01", "value": value}
    data.update(fields)
    return DailyLog.model_validate(data)


# ---------------------------------------------------------------------------
# evaluate_goal
# ---------------------------------------------------------------------------

class TestMinimum:
    def test_below_goal(self):
        result = evaluate_goal(MetricType.number, "8", goal("10", "minimum"))
        assert result.satisfied is False
        assert result.progress == pytest.approx(80)

    def test_above_goal_caps_progress(self):
        result = evaluate_goal(MetricType.number, "12", goal("10", "minimum"))
        assert result.satisfied is True
        assert result.progress == 100

    def test_zero_goal_has_zero_progress(self):
        result = evaluate_goal(MetricType.number, "8", goal("0", "minimum"))
        assert result.satisfied is True
        assert result.progress == 0

    def test_negative_value_floors_progress(self):
        result = evaluate_goal(MetricType.number, "-5", goal("10", "minimum"))
        assert result.progress == 0

    def test_percentage_and_time_types(self):
        assert evaluate_goal(MetricType.percentage, "50", goal("40", "minimum")).satisfied
        assert evaluate_goal(MetricType.time, "30", goal("45", "minimum")).progress == pytest.approx(
            100 * 30 / 45
        )


class TestMaximum:
    def test_below_limit(self):
        result = evaluate_goal(MetricType.number, "8", goal("10", "maximum"))
        assert result.satisfied is True
        assert result.progress == pytest.approx(20)

    def test_above_limit(self):
        result = evaluate_goal(MetricType.number, "12", goal("10", "maximum"))
        assert result.satisfied is False
        assert result.progress == 0

    def test_zero_limit(self):
        result = evaluate_goal(MetricType.number, "0", goal("0", "maximum"))
        assert result.satisfied is True
        assert result.progress == 100


class TestExact:
    def test_exact_hit(self):
        result = evaluate_goal(MetricType.number, "10", goal("10", "exact"))
        assert result.satisfied is True
        assert result.progress == 100

    def test_within_default_tolerance(self, exact_tolerance):
        exact_tolerance(0.05)
        result = evaluate_goal(MetricType.number, "10.4", goal("10", "exact"))
        assert result.satisfied is True
        assert result.progress == pytest.approx(20)

    def test_outside_default_tolerance(self, exact_tolerance):
        exact_tolerance(0.05)
        result = evaluate_goal(MetricType.number, "11", goal("10", "exact"))
        assert result.satisfied is False
        assert result.progress == 0

    def test_configured_tolerance(self, exact_tolerance):
        exact_tolerance(0.5)
        result = evaluate_goal(MetricType.number, "7", goal("10", "exact"))
        assert result.satisfied is True
        assert result.progress == pytest.approx(40)

    def test_explicit_tolerance_wins(self, exact_tolerance):
        exact_tolerance(0.05)
        result = evaluate_goal(MetricType.number, "7", goal("10", "exact"), tolerance=0.5)
        assert result.satisfied is True


class TestBoolean:
    def test_true_completes(self):
        result = evaluate_goal(MetricType.boolean, "true", goal("true", "boolean"))
        assert result.satisfied is True
        assert result.progress == 100

    def test_false_does_not_complete(self):
        result = evaluate_goal(MetricType.boolean, "false", goal("true", "boolean"))
        assert result.satisfied is False
        assert result.progress == 0

    def test_typed_value_accepted(self):
        assert evaluate_goal(MetricType.boolean, True, goal("true", "boolean")).satisfied


class TestNotApplicable:
    def test_boolean_goal_on_number_metric(self):
        result = evaluate_goal(MetricType.number, "1", goal("1", "boolean"))
        assert result.applicable is False
        assert result.satisfied is False
        assert result.progress == 0

    def test_minimum_goal_on_text_metric(self):
        result = evaluate_goal(MetricType.text, '"hello"', goal("3", "minimum"))
        assert result.applicable is False

    def test_minimum_goal_on_boolean_metric(self):
        assert evaluate_goal(MetricType.boolean, "true", goal("1", "minimum")).applicable is False


class TestMalformedValues:
    def test_unparseable_value_reads_as_zero(self):
        result = evaluate_goal(MetricType.number, "lots", goal("10", "minimum"))
        assert result.satisfied is False
        assert result.progress == 0

    def test_unparseable_value_meets_maximum(self):
        assert evaluate_goal(MetricType.number, "{bad", goal("10", "maximum")).satisfied is True


# ---------------------------------------------------------------------------
# has_goal / resolve_goal
# ---------------------------------------------------------------------------

class TestHasGoal:
    def test_metric_with_goal(self):
        assert has_goal(make_metric(goal_value="10", goal_type="minimum")) is True

    @pytest.mark.parametrize("value", ["", "0", None])
    def test_empty_or_zero_value_is_goal_less(self, value):
        assert has_goal(make_metric(goal_value=value, goal_type="minimum")) is False

    def test_missing_type_is_goal_less(self):
        assert has_goal(make_metric(goal_value="10")) is False

    def test_log_override(self):
        assert has_goal(make_log(goal_value="5", goal_type="maximum")) is True

    def test_goal_instance_and_none(self):
        assert has_goal(goal("3", "exact")) is True
        assert has_goal(None) is False

    def test_numeric_goal_value_is_kept_as_text(self):
        metric = make_metric(goal_value=10, goal_type="minimum")
        assert metric.goal_value == "10"
        assert has_goal(metric)

    def test_zero_target(self):
        assert is_zero_target(make_metric(goal_value="0", goal_type="maximum")) is True
        assert is_zero_target(make_metric(goal_value="10", goal_type="maximum")) is False


class TestResolveGoal:
    def test_log_override_wins(self):
        metric = make_metric(goal_value="10", goal_type="minimum")
        log = make_log(goal_value="5", goal_type="maximum")
        assert resolve_goal(metric, log) == goal("5", "maximum")

    def test_falls_back_to_metric(self):
        metric = make_metric(goal_value="10", goal_type="minimum")
        assert resolve_goal(metric, make_log()) == goal("10", "minimum")

    def test_nothing_to_resolve(self):
        assert resolve_goal(make_metric(), make_log()) is None


# ---------------------------------------------------------------------------
# goal_label
# ---------------------------------------------------------------------------

class TestGoalLabel:
    def test_minimum(self):
        assert goal_label(MetricType.number, "8", goal("10", "minimum")) == "8/10 (min)"

    def test_percentage_suffix(self):
        assert goal_label(MetricType.percentage, "45", goal("50", "maximum")) == "45%/50% (max)"

    def test_unit_suffix(self):
        assert goal_label(MetricType.number, "5.5", goal("10", "exact"), unit="km") == "5.5 km/10 km (exact)"

    def test_boolean(self):
        assert goal_label(MetricType.boolean, "true", goal("true", "boolean")) == "Completed"
        assert goal_label(MetricType.boolean, "false", goal("true", "boolean")) == "Not completed"
