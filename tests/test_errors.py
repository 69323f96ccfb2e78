"""
Error envelope tests: exception classes and the handlers wired in main.
"""
from datetime import date

from tracker.core.errors import (
    CalendarRangeTooLargeError,
    InvalidDateRangeError,
    SnapshotTooLargeError,
    TrackerException,
)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class TestExceptionClasses:
    def test_base_defaults(self):
        exc = TrackerException("boom")
        assert exc.http_status == 500
        assert exc.to_dict() == {"code": "INTERNAL_ERROR", "message": "boom"}

    def test_snapshot_too_large(self):
        exc = SnapshotTooLargeError(max_items=10, received=11)
        assert exc.http_status == 422
        assert exc.to_dict()["code"] == "SNAPSHOT_TOO_LARGE"
        assert exc.details == {"max_items": 10, "received": 11}

    def test_invalid_range(self):
        exc = InvalidDateRangeError(start=date(2024, 2, 1), end=date(2024, 1, 1))
        assert exc.code == "INVALID_DATE_RANGE"
        assert exc.details == {"start": "2024-02-01", "end": "2024-01-01"}

    def test_calendar_too_large(self):
        exc = CalendarRangeTooLargeError(max_days=366, requested=400)
        assert exc.code == "CALENDAR_RANGE_TOO_LARGE"
        assert "400" in exc.message


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

class TestValidationErrors:
    def test_unknown_goal_type(self, client):
        body = {"value_type": "number", "value": "8", "goal_value": "10", "goal_type": "sometimes"}
        r = client.post("/goals/evaluate", json=body)
        assert r.status_code == 422
        data = r.json()
        assert data["code"] == "VALIDATION_ERROR"
        fields = [e["field"] for e in data["details"]["errors"]]
        assert "goal_type" in fields

    def test_missing_metric(self, client):
        r = client.post("/schedule/is-due", json={"day": "2024-01-01"})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_non_positive_tolerance(self, client):
        body = {"value_type": "number", "value": "8", "goal_value": "10",
                "goal_type": "exact", "tolerance": 0}
        r = client.post("/goals/evaluate", json=body)
        assert r.status_code == 422


class TestCalendarRange:
    def test_inverted_range(self, client):
        body = {"metrics": [], "start": "2024-02-01", "end": "2024-01-01"}
        r = client.post("/schedule/calendar", json=body)
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_DATE_RANGE"

    def test_range_too_long(self, client):
        body = {"metrics": [], "start": "2024-01-01", "end": "2025-01-01"}
        r = client.post("/schedule/calendar", json=body)
        assert r.status_code == 422
        data = r.json()
        assert data["code"] == "CALENDAR_RANGE_TOO_LARGE"
        assert data["details"] == {"max_days": 366, "requested": 367}

    def test_leap_year_fits(self, client):
        body = {"metrics": [], "start": "2024-01-01", "end": "2024-12-31"}
        r = client.post("/schedule/calendar", json=body)
        assert r.status_code == 200
        assert len(r.json()["days"]) == 366


class TestSnapshotLimit:
    def test_too_many_logs(self, client, monkeypatch):
        monkeypatch.setattr("tracker.routers.common.SNAPSHOT_MAX_LOGS", 2)
        logs = [
            {"metric_id": "m1", "date": f"2024-01-0{i}", "value": "true"}
            for i in range(1, 4)
        ]
        body = {"metric": {"id": "m1", "type": "boolean"}, "logs": logs, "as_of": "2024-01-03"}
        r = client.post("/streaks", json=body)
        assert r.status_code == 422
        data = r.json()
        assert data["code"] == "SNAPSHOT_TOO_LARGE"
        assert data["details"] == {"max_items": 2, "received": 3}


class TestOpenAPI:
    def test_error_envelope_documented(self, client):
        openapi = client.get("/openapi.json").json()
        assert "ErrorResponse" in openapi["components"]["schemas"]
        calendar = openapi["paths"]["/schedule/calendar"]["post"]["responses"]["422"]
        assert calendar["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
