"""
Shared pytest fixtures.

The API is stateless, so every test posts its own metric/log snapshot;
no database or seed data is needed.
"""
import pytest
from fastapi.testclient import TestClient

from tracker.core.config import settings
from tracker.main import app


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def exact_tolerance(monkeypatch):
    """Set EXACT_GOAL_TOLERANCE for the duration of a test."""
    def _set(value: float) -> None:
        monkeypatch.setattr(settings, "EXACT_GOAL_TOLERANCE", value)
    return _set
