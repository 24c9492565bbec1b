"""
Pytest fixtures for the issue tracker tests.

The application is built with an in-memory issue store so no database is needed.
"""

import os
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

# Keep module-level app construction away from a real database
os.environ.setdefault("STORE_BACKEND", "memory")

from main import create_app  # noqa: E402
from tracker.database import MemoryIssueStore  # noqa: E402
from tracker.routes import issues as issues_routes  # noqa: E402

PROJECT = "testing1234"


@pytest.fixture
def store() -> MemoryIssueStore:
    return MemoryIssueStore()


@pytest.fixture
def client(store) -> Iterator[TestClient]:
    with TestClient(create_app(store)) as test_client:
        yield test_client


@pytest.fixture
def clock(monkeypatch) -> list[datetime]:
    """Freeze time; every call to utcnow() moves one second forward."""
    ticks: list[datetime] = []
    start = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def fake_utcnow() -> datetime:
        ticks.append(start + timedelta(seconds=len(ticks)))
        return ticks[-1]

    monkeypatch.setattr(issues_routes, "utcnow", fake_utcnow)
    return ticks


@pytest.fixture
def create_issue(client):
    def _create(project: str = PROJECT, **fields) -> dict:
        payload = {
            "issue_title": "Title",
            "issue_text": "Text",
            "created_by": "tester",
            **fields,
        }
        resp = client.post(f"/api/issues/{project}", json=payload)
        assert resp.status_code == 200, resp.text
        assert "error" not in resp.json()
        return resp.json()

    return _create
