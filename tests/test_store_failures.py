"""
Store failures never reach the client: each route answers with its own fixed message.
"""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from main import create_app
from tracker.database import MemoryIssueStore
from tracker.exceptions import StoreError

URL = "/api/issues/broken"


class BrokenIssueStore(MemoryIssueStore):
    """Projects resolve, every issue operation fails."""

    async def ping(self):
        return False

    async def find_issues(self, project_id, criteria):
        raise StoreError("connection reset")

    async def create_issue(self, fields):
        raise StoreError("connection reset")

    async def update_issue(self, issue_id, changes):
        raise StoreError("connection reset")

    async def delete_issue(self, issue_id):
        raise StoreError("connection reset")


@pytest.fixture
def broken_client() -> Iterator[TestClient]:
    store = BrokenIssueStore()
    with TestClient(create_app(store)) as client:
        # The project exists so every request reaches the failing call
        store.projects["p1"] = {"id": "p1", "name": "broken"}
        yield client


def test_list_failure(broken_client):
    resp = broken_client.get(URL)
    assert resp.status_code == 200
    assert resp.json() == {"error": "fail fetching issues"}


def test_create_failure(broken_client):
    resp = broken_client.post(URL, json={"issue_title": "t", "issue_text": "x", "created_by": "me"})
    assert resp.status_code == 200
    assert resp.json() == {"error": "could not save issue"}


def test_update_failure(broken_client):
    resp = broken_client.put(URL, json={"_id": "abc", "issue_text": "x"})
    assert resp.status_code == 200
    assert resp.json() == {"error": "could not update", "_id": "abc"}


def test_delete_failure(broken_client):
    resp = broken_client.request("DELETE", URL, json={"_id": "abc"})
    assert resp.status_code == 200
    assert resp.json() == {"error": "could not delete", "_id": "abc"}


def test_health_reports_store_down(broken_client):
    assert broken_client.get("/health").json() == {"status": "degraded", "store": "down"}


def test_health_reports_store_up(client):
    resp = client.get("/health")
    assert resp.json() == {"status": "ok", "store": "up"}
    assert "x-process-time" in resp.headers
