"""End-to-end tests against a real PostgreSQL.

Set TEST_DATABASE_URL to a throwaway database to run them; the tables in it
are truncated before every test.
"""

import asyncio
import os
from datetime import datetime

import asyncpg
import pytest
from fastapi.testclient import TestClient

from main import app

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "").strip()

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not TEST_DATABASE_URL, reason="TEST_DATABASE_URL is not set"),
]


async def _truncate(dsn: str) -> None:
    conn = await asyncpg.connect(dsn)
    try:
        await conn.execute("TRUNCATE task, person RESTART IDENTITY CASCADE")
    finally:
        await conn.close()


@pytest.fixture
def live_client(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", TEST_DATABASE_URL)
    monkeypatch.setenv("SEED_SAMPLE_DATA", "false")
    app.dependency_overrides.clear()
    with TestClient(app) as client:
        asyncio.run(_truncate(TEST_DATABASE_URL))
        yield client


def _person(client, name, email=None):
    response = client.post("/person/", json={"name": name, "email": email or f"{name.lower()}@x.com"})
    assert response.status_code == 201
    return response.json()


def _task(client, title, **fields):
    response = client.post("/task/", json={"title": title, "description": f"{title} details", **fields})
    assert response.status_code == 201, response.text
    return response.json()


def test_create_then_get_person(live_client):
    created = live_client.post("/person/", json={"name": "Ann", "email": "a@x.com"})
    assert created.status_code == 201
    body = created.json()
    assert body == {"id": body["id"], "name": "Ann", "email": "a@x.com"}

    fetched = live_client.get(f"/person/{body['id']}/")
    assert fetched.status_code == 200
    assert fetched.json() == body


def test_persons_listed_by_name(live_client):
    for name in ["Carol", "Ann", "Bob"]:
        _person(live_client, name)

    names = [p["name"] for p in live_client.get("/person/").json()]
    assert names == ["Ann", "Bob", "Carol"]


def test_tasks_listed_by_identity(live_client):
    ids = [_task(live_client, title)["id"] for title in ["z", "a", "m"]]

    listed = [t["id"] for t in live_client.get("/task/").json()]
    assert listed == sorted(ids)


def test_unset_optional_fields_are_omitted(live_client):
    created = _task(live_client, "bare")
    fetched = live_client.get(f"/task/{created['id']}/").json()

    for body in (created, fetched):
        assert "priority" not in body
        assert "assigned_to" not in body
        assert "due_by" not in body


def test_optional_fields_round_trip(live_client):
    ann = _person(live_client, "Ann")
    created = _task(live_client, "full", priority=0, assigned_to=ann["id"], due_by="2030-01-02T03:04:05")

    fetched = live_client.get(f"/task/{created['id']}/").json()
    assert fetched["priority"] == 0
    assert fetched["assigned_to"] == ann["id"]
    assert fetched["due_by"] == "2030-01-02T03:04:05"


def test_missing_identity_is_404(live_client):
    assert live_client.get("/person/999999/").status_code == 404
    assert live_client.get("/task/999999/").status_code == 404


def test_update_keeps_created_and_advances_last_updated(live_client):
    created = _task(live_client, "t")

    response = live_client.put(
        f"/task/{created['id']}/",
        json={
            "title": "t2",
            "description": "changed",
            "created": "1999-01-01T00:00:00",
            "last_updated": "1999-01-01T00:00:00",
        },
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "t2"
    assert updated["created"] == created["created"]
    assert datetime.fromisoformat(updated["last_updated"]) >= datetime.fromisoformat(created["last_updated"])
    assert live_client.get(f"/task/{created['id']}/").json() == updated


def test_task_with_unknown_assignee_is_rejected(live_client):
    response = live_client.post("/task/", json={"title": "t", "description": "d", "assigned_to": 424242})
    assert response.status_code == 400
    assert live_client.get("/task/").json() == []


def test_referenced_person_cannot_be_deleted(live_client):
    ann = _person(live_client, "Ann")
    task = _task(live_client, "t", assigned_to=ann["id"])

    response = live_client.delete(f"/person/{ann['id']}/")

    assert response.status_code == 400
    assert live_client.get(f"/person/{ann['id']}/").status_code == 200
    assert live_client.get(f"/task/{task['id']}/").json()["assigned_to"] == ann["id"]


def test_delete_person(live_client):
    ann = _person(live_client, "Ann")

    assert live_client.delete(f"/person/{ann['id']}/").status_code == 200
    assert live_client.get(f"/person/{ann['id']}/").status_code == 404
