"""
BDD step definitions for the announcement lifecycle (pytest-bdd).
Runs against the in-memory storage backend through a sync TestClient.
"""

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import given, parsers, scenarios, then, when

from petfinder.core.dependencies import get_repositories
from petfinder.db.repositories import InMemoryStore
from petfinder.main import app

scenarios("../features/announcement_lifecycle.feature")

PASSWORD = "123456"


@pytest.fixture
def client():
    store = InMemoryStore()
    app.dependency_overrides[get_repositories] = store.repositories
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def context():
    """Tokens by email, announcement ids by pet name, last response."""
    return {"tokens": {}, "announcements": {}, "response": None}


def _headers(context, email: str) -> dict:
    return {"Authorization": f"Bearer {context['tokens'][email]}"}


def _public_names(client, status: str) -> list[str]:
    r = client.get("/api/announcements", params={"status": status})
    assert r.status_code == 200
    return [a["pet_name"] for a in r.json()]


@given(parsers.parse('a registered user "{email}" named "{name}"'))
def registered_user(client, context, email, name):
    r = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": PASSWORD, "phone": "(71) 99999-0000"},
    )
    assert r.status_code == 201, r.text
    context["tokens"][email] = r.json()["token"]


@given(parsers.parse('"{email}" announces a lost pet "{pet}" in "{neighborhood}"'))
def announce_lost_pet(client, context, email, pet, neighborhood):
    r = client.post(
        "/api/announcements",
        headers=_headers(context, email),
        json={
            "pet_name": pet,
            "description": f"{pet} ran away",
            "type": "lost",
            "neighborhood": neighborhood,
        },
    )
    assert r.status_code == 201, r.text
    context["announcements"][pet] = r.json()["announcement"]["id"]


@when(parsers.parse('"{email}" sets the status of "{pet}" to "{status}"'))
def set_status(client, context, email, pet, status):
    context["response"] = client.patch(
        f"/api/announcements/{context['announcements'][pet]}/status",
        headers=_headers(context, email),
        json={"status": status},
    )


@when(parsers.parse('"{email}" comments "{content}" on "{pet}"'))
def post_comment(client, context, email, content, pet):
    context["response"] = client.post(
        f"/api/announcements/{context['announcements'][pet]}/comments",
        headers=_headers(context, email),
        json={"content": content},
    )


@then(parsers.parse("the response status should be {code:d}"))
def response_status(context, code):
    assert context["response"].status_code == code


@then(parsers.parse('"{pet}" should have status "{status}" and a found date'))
def has_status_and_found_date(client, context, pet, status):
    r = client.get(f"/api/announcements/{context['announcements'][pet]}")
    body = r.json()
    assert body["status"] == status
    assert body["found_date"] is not None


@then(parsers.parse('the public "{status}" list should contain "{pet}"'))
def list_contains(client, status, pet):
    assert pet in _public_names(client, status)


@then(parsers.parse('the public "{status}" list should not contain "{pet}"'))
def list_does_not_contain(client, status, pet):
    assert pet not in _public_names(client, status)


@then(parsers.parse('"{pet}" should have {count:d} comment by "{name}"'))
def comment_by(client, context, pet, count, name):
    r = client.get(f"/api/announcements/{context['announcements'][pet]}/comments")
    comments = r.json()
    assert len(comments) == count
    assert all(c["user"]["name"] == name for c in comments)


@then(parsers.parse('"{pet}" should have {count:d} comments'))
def comment_count(client, context, pet, count):
    r = client.get(f"/api/announcements/{context['announcements'][pet]}/comments")
    assert len(r.json()) == count
