"""Shared pytest fixtures.

Fixture overview
----------------
app            - application built with the testing config (in-memory SQLite)
client         - Flask test client for ``app``
auth_headers   - bearer headers for a freshly registered coach
other_headers  - bearer headers for a second, unrelated coach
team           - a team created and selected by the ``auth_headers`` coach
"""

import pytest

from practrac import create_app
from practrac.extensions import db


def register_coach(client, email, first_name="Casey", last_name="Coach", password="secret123"):
    response = client.post("/api/auth/register", json={
        "firstName": first_name,
        "lastName": last_name,
        "email": email,
        "password": password,
    })
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


# ── Application ──────────────────────────────────────────────────────────────


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


# ── Coaches and teams ────────────────────────────────────────────────────────


@pytest.fixture
def auth_headers(client):
    data = register_coach(client, "coach@example.com")
    return bearer(data["token"])


@pytest.fixture
def other_headers(client):
    data = register_coach(client, "rival@example.com", first_name="Robin", last_name="Rival")
    return bearer(data["token"])


@pytest.fixture
def team(client, auth_headers):
    response = client.post("/api/teams", json={
        "name": "Varsity Eagles",
        "season": "Fall 2026",
        "division": "Varsity",
    }, headers=auth_headers)
    assert response.status_code == 201
    team = response.get_json()["data"]

    response = client.post(f"/api/teams/{team['id']}/select", headers=auth_headers)
    assert response.status_code == 200
    return team


# ── Builders ─────────────────────────────────────────────────────────────────


@pytest.fixture
def make_player(client, auth_headers, team):
    def _make(jersey=7, position="Setter", skill=3, first_name="Maya", last_name="Lopez"):
        response = client.post("/api/players", json={
            "firstName": first_name,
            "lastName": last_name,
            "jerseyNumber": jersey,
            "position": position,
            "skillLevel": skill,
        }, headers=auth_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["data"]
    return _make


@pytest.fixture
def make_practice(client, auth_headers, team):
    def _make(phases=None, name="Tuesday practice", duration=60):
        if phases is None:
            phases = [
                {"name": "Warm-up", "duration": 1, "type": "warm-up"},
                {"name": "Serve receive", "duration": 2, "type": "skill-development"},
            ]
        response = client.post("/api/practices", json={
            "name": name,
            "date": "2026-10-20",
            "duration": duration,
            "phases": phases,
        }, headers=auth_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["data"]
    return _make
