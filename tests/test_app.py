from datetime import timedelta

import pytest

from practrac import create_app
from practrac.config import config, TestingConfig
from practrac.errors import first_validation_message


def test_testing_config_is_applied(app):
    assert app.config["TESTING"] is True
    assert app.config["SQLALCHEMY_DATABASE_URI"] == "sqlite:///:memory:"


def test_default_token_lifetime_is_a_week():
    assert TestingConfig.JWT_ACCESS_TOKEN_EXPIRES == timedelta(days=7)


def test_config_name_comes_from_environment(monkeypatch):
    monkeypatch.setenv("PRACTRAC_ENV", "testing")
    app = create_app()
    assert app.config["TESTING"] is True


def test_config_map_has_default():
    assert config["default"] is config["development"]


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_non_json_body_is_rejected(client, auth_headers):
    response = client.post("/api/teams", data="name=Eagles", headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()["error"] == "Request body must be JSON"


def test_unexpected_errors_become_500(app, client):
    @app.route("/api/boom")
    def boom():
        raise RuntimeError("kaboom")

    response = client.get("/api/boom")
    assert response.status_code == 500
    assert response.get_json() == {"success": False, "error": "Internal server error"}


def test_cors_headers_for_allowed_origin(client):
    response = client.get("/api/health", headers={"Origin": "http://localhost:3000"})
    assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"


@pytest.mark.parametrize("messages, expected", [
    ({"name": ["Missing data for required field."]}, "name: Missing data for required field."),
    ({"attendance": {0: {"playerId": ["Not a valid integer."]}}}, "attendance.0.playerId: Not a valid integer."),
    ({"_schema": ["Invalid input type."]}, "Invalid input type."),
    ("plain", "plain"),
])
def test_first_validation_message(messages, expected):
    assert first_validation_message(messages) == expected


def test_seed_demo_builds_ordered_practice_plan(app):
    from practrac.models import Coach, Practice

    result = app.test_cli_runner().invoke(args=["seed-demo"])
    assert result.exit_code == 0, result.output
    assert "Demo data created" in result.output

    coach = Coach.query.filter_by(email="demo@practrac.local").first()
    assert coach.active_team.name == "Varsity Eagles"

    practice = Practice.query.filter_by(team_id=coach.active_team.id).one()
    assert [phase.phase_order for phase in practice.phases] == [1, 2, 3, 4]
    assert [len(phase.drill_ids) for phase in practice.phases] == [1, 1, 1, 0]
    assert practice.estimated_duration == 50

    again = app.test_cli_runner().invoke(args=["seed-demo"])
    assert "already exists" in again.output


def test_build_list_numbers_phases_and_links_drills():
    from practrac.models import PracticePhase

    rows = PracticePhase.build_list([
        {"name": "Warm-up", "duration": 10, "type": "warm-up", "drills": [3, 5]},
        {"name": "Scrimmage", "duration": 20, "type": "scrimmage", "objective": "Serve tough"},
    ])
    assert [row.phase_order for row in rows] == [1, 2]
    assert rows[0].drill_ids == [3, 5]
    assert rows[1].drill_ids == []
    assert rows[1].objective == "Serve tough"
