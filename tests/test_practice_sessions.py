import pytest


@pytest.fixture
def roster(make_player):
    return [make_player(jersey=9, first_name="Emma"), make_player(jersey=2, first_name="Ava")]


@pytest.fixture
def practice(make_practice):
    return make_practice()


def start(client, headers, practice_id, attendance=None):
    payload = {"practiceId": practice_id}
    if attendance is not None:
        payload["attendance"] = attendance
    return client.post("/api/practice-sessions", json=payload, headers=headers)


def timer(client, headers, session_id, action, seconds=None):
    payload = {"action": action}
    if seconds is not None:
        payload["seconds"] = seconds
    return client.post(f"/api/practice-sessions/{session_id}/timer", json=payload, headers=headers)


# ── Starting and reading sessions ────────────────────────────────────────────


def test_start_session_with_attendance(client, auth_headers, practice, roster):
    response = start(client, auth_headers, practice["id"], [
        {"playerId": roster[0]["id"], "attended": True},
        {"playerId": roster[1]["id"], "attended": False, "notes": "Sick"},
    ])
    assert response.status_code == 201
    session = response.get_json()["data"]
    assert session["status"] == "in_progress"
    assert session["attendanceRecorded"] == 2
    assert session["totalPlayers"] == 2
    assert session["attendedCount"] == 1
    # attendance rows come back in jersey order
    assert [row["jerseyNumber"] for row in session["attendance"]] == [2, 9]


def test_start_accepts_snake_case_payload(client, auth_headers, practice, roster):
    response = client.post("/api/practice-sessions", json={
        "practice_id": practice["id"],
        "attendance": [{"player_id": roster[0]["id"], "attended": True, "late_minutes": 10}],
    }, headers=auth_headers)
    assert response.status_code == 201
    assert response.get_json()["data"]["attendance"][0]["lateMinutes"] == 10


def test_start_rejects_unknown_practice(client, auth_headers, team):
    response = start(client, auth_headers, 4242)
    assert response.status_code == 404
    assert response.get_json()["error"] == "Practice not found"


def test_start_rejects_players_from_other_team(client, auth_headers, other_headers, practice):
    other_team = client.post("/api/teams", json={"name": "Rivals", "season": "Fall 2026"},
                             headers=other_headers).get_json()["data"]
    client.post(f"/api/teams/{other_team['id']}/select", headers=other_headers)
    outsider = client.post("/api/players", json={
        "firstName": "Out", "lastName": "Sider", "jerseyNumber": 1,
        "position": "Setter", "skillLevel": 3,
    }, headers=other_headers).get_json()["data"]

    response = start(client, auth_headers, practice["id"], [{"playerId": outsider["id"], "attended": True}])
    assert response.status_code == 400
    assert "not on this team" in response.get_json()["error"]


def test_start_rejects_removed_players(client, auth_headers, practice, roster):
    client.delete(f"/api/players/{roster[0]['id']}", headers=auth_headers)

    response = start(client, auth_headers, practice["id"], [{"playerId": roster[0]["id"], "attended": True}])
    assert response.status_code == 400
    assert response.get_json()["error"] == f"Player(s) not on this team: {roster[0]['id']}"


def test_only_one_open_session_per_team(client, auth_headers, practice):
    first = start(client, auth_headers, practice["id"]).get_json()["data"]
    second = start(client, auth_headers, practice["id"])
    assert second.status_code == 409

    client.put(f"/api/practice-sessions/{first['id']}/complete", json={}, headers=auth_headers)
    assert start(client, auth_headers, practice["id"]).status_code == 201


def test_active_session_lookup(client, auth_headers, practice):
    assert client.get("/api/practice-sessions/active", headers=auth_headers).get_json()["data"] is None

    session = start(client, auth_headers, practice["id"]).get_json()["data"]
    active = client.get("/api/practice-sessions/active", headers=auth_headers).get_json()["data"]
    assert active["id"] == session["id"]
    assert active["practiceName"] == "Tuesday practice"

    client.put(f"/api/practice-sessions/{session['id']}/complete", json={}, headers=auth_headers)
    assert client.get("/api/practice-sessions/active", headers=auth_headers).get_json()["data"] is None


def test_list_and_get_sessions(client, auth_headers, practice, roster):
    session = start(client, auth_headers, practice["id"], [
        {"playerId": roster[0]["id"], "attended": True},
    ]).get_json()["data"]

    listed = client.get("/api/practice-sessions", headers=auth_headers).get_json()["data"]
    assert [item["id"] for item in listed] == [session["id"]]
    assert listed[0]["attendedCount"] == 1
    assert "attendance" not in listed[0]

    fetched = client.get(f"/api/practice-sessions/{session['id']}", headers=auth_headers).get_json()["data"]
    assert fetched["attendance"][0]["firstName"] == "Emma"

    assert client.get("/api/practice-sessions/999", headers=auth_headers).status_code == 404


# ── Updates ──────────────────────────────────────────────────────────────────


def test_partial_update_and_completion_timestamp(client, auth_headers, practice):
    session = start(client, auth_headers, practice["id"]).get_json()["data"]

    response = client.put(f"/api/practice-sessions/{session['id']}", json={
        "totalElapsedTime": 95,
        "timerState": {"currentPhase": 1, "isPaused": True},
    }, headers=auth_headers)
    updated = response.get_json()["data"]
    assert updated["totalElapsedTime"] == 95
    assert updated["timerState"] == {"currentPhase": 1, "isPaused": True}
    assert updated["completedAt"] is None

    updated = client.put(f"/api/practice-sessions/{session['id']}", json={"status": "completed"},
                         headers=auth_headers).get_json()["data"]
    assert updated["status"] == "completed"
    assert updated["completedAt"] is not None


def test_completed_session_cannot_be_reopened(client, auth_headers, practice):
    first = start(client, auth_headers, practice["id"]).get_json()["data"]
    client.put(f"/api/practice-sessions/{first['id']}/complete", json={}, headers=auth_headers)
    second = start(client, auth_headers, practice["id"])
    assert second.status_code == 201

    response = client.put(f"/api/practice-sessions/{first['id']}", json={"status": "in_progress"},
                          headers=auth_headers)
    assert response.status_code == 409

    fetched = client.get(f"/api/practice-sessions/{first['id']}", headers=auth_headers).get_json()["data"]
    assert fetched["status"] == "completed"
    assert fetched["completedAt"] is not None

    listed = client.get("/api/practice-sessions", headers=auth_headers).get_json()["data"]
    assert [s["status"] for s in listed if s["status"] in ("in_progress", "paused")] == ["in_progress"]


def test_pausing_keeps_completed_at_empty(client, auth_headers, practice):
    session = start(client, auth_headers, practice["id"]).get_json()["data"]
    updated = client.put(f"/api/practice-sessions/{session['id']}", json={"status": "paused"},
                         headers=auth_headers).get_json()["data"]
    assert updated["status"] == "paused"
    assert updated["completedAt"] is None


def test_update_rejects_unknown_status(client, auth_headers, practice):
    session = start(client, auth_headers, practice["id"]).get_json()["data"]
    response = client.put(f"/api/practice-sessions/{session['id']}", json={"status": "abandoned"},
                          headers=auth_headers)
    assert response.status_code == 400


def test_timer_state_snapshot_pauses_session(client, auth_headers, practice):
    session = start(client, auth_headers, practice["id"]).get_json()["data"]

    response = client.post(f"/api/practice-sessions/{session['id']}/timer-state", json={
        "timerState": {"currentPhase": 0, "phaseTimeRemaining": 42},
        "phaseElapsedTime": 18,
        "totalElapsedTime": 18,
    }, headers=auth_headers)
    assert response.status_code == 200

    fetched = client.get(f"/api/practice-sessions/{session['id']}", headers=auth_headers).get_json()["data"]
    assert fetched["status"] == "paused"
    assert fetched["phaseElapsedTime"] == 18

    # a paused session still blocks a new one
    assert start(client, auth_headers, practice["id"]).status_code == 409


def test_complete_session(client, auth_headers, practice):
    session = start(client, auth_headers, practice["id"]).get_json()["data"]

    response = client.put(f"/api/practice-sessions/{session['id']}/complete", json={
        "actualDuration": 55,
        "notes": "Solid serve receive",
    }, headers=auth_headers)
    completed = response.get_json()["data"]
    assert completed["status"] == "completed"
    assert completed["actualDuration"] == 55
    assert completed["notes"] == "Solid serve receive"

    again = client.put(f"/api/practice-sessions/{session['id']}/complete", json={}, headers=auth_headers)
    assert again.status_code == 409


def test_complete_defaults_duration_from_elapsed_time(client, auth_headers, practice):
    session = start(client, auth_headers, practice["id"]).get_json()["data"]
    client.put(f"/api/practice-sessions/{session['id']}", json={"totalElapsedTime": 150}, headers=auth_headers)

    completed = client.put(f"/api/practice-sessions/{session['id']}/complete", json={},
                           headers=auth_headers).get_json()["data"]
    assert completed["actualDuration"] == 3


def test_attendance_upsert(client, auth_headers, practice, roster):
    session = start(client, auth_headers, practice["id"], [
        {"playerId": roster[0]["id"], "attended": False},
    ]).get_json()["data"]

    response = client.put(f"/api/practice-sessions/{session['id']}/attendance", json={"attendance": [
        {"playerId": roster[0]["id"], "attended": True, "lateMinutes": 5},
        {"playerId": roster[1]["id"], "attended": True},
    ]}, headers=auth_headers)
    updated = response.get_json()["data"]
    assert updated["totalPlayers"] == 2
    assert updated["attendedCount"] == 2
    late = [row for row in updated["attendance"] if row["playerId"] == roster[0]["id"]][0]
    assert late["lateMinutes"] == 5


# ── Notes ────────────────────────────────────────────────────────────────────


def test_player_notes(client, auth_headers, practice, roster):
    session = start(client, auth_headers, practice["id"]).get_json()["data"]

    first = client.post(f"/api/practice-sessions/{session['id']}/notes", json={
        "playerId": roster[0]["id"], "notes": "Quick feet on defense",
    }, headers=auth_headers)
    assert first.status_code == 201
    assert first.get_json()["data"]["noteType"] == "practice"
    assert first.get_json()["data"]["playerName"] == "Emma Lopez"

    second = client.post(f"/api/practice-sessions/{session['id']}/player-notes", json={
        "player_id": roster[1]["id"], "notes": "Work on approach", "noteType": "player",
    }, headers=auth_headers)
    assert second.status_code == 201

    notes = client.get(f"/api/practice-sessions/{session['id']}/notes", headers=auth_headers).get_json()["data"]
    assert len(notes) == 2

    only_ava = client.get(f"/api/practice-sessions/{session['id']}/player-notes/{roster[1]['id']}",
                          headers=auth_headers).get_json()["data"]
    assert [note["notes"] for note in only_ava] == ["Work on approach"]


def test_note_validation(client, auth_headers, practice, roster):
    session = start(client, auth_headers, practice["id"]).get_json()["data"]
    url = f"/api/practice-sessions/{session['id']}/notes"

    assert client.post(url, json={"playerId": roster[0]["id"], "notes": ""}, headers=auth_headers).status_code == 400
    assert client.post(url, json={"playerId": roster[0]["id"], "notes": "x" * 1001},
                       headers=auth_headers).status_code == 400
    assert client.post(url, json={"playerId": 9999, "notes": "Who?"}, headers=auth_headers).status_code == 404


# ── Timer ────────────────────────────────────────────────────────────────────


def test_timer_runs_practice_to_completion(client, auth_headers, practice):
    # phases: Warm-up 1 min, Serve receive 2 min
    session = start(client, auth_headers, practice["id"]).get_json()["data"]
    sid = session["id"]

    state = timer(client, auth_headers, sid, "start").get_json()["data"]
    assert state["timerState"]["phaseTimeRemaining"] == 60
    assert state["currentPhaseId"] == practice["phases"][0]["id"]

    state = timer(client, auth_headers, sid, "tick", 30).get_json()["data"]
    assert state["timerState"]["phaseTimeRemaining"] == 30
    assert state["totalElapsedTime"] == 30
    assert state["phaseElapsedTime"] == 30

    state = timer(client, auth_headers, sid, "pause").get_json()["data"]
    assert state["status"] == "paused"
    state = timer(client, auth_headers, sid, "tick", 10).get_json()["data"]
    assert state["totalElapsedTime"] == 30

    state = timer(client, auth_headers, sid, "resume").get_json()["data"]
    assert state["status"] == "in_progress"

    state = timer(client, auth_headers, sid, "next").get_json()["data"]
    assert state["timerState"]["currentPhase"] == 1
    assert state["timerState"]["phaseTimeRemaining"] == 120
    assert state["currentPhaseId"] == practice["phases"][1]["id"]

    state = timer(client, auth_headers, sid, "tick", 120).get_json()["data"]
    assert state["status"] == "completed"
    assert state["timerState"]["isComplete"] is True
    assert state["totalElapsedTime"] == 150
    assert state["actualDuration"] == 3
    assert state["completedAt"] is not None

    assert timer(client, auth_headers, sid, "tick").status_code == 409


def test_timer_requires_start(client, auth_headers, practice):
    session = start(client, auth_headers, practice["id"]).get_json()["data"]

    response = timer(client, auth_headers, session["id"], "tick", 5)
    assert response.status_code == 400
    assert response.get_json()["error"] == "Timer has not been started"

    timer(client, auth_headers, session["id"], "start")
    again = timer(client, auth_headers, session["id"], "start")
    assert again.status_code == 400


def test_timer_rejects_unknown_action(client, auth_headers, practice):
    session = start(client, auth_headers, practice["id"]).get_json()["data"]
    assert timer(client, auth_headers, session["id"], "rewind").status_code == 400


def test_timer_without_phases_uses_estimated_duration(client, auth_headers, make_practice):
    practice = make_practice(phases=[], duration=45, name="Open gym")
    session = start(client, auth_headers, practice["id"]).get_json()["data"]

    state = timer(client, auth_headers, session["id"], "start").get_json()["data"]
    assert state["timerState"]["phaseTimeRemaining"] == 45 * 60
    assert state["currentPhaseId"] is None
