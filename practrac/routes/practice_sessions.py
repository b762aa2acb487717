from datetime import datetime

from flask import Blueprint, jsonify, current_app
from sqlalchemy import desc

from practrac.errors import BadRequestError, ConflictError, NotFoundError
from practrac.extensions import db
from practrac.models import Player, PlayerNote, Practice, PracticeAttendance, PracticeSession
from practrac.models.practice_session import OPEN_STATUSES
from practrac.schemas import (
    StartSessionSchema,
    AttendanceUpdateSchema,
    UpdateSessionSchema,
    CompleteSessionSchema,
    NoteSchema,
    TimerActionSchema,
)
from practrac.services.practice_timer import PracticeTimer, TimerStateError, elapsed_minutes
from practrac.utils import load_json
from practrac.utils.decorators import active_team_required

sessions_bp = Blueprint("practice_sessions", __name__)

start_session_schema = StartSessionSchema()
attendance_update_schema = AttendanceUpdateSchema()
update_session_schema = UpdateSessionSchema()
complete_session_schema = CompleteSessionSchema()
note_schema = NoteSchema()
timer_action_schema = TimerActionSchema()


# Helpers
def team_sessions(team):
    return (
        PracticeSession.query
        .join(Practice, PracticeSession.practice_id == Practice.id)
        .filter(Practice.team_id == team.id)
    )


def get_team_session(team, session_id):
    session = team_sessions(team).filter(PracticeSession.id == session_id).first()
    if not session:
        raise NotFoundError("Practice session not found")
    return session


def get_team_player(team, player_id):
    player = Player.query.filter_by(id=player_id, team_id=team.id, is_active=True).first()
    if not player:
        raise NotFoundError("Player not found")
    return player


def check_roster(team, records):
    player_ids = {record["player_id"] for record in records}
    if not player_ids:
        return
    found = {
        player.id
        for player in Player.query.filter(
            Player.id.in_(player_ids), Player.team_id == team.id, Player.is_active.is_(True)
        ).all()
    }
    missing = sorted(player_ids - found)
    if missing:
        raise BadRequestError(f"Player(s) not on this team: {', '.join(str(i) for i in missing)}")


def upsert_attendance(session, records):
    for record in records:
        row = session.attendance_for(record["player_id"])
        if row is None:
            row = PracticeAttendance(player_id=record["player_id"])
            session.attendance.append(row)
        row.attended = record["attended"]
        row.late_minutes = record.get("late_minutes") or 0
        row.notes = record.get("notes")


def mark_completed(session, actual_duration=None):
    session.status = "completed"
    session.completed_at = datetime.utcnow()
    if actual_duration is not None:
        session.actual_duration = actual_duration


def require_open(session):
    if session.status == "completed":
        raise ConflictError("Practice session is already completed")
    if session.status == "cancelled":
        raise ConflictError("Practice session was cancelled")


# Routes
@sessions_bp.route("", methods=["GET"])
@active_team_required
def list_sessions(coach, team):
    sessions = team_sessions(team).order_by(desc(PracticeSession.started_at), desc(PracticeSession.id)).all()
    return jsonify({"success": True, "data": [session.to_dict() for session in sessions]})


@sessions_bp.route("/active", methods=["GET"])
@active_team_required
def active_session(coach, team):
    session = (
        team_sessions(team)
        .filter(PracticeSession.status.in_(OPEN_STATUSES))
        .order_by(desc(PracticeSession.started_at), desc(PracticeSession.id))
        .first()
    )
    if session is None:
        return jsonify({"success": True, "data": None})
    return jsonify({"success": True, "data": session.to_dict(include_attendance=True)})


@sessions_bp.route("/<int:session_id>", methods=["GET"])
@active_team_required
def get_session(session_id, coach, team):
    session = get_team_session(team, session_id)
    return jsonify({"success": True, "data": session.to_dict(include_attendance=True)})


@sessions_bp.route("", methods=["POST"])
@active_team_required
def start_session(coach, team):
    """Start running a practice, optionally recording attendance up front."""
    data = load_json(start_session_schema)

    practice = Practice.query.filter_by(id=data["practice_id"], team_id=team.id, is_active=True).first()
    if not practice:
        raise NotFoundError("Practice not found")

    running = team_sessions(team).filter(PracticeSession.status.in_(OPEN_STATUSES)).first()
    if running:
        raise ConflictError(f"Practice session {running.id} is still running")

    check_roster(team, data["attendance"])

    session = PracticeSession(practice_id=practice.id, status="in_progress")
    upsert_attendance(session, data["attendance"])
    db.session.add(session)
    db.session.commit()
    current_app.logger.info("Started practice session %s for practice %s", session.id, practice.id)

    result = session.to_dict(include_attendance=True)
    result["attendanceRecorded"] = len(data["attendance"])
    return jsonify({"success": True, "data": result}), 201


@sessions_bp.route("/<int:session_id>", methods=["PUT"])
@active_team_required
def update_session(session_id, coach, team):
    updates = load_json(update_session_schema)
    session = get_team_session(team, session_id)
    require_open(session)

    status = updates.pop("status", None)
    if status is not None:
        session.status = status
        session.completed_at = datetime.utcnow() if status == "completed" else None

    for field, value in updates.items():
        setattr(session, field, value)
    session.last_activity = datetime.utcnow()
    db.session.commit()

    return jsonify({"success": True, "message": "Practice session updated successfully", "data": session.to_dict()})


@sessions_bp.route("/<int:session_id>/timer-state", methods=["POST"])
@active_team_required
def save_timer_state(session_id, coach, team):
    """Snapshot sent when the live practice screen is closed; parks the session as paused."""
    updates = load_json(update_session_schema)
    session = get_team_session(team, session_id)
    require_open(session)

    updates.pop("status", None)
    for field, value in updates.items():
        setattr(session, field, value)
    session.status = "paused"
    session.last_activity = datetime.utcnow()
    db.session.commit()

    return jsonify({"success": True, "message": "Timer state saved"})


@sessions_bp.route("/<int:session_id>/complete", methods=["PUT"])
@active_team_required
def complete_session(session_id, coach, team):
    data = load_json(complete_session_schema)
    session = get_team_session(team, session_id)
    require_open(session)

    actual_duration = data.get("actual_duration")
    if actual_duration is None:
        actual_duration = elapsed_minutes(session.total_elapsed_time or 0)
    mark_completed(session, actual_duration)
    if data.get("notes") is not None:
        session.notes = data["notes"]
    session.last_activity = datetime.utcnow()
    db.session.commit()
    current_app.logger.info("Completed practice session %s (%s min)", session.id, session.actual_duration)

    return jsonify({"success": True, "data": session.to_dict(include_attendance=True)})


@sessions_bp.route("/<int:session_id>/attendance", methods=["PUT"])
@active_team_required
def update_attendance(session_id, coach, team):
    data = load_json(attendance_update_schema)
    session = get_team_session(team, session_id)
    check_roster(team, data["attendance"])

    upsert_attendance(session, data["attendance"])
    session.last_activity = datetime.utcnow()
    db.session.commit()

    return jsonify({"success": True, "data": session.to_dict(include_attendance=True)})


@sessions_bp.route("/<int:session_id>/timer", methods=["POST"])
@active_team_required
def timer_action(session_id, coach, team):
    """Apply a timer action (start, tick, pause, resume, next, previous) to the stored timer."""
    data = load_json(timer_action_schema)
    session = get_team_session(team, session_id)
    require_open(session)

    phases = list(session.practice.phases)
    timer = PracticeTimer.from_state(
        session.timer_state,
        [phase.duration for phase in phases],
        session.practice.estimated_duration or session.practice.duration,
    )
    try:
        timer.apply(data["action"], data["seconds"])
    except TimerStateError as e:
        raise BadRequestError(str(e))

    session.timer_state = timer.to_state()
    session.current_phase_id = phases[timer.current_phase].id if phases else None
    session.phase_elapsed_time = timer.phase_elapsed
    session.total_elapsed_time = timer.total_elapsed
    session.last_activity = datetime.utcnow()
    if timer.is_complete:
        mark_completed(session, elapsed_minutes(timer.total_elapsed))
    else:
        session.status = "paused" if timer.is_paused else "in_progress"
    db.session.commit()

    return jsonify({"success": True, "data": session.to_dict()})


@sessions_bp.route("/<int:session_id>/notes", methods=["POST"])
@sessions_bp.route("/<int:session_id>/player-notes", methods=["POST"])
@active_team_required
def add_note(session_id, coach, team):
    data = load_json(note_schema)
    session = get_team_session(team, session_id)
    player = get_team_player(team, data["player_id"])

    note = PlayerNote(
        session_id=session.id,
        player_id=player.id,
        notes=data["notes"],
        note_type=data["note_type"],
    )
    db.session.add(note)
    db.session.commit()

    return jsonify({"success": True, "data": note.to_dict()}), 201


@sessions_bp.route("/<int:session_id>/notes", methods=["GET"])
@active_team_required
def list_notes(session_id, coach, team):
    session = get_team_session(team, session_id)
    notes = session.player_notes.order_by(desc(PlayerNote.created_at), desc(PlayerNote.id)).all()
    return jsonify({"success": True, "data": [note.to_dict() for note in notes]})


@sessions_bp.route("/<int:session_id>/player-notes/<int:player_id>", methods=["GET"])
@active_team_required
def list_player_notes(session_id, player_id, coach, team):
    session = get_team_session(team, session_id)
    notes = (
        session.player_notes.filter_by(player_id=player_id)
        .order_by(desc(PlayerNote.created_at), desc(PlayerNote.id))
        .all()
    )
    return jsonify({"success": True, "data": [note.to_dict() for note in notes]})
