from flask import Blueprint, jsonify, current_app
from sqlalchemy import desc

from practrac.errors import BadRequestError, NotFoundError
from practrac.extensions import db
from practrac.models import Drill, Practice, PracticePhase
from practrac.schemas import PracticeSchema
from practrac.utils import load_json
from practrac.utils.decorators import active_team_required

practices_bp = Blueprint("practices", __name__)
practice_schema = PracticeSchema()


def get_team_practice(team, practice_id):
    practice = Practice.query.filter_by(id=practice_id, team_id=team.id, is_active=True).first()
    if not practice:
        raise NotFoundError("Practice not found")
    return practice


def estimated_duration(data):
    """Sum of the phase durations, or the planned duration when there are none."""
    phases = data.get("phases") or []
    if phases:
        return sum(phase["duration"] for phase in phases)
    return data["duration"]


def check_phase_drills(coach, phases):
    wanted = {drill_id for phase in phases for drill_id in phase.get("drills", [])}
    if not wanted:
        return
    drills = Drill.query.filter(Drill.id.in_(wanted), Drill.is_active.is_(True)).all()
    visible = {drill.id for drill in drills if drill.is_visible_to(coach.id)}
    missing = sorted(wanted - visible)
    if missing:
        raise BadRequestError(f"Unknown drill id(s): {', '.join(str(i) for i in missing)}")


def practice_summary(practice):
    data = practice.to_dict()
    latest = practice.latest_session()
    data["sessionStatus"] = latest.status if latest else None
    data["hasCompletedSession"] = practice.sessions.filter_by(status="completed").first() is not None
    return data


@practices_bp.route("", methods=["GET"])
@active_team_required
def list_practices(coach, team):
    practices = (
        Practice.query.filter_by(team_id=team.id, is_active=True)
        .order_by(desc(Practice.id))
        .all()
    )
    return jsonify({"success": True, "data": [practice_summary(practice) for practice in practices]})


@practices_bp.route("", methods=["POST"])
@active_team_required
def create_practice(coach, team):
    data = load_json(practice_schema)
    check_phase_drills(coach, data["phases"])

    practice = Practice(
        team_id=team.id,
        name=data["name"],
        date=data["date"],
        duration=data["duration"],
        objective=data.get("objective"),
        estimated_duration=estimated_duration(data),
    )
    practice.phases = PracticePhase.build_list(data["phases"])
    db.session.add(practice)
    db.session.commit()
    current_app.logger.info("Created practice %s with %d phases", practice.id, len(practice.phases))

    result = practice.to_dict()
    result["phasesAdded"] = len(practice.phases)
    return jsonify({"success": True, "data": result}), 201


@practices_bp.route("/<int:practice_id>", methods=["GET"])
@active_team_required
def get_practice(practice_id, coach, team):
    practice = get_team_practice(team, practice_id)
    return jsonify({"success": True, "data": practice.to_dict(include_drills=True)})


@practices_bp.route("/<int:practice_id>", methods=["PUT"])
@active_team_required
def update_practice(practice_id, coach, team):
    """Update the plan, replacing its phase list wholesale."""
    data = load_json(practice_schema)
    practice = get_team_practice(team, practice_id)
    check_phase_drills(coach, data["phases"])

    practice.name = data["name"]
    practice.date = data["date"]
    practice.duration = data["duration"]
    practice.objective = data.get("objective")
    practice.estimated_duration = estimated_duration(data)

    # Old phases and their drill links are deleted as orphans before the new list goes in
    practice.phases = []
    db.session.flush()
    practice.phases = PracticePhase.build_list(data["phases"])
    db.session.commit()

    return jsonify({"success": True, "message": "Practice updated successfully", "data": practice.to_dict()})


@practices_bp.route("/<int:practice_id>", methods=["DELETE"])
@active_team_required
def delete_practice(practice_id, coach, team):
    """Remove the practice's sessions and plan, then soft delete it, in one transaction."""
    practice = get_team_practice(team, practice_id)

    for session in practice.sessions.all():
        db.session.delete(session)
    practice.phases = []
    practice.is_active = False
    db.session.commit()

    return jsonify({"success": True, "message": "Practice deleted successfully"})
