from datetime import datetime

from flask import Blueprint, jsonify
from sqlalchemy import desc

from practrac.errors import ConflictError, NotFoundError
from practrac.extensions import db
from practrac.models import Team, CoachActiveTeam
from practrac.schemas import TeamSchema
from practrac.utils import load_json
from practrac.utils.decorators import coach_required

teams_bp = Blueprint("teams", __name__)
team_schema = TeamSchema()

DUPLICATE_TEAM_MSG = "A team with this name already exists for this season"


def get_coach_team(coach, team_id):
    team = Team.query.filter_by(id=team_id, coach_id=coach.id, is_active=True).first()
    if not team:
        raise NotFoundError("Team not found")
    return team


def ensure_unique_team(coach, name, season, exclude_id=None):
    query = Team.query.filter_by(coach_id=coach.id, name=name, season=season)
    if exclude_id is not None:
        query = query.filter(Team.id != exclude_id)
    if query.first():
        raise ConflictError(DUPLICATE_TEAM_MSG)


@teams_bp.route("", methods=["GET"])
@coach_required
def list_teams(coach):
    teams = (
        Team.query.filter_by(coach_id=coach.id, is_active=True)
        .order_by(desc(Team.created_at), desc(Team.id))
        .all()
    )
    return jsonify({"success": True, "data": [team.to_dict() for team in teams]})


@teams_bp.route("", methods=["POST"])
@coach_required
def create_team(coach):
    data = load_json(team_schema)
    ensure_unique_team(coach, data["name"], data["season"])

    team = Team(coach_id=coach.id, **data)
    db.session.add(team)
    db.session.commit()

    return jsonify({"success": True, "data": team.to_dict()}), 201


@teams_bp.route("/<int:team_id>", methods=["PUT"])
@coach_required
def update_team(team_id, coach):
    data = load_json(team_schema)
    team = get_coach_team(coach, team_id)
    ensure_unique_team(coach, data["name"], data["season"], exclude_id=team.id)

    for field, value in data.items():
        setattr(team, field, value)
    db.session.commit()

    return jsonify({"success": True, "message": "Team updated successfully", "data": team.to_dict()})


@teams_bp.route("/<int:team_id>", methods=["DELETE"])
@coach_required
def delete_team(team_id, coach):
    team = get_coach_team(coach, team_id)
    team.is_active = False

    # A deleted team can no longer be the working team
    link = coach.active_team_link
    if link and link.team_id == team.id:
        db.session.delete(link)
    db.session.commit()

    return jsonify({"success": True, "message": "Team deleted successfully"})


@teams_bp.route("/<int:team_id>/select", methods=["POST"])
@teams_bp.route("/<int:team_id>/activate", methods=["POST"])
@coach_required
def select_team(team_id, coach):
    team = get_coach_team(coach, team_id)

    link = coach.active_team_link
    if link is None:
        link = CoachActiveTeam(coach_id=coach.id)
        db.session.add(link)
    link.team_id = team.id
    link.selected_at = datetime.utcnow()
    db.session.commit()

    return jsonify({
        "success": True,
        "data": {"activeTeam": {"id": team.id, "name": team.name, "season": team.season}},
    })


@teams_bp.route("/active", methods=["GET"])
@coach_required
def active_team(coach):
    team = coach.active_team
    if team is None:
        return jsonify({"success": True, "data": None})

    data = team.to_dict()
    selected_at = coach.active_team_link.selected_at
    data["selectedAt"] = selected_at.isoformat() if selected_at else None
    return jsonify({"success": True, "data": data})


@teams_bp.route("/<int:team_id>/players", methods=["GET"])
@coach_required
def team_players(team_id, coach):
    team = get_coach_team(coach, team_id)
    return jsonify({"success": True, "data": [player.to_dict() for player in team.active_players()]})
