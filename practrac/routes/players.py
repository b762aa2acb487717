from flask import Blueprint, jsonify

from practrac.errors import ConflictError, NotFoundError
from practrac.extensions import db
from practrac.models import Player, PlayerStats, PracticeAttendance, PracticeSession, Practice
from practrac.models.player import STAT_FIELDS
from practrac.schemas import PlayerSchema, PlayerStatsSchema
from practrac.utils import load_json
from practrac.utils.decorators import active_team_required

players_bp = Blueprint("players", __name__)
player_schema = PlayerSchema()
player_stats_schema = PlayerStatsSchema()


def get_team_player(team, player_id):
    player = Player.query.filter_by(id=player_id, team_id=team.id, is_active=True).first()
    if not player:
        raise NotFoundError("Player not found")
    return player


def ensure_jersey_free(team, jersey_number, exclude_id=None):
    query = Player.query.filter_by(team_id=team.id, jersey_number=jersey_number, is_active=True)
    if exclude_id is not None:
        query = query.filter(Player.id != exclude_id)
    if query.first():
        raise ConflictError("Jersey number already exists for this team")


@players_bp.route("", methods=["GET"])
@active_team_required
def list_players(coach, team):
    return jsonify({"success": True, "data": [player.to_dict() for player in team.active_players()]})


@players_bp.route("", methods=["POST"])
@active_team_required
def create_player(coach, team):
    data = load_json(player_schema)
    ensure_jersey_free(team, data["jersey_number"])

    player = Player(team_id=team.id, **data)
    db.session.add(player)
    db.session.commit()

    return jsonify({"success": True, "data": player.to_dict()}), 201


@players_bp.route("/<int:player_id>", methods=["GET"])
@active_team_required
def get_player(player_id, coach, team):
    player = get_team_player(team, player_id)
    return jsonify({"success": True, "data": player.to_dict()})


@players_bp.route("/<int:player_id>", methods=["PUT"])
@active_team_required
def update_player(player_id, coach, team):
    data = load_json(player_schema)
    player = get_team_player(team, player_id)
    ensure_jersey_free(team, data["jersey_number"], exclude_id=player.id)

    for key, value in data.items():
        setattr(player, key, value)
    db.session.commit()

    return jsonify({"success": True, "message": "Player updated successfully", "data": player.to_dict()})


@players_bp.route("/<int:player_id>", methods=["DELETE"])
@active_team_required
def delete_player(player_id, coach, team):
    player = get_team_player(team, player_id)
    player.is_active = False
    db.session.commit()

    return jsonify({"success": True, "message": "Player deleted successfully"})


@players_bp.route("/<int:player_id>/stats", methods=["PUT"])
@active_team_required
def update_player_stats(player_id, coach, team):
    """Create or replace the player's stat line for a season (defaults to the team's)."""
    data = load_json(player_stats_schema)
    player = get_team_player(team, player_id)
    season = data.pop("season") or team.season

    stats = player.stats_for(season)
    if stats is None:
        stats = PlayerStats(player_id=player.id, season=season)
        db.session.add(stats)
    for field in STAT_FIELDS:
        setattr(stats, field, data[field])
    db.session.commit()

    return jsonify({
        "success": True,
        "data": {"playerId": player.id, "season": season, **{field: getattr(stats, field) for field in STAT_FIELDS}},
    })


@players_bp.route("/<int:player_id>/attendance", methods=["GET"])
@active_team_required
def player_attendance(player_id, coach, team):
    records = (
        PracticeAttendance.query
        .join(PracticeSession, PracticeAttendance.session_id == PracticeSession.id)
        .join(Practice, PracticeSession.practice_id == Practice.id)
        .filter(PracticeAttendance.player_id == player_id, Practice.team_id == team.id)
        .order_by(PracticeSession.started_at.desc(), PracticeSession.id.desc())
        .all()
    )

    result = []
    for record in records:
        session = record.session
        result.append({
            "id": record.id,
            "sessionId": record.session_id,
            "attended": bool(record.attended),
            "lateMinutes": record.late_minutes or 0,
            "notes": record.notes,
            "practiceName": session.practice.name,
            "practiceDate": session.practice.date.isoformat() if session.practice.date else None,
            "sessionDate": session.started_at.isoformat() if session.started_at else None,
            "sessionStatus": session.status,
        })

    return jsonify({"success": True, "data": result})
