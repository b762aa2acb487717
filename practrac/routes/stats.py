from flask import Blueprint, jsonify
from sqlalchemy import func

from practrac.extensions import db
from practrac.models import Player, Practice, PracticeAttendance, PracticeSession
from practrac.utils.decorators import active_team_required

stats_bp = Blueprint("stats", __name__)


@stats_bp.route("/stats", methods=["GET"])
@active_team_required
def team_stats(coach, team):
    """Roster size, skill and attendance figures for the active team."""
    players = Player.query.filter_by(team_id=team.id, is_active=True)

    total_players = players.count()
    avg_skill = db.session.query(func.avg(Player.skill_level)).filter(
        Player.team_id == team.id, Player.is_active.is_(True)
    ).scalar()

    total_practices = Practice.query.filter_by(team_id=team.id, is_active=True).count()

    attendance = (
        db.session.query(PracticeAttendance.attended)
        .join(PracticeSession, PracticeAttendance.session_id == PracticeSession.id)
        .join(Practice, PracticeSession.practice_id == Practice.id)
        .filter(Practice.team_id == team.id)
        .all()
    )
    if attendance:
        average_attendance = round(sum(1 for (attended,) in attendance if attended) / len(attendance), 2)
    else:
        average_attendance = 0

    breakdown = (
        db.session.query(Player.position, func.count(Player.id))
        .filter(Player.team_id == team.id, Player.is_active.is_(True))
        .group_by(Player.position)
        .order_by(Player.position)
        .all()
    )

    return jsonify({
        "success": True,
        "data": {
            "totalPlayers": total_players,
            "averageSkillLevel": round(float(avg_skill), 1) if avg_skill is not None else 0,
            "totalPractices": total_practices,
            "averageAttendance": average_attendance,
            "positionBreakdown": {position: count for position, count in breakdown},
        },
    })
