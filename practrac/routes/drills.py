from flask import Blueprint, jsonify, request
from sqlalchemy import or_, desc

from practrac.errors import NotFoundError
from practrac.extensions import db
from practrac.models import Drill, DrillFavorite
from practrac.schemas import DrillSchema, normalize_court_diagram
from practrac.utils import load_json
from practrac.utils.decorators import coach_required

drills_bp = Blueprint("drills", __name__)
drill_schema = DrillSchema()


def favorite_ids(coach):
    return {fav.drill_id for fav in DrillFavorite.query.filter_by(coach_id=coach.id)}


def get_visible_drill(coach, drill_id):
    drill = Drill.query.filter_by(id=drill_id, is_active=True).first()
    if not drill or not drill.is_visible_to(coach.id):
        raise NotFoundError("Drill not found")
    return drill


def get_own_drill(coach, drill_id):
    drill = Drill.query.filter_by(id=drill_id, coach_id=coach.id, is_active=True).first()
    if not drill:
        raise NotFoundError("Drill not found")
    return drill


def apply_drill_data(drill, data):
    data = dict(data)
    data["court_diagram"] = normalize_court_diagram(data.get("court_diagram"))
    for field, value in data.items():
        setattr(drill, field, value)


@drills_bp.route("", methods=["GET"])
@coach_required
def list_drills(coach):
    """Own drills plus everything other coaches have shared."""
    public_only = request.args.get("public_only", "false").lower() == "true"

    query = Drill.query.filter(Drill.is_active.is_(True))
    if public_only:
        query = query.filter(Drill.is_public.is_(True))
    else:
        query = query.filter(or_(Drill.coach_id == coach.id, Drill.is_public.is_(True)))
    drills = query.order_by(Drill.category, Drill.name).all()

    favorites = favorite_ids(coach)
    return jsonify({
        "success": True,
        "data": [drill.to_dict(viewer_id=coach.id, favorited=drill.id in favorites) for drill in drills],
    })


@drills_bp.route("", methods=["POST"])
@coach_required
def create_drill(coach):
    data = load_json(drill_schema)

    drill = Drill(coach_id=coach.id)
    apply_drill_data(drill, data)
    db.session.add(drill)
    db.session.commit()

    return jsonify({"success": True, "data": drill.to_dict(viewer_id=coach.id, favorited=False)}), 201


@drills_bp.route("/favorites", methods=["GET"])
@coach_required
def list_favorites(coach):
    favorites = (
        DrillFavorite.query
        .join(Drill, DrillFavorite.drill_id == Drill.id)
        .filter(DrillFavorite.coach_id == coach.id, Drill.is_active.is_(True))
        .order_by(desc(DrillFavorite.created_at), desc(DrillFavorite.id))
        .all()
    )
    drills = [fav.drill for fav in favorites if fav.drill.is_visible_to(coach.id)]
    return jsonify({
        "success": True,
        "data": [drill.to_dict(viewer_id=coach.id, favorited=True) for drill in drills],
    })


@drills_bp.route("/<int:drill_id>", methods=["GET"])
@coach_required
def get_drill(drill_id, coach):
    drill = get_visible_drill(coach, drill_id)
    favorited = DrillFavorite.query.filter_by(coach_id=coach.id, drill_id=drill.id).first() is not None
    return jsonify({"success": True, "data": drill.to_dict(viewer_id=coach.id, favorited=favorited)})


@drills_bp.route("/<int:drill_id>", methods=["PUT"])
@coach_required
def update_drill(drill_id, coach):
    data = load_json(drill_schema)
    drill = get_own_drill(coach, drill_id)
    apply_drill_data(drill, data)
    db.session.commit()

    return jsonify({"success": True, "message": "Drill updated successfully", "data": drill.to_dict(viewer_id=coach.id)})


@drills_bp.route("/<int:drill_id>", methods=["DELETE"])
@coach_required
def delete_drill(drill_id, coach):
    drill = get_own_drill(coach, drill_id)
    drill.is_active = False
    db.session.commit()

    return jsonify({"success": True, "message": "Drill deleted successfully"})


@drills_bp.route("/<int:drill_id>/favorite", methods=["POST"])
@coach_required
def add_favorite(drill_id, coach):
    drill = get_visible_drill(coach, drill_id)

    if not DrillFavorite.query.filter_by(coach_id=coach.id, drill_id=drill.id).first():
        db.session.add(DrillFavorite(coach_id=coach.id, drill_id=drill.id))
        db.session.commit()

    return jsonify({"success": True, "message": "Drill added to favorites", "isFavorited": True})


@drills_bp.route("/<int:drill_id>/favorite", methods=["DELETE"])
@coach_required
def remove_favorite(drill_id, coach):
    DrillFavorite.query.filter_by(coach_id=coach.id, drill_id=drill_id).delete()
    db.session.commit()

    return jsonify({"success": True, "message": "Drill removed from favorites", "isFavorited": False})
