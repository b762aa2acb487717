from flask import Blueprint, jsonify

from practrac.errors import NotFoundError
from practrac.extensions import db
from practrac.models import Video
from practrac.schemas import VideoSchema
from practrac.utils import load_json
from practrac.utils.decorators import coach_required

videos_bp = Blueprint("videos", __name__)
video_schema = VideoSchema()


def get_own_video(coach, video_id):
    video = Video.query.filter_by(id=video_id, coach_id=coach.id, is_active=True).first()
    if not video:
        raise NotFoundError("Video not found")
    return video


@videos_bp.route("", methods=["GET"])
@coach_required
def list_videos(coach):
    videos = (
        Video.query.filter_by(coach_id=coach.id, is_active=True)
        .order_by(Video.category, Video.title)
        .all()
    )
    return jsonify({"success": True, "data": [video.to_dict() for video in videos]})


@videos_bp.route("", methods=["POST"])
@coach_required
def create_video(coach):
    data = load_json(video_schema)

    video = Video(coach_id=coach.id, **data)
    db.session.add(video)
    db.session.commit()

    return jsonify({"success": True, "data": video.to_dict()}), 201


@videos_bp.route("/<int:video_id>", methods=["PUT"])
@coach_required
def update_video(video_id, coach):
    data = load_json(video_schema)
    video = get_own_video(coach, video_id)

    for field, value in data.items():
        setattr(video, field, value)
    db.session.commit()

    return jsonify({"success": True, "message": "Video updated successfully", "data": video.to_dict()})


@videos_bp.route("/<int:video_id>", methods=["DELETE"])
@coach_required
def delete_video(video_id, coach):
    video = get_own_video(coach, video_id)
    video.is_active = False
    db.session.commit()

    return jsonify({"success": True, "message": "Video deleted successfully"})
