from datetime import datetime
from practrac.extensions import db

VIDEO_CATEGORIES = (
    "Serving",
    "Passing",
    "Setting",
    "Attacking",
    "Blocking",
    "Defense",
    "Strategy",
    "Conditioning",
    "Technique",
)


class Video(db.Model):
    __tablename__ = "videos"

    id = db.Column(db.Integer, primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coaches.id", ondelete="CASCADE"), nullable=False, index=True)
    title = db.Column(db.String(100), nullable=False)
    category = db.Column(db.String(30), nullable=False)
    duration = db.Column(db.String(20), nullable=False)  # display text, e.g. "4:32"
    thumbnail = db.Column(db.String(500))
    description = db.Column(db.Text)
    video_url = db.Column(db.String(500))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    coach = db.relationship("Coach", back_populates="videos")

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "duration": self.duration,
            "description": self.description,
            "thumbnail": self.thumbnail,
            "videoUrl": self.video_url,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
