from datetime import datetime
from practrac.extensions import db

DRILL_CATEGORIES = (
    "Warm-up",
    "Serving",
    "Passing",
    "Setting",
    "Attacking",
    "Blocking",
    "Defense",
    "Conditioning",
    "Cool-down",
)


class Drill(db.Model):
    __tablename__ = "drills"

    id = db.Column(db.Integer, primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coaches.id", ondelete="CASCADE"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    category = db.Column(db.String(30), nullable=False)
    duration = db.Column(db.Integer, nullable=False)  # minutes
    difficulty = db.Column(
        db.Integer,
        db.CheckConstraint("difficulty >= 1 AND difficulty <= 5"),
        nullable=False,
    )
    description = db.Column(db.Text)
    equipment = db.Column(db.JSON, default=list)
    min_players = db.Column(db.Integer, nullable=False)
    max_players = db.Column(db.Integer, nullable=False)
    focus = db.Column(db.JSON, default=list)
    is_public = db.Column(db.Boolean, default=False, nullable=False, index=True)
    court_diagram = db.Column(db.JSON, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    coach = db.relationship("Coach", back_populates="drills")
    favorites = db.relationship("DrillFavorite", back_populates="drill", lazy="dynamic", cascade="all, delete-orphan")

    def is_visible_to(self, coach_id):
        return self.is_active and (self.coach_id == coach_id or self.is_public)

    def to_dict(self, viewer_id=None, favorited=None):
        data = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "duration": self.duration,
            "difficulty": self.difficulty,
            "description": self.description,
            "equipment": self.equipment or [],
            "minPlayers": self.min_players,
            "maxPlayers": self.max_players,
            "focus": self.focus or [],
            "isPublic": bool(self.is_public),
            "courtDiagram": self.court_diagram,
            "coachName": self.coach.full_name if self.coach else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if viewer_id is not None:
            data["isOwner"] = self.coach_id == viewer_id
        if favorited is not None:
            data["isFavorited"] = bool(favorited)
        return data


class DrillFavorite(db.Model):
    __tablename__ = "drill_favorites"

    id = db.Column(db.Integer, primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coaches.id", ondelete="CASCADE"), nullable=False, index=True)
    drill_id = db.Column(db.Integer, db.ForeignKey("drills.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    coach = db.relationship("Coach", back_populates="favorites")
    drill = db.relationship("Drill", back_populates="favorites")

    __table_args__ = (
        db.UniqueConstraint("coach_id", "drill_id", name="uq_drill_favorite"),
    )
