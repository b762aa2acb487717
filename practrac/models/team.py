from datetime import datetime
from practrac.extensions import db


class Team(db.Model):
    __tablename__ = "teams"

    id = db.Column(db.Integer, primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coaches.id", ondelete="CASCADE"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    season = db.Column(db.String(50), nullable=False)
    division = db.Column(db.String(50))
    description = db.Column(db.String(500))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    coach = db.relationship("Coach", back_populates="teams")
    players = db.relationship("Player", back_populates="team", lazy="dynamic", cascade="all, delete-orphan")
    practices = db.relationship("Practice", back_populates="team", lazy="dynamic", cascade="all, delete-orphan")

    __table_args__ = (
        db.UniqueConstraint("coach_id", "name", "season", name="uq_team_coach_name_season"),
    )

    def active_players(self):
        from practrac.models.player import Player

        return self.players.filter_by(is_active=True).order_by(Player.jersey_number)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "season": self.season,
            "division": self.division,
            "description": self.description,
            "isActive": bool(self.is_active),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class CoachActiveTeam(db.Model):
    """The team a coach is currently working with; one row per coach."""

    __tablename__ = "coach_active_teams"

    coach_id = db.Column(db.Integer, db.ForeignKey("coaches.id", ondelete="CASCADE"), primary_key=True)
    team_id = db.Column(db.Integer, db.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)
    selected_at = db.Column(db.DateTime, default=datetime.utcnow)

    coach = db.relationship("Coach", back_populates="active_team_link")
    team = db.relationship("Team")
