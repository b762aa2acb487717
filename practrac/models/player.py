from datetime import datetime
from practrac.extensions import db

POSITIONS = (
    "Setter",
    "Outside Hitter",
    "Middle Blocker",
    "Opposite",
    "Libero",
    "Defensive Specialist",
)

STAT_FIELDS = ("kills", "blocks", "aces", "digs", "assists")


class Player(db.Model):
    __tablename__ = "players"

    id = db.Column(db.Integer, primary_key=True)
    team_id = db.Column(db.Integer, db.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    jersey_number = db.Column(db.Integer, nullable=False)
    position = db.Column(db.String(30), nullable=False)
    skill_level = db.Column(
        db.Integer,
        db.CheckConstraint("skill_level >= 1 AND skill_level <= 5"),
        nullable=False,
    )
    height = db.Column(db.String(10))
    year = db.Column(db.String(20))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    team = db.relationship("Team", back_populates="players")
    stats = db.relationship("PlayerStats", back_populates="player", lazy="dynamic", cascade="all, delete-orphan")

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def stats_for(self, season):
        return self.stats.filter_by(season=season).first()

    def to_dict(self):
        season = self.team.season if self.team else None
        row = self.stats_for(season) if season else None
        stats = {field: (getattr(row, field) or 0) if row else 0 for field in STAT_FIELDS}
        stats["season"] = row.season if row else None
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "jerseyNumber": self.jersey_number,
            "position": self.position,
            "skillLevel": self.skill_level,
            "height": self.height,
            "year": self.year,
            "stats": stats,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class PlayerStats(db.Model):
    __tablename__ = "player_stats"

    id = db.Column(db.Integer, primary_key=True)
    player_id = db.Column(db.Integer, db.ForeignKey("players.id", ondelete="CASCADE"), nullable=False, index=True)
    season = db.Column(db.String(50), nullable=False)
    kills = db.Column(db.Integer, default=0)
    blocks = db.Column(db.Integer, default=0)
    aces = db.Column(db.Integer, default=0)
    digs = db.Column(db.Integer, default=0)
    assists = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    player = db.relationship("Player", back_populates="stats")

    __table_args__ = (
        db.UniqueConstraint("player_id", "season", name="uq_player_stats_season"),
    )
