from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from practrac.extensions import db

COACHES_TABLE = "coaches"


class Coach(db.Model):
    __tablename__ = COACHES_TABLE

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    username = db.Column(db.String(30), unique=True, nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login = db.Column(db.DateTime, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    teams = db.relationship("Team", back_populates="coach", lazy="dynamic", cascade="all, delete-orphan")
    drills = db.relationship("Drill", back_populates="coach", lazy="dynamic", cascade="all, delete-orphan")
    videos = db.relationship("Video", back_populates="coach", lazy="dynamic", cascade="all, delete-orphan")
    favorites = db.relationship("DrillFavorite", back_populates="coach", lazy="dynamic", cascade="all, delete-orphan")
    active_team_link = db.relationship(
        "CoachActiveTeam", uselist=False, back_populates="coach", cascade="all, delete-orphan"
    )

    # Helpers
    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def active_team(self):
        link = self.active_team_link
        if link and link.team and link.team.is_active:
            return link.team
        return None

    def to_dict(self):
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "username": self.username,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
