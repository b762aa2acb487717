from datetime import datetime
from practrac.extensions import db

SESSION_STATUSES = ("in_progress", "paused", "completed", "cancelled")
OPEN_STATUSES = ("in_progress", "paused")
NOTE_TYPES = ("practice", "player")


class PracticeSession(db.Model):
    __tablename__ = "practice_sessions"

    id = db.Column(db.Integer, primary_key=True)
    practice_id = db.Column(db.Integer, db.ForeignKey("practices.id", ondelete="CASCADE"), nullable=False, index=True)
    started_at = db.Column(db.DateTime, default=datetime.utcnow)
    completed_at = db.Column(db.DateTime, nullable=True)
    status = db.Column(
        db.String(20),
        db.CheckConstraint("status IN ('in_progress','completed','cancelled','paused')"),
        default="in_progress",
        nullable=False,
        index=True,
    )
    actual_duration = db.Column(db.Integer)  # minutes
    notes = db.Column(db.Text)
    timer_state = db.Column(db.JSON, nullable=True)
    current_phase_id = db.Column(db.Integer, nullable=True)
    phase_elapsed_time = db.Column(db.Integer, default=0)  # seconds
    total_elapsed_time = db.Column(db.Integer, default=0)  # seconds
    last_activity = db.Column(db.DateTime, default=datetime.utcnow)

    practice = db.relationship("Practice", back_populates="sessions")
    attendance = db.relationship(
        "PracticeAttendance",
        back_populates="session",
        cascade="all, delete-orphan",
    )
    player_notes = db.relationship(
        "PlayerNote",
        back_populates="session",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )

    @property
    def is_open(self):
        return self.status in OPEN_STATUSES

    def attendance_for(self, player_id):
        for record in self.attendance:
            if record.player_id == player_id:
                return record
        return None

    def to_dict(self, include_attendance=False):
        attended = [record for record in self.attendance if record.attended]
        data = {
            "id": self.id,
            "practiceId": self.practice_id,
            "practiceName": self.practice.name if self.practice else None,
            "practiceDate": self.practice.date.isoformat() if self.practice and self.practice.date else None,
            "startedAt": self.started_at.isoformat() if self.started_at else None,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
            "status": self.status,
            "actualDuration": self.actual_duration,
            "notes": self.notes,
            "currentPhaseId": self.current_phase_id,
            "phaseElapsedTime": self.phase_elapsed_time or 0,
            "totalElapsedTime": self.total_elapsed_time or 0,
            "lastActivity": self.last_activity.isoformat() if self.last_activity else None,
            "timerState": self.timer_state,
            "totalPlayers": len(self.attendance),
            "attendedCount": len(attended),
        }
        if include_attendance:
            records = sorted(self.attendance, key=lambda r: r.player.jersey_number if r.player else 0)
            data["attendance"] = [record.to_dict() for record in records]
        return data


class PracticeAttendance(db.Model):
    __tablename__ = "practice_attendance"

    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.Integer, db.ForeignKey("practice_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    player_id = db.Column(db.Integer, db.ForeignKey("players.id", ondelete="CASCADE"), nullable=False, index=True)
    attended = db.Column(db.Boolean, default=True, nullable=False)
    late_minutes = db.Column(db.Integer, default=0)
    notes = db.Column(db.String(500))

    session = db.relationship("PracticeSession", back_populates="attendance")
    player = db.relationship("Player")

    __table_args__ = (
        db.UniqueConstraint("session_id", "player_id", name="uq_attendance_session_player"),
    )

    def to_dict(self):
        player = self.player
        return {
            "id": self.id,
            "sessionId": self.session_id,
            "playerId": self.player_id,
            "firstName": player.first_name if player else None,
            "lastName": player.last_name if player else None,
            "jerseyNumber": player.jersey_number if player else None,
            "position": player.position if player else None,
            "attended": bool(self.attended),
            "lateMinutes": self.late_minutes or 0,
            "notes": self.notes,
        }


class PlayerNote(db.Model):
    __tablename__ = "player_notes"

    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.Integer, db.ForeignKey("practice_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    player_id = db.Column(db.Integer, db.ForeignKey("players.id", ondelete="CASCADE"), nullable=False, index=True)
    notes = db.Column(db.Text, nullable=False)
    note_type = db.Column(
        db.String(20),
        db.CheckConstraint("note_type IN ('practice','player')"),
        default="practice",
        nullable=False,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    session = db.relationship("PracticeSession", back_populates="player_notes")
    player = db.relationship("Player")

    def to_dict(self):
        player = self.player
        return {
            "id": self.id,
            "sessionId": self.session_id,
            "playerId": self.player_id,
            "playerName": player.full_name if player else None,
            "jerseyNumber": player.jersey_number if player else None,
            "notes": self.notes,
            "noteType": self.note_type,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
