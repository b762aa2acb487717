from datetime import datetime
from practrac.extensions import db

PHASE_TYPES = (
    "warm-up",
    "skill-development",
    "drills",
    "scrimmage",
    "conditioning",
    "cool-down",
)


class Practice(db.Model):
    __tablename__ = "practices"

    id = db.Column(db.Integer, primary_key=True)
    team_id = db.Column(db.Integer, db.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    date = db.Column(db.Date, nullable=False)
    duration = db.Column(db.Integer, nullable=False)  # minutes
    objective = db.Column(db.String(500))
    estimated_duration = db.Column(db.Integer)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    team = db.relationship("Team", back_populates="practices")
    phases = db.relationship(
        "PracticePhase",
        back_populates="practice",
        order_by="PracticePhase.phase_order",
        cascade="all, delete-orphan",
    )
    sessions = db.relationship(
        "PracticeSession",
        back_populates="practice",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )

    def latest_session(self):
        from practrac.models.practice_session import PracticeSession

        return self.sessions.order_by(PracticeSession.started_at.desc(), PracticeSession.id.desc()).first()

    def to_dict(self, include_drills=False):
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date.isoformat() if self.date else None,
            "duration": self.duration,
            "objective": self.objective,
            "estimatedDuration": self.estimated_duration,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "phases": [phase.to_dict(include_drills=include_drills) for phase in self.phases],
        }


class PracticePhase(db.Model):
    __tablename__ = "practice_phases"

    id = db.Column(db.Integer, primary_key=True)
    practice_id = db.Column(db.Integer, db.ForeignKey("practices.id", ondelete="CASCADE"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    duration = db.Column(db.Integer, nullable=False)  # minutes
    type = db.Column(db.String(30), nullable=False)
    phase_order = db.Column(db.Integer, nullable=False)
    objective = db.Column(db.String(500))

    practice = db.relationship("Practice", back_populates="phases")
    drill_links = db.relationship(
        "PracticePhaseDrill",
        back_populates="phase",
        order_by="PracticePhaseDrill.id",
        cascade="all, delete-orphan",
    )

    @classmethod
    def build_list(cls, phases):
        """Phase rows numbered from 1, each with its drill links, from validated phase dicts."""
        built = []
        for index, phase in enumerate(phases, start=1):
            row = cls(
                name=phase["name"],
                duration=phase["duration"],
                type=phase["type"],
                objective=phase.get("objective"),
                phase_order=index,
            )
            row.drill_links = [PracticePhaseDrill(drill_id=drill_id) for drill_id in phase.get("drills", [])]
            built.append(row)
        return built

    @property
    def drill_ids(self):
        return [link.drill_id for link in self.drill_links]

    def to_dict(self, include_drills=False):
        data = {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "type": self.type,
            "objective": self.objective,
            "phaseOrder": self.phase_order,
            "drills": self.drill_ids,
        }
        if include_drills:
            data["drillDetails"] = [link.drill.to_dict() for link in self.drill_links if link.drill]
        return data


class PracticePhaseDrill(db.Model):
    __tablename__ = "practice_phase_drills"

    id = db.Column(db.Integer, primary_key=True)
    phase_id = db.Column(db.Integer, db.ForeignKey("practice_phases.id", ondelete="CASCADE"), nullable=False, index=True)
    drill_id = db.Column(db.Integer, db.ForeignKey("drills.id", ondelete="CASCADE"), nullable=False)

    phase = db.relationship("PracticePhase", back_populates="drill_links")
    drill = db.relationship("Drill")
