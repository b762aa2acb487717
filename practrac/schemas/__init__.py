from .auth import RegisterSchema, LoginSchema, ProfileSchema, ChangePasswordSchema
from .team import TeamSchema
from .player import PlayerSchema, PlayerStatsSchema
from .drill import DrillSchema, normalize_court_diagram
from .practice import PracticeSchema, PhaseSchema
from .practice_session import (
    AttendanceSchema,
    StartSessionSchema,
    AttendanceUpdateSchema,
    UpdateSessionSchema,
    CompleteSessionSchema,
    NoteSchema,
    TimerActionSchema,
)
from .video import VideoSchema
