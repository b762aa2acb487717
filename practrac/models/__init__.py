from .coach import Coach
from .team import Team, CoachActiveTeam
from .player import Player, PlayerStats
from .drill import Drill, DrillFavorite
from .practice import Practice, PracticePhase, PracticePhaseDrill
from .practice_session import PracticeSession, PracticeAttendance, PlayerNote
from .video import Video

__all__ = [
    "Coach",
    "Team", "CoachActiveTeam",
    "Player", "PlayerStats",
    "Drill", "DrillFavorite",
    "Practice", "PracticePhase", "PracticePhaseDrill",
    "PracticeSession", "PracticeAttendance", "PlayerNote",
    "Video",
]
