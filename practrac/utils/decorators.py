# practrac/utils/decorators.py
from functools import wraps
from flask_jwt_extended import get_jwt_identity, jwt_required

from practrac.errors import BadRequestError, NotFoundError
from practrac.extensions import db
from practrac.models.coach import Coach

NO_ACTIVE_TEAM_MSG = "No active team selected. Please select a team first."


def current_coach():
    """Load the coach named by the request's JWT, or raise 404."""
    try:
        coach_id = int(get_jwt_identity())
    except (TypeError, ValueError):
        raise NotFoundError("Coach not found")
    coach = db.session.get(Coach, coach_id)
    if not coach or not coach.is_active:
        raise NotFoundError("Coach not found")
    return coach


def coach_required(view_func):
    """
    Require a valid JWT and pass the authenticated coach to the view
    as the ``coach`` keyword argument.
    """
    @wraps(view_func)
    @jwt_required()
    def wrapper(*args, **kwargs):
        kwargs["coach"] = current_coach()
        return view_func(*args, **kwargs)
    return wrapper


def active_team_required(view_func):
    """
    Like ``coach_required``, and also pass the coach's selected team as
    ``team``. Roster, practice and session views all work against it.
    """
    @wraps(view_func)
    @jwt_required()
    def wrapper(*args, **kwargs):
        coach = current_coach()
        team = coach.active_team
        if team is None:
            raise BadRequestError(NO_ACTIVE_TEAM_MSG)
        kwargs["coach"] = coach
        kwargs["team"] = team
        return view_func(*args, **kwargs)
    return wrapper
