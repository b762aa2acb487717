from .auth import auth_bp
from .teams import teams_bp
from .players import players_bp
from .drills import drills_bp
from .practices import practices_bp
from .practice_sessions import sessions_bp
from .videos import videos_bp
from .stats import stats_bp
from .health import health_bp


def register_blueprints(app):
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(teams_bp, url_prefix="/api/teams")
    app.register_blueprint(players_bp, url_prefix="/api/players")
    app.register_blueprint(drills_bp, url_prefix="/api/drills")
    app.register_blueprint(practices_bp, url_prefix="/api/practices")
    app.register_blueprint(sessions_bp, url_prefix="/api/practice-sessions")
    app.register_blueprint(videos_bp, url_prefix="/api/videos")
    app.register_blueprint(stats_bp, url_prefix="/api/team")
    app.register_blueprint(health_bp, url_prefix="/api")
