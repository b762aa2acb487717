import os

from flask import Flask

from practrac.config import config
from practrac.extensions import db, ma, jwt, migrate, cors
from practrac.errors import error_response, register_error_handlers
from practrac.logging_config import configure_logging


def register_jwt_callbacks(app):
    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        return error_response("Access token required", 401)

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        app.logger.info("Rejected token: %s", reason)
        return error_response("Invalid or expired token", 403)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return error_response("Invalid or expired token", 403)


def create_app(config_name=None):
    config_name = config_name or os.getenv("PRACTRAC_ENV", "default")

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    configure_logging(app)

    # Extensions
    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {
        "origins": app.config["CORS_ORIGINS"],
        "allow_headers": ["Content-Type", "Authorization"],
        "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    }})

    register_jwt_callbacks(app)
    register_error_handlers(app)

    # Models must be imported before create_all / migrations see the metadata
    from practrac import models  # noqa: F401
    from practrac.routes import register_blueprints
    from practrac.commands import register_commands

    register_blueprints(app)
    register_commands(app)

    app.logger.debug("PracTrac app created with %s config", config_name)
    return app
