from flask import current_app, jsonify
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from practrac.extensions import db


class APIError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(APIError):
    status_code = 400


class NotFoundError(APIError):
    status_code = 404


class ConflictError(APIError):
    status_code = 409


def error_response(message, status_code):
    return jsonify({"success": False, "error": message}), status_code


def first_validation_message(messages, prefix=""):
    """Flatten marshmallow's nested error dict down to its first message."""
    if isinstance(messages, dict):
        for key, value in messages.items():
            label = prefix if key == "_schema" else (f"{prefix}.{key}" if prefix else str(key))
            return first_validation_message(value, label)
    if isinstance(messages, (list, tuple)) and messages:
        return first_validation_message(messages[0], prefix)
    return f"{prefix}: {messages}" if prefix else str(messages)


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(error):
        return error_response(error.message, error.status_code)

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return error_response(first_validation_message(error.messages), 400)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        db.session.rollback()
        current_app.logger.warning("Integrity error: %s", error.orig)
        return error_response("Conflicting record already exists", 409)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return error_response(error.description or error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        current_app.logger.exception("Unhandled error: %s", error)
        return error_response("Internal server error", 500)
