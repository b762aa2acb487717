from datetime import datetime

from flask import Blueprint, jsonify, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from practrac.extensions import db

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health():
    timestamp = datetime.utcnow().isoformat()
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Database health check failed")
        return jsonify({
            "success": False,
            "error": "Database unavailable",
            "data": {"status": "unhealthy", "database": "disconnected", "timestamp": timestamp},
        }), 503

    return jsonify({
        "success": True,
        "data": {"status": "healthy", "database": "connected", "timestamp": timestamp},
    })
