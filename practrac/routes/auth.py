from datetime import datetime

from flask import Blueprint, jsonify, current_app
from flask_jwt_extended import create_access_token, unset_jwt_cookies

from practrac.errors import APIError, BadRequestError, ConflictError
from practrac.extensions import db
from practrac.models.coach import Coach
from practrac.schemas import RegisterSchema, LoginSchema, ProfileSchema, ChangePasswordSchema
from practrac.utils import load_json
from practrac.utils.decorators import coach_required

auth_bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
profile_schema = ProfileSchema()
change_password_schema = ChangePasswordSchema()


def issue_token(coach):
    return create_access_token(identity=str(coach.id))


@auth_bp.route("/register", methods=["POST"])
def register():
    data = load_json(register_schema)
    email = data["email"].strip().lower()

    if Coach.query.filter_by(email=email).first():
        raise ConflictError("Email already registered")

    coach = Coach(
        first_name=data["first_name"].strip(),
        last_name=data["last_name"].strip(),
        email=email,
    )
    coach.set_password(data["password"])
    db.session.add(coach)
    db.session.commit()
    current_app.logger.info("Registered coach %s", coach.id)

    return jsonify({
        "success": True,
        "data": {"coach": coach.to_dict(), "token": issue_token(coach)},
    }), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = load_json(login_schema)
    email = data["email"].strip().lower()

    coach = Coach.query.filter_by(email=email, is_active=True).first()
    if not coach or not coach.check_password(data["password"]):
        current_app.logger.info("Failed login for %s", email)
        raise APIError("Invalid email or password", 401)

    coach.last_login = datetime.utcnow()
    db.session.commit()

    return jsonify({
        "success": True,
        "data": {"coach": coach.to_dict(), "token": issue_token(coach)},
    })


@auth_bp.route("/me", methods=["GET"])
@coach_required
def me(coach):
    return jsonify({"success": True, "data": coach.to_dict()})


@auth_bp.route("/profile", methods=["PUT"])
@coach_required
def update_profile(coach):
    data = load_json(profile_schema)
    email = data["email"].strip().lower()
    username = (data.get("username") or "").strip() or None

    taken = Coach.query.filter(Coach.email == email, Coach.id != coach.id).first()
    if taken:
        raise ConflictError("Email is already in use")

    if username:
        taken = Coach.query.filter(Coach.username == username, Coach.id != coach.id).first()
        if taken:
            raise ConflictError("Username is already taken")

    coach.first_name = data["first_name"].strip()
    coach.last_name = data["last_name"].strip()
    coach.email = email
    coach.username = username
    db.session.commit()

    return jsonify({
        "success": True,
        "message": "Profile updated successfully",
        "data": coach.to_dict(),
    })


@auth_bp.route("/change-password", methods=["POST"])
@coach_required
def change_password(coach):
    data = load_json(change_password_schema)

    if not coach.check_password(data["current_password"]):
        raise BadRequestError("Current password is incorrect")

    coach.set_password(data["new_password"])
    db.session.commit()

    return jsonify({"success": True, "message": "Password changed successfully"})


@auth_bp.route("/logout", methods=["POST"])
@coach_required
def logout(coach):
    response = jsonify({"success": True, "message": "Logout successful"})
    unset_jwt_cookies(response)
    return response
