import logging

from flask import Blueprint, jsonify, make_response, current_app, g
from models.users import User, ROLES
from models import db
from classes.enrolment_manager import EnrolmentManager
from classes.validators import require_fields, validate_choice, validate_length, validate_string
from utils.helpers import error_response, get_json_body
from utils.tokens import get_jwt_token
from utils.utils import login_required

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth_bp', __name__)

PROFILE_FIELDS = ("first_name", "last_name", "email", "phone_number", "country", "photo_url")


def _set_auth_cookie(response, token, max_age):
    response.set_cookie(
        current_app.config["AUTH_COOKIE_NAME"], token,
        httponly=True,
        secure=current_app.config["AUTH_COOKIE_SECURE"],
        samesite=current_app.config["AUTH_COOKIE_SAMESITE"],
        path="/",
        max_age=max_age
    )


# Register
@auth_bp.route('/register', methods=['POST'])
def register():
    data = get_json_body()

    require_fields(data, "username", "email", "password", "first_name", "last_name")
    role = data.get("role") or "student"
    validate_choice("role", role, ROLES)
    validate_length("username", data["username"], 50)
    validate_length("email", data["email"], 100)
    validate_string("password", data["password"])
    validate_length("first_name", data["first_name"], 50)
    validate_length("last_name", data["last_name"], 50)
    validate_length("phone_number", data.get("phone_number"), 20)
    validate_length("country", data.get("country"), 60)

    existing_user = User.query.filter(
        (User.username == data["username"]) | (User.email == data["email"])
    ).first()

    if existing_user:
        field = "email" if existing_user.email == data["email"] else "username"
        return error_response(f"User already exists with this {field}", 409)

    new_user = User(
        username=data["username"],
        email=data["email"],
        first_name=data["first_name"],
        last_name=data["last_name"],
        role=role,
        phone_number=data.get("phone_number"),
        country=data.get("country"),
    )
    new_user.set_password(data["password"])

    db.session.add(new_user)
    db.session.commit()
    logger.info("Registered user %s (%s)", new_user.id, role)

    return jsonify({"success": True, "message": "Account created successfully."}), 201

# Login
@auth_bp.route('/login', methods=['POST'])
def login():
    data = get_json_body()
    username = data.get("username_or_email") or data.get("username")
    password = data.get("password")

    if not username or not password:
        return error_response("All fields are required.", 400)
    validate_string("username", username)
    validate_string("password", password)

    user = User.query.filter(
        (User.username == username) | (User.email == username)
    ).first()

    if not user or not user.check_password(password):
        logger.info("Failed login for %s", username)
        return error_response("Incorrect username or password", 400)

    token = get_jwt_token({
        "user_id": user.id,
        "username": user.username,
        "role": user.role,
    })

    response = make_response(jsonify({
        "success": True,
        "message": f"Welcome back {user.first_name}",
        "user": user.to_dict(),
        "token": token
    }))
    _set_auth_cookie(response, token, current_app.config["JWT_EXPIRATION_HOURS"] * 3600)

    return response

# Logout
@auth_bp.route('/logout', methods=['POST', 'GET'])
def logout():
    response = make_response(jsonify({"success": True, "message": "Logged out successfully."}))
    _set_auth_cookie(response, "", 0)
    return response

# Auth Check
@auth_bp.route('/check-auth', methods=['GET'])
@login_required
def check_auth():
    return jsonify({
        "success": True,
        "message": "Authenticated",
        "user": {
            "id": g.user.get("user_id"),
            "role": g.user.get("role"),
            "username": g.user.get("username"),
        }
    }), 200

# Profile
@auth_bp.route('/profile', methods=['GET'])
@login_required
def get_profile():
    user = db.session.get(User, g.user.get("user_id"))
    if not user:
        return error_response("Profile not found", 404)

    return jsonify({
        "success": True,
        "user": {
            **user.to_dict(),
            "enrolled_courses": [course.to_dict() for course in EnrolmentManager.enrolled_courses(user.id)],
        }
    }), 200

@auth_bp.route('/profile/update', methods=['PUT'])
@login_required
def update_profile():
    user = db.session.get(User, g.user.get("user_id"))
    if not user:
        return error_response("User not found", 404)

    data = get_json_body()
    for field in PROFILE_FIELDS:
        validate_string(field, data.get(field))

    new_email = data.get("email")
    if new_email and new_email != user.email:
        validate_length("email", new_email, 100)
        if User.query.filter(User.email == new_email, User.id != user.id).first():
            return error_response("User already exists with this email", 409)

    for field in PROFILE_FIELDS:
        if data.get(field):
            setattr(user, field, data[field])

    db.session.commit()

    return jsonify({"success": True, "message": "Profile updated successfully.", "user": user.to_dict()}), 200
