from flask import current_app, jsonify, request
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy.exc import SQLAlchemyError

from quizhub import db
from quizhub.config import config
from quizhub.auth import auth_bp
from quizhub.auth.models import User
from quizhub.auth.utils import hash_password, is_valid_email, validate_password, verify_password
from quizhub.common.audit_logger import AuditLogger


def _request_data() -> dict:
    """Accept both JSON bodies and form posts."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return dict(request.form)


def _text(data: dict, key: str) -> str:
    """String field with surrounding whitespace removed; anything else reads as empty."""
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


@auth_bp.route("/", methods=["GET"])
def auth_root():
    """Simple health/info endpoint for auth API."""
    base_path = config.AUTH_URL_PREFIX
    return jsonify(
        {
            "status": "ok",
            "message": "Auth API is running",
            "endpoints": [
                f"{base_path}/register",
                f"{base_path}/login",
                f"{base_path}/logout",
                f"{base_path}/me",
            ],
        }
    ), 200


@auth_bp.route("/register", methods=["POST"])
def register():
    data = _request_data()

    name = _text(data, "name")
    email = _text(data, "email").lower()
    password = data.get("password") if isinstance(data.get("password"), str) else ""
    raw_role = data.get("role") or config.DEFAULT_ROLE
    role = raw_role.strip().lower() if isinstance(raw_role, str) else None

    if not name or not email or not password:
        return jsonify({"success": False, "error": "Name, email and password are required"}), 400

    if not is_valid_email(email):
        return jsonify({"success": False, "error": "Please provide a valid email address"}), 400

    if role not in config.VALID_ROLES:
        return jsonify({
            "success": False,
            "error": f"Invalid role. Must be one of: {', '.join(config.VALID_ROLES)}"
        }), 400

    ok, error = validate_password(password)
    if not ok:
        return jsonify({"success": False, "error": error}), 400

    if User.query.filter_by(email=email).first():
        return jsonify({"success": False, "error": "This email is already registered"}), 409

    try:
        user = User(name=name, email=email, password_hash=hash_password(password), role=role)
        db.session.add(user)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception(f"Registration failed for {email}: {e}")
        return jsonify({"success": False, "error": "Registration failed"}), 500

    current_app.logger.info(f"Registered {role} account {user.id} ({email})")
    return jsonify({"success": True, "user": user.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = _request_data()
    email = _text(data, "email").lower()
    password = data.get("password") if isinstance(data.get("password"), str) else ""

    if not email or not password:
        return jsonify({"success": False, "error": "Email and password are required"}), 400

    user = User.query.filter_by(email=email).first()
    if not user or not verify_password(password, user.password_hash):
        AuditLogger.log_failed_login(email)
        return jsonify({"success": False, "error": "Invalid email or password"}), 401

    login_user(user)
    AuditLogger.log_successful_login(user.id, user.email)
    return jsonify({"success": True, "user": user.to_dict()}), 200


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return jsonify({"success": True, "message": "Logged out"}), 200


@auth_bp.route("/me", methods=["GET"])
@login_required
def me():
    return jsonify({"success": True, "user": current_user.to_dict()}), 200
