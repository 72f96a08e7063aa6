# Overview: Flask API routes for login, registration and the session record.

# backend/salesdash/routes/auth.py
"""
Authentication API routes

Credentials are compared exactly as typed (case-sensitive, plaintext).
Registration logs the new account in immediately.
"""

from flask import Blueprint, request, jsonify, current_app

from ..models import ROLE_USER
from ..services.dashboard_service import current_dashboard
from ..services.identity_service import InvalidCredentials, DuplicateUsername, require_credentials
from ..validation import InvalidInput


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/login")
def login_route():
    """
    Authenticate user and write the session record.

    Returns the user (without password) on success, 401 otherwise.
    """
    try:
        data = request.get_json(silent=True) or {}
        username, password = require_credentials(data.get("username"), data.get("password"))

        user = current_dashboard().identity.authenticate(username, password)
        if not user:
            raise InvalidCredentials("Invalid username or password")

        current_app.logger.info("Login succeeded for %r", username)
        return jsonify({
            "user": user.to_public_dict(),
            "message": "Logged in successfully!",
        }), 200

    except (InvalidInput, InvalidCredentials) as e:
        return jsonify({"error": str(e)}), e.status_code
    except Exception:
        current_app.logger.exception("Failed to login user")
        return jsonify({"error": "Internal server error"}), 500


@auth_bp.post("/register")
def register_route():
    """
    Create an account and log it in.

    Role defaults to "user". Returns 409 when the username is taken.
    """
    try:
        data = request.get_json(silent=True) or {}
        username, password = require_credentials(data.get("username"), data.get("password"))
        role = data.get("role") or ROLE_USER

        user = current_dashboard().identity.register(username, password, role)

        current_app.logger.info("Registered %r as %s", username, role)
        return jsonify({
            "user": user.to_public_dict(),
            "message": "Account created successfully!",
        }), 201

    except (InvalidInput, DuplicateUsername) as e:
        return jsonify({"error": str(e)}), e.status_code
    except Exception:
        current_app.logger.exception("Failed to register user")
        return jsonify({"error": "Internal server error"}), 500


@auth_bp.post("/logout")
def logout_route():
    """Clear the session record. Safe to call when already logged out."""
    try:
        current_dashboard().identity.end_session()
        return jsonify({"message": "Logged out successfully!"}), 200
    except Exception:
        current_app.logger.exception("Failed to logout user")
        return jsonify({"error": "Internal server error"}), 500


@auth_bp.get("/session")
def session_route():
    """Which view to show on load: the logged-in user, if any."""
    user = current_dashboard().identity.current_user()
    return jsonify({
        "isAuthenticated": user is not None,
        "user": user.to_public_dict() if user else None,
    }), 200
