# Overview: Session and role decorators for API routes.

from functools import wraps
from flask import jsonify, g

from .services.dashboard_service import current_dashboard


def require_auth(f):
    """
    Require a logged-in session.

    Sets g.current_user from the stored session record and g.dashboard to the
    app-wide dashboard. Returns 401 when nobody is logged in.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        dashboard = current_dashboard()
        user = dashboard.identity.current_user()
        if user is None:
            return jsonify({"error": "Authentication required"}), 401

        g.current_user = user
        g.dashboard = dashboard
        return f(*args, **kwargs)

    return decorated_function


def require_role(role: str):
    """Require the logged-in user to hold role. Must follow @require_auth."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not hasattr(g, "current_user"):
                return jsonify({"error": "Authentication required"}), 401
            if g.current_user.role != role:
                return jsonify({
                    "error": "Permission denied",
                    "required_role": role,
                }), 403
            return f(*args, **kwargs)

        return decorated_function

    return decorator
