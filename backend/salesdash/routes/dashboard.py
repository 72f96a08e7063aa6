# Overview: Role-gated dashboard payload for the logged-in user.

from flask import Blueprint, jsonify, g

from ..decorators import require_auth


dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.get("/")
@require_auth
def dashboard_route():
    """Admins get the aggregate view; everyone else gets their own."""
    return jsonify(g.dashboard.dashboard_for(g.current_user)), 200
