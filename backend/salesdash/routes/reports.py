# Overview: Flask API routes for chart data and per-user drill-down.

from flask import Blueprint, jsonify, request, g

from ..decorators import require_auth, require_role
from ..models import ROLE_ADMIN
from ..services import reporting_service


reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.get("/payments")
@require_auth
@require_role(ROLE_ADMIN)
def payments_report():
    sales = g.dashboard.ledger.all_sales()
    rows = reporting_service.payment_distribution(sales, g.dashboard.identity.users())
    return jsonify({"rows": [row.to_dict() for row in rows]}), 200


@reports_bp.get("/debts")
@require_auth
@require_role(ROLE_ADMIN)
def debts_report():
    sales = g.dashboard.ledger.all_sales()
    rows = reporting_service.debt_breakdown(sales, g.dashboard.identity.users())
    return jsonify({"rows": [row.to_dict() for row in rows]}), 200


@reports_bp.get("/items")
@require_auth
@require_role(ROLE_ADMIN)
def items_report():
    raw_limit = request.args.get("limit")
    if raw_limit is None:
        limit = g.dashboard.top_items_limit
    else:
        try:
            limit = int(raw_limit)
        except ValueError:
            return jsonify({"error": "limit must be a non-negative integer"}), 400
    if limit < 0:
        return jsonify({"error": "limit must be a non-negative integer"}), 400

    rows = reporting_service.top_items(g.dashboard.ledger.all_sales(), limit)
    return jsonify({"rows": [row.to_dict() for row in rows]}), 200


@reports_bp.get("/daily")
@require_auth
def daily_report():
    """
    Paid/unpaid amounts per calendar day.

    Users get their own series. Admins may pass user_id to see someone
    else's; without it they get the series over all sales.
    """
    user = g.current_user
    user_id = request.args.get("user_id")

    if user_id and user.role != ROLE_ADMIN and user_id != user.id:
        return jsonify({"error": "Permission denied"}), 403

    if user_id:
        sales = g.dashboard.ledger.sales_for_owner(user_id)
    elif user.role == ROLE_ADMIN:
        sales = g.dashboard.ledger.all_sales()
    else:
        sales = g.dashboard.ledger.sales_for_owner(user.id)

    series = reporting_service.daily_series(sales, g.dashboard.timezone)
    series["timezone"] = g.dashboard.timezone
    return jsonify(series), 200


@reports_bp.get("/<kind>/<user_id>")
@require_auth
@require_role(ROLE_ADMIN)
def drilldown_report(kind: str, user_id: str):
    """Sales behind one bar/slice of the payments or debts chart."""
    if kind not in ("payments", "debts"):
        return jsonify({"error": "Unknown report"}), 404

    details = g.dashboard.drilldown(kind, user_id)
    if details is None:
        return jsonify({"error": "No entry for this user"}), 404
    return jsonify(details), 200
