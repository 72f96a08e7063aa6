# Overview: Flask API routes for sales; parses input and returns JSON responses.

# backend/salesdash/routes/sales.py
"""Sales API routes. Users see their own sales, admins see all of them."""

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_auth
from ..services.sales_service import SaleNotFound
from ..validation import InvalidInput, coerce_bool


sales_bp = Blueprint("sales", __name__, url_prefix="/api/sales")


@sales_bp.get("/")
@require_auth
def list_sales_route():
    """Visible sales, newest first."""
    sales = g.dashboard.visible_sales(g.current_user)
    return jsonify({"sales": [sale.to_dict() for sale in sales]}), 200


@sales_bp.post("/")
@require_auth
def create_sale_route():
    """
    Record a sale owned by the logged-in user.

    Body: name, item, quantity (>= 1), price (>= 0), isPaid (default false).
    """
    try:
        data = request.get_json(silent=True) or {}
        sale = g.dashboard.add_sale(g.current_user, data)
        return jsonify({"sale": sale.to_dict(), "message": "Item added successfully!"}), 201

    except InvalidInput as e:
        return jsonify({"error": str(e), "details": e.details}), 400
    except Exception:
        current_app.logger.exception("Failed to create sale")
        return jsonify({"error": "Internal server error"}), 500


@sales_bp.patch("/<sale_id>/payment")
@require_auth
def update_payment_route(sale_id: str):
    """Set the paid/unpaid flag of a sale."""
    try:
        data = request.get_json(silent=True) or {}
        if "isPaid" not in data:
            raise InvalidInput("isPaid required")
        is_paid = coerce_bool(data.get("isPaid"), "isPaid")

        sale = g.dashboard.toggle_payment(g.current_user, sale_id, is_paid)
        status = "paid" if is_paid else "unpaid"
        return jsonify({
            "sale": sale.to_dict(),
            "message": f"Payment status updated to {status}",
        }), 200

    except (InvalidInput, SaleNotFound) as e:
        return jsonify({"error": str(e), "details": e.details}), e.status_code
    except Exception:
        current_app.logger.exception("Failed to update payment status")
        return jsonify({"error": "Internal server error"}), 500
