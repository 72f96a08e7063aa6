from __future__ import annotations

from typing import Any


class DashboardError(Exception):
    """Base for recoverable errors reported back to the user."""
    status_code = 400

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class InvalidInput(DashboardError, ValueError):
    """400-level input problem (missing field, bad quantity or price)."""
    status_code = 400


def require_text(value: Any, field: str) -> str:
    if value is None:
        raise InvalidInput(f"{field} is required", details={"field": field})
    text = str(value).strip()
    if not text:
        raise InvalidInput(f"{field} is required", details={"field": field})
    return text


def coerce_quantity(value: Any, field: str = "quantity") -> int:
    """
    Quantities are whole numbers >= 1.

    Accepts ints and plain digit strings; rejects floats, booleans,
    scientific notation and decimals.
    """
    if value is None:
        raise InvalidInput(f"{field} is required", details={"field": field})
    if isinstance(value, bool):
        raise InvalidInput(f"{field} must be an integer", details={"field": field})
    if isinstance(value, int):
        qty = value
    elif isinstance(value, str):
        stripped = value.strip()
        # Reject scientific notation (e.g., "1e3") and decimals (e.g., "2.5")
        if not stripped or 'e' in stripped.lower() or '.' in stripped:
            raise InvalidInput(f"{field} must be an integer", details={"field": field})
        try:
            qty = int(stripped)
        except ValueError:
            raise InvalidInput(f"{field} must be an integer", details={"field": field})
    elif isinstance(value, float) and value.is_integer():
        # JSON numbers like 3.0 arrive as floats
        qty = int(value)
    else:
        raise InvalidInput(f"{field} must be an integer", details={"field": field})

    if qty < 1:
        raise InvalidInput(f"{field} must be at least 1", details={"field": field})
    return qty


def coerce_price(value: Any, field: str = "price") -> float:
    """Prices are non-negative numbers."""
    if value is None:
        raise InvalidInput(f"{field} is required", details={"field": field})
    if isinstance(value, bool):
        raise InvalidInput(f"{field} must be a number", details={"field": field})
    if isinstance(value, (int, float)):
        price = float(value)
    elif isinstance(value, str):
        try:
            price = float(value.strip())
        except ValueError:
            raise InvalidInput(f"{field} must be a number", details={"field": field})
    else:
        raise InvalidInput(f"{field} must be a number", details={"field": field})

    # NaN and infinities compare badly in every aggregate
    if price != price or price in (float("inf"), float("-inf")):
        raise InvalidInput(f"{field} must be a finite number", details={"field": field})
    if price < 0:
        raise InvalidInput(f"{field} cannot be negative", details={"field": field})
    return price


def coerce_bool(value: Any, field: str, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "paid"):
            return True
        if lowered in ("false", "0", "no", "unpaid", ""):
            return False
    if isinstance(value, int):
        return bool(value)
    raise InvalidInput(f"{field} must be a boolean", details={"field": field})


def parse_sale_payload(payload: dict | None) -> dict:
    """
    Validates + normalizes an add-sale form payload.

    Returns a dict with name, item, quantity, price and is_paid. Unpaid is the
    default payment status of a new sale.
    """
    data = payload or {}
    return {
        "name": require_text(data.get("name"), "name"),
        "item": require_text(data.get("item"), "item"),
        "quantity": coerce_quantity(data.get("quantity")),
        "price": coerce_price(data.get("price")),
        "is_paid": coerce_bool(data.get("isPaid", data.get("is_paid")), "isPaid"),
    }
