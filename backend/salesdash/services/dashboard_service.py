# Overview: Application state; owns the identity store and sales ledger and builds role-gated views.

"""
Sales Dashboard application state

WHY: The identity store and ledger keep in-memory copies of their
collections for the whole app lifetime. One explicit SalesDashboard object
owns both over a single injected KeyValueStore, instead of module globals.

Views are plain dicts ready for JSON: the user view shows only the caller's
own sales, the admin view shows everything plus per-user breakdowns.
"""

from __future__ import annotations

from typing import Mapping

from flask import current_app

from ..models import Sale, User
from ..validation import parse_sale_payload
from . import reporting_service
from .identity_service import IdentityStore
from .sales_service import SalesLedger, SaleNotFound
from .storage_service import KeyValueStore


DRILLDOWN_KINDS = ("payments", "debts")


class SalesDashboard:
    def __init__(self, store: KeyValueStore, config: Mapping | None = None):
        config = config or {}
        self.store = store
        self.timezone = config.get("DASHBOARD_TIMEZONE", "UTC")
        self.top_items_limit = int(config.get("TOP_ITEMS_LIMIT", 10))
        self.identity = IdentityStore(
            store,
            users_key=config.get("USERS_KEY", "dashboard_users"),
            session_key=config.get("SESSION_KEY", "dashboard_auth"),
            default_admin=(
                config.get("DEFAULT_ADMIN_USERNAME", "admin"),
                config.get("DEFAULT_ADMIN_PASSWORD", "admin123"),
            ),
            default_user=(
                config.get("DEFAULT_USER_USERNAME", "user"),
                config.get("DEFAULT_USER_PASSWORD", "user123"),
            ),
        )
        self.ledger = SalesLedger(store, sales_key=config.get("SALES_KEY", "dashboard_sales"))
        self._loaded = False

    def load(self) -> "SalesDashboard":
        """Load (or seed) both collections. Only the first call reads the store."""
        if not self._loaded:
            self.identity.initialize()
            self.ledger.load()
            self._loaded = True
        return self

    def reload(self) -> "SalesDashboard":
        self._loaded = False
        return self.load()

    # Mutations

    def add_sale(self, user: User, payload: dict | None) -> Sale:
        """Validate an add-sale form and record it on behalf of user."""
        fields = parse_sale_payload(payload)
        return self.ledger.record_sale(
            fields["name"],
            fields["item"],
            fields["quantity"],
            fields["price"],
            fields["is_paid"],
            user.id,
            user.username,
        )

    def toggle_payment(self, user: User, sale_id: str, is_paid: bool) -> Sale:
        """
        Set the paid flag on a sale the user may see.

        Admins can change any sale; other users only their own. A sale the
        user cannot see is reported as not found and left unchanged.
        """
        sale = self.ledger.find_sale(sale_id)
        if sale is None or not (user.is_admin or sale.user_id == user.id):
            raise SaleNotFound("Sale not found", details={"sale_id": sale_id})
        if not self.ledger.set_payment_status(sale_id, is_paid):
            raise SaleNotFound("Sale not found", details={"sale_id": sale_id})
        return self.ledger.find_sale(sale_id)

    # Views

    def visible_sales(self, user: User) -> list[Sale]:
        sales = self.ledger.all_sales() if user.is_admin else self.ledger.sales_for_owner(user.id)
        return reporting_service.sales_newest_first(sales)

    def user_dashboard(self, user: User) -> dict:
        sales = self.ledger.sales_for_owner(user.id)
        return {
            "view": "user",
            "user": user.to_public_dict(),
            "stats": reporting_service.payment_stats(sales).to_dict(),
            "sales": [sale.to_dict() for sale in reporting_service.sales_newest_first(sales)],
            "daily": reporting_service.daily_series(sales, self.timezone),
        }

    def admin_dashboard(self) -> dict:
        sales = self.ledger.all_sales()
        users = self.identity.users()
        return {
            "view": "admin",
            "stats": reporting_service.payment_stats(sales).to_dict(),
            "totalSales": len(sales),
            "sales": [sale.to_dict() for sale in reporting_service.sales_newest_first(sales)],
            "payments": [row.to_dict() for row in reporting_service.payment_distribution(sales, users)],
            "debts": [row.to_dict() for row in reporting_service.debt_breakdown(sales, users)],
            "items": [row.to_dict() for row in reporting_service.top_items(sales, self.top_items_limit)],
        }

    def dashboard_for(self, user: User) -> dict:
        if user.is_admin:
            return self.admin_dashboard()
        return self.user_dashboard(user)

    def drilldown(self, kind: str, user_id: str) -> dict | None:
        """
        Payment or debt details for one user, looked up by user id.

        Returns None when the user has no entry in that breakdown.
        """
        if kind not in DRILLDOWN_KINDS:
            raise ValueError(f"kind must be one of: {', '.join(DRILLDOWN_KINDS)}")
        sales = self.ledger.all_sales()
        users = self.identity.users()
        if kind == "payments":
            rows = reporting_service.payment_distribution(sales, users)
        else:
            rows = reporting_service.debt_breakdown(sales, users)
        for row in rows:
            if row.user.id == user_id:
                data = row.to_dict()
                data["type"] = "payment" if kind == "payments" else "debt"
                return data
        return None


def current_dashboard() -> SalesDashboard:
    """The app-wide dashboard, loaded on first use inside an app context."""
    return current_app.extensions["salesdash"].load()
