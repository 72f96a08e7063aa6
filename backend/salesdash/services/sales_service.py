# Overview: Sales ledger; records sales, flips the payment flag, filters by owner.

"""
Sales Ledger

Sales are appended and never deleted. isPaid is the only field that changes
after creation. The whole collection is written back after every change.

Input checks (quantity >= 1, price >= 0, required text) belong to the caller
and to the Sale record itself; the ledger does not re-validate.
"""

from __future__ import annotations

import logging

from ..models import Sale
from ..models.records import new_id
from ..validation import DashboardError
from .storage_service import KeyValueStore


logger = logging.getLogger(__name__)

DEFAULT_SALES_KEY = "dashboard_sales"


class SaleNotFound(DashboardError):
    """Raised by callers when a sale id does not match any record."""
    status_code = 404


class SalesLedger:
    def __init__(self, store: KeyValueStore, *, sales_key: str = DEFAULT_SALES_KEY):
        self.store = store
        self.sales_key = sales_key
        self._sales: list[Sale] = []

    def load(self) -> list[Sale]:
        self._sales = [Sale.from_dict(item) for item in self.store.get_json(self.sales_key, [])]
        return list(self._sales)

    def _save(self) -> None:
        self.store.set_json(self.sales_key, [sale.to_dict() for sale in self._sales])

    def record_sale(
        self,
        name: str,
        item: str,
        quantity: int,
        price: float,
        is_paid: bool,
        owner_id: str,
        owner_username: str,
    ) -> Sale:
        """Append a new sale with a fresh id and timestamp, then persist."""
        sale = Sale(
            id=new_id("sale"),
            name=name,
            item=item,
            quantity=quantity,
            price=price,
            is_paid=is_paid,
            user_id=owner_id,
            username=owner_username,
        )
        self._sales.append(sale)
        self._save()
        logger.info("Recorded sale %s for %s", sale.id, owner_username)
        return sale

    def set_payment_status(self, sale_id: str, is_paid: bool) -> bool:
        """
        Overwrite isPaid on the first sale with this id.

        Returns False when no sale matches; nothing is written in that case.
        """
        sale = self.find_sale(sale_id)
        if sale is None:
            return False
        sale.is_paid = bool(is_paid)
        self._save()
        logger.info("Sale %s marked %s", sale_id, "paid" if sale.is_paid else "unpaid")
        return True

    def find_sale(self, sale_id: str) -> Sale | None:
        for sale in self._sales:
            if sale.id == sale_id:
                return sale
        return None

    def sales_for_owner(self, owner_id: str) -> list[Sale]:
        return [sale for sale in self._sales if sale.user_id == owner_id]

    def all_sales(self) -> list[Sale]:
        return list(self._sales)
