# Overview: Statistics engine; pure aggregates and chart series derived from sale lists.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

from ..models import Sale, User, ROLE_USER
from ..time_utils import local_day, parse_iso_datetime


@dataclass(frozen=True)
class PaymentStats:
    total_paid: float = 0
    total_unpaid: float = 0
    paid_count: int = 0
    unpaid_count: int = 0

    @property
    def total_revenue(self) -> float:
        return self.total_paid + self.total_unpaid

    def to_dict(self) -> dict:
        return {
            "totalPaid": self.total_paid,
            "totalUnpaid": self.total_unpaid,
            "paidCount": self.paid_count,
            "unpaidCount": self.unpaid_count,
            "totalRevenue": self.total_revenue,
        }


@dataclass(frozen=True)
class ItemPopularity:
    item: str
    count: int
    total_value: float

    def to_dict(self) -> dict:
        return {"item": self.item, "count": self.count, "totalValue": self.total_value}


@dataclass
class DayTotals:
    paid: float = 0
    unpaid: float = 0

    def to_dict(self) -> dict:
        return {"paid": self.paid, "unpaid": self.unpaid}


@dataclass(frozen=True)
class UserTotal:
    user: User
    total: float
    matching_sales: list[Sale] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "userId": self.user.id,
            "user": self.user.username,
            "total": self.total,
            "sales": [sale.to_dict() for sale in self.matching_sales],
        }


def _sum_amounts(sales: Iterable[Sale]) -> float:
    total = 0
    for sale in sales:
        total += sale.quantity * sale.price
    return total


def payment_stats(sales: Iterable[Sale]) -> PaymentStats:
    """Paid/unpaid totals (quantity x price) and counts. Empty input is all zeros."""
    paid = []
    unpaid = []
    for sale in sales:
        (paid if sale.is_paid else unpaid).append(sale)
    return PaymentStats(
        total_paid=_sum_amounts(paid),
        total_unpaid=_sum_amounts(unpaid),
        paid_count=len(paid),
        unpaid_count=len(unpaid),
    )


def item_popularity(sales: Iterable[Sale]) -> list[ItemPopularity]:
    """
    Group by item, summing quantities into count and amounts into total_value.

    Ordered by count descending; ties keep the order items were first seen.
    """
    counts: dict[str, int] = {}
    values: dict[str, float] = {}
    for sale in sales:
        if sale.item not in counts:
            counts[sale.item] = 0
            values[sale.item] = 0
        counts[sale.item] += sale.quantity
        values[sale.item] += sale.quantity * sale.price

    rows = [ItemPopularity(item=item, count=counts[item], total_value=values[item]) for item in counts]
    # sorted() is stable, so equal counts stay in encounter order
    return sorted(rows, key=lambda row: row.count, reverse=True)


def top_items(sales: Iterable[Sale], limit: int = 10) -> list[ItemPopularity]:
    if limit < 0:
        raise ValueError("limit cannot be negative")
    return item_popularity(sales)[:limit]


def group_by_calendar_day(sales: Iterable[Sale], tz_name: str = "UTC") -> dict[str, DayTotals]:
    """
    Bucket sale amounts into paid/unpaid per calendar day (YYYY-MM-DD in tz_name).

    The mapping is returned in chronological order.
    """
    buckets: dict[str, DayTotals] = {}
    for sale in sales:
        day = local_day(sale.timestamp, tz_name)
        bucket = buckets.setdefault(day, DayTotals())
        amount = sale.quantity * sale.price
        if sale.is_paid:
            bucket.paid += amount
        else:
            bucket.unpaid += amount
    return {day: buckets[day] for day in sorted(buckets)}


def daily_series(sales: Iterable[Sale], tz_name: str = "UTC") -> dict:
    """Chart input: aligned labels, paid and unpaid lists."""
    buckets = group_by_calendar_day(sales, tz_name)
    return {
        "labels": list(buckets),
        "paid": [totals.paid for totals in buckets.values()],
        "unpaid": [totals.unpaid for totals in buckets.values()],
    }


def per_user_totals(
    sales: Iterable[Sale],
    users: Iterable[User],
    predicate: Callable[[Sale], bool],
) -> list[UserTotal]:
    """
    One entry per role-"user" account, in account order.

    Each entry holds the user's sales that satisfy predicate and their summed
    amount. Admin accounts are skipped.
    """
    sales = list(sales)
    result = []
    for user in users:
        if user.role != ROLE_USER:
            continue
        matching = [sale for sale in sales if sale.user_id == user.id and predicate(sale)]
        result.append(UserTotal(user=user, total=_sum_amounts(matching), matching_sales=matching))
    return result


def payment_distribution(sales: Iterable[Sale], users: Iterable[User]) -> list[UserTotal]:
    return per_user_totals(sales, users, lambda sale: sale.is_paid)


def debt_breakdown(sales: Iterable[Sale], users: Iterable[User]) -> list[UserTotal]:
    """Unpaid totals per user; users without debt are dropped."""
    return [row for row in per_user_totals(sales, users, lambda sale: not sale.is_paid) if row.total != 0]


def sales_newest_first(sales: Iterable[Sale]) -> list[Sale]:
    """Sale list view order. Equal timestamps keep their recorded order."""
    return sorted(sales, key=lambda sale: parse_iso_datetime(sale.timestamp), reverse=True)
