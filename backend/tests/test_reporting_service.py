import pytest

from salesdash.models import User
from salesdash.services import reporting_service


ADMIN = User(id="admin-1", username="admin", password="p", role="admin")
ALICE = User(id="u1", username="alice", password="p", role="user")
BOB = User(id="u2", username="bob", password="p", role="user")
USERS = [ADMIN, ALICE, BOB]


@pytest.fixture
def mixed_sales(make_sale):
    return [
        make_sale(item="Pen", quantity=3, price=1.25, is_paid=True, user_id="u1",
                  timestamp="2026-03-01T08:00:00.000Z"),
        make_sale(item="Ink", quantity=1, price=7.5, is_paid=False, user_id="u2",
                  timestamp="2026-03-02T09:00:00.000Z"),
        make_sale(item="Pad", quantity=5, price=0.5, is_paid=False, user_id="u1",
                  timestamp="2026-03-01T23:30:00.000Z"),
        make_sale(item="Pen", quantity=2, price=1.75, is_paid=False, user_id="admin-1",
                  timestamp="2026-02-28T10:00:00.000Z"),
    ]


class TestPaymentStats:
    def test_empty(self):
        stats = reporting_service.payment_stats([])
        assert stats.to_dict() == {
            "totalPaid": 0, "totalUnpaid": 0, "paidCount": 0, "unpaidCount": 0, "totalRevenue": 0,
        }

    def test_partitions_by_paid_flag(self, mixed_sales):
        stats = reporting_service.payment_stats(mixed_sales)
        assert stats.total_paid == 3.75
        assert stats.total_unpaid == 7.5 + 2.5 + 3.5
        assert (stats.paid_count, stats.unpaid_count) == (1, 3)

    def test_totals_cover_every_sale(self, mixed_sales):
        stats = reporting_service.payment_stats(mixed_sales)
        expected = sum(sale.quantity * sale.price for sale in mixed_sales)
        assert stats.total_paid + stats.total_unpaid == pytest.approx(expected)
        assert stats.total_revenue == pytest.approx(expected)


class TestItemPopularity:
    def test_merges_same_item(self, make_sale):
        rows = reporting_service.item_popularity([
            make_sale(item="Pen", quantity=3, price=2.0),
            make_sale(item="Pen", quantity=2, price=3.0),
        ])
        assert [row.to_dict() for row in rows] == [{"item": "Pen", "count": 5, "totalValue": 12.0}]

    def test_sorted_and_counts_preserved(self, mixed_sales):
        rows = reporting_service.item_popularity(mixed_sales)
        counts = [row.count for row in rows]
        assert counts == sorted(counts, reverse=True)
        assert sum(counts) == sum(sale.quantity for sale in mixed_sales)

    def test_ties_keep_encounter_order(self, make_sale):
        rows = reporting_service.item_popularity([
            make_sale(item="Ink", quantity=2),
            make_sale(item="Pad", quantity=4),
            make_sale(item="Pen", quantity=2),
            make_sale(item="Cup", quantity=2),
        ])
        assert [row.item for row in rows] == ["Pad", "Ink", "Pen", "Cup"]

    def test_item_names_are_exact(self, make_sale):
        rows = reporting_service.item_popularity([make_sale(item="pen"), make_sale(item="Pen")])
        assert len(rows) == 2

    def test_top_items_limit(self, make_sale):
        sales = [make_sale(item=f"item-{n}", quantity=n + 1) for n in range(12)]
        top = reporting_service.top_items(sales)
        assert len(top) == 10
        assert top[0].item == "item-11"
        assert reporting_service.top_items(sales, limit=0) == []
        with pytest.raises(ValueError):
            reporting_service.top_items(sales, limit=-1)


class TestCalendarDays:
    def test_buckets_by_day_in_order(self, mixed_sales):
        buckets = reporting_service.group_by_calendar_day(mixed_sales)

        assert list(buckets) == ["2026-02-28", "2026-03-01", "2026-03-02"]
        assert buckets["2026-03-01"].to_dict() == {"paid": 3.75, "unpaid": 2.5}
        assert buckets["2026-03-02"].to_dict() == {"paid": 0, "unpaid": 7.5}

    def test_zone_moves_late_sales_to_next_day(self, mixed_sales):
        buckets = reporting_service.group_by_calendar_day(mixed_sales, "Africa/Nairobi")

        assert buckets["2026-03-01"].to_dict() == {"paid": 3.75, "unpaid": 0}
        assert buckets["2026-03-02"].to_dict() == {"paid": 0, "unpaid": 10.0}

    def test_daily_series_is_aligned(self, mixed_sales):
        series = reporting_service.daily_series(mixed_sales)
        assert series == {
            "labels": ["2026-02-28", "2026-03-01", "2026-03-02"],
            "paid": [0, 3.75, 0],
            "unpaid": [3.5, 2.5, 7.5],
        }

    def test_empty(self):
        assert reporting_service.group_by_calendar_day([]) == {}
        assert reporting_service.daily_series([]) == {"labels": [], "paid": [], "unpaid": []}


class TestPerUserTotals:
    def test_only_regular_users_in_account_order(self, mixed_sales):
        rows = reporting_service.per_user_totals(mixed_sales, USERS, lambda sale: True)

        assert [row.user.username for row in rows] == ["alice", "bob"]
        assert rows[0].total == 3.75 + 2.5
        assert [sale.item for sale in rows[0].matching_sales] == ["Pen", "Pad"]

    def test_payment_distribution_keeps_zero_totals(self, mixed_sales):
        rows = reporting_service.payment_distribution(mixed_sales, USERS)
        assert [(row.user.id, row.total) for row in rows] == [("u1", 3.75), ("u2", 0)]

    def test_debt_breakdown_drops_zero_totals(self, make_sale):
        sales = [
            make_sale(quantity=2, price=5.0, is_paid=False, user_id="u2"),
            make_sale(quantity=1, price=5.0, is_paid=True, user_id="u1"),
        ]
        rows = reporting_service.debt_breakdown(sales, USERS)
        assert [row.to_dict()["user"] for row in rows] == ["bob"]
        assert rows[0].total == 10.0
        assert rows[0].to_dict()["sales"][0]["userId"] == "u2"


class TestOrderingAndPurity:
    def test_newest_first_is_stable(self, make_sale):
        older = make_sale(timestamp="2026-03-01T08:00:00.000Z")
        same_a = make_sale(timestamp="2026-03-02T08:00:00.000Z")
        same_b = make_sale(timestamp="2026-03-02T08:00:00.000Z")

        ordered = reporting_service.sales_newest_first([older, same_a, same_b])
        assert ordered == [same_a, same_b, older]

    def test_repeated_calls_are_identical(self, mixed_sales):
        snapshot = [sale.to_dict() for sale in mixed_sales]
        first = (
            reporting_service.payment_stats(mixed_sales).to_dict(),
            [row.to_dict() for row in reporting_service.item_popularity(mixed_sales)],
            reporting_service.daily_series(mixed_sales),
            [row.to_dict() for row in reporting_service.debt_breakdown(mixed_sales, USERS)],
        )
        second = (
            reporting_service.payment_stats(mixed_sales).to_dict(),
            [row.to_dict() for row in reporting_service.item_popularity(mixed_sales)],
            reporting_service.daily_series(mixed_sales),
            [row.to_dict() for row in reporting_service.debt_breakdown(mixed_sales, USERS)],
        )
        assert first == second
        assert [sale.to_dict() for sale in mixed_sales] == snapshot
