"""
Tests for the day report aggregation.
"""

from decimal import Decimal
from types import SimpleNamespace

from steakz.services.reports import build_report, most_ordered_dishes, paid_revenue, summarize_all


def reservation(is_paid, *orders):
    return SimpleNamespace(
        is_paid=is_paid,
        orders=[SimpleNamespace(menu_item=item, price=price) for item, price in orders],
    )


class TestBuildReport:
    def test_paid_and_unpaid_scenario(self):
        snapshot = [
            reservation(True, ("steak", Decimal("30")), ("wine", Decimal("10"))),
            reservation(False, ("steak", Decimal("30"))),
        ]

        report = build_report(snapshot)

        assert report["total_orders"] == 2
        assert report["total_revenue"] == 40
        assert report["most_ordered_dishes"] == [
            {"dish": "steak", "count": 2},
            {"dish": "wine", "count": 1},
        ]

    def test_empty_snapshot(self):
        report = build_report([])
        assert report == {"total_orders": 0, "total_revenue": 0, "most_ordered_dishes": []}

    def test_total_orders_counts_reservations_not_line_items(self):
        snapshot = [reservation(False, ("steak", 30), ("fries", 5), ("cola", 3))]
        assert build_report(snapshot)["total_orders"] == 1

    def test_accepts_generator_input(self):
        report = build_report(r for r in [reservation(True, ("steak", 25))])
        assert report["total_orders"] == 1
        assert report["total_revenue"] == 25


class TestPaidRevenue:
    def test_unpaid_contributes_nothing(self):
        assert paid_revenue([reservation(False, ("steak", 30))]) == 0

    def test_mixed_numeric_prices(self):
        snapshot = [reservation(True, ("steak", 19.99), ("wine", Decimal("10.01")), ("tip", 5))]
        assert paid_revenue(snapshot) == Decimal("35.00")


class TestMostOrderedDishes:
    def test_ties_keep_first_seen_order(self):
        snapshot = [
            reservation(False, ("salad", 5), ("steak", 30)),
            reservation(True, ("wine", 10), ("steak", 30), ("salad", 5), ("wine", 10)),
        ]
        assert most_ordered_dishes(snapshot) == [
            {"dish": "salad", "count": 2},
            {"dish": "steak", "count": 2},
            {"dish": "wine", "count": 2},
        ]

    def test_truncated_to_top_five(self):
        dishes = [("a", 1)] * 6 + [("b", 1)] * 5 + [("c", 1)] * 4 + [("d", 1)] * 3 + [("e", 1)] * 2 + [("f", 1)]
        result = most_ordered_dishes([reservation(True, *dishes)])
        assert [d["dish"] for d in result] == ["a", "b", "c", "d", "e"]
        assert result[0]["count"] == 6


def test_summarize_all():
    paid = [reservation(True, ("steak", 30)), reservation(True, ("wine", 12))]
    assert summarize_all(5, paid) == {"total_reservations": 5, "revenue": 42}
