"""Tests for order filtering, sorting and summaries."""

import copy
from datetime import date, datetime, timedelta

import pytest

from littletreat.queries import (
    OrderSummary,
    apply_query,
    by_status,
    next_status,
    parse_delivery_minutes,
    search,
    sort_orders,
    summarize,
)
from littletreat.sheets.models import OrderRecord


def _order(order_id, status="Pending", flat="1", apartment="Lake View",
           items="Samosa x 1 pcs (₹20)", delivery_time="7:00 PM",
           timestamp="2025-10-24T10:00:00", total="₹20"):
    return OrderRecord(
        order_id=order_id,
        delivery_date="25 Oct 2025",
        delivery_time=delivery_time,
        flat=flat,
        apartment=apartment,
        items=items,
        total=total,
        status=status,
        timestamp=timestamp,
    )


@pytest.fixture
def orders():
    return [
        _order("#LT1", status="Pending", flat="Flat12", timestamp="2025-10-20T10:00:00"),
        _order("#LT2", status="Dispatched", flat="7", items="Chicken Biryani x 2 plates (₹200)",
               timestamp="2025-10-24T09:00:00"),
        _order("#LT3", status="Delivered", flat="flat12b", apartment="Green Park",
               timestamp="2025-10-22T10:00:00"),
        _order("#LT4", status="Pending", flat="3", apartment="Green Park",
               timestamp="2025-10-23T10:00:00"),
    ]


class TestByStatus:
    def test_all_is_unchanged(self, orders):
        result = by_status(orders, "all")
        assert result == orders
        assert result is not orders

    def test_exact_match(self, orders):
        assert [o.order_id for o in by_status(orders, "Pending")] == ["#LT1", "#LT4"]

    def test_case_sensitive(self, orders):
        assert by_status(orders, "pending") == []


class TestSearch:
    def test_blank_is_unchanged(self, orders):
        assert search(orders, "") == orders
        assert search(orders, "   ") == orders

    def test_flat_case_insensitive(self, orders):
        assert [o.order_id for o in search(orders, "flat12")] == ["#LT1", "#LT3"]

    def test_searches_items_and_apartment(self, orders):
        assert [o.order_id for o in search(orders, "BIRYANI")] == ["#LT2"]
        assert [o.order_id for o in search(orders, "green")] == ["#LT3", "#LT4"]

    def test_searches_order_id(self, orders):
        assert [o.order_id for o in search(orders, "#lt4")] == ["#LT4"]

    def test_no_match(self, orders):
        assert search(orders, "pizza") == []


class TestSort:
    def test_delivery_time(self):
        orders = [
            _order("a", delivery_time="9:00 AM"),
            _order("b", delivery_time="7:00 PM"),
            _order("c", delivery_time="12:30 AM"),
        ]
        result = sort_orders(orders, "deliveryTime")
        assert [o.delivery_time for o in result] == ["12:30 AM", "9:00 AM", "7:00 PM"]

    def test_unparseable_time_sorts_first(self):
        orders = [
            _order("a", delivery_time="6:00 PM"),
            _order("b", delivery_time="N/A"),
        ]
        assert [o.order_id for o in sort_orders(orders, "deliveryTime")] == ["b", "a"]

    def test_default_newest_first(self, orders):
        result = sort_orders(orders, "timestamp")
        assert [o.order_id for o in result] == ["#LT2", "#LT4", "#LT3", "#LT1"]

    def test_unknown_key_sorts_by_timestamp(self, orders):
        assert sort_orders(orders, "whatever") == sort_orders(orders, "timestamp")

    def test_input_not_mutated(self, orders):
        before = copy.deepcopy(orders)
        sort_orders(orders, "deliveryTime")
        sort_orders(orders, "timestamp")
        assert orders == before


@pytest.mark.parametrize(
    "label,minutes",
    [
        ("12:00 AM", 0),
        ("12:30 AM", 30),
        ("9:00 AM", 540),
        ("12:00 PM", 720),
        ("7:00 PM", 1140),
        ("7:30 pm", 1170),
        ("19:00", 0),
        ("", 0),
    ],
)
def test_parse_delivery_minutes(label, minutes):
    assert parse_delivery_minutes(label) == minutes


class TestApplyQuery:
    def test_status_and_search_intersect(self, orders):
        result = apply_query(orders, status="Pending", query="flat12")
        assert [o.order_id for o in result] == ["#LT1"]

    def test_filter_order_does_not_matter(self, orders):
        a = search(by_status(orders, "Delivered"), "green")
        b = by_status(search(orders, "green"), "Delivered")
        assert a == b == apply_query(orders, status="Delivered", query="green")

    def test_sorted(self, orders):
        result = apply_query(orders, query="green", sort_key="timestamp")
        assert [o.order_id for o in result] == ["#LT4", "#LT3"]

    def test_defaults_return_everything_newest_first(self, orders):
        assert [o.order_id for o in apply_query(orders)] == ["#LT2", "#LT4", "#LT3", "#LT1"]


class TestSummarize:
    def test_counts_today(self):
        now = datetime.now()
        yesterday = now - timedelta(days=1)
        orders = [
            _order("#LT1", timestamp=now.isoformat(), total="₹210"),
            _order("#LT2", timestamp=now.isoformat(), total="₹60"),
            _order("#LT3", timestamp=yesterday.isoformat(), total="₹999"),
            _order("#LT4", timestamp="garbage", total="₹5"),
        ]
        assert summarize(orders, today=now.date()) == OrderSummary(
            total_orders=4, today_orders=2, today_revenue=270
        )

    def test_fixed_day(self, orders):
        summary = summarize(orders, today=date(2025, 10, 24))
        assert summary.total_orders == 4
        assert summary.today_orders == 1
        assert summary.today_revenue == 20

    def test_total_without_digits(self):
        orders = [_order("#LT1", timestamp="2025-10-24T10:00:00", total="")]
        assert summarize(orders, today=date(2025, 10, 24)).today_revenue == 0

    def test_empty(self):
        assert summarize([]) == OrderSummary(0, 0, 0)


class TestNextStatus:
    @pytest.mark.parametrize(
        "current,expected",
        [
            ("Pending", "Dispatched"),
            ("Dispatched", "Delivered"),
            ("Delivered", "Pending"),
        ],
    )
    def test_cycle(self, current, expected):
        assert next_status(current) == expected

    def test_unknown_resets_to_pending(self, caplog):
        assert next_status("garbage") == "Pending"
        assert "Unknown order status" in caplog.text
