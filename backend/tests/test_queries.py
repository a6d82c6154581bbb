"""Tests for the read-side query service."""
from datetime import datetime, timedelta, timezone

import pytest

from services.errors import InvalidInput
from tests.conftest import FIXED_NOW


@pytest.fixture
def sales(ledger, manager, folder):
    tea = manager.create_product("Tea", 50, folder.id, "Import")
    cake = manager.create_product("Cake", 50, folder.id, "Bakery")
    plan = [
        (tea.id, 1, "Jane Doe", FIXED_NOW - timedelta(days=3)),
        (cake.id, 2, "Bob Smith", FIXED_NOW - timedelta(days=2)),
        (tea.id, 3, "JANE ROE", FIXED_NOW - timedelta(days=1)),
        (cake.id, 4, "Alice", FIXED_NOW),
    ]
    created = [ledger.record_sale(pid, qty, who, sold_at=when)[1] for pid, qty, who, when in plan]
    return {"tea": tea.id, "cake": cake.id, "ids": [s.id for s in created]}


def test_products_by_folder(manager, queries, store, folder):
    other = manager.create_folder("Other", store.id)
    a = manager.create_product("A", 1, folder.id, "src")
    manager.create_product("B", 1, other.id, "src")
    c = manager.create_product("C", 1, folder.id, "src")

    assert [p.id for p in queries.products_by_folder(folder.id)] == [a.id, c.id]
    assert len(queries.products_by_folder()) == 3
    assert queries.products_by_folder(9999) == []


def test_folders_by_store(manager, queries, store, folder):
    second = manager.create_store("Second")
    manager.create_folder("Elsewhere", second.id)
    later = manager.create_folder("Later", store.id)

    assert [f.id for f in queries.folders_by_store(store.id)] == [folder.id, later.id]
    assert len(queries.folders_by_store()) == 3


def test_sales_by_customer_is_case_insensitive_substring(queries, sales):
    found = queries.sales_by_customer("jane")
    assert [s.customer for s in found] == ["Jane Doe", "JANE ROE"]


def test_sales_by_customer_no_results(queries, sales):
    assert queries.sales_by_customer("nobody") == []


def test_sales_by_customer_treats_wildcards_literally(queries, sales):
    assert queries.sales_by_customer("%") == []
    assert queries.sales_by_customer("_") == []


def test_sales_by_product(queries, sales):
    assert [s.quantity for s in queries.sales_by_product(sales["tea"])] == [1, 3]


def test_sales_between_is_inclusive(queries, sales):
    start = FIXED_NOW - timedelta(days=2)
    found = queries.sales_between(start, FIXED_NOW - timedelta(days=1))
    assert [s.customer for s in found] == ["Bob Smith", "JANE ROE"]


def test_sales_between_accepts_other_timezones(queries, sales):
    plus_two = timezone(timedelta(hours=2))
    start = (FIXED_NOW - timedelta(days=2)).astimezone(plus_two)
    assert [s.quantity for s in queries.sales_between(start, FIXED_NOW)] == [2, 3, 4]


def test_sales_between_requires_both_bounds(queries):
    with pytest.raises(InvalidInput):
        queries.sales_between(None, FIXED_NOW)


def test_inverted_range_is_rejected(queries):
    with pytest.raises(InvalidInput):
        queries.sales_between(FIXED_NOW, FIXED_NOW - timedelta(days=1))


def test_list_sales_combines_filters(queries, sales):
    found = queries.list_sales(customer="jane", product_id=sales["tea"], start=FIXED_NOW - timedelta(days=1))
    assert [s.quantity for s in found] == [3]
    assert [s.id for s in queries.list_sales()] == sales["ids"]


def test_sales_survive_product_deletion(manager, queries, sales):
    manager.delete_product(sales["tea"])
    remaining = queries.sales_by_product(sales["tea"])
    assert len(remaining) == 2
    assert all(s.product is None for s in remaining)
