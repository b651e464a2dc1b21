"""Tests for the canned inventory queries."""

from datetime import datetime, timedelta

import pytest

from belly import inventory
from belly.inventory import FridgeFilter
from belly.models import FoodCategory, FoodItem

NOW = datetime(2025, 6, 1, 12, 0, 0)


def _item(name: str, days: float, **kwargs) -> FoodItem:
    removed = kwargs.pop("removed", False)
    item = FoodItem.create(name, NOW + timedelta(days=days), now=NOW, **kwargs)
    if removed:
        item.mark_as_removed(NOW)
    return item


@pytest.fixture
def items():
    return [
        _item("Yogurt", -2, category="Dairy"),
        _item("Spinach", 0, category="Produce"),
        _item("Chicken", 1, category="Meat"),
        _item("Pizza", 1, category="Leftovers"),
        _item("Milk", 3, category="Dairy"),
        _item("Cheese", 14, category="Dairy"),
        _item("Salmon", 60, category="Frozen", storage="Freezer"),
        _item("Rice", 240, category="Pantry", storage="Pantry"),
        _item("Old Bread", -1, removed=True),
        _item("Eaten Apple", 5, removed=True),
    ]


def _names(result):
    return [i.name for i in result]


def test_all_active_items_excludes_removed(items):
    result = inventory.all_active_items(items)
    assert "Old Bread" not in _names(result)
    assert "Eaten Apple" not in _names(result)
    assert len(result) == 8


def test_all_active_items_sorted_by_expiration_then_name(items):
    result = inventory.all_active_items(items)
    assert _names(result) == [
        "Yogurt", "Spinach", "Chicken", "Pizza", "Milk", "Cheese", "Salmon", "Rice",
    ]


def test_same_expiration_orders_by_name():
    expiry = NOW + timedelta(days=2)
    items = [
        FoodItem.create("banana", expiry, now=NOW),
        FoodItem.create("Apple", expiry, now=NOW),
        FoodItem.create("Zucchini", expiry, now=NOW),
    ]
    # Ordinal, case-sensitive: uppercase sorts before lowercase
    assert _names(inventory.all_active_items(items)) == ["Apple", "Zucchini", "banana"]


def test_expiring_soon(items):
    result = inventory.expiring_soon(items, NOW)
    assert _names(result) == ["Spinach", "Chicken", "Pizza", "Milk"]


def test_expiring_soon_window_boundaries():
    items = [
        _item("now", 0),
        _item("edge", 3),
        _item("past edge", 3.001),
        _item("just expired", -0.001),
    ]
    assert _names(inventory.expiring_soon(items, NOW)) == ["now", "edge"]


def test_expired(items):
    assert _names(inventory.expired(items, NOW)) == ["Yogurt"]


def test_fresh(items):
    assert _names(inventory.fresh(items, NOW)) == ["Cheese", "Salmon", "Rice"]


def test_partition_covers_all_active(items):
    active = {i.id for i in inventory.all_active_items(items)}
    soon = {i.id for i in inventory.expiring_soon(items, NOW)}
    gone = {i.id for i in inventory.expired(items, NOW)}
    good = {i.id for i in inventory.fresh(items, NOW)}

    assert soon | gone | good == active
    assert not soon & gone
    assert not soon & good
    assert not gone & good


def test_expiring_soon_matches_days_until_expiration(items):
    expected = [
        i for i in items
        if i.is_active and 0 <= i.days_until_expiration(NOW) <= 3
    ]
    assert {i.id for i in inventory.expiring_soon(items, NOW)} == {i.id for i in expected}


def test_by_category(items):
    result = inventory.by_category(items, FoodCategory.DAIRY)
    assert _names(result) == ["Yogurt", "Milk", "Cheese"]


def test_by_category_accepts_string(items):
    assert _names(inventory.by_category(items, "Meat")) == ["Chicken"]


def test_by_storage(items):
    assert _names(inventory.by_storage(items, "Freezer")) == ["Salmon"]
    assert inventory.by_storage(items, "Garage") == []


def test_empty_collection():
    assert inventory.all_active_items([]) == []
    assert inventory.expiring_soon([], NOW) == []
    assert inventory.expired([], NOW) == []
    assert inventory.fresh([], NOW) == []


def test_search(items):
    assert _names(inventory.search(items, "pan")) == ["Rice"]
    assert _names(inventory.search(items, "ch")) == ["Spinach", "Chicken", "Cheese"]


@pytest.mark.parametrize(
    "fridge_filter, expected",
    [
        (FridgeFilter.EXPIRED, ["Yogurt"]),
        ("fresh", ["Cheese", "Salmon", "Rice"]),
        ("expiring", ["Spinach", "Chicken", "Pizza", "Milk"]),
    ],
)
def test_apply_filter(items, fridge_filter, expected):
    assert _names(inventory.apply_filter(items, fridge_filter, NOW)) == expected


def test_apply_filter_all(items):
    assert len(inventory.apply_filter(items, FridgeFilter.ALL, NOW)) == 8


def test_summarize(items):
    s = inventory.summarize(items, NOW)
    assert (s.total, s.expiring, s.expired, s.fresh) == (8, 4, 1, 3)


def test_stale_expired():
    items = [_item("recent", -2), _item("ancient", -10), _item("ok", 4)]
    assert _names(inventory.stale_expired(items, 7, NOW)) == ["ancient"]
