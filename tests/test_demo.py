"""Tests for demo data seeding."""

from datetime import datetime

import pytest

from belly.db import InventoryDB
from belly.demo import DEMO_SETS, demo_items, seed_inventory

NOW = datetime(2025, 6, 1, 12, 0, 0)


@pytest.fixture
def db(tmp_path):
    inventory = InventoryDB(db_path=tmp_path / "test.db")
    yield inventory
    inventory.close()


@pytest.mark.parametrize("kind, count", [
    ("comprehensive", 12),
    ("minimal", 2),
    ("fresh", 2),
    ("empty", 0),
])
def test_demo_set_sizes(kind, count):
    assert len(demo_items(kind, NOW)) == count


def test_all_sets_known():
    for kind in DEMO_SETS:
        demo_items(kind, NOW)


def test_unknown_set():
    with pytest.raises(ValueError, match="Unknown demo set"):
        demo_items("huge", NOW)


def test_comprehensive_covers_every_state(db):
    """The full demo set has expired, expiring and fresh items."""
    seed_inventory(db, "comprehensive", NOW)
    summary = db.summary(NOW)
    assert summary.total == 12
    assert summary.expired == 1
    assert summary.expiring == 5
    assert summary.fresh == 6


def test_fresh_set_has_nothing_expiring(db):
    seed_inventory(db, "fresh", NOW)
    assert db.expiring_soon(NOW) == []
    assert db.expired(NOW) == []


def test_seed_appends_without_reset(db):
    seed_inventory(db, "minimal", NOW)
    seed_inventory(db, "minimal", NOW)
    assert len(db.active_items()) == 4


def test_seed_reset_clears_first(db):
    seed_inventory(db, "comprehensive", NOW)
    ids = seed_inventory(db, "minimal", NOW, reset=True)
    assert len(ids) == 2
    assert {i.id for i in db.all_items()} == set(ids)


def test_seed_empty_reset(db):
    seed_inventory(db, "minimal", NOW)
    assert seed_inventory(db, "empty", NOW, reset=True) == []
    assert db.all_items() == []
