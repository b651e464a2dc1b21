"""Demo inventory data for trying out the app and for tests."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from .models import FoodCategory, FoodItem, FoodUnit

if TYPE_CHECKING:
    from .db import InventoryDB

logger = logging.getLogger(__name__)

DEMO_SETS = ("comprehensive", "minimal", "fresh", "empty")

# (name, category, quantity, unit, days from today, zone, storage)
_COMPREHENSIVE = [
    ("Greek Yogurt", FoodCategory.DAIRY, 1, FoodUnit.PACKAGES, -2, "Middle shelf", "Refrigerator"),
    ("Organic Spinach", FoodCategory.PRODUCE, 200, FoodUnit.GRAMS, 0, "Crisper drawer", "Refrigerator"),
    ("Chicken Breast", FoodCategory.MEAT, 0.8, FoodUnit.KILOGRAMS, 1, "Bottom shelf", "Refrigerator"),
    ("Leftover Pizza", FoodCategory.LEFTOVERS, 3, FoodUnit.PIECES, 1, "Top shelf", "Refrigerator"),
    ("Fresh Blueberries", FoodCategory.PRODUCE, 1, FoodUnit.PACKAGES, 2, "Crisper drawer", "Refrigerator"),
    ("Whole Milk", FoodCategory.DAIRY, 1, FoodUnit.CARTONS, 3, "Door", "Refrigerator"),
    ("Cheddar Cheese", FoodCategory.DAIRY, 250, FoodUnit.GRAMS, 14, "Middle shelf", "Refrigerator"),
    ("Salmon Fillet", FoodCategory.FROZEN, 2, FoodUnit.PIECES, 60, None, "Freezer"),
    ("Ketchup", FoodCategory.CONDIMENTS, 1, FoodUnit.BOTTLES, 120, "Door", "Refrigerator"),
    ("Sparkling Water", FoodCategory.BEVERAGES, 6, FoodUnit.CANS, 180, None, "Pantry"),
    ("Brown Rice", FoodCategory.PANTRY, 1, FoodUnit.KILOGRAMS, 240, None, "Pantry"),
    ("Bananas", FoodCategory.PRODUCE, 5, FoodUnit.PIECES, 4, None, "Counter"),
]

_MINIMAL = [
    ("Test Apple", FoodCategory.PRODUCE, 1, FoodUnit.PIECES, 2, None, "Refrigerator"),
    ("Test Milk", FoodCategory.DAIRY, 1, FoodUnit.CARTONS, 5, None, "Refrigerator"),
]

_FRESH = [
    ("Fresh Vegetables", FoodCategory.PRODUCE, 1, FoodUnit.PACKAGES, 10, None, "Refrigerator"),
    ("Long-life Milk", FoodCategory.DAIRY, 1, FoodUnit.CARTONS, 30, None, "Pantry"),
]


def demo_items(kind: str = "comprehensive", now: datetime | None = None) -> list[FoodItem]:
    """Build a demo item set relative to ``now``.

    Raises:
        ValueError: If ``kind`` is not one of :data:`DEMO_SETS`.
    """
    match kind:
        case "comprehensive":
            rows = _COMPREHENSIVE
        case "minimal":
            rows = _MINIMAL
        case "fresh":
            rows = _FRESH
        case "empty":
            rows = []
        case _:
            raise ValueError(
                f"Unknown demo set: {kind!r} (choose from {' / '.join(DEMO_SETS)})"
            )

    now = now or datetime.now()
    return [
        FoodItem.create(
            name,
            now + timedelta(days=days),
            category=category,
            quantity=quantity,
            unit=unit,
            storage=storage,
            zone_tag=zone,
            now=now,
        )
        for name, category, quantity, unit, days, zone, storage in rows
    ]


def seed_inventory(
    db: InventoryDB,
    kind: str = "comprehensive",
    now: datetime | None = None,
    reset: bool = False,
) -> list[str]:
    """Insert a demo set into ``db``, optionally clearing it first."""
    items = demo_items(kind, now)
    if reset:
        db.clear()
    ids = db.add_items(items) if items else []
    logger.info("Loaded demo data (%s) with %d items", kind, len(ids))
    return ids
