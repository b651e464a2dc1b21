"""Canned read-side queries over a collection of inventory records.

Every function here is pure: it takes any iterable of :class:`FoodItem`
plus an optional ``now`` reference and returns a new, deterministically
ordered list. Nothing is raised for empty or unmatched input.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable

from .models import EXPIRING_SOON_DAYS, FoodCategory, FoodItem


class FridgeFilter(str, Enum):
    ALL = "all"
    EXPIRING = "expiring"
    EXPIRED = "expired"
    FRESH = "fresh"


@dataclass
class InventorySummary:
    total: int
    expiring: int
    expired: int
    fresh: int


def _expiration_then_name(item: FoodItem):
    return (item.expiration_date, item.name)


def _expiration(item: FoodItem):
    return item.expiration_date


def _active(items: Iterable[FoodItem]) -> list[FoodItem]:
    return [i for i in items if i.is_active]


def all_active_items(items: Iterable[FoodItem]) -> list[FoodItem]:
    """Active items ordered by expiration, then name."""
    return sorted(_active(items), key=_expiration_then_name)


def expiring_soon(
    items: Iterable[FoodItem],
    now: datetime | None = None,
    days: int = EXPIRING_SOON_DAYS,
) -> list[FoodItem]:
    """Active items with ``now <= expiration <= now + days``."""
    now = now or datetime.now()
    horizon = now + timedelta(days=days)
    return sorted(
        (i for i in _active(items) if now <= i.expiration_date <= horizon),
        key=_expiration,
    )


def expired(items: Iterable[FoodItem], now: datetime | None = None) -> list[FoodItem]:
    """Active items whose expiration is already in the past."""
    now = now or datetime.now()
    return sorted(
        (i for i in _active(items) if i.expiration_date < now),
        key=_expiration,
    )


def fresh(
    items: Iterable[FoodItem],
    now: datetime | None = None,
    days: int = EXPIRING_SOON_DAYS,
) -> list[FoodItem]:
    """Active items expiring after the expiring-soon window."""
    now = now or datetime.now()
    horizon = now + timedelta(days=days)
    return sorted(
        (i for i in _active(items) if i.expiration_date > horizon),
        key=_expiration_then_name,
    )


def by_category(
    items: Iterable[FoodItem], category: FoodCategory | str
) -> list[FoodItem]:
    category = FoodCategory.parse(category)
    return [i for i in all_active_items(items) if i.category is category]


def by_storage(items: Iterable[FoodItem], storage: str) -> list[FoodItem]:
    return [i for i in all_active_items(items) if i.storage == storage]


def search(items: Iterable[FoodItem], query: str) -> list[FoodItem]:
    """Active items whose name, category, storage or zone contains ``query``."""
    return [i for i in all_active_items(items) if i.matches(query)]


def apply_filter(
    items: Iterable[FoodItem],
    fridge_filter: FridgeFilter | str,
    now: datetime | None = None,
    days: int = EXPIRING_SOON_DAYS,
) -> list[FoodItem]:
    match FridgeFilter(fridge_filter):
        case FridgeFilter.EXPIRING:
            return expiring_soon(items, now, days)
        case FridgeFilter.EXPIRED:
            return expired(items, now)
        case FridgeFilter.FRESH:
            return fresh(items, now, days)
        case _:
            return all_active_items(items)


def summarize(
    items: Iterable[FoodItem],
    now: datetime | None = None,
    days: int = EXPIRING_SOON_DAYS,
) -> InventorySummary:
    now = now or datetime.now()
    active = _active(items)
    return InventorySummary(
        total=len(active),
        expiring=len(expiring_soon(active, now, days)),
        expired=len(expired(active, now)),
        fresh=len(fresh(active, now, days)),
    )


def stale_expired(
    items: Iterable[FoodItem],
    older_than_days: int = 7,
    now: datetime | None = None,
) -> list[FoodItem]:
    """Expired items whose expiration is older than the cutoff."""
    now = now or datetime.now()
    cutoff = now - timedelta(days=older_than_days)
    return [i for i in expired(items, now) if i.expiration_date < cutoff]
