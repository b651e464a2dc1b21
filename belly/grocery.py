"""Shopping-list queries."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from .models import FoodCategory, GroceryItem


def _newest_first(items: Iterable[GroceryItem]) -> list[GroceryItem]:
    return sorted(items, key=lambda i: i.date_added, reverse=True)


def all_items(items: Iterable[GroceryItem]) -> list[GroceryItem]:
    """Unpurchased entries first, each group newest first."""
    return sorted(_newest_first(items), key=lambda i: i.is_purchased)


def unpurchased(items: Iterable[GroceryItem]) -> list[GroceryItem]:
    return _newest_first(i for i in items if not i.is_purchased)


def purchased(items: Iterable[GroceryItem]) -> list[GroceryItem]:
    return _newest_first(i for i in items if i.is_purchased)


def by_category(
    items: Iterable[GroceryItem], category: FoodCategory | str
) -> list[GroceryItem]:
    category = FoodCategory.parse(category)
    return [i for i in all_items(items) if i.category is category]


def recently_added(
    items: Iterable[GroceryItem],
    days: int = 7,
    now: datetime | None = None,
) -> list[GroceryItem]:
    cutoff = (now or datetime.now()) - timedelta(days=days)
    return _newest_first(i for i in items if i.date_added >= cutoff)


def search(items: Iterable[GroceryItem], query: str) -> list[GroceryItem]:
    return [i for i in all_items(items) if i.matches(query)]
