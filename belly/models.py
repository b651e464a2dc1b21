"""Data models for fridge inventory and shopping list records."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

logger = logging.getLogger(__name__)

EXPIRING_SOON_DAYS = 3

DEFAULT_STORAGE = "Refrigerator"


class FoodCategory(str, Enum):
    PRODUCE = "Produce"
    DAIRY = "Dairy"
    MEAT = "Meat"
    PANTRY = "Pantry"
    FROZEN = "Frozen"
    CONDIMENTS = "Condiments"
    BEVERAGES = "Beverages"
    LEFTOVERS = "Leftovers"
    OTHER = "Other"

    @classmethod
    def parse(cls, raw: str | None) -> FoodCategory:
        """Resolve a persisted category string, falling back to OTHER."""
        return _parse_enum(cls, raw, cls.OTHER)


class FoodUnit(str, Enum):
    GRAMS = "g"
    KILOGRAMS = "kg"
    PIECES = "pieces"
    BOTTLES = "bottles"
    CARTONS = "cartons"
    CANS = "cans"
    PACKAGES = "packages"

    @classmethod
    def parse(cls, raw: str | None) -> FoodUnit:
        """Resolve a persisted unit string, falling back to PIECES."""
        return _parse_enum(cls, raw, cls.PIECES)

    @property
    def is_weight(self) -> bool:
        return self in (FoodUnit.GRAMS, FoodUnit.KILOGRAMS)

    @property
    def is_count(self) -> bool:
        return not self.is_weight


class StorageLocation(str, Enum):
    REFRIGERATOR = "Refrigerator"
    FREEZER = "Freezer"
    PANTRY = "Pantry"
    COUNTER = "Counter"


class RemovalReason(str, Enum):
    CONSUMED = "consumed"
    WASTED = "wasted"

    @property
    def label(self) -> str:
        return "Used it up" if self is RemovalReason.CONSUMED else "Had to toss it"


def _parse_enum(enum_cls, raw, default):
    if raw is None:
        return default
    if isinstance(raw, enum_cls):
        return raw
    text = str(raw).strip()
    for member in enum_cls:
        if text == member.value:
            return member
    lowered = text.lower()
    for member in enum_cls:
        if lowered in (member.value.lower(), member.name.lower()):
            return member
    logger.debug("Unknown %s value %r, using %s", enum_cls.__name__, raw, default.value)
    return default


_DEFAULT_ZONES = {
    FoodCategory.PRODUCE: "Crisper Drawer",
    FoodCategory.DAIRY: "Middle Shelf",
    FoodCategory.MEAT: "Middle Shelf",
    FoodCategory.BEVERAGES: "Door Shelf",
    FoodCategory.FROZEN: "Freezer Top",
    FoodCategory.PANTRY: "Pantry",
    FoodCategory.LEFTOVERS: "Top Shelf",
    FoodCategory.CONDIMENTS: "Top Shelf",
}


def default_zone(category: FoodCategory | str | None) -> str:
    """Suggested shelf for a category when the user doesn't name one."""
    return _DEFAULT_ZONES.get(FoodCategory.parse(category), "Middle Shelf")


def to_naive_local(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def _now() -> datetime:
    return datetime.now()


def _new_id() -> str:
    return uuid.uuid4().hex


def _format_amount(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


@dataclass
class FoodItem:
    """A single inventory record. Active while ``date_removed`` is unset."""

    name: str
    expiration_date: datetime
    category: FoodCategory = FoodCategory.OTHER
    quantity: float = 1.0
    unit: FoodUnit = FoodUnit.PIECES
    date_added: datetime = field(default_factory=_now)
    zone_tag: str | None = None
    usage_type: str | None = None
    date_removed: datetime | None = None
    storage: str = DEFAULT_STORAGE
    id: str = field(default_factory=_new_id)

    @classmethod
    def create(
        cls,
        name: str,
        expiration_date: datetime,
        *,
        category: FoodCategory | str = FoodCategory.OTHER,
        quantity: float = 1.0,
        unit: FoodUnit | str = FoodUnit.PIECES,
        storage: str = DEFAULT_STORAGE,
        zone_tag: str | None = None,
        usage_type: str | None = None,
        now: datetime | None = None,
    ) -> FoodItem:
        """Create a new item with a fresh identity and ``date_added``."""
        return cls(
            name=name,
            expiration_date=to_naive_local(expiration_date),
            category=FoodCategory.parse(category),
            quantity=float(quantity),
            unit=FoodUnit.parse(unit),
            date_added=now or _now(),
            zone_tag=zone_tag,
            usage_type=usage_type,
            storage=storage,
        )

    # -- derived state -------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.date_removed is None

    def days_until_expiration(self, now: datetime | None = None) -> int:
        """Whole days until expiration, truncated toward zero."""
        delta = self.expiration_date - (now or _now())
        return int(delta / timedelta(days=1))

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expiration_date < (now or _now())

    def is_expiring_soon(self, now: datetime | None = None) -> bool:
        now = now or _now()
        return now <= self.expiration_date <= now + timedelta(days=EXPIRING_SOON_DAYS)

    def is_fresh(self, now: datetime | None = None) -> bool:
        now = now or _now()
        return self.expiration_date > now + timedelta(days=EXPIRING_SOON_DAYS)

    def expiration_status(self, now: datetime | None = None) -> str:
        now = now or _now()
        days = self.days_until_expiration(now)
        if self.is_expired(now):
            ago = max(abs(days), 1)
            return "Expired 1 day ago" if ago == 1 else f"Expired {ago} days ago"
        if days == 0:
            return "Expires today"
        if days == 1:
            return "Expires tomorrow"
        return f"Expires in {days} days"

    @property
    def formatted_quantity(self) -> str:
        return f"{_format_amount(self.quantity)} {self.unit.value}"

    # -- mutation ------------------------------------------------------------

    def update_quantity(self, delta: float) -> None:
        """Apply a quantity delta; the result never drops below zero."""
        self.quantity = max(0.0, self.quantity + delta)

    def mark_as_removed(
        self,
        now: datetime | None = None,
        reason: RemovalReason | None = None,
    ) -> None:
        self.date_removed = now or _now()
        if reason is not None:
            self.usage_type = RemovalReason(reason).value

    def restore(self) -> None:
        self.date_removed = None

    def matches(self, query: str) -> bool:
        q = query.lower()
        return (
            q in self.name.lower()
            or q in self.category.value.lower()
            or q in self.storage.lower()
            or (self.zone_tag is not None and q in self.zone_tag.lower())
        )

    def validate(self) -> list[str]:
        """Return a list of problems; empty when the record can be stored."""
        problems: list[str] = []
        if not self.name or not self.name.strip():
            problems.append("name must not be blank")
        if self.quantity < 0:
            problems.append("quantity must not be negative")
        return problems


@dataclass
class GroceryItem:
    """A shopping-list entry."""

    name: str
    category: FoodCategory = FoodCategory.OTHER
    is_purchased: bool = False
    date_added: datetime = field(default_factory=_now)
    id: str = field(default_factory=_new_id)

    @classmethod
    def create(
        cls,
        name: str,
        *,
        category: FoodCategory | str = FoodCategory.OTHER,
        is_purchased: bool = False,
        now: datetime | None = None,
    ) -> GroceryItem:
        return cls(
            name=name,
            category=FoodCategory.parse(category),
            is_purchased=is_purchased,
            date_added=now or _now(),
        )

    @property
    def status_text(self) -> str:
        return "Purchased" if self.is_purchased else "Need to buy"

    def days_since_added(self, now: datetime | None = None) -> int:
        return int(((now or _now()) - self.date_added) / timedelta(days=1))

    def added_date_text(self, now: datetime | None = None) -> str:
        days = self.days_since_added(now)
        if days == 0:
            return "Added today"
        if days == 1:
            return "Added yesterday"
        return f"Added {days} days ago"

    def toggle_purchased(self) -> None:
        self.is_purchased = not self.is_purchased

    def mark_as_purchased(self) -> None:
        self.is_purchased = True

    def mark_as_not_purchased(self) -> None:
        self.is_purchased = False

    def matches(self, query: str) -> bool:
        q = query.lower()
        return q in self.name.lower() or q in self.category.value.lower()

    def convert_to_food_item(
        self,
        expiration_date: datetime,
        *,
        quantity: float = 1.0,
        unit: FoodUnit | str = FoodUnit.PIECES,
        storage: str = DEFAULT_STORAGE,
        now: datetime | None = None,
    ) -> FoodItem:
        """Build an inventory item from this entry and mark it purchased."""
        item = FoodItem.create(
            self.name,
            expiration_date,
            category=self.category,
            quantity=quantity,
            unit=unit,
            storage=storage,
            now=now,
        )
        self.mark_as_purchased()
        return item
