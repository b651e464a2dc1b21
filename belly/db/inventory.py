"""Food inventory CRUD operations."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import fields
from datetime import datetime
from pathlib import Path
from typing import Iterable

from .. import inventory
from ..config import DEFAULT_DB_PATH
from ..models import FoodCategory, FoodItem, FoodUnit, RemovalReason, to_naive_local
from .schema import ensure_schema

logger = logging.getLogger(__name__)

_COLUMNS = [f.name for f in fields(FoodItem)]
_UPDATABLE = {
    "name",
    "category",
    "quantity",
    "unit",
    "expiration_date",
    "zone_tag",
    "usage_type",
    "storage",
}


def _encode_dt(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _decode_dt(value: str | None) -> datetime | None:
    return to_naive_local(datetime.fromisoformat(value)) if value else None


def item_to_row(item: FoodItem) -> dict:
    return {
        "id": item.id,
        "name": item.name,
        "category": item.category.value,
        "quantity": item.quantity,
        "unit": item.unit.value,
        "expiration_date": _encode_dt(item.expiration_date),
        "date_added": _encode_dt(item.date_added),
        "zone_tag": item.zone_tag,
        "usage_type": item.usage_type,
        "date_removed": _encode_dt(item.date_removed),
        "storage": item.storage,
    }


def row_to_item(row: sqlite3.Row | dict) -> FoodItem:
    """Decode a stored row. Unknown category/unit strings degrade to defaults."""
    d = dict(row)
    return FoodItem(
        id=d["id"],
        name=d["name"],
        category=FoodCategory.parse(d.get("category")),
        quantity=max(0.0, float(d.get("quantity") or 0.0)),
        unit=FoodUnit.parse(d.get("unit")),
        expiration_date=_decode_dt(d["expiration_date"]),
        date_added=_decode_dt(d["date_added"]),
        zone_tag=d.get("zone_tag"),
        usage_type=d.get("usage_type"),
        date_removed=_decode_dt(d.get("date_removed")),
        storage=d.get("storage") or "Refrigerator",
    )


class InventoryDB:
    """Manages the food_items table."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> InventoryDB:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # -- writes --------------------------------------------------------------

    def add_item(self, item: FoodItem) -> str:
        """Insert a new item.

        Returns:
            The item's ID.

        Raises:
            ValueError: If the item fails validation.
        """
        return self.add_items([item])[0]

    def add_items(self, items: Iterable[FoodItem]) -> list[str]:
        items = list(items)
        for item in items:
            problems = item.validate()
            if problems:
                raise ValueError(f"Invalid item {item.name!r}: {', '.join(problems)}")

        conn = self._get_conn()
        placeholders = ", ".join("?" for _ in _COLUMNS)
        conn.executemany(
            f"INSERT INTO food_items ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
            [tuple(item_to_row(i)[c] for c in _COLUMNS) for i in items],
        )
        conn.commit()
        logger.info("Added %d item(s) to inventory", len(items))
        return [i.id for i in items]

    def _save(self, item: FoodItem) -> None:
        row = item_to_row(item)
        assignments = ", ".join(f"{c} = ?" for c in _COLUMNS if c != "id")
        conn = self._get_conn()
        conn.execute(
            f"UPDATE food_items SET {assignments} WHERE id = ?",
            tuple(row[c] for c in _COLUMNS if c != "id") + (item.id,),
        )
        conn.commit()

    def update_item(self, item_id: str, **changes) -> FoodItem | None:
        """Apply field changes to an item. Returns None if it doesn't exist."""
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        item = self.get_item(item_id)
        if item is None:
            logger.warning("Item not found for update: %s", item_id)
            return None

        for key, value in changes.items():
            if key == "category":
                value = FoodCategory.parse(value)
            elif key == "unit":
                value = FoodUnit.parse(value)
            elif key == "quantity":
                value = float(value)
            elif key == "expiration_date":
                if isinstance(value, str):
                    value = datetime.fromisoformat(value)
                value = to_naive_local(value)
            setattr(item, key, value)

        problems = item.validate()
        if problems:
            raise ValueError(f"Invalid item {item.name!r}: {', '.join(problems)}")
        self._save(item)
        logger.info("Updated item: %s", item.name)
        return item

    def update_quantity(self, item_id: str, delta: float) -> FoodItem | None:
        """Adjust quantity by ``delta``, clamping at zero."""
        item = self.get_item(item_id)
        if item is None:
            return None
        item.update_quantity(delta)
        self._save(item)
        return item

    def remove_item(
        self,
        item_id: str,
        reason: RemovalReason | str = RemovalReason.CONSUMED,
        now: datetime | None = None,
    ) -> FoodItem | None:
        """Soft-delete an item, recording why it left the fridge."""
        item = self.get_item(item_id)
        if item is None:
            return None
        reason = RemovalReason(reason)
        item.mark_as_removed(now, reason)
        self._save(item)
        logger.info("Removed item: %s (reason: %s)", item.name, reason.label)
        return item

    def remove_items(
        self,
        item_ids: Iterable[str],
        reason: RemovalReason | str = RemovalReason.CONSUMED,
        now: datetime | None = None,
    ) -> int:
        count = 0
        for item_id in item_ids:
            if self.remove_item(item_id, reason, now) is not None:
                count += 1
        return count

    def restore_item(self, item_id: str) -> FoodItem | None:
        item = self.get_item(item_id)
        if item is None:
            return None
        item.restore()
        self._save(item)
        return item

    def delete_item(self, item_id: str) -> None:
        """Permanently delete an item by ID."""
        conn = self._get_conn()
        conn.execute("DELETE FROM food_items WHERE id = ?", (item_id,))
        conn.commit()

    def cleanup_expired(
        self, older_than_days: int = 7, now: datetime | None = None
    ) -> int:
        """Soft-delete items that expired more than ``older_than_days`` ago.

        Returns:
            Number of items removed.
        """
        stale = inventory.stale_expired(self.all_items(), older_than_days, now)
        count = self.remove_items(
            (i.id for i in stale), RemovalReason.WASTED, now
        )
        if count:
            logger.info("Cleaned up %d old expired item(s)", count)
        return count

    def clear(self) -> None:
        conn = self._get_conn()
        conn.execute("DELETE FROM food_items")
        conn.commit()
        logger.info("Cleared all inventory data")

    # -- reads ---------------------------------------------------------------

    def get_item(self, item_id: str) -> FoodItem | None:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT * FROM food_items WHERE id = ?", (item_id,)
        ).fetchone()
        return row_to_item(row) if row else None

    def all_items(self) -> list[FoodItem]:
        """Every stored record, including removed ones."""
        conn = self._get_conn()
        rows = conn.execute("SELECT * FROM food_items").fetchall()
        return [row_to_item(r) for r in rows]

    def active_items(self) -> list[FoodItem]:
        return inventory.all_active_items(self.all_items())

    def expiring_soon(self, now: datetime | None = None, days: int = 3) -> list[FoodItem]:
        return inventory.expiring_soon(self.all_items(), now, days)

    def expired(self, now: datetime | None = None) -> list[FoodItem]:
        return inventory.expired(self.all_items(), now)

    def fresh(self, now: datetime | None = None, days: int = 3) -> list[FoodItem]:
        return inventory.fresh(self.all_items(), now, days)

    def by_category(self, category: FoodCategory | str) -> list[FoodItem]:
        return inventory.by_category(self.all_items(), category)

    def by_storage(self, storage: str) -> list[FoodItem]:
        return inventory.by_storage(self.all_items(), storage)

    def search(self, query: str) -> list[FoodItem]:
        return inventory.search(self.all_items(), query)

    def summary(self, now: datetime | None = None, days: int = 3) -> inventory.InventorySummary:
        return inventory.summarize(self.all_items(), now, days)
