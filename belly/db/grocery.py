"""Shopping list storage."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from .. import grocery
from ..config import DEFAULT_DB_PATH
from ..models import DEFAULT_STORAGE, FoodCategory, FoodItem, FoodUnit, GroceryItem
from .schema import ensure_schema

if TYPE_CHECKING:
    from .inventory import InventoryDB

logger = logging.getLogger(__name__)


def _row_to_item(row: sqlite3.Row) -> GroceryItem:
    d = dict(row)
    return GroceryItem(
        id=d["id"],
        name=d["name"],
        category=FoodCategory.parse(d.get("category")),
        is_purchased=bool(d.get("is_purchased")),
        date_added=datetime.fromisoformat(d["date_added"]),
    )


class GroceryDB:
    """Manages the grocery_items table."""

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

    def __enter__(self) -> GroceryDB:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def add_item(self, item: GroceryItem) -> str:
        if not item.name or not item.name.strip():
            raise ValueError("Grocery item name must not be blank")
        conn = self._get_conn()
        conn.execute(
            """INSERT INTO grocery_items (id, name, category, is_purchased, date_added)
               VALUES (?, ?, ?, ?, ?)""",
            (
                item.id,
                item.name,
                item.category.value,
                int(item.is_purchased),
                item.date_added.isoformat(),
            ),
        )
        conn.commit()
        logger.info("Added grocery item: %s", item.name)
        return item.id

    def get_item(self, item_id: str) -> GroceryItem | None:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT * FROM grocery_items WHERE id = ?", (item_id,)
        ).fetchone()
        return _row_to_item(row) if row else None

    def _rows(self) -> list[GroceryItem]:
        conn = self._get_conn()
        return [_row_to_item(r) for r in conn.execute("SELECT * FROM grocery_items")]

    def all_items(self) -> list[GroceryItem]:
        return grocery.all_items(self._rows())

    def unpurchased(self) -> list[GroceryItem]:
        return grocery.unpurchased(self._rows())

    def purchased(self) -> list[GroceryItem]:
        return grocery.purchased(self._rows())

    def by_category(self, category: FoodCategory | str) -> list[GroceryItem]:
        return grocery.by_category(self._rows(), category)

    def recently_added(self, days: int = 7, now: datetime | None = None) -> list[GroceryItem]:
        return grocery.recently_added(self._rows(), days, now)

    def search(self, query: str) -> list[GroceryItem]:
        return grocery.search(self._rows(), query)

    def set_purchased(self, item_id: str, purchased: bool) -> GroceryItem | None:
        item = self.get_item(item_id)
        if item is None:
            return None
        item.is_purchased = purchased
        conn = self._get_conn()
        conn.execute(
            "UPDATE grocery_items SET is_purchased = ? WHERE id = ?",
            (int(purchased), item_id),
        )
        conn.commit()
        return item

    def toggle_purchased(self, item_id: str) -> GroceryItem | None:
        item = self.get_item(item_id)
        if item is None:
            return None
        return self.set_purchased(item_id, not item.is_purchased)

    def delete_item(self, item_id: str) -> None:
        conn = self._get_conn()
        conn.execute("DELETE FROM grocery_items WHERE id = ?", (item_id,))
        conn.commit()

    def clear_purchased(self) -> int:
        conn = self._get_conn()
        cur = conn.execute("DELETE FROM grocery_items WHERE is_purchased = 1")
        conn.commit()
        return cur.rowcount

    def move_to_inventory(
        self,
        item_id: str,
        inventory_db: InventoryDB,
        expiration_date: datetime,
        *,
        quantity: float = 1.0,
        unit: FoodUnit | str = FoodUnit.PIECES,
        storage: str = DEFAULT_STORAGE,
        now: datetime | None = None,
    ) -> FoodItem | None:
        """Turn a shopping-list entry into an inventory item and mark it bought."""
        entry = self.get_item(item_id)
        if entry is None:
            return None
        food = entry.convert_to_food_item(
            expiration_date,
            quantity=quantity,
            unit=unit,
            storage=storage,
            now=now,
        )
        inventory_db.add_item(food)
        self.set_purchased(item_id, True)
        logger.info("Moved %s from shopping list to inventory", entry.name)
        return food
