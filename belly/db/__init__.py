"""SQLite storage for inventory and shopping list records."""

from .grocery import GroceryDB
from .inventory import InventoryDB
from .schema import ensure_schema

__all__ = [
    "InventoryDB",
    "GroceryDB",
    "ensure_schema",
]
