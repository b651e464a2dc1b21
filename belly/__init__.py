"""Household food inventory: expiration tracking, shopping list, recipe ideas."""

from .config import BellyConfig, load_config
from .db import GroceryDB, InventoryDB
from .inventory import FridgeFilter, InventorySummary
from .models import (
    FoodCategory,
    FoodItem,
    FoodUnit,
    GroceryItem,
    RemovalReason,
    StorageLocation,
)
from .recipes import Recipe, RecipeMatcher, match_recipes
from .vision import DetectedFood, VisionBackend, create_backend

__all__ = [
    "FoodItem",
    "FoodCategory",
    "FoodUnit",
    "GroceryItem",
    "RemovalReason",
    "StorageLocation",
    "FridgeFilter",
    "InventorySummary",
    "InventoryDB",
    "GroceryDB",
    "Recipe",
    "RecipeMatcher",
    "match_recipes",
    "DetectedFood",
    "VisionBackend",
    "create_backend",
    "BellyConfig",
    "load_config",
]
