"""CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime, timedelta

from .config import BellyConfig, load_config
from .db import GroceryDB, InventoryDB
from .demo import DEMO_SETS, seed_inventory
from .inventory import FridgeFilter, apply_filter
from .models import (
    FoodCategory,
    FoodItem,
    FoodUnit,
    GroceryItem,
    RemovalReason,
    default_zone,
    to_naive_local,
)
from .recipes import Recipe, RecipeMatcher, load_catalog, suggest_for_inventory
from .vision import create_backend

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="belly",
        description="Track what's in your fridge, what's expiring, and what to cook",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to a TOML config file",
    )

    sub = parser.add_subparsers(dest="command")

    # list
    list_parser = sub.add_parser("list", help="List inventory items")
    list_parser.add_argument(
        "--filter",
        choices=[f.value for f in FridgeFilter],
        default=FridgeFilter.ALL.value,
    )
    list_parser.add_argument("--category", type=str, default=None)
    list_parser.add_argument("--storage", type=str, default=None)
    list_parser.add_argument("--search", type=str, default=None)
    list_parser.add_argument("--json", action="store_true", help="Output JSON")

    # add
    add_parser = sub.add_parser("add", help="Add an item to the inventory")
    add_parser.add_argument("name", type=str)
    add_parser.add_argument(
        "--category", type=str, default=FoodCategory.OTHER.value,
        choices=[c.value for c in FoodCategory],
    )
    add_parser.add_argument("--quantity", type=float, default=1.0)
    add_parser.add_argument(
        "--unit", type=str, default=FoodUnit.PIECES.value,
        choices=[u.value for u in FoodUnit],
    )
    expiry = add_parser.add_mutually_exclusive_group(required=True)
    expiry.add_argument("--expires", type=str, help="Expiration date (YYYY-MM-DD)")
    expiry.add_argument("--days", type=int, help="Days until expiration")
    add_parser.add_argument("--storage", type=str, default=None)
    add_parser.add_argument("--zone", type=str, default=None)

    # consume
    consume_parser = sub.add_parser("consume", help="Use up part of an item")
    consume_parser.add_argument("item_id", type=str)
    consume_parser.add_argument("amount", type=float)

    # remove / restore
    remove_parser = sub.add_parser("remove", help="Remove an item from the inventory")
    remove_parser.add_argument("item_id", type=str)
    remove_parser.add_argument(
        "--reason", choices=[r.value for r in RemovalReason],
        default=RemovalReason.CONSUMED.value,
    )
    restore_parser = sub.add_parser("restore", help="Restore a removed item")
    restore_parser.add_argument("item_id", type=str)

    # cleanup / summary
    cleanup_parser = sub.add_parser("cleanup", help="Remove long-expired items")
    cleanup_parser.add_argument("--days", type=int, default=None)
    sub.add_parser("summary", help="Show inventory counts")

    # grocery
    grocery_parser = sub.add_parser("grocery", help="Manage the shopping list")
    grocery_sub = grocery_parser.add_subparsers(dest="grocery_command")
    grocery_sub.add_parser("list", help="Show the shopping list")
    g_add = grocery_sub.add_parser("add", help="Add an entry")
    g_add.add_argument("name", type=str)
    g_add.add_argument(
        "--category", type=str, default=FoodCategory.OTHER.value,
        choices=[c.value for c in FoodCategory],
    )
    g_toggle = grocery_sub.add_parser("toggle", help="Toggle purchased")
    g_toggle.add_argument("item_id", type=str)
    g_remove = grocery_sub.add_parser("remove", help="Delete an entry")
    g_remove.add_argument("item_id", type=str)
    g_buy = grocery_sub.add_parser("buy", help="Move an entry into the inventory")
    g_buy.add_argument("item_id", type=str)
    g_buy.add_argument("--days", type=int, required=True, help="Days until expiration")
    g_buy.add_argument("--quantity", type=float, default=1.0)
    g_buy.add_argument(
        "--unit", type=str, default=FoodUnit.PIECES.value,
        choices=[u.value for u in FoodUnit],
    )
    g_buy.add_argument("--storage", type=str, default=None)

    # recipes
    recipes_parser = sub.add_parser("recipes", help="Suggest recipes")
    recipes_parser.add_argument("ingredients", nargs="*", help="Ingredient names")
    source = recipes_parser.add_mutually_exclusive_group()
    source.add_argument(
        "--from-inventory", action="store_true",
        help="Use all active inventory items",
    )
    source.add_argument(
        "--expiring", action="store_true",
        help="Use items that are expiring soon",
    )
    recipes_parser.add_argument("--json", action="store_true", help="Output JSON")

    # scan
    scan_parser = sub.add_parser("scan", help="Detect foods in photos")
    scan_parser.add_argument("--image", type=str, nargs="+", required=True)
    scan_parser.add_argument(
        "--add", action="store_true", help="Add detected foods to the inventory"
    )
    scan_parser.add_argument("--json", action="store_true", help="Output JSON")

    # demo
    demo_parser = sub.add_parser("demo", help="Load demo data")
    demo_parser.add_argument("--set", choices=DEMO_SETS, default="comprehensive", dest="kind")
    demo_parser.add_argument("--reset", action="store_true", help="Clear the inventory first")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config = load_config(args.config)
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        match args.command:
            case "list":
                _cmd_list(config, args)
            case "add":
                _cmd_add(config, args)
            case "consume":
                _cmd_consume(config, args)
            case "remove":
                _cmd_remove(config, args)
            case "restore":
                _cmd_restore(config, args)
            case "cleanup":
                _cmd_cleanup(config, args)
            case "summary":
                _cmd_summary(config)
            case "grocery":
                _cmd_grocery(config, args)
            case "recipes":
                _cmd_recipes(config, args)
            case "scan":
                asyncio.run(_cmd_scan(config, args))
            case "demo":
                _cmd_demo(config, args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _item_dict(item: FoodItem, now: datetime) -> dict:
    return {
        "id": item.id,
        "name": item.name,
        "category": item.category.value,
        "quantity": item.quantity,
        "unit": item.unit.value,
        "expiration_date": item.expiration_date.isoformat(),
        "storage": item.storage,
        "zone_tag": item.zone_tag,
        "status": item.expiration_status(now),
    }


def _print_items(items: list[FoodItem], now: datetime) -> None:
    if not items:
        print("No items.")
        return
    for item in items:
        print(
            f"  {item.id[:8]}  {item.name:<22} {item.formatted_quantity:<12} "
            f"{item.storage:<13} {item.expiration_status(now)}"
        )


def _cmd_list(config: BellyConfig, args) -> None:
    now = datetime.now()
    with InventoryDB(config.database.path) as db:
        all_items = db.all_items()

    items = apply_filter(
        all_items, args.filter, now, config.inventory.expiring_window_days
    )
    if args.category:
        category = FoodCategory.parse(args.category)
        items = [i for i in items if i.category is category]
    if args.storage:
        items = [i for i in items if i.storage == args.storage]
    if args.search:
        items = [i for i in items if i.matches(args.search)]

    if args.json:
        print(json.dumps([_item_dict(i, now) for i in items], ensure_ascii=False, indent=2))
    else:
        _print_items(items, now)


def _resolve_id(db, prefix: str) -> str:
    """Allow the short IDs printed by ``list``."""
    matches = [i.id for i in db.all_items() if i.id.startswith(prefix)]
    if len(matches) != 1:
        raise ValueError(f"No unique item matches ID {prefix!r}")
    return matches[0]


def _cmd_add(config: BellyConfig, args) -> None:
    now = datetime.now()
    if args.expires:
        # Offsets are converted to local time
        expiration = to_naive_local(datetime.fromisoformat(args.expires))
    else:
        expiration = now + timedelta(days=args.days)
    item = FoodItem.create(
        args.name,
        expiration,
        category=args.category,
        quantity=args.quantity,
        unit=args.unit,
        storage=args.storage or config.inventory.default_storage,
        zone_tag=args.zone or default_zone(args.category),
        now=now,
    )
    with InventoryDB(config.database.path) as db:
        db.add_item(item)
    print(f"Added {item.name} ({item.id[:8]}), {item.expiration_status(now).lower()}")


def _cmd_consume(config: BellyConfig, args) -> None:
    with InventoryDB(config.database.path) as db:
        item = db.update_quantity(_resolve_id(db, args.item_id), -args.amount)
    print(f"{item.name}: {item.formatted_quantity} left")


def _cmd_remove(config: BellyConfig, args) -> None:
    with InventoryDB(config.database.path) as db:
        item = db.remove_item(_resolve_id(db, args.item_id), args.reason)
    print(f"Removed {item.name} ({RemovalReason(args.reason).label})")


def _cmd_restore(config: BellyConfig, args) -> None:
    with InventoryDB(config.database.path) as db:
        item = db.restore_item(_resolve_id(db, args.item_id))
    print(f"Restored {item.name}")


def _cmd_cleanup(config: BellyConfig, args) -> None:
    days = args.days if args.days is not None else config.inventory.cleanup_after_days
    with InventoryDB(config.database.path) as db:
        count = db.cleanup_expired(days)
    print(f"Cleaned up {count} expired item(s)")


def _cmd_summary(config: BellyConfig) -> None:
    with InventoryDB(config.database.path) as db:
        s = db.summary(days=config.inventory.expiring_window_days)
    print(f"Total:    {s.total}")
    print(f"Expiring: {s.expiring}")
    print(f"Expired:  {s.expired}")
    print(f"Fresh:    {s.fresh}")


def _cmd_grocery(config: BellyConfig, args) -> None:
    with GroceryDB(config.database.path) as gdb:
        match args.grocery_command:
            case "add":
                item = GroceryItem.create(args.name, category=args.category)
                gdb.add_item(item)
                print(f"Added {item.name} to the shopping list")
            case "toggle":
                item = gdb.toggle_purchased(_resolve_id(gdb, args.item_id))
                print(f"{item.name}: {item.status_text}")
            case "remove":
                gdb.delete_item(_resolve_id(gdb, args.item_id))
                print("Deleted")
            case "buy":
                storage = args.storage or config.inventory.default_storage
                with InventoryDB(config.database.path) as db:
                    food = gdb.move_to_inventory(
                        _resolve_id(gdb, args.item_id),
                        db,
                        datetime.now() + timedelta(days=args.days),
                        quantity=args.quantity,
                        unit=args.unit,
                        storage=storage,
                    )
                print(f"Moved {food.name} to {food.storage}")
            case _:
                items = gdb.all_items()
                if not items:
                    print("The shopping list is empty.")
                for item in items:
                    mark = "x" if item.is_purchased else " "
                    print(f"  [{mark}] {item.id[:8]}  {item.name:<22} {item.category.value}")


def _make_matcher(config: BellyConfig) -> RecipeMatcher:
    catalog = load_catalog(config.recipes.catalog_path or None)
    return RecipeMatcher(catalog, max_results=config.recipes.max_results)


def _print_recipes(recipes: list[Recipe]) -> None:
    for recipe in recipes:
        print(f"{'─' * 50}")
        print(f"{recipe.title}  ({recipe.category.value}, {recipe.difficulty.value})")
        print(f"  {recipe.cooking_time}, serves {recipe.servings}")
        if recipe.used_ingredients:
            print(f"  Uses: {', '.join(recipe.used_ingredients)}")
        print()
        for line in recipe.ingredients:
            print(f"  - {line}")
        print()
        for j, step in enumerate(recipe.instructions, 1):
            print(f"  {j}. {step}")
        print()


def _cmd_recipes(config: BellyConfig, args) -> None:
    matcher = _make_matcher(config)
    if args.from_inventory or args.expiring:
        with InventoryDB(config.database.path) as db:
            items = db.all_items()
        recipes = suggest_for_inventory(
            items,
            matcher,
            only_expiring=args.expiring,
            days=config.inventory.expiring_window_days,
        )
    else:
        recipes = matcher.match(args.ingredients)

    if args.json:
        print(json.dumps([r.to_dict() for r in recipes], ensure_ascii=False, indent=2))
    else:
        _print_recipes(recipes)


async def _cmd_scan(config: BellyConfig, args) -> None:
    backend = create_backend(config)
    if not args.json:
        print("Detecting foods...")
    try:
        detected = await backend.detect_foods(args.image)
    except Exception:
        logger.exception("Food detection failed")
        print("Food detection failed.", file=sys.stderr)
        sys.exit(1)

    reliable = [d for d in detected if d.confidence >= config.vision.min_confidence]

    if args.json:
        data = [
            {
                "name": d.name,
                "category": d.category,
                "shelf_life_days": d.shelf_life_days,
                "confidence": d.confidence,
                "storage": d.storage,
            }
            for d in reliable
        ]
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        if not reliable:
            print("No foods detected.")
            return
        print(f"\nDetected {len(reliable)} item(s):")
        for d in sorted(reliable, key=lambda x: x.confidence, reverse=True):
            print(
                f"  {d.name:<22} {d.confidence:.0%} ({d.confidence_label})  "
                f"[{d.category}] ~{d.shelf_life_days} days"
            )

    if args.add and reliable:
        now = datetime.now()
        with InventoryDB(config.database.path) as db:
            ids = db.add_items([d.to_food_item(now) for d in reliable])
        print(f"Added {len(ids)} item(s) to the inventory")


def _cmd_demo(config: BellyConfig, args) -> None:
    with InventoryDB(config.database.path) as db:
        ids = seed_inventory(db, args.kind, reset=args.reset)
    print(f"Loaded {len(ids)} demo item(s)")
