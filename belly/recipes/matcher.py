"""Keyword matching of available ingredients against the recipe catalog."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from ..models import EXPIRING_SOON_DAYS, FoodItem
from . import Recipe
from .catalog import RecipeCatalog, load_catalog

MAX_RESULTS = 5


def keyword_matches(keyword: str, ingredient: str) -> bool:
    """Bidirectional substring containment on already-lowercased strings.

    Deliberately loose so that "spinach" matches "organic spinach". It has
    no tokenization, so "pea" also matches "peach".
    """
    return keyword in ingredient or ingredient in keyword


class RecipeMatcher:
    """Rank catalog templates by keyword overlap with available ingredients."""

    def __init__(
        self,
        catalog: RecipeCatalog | None = None,
        max_results: int = MAX_RESULTS,
    ) -> None:
        self._catalog = catalog if catalog is not None else load_catalog()
        self._max_results = max_results

    @property
    def catalog(self) -> RecipeCatalog:
        return self._catalog

    def match(self, ingredients: Iterable[str]) -> list[Recipe]:
        """Return up to ``max_results`` recipes for the given ingredient names.

        Qualifying templates keep catalog order. When nothing qualifies the
        catalog's fallback recipes are returned instead, so the result is
        never empty for a catalog that has fallbacks. Blank names are ignored.
        """
        # Blank names would be a substring of every keyword.
        originals = [str(i) for i in ingredients if str(i).strip()]
        cleaned = [i.lower() for i in originals]

        recipes: list[Recipe] = []
        for template in self._catalog.templates:
            matched_keywords: list[str] = []
            used: list[str] = []
            for keyword in template.keywords:
                hit = False
                for original, available in zip(originals, cleaned):
                    if keyword_matches(keyword, available):
                        hit = True
                        if original not in used:
                            used.append(original)
                if hit:
                    matched_keywords.append(keyword)

            if len(matched_keywords) >= template.min_matches:
                used.sort(key=originals.index)
                recipes.append(template.to_recipe(used, matched_keywords))

        if not recipes:
            recipes = self._catalog.fallback_recipes()

        return recipes[: self._max_results]


def match_recipes(
    ingredients: Iterable[str],
    catalog: RecipeCatalog | None = None,
    max_results: int = MAX_RESULTS,
) -> list[Recipe]:
    """Convenience wrapper around :class:`RecipeMatcher`."""
    return RecipeMatcher(catalog, max_results).match(ingredients)


def suggest_for_inventory(
    items: Iterable[FoodItem],
    matcher: RecipeMatcher | None = None,
    *,
    only_expiring: bool = False,
    now: datetime | None = None,
    days: int = EXPIRING_SOON_DAYS,
) -> list[Recipe]:
    """Suggest recipes from the names of active (or expiring-soon) items.

    ``days`` is the expiring-soon window used when ``only_expiring`` is set.
    """
    from .. import inventory

    if only_expiring:
        selected = inventory.expiring_soon(items, now, days)
    else:
        selected = inventory.all_active_items(items)
    matcher = matcher or RecipeMatcher()
    return matcher.match(item.name for item in selected)
