"""Declarative recipe catalog loaded from TOML."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path

from . import Difficulty, MealCategory, Recipe, RecipeTemplate

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

_DEFAULT_CATALOG = "catalog.toml"


class CatalogError(ValueError):
    """Raised when a catalog file cannot be turned into templates."""


@dataclass
class RecipeCatalog:
    templates: list[RecipeTemplate] = field(default_factory=list)
    fallback: list[RecipeTemplate] = field(default_factory=list)

    def fallback_recipes(self) -> list[Recipe]:
        return [t.to_recipe() for t in self.fallback]


def load_catalog(path: str | Path | None = None) -> RecipeCatalog:
    """Load a recipe catalog.

    Without a path, the catalog bundled with the package is used.

    Raises:
        CatalogError: If the file is not valid TOML or an entry is malformed.
    """
    try:
        if path is None:
            raw_text = (
                resources.files(__package__)
                .joinpath(_DEFAULT_CATALOG)
                .read_text(encoding="utf-8")
            )
            source = _DEFAULT_CATALOG
        else:
            p = Path(path).expanduser()
            raw_text = p.read_text(encoding="utf-8")
            source = str(p)
        raw = tomllib.loads(raw_text)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise CatalogError(f"Cannot read recipe catalog {path!r}: {e}") from e

    catalog = RecipeCatalog(
        templates=[
            _parse_entry(entry, source, with_keywords=True)
            for entry in raw.get("templates", [])
        ],
        fallback=[
            _parse_entry(entry, source, with_keywords=False)
            for entry in raw.get("fallback", [])
        ],
    )
    logger.debug(
        "Loaded %d templates and %d fallback recipes from %s",
        len(catalog.templates),
        len(catalog.fallback),
        source,
    )
    return catalog


def _parse_entry(entry: dict, source: str, *, with_keywords: bool) -> RecipeTemplate:
    try:
        min_matches = int(entry.get("min_matches", 1)) if with_keywords else 0
        if min_matches < 0:
            raise ValueError("min_matches must not be negative")
        return RecipeTemplate(
            title=entry["title"],
            cooking_time=entry.get("cooking_time", ""),
            servings=int(entry.get("servings", 1)),
            ingredients=list(entry.get("ingredients", [])),
            instructions=list(entry.get("instructions", [])),
            difficulty=Difficulty(entry.get("difficulty", "Easy")),
            category=MealCategory(entry.get("category", "Other")),
            keywords=[k.lower() for k in entry.get("keywords", [])] if with_keywords else [],
            min_matches=min_matches,
        )
    except (KeyError, TypeError, ValueError) as e:
        title = entry.get("title", "?") if isinstance(entry, dict) else "?"
        raise CatalogError(
            f"Invalid recipe entry {title!r} in {source}: {e}"
        ) from e
