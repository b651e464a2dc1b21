"""Recipe data types and the rule-based recipe matcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class MealCategory(str, Enum):
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"
    DESSERT = "Dessert"
    SOUP = "Soup"
    SALAD = "Salad"
    OTHER = "Other"


@dataclass
class Recipe:
    title: str
    cooking_time: str  # free text, e.g. "15 min"
    servings: int
    ingredients: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    difficulty: Difficulty = Difficulty.EASY
    category: MealCategory = MealCategory.OTHER
    used_ingredients: list[str] = field(default_factory=list)  # caller's inputs that matched
    matched_keywords: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "cooking_time": self.cooking_time,
            "servings": self.servings,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "difficulty": self.difficulty.value,
            "category": self.category.value,
            "used_ingredients": list(self.used_ingredients),
            "matched_keywords": list(self.matched_keywords),
        }


@dataclass
class RecipeTemplate:
    """Catalog entry: display content plus the keywords used for matching."""

    title: str
    cooking_time: str
    servings: int
    ingredients: list[str]
    instructions: list[str]
    difficulty: Difficulty
    category: MealCategory
    keywords: list[str]
    min_matches: int = 1

    def to_recipe(
        self,
        used_ingredients: list[str] | None = None,
        matched_keywords: list[str] | None = None,
    ) -> Recipe:
        return Recipe(
            title=self.title,
            cooking_time=self.cooking_time,
            servings=self.servings,
            ingredients=list(self.ingredients),
            instructions=list(self.instructions),
            difficulty=self.difficulty,
            category=self.category,
            used_ingredients=list(used_ingredients or []),
            matched_keywords=list(matched_keywords or []),
        )


from .catalog import CatalogError, RecipeCatalog, load_catalog  # noqa: E402
from .matcher import (  # noqa: E402
    MAX_RESULTS,
    RecipeMatcher,
    keyword_matches,
    match_recipes,
    suggest_for_inventory,
)

__all__ = [
    "Difficulty",
    "MealCategory",
    "Recipe",
    "RecipeTemplate",
    "RecipeCatalog",
    "CatalogError",
    "load_catalog",
    "RecipeMatcher",
    "MAX_RESULTS",
    "keyword_matches",
    "match_recipes",
    "suggest_for_inventory",
]
