"""Tests for the keyword recipe matcher."""

from datetime import datetime, timedelta

import pytest

from belly.models import FoodItem
from belly.recipes import (
    Difficulty,
    MealCategory,
    RecipeCatalog,
    RecipeMatcher,
    RecipeTemplate,
    keyword_matches,
    load_catalog,
    match_recipes,
    suggest_for_inventory,
)

FALLBACK_TITLES = [
    "Quick Pasta Aglio e Olio",
    "Simple Avocado Toast",
    "Basic Vegetable Soup",
]


def _titles(recipes):
    return [r.title for r in recipes]


def _template(title: str, keywords: list[str], min_matches: int = 1) -> RecipeTemplate:
    return RecipeTemplate(
        title=title,
        cooking_time="10 min",
        servings=2,
        ingredients=[],
        instructions=[],
        difficulty=Difficulty.EASY,
        category=MealCategory.DINNER,
        keywords=keywords,
        min_matches=min_matches,
    )


class TestKeywordMatches:
    def test_keyword_inside_ingredient(self):
        assert keyword_matches("spinach", "organic spinach")

    def test_ingredient_inside_keyword(self):
        assert keyword_matches("strawberries", "berries")

    def test_loose_match_false_positive(self):
        # Substring matching has no word boundaries
        assert keyword_matches("pea", "peach")

    def test_no_match(self):
        assert not keyword_matches("salmon", "chicken breast")


class TestMatchRecipes:
    def test_chicken(self):
        titles = _titles(match_recipes(["chicken"]))
        assert "Simple Grilled Chicken" in titles
        assert "Pan-Seared Salmon" not in titles

    def test_empty_input_returns_fallbacks(self):
        assert _titles(match_recipes([])) == FALLBACK_TITLES

    def test_blank_input_returns_fallbacks(self):
        assert _titles(match_recipes(["", "   "])) == FALLBACK_TITLES

    def test_no_match_returns_fallbacks(self):
        recipes = match_recipes(["tofu"])
        assert _titles(recipes) == FALLBACK_TITLES
        assert all(r.used_ingredients == [] for r in recipes)

    def test_case_insensitive(self):
        recipes = match_recipes(["Organic SPINACH"])
        assert _titles(recipes) == ["Quick Vegetable Stir Fry", "Fresh Garden Salad"]

    def test_catalog_order_preserved(self):
        recipes = match_recipes(["leftover pizza", "chicken breast"])
        assert _titles(recipes) == ["Simple Grilled Chicken", "Leftover Fried Rice"]

    def test_capped_at_five(self):
        recipes = match_recipes(
            ["spinach", "chicken", "salmon", "cheese", "banana", "rice"]
        )
        assert len(recipes) == 5
        assert _titles(recipes) == [
            "Quick Vegetable Stir Fry",
            "Fresh Garden Salad",
            "Simple Grilled Chicken",
            "Pan-Seared Salmon",
            "Creamy Cheese Omelette",
        ]

    def test_used_ingredients_are_inputs(self):
        recipes = match_recipes(["Whole Milk", "Cheddar Cheese", "Bread"])
        omelette = recipes[0]
        assert omelette.title == "Creamy Cheese Omelette"
        assert omelette.used_ingredients == ["Whole Milk", "Cheddar Cheese"]
        assert omelette.matched_keywords == ["cheese", "milk"]

    def test_recipe_fields(self):
        salmon = match_recipes(["salmon"])[0]
        assert salmon.title == "Pan-Seared Salmon"
        assert salmon.cooking_time == "15 min"
        assert salmon.servings == 2
        assert salmon.difficulty is Difficulty.MEDIUM
        assert salmon.category is MealCategory.DINNER
        assert "2 salmon fillets" in salmon.ingredients
        assert len(salmon.instructions) == 6

    def test_idempotent(self):
        inputs = ["spinach", "milk"]
        first = [r.to_dict() for r in match_recipes(inputs)]
        second = [r.to_dict() for r in match_recipes(inputs)]
        assert first == second

    def test_does_not_mutate_input(self):
        inputs = ["Chicken"]
        match_recipes(inputs)
        assert inputs == ["Chicken"]


class TestRecipeMatcher:
    def test_min_matches_threshold(self):
        catalog = RecipeCatalog(
            templates=[
                _template("Needs two", ["egg", "flour"], min_matches=2),
                _template("Needs one", ["egg"]),
            ],
            fallback=[_template("Fallback", [], min_matches=0)],
        )
        matcher = RecipeMatcher(catalog)
        assert _titles(matcher.match(["eggs"])) == ["Needs one"]
        assert _titles(matcher.match(["eggs", "flour"])) == ["Needs two", "Needs one"]

    def test_zero_min_matches_always_qualifies(self):
        catalog = RecipeCatalog(templates=[_template("Anything", ["x"], min_matches=0)])
        assert _titles(RecipeMatcher(catalog).match([])) == ["Anything"]

    def test_custom_max_results(self):
        matcher = RecipeMatcher(load_catalog(), max_results=2)
        assert len(matcher.match(["spinach", "chicken", "salmon"])) == 2

    def test_default_catalog_loaded(self):
        matcher = RecipeMatcher()
        assert len(matcher.catalog.templates) == 7
        assert len(matcher.catalog.fallback) == 3


class TestSuggestForInventory:
    NOW = datetime(2025, 6, 1, 12, 0, 0)

    @pytest.fixture
    def items(self):
        now = self.NOW
        removed = FoodItem.create("Salmon", now + timedelta(days=1), now=now)
        removed.mark_as_removed(now)
        return [
            FoodItem.create("Chicken Breast", now + timedelta(days=1), now=now),
            FoodItem.create("Cheddar Cheese", now + timedelta(days=20), now=now),
            removed,
        ]

    def test_all_active(self, items):
        recipes = suggest_for_inventory(items, now=self.NOW)
        assert _titles(recipes) == ["Simple Grilled Chicken", "Creamy Cheese Omelette"]

    def test_only_expiring(self, items):
        recipes = suggest_for_inventory(items, only_expiring=True, now=self.NOW)
        assert _titles(recipes) == ["Simple Grilled Chicken"]
        assert recipes[0].used_ingredients == ["Chicken Breast"]

    def test_empty_inventory_falls_back(self):
        assert _titles(suggest_for_inventory([], now=self.NOW)) == FALLBACK_TITLES

    def test_custom_expiring_window(self):
        now = self.NOW
        items = [
            FoodItem.create("Chicken Breast", now + timedelta(days=1), now=now),
            FoodItem.create("Salmon Fillet", now + timedelta(days=5), now=now),
        ]
        default = suggest_for_inventory(items, only_expiring=True, now=now)
        wider = suggest_for_inventory(items, only_expiring=True, now=now, days=5)
        assert _titles(default) == ["Simple Grilled Chicken"]
        assert _titles(wider) == ["Simple Grilled Chicken", "Pan-Seared Salmon"]
