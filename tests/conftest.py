"""Pytest configuration and fixtures."""

import pytest

from recipebox.recipes import Ingredient, Recipe
from recipebox.storage import JsonFileStore, PlanStore


def create_test_recipe(
    recipe_id: str,
    name: str,
    ingredients: list | None = None,
    category: str = "Miscellaneous",
    area: str = "British",
    tags: list | None = None,
) -> Recipe:
    """Helper to create a Recipe from (name, measure) pairs."""
    return Recipe(
        id=recipe_id,
        name=name,
        image=f"https://www.themealdb.com/images/media/meals/{recipe_id}.jpg",
        category=category,
        area=area,
        instructions="Cook it.",
        ingredients=tuple(Ingredient(name=n, measure=m) for n, m in (ingredients or [])),
        tags=tuple(tags or []),
    )


def create_test_meal(
    meal_id: str,
    name: str,
    ingredients: list | None = None,
    category: str | None = "Miscellaneous",
    area: str | None = "British",
    tags: str | None = None,
) -> dict:
    """Helper to create a raw TheMealDB record."""
    meal = {
        "idMeal": meal_id,
        "strMeal": name,
        "strMealThumb": f"https://www.themealdb.com/images/media/meals/{meal_id}.jpg",
        "strCategory": category,
        "strArea": area,
        "strInstructions": "Cook it.",
        "strTags": tags,
        "strYoutube": "",
    }
    for i in range(1, 21):
        meal[f"strIngredient{i}"] = ""
        meal[f"strMeasure{i}"] = ""
    for i, (ingredient, measure) in enumerate(ingredients or [], start=1):
        meal[f"strIngredient{i}"] = ingredient
        meal[f"strMeasure{i}"] = measure
    return meal


class FakeMealDB:
    """In-memory stand-in for MealDBClient."""

    def __init__(self, meals: list[dict] | None = None, failing_ids: set | None = None):
        self.meals = {m["idMeal"]: m for m in (meals or [])}
        self.failing_ids = failing_ids or set()
        self.lookups: list[str] = []
        self.categories = [{"strCategory": "Beef"}, {"strCategory": "Dessert"}]
        self.areas = [{"strArea": "British"}, {"strArea": "Italian"}]

    def search_by_name(self, query):
        return [m for m in self.meals.values() if query.lower() in m["strMeal"].lower()]

    def get_by_id(self, recipe_id):
        self.lookups.append(recipe_id)
        if recipe_id in self.failing_ids:
            raise RuntimeError(f"lookup failed for {recipe_id}")
        return self.meals.get(recipe_id)

    def get_random(self):
        return next(iter(self.meals.values()), None)

    def filter_by_category(self, category):
        return [
            {"idMeal": m["idMeal"], "strMeal": m["strMeal"]}
            for m in self.meals.values() if m["strCategory"] == category
        ]

    def filter_by_area(self, area):
        return [
            {"idMeal": m["idMeal"], "strMeal": m["strMeal"]}
            for m in self.meals.values() if m["strArea"] == area
        ]

    def list_categories(self):
        return self.categories

    def list_areas(self):
        return self.areas


@pytest.fixture
def plan_store(tmp_path):
    return PlanStore(JsonFileStore(tmp_path / "store"))


@pytest.fixture
def sample_meals():
    return [
        create_test_meal(
            "52772", "Teriyaki Chicken Casserole",
            ingredients=[("soy sauce", "3/4 cup"), ("Chicken Breasts", "2"), ("Garlic", "1 clove")],
            category="Chicken", area="Japanese", tags="Meat,Casserole",
        ),
        create_test_meal(
            "52959", "Baked salmon with fennel & tomatoes",
            ingredients=[("Fennel", "2 medium"), ("Salmon", "2 fillets"), ("Cherry Tomatoes", "175g")],
            category="Seafood", area="British",
        ),
        create_test_meal(
            "52819", "Cajun spiced fish tacos",
            ingredients=[("Cajun", "2 tsp"), ("garlic", "2 cloves"), ("Tortillas", "8")],
            category="Seafood", area="Mexican",
        ),
    ]
