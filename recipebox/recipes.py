from dataclasses import asdict, dataclass, field
from typing import Any

# TheMealDB spreads ingredients over numbered fields strIngredient1..20
MAX_INGREDIENT_FIELDS = 20

DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_AREA = "International"
DEFAULT_INSTRUCTIONS = "No instructions available"


@dataclass(frozen=True)
class Ingredient:
    name: str
    measure: str = ""


@dataclass(frozen=True)
class Recipe:
    id: str
    name: str
    image: str | None = None
    category: str = DEFAULT_CATEGORY
    area: str = DEFAULT_AREA
    instructions: str = DEFAULT_INSTRUCTIONS
    ingredients: tuple[Ingredient, ...] = field(default_factory=tuple)
    tags: tuple[str, ...] = field(default_factory=tuple)
    youtube: str | None = None

    @classmethod
    def from_meal(cls, meal: dict[str, Any] | None) -> "Recipe | None":
        """Build a Recipe from a raw TheMealDB meal record.

        Returns None when there is no record (e.g. lookup miss) or the
        record carries no id.
        """
        if not meal or not meal.get("idMeal"):
            return None

        return cls(
            id=str(meal["idMeal"]),
            name=meal.get("strMeal") or "",
            image=meal.get("strMealThumb"),
            category=meal.get("strCategory") or DEFAULT_CATEGORY,
            area=meal.get("strArea") or DEFAULT_AREA,
            instructions=meal.get("strInstructions") or DEFAULT_INSTRUCTIONS,
            ingredients=tuple(parse_ingredients(meal)),
            tags=tuple(parse_tags(meal.get("strTags"))),
            youtube=meal.get("strYoutube") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["ingredients"] = [asdict(i) for i in self.ingredients]
        data["tags"] = list(self.tags)
        return data


def parse_ingredients(meal: dict[str, Any]) -> list[Ingredient]:
    """Collect the numbered ingredient/measure pairs of a raw record.

    A pair is kept only when the ingredient name is a non-blank string;
    a measure that is not a string is treated as blank.
    """
    ingredients = []
    for i in range(1, MAX_INGREDIENT_FIELDS + 1):
        name = meal.get(f"strIngredient{i}")
        measure = meal.get(f"strMeasure{i}")
        if not isinstance(measure, str):
            measure = ""

        if isinstance(name, str) and name.strip():
            ingredients.append(Ingredient(
                name=name.strip(),
                measure=measure.strip(),
            ))
    return ingredients


def parse_tags(raw: str | None) -> list[str]:
    if not raw or not isinstance(raw, str):
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def normalize_recipes(meals: Any) -> list[Recipe]:
    if not isinstance(meals, list):
        return []
    recipes = (Recipe.from_meal(meal) for meal in meals)
    return [recipe for recipe in recipes if recipe is not None]


def filter_recipes(
    recipes: list[Recipe],
    category: str | None = None,
    area: str | None = None,
    search_term: str | None = None,
) -> list[Recipe]:
    """Filter already-loaded recipes locally.

    The search term matches the recipe name or any ingredient name,
    case-insensitively.
    """
    term = search_term.lower() if search_term else None
    filtered = []
    for recipe in recipes:
        if category and recipe.category != category:
            continue
        if area and recipe.area != area:
            continue
        if term:
            matches_name = term in recipe.name.lower()
            matches_ingredient = any(term in ing.name.lower() for ing in recipe.ingredients)
            if not matches_name and not matches_ingredient:
                continue
        filtered.append(recipe)
    return filtered
