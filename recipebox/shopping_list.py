import logging
from dataclasses import dataclass, field

from recipebox.planner import WeeklyPlan, iter_cells
from recipebox.recipes import Recipe

logger = logging.getLogger(__name__)

OTHER_CATEGORY = "Other"

# Checked top to bottom; the first category with a keyword contained in the
# ingredient name wins. "pepper" is listed under both Produce and Pantry, so
# it always lands in Produce.
CATEGORY_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("Produce", (
        "tomato", "onion", "garlic", "potato", "carrot", "lettuce", "spinach",
        "pepper", "cucumber", "mushroom", "apple", "banana", "lemon", "lime",
        "orange", "avocado", "broccoli", "cauliflower", "celery", "corn", "peas",
        "beans", "cabbage", "zucchini",
    )),
    ("Meat & Seafood", (
        "chicken", "beef", "pork", "fish", "salmon", "tuna", "shrimp", "turkey",
        "lamb", "bacon", "sausage", "ham", "duck", "prawn", "crab", "lobster",
    )),
    ("Dairy", (
        "milk", "cheese", "butter", "cream", "yogurt", "egg", "parmesan",
        "mozzarella", "cheddar",
    )),
    ("Pantry", (
        "flour", "sugar", "salt", "pepper", "oil", "rice", "pasta", "bread",
        "sauce", "stock", "vinegar", "honey", "soy",
    )),
    ("Spices & Herbs", (
        "basil", "oregano", "thyme", "cumin", "paprika", "cinnamon", "ginger",
        "parsley", "rosemary", "bay", "chili", "curry", "turmeric", "coriander",
    )),
]

CATEGORIES = [name for name, _keywords in CATEGORY_RULES] + [OTHER_CATEGORY]


@dataclass
class ShoppingListEntry:
    name: str
    measures: list[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        if not self.measures:
            return self.name
        return f"{self.name} ({', '.join(self.measures)})"


def ingredient_key(name: str) -> str:
    return name.strip().lower()


def categorize_ingredient(name: str) -> str:
    key = ingredient_key(name)
    for category, keywords in CATEGORY_RULES:
        if any(keyword in key for keyword in keywords):
            return category
    return OTHER_CATEGORY


def _aggregate(plan: WeeklyPlan, recipes_by_id: dict[str, Recipe]) -> dict[str, ShoppingListEntry]:
    entries: dict[str, ShoppingListEntry] = {}
    for _day, _meal_type, recipe_id in iter_cells(plan):
        recipe = recipes_by_id.get(recipe_id) if recipe_id else None
        if recipe is None:
            continue
        for ingredient in recipe.ingredients:
            key = ingredient_key(ingredient.name)
            if key not in entries:
                # first-seen spelling is the one displayed
                entries[key] = ShoppingListEntry(name=ingredient.name)
            if ingredient.measure:
                entries[key].measures.append(ingredient.measure)
    return entries


def build_shopping_list(
    plan: WeeklyPlan,
    recipes_by_id: dict[str, Recipe],
) -> dict[str, list[ShoppingListEntry]]:
    """Build a categorized shopping list from the planned recipes.

    Ingredients are merged by case- and whitespace-insensitive name. Measures
    are collected in plan order and are not summed or deduplicated: two
    recipes each needing "1 cup" give ["1 cup", "1 cup"], one per recipe.

    Every category is present in the result, in display order, even when it
    has no entries. Unresolved recipe ids contribute nothing.
    """
    entries = _aggregate(plan, recipes_by_id)

    shopping_list: dict[str, list[ShoppingListEntry]] = {category: [] for category in CATEGORIES}
    for key, entry in entries.items():
        shopping_list[categorize_ingredient(key)].append(entry)

    logger.info(
        "Shopping list generated",
        extra={
            "item_count": len(entries),
            "category_count": sum(1 for items in shopping_list.values() if items),
        },
    )
    return shopping_list


def total_entries(shopping_list: dict[str, list[ShoppingListEntry]]) -> int:
    return sum(len(items) for items in shopping_list.values())


def format_shopping_list(shopping_list: dict[str, list[ShoppingListEntry]]) -> list[str]:
    """Render the list as plain text lines, skipping empty categories."""
    lines: list[str] = []
    for category, items in shopping_list.items():
        if not items:
            continue
        if lines:
            lines.append("")
        lines.append(category)
        lines.extend(f"  [ ] {entry.label}" for entry in items)
    return lines
