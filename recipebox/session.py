import logging
import threading

from recipebox import config
from recipebox.favorites import toggle_favorite
from recipebox.mealdb import MealDBClient, fetch_recipes
from recipebox.planner import (
    DayGroup,
    WeeklyPlan,
    assign_slot,
    clear_plan,
    planned_recipe_ids,
    remove_slot,
    resolve_slots,
)
from recipebox.recipes import Recipe, filter_recipes, normalize_recipes
from recipebox.shopping_list import ShoppingListEntry, build_shopping_list
from recipebox.storage import PlanStore

logger = logging.getLogger(__name__)


class PlannerSession:
    """Owns the user's plan, favorites and the recipes fetched so far.

    Every mutation of the plan or the favorites is written to the store
    before the method returns. Mutations are serialized so concurrent
    requests sharing one session do not lose updates.
    """

    def __init__(self, client: MealDBClient | None = None, store: PlanStore | None = None):
        self.client = client or MealDBClient()
        self.store = store or PlanStore()
        self.plan: WeeklyPlan = self.store.get_plan()
        self.favorites: list[str] = self.store.get_favorites()
        self.recipes: dict[str, Recipe] = {}
        self._lock = threading.Lock()

    def _remember(self, recipes: list[Recipe]) -> list[Recipe]:
        for recipe in recipes:
            self.recipes[recipe.id] = recipe
        return recipes

    # -- catalog ------------------------------------------------------------

    def search(self, query: str) -> list[Recipe]:
        logger.debug("Searching recipes", extra={"query": query})
        return self._remember(normalize_recipes(self.client.search_by_name(query)))

    def browse(self, category: str = "", area: str = "", search: str = "") -> list[Recipe]:
        """List recipes for a category and/or cuisine.

        The filter endpoints only return summaries, so the first
        MAX_FILTER_DETAILS hits are looked up in full. With both filters
        set, the category hits are narrowed down to the requested area.
        A search term further narrows the hits to recipes whose name or
        ingredients contain it.
        """
        with self._lock:
            self.store.save_preferences({"last_category": category, "last_area": area})

        if category:
            summaries = self.client.filter_by_category(category)
        elif area:
            summaries = self.client.filter_by_area(area)
        else:
            return filter_recipes(self.search(""), search_term=search)

        ids = [str(s["idMeal"]) for s in summaries[:config.MAX_FILTER_DETAILS] if s.get("idMeal")]
        fetched = fetch_recipes(self.client, ids)
        recipes = [fetched[recipe_id] for recipe_id in ids if recipe_id in fetched]
        recipes = filter_recipes(recipes, area=area if category else None, search_term=search)

        logger.info(
            "Browsed recipes",
            extra={"category": category, "area": area, "search": search, "count": len(recipes)},
        )
        return self._remember(recipes)

    def random_recipe(self) -> Recipe | None:
        recipe = Recipe.from_meal(self.client.get_random())
        if recipe is not None:
            self._remember([recipe])
        return recipe

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            recipe = Recipe.from_meal(self.client.get_by_id(recipe_id))
            if recipe is not None:
                self._remember([recipe])
        return recipe

    def categories(self) -> list[str]:
        return [c["strCategory"] for c in self.client.list_categories() if c.get("strCategory")]

    def areas(self) -> list[str]:
        return [a["strArea"] for a in self.client.list_areas() if a.get("strArea")]

    def preferences(self) -> dict[str, str]:
        return self.store.get_preferences()

    def resolve(self, recipe_ids: list[str]) -> dict[str, Recipe]:
        """Make sure the given ids are in the recipe lookup, fetching the rest.

        Ids that fail to resolve are left out; callers treat them as empty.
        """
        missing = [recipe_id for recipe_id in recipe_ids if recipe_id not in self.recipes]
        if missing:
            self.recipes.update(fetch_recipes(self.client, missing))
        return self.recipes

    # -- meal plan ----------------------------------------------------------

    def load_plan(self) -> WeeklyPlan:
        with self._lock:
            self.plan = self.store.get_plan()
        self.resolve(planned_recipe_ids(self.plan))
        return self.plan

    def assign(self, day: str, meal_type: str, recipe_id: str) -> WeeklyPlan:
        with self._lock:
            assign_slot(self.plan, day, meal_type, recipe_id)
            self.store.save_plan(self.plan)
        logger.info("Meal assigned", extra={"day": day, "meal_type": meal_type, "recipe_id": recipe_id})
        return self.plan

    def remove(self, day: str, meal_type: str) -> WeeklyPlan:
        with self._lock:
            remove_slot(self.plan, day, meal_type)
            self.store.save_plan(self.plan)
        logger.info("Meal removed", extra={"day": day, "meal_type": meal_type})
        return self.plan

    def clear(self) -> WeeklyPlan:
        with self._lock:
            self.plan = clear_plan()
            self.store.save_plan(self.plan)
        logger.info("Meal plan cleared")
        return self.plan

    def slot_grid(self) -> list[DayGroup]:
        self.resolve(planned_recipe_ids(self.plan))
        return resolve_slots(self.plan, self.recipes)

    def shopping_list(self) -> dict[str, list[ShoppingListEntry]]:
        self.resolve(planned_recipe_ids(self.plan))
        return build_shopping_list(self.plan, self.recipes)

    # -- favorites ----------------------------------------------------------

    def toggle_favorite(self, recipe_id: str) -> bool:
        with self._lock:
            self.favorites, added = toggle_favorite(self.favorites, recipe_id)
            self.store.save_favorites(self.favorites)
        logger.info("Favorite toggled", extra={"recipe_id": recipe_id, "favorite": added})
        return added

    def favorite_recipes(self) -> list[Recipe]:
        self.resolve(self.favorites)
        return [self.recipes[recipe_id] for recipe_id in self.favorites if recipe_id in self.recipes]
