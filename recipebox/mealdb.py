"""Read-only client for the TheMealDB catalog.

Every call is fail-soft: transport and decoding errors are logged and turned
into an empty list (or None for single-record lookups), never raised.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Iterable

import requests

from recipebox import config
from recipebox.recipes import Recipe

logger = logging.getLogger(__name__)


class MealDBClient:
    """Client for the TheMealDB JSON API."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or config.MEALDB_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict[str, str] | None = None) -> dict[str, Any] | None:
        """GET an endpoint and decode its JSON body, or None on any failure."""
        try:
            response = self.session.get(
                f"{self.base_url}/{endpoint}",
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(
                "TheMealDB request failed",
                extra={"endpoint": endpoint, "params": params, "error": str(e)},
            )
            return None

        if not isinstance(data, dict):
            logger.warning("Unexpected TheMealDB payload", extra={"endpoint": endpoint})
            return None
        return data

    def _get_list(self, endpoint: str, params: dict[str, str] | None = None, key: str = "meals") -> list[dict]:
        data = self._get(endpoint, params)
        if data is None:
            return []
        # The API answers {"meals": null} when nothing matches
        items = data.get(key)
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)]

    def _get_one(self, endpoint: str, params: dict[str, str] | None = None) -> dict | None:
        meals = self._get_list(endpoint, params)
        return meals[0] if meals else None

    def search_by_name(self, query: str) -> list[dict]:
        return self._get_list("search.php", {"s": query})

    def get_by_id(self, recipe_id: str) -> dict | None:
        return self._get_one("lookup.php", {"i": recipe_id})

    def get_random(self) -> dict | None:
        return self._get_one("random.php")

    def filter_by_category(self, category: str) -> list[dict]:
        """Summary records (idMeal, strMeal, strMealThumb) for a category."""
        return self._get_list("filter.php", {"c": category})

    def filter_by_area(self, area: str) -> list[dict]:
        """Summary records (idMeal, strMeal, strMealThumb) for a cuisine."""
        return self._get_list("filter.php", {"a": area})

    def list_categories(self) -> list[dict]:
        return self._get_list("categories.php", key="categories")

    def list_areas(self) -> list[dict]:
        return self._get_list("list.php", {"a": "list"})


def fetch_recipes(
    client: MealDBClient,
    recipe_ids: Iterable[str],
    max_workers: int | None = None,
) -> dict[str, Recipe]:
    """Look up several recipes in parallel and return those that resolved.

    Lookups are independent; an id whose lookup fails or misses is simply
    absent from the result.
    """
    ids = list(dict.fromkeys(recipe_ids))
    if not ids:
        return {}

    workers = min(max_workers or config.FETCH_WORKERS, len(ids))
    resolved: dict[str, Recipe] = {}

    with ThreadPoolExecutor(max_workers=workers) as pool:
        future_to_id = {pool.submit(client.get_by_id, recipe_id): recipe_id for recipe_id in ids}
        for future in as_completed(future_to_id):
            recipe_id = future_to_id[future]
            try:
                recipe = Recipe.from_meal(future.result())
            except Exception:
                logger.exception("Recipe lookup failed", extra={"recipe_id": recipe_id})
                continue
            if recipe is not None:
                resolved[recipe_id] = recipe

    logger.debug(
        "Resolved recipes",
        extra={"requested": len(ids), "resolved": len(resolved)},
    )
    return resolved
