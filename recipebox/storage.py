"""Durable key-value storage for the plan, favorites and preferences.

Each key is one JSON file under the store directory. Reads that find
nothing or cannot parse what they find fall back to the canonical default;
writes are atomic per key and never raise to the caller.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from recipebox import config
from recipebox.planner import WeeklyPlan, empty_plan, normalize_plan

logger = logging.getLogger(__name__)

PLAN_KEY = "mealPlan"
FAVORITES_KEY = "favorites"
PREFERENCES_KEY = "preferences"


def default_preferences() -> dict[str, str]:
    return {"last_category": "", "last_area": ""}


class JsonFileStore:
    """Synchronous get/set of JSON values, one file per key."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Any:
        """Return the stored value, or None if the key was never written.

        Raises:
            ValueError: If the stored file is not valid JSON
        """
        path = self._path(key)
        try:
            with open(path) as f:
                return json.load(f)
        except FileNotFoundError:
            return None

    def set(self, key: str, value: Any) -> None:
        """Write a value with an atomic replace of the key's file."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)

        temp_fd, temp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}_tmp_", suffix=".json")
        try:
            with os.fdopen(temp_fd, "w") as f:
                json.dump(value, f, indent=2)
            os.replace(temp_path, path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise


class PlanStore:
    """Plan, favorites and preferences on top of a JsonFileStore."""

    def __init__(self, store: JsonFileStore | None = None):
        self.store = store or JsonFileStore(config.STORE_DIR)

    def _read(self, key: str) -> Any:
        try:
            return self.store.get(key)
        except (OSError, ValueError):
            logger.warning("Unreadable stored value, using default", extra={"key": key}, exc_info=True)
            return None

    def _write(self, key: str, value: Any) -> None:
        try:
            self.store.set(key, value)
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to persist value", extra={"key": key})

    def get_plan(self) -> WeeklyPlan:
        raw = self._read(PLAN_KEY)
        if not isinstance(raw, dict):
            if raw is not None:
                logger.warning("Stored meal plan has wrong shape, resetting", extra={"key": PLAN_KEY})
            return empty_plan()
        return normalize_plan(raw)

    def save_plan(self, plan: WeeklyPlan) -> None:
        self._write(PLAN_KEY, plan)

    def get_favorites(self) -> list[str]:
        raw = self._read(FAVORITES_KEY)
        if not isinstance(raw, list):
            if raw is not None:
                logger.warning("Stored favorites have wrong shape, resetting", extra={"key": FAVORITES_KEY})
            return []
        return [str(recipe_id) for recipe_id in raw if recipe_id]

    def save_favorites(self, favorites: list[str]) -> None:
        self._write(FAVORITES_KEY, list(favorites))

    def get_preferences(self) -> dict[str, str]:
        raw = self._read(PREFERENCES_KEY)
        prefs = default_preferences()
        if isinstance(raw, dict):
            for key in prefs:
                value = raw.get(key)
                if isinstance(value, str):
                    prefs[key] = value
        return prefs

    def save_preferences(self, preferences: dict[str, str]) -> None:
        self._write(PREFERENCES_KEY, preferences)
