import logging
from dataclasses import dataclass
from typing import Any

from recipebox.config import DAYS_OF_WEEK, MEAL_TYPES
from recipebox.recipes import Recipe

logger = logging.getLogger(__name__)

# {day: {meal_type: recipe_id | None}} with every day and meal type present
WeeklyPlan = dict[str, dict[str, str | None]]


class InvalidSlotKey(ValueError):
    """Raised when a day or meal type is outside the fixed week grid."""
    pass


@dataclass
class SlotEntry:
    day: str
    meal_type: str
    recipe: Recipe | None

    @property
    def is_empty(self) -> bool:
        return self.recipe is None


@dataclass
class DayGroup:
    day: str
    slots: list[SlotEntry]


def empty_plan() -> WeeklyPlan:
    """Return a plan with all 21 cells present and unassigned."""
    return {day: {meal_type: None for meal_type in MEAL_TYPES} for day in DAYS_OF_WEEK}


def clear_plan() -> WeeklyPlan:
    return empty_plan()


def normalize_plan(raw: dict[str, Any]) -> WeeklyPlan:
    """Coerce a persisted plan into the full 7x3 shape.

    Missing days or slots become None and unknown keys are dropped, so a
    partially written or hand-edited plan still reads as a complete grid.
    """
    plan = empty_plan()
    for day in DAYS_OF_WEEK:
        day_meals = raw.get(day)
        if not isinstance(day_meals, dict):
            continue
        for meal_type in MEAL_TYPES:
            recipe_id = day_meals.get(meal_type)
            if isinstance(recipe_id, (str, int)) and not isinstance(recipe_id, bool) and str(recipe_id):
                plan[day][meal_type] = str(recipe_id)
    return plan


def _check_slot(day: str, meal_type: str) -> None:
    if day not in DAYS_OF_WEEK:
        raise InvalidSlotKey(f"Unknown day: {day!r}")
    if meal_type not in MEAL_TYPES:
        raise InvalidSlotKey(f"Unknown meal type: {meal_type!r}")


def assign_slot(plan: WeeklyPlan, day: str, meal_type: str, recipe_id: str) -> WeeklyPlan:
    """Put a recipe in a slot, replacing whatever was there.

    The plan is updated in place and returned; persisting it is up to the
    caller.

    Raises:
        InvalidSlotKey: If day or meal_type is not part of the week grid
    """
    _check_slot(day, meal_type)
    plan.setdefault(day, {})[meal_type] = recipe_id
    return plan


def remove_slot(plan: WeeklyPlan, day: str, meal_type: str) -> WeeklyPlan:
    """Empty a slot. Removing from an empty slot is a no-op."""
    _check_slot(day, meal_type)
    plan.setdefault(day, {})[meal_type] = None
    return plan


def iter_cells(plan: WeeklyPlan):
    """Yield (day, meal_type, recipe_id) for all 21 cells in grid order."""
    for day in DAYS_OF_WEEK:
        day_meals = plan.get(day) or {}
        for meal_type in MEAL_TYPES:
            yield day, meal_type, day_meals.get(meal_type)


def planned_recipe_ids(plan: WeeklyPlan) -> list[str]:
    """Distinct recipe ids referenced by the plan, in grid order."""
    ids: dict[str, None] = {}
    for _day, _meal_type, recipe_id in iter_cells(plan):
        if recipe_id:
            ids[recipe_id] = None
    return list(ids)


def resolve_slots(plan: WeeklyPlan, recipes_by_id: dict[str, Recipe]) -> list[DayGroup]:
    """Lay the plan out as 7 day groups of 3 slots each.

    Cells whose recipe id is missing from recipes_by_id (not fetched yet, or
    gone upstream) come back empty rather than raising.
    """
    groups: list[DayGroup] = []
    for day in DAYS_OF_WEEK:
        day_meals = plan.get(day) or {}
        slots = []
        for meal_type in MEAL_TYPES:
            recipe_id = day_meals.get(meal_type)
            recipe = recipes_by_id.get(recipe_id) if recipe_id else None
            slots.append(SlotEntry(day=day, meal_type=meal_type, recipe=recipe))
        groups.append(DayGroup(day=day, slots=slots))
    return groups
