#!/usr/bin/env python3
"""
Print the stored weekly meal plan and its shopping list.

Recipes referenced by the plan are looked up on TheMealDB; slots whose recipe
cannot be fetched are shown as empty.

Usage:
    python show_plan.py                   # Plan grid and shopping list
    python show_plan.py --shopping-only   # Shopping list only
    python show_plan.py --store-dir /tmp/recipebox
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path to import recipebox modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from recipebox import config
from recipebox.logging_config import configure_logging
from recipebox.session import PlannerSession
from recipebox.shopping_list import format_shopping_list, total_entries
from recipebox.storage import JsonFileStore, PlanStore


def print_plan(session):
    print("Weekly Plan")
    print("-" * 60)
    for group in session.slot_grid():
        print(group.day.capitalize())
        for slot in group.slots:
            name = slot.recipe.name if slot.recipe else "No meal planned"
            print(f"   {slot.meal_type:<10} {name}")
    print()


def print_shopping_list(session):
    shopping_list = session.shopping_list()
    if total_entries(shopping_list) == 0:
        print("Add meals to your plan first!")
        return

    print("Shopping List")
    print("-" * 60)
    for line in format_shopping_list(shopping_list):
        print(line)


def main():
    parser = argparse.ArgumentParser(description="Show the stored meal plan and shopping list")
    parser.add_argument("--store-dir", default=config.STORE_DIR, help="Directory holding the stored plan")
    parser.add_argument("--shopping-only", action="store_true", help="Skip the plan grid")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = parser.parse_args()

    configure_logging(args.log_level)
    session = PlannerSession(store=PlanStore(JsonFileStore(args.store_dir)))
    session.load_plan()

    if not args.shopping_only:
        print_plan(session)
    print_shopping_list(session)


if __name__ == "__main__":
    main()
