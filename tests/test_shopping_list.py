import pytest

from recipebox.planner import empty_plan
from recipebox.shopping_list import (
    CATEGORIES,
    ShoppingListEntry,
    build_shopping_list,
    categorize_ingredient,
    format_shopping_list,
    total_entries,
)
from tests.conftest import create_test_recipe


@pytest.fixture
def planned():
    recipes = {
        "a": create_test_recipe("a", "Shakshuka", ingredients=[
            ("Tomato", "2"), ("Eggs", "4"), ("Cumin", "1 tsp"), ("Olive Oil", "2 tbsp"),
        ]),
        "b": create_test_recipe("b", "Tomato Rice", ingredients=[
            ("tomato", "1 cup"), ("Rice", "200g"), ("Salt", ""),
        ]),
        "c": create_test_recipe("c", "Quinoa Bowl", ingredients=[("Quinoa", "100g")]),
    }
    plan = empty_plan()
    plan["monday"]["breakfast"] = "a"
    plan["tuesday"]["lunch"] = "b"
    plan["sunday"]["dinner"] = "c"
    return plan, recipes


class TestCategorizeIngredient:
    @pytest.mark.parametrize("name,category", [
        ("Cherry Tomatoes", "Produce"),
        ("Chicken Breasts", "Meat & Seafood"),
        ("Double Cream", "Dairy"),
        ("Plain Flour", "Pantry"),
        ("Smoked Paprika", "Spices & Herbs"),
        ("Quinoa", "Other"),
        ("  BASIL ", "Spices & Herbs"),
    ])
    def test_categories(self, name, category):
        assert categorize_ingredient(name) == category

    def test_earlier_category_wins(self):
        # "pepper" is both Produce and Pantry
        assert categorize_ingredient("Black Pepper") == "Produce"
        # plain substring match: "eggplant" contains "egg"
        assert categorize_ingredient("Eggplant") == "Dairy"
        # "chicken stock" matches Meat & Seafood before Pantry
        assert categorize_ingredient("Chicken Stock") == "Meat & Seafood"


class TestBuildShoppingList:
    def test_empty_plan_gives_empty_categories(self):
        shopping_list = build_shopping_list(empty_plan(), {})

        assert list(shopping_list) == CATEGORIES
        assert all(items == [] for items in shopping_list.values())
        assert total_entries(shopping_list) == 0

    def test_unresolved_ids_give_empty_list(self):
        plan = empty_plan()
        plan["monday"]["dinner"] = "x"
        plan["friday"]["lunch"] = "y"

        shopping_list = build_shopping_list(plan, {})

        assert total_entries(shopping_list) == 0

    def test_same_ingredient_merged_across_recipes(self):
        recipes = {
            "a": create_test_recipe("a", "A", ingredients=[("Tomato", "2")]),
            "b": create_test_recipe("b", "B", ingredients=[("tomato", "1 cup")]),
        }
        plan = empty_plan()
        plan["monday"]["breakfast"] = "a"
        plan["tuesday"]["lunch"] = "b"

        shopping_list = build_shopping_list(plan, recipes)

        assert shopping_list["Produce"] == [ShoppingListEntry(name="Tomato", measures=["2", "1 cup"])]

    def test_case_and_whitespace_insensitive_key_first_casing_wins(self):
        recipes = {
            "a": create_test_recipe("a", "A", ingredients=[("Egg", "1")]),
            "b": create_test_recipe("b", "B", ingredients=[(" egg ", "2")]),
        }
        plan = empty_plan()
        # sunday is traversed after monday, so "Egg" is seen first
        plan["sunday"]["dinner"] = "b"
        plan["monday"]["lunch"] = "a"

        shopping_list = build_shopping_list(plan, recipes)

        assert shopping_list["Dairy"] == [ShoppingListEntry(name="Egg", measures=["1", "2"])]

    def test_duplicate_measures_are_kept(self):
        recipes = {
            "a": create_test_recipe("a", "A", ingredients=[("Milk", "1 cup")]),
            "b": create_test_recipe("b", "B", ingredients=[("Milk", "1 cup")]),
        }
        plan = empty_plan()
        plan["monday"]["breakfast"] = "a"
        plan["monday"]["lunch"] = "b"

        shopping_list = build_shopping_list(plan, recipes)

        assert shopping_list["Dairy"][0].measures == ["1 cup", "1 cup"]

    def test_same_recipe_twice_contributes_twice(self):
        recipes = {"a": create_test_recipe("a", "A", ingredients=[("Butter", "10g")])}
        plan = empty_plan()
        plan["monday"]["breakfast"] = "a"
        plan["tuesday"]["breakfast"] = "a"

        shopping_list = build_shopping_list(plan, recipes)

        assert shopping_list["Dairy"][0].measures == ["10g", "10g"]

    def test_empty_measure_not_appended(self, planned):
        plan, recipes = planned
        shopping_list = build_shopping_list(plan, recipes)

        salt = [e for e in shopping_list["Pantry"] if e.name == "Salt"][0]
        assert salt.measures == []

    def test_unmatched_ingredient_goes_to_other(self, planned):
        plan, recipes = planned
        shopping_list = build_shopping_list(plan, recipes)

        assert shopping_list["Other"] == [ShoppingListEntry(name="Quinoa", measures=["100g"])]

    def test_entries_keep_traversal_order(self, planned):
        plan, recipes = planned
        shopping_list = build_shopping_list(plan, recipes)

        assert [e.name for e in shopping_list["Pantry"]] == ["Olive Oil", "Rice", "Salt"]
        assert total_entries(shopping_list) == 7

    def test_build_is_deterministic(self, planned):
        plan, recipes = planned
        assert build_shopping_list(plan, recipes) == build_shopping_list(plan, recipes)


class TestFormatShoppingList:
    def test_format_skips_empty_categories(self, planned):
        plan, recipes = planned
        lines = format_shopping_list(build_shopping_list(plan, recipes))

        assert lines[0] == "Produce"
        assert "  [ ] Tomato (2, 1 cup)" in lines
        assert "  [ ] Salt" in lines
        assert "Meat & Seafood" not in lines

    def test_format_empty_list(self):
        assert format_shopping_list(build_shopping_list(empty_plan(), {})) == []
