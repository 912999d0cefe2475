def is_favorite(favorites: list[str], recipe_id: str) -> bool:
    return recipe_id in favorites


def toggle_favorite(favorites: list[str], recipe_id: str) -> tuple[list[str], bool]:
    """Add the recipe if absent, remove it if present.

    Returns the new list and whether the recipe is now a favorite. The input
    list is left untouched.
    """
    if recipe_id in favorites:
        return [f for f in favorites if f != recipe_id], False
    return favorites + [recipe_id], True
