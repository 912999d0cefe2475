import logging

from flask import Flask, jsonify, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect, generate_csrf

from recipebox import config
from recipebox.favorites import is_favorite
from recipebox.logging_config import configure_logging
from recipebox.planner import DayGroup, InvalidSlotKey
from recipebox.session import PlannerSession
from recipebox.shopping_list import total_entries

configure_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SECRET_KEY"] = config.SECRET_KEY
csrf = CSRFProtect(app)
limiter = Limiter(
    get_remote_address,
    app=app,
    default_limits=[],          # no global limit; apply per-route only
    storage_uri="memory://",
)

# One session per process: the plan and favorites live in the store, the
# recipe lookup is an in-memory cache of everything fetched so far.
_session: PlannerSession | None = None


def get_session() -> PlannerSession:
    global _session
    if _session is None:
        _session = PlannerSession()
    return _session


@app.route("/api/csrf-token")
def csrf_token():
    """Token for the X-CSRFToken header on POST requests."""
    return jsonify({"csrf_token": generate_csrf()})


def _serialize_grid(groups: list[DayGroup]) -> list[dict]:
    return [
        {
            "day": group.day,
            "slots": [
                {
                    "day": slot.day,
                    "meal_type": slot.meal_type,
                    "recipe": slot.recipe.to_dict() if slot.recipe else None,
                }
                for slot in group.slots
            ],
        }
        for group in groups
    ]


def _slot_from_request(data: dict) -> tuple[str, str]:
    return str(data.get("day", "")).strip().lower(), str(data.get("meal_type", "")).strip().lower()


@app.route("/api/recipes")
@limiter.limit("60 per minute")
def api_recipes():
    """Search the catalog by name."""
    query = request.args.get("search", config.DEFAULT_SEARCH).strip()
    logger.debug("Searching recipes", extra={"query": query})
    recipes = get_session().search(query)
    return jsonify({"recipes": [r.to_dict() for r in recipes]})


@app.route("/api/recipes/browse")
@limiter.limit("30 per minute")
def browse_recipes():
    """List recipes by category and/or cuisine, optionally narrowed by a search term."""
    category = request.args.get("category", "").strip()
    area = request.args.get("area", "").strip()
    search = request.args.get("search", "").strip()
    recipes = get_session().browse(category=category, area=area, search=search)
    return jsonify({"recipes": [r.to_dict() for r in recipes]})


@app.route("/api/recipes/random")
@limiter.limit("60 per minute")
def random_recipe():
    recipe = get_session().random_recipe()
    return jsonify({"recipe": recipe.to_dict() if recipe else None})


@app.route("/api/recipes/<recipe_id>")
def get_recipe(recipe_id: str):
    """Fetch a single recipe with its favorite flag."""
    logger.debug("Fetching single recipe", extra={"recipe_id": recipe_id})
    session = get_session()
    recipe = session.get_recipe(recipe_id)

    if recipe is None:
        return jsonify({
            "error": "Recipe not found",
            "message": f"No recipe found with ID '{recipe_id}'"
        }), 404

    data = recipe.to_dict()
    data["is_favorite"] = is_favorite(session.favorites, recipe.id)
    return jsonify(data)


@app.route("/api/categories")
def list_categories():
    return jsonify({"categories": get_session().categories()})


@app.route("/api/areas")
def list_areas():
    return jsonify({"areas": get_session().areas()})


@app.route("/api/preferences")
def get_preferences():
    return jsonify(get_session().preferences())


@app.route("/api/favorites")
def list_favorites():
    recipes = get_session().favorite_recipes()
    return jsonify({"recipes": [r.to_dict() for r in recipes]})


@app.route("/favorites/toggle", methods=["POST"])
def toggle_favorite():
    """Add a recipe to favorites, or remove it if it is already there."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON"}), 400

    recipe_id = str(data.get("recipe_id", "")).strip()
    if not recipe_id:
        return jsonify({"error": "Missing required field: recipe_id"}), 400

    added = get_session().toggle_favorite(recipe_id)
    return jsonify({
        "success": True,
        "favorite": added,
        "message": "Added to favorites!" if added else "Removed from favorites",
    })


@app.route("/api/meal-plan")
def get_meal_plan():
    """Return the week grid with resolved recipes."""
    logger.debug("Fetching meal plan")
    groups = get_session().slot_grid()
    return jsonify({"days": _serialize_grid(groups)})


@app.route("/meal-plan/add-meal", methods=["POST"])
def add_meal_to_plan():
    """Assign a recipe to a day/meal slot."""
    logger.info("Adding meal to plan")
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON"}), 400

    for field in ("day", "meal_type", "recipe_id"):
        if not data.get(field):
            return jsonify({"error": f"Missing required field: {field}"}), 400

    day, meal_type = _slot_from_request(data)
    recipe_id = str(data["recipe_id"]).strip()

    try:
        get_session().assign(day, meal_type, recipe_id)
    except InvalidSlotKey as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "success": True,
        "message": f"Added to {day} {meal_type}!"
    })


@app.route("/meal-plan/remove-meal", methods=["POST"])
def remove_meal_from_plan():
    """Empty a day/meal slot."""
    logger.info("Removing meal from plan")
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON"}), 400

    day, meal_type = _slot_from_request(data)
    if not day or not meal_type:
        return jsonify({"error": "Missing day or meal_type"}), 400

    try:
        get_session().remove(day, meal_type)
    except InvalidSlotKey as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "success": True,
        "message": "Meal removed from plan"
    })


@app.route("/meal-plan/clear", methods=["POST"])
def clear_meal_plan():
    logger.info("Clearing meal plan")
    get_session().clear()
    return jsonify({
        "success": True,
        "message": "Meal plan cleared"
    })


@app.route("/api/shopping-list")
def get_shopping_list():
    """Categorized ingredients for every resolved meal in the plan."""
    shopping_list = get_session().shopping_list()
    total = total_entries(shopping_list)

    response = {
        "categories": [
            {
                "name": category,
                "items": [{"name": e.name, "measures": e.measures} for e in entries],
            }
            for category, entries in shopping_list.items()
            if entries
        ],
        "total_items": total,
    }
    if total == 0:
        response["message"] = "Add meals to your plan first!"
    return jsonify(response)


if __name__ == "__main__":
    import os
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_ENV") != "production"
    app.run(host="0.0.0.0", port=port, debug=debug)
