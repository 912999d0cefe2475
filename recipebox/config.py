import os
import secrets

# TheMealDB public API (the "1" test key is free for development use)
MEALDB_BASE_URL = os.environ.get("MEALDB_BASE_URL", "https://www.themealdb.com/api/json/v1/1")
REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", 10))

# Upper bound on parallel lookups when resolving plan or favorite ids.
FETCH_WORKERS = int(os.environ.get("FETCH_WORKERS", 8))

# filter.php only returns id/name/thumb, so each hit needs a lookup.
# Only the first N hits are expanded into full recipes.
MAX_FILTER_DETAILS = 20

DEFAULT_SEARCH = os.environ.get("DEFAULT_SEARCH", "chicken")

# Directory holding mealPlan.json, favorites.json and preferences.json
STORE_DIR = os.environ.get("STORE_DIR", "data")

# Flask secret key — used for session signing and CSRF token generation.
# Set SECRET_KEY in the environment for production; a random key is
# generated on startup as a fallback (sessions won't survive restarts).
SECRET_KEY = os.environ.get("SECRET_KEY", secrets.token_hex(32))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

DAYS_OF_WEEK = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
MEAL_TYPES = ["breakfast", "lunch", "dinner"]
