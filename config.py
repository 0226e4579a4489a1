import os

# --- REMOTE CATALOG ---
SPELLS_API_URL = os.getenv("SPELLS_API_URL", "https://www.dnd5eapi.co/api/spells")
REQUEST_TIMEOUT = float(os.getenv("SPELLS_REQUEST_TIMEOUT", "10"))
USER_AGENT = "Mozilla/5.0 (compatible; SpellFavorites/1.0)"

# --- LOCAL STORAGE ---
FAVORITES_KEY = "favorites"
FAVORITES_FILE = os.getenv("SPELLS_FAVORITES_FILE", "favorites.json")

# --- DISPLAY ---
PAGE_TITLE = "D&D Spells"
DESCRIPTION_PREVIEW_CHARS = 200

# --- LOGGING ---
LOG_LEVEL = os.getenv("SPELLS_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
