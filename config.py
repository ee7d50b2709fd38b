"""
Configuration for the gear ranking engine.
All values can be overridden via environment variables (or a .env file).
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# ============================================================================
# Outfit Selection
# ============================================================================
# Categories an outfit must cover when the buyer doesn't list items_needed
DEFAULT_ITEMS_NEEDED = [
    c.strip()
    for c in os.environ.get("DEFAULT_ITEMS_NEEDED", "jacket,pants,base_layer,gloves,goggles").split(",")
    if c.strip()
]

# greedy (single pass, category order) or backtracking (searches top-k per category)
OUTFIT_STRATEGY = os.environ.get("OUTFIT_STRATEGY", "greedy").lower()
OUTFIT_SEARCH_TOP_K = int(os.environ.get("OUTFIT_SEARCH_TOP_K", "5"))
# Above this many categories the backtracking search hands over to greedy
OUTFIT_SEARCH_MAX_CATEGORIES = int(os.environ.get("OUTFIT_SEARCH_MAX_CATEGORIES", "8"))

# ============================================================================
# Scoring
# ============================================================================
# Priority weight sets sum to 1.05/0.95; set true to scale them back to 1.0
RENORMALIZE_PRIORITY_WEIGHTS = os.environ.get("RENORMALIZE_PRIORITY_WEIGHTS", "false").lower() == "true"

# ============================================================================
# Logging
# ============================================================================
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
