"""
Configuration for the YADA diet tracker.

Toggle between PRODUCTION and DEVELOPMENT mode.
"""
from pathlib import Path

# ==================== MODE SELECTION ====================
# Change this to switch between production and development data
MODE = "PRODUCTION"  # Options: "PRODUCTION" or "DEVELOPMENT"
# ========================================================

# Base paths
PROJECT_ROOT = Path(__file__).parent
PRODUCTION_DATA_PATH = Path.home() / ".yada"
DEVELOPMENT_DATA_PATH = PROJECT_ROOT / "data"

# Select data path based on mode
if MODE == "PRODUCTION":
    DATA_PATH = PRODUCTION_DATA_PATH
elif MODE == "DEVELOPMENT":
    DATA_PATH = DEVELOPMENT_DATA_PATH
else:
    raise ValueError(f"Invalid MODE: {MODE}. Must be 'PRODUCTION' or 'DEVELOPMENT'")

# File paths
FOODS_FILE = DATA_PATH / "foods.txt"
LOGS_FILE = DATA_PATH / "logs.txt"
PROFILE_FILE = DATA_PATH / "profile.txt"

# Personal 'explain' notes (override the shipped topics)
PERSONAL_DOCS_DIR = DATA_PATH / "docs"

# Chart output
CHART_OUTPUT_FILE = DATA_PATH / "diet_trend.png"
DEFAULT_CHART_DAYS = 30

# Application settings
UNDO_HISTORY_SIZE = 20
DEFAULT_CALCULATION_METHOD = "harris_benedict"
SEED_STARTER_FOODS = True  # only when the food store is empty
DATE_FORMAT = "%Y-%m-%d"


def ensure_data_path():
    """Create the data directory if needed. Missing store files are fine."""
    DATA_PATH.mkdir(parents=True, exist_ok=True)
    return DATA_PATH


if __name__ == "__main__":
    # Show configuration
    print(f"\nMode: {MODE}")
    print(f"Data Path: {DATA_PATH}")
    print(f"Foods File: {FOODS_FILE}")
    print(f"Logs File: {LOGS_FILE}")
    print(f"Profile File: {PROFILE_FILE}")
