# backend/roadmap/config.py
"""Road map configuration loaded from environment variables."""

import logging
import os
import sys

# -----------------------------------------
# DATA FILES
# -----------------------------------------
DATA_DIR = os.environ.get("ROADMAP_DATA_DIR", "data")
ROADS_FILE = os.environ.get("ROADMAP_ROADS_FILE", "roads.geojson")
PLACES_FILE = os.environ.get("ROADMAP_PLACES_FILE", "places.geojson")

# -----------------------------------------
# QUERY SETTINGS
# -----------------------------------------
AUTOCOMPLETE_LIMIT = int(os.environ.get("ROADMAP_AUTOCOMPLETE_LIMIT", "10"))

# -----------------------------------------
# LOGGING
# -----------------------------------------
LOG_LEVEL = os.environ.get("ROADMAP_LOG_LEVEL", "INFO")

# -----------------------------------------
# CONSTANTS
# -----------------------------------------
EARTH_RADIUS_MILES = 3963
UNKNOWN_ROAD = "unknown road"


def roads_path():
    return os.path.join(DATA_DIR, ROADS_FILE)


def places_path():
    return os.path.join(DATA_DIR, PLACES_FILE)


def setup_logging(level=None):
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        root.addHandler(handler)
    root.setLevel(level or LOG_LEVEL)
    return root
