import json
import logging

logger = logging.getLogger(__name__)


def load_geojson(path):
    """Load and return GeoJSON file content."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not load %s: %s", path, e)
        return {"error": str(e)}
