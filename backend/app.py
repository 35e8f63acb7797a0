from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import BadRequest
import logging
import os

from utils.geo_loader import load_geojson
from utils.graph_builder import build_road_graph
from roadmap import config
from roadmap.errors import EmptyGraph, NoRoute, NotFound
from roadmap.routing import compute_shortest_route, route_directions, shortest_path

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)

# Global road map holder
ROAD_MAP = None


def _float_arg(name):
    raw = request.args.get(name)
    if raw is None:
        raise BadRequest(description=f"missing parameter '{name}'")
    try:
        return float(raw)
    except ValueError:
        raise BadRequest(description=f"parameter '{name}' must be a number") from None


def _require_map():
    if ROAD_MAP is None:
        raise EmptyGraph()
    return ROAD_MAP


# ============================================================
# ERROR HANDLERS
# ============================================================
@app.errorhandler(BadRequest)
def handle_bad_request(e):
    return jsonify({"error": e.description}), 400


@app.errorhandler(NotFound)
@app.errorhandler(NoRoute)
def handle_not_found(e):
    return jsonify({"error": str(e)}), 404


@app.errorhandler(EmptyGraph)
def handle_empty_graph(e):
    return jsonify({"error": "Road graph not loaded or empty"}), 503


# ============================================================
# MAP LAYERS API
# ============================================================
@app.route("/api/v1/map/<layer>", methods=["GET"])
def get_map_layer(layer):
    valid_layers = {
        "roads": config.ROADS_FILE,
        "places": config.PLACES_FILE,
    }

    if layer not in valid_layers:
        return jsonify({"error": "Invalid layer name"}), 400

    file_path = os.path.join(config.DATA_DIR, valid_layers[layer])
    data = load_geojson(file_path)
    return jsonify(data)


# ============================================================
# GRAPH API
# ============================================================
@app.route("/api/v1/graph/load", methods=["GET", "POST"])
def load_graph():
    global ROAD_MAP

    places = config.places_path()
    if not os.path.exists(places):
        places = None

    try:
        ROAD_MAP = build_road_graph(config.roads_path(), places_path=places)
    except (OSError, ValueError, RuntimeError) as e:
        logger.exception("Road graph failed to load")
        return jsonify({"error": f"Road graph failed to load: {e}"}), 500

    return jsonify({"status": "loaded", **ROAD_MAP.stats()})


@app.route("/api/v1/graph/stats", methods=["GET"])
def graph_stats():
    return jsonify(_require_map().stats())


@app.route("/api/v1/closest", methods=["GET"])
def closest_vertex():
    road_map = _require_map()
    lon, lat = _float_arg("lon"), _float_arg("lat")
    vid = road_map.closest(lon, lat)
    return jsonify({
        "id": vid,
        "lon": road_map.lon(vid),
        "lat": road_map.lat(vid),
    })


# ============================================================
# ROUTING API
# ============================================================
@app.route("/api/v1/route", methods=["GET"])
def route():
    road_map = _require_map()
    start = (_float_arg("start_lon"), _float_arg("start_lat"))
    end = (_float_arg("end_lon"), _float_arg("end_lat"))

    start_v = road_map.closest(*start)
    end_v = road_map.closest(*end)
    path = shortest_path(road_map, start_v, end_v)

    return jsonify({
        "route": [[road_map.lon(v), road_map.lat(v)] for v in path],
        "directions": route_directions(road_map, path),
    })


@app.route("/api/v1/route/coords", methods=["GET"])
def route_coords():
    road_map = _require_map()
    start = (_float_arg("start_lon"), _float_arg("start_lat"))
    end = (_float_arg("end_lon"), _float_arg("end_lat"))
    coords = compute_shortest_route(road_map, start, end)
    return jsonify({"route": [list(c) for c in coords]})


# ============================================================
# LOCATION SEARCH API
# ============================================================
@app.route("/api/v1/search", methods=["GET"])
def search_locations():
    road_map = _require_map()
    name = request.args.get("name", "")
    return jsonify({"results": road_map.search(name)})


@app.route("/api/v1/autocomplete", methods=["GET"])
def autocomplete():
    road_map = _require_map()
    prefix = request.args.get("prefix", "")
    limit = request.args.get("limit", config.AUTOCOMPLETE_LIMIT)
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        raise BadRequest(description="parameter 'limit' must be an integer") from None
    return jsonify({"names": road_map.autocomplete(prefix, limit=limit)})


# ============================================================
# RUN SERVER
# ============================================================
if __name__ == "__main__":
    config.setup_logging()
    app.run(debug=True)
