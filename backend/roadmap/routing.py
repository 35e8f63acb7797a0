# backend/roadmap/routing.py
"""
Shortest paths over a built RoadMap.

A* via networkx with great-circle distance as both edge weight and
heuristic. Searches keep their state inside networkx, so repeated searches
on the same map do not see each other's priorities.
"""

import logging

import networkx as nx

from .config import UNKNOWN_ROAD
from .errors import NoRoute

logger = logging.getLogger(__name__)


def shortest_path(road_map, start, goal):
    """
    Vertex ids from start to goal, both included.
    Raises NotFound for an unknown endpoint and NoRoute if goal is unreachable.
    """
    graph = road_map.graph
    graph.vertex(start)
    graph.vertex(goal)

    try:
        path = nx.astar_path(
            road_map.nx_graph(),
            start,
            goal,
            heuristic=road_map.distance,
            weight="weight",
        )
    except nx.NetworkXNoPath:
        raise NoRoute(start, goal) from None

    logger.debug("Route %r -> %r: %d vertices", start, goal, len(path))
    return path


def compute_shortest_route(road_map, start, end):
    """
    Convert (lon, lat) -> nearest graph vertices -> run shortest path.
    Returns a list of (lon, lat) coordinates along the route.
    """
    start_v = road_map.closest(*start)
    end_v = road_map.closest(*end)
    path = shortest_path(road_map, start_v, end_v)
    return [(road_map.lon(v), road_map.lat(v)) for v in path]


def _shared_way_name(road_map, v, w):
    shared = road_map.ways_of(v) & road_map.ways_of(w)
    if not shared:
        return UNKNOWN_ROAD
    return road_map.way_name(min(shared, key=str))


def route_directions(road_map, path):
    """
    Collapse a vertex path into one leg per street:
    [{"way": name, "distance": miles, "bearing": degrees}, ...]
    bearing is the initial bearing of the leg's first segment.
    """
    legs = []
    for v, w in zip(path, path[1:]):
        name = _shared_way_name(road_map, v, w)
        dist = road_map.distance(v, w)
        if legs and legs[-1]["way"] == name:
            legs[-1]["distance"] += dist
            continue
        legs.append({
            "way": name,
            "distance": dist,
            "bearing": road_map.bearing(v, w),
        })
    return legs
