# backend/roadmap/nearest.py
"""
Nearest-vertex lookup by linear scan.

Every live vertex is visited once per call; there is no spatial index.
On an exact tie the first vertex seen wins, and vertices are seen in
insertion order (the order RoadGraph stores them in).
"""

from .errors import EmptyGraph
from .geo import distance


def closest(graph, lon, lat):
    """
    Return the id of the live vertex nearest to (lon, lat).
    Raises EmptyGraph if the graph has no vertices.
    """
    min_dist = float("inf")
    nearest = None

    for v in graph.iter_vertices():
        dist = distance(lon, lat, v.lon, v.lat)
        # strict < keeps the first-seen vertex on ties
        if dist < min_dist:
            min_dist = dist
            nearest = v.id

    if nearest is None:
        raise EmptyGraph()
    return nearest
