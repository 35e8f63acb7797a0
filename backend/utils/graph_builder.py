import itertools
import logging

import geopandas as gpd
import pandas as pd
from shapely.geometry import LineString, MultiLineString, Point, MultiPoint

from roadmap.graph import RoadGraphBuilder
from roadmap.nearest import closest

logger = logging.getLogger(__name__)


def _prop(row, key):
    """Feature property or None when the column is missing or empty."""
    val = row.get(key)
    if val is None:
        return None
    try:
        if pd.isna(val):
            return None
    except (TypeError, ValueError):
        pass
    return val


def _lines(geom):
    # Normalize geometry → always get a list of LineStrings
    if isinstance(geom, LineString):
        return [geom]
    if isinstance(geom, MultiLineString):
        return list(geom.geoms)
    return []


def _points(geom):
    if isinstance(geom, Point):
        return [geom]
    if isinstance(geom, MultiPoint):
        return list(geom.geoms)
    return []


def _way_id(row, idx):
    for key in ("osm_id", "id"):
        val = _prop(row, key)
        if val is not None:
            return val
    return idx


def ingest_roads(builder, roads):
    """
    Feed road LineStrings into the builder.
    Vertices = segment endpoints (one id per distinct coordinate)
    Edges = consecutive coordinates, linked in both directions
    Zero-length segments add nothing, so no isolated vertex is created.
    """
    vertex_ids = {}
    id_gen = itertools.count(start=1)

    def vertex_for(coord, way_id):
        if coord not in vertex_ids:
            vid = next(id_gen)
            vertex_ids[coord] = vid
            builder.add_vertex(vid, coord[0], coord[1])
        builder.add_way_to_vertex(vertex_ids[coord], way_id)
        return vertex_ids[coord]

    for idx, row in roads.iterrows():
        geom = row.geometry

        if geom is None or geom.is_empty:
            continue

        lines = _lines(geom)
        if not lines:
            logger.debug("Skipping feature %s: %s is not a road geometry", idx, geom.geom_type)
            continue

        way_id = _way_id(row, idx)
        builder.add_way(way_id, name=_prop(row, "name"), speed_limit=_prop(row, "maxspeed"))

        for line in lines:
            coords = [(float(c[0]), float(c[1])) for c in line.coords]

            for p1, p2 in zip(coords, coords[1:]):
                if p1 == p2:
                    continue
                builder.add_edge(vertex_for(p1, way_id), vertex_for(p2, way_id))

    return vertex_ids


def ingest_places(builder, places):
    """Index each named Point at the road vertex nearest to it."""
    if len(builder.graph) == 0:
        logger.warning("No road vertices; skipping %d places", len(places))
        return 0

    count = 0
    for _, row in places.iterrows():
        name = _prop(row, "name")
        geom = row.geometry
        if not name or geom is None or geom.is_empty:
            continue
        for pt in _points(geom):
            vid = closest(builder.graph, pt.x, pt.y)
            builder.add_location(str(name), vid)
            count += 1
    return count


def build_road_graph(geojson_path, places_path=None):
    """
    Convert roads.geojson (and optionally a places layer) into a RoadMap.
    """
    logger.info("Loading roads from %s", geojson_path)
    roads = gpd.read_file(geojson_path)

    builder = RoadGraphBuilder()
    ingest_roads(builder, roads)

    if places_path:
        logger.info("Loading places from %s", places_path)
        ingest_places(builder, gpd.read_file(places_path))

    return builder.build()
