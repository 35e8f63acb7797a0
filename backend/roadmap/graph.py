# backend/roadmap/graph.py
"""
Road network graph.

  - RoadGraph: mutable store of vertices (intersections) and way metadata
  - RoadGraphBuilder: ingestion-only front end; build() prunes once and
    hands back a RoadMap
  - RoadMap: read-only query surface used by routing and the HTTP API

Adjacency is one-directional per add_adjacency() call. An undirected
road needs both (u, v) and (v, u); RoadGraphBuilder.add_edge() does that.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterator, List, Optional, Set

import networkx as nx

from . import geo
from .config import UNKNOWN_ROAD
from .errors import DuplicateId, GraphSealed, NotFound
from .locations import LocationIndex
from .nearest import closest
from .priority import PriorityField

logger = logging.getLogger(__name__)

VertexId = Hashable
WayId = Hashable


@dataclass
class Vertex:
    id: VertexId
    lon: float
    lat: float
    name: Optional[str] = None
    ways: Set[WayId] = field(default_factory=set)
    adj: Set[VertexId] = field(default_factory=set)


@dataclass
class Way:
    id: WayId
    name: Optional[str] = None
    speed_limit: Optional[str] = None


class RoadGraph:
    def __init__(self):
        # insertion order matters: closest() breaks ties by it
        self._vertices: Dict[VertexId, Vertex] = {}
        self._ways: Dict[WayId, Way] = {}

        # links recorded before their source vertex exists
        self._pending_adj = defaultdict(set)
        self._pending_ways = defaultdict(set)

    # -------------------------
    # Vertices
    # -------------------------
    def add_vertex(self, vid, lon, lat, name=None):
        """Insert a vertex, replacing any existing vertex with the same id."""
        if vid in self._vertices:
            logger.debug("Overwriting vertex %r", vid)
        v = Vertex(vid, float(lon), float(lat), name)
        v.adj |= self._pending_adj.pop(vid, set())
        v.ways |= self._pending_ways.pop(vid, set())
        self._vertices[vid] = v
        return v

    def insert_vertex(self, vid, lon, lat, name=None):
        """Like add_vertex() but refuses to replace an existing vertex."""
        if vid in self._vertices:
            raise DuplicateId("vertex", vid)
        return self.add_vertex(vid, lon, lat, name)

    def add_adjacency(self, u, v):
        """Add v to u's neighbor set. Only u's side changes."""
        if u in self._vertices:
            self._vertices[u].adj.add(v)
        else:
            self._pending_adj[u].add(v)

    def add_way_to_vertex(self, vid, way_id):
        if vid in self._vertices:
            self._vertices[vid].ways.add(way_id)
        else:
            self._pending_ways[vid].add(way_id)

    def remove_vertex(self, vid, detach=False):
        """
        Delete a vertex.

        By default other vertices keep their references to vid; those turn
        into stale ids that live_neighbors() skips. With detach=True vid is
        also dropped from every neighbor set.
        """
        if vid not in self._vertices:
            raise NotFound("vertex", vid)
        del self._vertices[vid]
        if detach:
            for v in self._vertices.values():
                v.adj.discard(vid)

    def prune(self):
        """Remove every vertex with an empty neighbor set. Returns removed ids."""
        removed = [vid for vid, v in self._vertices.items() if not v.adj]
        for vid in removed:
            del self._vertices[vid]
        if self._pending_adj or self._pending_ways:
            logger.warning(
                "Dropping links for %d ids that never became vertices",
                len(set(self._pending_adj) | set(self._pending_ways)),
            )
            self._pending_adj.clear()
            self._pending_ways.clear()
        logger.debug("Pruned %d isolated vertices", len(removed))
        return removed

    # -------------------------
    # Ways
    # -------------------------
    def add_way(self, way_id, name=None, speed_limit=None):
        if way_id in self._ways:
            logger.debug("Overwriting way %r", way_id)
        w = Way(way_id, name, speed_limit)
        self._ways[way_id] = w
        return w

    def insert_way(self, way_id, name=None, speed_limit=None):
        if way_id in self._ways:
            raise DuplicateId("way", way_id)
        return self.add_way(way_id, name, speed_limit)

    def way(self, way_id) -> Way:
        try:
            return self._ways[way_id]
        except KeyError:
            raise NotFound("way", way_id) from None

    def way_name(self, way_id) -> str:
        name = self.way(way_id).name
        return name if name is not None else UNKNOWN_ROAD

    def way_count(self):
        return len(self._ways)

    # -------------------------
    # Queries
    # -------------------------
    def vertex(self, vid) -> Vertex:
        try:
            return self._vertices[vid]
        except KeyError:
            raise NotFound("vertex", vid) from None

    def vertices(self) -> Set[VertexId]:
        return set(self._vertices)

    def iter_vertices(self) -> Iterator[Vertex]:
        return iter(self._vertices.values())

    def neighbors(self, vid) -> Set[VertexId]:
        """Neighbor ids as stored, stale references included."""
        return set(self.vertex(vid).adj)

    def live_neighbors(self, vid) -> List[VertexId]:
        out = []
        for n in self.vertex(vid).adj:
            if n in self._vertices:
                out.append(n)
            else:
                logger.warning("Vertex %r has stale neighbor %r", vid, n)
        return out

    def ways_of(self, vid) -> Set[WayId]:
        return set(self.vertex(vid).ways)

    def lon(self, vid):
        return self.vertex(vid).lon

    def lat(self, vid):
        return self.vertex(vid).lat

    def __contains__(self, vid):
        return vid in self._vertices

    def __len__(self):
        return len(self._vertices)

    def to_networkx(self) -> nx.Graph:
        """Undirected networkx view; edge weight is great-circle miles."""
        G = nx.Graph()
        for v in self._vertices.values():
            G.add_node(v.id, lon=v.lon, lat=v.lat, name=v.name)
        for v in self._vertices.values():
            for n in v.adj:
                w = self._vertices.get(n)
                if w is None:
                    continue
                G.add_edge(v.id, n, weight=geo.distance(v.lon, v.lat, w.lon, w.lat))
        return G


class RoadGraphBuilder:
    """
    Collects ingestion events. build() prunes isolated vertices exactly once
    and returns a RoadMap; the builder accepts nothing afterwards.
    """

    def __init__(self):
        self.graph = RoadGraph()
        self.locations = LocationIndex(self.graph)
        self._built = False

    def _check_open(self):
        if self._built:
            raise GraphSealed("graph already built; ingestion is closed")

    def add_vertex(self, vid, lon, lat, name=None):
        self._check_open()
        self.graph.add_vertex(vid, lon, lat, name)

    def insert_vertex(self, vid, lon, lat, name=None):
        self._check_open()
        self.graph.insert_vertex(vid, lon, lat, name)

    def add_way(self, way_id, name=None, speed_limit=None):
        self._check_open()
        self.graph.add_way(way_id, name, speed_limit)

    def insert_way(self, way_id, name=None, speed_limit=None):
        self._check_open()
        self.graph.insert_way(way_id, name, speed_limit)

    def add_adjacency(self, u, v):
        self._check_open()
        self.graph.add_adjacency(u, v)

    def add_edge(self, u, v):
        """Both directions of add_adjacency()."""
        self.add_adjacency(u, v)
        self.add_adjacency(v, u)

    def add_way_to_vertex(self, vid, way_id):
        self._check_open()
        self.graph.add_way_to_vertex(vid, way_id)

    def add_location(self, name, vid):
        self._check_open()
        self.locations.add_location(name, vid)

    def remove_vertex(self, vid, detach=False):
        self._check_open()
        self.graph.remove_vertex(vid, detach=detach)

    def build(self):
        self._check_open()
        pruned = self.graph.prune()
        self._built = True
        logger.info(
            "Road graph built: %d vertices, %d ways, %d locations (%d pruned)",
            len(self.graph),
            self.graph.way_count(),
            len(self.locations),
            len(pruned),
        )
        return RoadMap(self.graph, self.locations)


class RoadMap:
    """Query surface over a built graph."""

    def __init__(self, graph: RoadGraph, locations: LocationIndex):
        self.graph = graph
        self.locations = locations
        self._nx_graph = None

    def vertices(self):
        return self.graph.vertices()

    def neighbors(self, vid):
        return self.graph.neighbors(vid)

    def live_neighbors(self, vid):
        return self.graph.live_neighbors(vid)

    def way_name(self, way_id):
        return self.graph.way_name(way_id)

    def ways_of(self, vid):
        return self.graph.ways_of(vid)

    def vertex(self, vid):
        return self.graph.vertex(vid)

    def lon(self, vid):
        return self.graph.lon(vid)

    def lat(self, vid):
        return self.graph.lat(vid)

    def distance(self, v, w):
        """Great-circle miles between two vertices."""
        a, b = self.graph.vertex(v), self.graph.vertex(w)
        return geo.distance(a.lon, a.lat, b.lon, b.lat)

    def bearing(self, v, w):
        """Initial bearing in degrees from vertex v to vertex w."""
        a, b = self.graph.vertex(v), self.graph.vertex(w)
        return geo.bearing(a.lon, a.lat, b.lon, b.lat)

    def closest(self, lon, lat):
        return closest(self.graph, lon, lat)

    def priority_field(self):
        """A fresh, zeroed PriorityField for one search run."""
        return PriorityField(self.graph)

    def search(self, name):
        return self.locations.search(name)

    def autocomplete(self, prefix, limit=None):
        return self.locations.autocomplete(prefix, limit=limit)

    def nx_graph(self):
        """Weighted networkx view, built on first use. The map is read-only."""
        if self._nx_graph is None:
            self._nx_graph = self.graph.to_networkx()
        return self._nx_graph

    def components(self):
        """Connected components, largest first."""
        comps = nx.connected_components(self.nx_graph())
        return sorted(comps, key=len, reverse=True)

    def stats(self):
        return {
            "vertices": len(self.graph),
            "ways": self.graph.way_count(),
            "locations": len(self.locations),
            "components": len(self.components()),
        }
