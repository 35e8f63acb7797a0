# backend/roadmap/errors.py
"""Exceptions raised by the road map engine."""


class RoadMapError(Exception):
    """Base class for every error raised by roadmap."""


class NotFound(RoadMapError, KeyError):
    """Lookup of a vertex or way id that is not in the live graph."""

    def __init__(self, kind, ident):
        super().__init__(kind, ident)
        self.kind = kind
        self.ident = ident

    def __str__(self):
        return f"{self.kind} {self.ident!r} not found"


class EmptyGraph(RoadMapError, ValueError):
    """Spatial query against a graph with zero vertices."""

    def __str__(self):
        return "graph has no vertices"


class DuplicateId(RoadMapError, ValueError):
    def __init__(self, kind, ident):
        super().__init__(f"{kind} {ident!r} already exists")
        self.kind = kind
        self.ident = ident


class GraphSealed(RoadMapError, RuntimeError):
    """Ingestion attempted after the builder produced its RoadMap."""


class NoRoute(RoadMapError):
    def __init__(self, start, goal):
        super().__init__(f"no route from {start!r} to {goal!r}")
        self.start = start
        self.goal = goal
