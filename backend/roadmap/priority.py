# backend/roadmap/priority.py
"""
Per-search priority scalar for each vertex.

A PriorityField belongs to one search run. The graph itself carries no
search state, so two searches over the same graph never see each other's
priorities. Unset vertices read as 0.0.
"""

from .errors import NotFound


class PriorityField:
    def __init__(self, graph):
        self.graph = graph
        self._values = {}

    def set_priority(self, vid, value):
        if vid not in self.graph:
            raise NotFound("vertex", vid)
        self._values[vid] = float(value)

    def priority(self, vid):
        if vid not in self.graph:
            raise NotFound("vertex", vid)
        return self._values.get(vid, 0.0)

    def reset(self):
        self._values.clear()

    def ordering(self):
        """
        Key function ordering vertex ids by ascending priority, e.g.
        sorted(ids, key=field.ordering()). Ties are left to the consumer.
        """
        values = self._values

        def key(vid):
            return values.get(vid, 0.0)

        return key

    def __len__(self):
        return len(self._values)
