# backend/roadmap/locations.py
"""
Name lookup for places on the map.

Names are keyed by normalize(): everything but ASCII letters and spaces is
dropped and the rest lowercased. The mapping is lossy on purpose, so
"O'Brien's Cafe" and "OBriens Cafe" share a key.
"""

import itertools
import logging
import re
from typing import Dict, List

logger = logging.getLogger(__name__)

_NOT_LETTER_OR_SPACE = re.compile(r"[^a-zA-Z ]")


def normalize(s):
    return _NOT_LETTER_OR_SPACE.sub("", s).lower()


class _TrieNode:
    __slots__ = ("children", "names")

    def __init__(self):
        self.children = {}
        # (insertion seq, raw name) for names whose key ends here
        self.names = []


class PrefixTrie:
    """Character trie over normalized keys, remembering the raw names."""

    def __init__(self):
        self.root = _TrieNode()
        self._seq = itertools.count()
        self._seen = set()

    def insert(self, raw_name):
        if raw_name in self._seen:
            return
        self._seen.add(raw_name)
        node = self.root
        for ch in normalize(raw_name):
            node = node.children.setdefault(ch, _TrieNode())
        node.names.append((next(self._seq), raw_name))

    def _find(self, key):
        node = self.root
        for ch in key:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def with_prefix(self, prefix):
        """Raw names whose key starts with normalize(prefix), oldest first."""
        node = self._find(normalize(prefix))
        if node is None:
            return []
        found = []
        stack = [node]
        while stack:
            n = stack.pop()
            found.extend(n.names)
            stack.extend(n.children.values())
        found.sort()
        return [name for _, name in found]

    def __len__(self):
        return len(self._seen)


class LocationIndex:
    def __init__(self, graph):
        self.graph = graph
        self._locations: Dict[str, List] = {}
        # first raw name seen per key; fallback display name
        self._raw_names: Dict[str, str] = {}
        self.trie = PrefixTrie()

    def add_location(self, name, vid):
        key = normalize(name)
        self._locations.setdefault(key, []).append(vid)
        self._raw_names.setdefault(key, name)
        self.trie.insert(name)

    def ids(self, name):
        return list(self._locations.get(normalize(name), []))

    def search(self, name):
        """
        Every location stored under normalize(name) as
        {"lat", "lon", "name", "id"} dicts, in insertion order.
        Unknown names give an empty list.
        """
        key = normalize(name)
        res = []
        for vid in self._locations.get(key, []):
            if vid not in self.graph:
                logger.debug("Location %r points at missing vertex %r", key, vid)
                continue
            v = self.graph.vertex(vid)
            res.append({
                "lat": v.lat,
                "lon": v.lon,
                "name": v.name or self._raw_names[key],
                "id": v.id,
            })
        return res

    def autocomplete(self, prefix, limit=None):
        names = self.trie.with_prefix(prefix)
        if limit is not None:
            names = names[:limit]
        return names

    def __len__(self):
        return len(self._locations)
