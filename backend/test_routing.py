import pytest

from roadmap.errors import EmptyGraph, NoRoute, NotFound
from roadmap.geo import distance
from roadmap.graph import RoadGraph, RoadGraphBuilder
from roadmap.nearest import closest
from roadmap.routing import compute_shortest_route, route_directions, shortest_path


def test_closest_picks_nearest_vertex(road_map):
    assert road_map.closest(0.011, 0.009) == 4
    assert road_map.closest(-5.0, 0.0) == 1
    # pruned vertex 5 is never returned
    assert road_map.closest(0.5, 0.5) in {3, 4}


def test_closest_is_no_farther_than_any_vertex(road_map):
    lon, lat = 0.013, 0.002
    best = road_map.closest(lon, lat)
    b = road_map.graph.vertex(best)
    best_dist = distance(lon, lat, b.lon, b.lat)
    for v in road_map.graph.iter_vertices():
        assert best_dist <= distance(lon, lat, v.lon, v.lat)


def test_closest_tie_first_seen_wins():
    g = RoadGraph()
    g.add_vertex("east", 1.0, 0.0)
    g.add_vertex("west", -1.0, 0.0)
    assert closest(g, 0.0, 0.0) == "east"

    g = RoadGraph()
    g.add_vertex("west", -1.0, 0.0)
    g.add_vertex("east", 1.0, 0.0)
    assert closest(g, 0.0, 0.0) == "west"


def test_closest_on_empty_graph():
    with pytest.raises(EmptyGraph):
        closest(RoadGraph(), 0.0, 0.0)
    with pytest.raises(EmptyGraph):
        RoadGraphBuilder().build().closest(0.0, 0.0)


def test_shortest_path(road_map):
    assert shortest_path(road_map, 1, 4) == [1, 2, 4]
    assert shortest_path(road_map, 1, 3) == [1, 2, 3]
    assert shortest_path(road_map, 3, 3) == [3]


def test_shortest_path_unknown_endpoint(road_map):
    with pytest.raises(NotFound):
        shortest_path(road_map, 1, 5)


def test_shortest_path_unreachable(builder):
    builder.add_vertex(1, 0, 0)
    builder.add_vertex(2, 0.01, 0)
    builder.add_vertex(3, 1, 1)
    builder.add_vertex(4, 1.01, 1)
    builder.add_edge(1, 2)
    builder.add_edge(3, 4)
    road_map = builder.build()
    with pytest.raises(NoRoute):
        shortest_path(road_map, 1, 4)


def test_shortest_path_skips_stale_neighbors():
    b = RoadGraphBuilder()
    b.add_vertex(1, 0.0, 0.0)
    b.add_vertex(2, 0.01, 0.0)
    b.add_vertex(3, 0.02, 0.0)
    b.add_vertex(4, 0.01, 0.01)
    b.add_edge(1, 2)
    b.add_edge(2, 3)
    b.add_edge(1, 4)
    b.add_edge(4, 3)
    b.remove_vertex(2)
    road_map = b.build()
    assert shortest_path(road_map, 1, 3) == [1, 4, 3]


def test_repeated_searches_do_not_leak(road_map):
    first = shortest_path(road_map, 1, 4)
    shortest_path(road_map, 4, 1)
    assert shortest_path(road_map, 1, 4) == first


def test_compute_shortest_route_snaps_coordinates(road_map):
    coords = compute_shortest_route(road_map, (-0.001, 0.0), (0.0101, 0.0102))
    assert coords == [(0.0, 0.0), (0.01, 0.0), (0.01, 0.01)]


def test_route_directions(road_map):
    legs = route_directions(road_map, [1, 2, 4])
    assert [leg["way"] for leg in legs] == ["Main St", "Oak Ave"]
    assert legs[0]["distance"] == pytest.approx(road_map.distance(1, 2))
    assert legs[0]["bearing"] == pytest.approx(90.0)
    assert legs[1]["bearing"] == pytest.approx(0.0)


def test_route_directions_merges_same_street(road_map):
    legs = route_directions(road_map, [1, 2, 3, 4])
    assert [leg["way"] for leg in legs] == ["Main St", "unknown road"]
    assert legs[0]["distance"] == pytest.approx(
        road_map.distance(1, 2) + road_map.distance(2, 3)
    )
    assert route_directions(road_map, [1]) == []
