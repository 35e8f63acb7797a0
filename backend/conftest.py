import pytest

from roadmap.graph import RoadGraphBuilder


@pytest.fixture
def builder():
    return RoadGraphBuilder()


@pytest.fixture
def road_map():
    """
    Small street network (lon, lat):

        4 (0.01, 0.01)
        |   \\
        1 -- 2 -- 3        5 (0.5, 0.5) isolated, pruned on build
    """
    b = RoadGraphBuilder()
    b.add_vertex(1, 0.0, 0.0)
    b.add_vertex(2, 0.01, 0.0)
    b.add_vertex(3, 0.02, 0.0)
    b.add_vertex(4, 0.01, 0.01)
    b.add_vertex(5, 0.5, 0.5, name="Lonely Hut")

    b.add_way(100, "Main St", "25 mph")
    b.add_way(200, "Oak Ave")
    b.add_way(300)

    for vid, way in [(1, 100), (2, 100), (3, 100), (2, 200), (4, 200), (3, 300), (4, 300)]:
        b.add_way_to_vertex(vid, way)

    b.add_edge(1, 2)
    b.add_edge(2, 3)
    b.add_edge(2, 4)
    b.add_edge(3, 4)

    b.add_location("Main St Cafe", 1)
    b.add_location("Oak Park", 4)
    b.add_location("main st. cafe!", 3)
    return b.build()
