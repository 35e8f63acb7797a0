import heapq

import pytest

from roadmap.errors import NotFound


def test_ordering_puts_lower_priority_first(road_map):
    field = road_map.priority_field()
    field.set_priority(1, 5.0)
    field.set_priority(2, 2.0)
    assert sorted([1, 2], key=field.ordering()) == [2, 1]


def test_unset_priority_defaults_to_zero(road_map):
    field = road_map.priority_field()
    field.set_priority(3, 1.5)
    assert field.priority(1) == 0.0
    assert sorted([3, 1], key=field.ordering()) == [1, 3]


def test_ordering_drives_a_heap(road_map):
    field = road_map.priority_field()
    key = field.ordering()
    for vid, p in [(1, 3.0), (2, 1.0), (3, 2.0), (4, 4.0)]:
        field.set_priority(vid, p)
    heap = [(key(v), v) for v in (1, 2, 3, 4)]
    heapq.heapify(heap)
    assert [heapq.heappop(heap)[1] for _ in range(4)] == [2, 3, 1, 4]


def test_set_priority_on_missing_vertex(road_map):
    field = road_map.priority_field()
    with pytest.raises(NotFound):
        field.set_priority(5, 1.0)
    with pytest.raises(NotFound):
        field.priority(99)


def test_fields_are_isolated_and_resettable(road_map):
    first = road_map.priority_field()
    second = road_map.priority_field()
    first.set_priority(1, 9.0)
    assert second.priority(1) == 0.0

    first.reset()
    assert first.priority(1) == 0.0
    assert len(first) == 0
