import math
from typing import Optional

import numpy as np
import pytest

from pointset.geometry import Axis, Point, Rect
from pointset.index import KDNode, SpatialPointSet


def _scenario() -> SpatialPointSet:
    return SpatialPointSet.from_points([Point(2, 3), Point(4, 2), Point(4, 5), Point(1, 1)])


def _check_node(node: Optional[KDNode], axis: Axis) -> int:
    if node is None:
        return 0
    assert node.axis is axis
    left = _check_node(node.left, axis.other())
    right = _check_node(node.right, axis.other())
    assert node.size == 1 + left + right
    return node.size


def test_empty_tree() -> None:
    s = SpatialPointSet()
    assert s.empty()
    assert s.size() == 0
    assert s.root is None
    assert not s.contains(Point(0, 0))
    assert s.nearest(Point(0, 0)) is None
    assert s.nearest_k(Point(0, 0), 5) == []
    assert s.range(Rect.plane()) == []
    assert s.height() == 0
    assert str(s) == "0"


def test_insertion_builds_expected_shape() -> None:
    s = _scenario()
    root = s.root
    assert root is not None
    assert root.point == Point(2, 3) and root.axis is Axis.X and root.size == 4
    assert root.left is not None and root.left.point == Point(1, 1)
    assert root.left.axis is Axis.Y
    assert root.right is not None and root.right.point == Point(4, 2)
    assert root.right.axis is Axis.Y and root.right.size == 2
    assert root.right.left is None
    assert root.right.right is not None and root.right.right.point == Point(4, 5)
    assert root.right.right.axis is Axis.X
    assert s.height() == 3


def test_equal_coordinate_goes_right() -> None:
    s = SpatialPointSet.from_points([Point(5, 5), Point(5, 0)])
    assert s.root is not None
    assert s.root.left is None
    assert s.root.right is not None and s.root.right.point == Point(5, 0)


def test_duplicate_insert_changes_nothing() -> None:
    s = _scenario()
    before = s.as_dict()
    for p in [Point(4, 5), Point(1, 1), Point(2, 3), Point(4.0, 2.0)]:
        s.insert(p)
    assert s.as_dict() == before
    assert s.size() == 4


def test_subtree_sizes_and_axes_stay_consistent() -> None:
    rng = np.random.default_rng(3)
    s = SpatialPointSet()
    s.bulk_insert(rng.integers(0, 30, size=(400, 2)))
    assert _check_node(s.root, Axis.X) == s.size()
    assert s.size() == len(s.points())


def test_contains_soundness() -> None:
    rng = np.random.default_rng(11)
    pts = {Point(float(x), float(y)) for x, y in rng.integers(-20, 20, size=(200, 2))}
    s = SpatialPointSet.from_points(pts)
    assert s.size() == len(pts)
    for x in range(-21, 21):
        for y in range(-21, 21):
            p = Point(x, y)
            assert s.contains(p) == (p in pts)


def test_scenario_queries() -> None:
    s = _scenario()
    assert s.range(Rect.from_bounds(0, 0, 4, 4)) == [Point(1, 1), Point(2, 3), Point(4, 2)]
    assert s.nearest(Point(3, 3)) == Point(2, 3)
    assert s.nearest_k(Point(0, 0), 2) == [Point(1, 1), Point(2, 3)]


def test_nearest_tie_keeps_first_found_in_traversal() -> None:
    s = SpatialPointSet.from_points([Point(0, 1), Point(1, 0), Point(-1, 0), Point(0, -1)])
    assert s.nearest(Point(0, 0)) == Point(0, 1)


def test_nearest_k_tie_rounds_keep_first_found_in_traversal() -> None:
    s = SpatialPointSet.from_points([Point(0, 1), Point(1, 0), Point(-1, 0), Point(0, -1)])
    # Round one takes the root; round two the left child, visited before the right subtree.
    assert s.nearest_k(Point(0, 0), 2) == [Point(-1, 0), Point(0, 1)]
    assert s.nearest_k(Point(0, 0), 3) == [Point(-1, 0), Point(0, 1), Point(1, 0)]


def test_contains_rejects_non_points() -> None:
    with pytest.raises(TypeError):
        _scenario().contains((2, 3))  # type: ignore[arg-type]
    assert (2, 3) not in _scenario()


def test_range_result_is_detached_from_tree() -> None:
    s = _scenario()
    found = s.range(Rect.from_bounds(0, 0, 10, 10))
    s.insert(Point(5, 5))
    assert Point(5, 5) not in found
    assert len(found) == 4


def test_range_finds_descendants_of_excluded_nodes() -> None:
    # The root lies outside the query but both of its subtrees reach into it.
    s = SpatialPointSet.from_points([Point(0, 10), Point(-1, 1), Point(1, 1), Point(1, 20)])
    assert s.range(Rect.from_bounds(-2, 0, 2, 2)) == [Point(-1, 1), Point(1, 1)]


def test_nearest_k_returns_distinct_points() -> None:
    rng = np.random.default_rng(5)
    s = SpatialPointSet()
    s.bulk_insert(rng.integers(0, 10, size=(60, 2)))
    for k in [1, 3, 10, s.size(), s.size() + 5]:
        got = s.nearest_k(Point(4.5, 4.5), k)
        assert len(got) == min(k, s.size())
        assert len(set(got)) == len(got)
        assert got == sorted(got)


def test_nearest_k_rejects_negative_k() -> None:
    with pytest.raises(ValueError):
        _scenario().nearest_k(Point(0, 0), -2)


def test_deep_degenerate_tree_does_not_recurse() -> None:
    n = 1500
    s = SpatialPointSet.from_points(Point(i, i) for i in range(n))
    assert s.size() == n
    assert s.height() == n
    assert s.contains(Point(n - 1, n - 1))
    assert s.range(Rect.from_bounds(10, 10, 12, 12)) == [Point(10, 10), Point(11, 11), Point(12, 12)]
    assert s.nearest(Point(n + 3, n + 3)) == Point(n - 1, n - 1)
    assert s.nearest_k(Point(700.2, 700.2), 2) == [Point(700, 700), Point(701, 701)]

    dump = s.as_dict()
    assert dump["height"] == n
    node = dump["root"]
    depth = 0
    while node is not None:
        assert node["left"] is None
        assert node["size"] == n - depth
        node = node["right"]
        depth += 1
    assert depth == n


def test_bulk_insert_matches_sequential_insert() -> None:
    rng = np.random.default_rng(0)
    pts = rng.standard_normal((200, 2))

    seq = SpatialPointSet()
    for x, y in pts:
        seq.insert(Point(float(x), float(y)))

    bulk = SpatialPointSet()
    added = bulk.bulk_insert(pts)

    assert added == 200
    assert bulk.as_dict() == seq.as_dict()
    assert bulk.bulk_insert(pts) == 0


@pytest.mark.parametrize("shape", [(5,), (4, 3), (2, 2, 2)])
def test_bulk_insert_rejects_bad_shapes(shape: tuple[int, ...]) -> None:
    with pytest.raises(ValueError):
        SpatialPointSet().bulk_insert(np.zeros(shape))


def test_as_array_is_sorted() -> None:
    arr = _scenario().as_array()
    assert arr.shape == (4, 2)
    assert arr.tolist() == [[1.0, 1.0], [2.0, 3.0], [4.0, 2.0], [4.0, 5.0]]
    assert SpatialPointSet().as_array().shape == (0, 2)


def test_renders_point_count() -> None:
    assert str(_scenario()) == "4"


def test_nearest_handles_far_query() -> None:
    s = _scenario()
    q = Point(1e6, -1e6)
    best = s.nearest(q)
    assert best is not None
    assert math.isclose(best.distance(q), min(p.distance(q) for p in s.points()))
