"""2-d tree backend.

Nodes split alternately on x and y (the root on x). A point goes to the right
subtree when its coordinate on the node's axis is >= the node's own, otherwise
to the left. The tree is never rebalanced, so insertion order fixes its shape.

Queries carry each node's implicit bounding rectangle top-down from the
unbounded plane and prune on it:

* range: skip a subtree whose rectangle does not intersect the query;
* nearest: skip a subtree whose rectangle is no closer than the best so far.

Traversals use an explicit stack in pre-order (node, left, right), so deep,
list-shaped trees do not run into the interpreter recursion limit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

from pointset.geometry import Axis, Point, Rect

from .base import PointSet, _clamp_k, _require_point


@dataclass
class KDNode:
    point: Point
    axis: Axis
    left: Optional["KDNode"] = None
    right: Optional["KDNode"] = None
    size: int = 1

    def goes_right(self, p: Point) -> bool:
        return p.coord(self.axis) >= self.point.coord(self.axis)

    def child_rects(self, rect: Rect) -> tuple[Rect, Rect]:
        v = self.point.coord(self.axis)
        return rect.split_low(self.axis, v), rect.split_high(self.axis, v)


class SpatialPointSet(PointSet):
    def __init__(self) -> None:
        self.root: Optional[KDNode] = None

    def size(self) -> int:
        return 0 if self.root is None else self.root.size

    def _path(self, p: Point) -> tuple[list[KDNode], bool]:
        path: list[KDNode] = []
        node = self.root
        while node is not None:
            path.append(node)
            if node.point == p:
                return path, True
            node = node.right if node.goes_right(p) else node.left
        return path, False

    def insert(self, p: Point) -> None:
        p = _require_point(p)
        if self.root is None:
            self.root = KDNode(point=p, axis=Axis.X)
            return

        path, found = self._path(p)
        if found:
            return

        parent = path[-1]
        leaf = KDNode(point=p, axis=parent.axis.other())
        if parent.goes_right(p):
            parent.right = leaf
        else:
            parent.left = leaf
        for node in path:
            node.size += 1

    def contains(self, p: Point) -> bool:
        return self._path(_require_point(p))[1]

    def _descend(self, accept: Callable[[KDNode, Rect], bool]) -> None:
        """Pre-order walk over (node, rect) pairs; children are visited only if
        ``accept(node, rect)`` returns True."""
        if self.root is None:
            return
        stack: list[tuple[KDNode, Rect]] = [(self.root, Rect.plane())]
        while stack:
            node, rect = stack.pop()
            if not accept(node, rect) or (node.left is None and node.right is None):
                continue
            left_rect, right_rect = node.child_rects(rect)
            if node.right is not None:
                stack.append((node.right, right_rect))
            if node.left is not None:
                stack.append((node.left, left_rect))

    def points(self) -> list[Point]:
        found: list[Point] = []

        def _visit(node: KDNode, node_rect: Rect) -> bool:
            found.append(node.point)
            return True

        self._descend(_visit)
        return sorted(found)

    def range(self, rect: Rect) -> list[Point]:
        found: list[Point] = []

        def _visit(node: KDNode, node_rect: Rect) -> bool:
            if not rect.intersects(node_rect):
                return False
            if rect.contains(node.point):
                found.append(node.point)
            return True

        self._descend(_visit)
        return sorted(found)

    def _closest(self, p: Point, exclude: set[Point]) -> Optional[Point]:
        best: Optional[Point] = None
        best_dist = math.inf

        def _visit(node: KDNode, node_rect: Rect) -> bool:
            nonlocal best, best_dist
            if node_rect.distance(p) >= best_dist:
                return False
            if node.point not in exclude:
                d = node.point.distance(p)
                if d < best_dist:
                    best_dist = d
                    best = node.point
            return True

        self._descend(_visit)
        return best

    def nearest(self, p: Point) -> Optional[Point]:
        return self._closest(p, set())

    def nearest_k(self, p: Point, k: int) -> list[Point]:
        k = _clamp_k(k, self.size())
        chosen: set[Point] = set()
        for _ in range(k):
            best = self._closest(p, chosen)
            assert best is not None
            chosen.add(best)
        return sorted(chosen)

    def height(self) -> int:
        if self.root is None:
            return 0
        best = 0
        stack: list[tuple[KDNode, int]] = [(self.root, 1)]
        while stack:
            node, depth = stack.pop()
            best = max(best, depth)
            for child in (node.left, node.right):
                if child is not None:
                    stack.append((child, depth + 1))
        return best

    def as_dict(self) -> dict:
        def _node(n: KDNode) -> dict:
            return {
                "point": [n.point.x, n.point.y],
                "axis": n.axis.name.lower(),
                "size": n.size,
                "left": None,
                "right": None,
            }

        root = None if self.root is None else _node(self.root)
        stack: list[tuple[KDNode, dict]] = [] if root is None else [(self.root, root)]
        while stack:
            node, d = stack.pop()
            for side in ("left", "right"):
                child = getattr(node, side)
                if child is not None:
                    d[side] = _node(child)
                    stack.append((child, d[side]))

        return {"size": self.size(), "height": self.height(), "root": root}

    def __str__(self) -> str:
        return str(self.size())
