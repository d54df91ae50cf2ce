from __future__ import annotations

import math
from bisect import bisect_left
from typing import Optional

from pointset.geometry import Point, Rect

from .base import PointSet, _clamp_k, _require_point


class OrderedPointSet(PointSet):
    """Sorted-list backend with linear-scan range and nearest queries.

    Kept deliberately naive: it is the reference the kd-tree backend is
    checked against.
    """

    def __init__(self) -> None:
        self._items: list[Point] = []

    def size(self) -> int:
        return len(self._items)

    def insert(self, p: Point) -> None:
        p = _require_point(p)
        i = bisect_left(self._items, p)
        if i < len(self._items) and self._items[i] == p:
            return
        self._items.insert(i, p)

    def contains(self, p: Point) -> bool:
        p = _require_point(p)
        i = bisect_left(self._items, p)
        return i < len(self._items) and self._items[i] == p

    def points(self) -> list[Point]:
        return list(self._items)

    def range(self, rect: Rect) -> list[Point]:
        return [p for p in self._items if rect.contains(p)]

    def _closest(self, p: Point, exclude: set[Point]) -> Optional[Point]:
        best: Optional[Point] = None
        best_dist = math.inf
        for item in self._items:
            if item in exclude:
                continue
            d = p.distance(item)
            if d < best_dist:
                best_dist = d
                best = item
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

    def __str__(self) -> str:
        return "".join(f"{p}\n" for p in self._items)
