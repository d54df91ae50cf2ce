from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional, TypeVar, Union

import numpy as np

from pointset.geometry import Point, Rect
from pointset.io import load_points

Array = np.ndarray

_S = TypeVar("_S", bound="PointSet")


def _require_point(p: object) -> Point:
    if not isinstance(p, Point):
        raise TypeError(f"Expected Point, got {type(p).__name__}")
    return p


def _clamp_k(k: int, size: int) -> int:
    k = int(k)
    if k < 0:
        raise ValueError("k must be >= 0")
    return min(k, int(size))


class PointSet(ABC):
    """Set of distinct planar points with membership, range and nearest queries.

    Query results are fresh lists in ascending :class:`Point` order, detached
    from the set; inserting afterwards never changes a list already returned.
    """

    @abstractmethod
    def size(self) -> int: ...

    @abstractmethod
    def insert(self, p: Point) -> None: ...

    @abstractmethod
    def contains(self, p: Point) -> bool: ...

    @abstractmethod
    def range(self, rect: Rect) -> list[Point]: ...

    @abstractmethod
    def nearest(self, p: Point) -> Optional[Point]: ...

    @abstractmethod
    def nearest_k(self, p: Point, k: int) -> list[Point]: ...

    @abstractmethod
    def points(self) -> list[Point]: ...

    def empty(self) -> bool:
        return self.size() == 0

    def insert_many(self, points: Iterable[Point]) -> None:
        for p in points:
            self.insert(p)

    def bulk_insert(self, points: Array) -> int:
        pts = np.asarray(points, dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError("points must have shape (N, 2)")

        before = self.size()
        for i in range(pts.shape[0]):
            self.insert(Point(float(pts[i, 0]), float(pts[i, 1])))
        return self.size() - before

    def as_array(self) -> Array:
        pts = self.points()
        if not pts:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([p.as_tuple() for p in pts], dtype=np.float64)

    @classmethod
    def from_points(cls: type[_S], points: Iterable[Point]) -> _S:
        s = cls()
        s.insert_many(points)
        return s

    @classmethod
    def from_file(cls: type[_S], path: Union[str, Path]) -> _S:
        return cls.from_points(load_points(path))

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, p: object) -> bool:
        return isinstance(p, Point) and self.contains(p)
