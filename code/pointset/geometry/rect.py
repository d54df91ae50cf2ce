from __future__ import annotations

import math
from dataclasses import dataclass

from .point import Axis, Point


@dataclass(frozen=True)
class Rect:
    """Closed axis-aligned rectangle spanned by ``low`` and ``high`` corners.

    Zero-width, zero-height and infinite rectangles are all valid; the
    unbounded :meth:`plane` is the extent owned by a kd-tree root.
    """

    low: Point
    high: Point

    def __post_init__(self) -> None:
        if self.low.x > self.high.x or self.low.y > self.high.y:
            raise ValueError(f"Rect corners out of order: low={self.low}, high={self.high}")

    @classmethod
    def from_bounds(cls, xmin: float, ymin: float, xmax: float, ymax: float) -> "Rect":
        return cls(Point(xmin, ymin), Point(xmax, ymax))

    @classmethod
    def plane(cls) -> "Rect":
        return cls.from_bounds(-math.inf, -math.inf, math.inf, math.inf)

    @property
    def xmin(self) -> float:
        return self.low.x

    @property
    def ymin(self) -> float:
        return self.low.y

    @property
    def xmax(self) -> float:
        return self.high.x

    @property
    def ymax(self) -> float:
        return self.high.y

    def corners(self) -> tuple[Point, Point, Point, Point]:
        return (
            self.low,
            Point(self.xmin, self.ymax),
            self.high,
            Point(self.xmax, self.ymin),
        )

    def contains(self, p: Point) -> bool:
        return self.xmin <= p.x <= self.xmax and self.ymin <= p.y <= self.ymax

    def intersects(self, other: "Rect") -> bool:
        return (
            self.xmin <= other.xmax
            and other.xmin <= self.xmax
            and self.ymin <= other.ymax
            and other.ymin <= self.ymax
        )

    def distance(self, p: Point) -> float:
        if self.contains(p):
            return 0.0
        if self.xmin <= p.x <= self.xmax:
            return min(abs(self.ymin - p.y), abs(self.ymax - p.y))
        if self.ymin <= p.y <= self.ymax:
            return min(abs(self.xmin - p.x), abs(self.xmax - p.x))
        return min(p.distance(c) for c in self.corners())

    def split_low(self, axis: Axis, value: float) -> "Rect":
        # Region left of (or below) a split line; the upper bound on ``axis`` is clipped.
        if axis == Axis.X:
            return Rect(self.low, Point(value, self.ymax))
        return Rect(self.low, Point(self.xmax, value))

    def split_high(self, axis: Axis, value: float) -> "Rect":
        if axis == Axis.X:
            return Rect(Point(value, self.ymin), self.high)
        return Rect(Point(self.xmin, value), self.high)
