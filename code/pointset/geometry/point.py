from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum


class Axis(IntEnum):
    X = 0
    Y = 1

    def other(self) -> "Axis":
        return Axis.Y if self is Axis.X else Axis.X


@dataclass(frozen=True, order=True)
class Point:
    """Immutable planar point ordered by ``x`` first, then ``y``."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def coord(self, axis: Axis) -> float:
        return self.x if axis == Axis.X else self.y

    def distance(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"{self.x:g} {self.y:g}"
