"""Point-set backends.

:class:`SpatialPointSet` is the kd-tree backend; :class:`OrderedPointSet` is
the sorted-list baseline it is checked against. Both implement
:class:`PointSet`.
"""

from __future__ import annotations

from .base import PointSet
from .kdtree import KDNode, SpatialPointSet
from .ordered import OrderedPointSet

_BACKENDS: dict[str, type[PointSet]] = {
    "kdtree": SpatialPointSet,
    "ordered": OrderedPointSet,
}

BACKENDS: tuple[str, ...] = tuple(_BACKENDS)


def create_point_set(backend: str = "kdtree") -> PointSet:
    b = str(backend).strip().lower()
    if b not in _BACKENDS:
        raise ValueError(f"Unknown backend {backend!r}; expected one of: {', '.join(BACKENDS)}")
    return _BACKENDS[b]()


__all__ = [
    "BACKENDS",
    "KDNode",
    "OrderedPointSet",
    "PointSet",
    "SpatialPointSet",
    "create_point_set",
]
