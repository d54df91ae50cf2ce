"""Planar geometry primitives.

Exports :class:`Point`, :class:`Rect` and the :class:`Axis` discriminant used
by the kd-tree backend.
"""

from __future__ import annotations

from .point import Axis, Point
from .rect import Rect

__all__ = ["Axis", "Point", "Rect"]
