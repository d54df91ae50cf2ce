"""Plain-text point files.

A point file is a stream of whitespace-separated numbers read as ``x y``
pairs. Only finite plain decimal literals count as numbers (``nan``, ``inf``
and underscore-grouped digits do not). Reading stops at the first token that
is not a number; an ``x`` left without a ``y`` is dropped.
"""

from __future__ import annotations

import math
import re
from pathlib import Path
from typing import Iterable, Union

from pointset.geometry import Point
from pointset.utils.atomic import atomic_write_text
from pointset.utils.loggers import log_input_truncated, log_points_loaded, log_points_written


class PointsFileError(ValueError):
    pass


_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _to_float(token: str) -> float | None:
    if _NUMBER_RE.fullmatch(token) is None:
        return None
    value = float(token)
    return value if math.isfinite(value) else None


def parse_points(text: str, *, source: str = "<text>") -> list[Point]:
    tokens = text.split()
    out: list[Point] = []
    for i in range(0, len(tokens), 2):
        x = _to_float(tokens[i])
        if x is None:
            log_input_truncated(source, tokens[i], i)
            break
        if i + 1 >= len(tokens):
            break
        y = _to_float(tokens[i + 1])
        if y is None:
            log_input_truncated(source, tokens[i + 1], i + 1)
            break
        out.append(Point(x, y))
    return out


def load_points(path: Union[str, Path]) -> list[Point]:
    """Read a point file.

    A missing or unreadable file raises :class:`PointsFileError` rather than
    yielding an empty list.
    """
    p = Path(path)
    if not p.is_file():
        raise PointsFileError(f"Points file not found: {p}")
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PointsFileError(f"Failed to read points file: {p}") from exc
    points = parse_points(text, source=str(p))
    log_points_loaded(p, len(points))
    return points


def format_points(points: Iterable[Point], *, exact: bool = False) -> str:
    if exact:
        # repr() round-trips floats exactly.
        return "".join(f"{p.x!r} {p.y!r}\n" for p in points)
    return "".join(f"{p}\n" for p in points)


def write_points(path: Union[str, Path], points: Iterable[Point]) -> None:
    pts = list(points)
    atomic_write_text(Path(path), format_points(pts, exact=True))
    log_points_written(path, len(pts))
