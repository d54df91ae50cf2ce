from __future__ import annotations

from typing import Any


def normalize_choice(
    value: Any,
    *,
    allowed: tuple[str, ...],
    name: str = "value",
) -> str:
    v = str(value).strip().lower()
    allowed_norm = tuple(str(a).strip().lower() for a in allowed)
    if v not in set(allowed_norm):
        raise ValueError(f"{name} must be one of: {', '.join(allowed_norm)}")
    return v


def normalize_k(k: Any, *, name: str = "k") -> int:
    if isinstance(k, bool):
        raise ValueError(f"{name} must be an integer, got bool")
    try:
        kk = int(k)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer, got {k!r}") from exc
    if kk < 0:
        raise ValueError(f"{name} must be >= 0")
    return kk
