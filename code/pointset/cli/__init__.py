from __future__ import annotations

from .common import (
    DEFAULT_BACKEND,
    load_cli_config,
    open_point_set,
    resolve_backend,
    resolve_k,
    resolve_points_path,
    validate_backend,
)

__all__ = [
    "DEFAULT_BACKEND",
    "load_cli_config",
    "open_point_set",
    "resolve_backend",
    "resolve_k",
    "resolve_points_path",
    "validate_backend",
]
