from __future__ import annotations

import logging
from logging import Logger
from pathlib import Path

_DEFAULT_LOGGER_NAME = "pointset"

LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_logger(name: str | None = None) -> Logger:
    base = logging.getLogger(_DEFAULT_LOGGER_NAME)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        base.addHandler(handler)
        base.setLevel(logging.INFO)
        base.propagate = False
    return base if name is None else base.getChild(str(name))


def set_level(level: str) -> None:
    lvl = str(level).strip().upper()
    if lvl not in LEVELS:
        raise ValueError(f"Unknown log level {level!r}; expected one of: {', '.join(LEVELS)}")
    get_logger().setLevel(getattr(logging, lvl))


def log_points_loaded(path: Path | str, count: int) -> None:
    get_logger("io").info("Loaded %d point(s) from %s", count, path)


def log_points_written(path: Path | str, count: int) -> None:
    get_logger("io").info("Wrote %d point(s) to %s", count, path)


def log_input_truncated(source: str, token: str, index: int) -> None:
    get_logger("io").warning(
        "Stopped reading %s at token %d (%r): not a number; the rest is ignored.",
        source,
        index,
        token,
    )


def log_backend_selected(backend: str, size: int) -> None:
    get_logger("cli").debug("Using backend=%r with %d point(s).", backend, size)
