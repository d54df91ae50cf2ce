from __future__ import annotations

from .atomic import atomic_write_text
from .loggers import get_logger, set_level

__all__ = ["atomic_write_text", "get_logger", "set_level"]
