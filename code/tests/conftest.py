from __future__ import annotations

from pointset.utils.loggers import get_logger

# Bind the package log handler to the session's stderr before any CliRunner
# swaps the stream out.
get_logger()
