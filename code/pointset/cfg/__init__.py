from __future__ import annotations

from .schema import BenchConfig, Config, LoggingConfig, QueryConfig
from .loader import ConfigError, load_config, loads_config, to_dict, validate_config

__all__ = [
    "Config",
    "QueryConfig",
    "LoggingConfig",
    "BenchConfig",
    "ConfigError",
    "load_config",
    "loads_config",
    "validate_config",
    "to_dict",
]
