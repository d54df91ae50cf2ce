from __future__ import annotations

import sys
import types
from dataclasses import MISSING, asdict, fields, is_dataclass
from pathlib import Path
from typing import Any, Literal, Mapping, MutableMapping, Type, Union, get_args, get_origin, get_type_hints

import yaml

from pointset.utils.loggers import LEVELS

from .schema import Config


class ConfigError(ValueError):
    pass


_UNION_TYPES = (Union, types.UnionType)


def load_config(path: Union[str, Path]) -> Config:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read config file: {p}") from exc
    return loads_config(text)


def loads_config(yaml_text: str) -> Config:
    try:
        data = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid configuration data: {exc}") from exc

    if not isinstance(data, Mapping):
        raise ConfigError(f"Top-level configuration must be a mapping, got {type(data).__name__}")

    cfg = _from_mapping(Config, data, path="config")
    validate_config(cfg)
    return cfg


def validate_config(cfg: Config) -> None:
    if cfg.query.k < 0:
        raise ConfigError("query.k must be >= 0")
    if str(cfg.logging.level).strip().upper() not in LEVELS:
        raise ConfigError(f"logging.level must be one of: {', '.join(LEVELS)}")
    if cfg.points is not None and not str(cfg.points).strip():
        raise ConfigError("points must be a non-empty path when set")

    b = cfg.bench
    if b.n_points <= 0:
        raise ConfigError("bench.n_points must be > 0")
    if b.n_queries <= 0:
        raise ConfigError("bench.n_queries must be > 0")
    if b.trials <= 0:
        raise ConfigError("bench.trials must be > 0")


def to_dict(cfg: Config) -> dict:
    return asdict(cfg)


def _from_mapping(cls: Type[Any], data: Mapping[str, Any], path: str) -> Any:
    allowed = {f.name for f in fields(cls)}
    unknown = set(data.keys()) - allowed
    if unknown:
        raise ConfigError(f"Unknown field(s) at {path}: {', '.join(sorted(map(str, unknown)))}")

    mod = sys.modules.get(cls.__module__)
    hints = get_type_hints(cls, globalns=mod.__dict__ if mod is not None else None)

    kwargs: MutableMapping[str, Any] = {}
    for f in fields(cls):
        if f.name in data:
            kwargs[f.name] = _coerce(data[f.name], hints.get(f.name, f.type), f"{path}.{f.name}")
        elif f.default is MISSING and f.default_factory is MISSING:
            raise ConfigError(f"Missing required field: {path}.{f.name}")

    return cls(**kwargs)


def _coerce(value: Any, typ: Any, path: str) -> Any:
    origin = get_origin(typ)
    args = get_args(typ)

    if is_dataclass(typ):
        if not isinstance(value, Mapping):
            raise ConfigError(f"Expected mapping at {path}, got {type(value).__name__}")
        return _from_mapping(typ, value, path)

    if origin in _UNION_TYPES:
        if value is None and type(None) in args:
            return None
        for a in args:
            if a is type(None):
                continue
            try:
                return _coerce(value, a, path)
            except ConfigError:
                continue
        raise ConfigError(f"Value at {path} does not match any allowed type: {value!r}")

    if origin is Literal:
        if value not in args:
            raise ConfigError(f"{path}: expected one of {sorted(map(repr, args))}, got {value!r}")
        return value

    if typ is int:
        if isinstance(value, bool):
            raise ConfigError(f"Expected int at {path}, got bool")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Expected int at {path}, got {value!r}")

    if typ is str:
        if isinstance(value, (Mapping, list)) or value is None:
            raise ConfigError(f"Expected string at {path}, got {type(value).__name__}")
        return str(value)

    return value
