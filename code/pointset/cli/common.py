from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from pointset.cfg import Config, ConfigError, load_config
from pointset.index import BACKENDS, PointSet, create_point_set
from pointset.io import PointsFileError, load_points
from pointset.utils.loggers import log_backend_selected, set_level

from .validators import normalize_choice, normalize_k

DEFAULT_BACKEND = "kdtree"


def load_cli_config(path: Optional[Path], *, verbose: bool = False) -> Config:
    if path is None:
        cfg = Config()
    else:
        try:
            cfg = load_config(path)
        except ConfigError as exc:
            raise typer.BadParameter(str(exc), param_hint="--config") from exc
    set_level("DEBUG" if verbose else cfg.logging.level)
    return cfg


def validate_backend(backend: object, *, option: str = "--backend") -> str:
    try:
        return normalize_choice(backend, allowed=BACKENDS, name=option)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def resolve_backend(cfg: Config, cli_backend: Optional[str]) -> str:
    if cli_backend is not None:
        return validate_backend(cli_backend)
    return validate_backend(getattr(cfg, "backend", DEFAULT_BACKEND) or DEFAULT_BACKEND)


def resolve_k(cfg: Config, cli_k: Optional[int], *, option: str = "--k") -> int:
    raw = cfg.query.k if cli_k is None else cli_k
    try:
        return normalize_k(raw, name=option)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def resolve_points_path(cfg: Config, cli_points: Optional[Path]) -> Path:
    if cli_points is not None:
        return Path(cli_points)
    if cfg.points:
        return Path(cfg.points)
    raise typer.BadParameter("no points file given and none set in the config", param_hint="--points")


def open_point_set(cfg: Config, cli_points: Optional[Path], cli_backend: Optional[str]) -> PointSet:
    backend = resolve_backend(cfg, cli_backend)
    path = resolve_points_path(cfg, cli_points)
    s = create_point_set(backend)
    try:
        s.insert_many(load_points(path))
    except PointsFileError as exc:
        raise typer.BadParameter(str(exc), param_hint="--points") from exc
    log_backend_selected(backend, s.size())
    return s
