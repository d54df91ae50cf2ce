from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

BackendLiteral = Literal["kdtree", "ordered"]


@dataclass(frozen=True)
class QueryConfig:
    k: int = 1


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class BenchConfig:
    seed: int = 0
    n_points: int = 2000
    n_queries: int = 200
    trials: int = 3
    out_dir: str = "results/benchmarks"


@dataclass(frozen=True)
class Config:
    backend: BackendLiteral = "kdtree"
    points: str | None = None

    query: QueryConfig = field(default_factory=QueryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    bench: BenchConfig = field(default_factory=BenchConfig)
