from __future__ import annotations

import hashlib
import json
import math
import platform
import sys
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from statistics import mean, median, pstdev
from typing import Any, Callable

import numpy as np

from pointset.geometry import Point, Rect
from pointset.index import BACKENDS, PointSet, create_point_set
from pointset.utils.atomic import atomic_write_text
from pointset.utils.loggers import get_logger

LATEST_JSON = "bench_latest.json"


@dataclass
class BenchResult:
    name: str
    metric: str
    unit: str
    params: dict[str, Any]
    values: list[float]
    durations_s: list[float]

    def to_dict(self) -> dict[str, Any]:
        vals = [float(v) for v in self.values if math.isfinite(float(v))]
        durs = [float(d) for d in self.durations_s if math.isfinite(float(d))]
        return {
            "name": str(self.name),
            "metric": str(self.metric),
            "unit": str(self.unit),
            "params": dict(self.params),
            "trials": int(len(self.values)),
            "values": [float(v) for v in self.values],
            "durations_s": [float(d) for d in self.durations_s],
            "value_median": float(median(vals)) if vals else float("nan"),
            "value_mean": float(mean(vals)) if vals else float("nan"),
            "value_stdev": float(pstdev(vals)) if len(vals) > 1 else 0.0,
            "duration_median_s": float(median(durs)) if durs else float("nan"),
        }


def _stable_seed(base_seed: int, tag: str) -> int:
    h = hashlib.sha256(f"{int(base_seed)}|{str(tag)}".encode("utf-8")).hexdigest()[:8]
    return int(h, 16) & 0x7FFFFFFF


def _random_points(rng: np.random.Generator, n: int) -> list[Point]:
    xy = rng.uniform(0.0, 1.0, size=(int(n), 2))
    return [Point(float(x), float(y)) for x, y in xy]


def _random_rects(rng: np.random.Generator, n: int, side: float = 0.1) -> list[Rect]:
    lo = rng.uniform(0.0, 1.0 - side, size=(int(n), 2))
    return [Rect.from_bounds(float(x), float(y), float(x) + side, float(y) + side) for x, y in lo]


def _bench(
    *,
    name: str,
    metric: str,
    unit: str,
    work: int,
    trials: int,
    params: dict[str, Any],
    setup_fn: Callable[[int], Callable[[], None]],
) -> BenchResult:
    durations: list[float] = []
    values: list[float] = []
    for trial_idx in range(int(max(1, trials))):
        fn = setup_fn(trial_idx)
        t0 = time.perf_counter()
        fn()
        dt = float(time.perf_counter() - t0)
        durations.append(dt)
        values.append(float(work) / max(1e-12, dt))
    return BenchResult(
        name=name, metric=metric, unit=unit, params=dict(params), values=values, durations_s=durations
    )


def _bench_backend(
    backend: str, *, seed: int, n_points: int, n_queries: int, trials: int
) -> list[BenchResult]:
    params = {"backend": backend, "n_points": int(n_points), "n_queries": int(n_queries)}

    def _workload(trial_idx: int) -> tuple[list[Point], np.random.Generator]:
        # Same points and queries for every backend within a trial.
        rng = np.random.default_rng(_stable_seed(seed, f"trial{trial_idx}"))
        return _random_points(rng, n_points), rng

    def _built(trial_idx: int) -> tuple[PointSet, np.random.Generator]:
        pts, rng = _workload(trial_idx)
        s = create_point_set(backend)
        s.insert_many(pts)
        return s, rng

    def _setup_insert(trial_idx: int) -> Callable[[], None]:
        pts, _ = _workload(trial_idx)
        s = create_point_set(backend)
        return lambda: s.insert_many(pts)

    def _setup_range(trial_idx: int) -> Callable[[], None]:
        s, rng = _built(trial_idx)
        rects = _random_rects(rng, n_queries)

        def _run() -> None:
            for r in rects:
                s.range(r)

        return _run

    def _setup_nearest(trial_idx: int) -> Callable[[], None]:
        s, rng = _built(trial_idx)
        queries = _random_points(rng, n_queries)

        def _run() -> None:
            for q in queries:
                s.nearest(q)

        return _run

    return [
        _bench(
            name=f"{backend}.insert",
            metric="points_per_s",
            unit="points/s",
            work=n_points,
            trials=trials,
            params=params,
            setup_fn=_setup_insert,
        ),
        _bench(
            name=f"{backend}.range",
            metric="queries_per_s",
            unit="queries/s",
            work=n_queries,
            trials=trials,
            params=params,
            setup_fn=_setup_range,
        ),
        _bench(
            name=f"{backend}.nearest",
            metric="queries_per_s",
            unit="queries/s",
            work=n_queries,
            trials=trials,
            params=params,
            setup_fn=_setup_nearest,
        ),
    ]


def _fmt(x: float) -> str:
    if not math.isfinite(float(x)):
        return "nan"
    if abs(float(x)) >= 1e6:
        return f"{x:.3e}"
    return f"{x:.3f}"


def format_summary(results: list[BenchResult]) -> list[str]:
    lines = ["-" * 72, f"{'benchmark':24}  {'median':>14}  {'unit':12}  {'trials':>6}", "-" * 72]
    for r in sorted(results, key=lambda x: x.name):
        d = r.to_dict()
        lines.append(f"{r.name:24}  {_fmt(d['value_median']):>14}  {r.unit:12}  {d['trials']:6d}")
    lines.append("-" * 72)
    return lines


def _system_info(*, seed: int) -> dict[str, Any]:
    return {
        "timestamp_utc": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "numpy": str(getattr(np, "__version__", "")),
        "seed": int(seed),
    }


def run_benchmarks(
    *,
    seed: int = 0,
    n_points: int = 2000,
    n_queries: int = 200,
    trials: int = 3,
    out_dir: Path = Path("results/benchmarks"),
    backends: tuple[str, ...] = BACKENDS,
) -> dict[str, Any]:
    log = get_logger("bench")
    if n_points <= 0 or n_queries <= 0 or trials <= 0:
        raise ValueError("n_points, n_queries and trials must be > 0")

    t0 = time.perf_counter()
    results: list[BenchResult] = []
    for b in backends:
        log.info("Benchmarking backend=%r (n_points=%d, n_queries=%d)", b, n_points, n_queries)
        results.extend(
            _bench_backend(b, seed=int(seed), n_points=int(n_points), n_queries=int(n_queries), trials=int(trials))
        )

    meta = _system_info(seed=int(seed))
    meta["trials"] = int(trials)
    meta["wall_time_s"] = float(time.perf_counter() - t0)

    out_path = Path(out_dir) / LATEST_JSON
    payload: dict[str, Any] = {
        "meta": meta,
        "results": [r.to_dict() for r in results],
        "outputs": {"latest_json": str(out_path)},
    }
    atomic_write_text(out_path, json.dumps(payload, indent=2, sort_keys=True) + "\n")
    log.info("Saved benchmark results to %s", out_path)

    payload["summary"] = format_summary(results)
    return payload
