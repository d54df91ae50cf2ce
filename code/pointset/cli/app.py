from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Optional

import typer
from typer.main import get_command

from pointset.geometry import Point, Rect
from pointset.io import format_points, write_points

from .common import load_cli_config, open_point_set, resolve_backend, resolve_k

app = typer.Typer(add_completion=False, no_args_is_help=True, rich_markup_mode="rich")

_POINTS_HELP = "Plain-text file of whitespace-separated 'x y' pairs."
_BACKEND_HELP = "Index backend: kdtree or ordered."


def _echo_points(points: Sequence[Point]) -> None:
    text = format_points(points)
    if text:
        typer.echo(text, nl=False)


@app.command("size")
def cli_size(
    points: Optional[Path] = typer.Option(None, "--points", "-p", dir_okay=False, help=_POINTS_HELP),
    backend: Optional[str] = typer.Option(None, "--backend", "-b", help=_BACKEND_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", dir_okay=False),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print the number of distinct points."""
    cfg = load_cli_config(config, verbose=verbose)
    s = open_point_set(cfg, points, backend)
    typer.echo(str(s.size()))


@app.command("contains")
def cli_contains(
    x: float = typer.Argument(...),
    y: float = typer.Argument(...),
    points: Optional[Path] = typer.Option(None, "--points", "-p", dir_okay=False, help=_POINTS_HELP),
    backend: Optional[str] = typer.Option(None, "--backend", "-b", help=_BACKEND_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", dir_okay=False),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print true/false; exit code 1 when the point is absent."""
    cfg = load_cli_config(config, verbose=verbose)
    s = open_point_set(cfg, points, backend)
    found = s.contains(Point(x, y))
    typer.echo("true" if found else "false")
    if not found:
        raise typer.Exit(code=1)


@app.command("range")
def cli_range(
    xmin: float = typer.Argument(...),
    ymin: float = typer.Argument(...),
    xmax: float = typer.Argument(...),
    ymax: float = typer.Argument(...),
    points: Optional[Path] = typer.Option(None, "--points", "-p", dir_okay=False, help=_POINTS_HELP),
    backend: Optional[str] = typer.Option(None, "--backend", "-b", help=_BACKEND_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", dir_okay=False),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print every point inside the closed rectangle, one 'x y' per line."""
    cfg = load_cli_config(config, verbose=verbose)
    try:
        rect = Rect.from_bounds(xmin, ymin, xmax, ymax)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="XMIN YMIN XMAX YMAX") from exc
    s = open_point_set(cfg, points, backend)
    _echo_points(s.range(rect))


@app.command("nearest")
def cli_nearest(
    x: float = typer.Argument(...),
    y: float = typer.Argument(...),
    k: Optional[int] = typer.Option(None, "--k", "-k", help="Number of neighbours (default: query.k)."),
    points: Optional[Path] = typer.Option(None, "--points", "-p", dir_okay=False, help=_POINTS_HELP),
    backend: Optional[str] = typer.Option(None, "--backend", "-b", help=_BACKEND_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", dir_okay=False),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print the k nearest points in ascending order; nothing for an empty set."""
    cfg = load_cli_config(config, verbose=verbose)
    kk = resolve_k(cfg, k)
    s = open_point_set(cfg, points, backend)
    _echo_points(s.nearest_k(Point(x, y), kk))


@app.command("show")
def cli_show(
    points: Optional[Path] = typer.Option(None, "--points", "-p", dir_okay=False, help=_POINTS_HELP),
    backend: Optional[str] = typer.Option(None, "--backend", "-b", help=_BACKEND_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", dir_okay=False),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Render the set: 'x y' lines for ordered, the point count for kdtree."""
    cfg = load_cli_config(config, verbose=verbose)
    s = open_point_set(cfg, points, backend)
    text = str(s)
    if text:
        typer.echo(text.rstrip("\n"))


@app.command("export")
def cli_export(
    out: Path = typer.Argument(..., dir_okay=False),
    points: Optional[Path] = typer.Option(None, "--points", "-p", dir_okay=False, help=_POINTS_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", dir_okay=False),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Write the distinct points in ascending order with full float precision."""
    cfg = load_cli_config(config, verbose=verbose)
    s = open_point_set(cfg, points, "ordered")
    write_points(out, s.points())
    typer.echo(f"[export] Saved {s.size()} point(s): {out}")


@app.command("bench")
def cli_bench(
    seed: Optional[int] = typer.Option(None, "--seed"),
    n_points: Optional[int] = typer.Option(None, "--n-points", min=1),
    n_queries: Optional[int] = typer.Option(None, "--n-queries", min=1),
    trials: Optional[int] = typer.Option(None, "--trials", min=1),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", file_okay=False),
    backend: Optional[str] = typer.Option(None, "--backend", "-b", help="Benchmark one backend only."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", dir_okay=False),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Time insert, range and nearest on a seeded random workload."""
    from pointset.benchmarks import run_benchmarks
    from pointset.index import BACKENDS

    cfg = load_cli_config(config, verbose=verbose)
    b = cfg.bench
    payload = run_benchmarks(
        seed=b.seed if seed is None else int(seed),
        n_points=b.n_points if n_points is None else int(n_points),
        n_queries=b.n_queries if n_queries is None else int(n_queries),
        trials=b.trials if trials is None else int(trials),
        out_dir=Path(b.out_dir) if out_dir is None else out_dir,
        backends=BACKENDS if backend is None else (resolve_backend(cfg, backend),),
    )
    for line in payload["summary"]:
        typer.echo(line)
    typer.echo(f"[bench] Saved results: {payload['outputs']['latest_json']}")


def run(argv: Sequence[str] | None = None, *, prog_name: str | None = None) -> None:
    cmd = get_command(app)
    cmd.main(args=None if argv is None else list(argv), prog_name=prog_name)


def main(argv: list[str] | None = None) -> None:
    run(argv, prog_name="pointset")


if __name__ == "__main__":
    main()
