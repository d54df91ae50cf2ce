import json
from pathlib import Path

from pointset.benchmarks import BenchResult, format_summary, run_benchmarks


def test_run_benchmarks_small(tmp_path: Path) -> None:
    payload = run_benchmarks(seed=1, n_points=40, n_queries=4, trials=2, out_dir=tmp_path)

    names = sorted(r["name"] for r in payload["results"])
    assert names == [
        "kdtree.insert",
        "kdtree.nearest",
        "kdtree.range",
        "ordered.insert",
        "ordered.nearest",
        "ordered.range",
    ]
    for r in payload["results"]:
        assert r["trials"] == 2
        assert all(v > 0 for v in r["values"])

    on_disk = json.loads((tmp_path / "bench_latest.json").read_text(encoding="utf-8"))
    assert on_disk["meta"]["seed"] == 1
    assert len(on_disk["results"]) == 6


def test_bench_result_summary_handles_empty_values() -> None:
    r = BenchResult(name="x", metric="m", unit="u", params={}, values=[], durations_s=[])
    d = r.to_dict()
    assert d["trials"] == 0
    lines = format_summary([r])
    assert any(ln.startswith("x ") and "nan" in ln for ln in lines)
