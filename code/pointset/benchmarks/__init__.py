from __future__ import annotations

from .core import BenchResult, format_summary, run_benchmarks

__all__ = ["BenchResult", "format_summary", "run_benchmarks"]
