"""Benchmark: Cairo lint latency (p50/p95/mean).

Measures per-call latency of a full lint pass (lex, parse, dispatch,
suppression) on a small file.
"""
from __future__ import annotations

import json
import time
from pathlib import Path

import cairo_lint

_WARMUP: int = 50
_ITERATIONS: int = 1_000

_MINIMAL_CAIRO = """
fn main() {
    let x = 1;
    let _y = x + 0;
}
"""


def bench_lint_latency(iterations: int = _ITERATIONS, warmup: int = _WARMUP) -> dict[str, object]:
    """Benchmark lint latency on a minimal file.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_ms, p95_ms.
    """
    for _ in range(warmup):
        cairo_lint.lint(_MINIMAL_CAIRO)

    latencies_ms: list[float] = []
    for _ in range(iterations):
        t0 = time.perf_counter()
        cairo_lint.lint(_MINIMAL_CAIRO)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "cairo_lint_latency_minimal",
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


if __name__ == "__main__":
    result = bench_lint_latency()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
