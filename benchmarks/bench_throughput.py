"""Benchmark: Cairo lint and fix throughput.

Measures how many lint passes and lint-and-fix passes can complete per
second using the public cairo_lint.lint() and cairo_lint.fix() APIs.
"""
from __future__ import annotations

import json
import time
from pathlib import Path

import cairo_lint

_ITERATIONS: int = 500
_FIX_ITERATIONS: int = 200

_SAMPLE_CAIRO = """
use core::integer::{u128_safe_divmod, u128_byte_reverse};

#[derive(Drop)]
enum Color {
    ColorRed,
    ColorGreen: (),
}

fn compute(x: u128, y: u128) -> u128 {
    let _a = x + 0;
    let _b = (x * 0);
    if x == true {
        return u128_byte_reverse(y);
    }
    if x >= y + 1 {
        if y > 0 {
            return x;
        }
    }
    loop {
        break ();
    }
    ((x))
}
"""


def bench_lint_throughput(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Benchmark linting throughput on a file hitting most rules.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    start = time.perf_counter()
    for _ in range(iterations):
        cairo_lint.lint(_SAMPLE_CAIRO)
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "cairo_lint_throughput",
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1),
        "avg_latency_ms": round(total / iterations * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_fix_throughput(iterations: int = _FIX_ITERATIONS) -> dict[str, object]:
    """Benchmark lint-and-fix passes, overlap resolution included.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    start = time.perf_counter()
    for _ in range(iterations):
        cairo_lint.fix(_SAMPLE_CAIRO)
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "cairo_fix_throughput",
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1),
        "avg_latency_ms": round(total / iterations * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_lint_throughput, "lint_throughput_baseline.json"),
        (bench_fix_throughput, "fix_throughput_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
