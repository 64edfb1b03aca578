#!/usr/bin/env python3
"""Example: Quickstart for cairo-lint

Minimal working example: lint a Cairo source string, render the
findings the way the compiler does, and apply every safe fix.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install cairo-lint
"""
from __future__ import annotations

import cairo_lint

CAIRO_SOURCE = '''use core::integer::{u128_safe_divmod, u128_byte_reverse};

fn main() {
    let x = 1;
    let _y = x + 0;
    let _z = u128_byte_reverse(x) == true;
    let _w = ((x));
}
'''


def main() -> None:
    print(f"cairo-lint version: {cairo_lint.__version__}")

    # Step 1: Lint the source
    diagnostics = cairo_lint.lint(CAIRO_SOURCE)
    print(f"Lint findings: {len(diagnostics)}\n")

    # Step 2: Render each finding with its source line
    for diagnostic in diagnostics:
        print(cairo_lint.format_diagnostic(diagnostic))

    # Step 3: Apply the safe fixes
    fixed = cairo_lint.fix(CAIRO_SOURCE)
    print("Fixed source:")
    print(fixed)

    # Step 4: What is left needs a human
    remaining = cairo_lint.lint(fixed)
    print(f"Findings after fixing: {len(remaining)}")
    for diagnostic in remaining:
        print(f"  {diagnostic}")


if __name__ == "__main__":
    main()
