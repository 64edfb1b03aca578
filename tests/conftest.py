"""Shared test fixtures for cairo-lint.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from cairo_lint.linter import CairoLinter
from cairo_lint.linter.context import LintContext, get_lint_context


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "cairo_lint"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def context() -> LintContext:
    """Return the shared registry of every shipped rule."""
    return get_lint_context()


@pytest.fixture()
def linter() -> CairoLinter:
    """Return a linter with the default configuration."""
    return CairoLinter()
