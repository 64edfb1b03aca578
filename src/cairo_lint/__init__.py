"""cairo-lint: lint engine for Cairo sources with conflict-safe auto-fixes.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import cairo_lint

    source = '''
    fn main() {
        let x = 1;
        let _y = x + 0;
    }
    '''

    # Lint a source string
    diagnostics = cairo_lint.lint(source)

    # Render the findings the way the compiler does
    print(cairo_lint.format_diagnostic(diagnostics[0]))

    # Apply every safe fix
    fixed = cairo_lint.fix(source)

    cairo_lint.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from pathlib import Path

    from cairo_lint.config import LintConfig
    from cairo_lint.diagnostics.diagnostic import Diagnostic
    from cairo_lint.syntax.tree import SyntaxTree


def parse(source: str, file_id: str = "lib.cairo") -> "SyntaxTree":
    """Parse a Cairo source string into a ``SyntaxTree``.

    Parameters
    ----------
    source:
        Complete Cairo source text.
    file_id:
        Identifier carried by every node and diagnostic.

    Raises
    ------
    cairo_lint.lexer.LexError
        If the source contains invalid characters.
    cairo_lint.parser.ParseErrorCollection
        If the source contains syntactic errors.
    """
    from cairo_lint.parser.parser import parse as _parse

    return _parse(source, file_id)


def lint(
    source: str,
    file_id: str = "lib.cairo",
    config: "LintConfig | None" = None,
) -> list["Diagnostic"]:
    """Lint a Cairo source string with every registered rule.

    Parameters
    ----------
    source:
        Complete Cairo source text.
    file_id:
        Identifier reported in diagnostics.
    config:
        Optional project rule switches.

    Returns
    -------
    list[Diagnostic]
        Unsuppressed findings sorted by position.
    """
    from cairo_lint.linter.linter import lint as _lint

    return _lint(source, file_id, config)


def fix(
    source: str,
    file_id: str = "lib.cairo",
    config: "LintConfig | None" = None,
) -> str:
    """Return ``source`` with every safe fix applied.

    If the fixes of the file overlap, none is applied and ``source`` is
    returned unchanged.
    """
    from cairo_lint.linter.linter import fix as _fix

    return _fix(source, file_id, config)


def format_diagnostic(diagnostic: "Diagnostic") -> str:
    """Render ``diagnostic`` with its source line and an underline."""
    from cairo_lint.diagnostics.render import format_diagnostic as _format

    return _format(diagnostic)


def load_config(path: "Path") -> "LintConfig":
    """Load a ``cairo-lint.yaml`` configuration file.

    Raises
    ------
    cairo_lint.config.ConfigError
        If the file is malformed or names an unknown rule.
    """
    from cairo_lint.config import load_config as _load

    return _load(path)


__all__ = [
    "__version__",
    "parse",
    "lint",
    "fix",
    "format_diagnostic",
    "load_config",
]
