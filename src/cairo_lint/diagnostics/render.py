"""Human-readable rendering of diagnostics.

Produces the annotated-source layout used by the Cairo compiler::

    warning: Plugin diagnostic: <message>
     --> lib.cairo:4:14
      |
    4 |     let _y = x + 0;
      |              -----
      |

Diagnostics raised by lint rules carry the ``Plugin diagnostic:``
prefix; diagnostics reported by the host (unused imports) do not.
"""
from __future__ import annotations

from collections.abc import Iterable

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind

_PLUGIN_PREFIX = "Plugin diagnostic: "

_HOST_KINDS = frozenset({LintKind.UNUSED_IMPORTS})


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Render ``diagnostic`` with its source line and an underline.

    The result depends only on the diagnostic and the text of the tree
    its anchor belongs to.  Anchors spanning several lines are
    underlined on their first line only.

    Parameters
    ----------
    diagnostic:
        The diagnostic to render.

    Returns
    -------
    str
        Multi-line rendering terminated by a newline.
    """
    anchor = diagnostic.anchor
    tree = anchor.tree
    span = anchor.span_without_trivia
    line, col = tree.line_col(span.start)
    line_text = tree.line_text(line)

    underline_len = min(span.end, tree.line_start(line) + len(line_text)) - span.start
    underline = " " * (col - 1) + "-" * max(underline_len, 1)

    gutter = len(str(line))
    pad = " " * gutter
    prefix = "" if _is_host_diagnostic(diagnostic) else _PLUGIN_PREFIX
    lines = [
        f"{diagnostic.severity.label}: {prefix}{diagnostic.message}",
        f"{pad}--> {diagnostic.file_id}:{line}:{col}",
        f"{pad} |",
        f"{line} | {line_text}",
        f"{pad} | {underline}",
        f"{pad} |",
    ]
    return "\n".join(lines) + "\n"


def _is_host_diagnostic(diagnostic: Diagnostic) -> bool:
    if diagnostic.kind is not LintKind.UNKNOWN:
        return diagnostic.kind in _HOST_KINDS
    from cairo_lint.linter.context import get_lint_context

    return get_lint_context().lint_kind(diagnostic.message) in _HOST_KINDS


def format_diagnostics(diagnostics: Iterable[Diagnostic]) -> str:
    """Render several diagnostics one after another."""
    return "".join(format_diagnostic(diag) for diag in diagnostics)
