"""CLI entry point for cairo-lint.

Invoked as::

    cairo-lint [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m cairo_lint.cli.main

Commands
--------
check       Lint Cairo files, optionally applying safe fixes
rules       List the registered lint rules
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from cairo_lint.diagnostics.diagnostic import Diagnostic

if TYPE_CHECKING:
    from cairo_lint.config import LintConfig
    from cairo_lint.files import DiskFileStore
    from cairo_lint.linter import CairoLinter

console = Console()
err_console = Console(stderr=True)

CAIRO_SUFFIX = ".cairo"


def _severity_color(severity_name: str) -> str:
    """Map a Severity name to a Rich color string."""
    colors = {
        "ERROR": "red",
        "WARNING": "yellow",
    }
    return colors.get(severity_name, "white")


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _collect_files(paths: tuple[str, ...]) -> list[Path]:
    """Expand directories into the ``.cairo`` files they contain."""
    files: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob(f"*{CAIRO_SUFFIX}") if p.is_file()))
        else:
            files.append(path)
    return files


def _load_config_or_exit(config_path: str | None, files: list[Path]) -> LintConfig:
    """Load the explicit or nearest configuration, exiting on error."""
    from cairo_lint.config import ConfigError, LintConfig, find_config, load_config

    if config_path is not None:
        path: Path | None = Path(config_path)
    elif files:
        path = find_config(files[0])
    else:
        path = None
    if path is None:
        return LintConfig()

    try:
        return load_config(path)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)


def _print_table(diagnostics: list[Diagnostic]) -> None:
    table = Table(title="Lint findings", show_lines=True)
    table.add_column("Severity", style="bold", min_width=10)
    table.add_column("Rule", min_width=10)
    table.add_column("Location", min_width=10)
    table.add_column("Message")

    for d in diagnostics:
        color = _severity_color(d.severity.name)
        table.add_row(
            f"[{color}]{d.severity.name}[/{color}]",
            d.kind.value,
            f"{d.file_id}:{d.line}:{d.col}",
            d.message,
        )
    console.print(table)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="cairo-lint")
def cli() -> None:
    """Lint engine for Cairo sources: rule checks, suppression, auto-fixes."""


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from cairo_lint import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]cairo-lint[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# rules command
# ---------------------------------------------------------------------------


@cli.command(name="rules")
def rules_command() -> None:
    """List every registered lint rule."""
    from cairo_lint.linter.context import get_lint_context

    context = get_lint_context()
    table = Table(title="Lint rules")
    table.add_column("Name", style="bold")
    table.add_column("Kind")
    table.add_column("Default")
    table.add_column("Fix")
    table.add_column("Message")

    for rule in context.rules:
        table.add_row(
            rule.allowed_name,
            rule.kind.value,
            "[green]on[/green]" if rule.enabled_by_default else "[dim]off[/dim]",
            "yes" if rule.has_fixer else "",
            rule.message,
        )
    console.print(table)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--fix", "apply_fixes", is_flag=True, default=False, help="Apply safe fixes in place")
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Configuration file (defaults to the nearest cairo-lint.yaml)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "text"], case_sensitive=False),
    default="table",
    help="Output style for findings",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug logging")
def check_command(
    paths: tuple[str, ...],
    apply_fixes: bool,
    config_path: str | None,
    output_format: str,
    verbose: bool,
) -> None:
    """Lint Cairo files.

    PATHS are .cairo files or directories searched for them.

    Examples:

    \b
        cairo-lint check src/
        cairo-lint check src/lib.cairo --fix
    """
    from cairo_lint.diagnostics.render import format_diagnostics
    from cairo_lint.files import DiskFileStore
    from cairo_lint.lexer import LexError
    from cairo_lint.linter import CairoLinter
    from cairo_lint.parser import ParseErrorCollection

    _configure_logging(verbose)
    files = _collect_files(paths)
    linter = CairoLinter(config=_load_config_or_exit(config_path, files))

    store = DiskFileStore()
    diagnostics: list[Diagnostic] = []
    failed = False
    for path in files:
        try:
            source = store.read(str(path))
        except (OSError, UnicodeDecodeError) as exc:
            err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
            failed = True
            continue
        try:
            diagnostics.extend(linter.lint(source, file_id=str(path)))
        except LexError as exc:
            err_console.print(f"[red]Lex error[/red] in {path}: {exc}")
            failed = True
        except ParseErrorCollection as exc:
            err_console.print(f"[red]Parse errors[/red] in {path}:")
            for error in exc.errors:
                err_console.print(f"  {error}")
            failed = True

    if not diagnostics:
        console.print(f"[green]OK[/green] {len(files)} file(s), no lint issues found")
    elif output_format == "text":
        click.echo(format_diagnostics(diagnostics), nl=False)
    else:
        _print_table(diagnostics)

    if apply_fixes and diagnostics:
        failed = _apply_fixes(diagnostics, linter, store) or failed

    errors = [d for d in diagnostics if d.is_error]
    if diagnostics:
        console.print(
            f"\n[bold]Summary:[/bold] {len(errors)} error(s), "
            f"{len(diagnostics) - len(errors)} warning(s)"
        )
    if errors or failed:
        sys.exit(1)


def _apply_fixes(diagnostics: list[Diagnostic], linter: CairoLinter, store: DiskFileStore) -> bool:
    """Apply the fixes of ``diagnostics`` on disk; return True on failure."""
    from cairo_lint.fixes import FixOutcome, collect_fixes, fix_files

    edits = collect_fixes(diagnostics, linter.context)
    results, failures = fix_files(edits, store)
    for result in results:
        if result.outcome is FixOutcome.APPLIED:
            console.print(f"[green]Fixed[/green] {result.file_id} ({len(result.edits)} edit(s))")
        elif result.outcome is FixOutcome.REJECTED:
            console.print(
                f"[yellow]Skipped[/yellow] {result.file_id}: overlapping fixes, re-run to apply"
            )
    for file_id, exc in failures.items():
        err_console.print(f"[red]Error:[/red] {file_id}: {exc}")
    return bool(failures)


if __name__ == "__main__":
    cli()
