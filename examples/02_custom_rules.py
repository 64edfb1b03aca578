#!/usr/bin/env python3
"""Example: Custom rules and project configuration

Registers an extra rule group on one linter, turns on the ``panic``
rule through a configuration, and shows how ``#[allow(...)]``
suppresses a finding.

Usage:
    python examples/02_custom_rules.py

Requirements:
    pip install cairo-lint
"""
from __future__ import annotations

from cairo_lint.config import LintConfig
from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.grammar.tokens import TokenType
from cairo_lint.linter import CairoLinter, RuleDescriptor, RuleGroup
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode

CAIRO_SOURCE = '''fn todo() {
    panic!("not implemented");
}

#[allow(panic)]
fn fail() {
    panic!("expected");
}
'''

TODO_FN = RuleDescriptor(
    kind=LintKind.UNKNOWN,
    allowed_name="todo_fn",
    message="Function named `todo` left in the code.",
)


def check_todo_fn(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    if item.kind is not SyntaxKind.ITEM_FUNCTION:
        return []
    name = item.terminal(TokenType.IDENT)
    if name is None or name.text_without_trivia != "todo":
        return []
    return [TODO_FN.diagnostic(item)]


def main() -> None:
    # Step 1: Default configuration, panic is off
    linter = CairoLinter()
    print(f"Default rules: {linter.rule_count}")
    print(f"Findings: {len(linter.lint(CAIRO_SOURCE))}")

    # Step 2: Turn panic on; the #[allow(panic)] function stays quiet
    linter = CairoLinter(config=LintConfig.from_mapping({"panic": True}))
    for diagnostic in linter.lint(CAIRO_SOURCE):
        print(f"  {diagnostic}")

    # Step 3: Add a custom rule group to this linter only
    linter.add_group(RuleGroup(name="todo_fn", rules=(TODO_FN,), check=check_todo_fn))
    print(f"\nRules with the custom group: {linter.rule_count}")
    for diagnostic in linter.lint(CAIRO_SOURCE):
        print(f"  {diagnostic}")


if __name__ == "__main__":
    main()
