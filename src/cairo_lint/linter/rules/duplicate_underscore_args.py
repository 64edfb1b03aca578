"""Function parameters differing only by a leading underscore (``a`` and ``_a``)."""
from __future__ import annotations

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.grammar.tokens import TokenType
from cairo_lint.linter.context import RuleDescriptor, RuleGroup
from cairo_lint.linter.rules.helpers import functions
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode


def _params(function: SyntaxNode) -> list[SyntaxNode]:
    signature = function.child(SyntaxKind.FUNCTION_SIGNATURE)
    assert signature is not None
    param_list = signature.child(SyntaxKind.PARAM_LIST)
    assert param_list is not None
    return param_list.children_of_kind(SyntaxKind.PARAM)


def check_duplicate_underscore_args(
    item: SyntaxNode, model: SemanticModel
) -> list[Diagnostic]:
    """Report the second of two parameters named ``x`` and ``_x``."""
    diagnostics: list[Diagnostic] = []
    for function in functions(item):
        seen: set[str] = set()
        for param in _params(function):
            name = param.terminal(TokenType.IDENT)
            if name is None:
                continue
            stripped = name.text_without_trivia.removeprefix("_")
            if stripped in seen:
                diagnostics.append(DUPLICATE_UNDERSCORE_ARGS.diagnostic(param))
            seen.add(stripped)
    return diagnostics


DUPLICATE_UNDERSCORE_ARGS = RuleDescriptor(
    kind=LintKind.DUPLICATE_UNDERSCORE_ARGS,
    allowed_name="duplicate_underscore_args",
    message=(
        "duplicate arguments, having another argument having almost the same name "
        "makes code comprehension and documentation more difficult"
    ),
)

DUPLICATE_UNDERSCORE_ARGS_GROUP = RuleGroup(
    name="duplicate_underscore_args",
    rules=(DUPLICATE_UNDERSCORE_ARGS,),
    check=check_duplicate_underscore_args,
)
