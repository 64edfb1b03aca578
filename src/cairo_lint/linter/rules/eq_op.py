"""Binary operations whose two operands are the same expression.

One checker, six rules, told apart by the operator:

    div_eq_op       ``a / a``
    eq_comp_op      ``a == a``, ``a <= a``, ``a >= a``
    neq_comp_op     ``a != a``, ``a < a``, ``a > a``
    eq_diff_op      ``a - a``
    eq_bitwise_op   ``a & a``, ``a | a``, ``a ^ a``
    eq_logical_op   ``a && a``, ``a || a``

Operands are compared token by token, trivia ignored.  Operations on
function or method calls are skipped.
"""
from __future__ import annotations

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.grammar.tokens import TokenType
from cairo_lint.linter.context import RuleDescriptor, RuleGroup
from cairo_lint.linter.rules.helpers import binary_parts, is_call, nodes_of_kind, same_text
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode

DIVISION_EQUALITY_OPERATION = RuleDescriptor(
    kind=LintKind.DIV_EQ_OP,
    allowed_name="div_eq_op",
    message=(
        "Division with identical operands, this operation always results in one "
        "(except for zero) and may indicate a logic error"
    ),
)

EQUAL_COMPARISON_OPERATION = RuleDescriptor(
    kind=LintKind.EQ_COMP_OP,
    allowed_name="eq_comp_op",
    message=(
        "Comparison with identical operands, this operation always results in true "
        "and may indicate a logic error"
    ),
)

NOT_EQUAL_COMPARISON_OPERATION = RuleDescriptor(
    kind=LintKind.NEQ_COMP_OP,
    allowed_name="neq_comp_op",
    message=(
        "Comparison with identical operands, this operation always results in false "
        "and may indicate a logic error"
    ),
)

DIFFERENCE_EQUALITY_OPERATION = RuleDescriptor(
    kind=LintKind.EQ_DIFF_OP,
    allowed_name="eq_diff_op",
    message=(
        "Subtraction with identical operands, this operation always results in zero "
        "and may indicate a logic error"
    ),
)

BITWISE_EQUALITY_OPERATION = RuleDescriptor(
    kind=LintKind.EQ_BITWISE_OP,
    allowed_name="eq_bitwise_op",
    message=(
        "Bitwise operation with identical operands, this operation always results in "
        "the same value and may indicate a logic error"
    ),
)

LOGICAL_EQUALITY_OPERATION = RuleDescriptor(
    kind=LintKind.EQ_LOGICAL_OP,
    allowed_name="eq_logical_op",
    message=(
        "Logical operation with identical operands, this operation always results in "
        "the same value and may indicate a logic error"
    ),
)

_RULE_BY_OPERATOR: dict[TokenType, RuleDescriptor] = {
    TokenType.SLASH: DIVISION_EQUALITY_OPERATION,
    TokenType.EQ_EQ: EQUAL_COMPARISON_OPERATION,
    TokenType.LE: EQUAL_COMPARISON_OPERATION,
    TokenType.GE: EQUAL_COMPARISON_OPERATION,
    TokenType.NEQ: NOT_EQUAL_COMPARISON_OPERATION,
    TokenType.LT: NOT_EQUAL_COMPARISON_OPERATION,
    TokenType.GT: NOT_EQUAL_COMPARISON_OPERATION,
    TokenType.MINUS: DIFFERENCE_EQUALITY_OPERATION,
    TokenType.AND: BITWISE_EQUALITY_OPERATION,
    TokenType.OR: BITWISE_EQUALITY_OPERATION,
    TokenType.XOR: BITWISE_EQUALITY_OPERATION,
    TokenType.AND_AND: LOGICAL_EQUALITY_OPERATION,
    TokenType.OR_OR: LOGICAL_EQUALITY_OPERATION,
}


def check_eq_op(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report operations with textually identical operands."""
    diagnostics: list[Diagnostic] = []
    for node in nodes_of_kind(item, SyntaxKind.EXPR_BINARY):
        parts = binary_parts(node)
        assert parts is not None
        rule = _RULE_BY_OPERATOR.get(parts.op)
        if rule is None:
            continue
        if is_call(parts.lhs) or is_call(parts.rhs):
            continue
        if same_text(parts.lhs, parts.rhs):
            diagnostics.append(rule.diagnostic(node))
    return diagnostics


EQ_OP_GROUP = RuleGroup(
    name="eq_op",
    rules=(
        DIVISION_EQUALITY_OPERATION,
        EQUAL_COMPARISON_OPERATION,
        NOT_EQUAL_COMPARISON_OPERATION,
        DIFFERENCE_EQUALITY_OPERATION,
        BITWISE_EQUALITY_OPERATION,
        LOGICAL_EQUALITY_OPERATION,
    ),
    check=check_eq_op,
)
