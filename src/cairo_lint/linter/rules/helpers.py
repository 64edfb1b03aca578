"""Syntax helpers shared by the lint rules.

Checkers receive a module item and walk its syntax directly.  These
helpers answer the recurring questions: which function bodies does an
item own, what are the parts of a binary expression, is an expression a
literal zero, how is a moved snippet re-indented.
"""
from __future__ import annotations

import re
from collections.abc import Iterator
from typing import NamedTuple

from cairo_lint.grammar.tokens import TokenType
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode

_INT_LITERAL = re.compile(
    r"^(?P<body>0x[0-9a-fA-F_]+|0o[0-7_]+|0b[01_]+|[0-9][0-9_]*)"
    r"(?:_?(?P<suffix>[ui](?:8|16|32|64|128|256)|usize|felt252))?$"
)

COMPARISON_OPS: frozenset[TokenType] = frozenset(
    {TokenType.EQ_EQ, TokenType.NEQ, TokenType.LT, TokenType.GT, TokenType.LE, TokenType.GE}
)

INDENT_UNIT = "    "


class BinaryParts(NamedTuple):
    """The operands and operator of an ``EXPR_BINARY`` node."""

    lhs: SyntaxNode
    op: TokenType
    rhs: SyntaxNode


# ---------------------------------------------------------------------------
# Item traversal
# ---------------------------------------------------------------------------


def function_bodies(item: SyntaxNode) -> list[SyntaxNode]:
    """Return the body blocks of the functions defined by ``item``.

    A free function owns one body; an ``impl`` or ``trait`` owns the
    bodies of its methods (trait methods without a default body have
    none).  Other items own no function bodies.
    """
    if item.kind is SyntaxKind.ITEM_FUNCTION:
        body = item.child(SyntaxKind.BLOCK)
        return [body] if body is not None else []
    if item.kind not in (SyntaxKind.ITEM_IMPL, SyntaxKind.ITEM_TRAIT):
        return []
    item_body = item.child(SyntaxKind.ITEM_BODY)
    if item_body is None:
        return []
    bodies: list[SyntaxNode] = []
    for method in item_body.children_of_kind(SyntaxKind.ITEM_FUNCTION):
        body = method.child(SyntaxKind.BLOCK)
        if body is not None:
            bodies.append(body)
    return bodies


def functions(item: SyntaxNode) -> list[SyntaxNode]:
    """Return the function declarations of ``item``, with or without body."""
    kinds = (SyntaxKind.ITEM_FUNCTION, SyntaxKind.TRAIT_FUNCTION)
    if item.kind in kinds:
        return [item]
    if item.kind not in (SyntaxKind.ITEM_IMPL, SyntaxKind.ITEM_TRAIT):
        return []
    item_body = item.child(SyntaxKind.ITEM_BODY)
    if item_body is None:
        return []
    return [child for child in item_body.children if child.kind in kinds]


def nodes_of_kind(item: SyntaxNode, kind: SyntaxKind) -> Iterator[SyntaxNode]:
    """Yield every node of ``kind`` inside the function bodies of ``item``."""
    for body in function_bodies(item):
        for node in body.descendants():
            if node.kind is kind:
                yield node


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


def binary_parts(node: SyntaxNode) -> BinaryParts | None:
    """Split an ``EXPR_BINARY`` into its parts, None for other nodes."""
    if node.kind is not SyntaxKind.EXPR_BINARY:
        return None
    lhs, op, rhs = node.children
    assert op.token_type is not None
    return BinaryParts(lhs, op.token_type, rhs)


def binary_op(node: SyntaxNode) -> TokenType | None:
    """Return the operator of a binary expression, None for other nodes."""
    parts = binary_parts(node)
    return parts.op if parts is not None else None


def is_comparison(node: SyntaxNode) -> bool:
    """Return True for ``==``, ``!=``, ``<``, ``>``, ``<=`` and ``>=``."""
    return binary_op(node) in COMPARISON_OPS


def int_literal_value(node: SyntaxNode) -> int | None:
    """Return the value of an integer literal expression.

    Numeric suffixes (``5_u32``, ``7u8``) and hexadecimal, octal and
    binary prefixes are accepted; a leading unary minus negates.
    """
    if node.kind is SyntaxKind.EXPR_UNARY:
        op, operand = node.children
        if op.token_type is not TokenType.MINUS:
            return None
        value = int_literal_value(operand)
        return -value if value is not None else None
    if node.kind is not SyntaxKind.EXPR_LITERAL:
        return None
    token = node.children[0].token
    if token is None or token.type is not TokenType.NUMBER:
        return None
    match = _INT_LITERAL.match(token.value)
    if match is None:
        return None
    return int(match.group("body").replace("_", ""), 0)


def is_int_literal(node: SyntaxNode, value: int) -> bool:
    """Return True if ``node`` is an integer literal equal to ``value``."""
    return int_literal_value(node) == value


def bool_literal_value(node: SyntaxNode) -> bool | None:
    """Return the value of a ``true`` or ``false`` literal."""
    if node.kind is not SyntaxKind.EXPR_LITERAL:
        return None
    token_type = node.children[0].token_type
    if token_type is TokenType.TRUE:
        return True
    if token_type is TokenType.FALSE:
        return False
    return None


def is_variable(node: SyntaxNode) -> bool:
    """Return True for a plain single-segment path such as ``x``."""
    return node.kind is SyntaxKind.EXPR_PATH and len(node.children) == 1


def is_variable_or_snapshot(node: SyntaxNode) -> bool:
    """Return True for ``x`` or ``@x``."""
    if node.kind is SyntaxKind.EXPR_UNARY:
        op, operand = node.children
        return op.token_type is TokenType.AT and is_variable(operand)
    return is_variable(node)


def is_call(node: SyntaxNode) -> bool:
    """Return True if evaluating ``node`` calls a function or method.

    Snapshots of calls (``@f()``) count as calls.
    """
    if node.kind in (SyntaxKind.EXPR_CALL, SyntaxKind.EXPR_INLINE_MACRO):
        return True
    if node.kind is SyntaxKind.EXPR_UNARY:
        return is_call(node.children[1])
    parts = binary_parts(node)
    if parts is not None and parts.op is TokenType.DOT:
        return parts.rhs.kind is SyntaxKind.EXPR_CALL
    return False


def is_simple_operand(node: SyntaxNode) -> bool:
    """Return True if ``node`` needs no parentheses under a unary operator."""
    return node.kind in (
        SyntaxKind.EXPR_PATH,
        SyntaxKind.EXPR_LITERAL,
        SyntaxKind.EXPR_CALL,
        SyntaxKind.EXPR_PARENTHESIZED,
        SyntaxKind.EXPR_INLINE_MACRO,
        SyntaxKind.EXPR_INDEXED,
    ) or binary_op(node) is TokenType.DOT


def same_text(lhs: SyntaxNode, rhs: SyntaxNode) -> bool:
    """Return True if both nodes have the same text, ignoring trivia."""
    return token_texts(lhs) == token_texts(rhs)


def token_texts(node: SyntaxNode) -> list[str]:
    """Return the token values under ``node`` in source order."""
    if node.is_terminal:
        token = node.token
        return [token.value] if token is not None else []
    return [
        desc.token.value
        for desc in node.descendants()
        if desc.is_terminal and desc.token is not None
    ]


def strip_parens(node: SyntaxNode) -> SyntaxNode:
    """Return the innermost expression under nested parentheses."""
    while node.kind is SyntaxKind.EXPR_PARENTHESIZED:
        node = node.children[1]
    return node


# ---------------------------------------------------------------------------
# Statements and if-expressions
# ---------------------------------------------------------------------------


def block_statements(block: SyntaxNode) -> list[SyntaxNode]:
    """Return the statements of a ``BLOCK`` (braces excluded)."""
    return [child for child in block.children if not child.is_terminal]


def sole_if_of_block(block: SyntaxNode) -> SyntaxNode | None:
    """Return the ``if`` expression a block consists of, if any.

    The block must hold exactly one statement, itself an ``if``
    expression without attributes.
    """
    statements = block_statements(block)
    if len(statements) != 1:
        return None
    statement = statements[0]
    if statement.kind is not SyntaxKind.STATEMENT_EXPR:
        return None
    expr = statement.children[0]
    return expr if expr.kind is SyntaxKind.EXPR_IF else None


def if_condition(if_expr: SyntaxNode) -> SyntaxNode:
    """Return the condition of an ``if`` (an expression or ``CONDITION_LET``)."""
    return if_expr.children[1]


def if_block(if_expr: SyntaxNode) -> SyntaxNode:
    """Return the block run when the condition holds."""
    return if_expr.children[2]


def else_clause(if_expr: SyntaxNode) -> SyntaxNode | None:
    """Return the ``ELSE_CLAUSE`` of an ``if``, if present."""
    return if_expr.child(SyntaxKind.ELSE_CLAUSE)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def line_indent(node: SyntaxNode) -> str:
    """Return the indentation of the line ``node`` starts on."""
    line, _ = node.line_col
    text = node.tree.line_text(line)
    return text[: len(text) - len(text.lstrip(" \t"))]


def dedent_continuation(text: str, unit: str = INDENT_UNIT) -> str:
    """Remove one indentation level from every line of ``text`` but the first."""
    first, *rest = text.split("\n")
    dedented = [line[len(unit):] if line.startswith(unit) else line.lstrip(" \t") for line in rest]
    return "\n".join([first, *dedented])
