"""Lints on ``enum`` definitions.

Rule groups:
    enum_variant_names           every variant shares a word prefix or suffix
    empty_enum_brackets_variant  ``Variant: ()`` where ``Variant`` suffices
"""
from __future__ import annotations

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.grammar.tokens import TokenType
from cairo_lint.linter.context import RuleDescriptor, RuleGroup
from cairo_lint.linter.rules.helpers import token_texts
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode


def _variants(enum_item: SyntaxNode) -> list[SyntaxNode]:
    members = enum_item.child(SyntaxKind.MEMBER_LIST)
    if members is None:
        return []
    return members.children_of_kind(SyntaxKind.VARIANT)


def _variant_name(variant: SyntaxNode) -> SyntaxNode:
    name = variant.terminal(TokenType.IDENT)
    assert name is not None
    return name


# ---------------------------------------------------------------------------
# enum_variant_names
# ---------------------------------------------------------------------------


def word_split(name: str) -> list[str]:
    """Split an identifier into words at ``_`` and lower-to-upper case changes.

    Example
    -------
    ::

        >>> word_split("ColorRed")
        ['Color', 'Red']
        >>> word_split("big_box")
        ['big', 'box']
    """
    words: list[str] = []
    start = 0
    for i in range(1, len(name)):
        prev, curr = name[i - 1], name[i]
        if curr == "_":
            words.append(name[start:i])
            start = i + 1
        elif curr.isupper() and prev.islower():
            words.append(name[start:i])
            start = i
    if start < len(name):
        words.append(name[start:])
    return [word for word in words if word]


def common_affixes(names: list[str]) -> tuple[int, int]:
    """Return how many leading and trailing words all ``names`` share.

    Fewer than two names, or any single-word name, share nothing.
    """
    if len(names) < 2:
        return 0, 0
    splits = [word_split(name) for name in names]
    if any(len(words) < 2 for words in splits):
        return 0, 0
    first = splits[0]
    prefix, suffix = len(first), len(first)
    for words in splits[1:]:
        prefix = _shared_length(first[:prefix], words)
        suffix = _shared_length(list(reversed(first))[:suffix], list(reversed(words)))
    return prefix, suffix


def _shared_length(lhs: list[str], rhs: list[str]) -> int:
    count = 0
    for left, right in zip(lhs, rhs):
        if left != right:
            break
        count += 1
    return count


def check_enum_variant_names(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report an enum whose variant names all share a prefix or a suffix."""
    if item.kind is not SyntaxKind.ITEM_ENUM:
        return []
    names = [_variant_name(variant).text_without_trivia for variant in _variants(item)]
    prefix, suffix = common_affixes(names)
    if prefix or suffix:
        return [ENUM_VARIANT_NAMES.diagnostic(item)]
    return []


def fix_enum_variant_names(node: SyntaxNode) -> tuple[SyntaxNode, str] | None:
    """Strip the shared words from every variant name.

    Returns None when stripping would leave a variant without a name or
    give two variants the same name.

    Raises
    ------
    ValueError
        If ``node`` is not an enum.
    """
    if node.kind is not SyntaxKind.ITEM_ENUM:
        raise ValueError(f"Expected an enum, got {node!r}")
    name_nodes = [_variant_name(variant) for variant in _variants(node)]
    names = [name.text_without_trivia for name in name_nodes]
    prefix, suffix = common_affixes(names)

    renamed: list[str] = []
    for name in names:
        words = word_split(name)
        kept = words[prefix: len(words) - suffix]
        if not kept:
            return None
        renamed.append(("_" if "_" in name else "").join(kept))
    if len(set(renamed)) != len(renamed):
        return None

    origin = node.span_without_trivia.start
    text = node.text_without_trivia
    pieces: list[str] = []
    cursor = 0
    for name_node, new_name in zip(name_nodes, renamed):
        span = name_node.span_without_trivia
        pieces.append(text[cursor: span.start - origin])
        pieces.append(new_name)
        cursor = span.end - origin
    pieces.append(text[cursor:])
    return node, "".join(pieces)


ENUM_VARIANT_NAMES = RuleDescriptor(
    kind=LintKind.ENUM_VARIANT_NAMES,
    allowed_name="enum_variant_names",
    message="All enum variants are prefixed or suffixed by the same characters.",
    fixer=fix_enum_variant_names,
)

ENUM_VARIANT_NAMES_GROUP = RuleGroup(
    name="enum_variant_names",
    rules=(ENUM_VARIANT_NAMES,),
    check=check_enum_variant_names,
)


# ---------------------------------------------------------------------------
# empty_enum_brackets_variant
# ---------------------------------------------------------------------------


def _has_unit_type(variant: SyntaxNode) -> bool:
    clause = variant.child(SyntaxKind.TYPE_CLAUSE)
    if clause is None:
        return False
    type_node = clause.child(SyntaxKind.TYPE)
    return type_node is not None and token_texts(type_node) == ["(", ")"]


def check_empty_enum_brackets_variant(
    item: SyntaxNode, model: SemanticModel
) -> list[Diagnostic]:
    """Report variants declared with the unit type."""
    if item.kind is not SyntaxKind.ITEM_ENUM:
        return []
    return [
        EMPTY_ENUM_BRACKETS_VARIANT.diagnostic(variant)
        for variant in _variants(item)
        if _has_unit_type(variant)
    ]


def fix_empty_enum_brackets_variant(node: SyntaxNode) -> tuple[SyntaxNode, str] | None:
    """Drop the ``: ()`` type clause of a variant.

    Raises
    ------
    ValueError
        If ``node`` is not a variant.
    """
    if node.kind is not SyntaxKind.VARIANT:
        raise ValueError(f"Expected an enum variant, got {node!r}")
    name_end = _variant_name(node).span_without_trivia.end
    start = node.span_without_trivia.start
    return node, node.text_without_trivia[: name_end - start]


EMPTY_ENUM_BRACKETS_VARIANT = RuleDescriptor(
    kind=LintKind.EMPTY_ENUM_BRACKETS_VARIANT,
    allowed_name="empty_enum_brackets_variant",
    message="redundant parentheses in enum variant definition",
    fixer=fix_empty_enum_brackets_variant,
)

EMPTY_ENUM_BRACKETS_VARIANT_GROUP = RuleGroup(
    name="empty_enum_brackets_variant",
    rules=(EMPTY_ENUM_BRACKETS_VARIANT,),
    check=check_empty_enum_brackets_variant,
)
