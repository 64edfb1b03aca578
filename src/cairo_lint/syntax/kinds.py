"""Syntax node kinds produced by the Cairo parser.

Every node of the syntax tree carries exactly one ``SyntaxKind``.
Terminals (single tokens) are all of kind ``TERMINAL``; their token type
distinguishes them.  Interior nodes follow the naming of the Cairo
compiler's syntax model (``ItemUse``, ``UsePathMulti``, ``ExprBinary``
...) written in upper snake case.
"""
from __future__ import annotations

from enum import Enum, auto


class SyntaxKind(Enum):
    """Exhaustive enumeration of syntax node kinds."""

    # -----------------------------------------------------------------
    # File and terminals
    # -----------------------------------------------------------------
    SYNTAX_FILE = auto()
    TERMINAL = auto()

    # -----------------------------------------------------------------
    # Attributes and visibility
    # -----------------------------------------------------------------
    ATTRIBUTE_LIST = auto()
    ATTRIBUTE = auto()
    ARG_LIST = auto()
    NAMED_ARG = auto()
    VISIBILITY = auto()

    # -----------------------------------------------------------------
    # Use declarations
    # -----------------------------------------------------------------
    ITEM_USE = auto()
    USE_PATH_SINGLE = auto()   # segment::<rest>
    USE_PATH_LEAF = auto()     # final name, optionally aliased
    USE_PATH_MULTI = auto()    # { a, b }
    USE_PATH_LIST = auto()     # the comma separated entries of a multi
    USE_PATH_STAR = auto()     # *
    ALIAS_CLAUSE = auto()      # as name

    # -----------------------------------------------------------------
    # Other module items
    # -----------------------------------------------------------------
    ITEM_FUNCTION = auto()
    FUNCTION_SIGNATURE = auto()
    GENERIC_PARAMS = auto()
    PARAM_LIST = auto()
    PARAM = auto()
    RETURN_TYPE = auto()
    ITEM_MODULE = auto()
    ITEM_BODY = auto()
    ITEM_ENUM = auto()
    ITEM_STRUCT = auto()
    MEMBER_LIST = auto()
    VARIANT = auto()
    MEMBER = auto()
    TYPE_CLAUSE = auto()
    ITEM_CONST = auto()
    ITEM_IMPL = auto()
    ITEM_TRAIT = auto()
    TRAIT_FUNCTION = auto()

    # -----------------------------------------------------------------
    # Types
    # -----------------------------------------------------------------
    TYPE = auto()
    GENERIC_ARGS = auto()

    # -----------------------------------------------------------------
    # Statements
    # -----------------------------------------------------------------
    BLOCK = auto()
    STATEMENT_LET = auto()
    STATEMENT_EXPR = auto()
    STATEMENT_RETURN = auto()
    STATEMENT_BREAK = auto()
    STATEMENT_CONTINUE = auto()

    # -----------------------------------------------------------------
    # Patterns
    # -----------------------------------------------------------------
    PATTERN_IDENT = auto()
    PATTERN_WILDCARD = auto()
    PATTERN_TUPLE = auto()
    PATTERN_ENUM = auto()
    PATTERN_LITERAL = auto()

    # -----------------------------------------------------------------
    # Expressions
    # -----------------------------------------------------------------
    EXPR_PATH = auto()
    EXPR_LITERAL = auto()
    EXPR_PARENTHESIZED = auto()
    EXPR_TUPLE = auto()
    EXPR_UNARY = auto()
    EXPR_BINARY = auto()
    EXPR_CALL = auto()
    EXPR_INLINE_MACRO = auto()
    EXPR_INDEXED = auto()
    EXPR_STRUCT_CTOR = auto()
    STRUCT_ARG = auto()
    EXPR_IF = auto()
    CONDITION_LET = auto()
    ELSE_CLAUSE = auto()
    EXPR_LOOP = auto()
    EXPR_WHILE = auto()
    EXPR_FOR = auto()
    EXPR_MATCH = auto()
    MATCH_ARM = auto()
    EXPR_ERROR_PROPAGATE = auto()
    EXPR_ARRAY = auto()


# Kinds that are module-level items.
ITEM_KINDS: frozenset[SyntaxKind] = frozenset(
    {
        SyntaxKind.ITEM_USE,
        SyntaxKind.ITEM_FUNCTION,
        SyntaxKind.ITEM_MODULE,
        SyntaxKind.ITEM_ENUM,
        SyntaxKind.ITEM_STRUCT,
        SyntaxKind.ITEM_CONST,
        SyntaxKind.ITEM_IMPL,
        SyntaxKind.ITEM_TRAIT,
    }
)

# Kinds that are statements inside a block.
STATEMENT_KINDS: frozenset[SyntaxKind] = frozenset(
    {
        SyntaxKind.STATEMENT_LET,
        SyntaxKind.STATEMENT_EXPR,
        SyntaxKind.STATEMENT_RETURN,
        SyntaxKind.STATEMENT_BREAK,
        SyntaxKind.STATEMENT_CONTINUE,
    }
)

# Expressions that end with a block and may stand as a statement without
# a trailing semicolon.
BLOCK_LIKE_KINDS: frozenset[SyntaxKind] = frozenset(
    {
        SyntaxKind.BLOCK,
        SyntaxKind.EXPR_IF,
        SyntaxKind.EXPR_LOOP,
        SyntaxKind.EXPR_WHILE,
        SyntaxKind.EXPR_FOR,
        SyntaxKind.EXPR_MATCH,
    }
)
