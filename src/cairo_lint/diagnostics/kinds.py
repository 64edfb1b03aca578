"""Closed enumeration of lint kinds.

Every rule the engine knows about has exactly one ``LintKind``.  A
diagnostic produced by a shipped checker carries its kind directly;
diagnostics handed over by a host with only a message start as
``UNKNOWN`` and are resolved through the rule registry.
"""
from __future__ import annotations

from enum import Enum


class LintKind(Enum):
    """Tag identifying the rule a diagnostic belongs to."""

    UNKNOWN = "unknown"

    # Reported by the host, fixed by the import pruner.
    UNUSED_IMPORTS = "unused_imports"

    BOOL_COMPARISON = "bool_comparison"
    DOUBLE_PARENS = "double_parens"
    REDUNDANT_OPERATION = "redundant_op"
    ERASING_OPERATION = "erasing_op"

    DIV_EQ_OP = "div_eq_op"
    EQ_COMP_OP = "eq_comp_op"
    NEQ_COMP_OP = "neq_comp_op"
    EQ_DIFF_OP = "eq_diff_op"
    EQ_BITWISE_OP = "eq_bitwise_op"
    EQ_LOGICAL_OP = "eq_logical_op"

    INT_GE_PLUS_ONE = "int_ge_plus_one"
    INT_GE_MIN_ONE = "int_ge_min_one"
    INT_LE_PLUS_ONE = "int_le_plus_one"
    INT_LE_MIN_ONE = "int_le_min_one"

    IMPOSSIBLE_COMPARISON = "impossible_comparison"
    SIMPLIFIABLE_COMPARISON = "simplifiable_comparison"
    REDUNDANT_COMPARISON = "redundant_comparison"
    CONTRADICTORY_COMPARISON = "contradictory_comparison"

    COLLAPSIBLE_IF = "collapsible_if"
    COLLAPSIBLE_IF_ELSE = "collapsible_if_else"
    IFS_SAME_COND = "ifs_same_cond"

    BREAK_UNIT = "break_unit"
    PANIC = "panic"
    DUPLICATE_UNDERSCORE_ARGS = "duplicate_underscore_args"
    BITWISE_FOR_PARITY_CHECK = "bitwise_for_parity_check"
    INEFFICIENT_WHILE_COMP = "inefficient_while_comp"
    ENUM_VARIANT_NAMES = "enum_variant_names"
    EMPTY_ENUM_BRACKETS_VARIANT = "empty_enum_brackets_variant"
