"""Cairo lint rules sub-package.

Re-exports every shipped rule group.  ``ALL_RULE_GROUPS`` is the
registration order of the default ``LintContext``.
"""
from __future__ import annotations

from cairo_lint.linter.rules.arithmetic import ERASING_OPERATION_GROUP, REDUNDANT_OPERATION_GROUP
from cairo_lint.linter.rules.bool_comparison import BOOL_COMPARISON_GROUP
from cairo_lint.linter.rules.breaks import BREAK_GROUP
from cairo_lint.linter.rules.double_comparison import DOUBLE_COMPARISON_GROUP
from cairo_lint.linter.rules.double_parens import DOUBLE_PARENS_GROUP
from cairo_lint.linter.rules.duplicate_underscore_args import DUPLICATE_UNDERSCORE_ARGS_GROUP
from cairo_lint.linter.rules.enums import (
    EMPTY_ENUM_BRACKETS_VARIANT_GROUP,
    ENUM_VARIANT_NAMES_GROUP,
)
from cairo_lint.linter.rules.eq_op import EQ_OP_GROUP
from cairo_lint.linter.rules.ifs import (
    COLLAPSIBLE_IF_ELSE_GROUP,
    COLLAPSIBLE_IF_GROUP,
    DUPLICATE_IF_CONDITION_GROUP,
)
from cairo_lint.linter.rules.int_op_one import INT_OP_ONE_GROUP
from cairo_lint.linter.rules.panic import PANIC_GROUP
from cairo_lint.linter.rules.performance import (
    BITWISE_FOR_PARITY_GROUP,
    INEFFICIENT_WHILE_COMPARISON_GROUP,
)
from cairo_lint.linter.rules.unused_imports import UNUSED_IMPORTS_GROUP

ALL_RULE_GROUPS = [
    BOOL_COMPARISON_GROUP,
    DOUBLE_PARENS_GROUP,
    REDUNDANT_OPERATION_GROUP,
    ERASING_OPERATION_GROUP,
    EQ_OP_GROUP,
    INT_OP_ONE_GROUP,
    DOUBLE_COMPARISON_GROUP,
    COLLAPSIBLE_IF_GROUP,
    COLLAPSIBLE_IF_ELSE_GROUP,
    DUPLICATE_IF_CONDITION_GROUP,
    BREAK_GROUP,
    PANIC_GROUP,
    DUPLICATE_UNDERSCORE_ARGS_GROUP,
    BITWISE_FOR_PARITY_GROUP,
    INEFFICIENT_WHILE_COMPARISON_GROUP,
    ENUM_VARIANT_NAMES_GROUP,
    EMPTY_ENUM_BRACKETS_VARIANT_GROUP,
    UNUSED_IMPORTS_GROUP,
]

__all__ = [
    "ALL_RULE_GROUPS",
    "BOOL_COMPARISON_GROUP",
    "DOUBLE_PARENS_GROUP",
    "REDUNDANT_OPERATION_GROUP",
    "ERASING_OPERATION_GROUP",
    "EQ_OP_GROUP",
    "INT_OP_ONE_GROUP",
    "DOUBLE_COMPARISON_GROUP",
    "COLLAPSIBLE_IF_GROUP",
    "COLLAPSIBLE_IF_ELSE_GROUP",
    "DUPLICATE_IF_CONDITION_GROUP",
    "BREAK_GROUP",
    "PANIC_GROUP",
    "DUPLICATE_UNDERSCORE_ARGS_GROUP",
    "BITWISE_FOR_PARITY_GROUP",
    "INEFFICIENT_WHILE_COMPARISON_GROUP",
    "ENUM_VARIANT_NAMES_GROUP",
    "EMPTY_ENUM_BRACKETS_VARIANT_GROUP",
    "UNUSED_IMPORTS_GROUP",
]
