"""Unit tests for the shipped lint rules and their fixers."""
from __future__ import annotations

import pytest

from cairo_lint.config import LintConfig
from cairo_lint.diagnostics.diagnostic import Severity
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.fixes import generate_fix
from cairo_lint.linter import fix, lint
from cairo_lint.linter.rules.enums import common_affixes, word_split
from cairo_lint.linter.rules.unused_imports import binding_name
from cairo_lint.parser import parse
from cairo_lint.syntax.kinds import SyntaxKind

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _in_fn(body: str) -> str:
    return f"fn main() {{\n    {body}\n}}\n"


def _kinds(source: str, config: LintConfig | None = None) -> list[LintKind]:
    return [d.kind for d in lint(source, config=config)]


def _body_kinds(body: str) -> list[LintKind]:
    return _kinds(_in_fn(body))


def _fixed_body(body: str) -> str:
    return fix(_in_fn(body))


# ---------------------------------------------------------------------------
# bool_comparison
# ---------------------------------------------------------------------------


class TestBoolComparison:
    @pytest.mark.parametrize("body", [
        "let _a = x == true;",
        "let _a = x != false;",
        "let _a = false == x;",
    ])
    def test_reported(self, body: str) -> None:
        assert _body_kinds(body) == [LintKind.BOOL_COMPARISON]

    def test_comparison_of_variables_ignored(self) -> None:
        assert _body_kinds("let _a = x == y;") == []

    @pytest.mark.parametrize("body, expected", [
        ("let _a = x == true;", "let _a = x;"),
        ("let _a = true == x;", "let _a = x;"),
        ("let _a = x != false;", "let _a = x;"),
        ("let _a = x == false;", "let _a = !x;"),
        ("let _a = x != true;", "let _a = !x;"),
        ("let _a = a.b() == false;", "let _a = !a.b();"),
        ("let _a = a + b == false;", "let _a = !(a + b);"),
    ])
    def test_fix(self, body: str, expected: str) -> None:
        assert _fixed_body(body) == _in_fn(expected)

    def test_message(self) -> None:
        (diagnostic,) = lint(_in_fn("let _a = x == true;"))
        assert diagnostic.message == (
            "Unnecessary comparison with a boolean value. Use the variable directly."
        )
        assert diagnostic.anchor.text_without_trivia == "x == true"


# ---------------------------------------------------------------------------
# double_parens
# ---------------------------------------------------------------------------


class TestDoubleParens:
    def test_only_outermost_layer_reported(self) -> None:
        diagnostics = lint(_in_fn("let _a = (((x)));"))
        assert [d.kind for d in diagnostics] == [LintKind.DOUBLE_PARENS]
        assert diagnostics[0].anchor.text_without_trivia == "(((x)))"

    def test_single_parens_ignored(self) -> None:
        assert _body_kinds("let _a = (x);") == []

    @pytest.mark.parametrize("body, expected", [
        ("let _a = ((x));", "let _a = x;"),
        ("let _a = (((a + b)));", "let _a = a + b;"),
        ("let _a = (());", "let _a = ();"),
    ])
    def test_fix(self, body: str, expected: str) -> None:
        assert _fixed_body(body) == _in_fn(expected)


# ---------------------------------------------------------------------------
# redundant_op / erasing_op
# ---------------------------------------------------------------------------


class TestArithmetic:
    @pytest.mark.parametrize("expr", ["x + 0", "0 + x", "x - 0", "x * 1", "1 * x", "x / 1", "x + 0_u8"])
    def test_redundant(self, expr: str) -> None:
        assert _body_kinds(f"let _a = {expr};") == [LintKind.REDUNDANT_OPERATION]

    @pytest.mark.parametrize("expr", ["x * 0", "0 * x", "x & 0", "0 & x", "0 / x"])
    def test_erasing(self, expr: str) -> None:
        assert _body_kinds(f"let _a = {expr};") == [LintKind.ERASING_OPERATION]

    @pytest.mark.parametrize("expr", ["x + 1", "0 - x", "x * 2", "x / 0", "1 / x"])
    def test_ignored(self, expr: str) -> None:
        assert _body_kinds(f"let _a = {expr};") == []

    def test_no_fix(self) -> None:
        (diagnostic,) = lint(_in_fn("let _a = x * 0;"))
        assert generate_fix(diagnostic) is None


# ---------------------------------------------------------------------------
# eq_op
# ---------------------------------------------------------------------------


class TestEqOp:
    @pytest.mark.parametrize("expr, kind", [
        ("a / a", LintKind.DIV_EQ_OP),
        ("a == a", LintKind.EQ_COMP_OP),
        ("a <= a", LintKind.EQ_COMP_OP),
        ("a >= a", LintKind.EQ_COMP_OP),
        ("a != a", LintKind.NEQ_COMP_OP),
        ("a < a", LintKind.NEQ_COMP_OP),
        ("a > a", LintKind.NEQ_COMP_OP),
        ("a - a", LintKind.EQ_DIFF_OP),
        ("a & a", LintKind.EQ_BITWISE_OP),
        ("a | a", LintKind.EQ_BITWISE_OP),
        ("a ^ a", LintKind.EQ_BITWISE_OP),
        ("a && a", LintKind.EQ_LOGICAL_OP),
        ("a || a", LintKind.EQ_LOGICAL_OP),
        ("s.x == s.x", LintKind.EQ_COMP_OP),
    ])
    def test_identical_operands(self, expr: str, kind: LintKind) -> None:
        assert _body_kinds(f"let _a = {expr};") == [kind]

    def test_trivia_does_not_matter(self) -> None:
        assert _body_kinds("let _a = a.b   ==   a . b;") == [LintKind.EQ_COMP_OP]

    @pytest.mark.parametrize("expr", ["f() == f()", "a.len() - a.len()", "a + a", "a * a", "a == b"])
    def test_ignored(self, expr: str) -> None:
        assert _body_kinds(f"let _a = {expr};") == []

    def test_messages(self) -> None:
        (diagnostic,) = lint(_in_fn("let _a = a - a;"))
        assert diagnostic.message == (
            "Subtraction with identical operands, this operation always results in zero "
            "and may indicate a logic error"
        )


# ---------------------------------------------------------------------------
# int_op_one
# ---------------------------------------------------------------------------


class TestIntOpOne:
    @pytest.mark.parametrize("expr, kind, fixed", [
        ("x >= y + 1", LintKind.INT_GE_PLUS_ONE, "x > y"),
        ("x - 1 >= y", LintKind.INT_GE_MIN_ONE, "x > y"),
        ("x + 1 <= y", LintKind.INT_LE_PLUS_ONE, "x < y"),
        ("x <= y - 1", LintKind.INT_LE_MIN_ONE, "x < y"),
    ])
    def test_reported_and_fixed(self, expr: str, kind: LintKind, fixed: str) -> None:
        body = f"let _a = {expr};"
        assert _body_kinds(body) == [kind]
        assert _fixed_body(body) == _in_fn(f"let _a = {fixed};")

    @pytest.mark.parametrize("expr", ["x >= y + 2", "x >= y", "x > y + 1", "x <= y + 1", "f() >= y + 1"])
    def test_ignored(self, expr: str) -> None:
        assert _body_kinds(f"let _a = {expr};") == []


# ---------------------------------------------------------------------------
# double_comparison
# ---------------------------------------------------------------------------


class TestDoubleComparison:
    @pytest.mark.parametrize("expr, kind", [
        ("a <= b && a >= b", LintKind.SIMPLIFIABLE_COMPARISON),
        ("a < b || a == b", LintKind.SIMPLIFIABLE_COMPARISON),
        ("a == b || a > b", LintKind.SIMPLIFIABLE_COMPARISON),
        ("a < b || a > b", LintKind.REDUNDANT_COMPARISON),
        ("a <= b || a >= b", LintKind.REDUNDANT_COMPARISON),
        ("a == b && a < b", LintKind.CONTRADICTORY_COMPARISON),
        ("a < b && a > b", LintKind.CONTRADICTORY_COMPARISON),
        ("a < b && b < a", LintKind.CONTRADICTORY_COMPARISON),
        ("x > 5 && x < 3", LintKind.IMPOSSIBLE_COMPARISON),
        ("x >= 5 && x <= 4", LintKind.IMPOSSIBLE_COMPARISON),
        ("x < 3 && x > 5", LintKind.IMPOSSIBLE_COMPARISON),
    ])
    def test_classification(self, expr: str, kind: LintKind) -> None:
        assert _body_kinds(f"let _a = {expr};") == [kind]

    @pytest.mark.parametrize("expr", ["x > 3 && x < 5", "x >= 5 && x <= 5", "a < b && c < d", "a < b && a < c"])
    def test_ignored(self, expr: str) -> None:
        assert _body_kinds(f"let _a = {expr};") == []

    @pytest.mark.parametrize("expr, fixed", [
        ("a <= b && a >= b", "a == b"),
        ("a < b || a == b", "a <= b"),
        ("a > b || a == b", "a >= b"),
        ("a < b || a > b", "a != b"),
        ("a < b || b < a", "a != b"),
    ])
    def test_fix(self, expr: str, fixed: str) -> None:
        assert _fixed_body(f"let _a = {expr};") == _in_fn(f"let _a = {fixed};")

    def test_always_true_pair_has_no_fix(self) -> None:
        (diagnostic,) = lint(_in_fn("let _a = a <= b || a >= b;"))
        assert generate_fix(diagnostic) is None

    def test_contradictions_are_errors(self) -> None:
        (diagnostic,) = lint(_in_fn("let _a = x > 5 && x < 3;"))
        assert diagnostic.severity is Severity.ERROR
        assert diagnostic.kind is LintKind.REDUNDANT_COMPARISON
        assert diagnostic.message.startswith("Redundant double comparison found.")


# ---------------------------------------------------------------------------
# collapsible_if / collapsible_if_else / ifs_same_cond
# ---------------------------------------------------------------------------

_NESTED_IF = (
    "fn main() {\n"
    "    if a {\n"
    "        if b {\n"
    "            c();\n"
    "        }\n"
    "    }\n"
    "}\n"
)

_ELSE_IF = (
    "fn main() {\n"
    "    if a {\n"
    "        b();\n"
    "    } else {\n"
    "        if c {\n"
    "            d();\n"
    "        }\n"
    "    }\n"
    "}\n"
)


class TestIfs:
    def test_collapsible_if_reported_on_outer_if(self) -> None:
        diagnostics = lint(_NESTED_IF)
        assert [d.kind for d in diagnostics] == [LintKind.COLLAPSIBLE_IF]
        assert diagnostics[0].line == 2

    def test_collapsible_if_fix(self) -> None:
        assert fix(_NESTED_IF) == (
            "fn main() {\n"
            "    if (a) && (b) {\n"
            "        c();\n"
            "    }\n"
            "}\n"
        )

    @pytest.mark.parametrize("body", [
        "if a { if b { c(); } } else { d(); }",
        "if a { if b { c(); } else { d(); } }",
        "if a { e(); if b { c(); } }",
        "if let Option::Some(x) = y { if b { c(x); } }",
        "if a { if let Option::Some(x) = y { c(x); } }",
    ])
    def test_not_collapsible(self, body: str) -> None:
        assert LintKind.COLLAPSIBLE_IF not in _body_kinds(body)

    def test_collapsible_if_else(self) -> None:
        assert _kinds(_ELSE_IF) == [LintKind.COLLAPSIBLE_IF_ELSE]
        assert fix(_ELSE_IF) == (
            "fn main() {\n"
            "    if a {\n"
            "        b();\n"
            "    } else if c {\n"
            "        d();\n"
            "    }\n"
            "}\n"
        )

    def test_else_block_with_more_statements_ignored(self) -> None:
        assert _body_kinds("if a { b(); } else { e(); if c { d(); } }") == []

    def test_else_if_is_already_collapsed(self) -> None:
        assert _body_kinds("if a { b(); } else if c { d(); }") == []

    @pytest.mark.parametrize("body", [
        "if a == b { x(); } else if a == b { y(); }",
        "if a { x(); } else if c { y(); } else if a { z(); }",
    ])
    def test_ifs_same_cond(self, body: str) -> None:
        diagnostics = lint(_in_fn(body))
        assert [d.kind for d in diagnostics] == [LintKind.IFS_SAME_COND]
        assert diagnostics[0].message == "Consecutive `if` with the same condition found."

    @pytest.mark.parametrize("body", [
        "if a { x(); } else if b { y(); }",
        "if f(ref a) { x(); } else if f(ref a) { y(); }",
    ])
    def test_ifs_same_cond_ignored(self, body: str) -> None:
        assert _body_kinds(body) == []


# ---------------------------------------------------------------------------
# break_unit
# ---------------------------------------------------------------------------


class TestBreakUnit:
    def test_reported_and_fixed(self) -> None:
        body = "loop {\n        break ();\n    }"
        assert _body_kinds(body) == [LintKind.BREAK_UNIT]
        assert _fixed_body(body) == _in_fn("loop {\n        break;\n    }")

    @pytest.mark.parametrize("body", ["loop { break; }", "loop { break 1; }", "loop { break (1, 2); }"])
    def test_ignored(self, body: str) -> None:
        assert _body_kinds(body) == []


# ---------------------------------------------------------------------------
# panic
# ---------------------------------------------------------------------------


class TestPanic:
    _ENABLED = LintConfig(rules={"panic": True})

    def test_disabled_by_default(self) -> None:
        assert _body_kinds('panic!("boom");') == []

    @pytest.mark.parametrize("body", [
        'panic!("boom");',
        "panic(array![]);",
        "core::panics::panic(array![]);",
    ])
    def test_reported_when_enabled(self, body: str) -> None:
        assert _kinds(_in_fn(body), self._ENABLED) == [LintKind.PANIC]

    def test_other_macros_ignored(self) -> None:
        assert _kinds(_in_fn('assert!(x, "boom");'), self._ENABLED) == []

    def test_reported_in_impl_methods(self) -> None:
        source = "impl I of T {\n    fn g(self: @S) {\n        panic!(\"boom\");\n    }\n}\n"
        assert _kinds(source, self._ENABLED) == [LintKind.PANIC]


# ---------------------------------------------------------------------------
# duplicate_underscore_args
# ---------------------------------------------------------------------------


class TestDuplicateUnderscoreArgs:
    def test_reported_on_second_param(self) -> None:
        diagnostics = lint("fn f(a: u8, _a: u8) {}\n")
        assert [d.kind for d in diagnostics] == [LintKind.DUPLICATE_UNDERSCORE_ARGS]
        assert diagnostics[0].anchor.text_without_trivia == "_a: u8"

    def test_trait_functions_checked(self) -> None:
        assert _kinds("trait T {\n    fn g(_b: u8, b: u8);\n}\n") == [
            LintKind.DUPLICATE_UNDERSCORE_ARGS
        ]

    @pytest.mark.parametrize("source", ["fn f(a: u8, b: u8) {}", "fn f(_: u8, _a: u8) {}"])
    def test_ignored(self, source: str) -> None:
        assert _kinds(source) == []


# ---------------------------------------------------------------------------
# performance
# ---------------------------------------------------------------------------


class TestPerformance:
    def test_bitwise_for_parity(self) -> None:
        assert _body_kinds("let _a = x & 1;") == [LintKind.BITWISE_FOR_PARITY_CHECK]
        assert _body_kinds("let _a = x & 2;") == []

    @pytest.mark.parametrize("condition, count", [
        ("i < n", 1),
        ("i >= n", 1),
        ("i < n && j > m", 2),
        ("i != n", 0),
        ("ok", 0),
    ])
    def test_inefficient_while_comp(self, condition: str, count: int) -> None:
        kinds = _body_kinds(f"while {condition} {{\n        i += 1;\n    }}")
        assert kinds == [LintKind.INEFFICIENT_WHILE_COMP] * count

    def test_while_let_ignored(self) -> None:
        assert _body_kinds("while let Option::Some(x) = it.next() { f(x); }") == []


# ---------------------------------------------------------------------------
# enums
# ---------------------------------------------------------------------------


class TestEnums:
    @pytest.mark.parametrize("name, words", [
        ("ColorRed", ["Color", "Red"]),
        ("big_box", ["big", "box"]),
        ("value", ["value"]),
        ("NotFoundError", ["Not", "Found", "Error"]),
    ])
    def test_word_split(self, name: str, words: list[str]) -> None:
        assert word_split(name) == words

    def test_common_affixes(self) -> None:
        assert common_affixes(["ColorRed", "ColorGreen"]) == (1, 0)
        assert common_affixes(["NotFoundError", "TimeoutError"]) == (0, 1)
        assert common_affixes(["Red", "Green"]) == (0, 0)
        assert common_affixes(["ColorRed"]) == (0, 0)

    @pytest.mark.parametrize("source, fixed", [
        ("enum Color { ColorRed, ColorGreen, ColorBlue }", "enum Color { Red, Green, Blue }"),
        ("enum Failure { NotFoundError, TimeoutError }", "enum Failure { NotFound, Timeout }"),
        ("enum Box { big_box: u8, small_box: u8 }", "enum Box { big: u8, small: u8 }"),
    ])
    def test_enum_variant_names(self, source: str, fixed: str) -> None:
        assert _kinds(source) == [LintKind.ENUM_VARIANT_NAMES]
        assert fix(source) == fixed

    def test_distinct_variant_names_ignored(self) -> None:
        assert _kinds("enum Color { Red, Green, Blue }") == []

    def test_rename_declined_when_a_name_would_vanish(self) -> None:
        source = "enum Shade { ColorRed, ColorRedDark }"
        (diagnostic,) = lint(source)
        assert generate_fix(diagnostic) is None
        assert fix(source) == source

    def test_empty_enum_brackets_variant(self) -> None:
        source = "enum E {\n    A: (),\n    B: u8,\n}\n"
        diagnostics = lint(source)
        assert [d.kind for d in diagnostics] == [LintKind.EMPTY_ENUM_BRACKETS_VARIANT]
        assert diagnostics[0].anchor.kind is SyntaxKind.VARIANT
        assert fix(source) == "enum E {\n    A,\n    B: u8,\n}\n"


# ---------------------------------------------------------------------------
# unused_imports
# ---------------------------------------------------------------------------


class TestUnusedImports:
    def test_reported_at_leaf_with_name(self) -> None:
        diagnostics = lint("use core::option::Option;\nfn main() {}\n")
        assert [d.kind for d in diagnostics] == [LintKind.UNUSED_IMPORTS]
        assert diagnostics[0].message == "Unused import: `Option`"
        assert diagnostics[0].anchor.kind is SyntaxKind.USE_PATH_LEAF

    def test_message_names_the_module(self) -> None:
        (diagnostic,) = lint("mod inner {\n    use core::option::Option;\n}\n")
        assert diagnostic.message == "Unused import: `inner::Option`"

    def test_used_import_ignored(self) -> None:
        source = "use core::option::Option;\nfn main() -> Option<u8> { Option::None }\n"
        assert _kinds(source) == []

    def test_glob_import_ignored(self) -> None:
        assert _kinds("use core::array::*;\nfn main() {}\n") == []

    def test_alias_is_the_binding(self) -> None:
        assert _kinds("use a::b as c;\nfn main() { c(); }\n") == []
        (diagnostic,) = lint("use a::b as c;\nfn main() { b(); }\n")
        assert diagnostic.message == "Unused import: `c`"

    def test_each_unused_name_of_a_group_reported(self) -> None:
        diagnostics = lint("use a::{b, c, d};\nfn main() { c(); }\n")
        assert [d.message for d in diagnostics] == ["Unused import: `b`", "Unused import: `d`"]

    def test_binding_name_rejects_other_nodes(self) -> None:
        tree = parse("use a::b;")
        with pytest.raises(ValueError):
            binding_name(tree.root)
