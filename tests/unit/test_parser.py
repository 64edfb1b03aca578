"""Unit tests for cairo_lint.parser: syntax tree construction."""
from __future__ import annotations

import pytest

from cairo_lint.grammar.tokens import TokenType
from cairo_lint.parser import ParseErrorCollection, RecoveryStrategy, parse
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode, SyntaxTree


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _items(source: str) -> list[SyntaxNode]:
    return [child for child in parse(source).root.children if not child.is_terminal]


def _first(tree: SyntaxTree, kind: SyntaxKind) -> SyntaxNode:
    for node in tree.root.descendants():
        if node.kind is kind:
            return node
    raise AssertionError(f"No {kind.name} node in tree")


def _expr(source: str) -> SyntaxNode:
    """Parse ``source`` as the initializer of a let statement."""
    tree = parse(f"fn f() {{ let _v = {source}; }}")
    statement = _first(tree, SyntaxKind.STATEMENT_LET)
    return statement.children[-2]


def _kinds(nodes: list[SyntaxNode]) -> list[SyntaxKind]:
    return [node.kind for node in nodes]


# ---------------------------------------------------------------------------
# Files and items
# ---------------------------------------------------------------------------


class TestItems:
    def test_empty_file_is_syntax_file_with_eof(self) -> None:
        tree = parse("")
        assert tree.root.kind is SyntaxKind.SYNTAX_FILE
        assert [c.token_type for c in tree.root.children] == [TokenType.EOF]

    def test_item_kinds(self) -> None:
        source = (
            "use a::b;\n"
            "fn f() {}\n"
            "mod m;\n"
            "enum E { A, B }\n"
            "struct S { x: u8 }\n"
            "const C: u8 = 1;\n"
            "trait T { fn g(self: @S); }\n"
            "impl I of T { fn g(self: @S) {} }\n"
        )
        assert _kinds(_items(source)) == [
            SyntaxKind.ITEM_USE,
            SyntaxKind.ITEM_FUNCTION,
            SyntaxKind.ITEM_MODULE,
            SyntaxKind.ITEM_ENUM,
            SyntaxKind.ITEM_STRUCT,
            SyntaxKind.ITEM_CONST,
            SyntaxKind.ITEM_TRAIT,
            SyntaxKind.ITEM_IMPL,
        ]

    def test_root_text_is_the_whole_source(self) -> None:
        source = "// leading\nfn f() {\n    let x = 1; // trailing\n}\n\n"
        assert parse(source).root.text == source

    def test_attributes_and_visibility_are_item_children(self) -> None:
        item = _items("#[derive(Drop)]\npub fn f() {}")[0]
        assert item.kind is SyntaxKind.ITEM_FUNCTION
        assert item.children[0].kind is SyntaxKind.ATTRIBUTE_LIST
        assert item.children[1].kind is SyntaxKind.VISIBILITY
        assert item.has_attr("derive")
        assert item.has_attr_with_arg("derive", "Drop")

    def test_trait_function_without_body(self) -> None:
        trait = _items("trait T { fn g(x: u8) -> u8; }")[0]
        body = trait.child(SyntaxKind.ITEM_BODY)
        assert body is not None
        assert _kinds(body.children[1:-1]) == [SyntaxKind.TRAIT_FUNCTION]

    def test_inline_module_body(self) -> None:
        module = _items("mod inner { fn f() {} }")[0]
        body = module.child(SyntaxKind.ITEM_BODY)
        assert body is not None
        assert body.child(SyntaxKind.ITEM_FUNCTION) is not None

    def test_enum_variants_with_optional_type(self) -> None:
        enum = _items("enum E { A, B: (), C: u8 }")[0]
        members = enum.child(SyntaxKind.MEMBER_LIST)
        assert members is not None
        variants = members.children_of_kind(SyntaxKind.VARIANT)
        assert [v.child(SyntaxKind.TYPE_CLAUSE) is not None for v in variants] == [False, True, True]

    def test_underscore_param(self) -> None:
        fn = _items("fn f(_: u8, _a: u8) {}")[0]
        params = _first(fn.tree, SyntaxKind.PARAM_LIST).children_of_kind(SyntaxKind.PARAM)
        assert params[0].children[0].token_type is TokenType.UNDERSCORE
        assert params[1].children[0].token_type is TokenType.IDENT

    def test_impl_alias(self) -> None:
        impl = _items("impl A = B<u8>;")[0]
        assert impl.kind is SyntaxKind.ITEM_IMPL
        assert impl.terminal(TokenType.EQ) is not None


# ---------------------------------------------------------------------------
# Use trees
# ---------------------------------------------------------------------------


class TestUseTrees:
    def test_single_path(self) -> None:
        item = _items("use core::option::Option;")[0]
        tree_node = item.children[1]
        assert tree_node.kind is SyntaxKind.USE_PATH_SINGLE
        assert tree_node.children[2].kind is SyntaxKind.USE_PATH_SINGLE
        leaf = tree_node.children[2].children[2]
        assert leaf.kind is SyntaxKind.USE_PATH_LEAF
        assert leaf.text_without_trivia == "Option"

    def test_multi_holds_entries_and_commas(self) -> None:
        item = _items("use a::{b, c as d, e::*};")[0]
        multi = _first(item.tree, SyntaxKind.USE_PATH_MULTI)
        path_list = multi.child(SyntaxKind.USE_PATH_LIST)
        assert path_list is not None
        entries = [c for c in path_list.children if not c.is_terminal]
        assert [e.text_without_trivia for e in entries] == ["b", "c as d", "e::*"]
        assert len(path_list.children) == 5

    def test_alias_clause(self) -> None:
        item = _items("use a::b as c;")[0]
        leaf = _first(item.tree, SyntaxKind.USE_PATH_LEAF)
        alias = leaf.child(SyntaxKind.ALIAS_CLAUSE)
        assert alias is not None
        assert alias.text_without_trivia == "as c"

    def test_empty_braces_have_no_list(self) -> None:
        item = _items("use a::{};")[0]
        multi = _first(item.tree, SyntaxKind.USE_PATH_MULTI)
        assert multi.child(SyntaxKind.USE_PATH_LIST) is None

    def test_trailing_comma_allowed(self) -> None:
        item = _items("use a::{\n    b,\n    c,\n};")[0]
        path_list = _first(item.tree, SyntaxKind.USE_PATH_LIST)
        assert [c.text_without_trivia for c in path_list.children] == ["b", ",", "c", ","]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class TestStatements:
    def test_statement_kinds(self) -> None:
        tree = parse(
            "fn f() {\n"
            "    let x = 1;\n"
            "    x;\n"
            "    loop { break; }\n"
            "    if x == 1 { return; }\n"
            "    return;\n"
            "}\n"
        )
        block = _first(tree, SyntaxKind.BLOCK)
        statements = [c for c in block.children if not c.is_terminal]
        assert _kinds(statements) == [
            SyntaxKind.STATEMENT_LET,
            SyntaxKind.STATEMENT_EXPR,
            SyntaxKind.STATEMENT_EXPR,
            SyntaxKind.STATEMENT_EXPR,
            SyntaxKind.STATEMENT_RETURN,
        ]

    def test_break_with_unit_value(self) -> None:
        tree = parse("fn f() { loop { break (); } }")
        statement = _first(tree, SyntaxKind.STATEMENT_BREAK)
        value = statement.child(SyntaxKind.EXPR_TUPLE)
        assert value is not None
        assert len(value.children) == 2

    def test_tail_expression_needs_no_semicolon(self) -> None:
        tree = parse("fn f() -> u8 { 1 }")
        statement = _first(tree, SyntaxKind.STATEMENT_EXPR)
        assert statement.terminal(TokenType.SEMICOLON) is None

    def test_let_with_type_and_wildcard(self) -> None:
        tree = parse("fn f() { let _: u8 = 1; let (a, b) = (1, 2); }")
        assert _first(tree, SyntaxKind.PATTERN_WILDCARD) is not None
        assert _first(tree, SyntaxKind.PATTERN_TUPLE) is not None

    def test_statement_attributes(self) -> None:
        tree = parse("fn f() {\n    #[allow(panic)]\n    let x = 1;\n}")
        statement = _first(tree, SyntaxKind.STATEMENT_LET)
        assert statement.has_attr_with_arg("allow", "panic")


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


class TestExpressions:
    def test_multiplication_binds_tighter_than_addition(self) -> None:
        expr = _expr("a + b * c")
        assert expr.kind is SyntaxKind.EXPR_BINARY
        assert expr.children[1].token_type is TokenType.PLUS
        assert expr.children[2].text_without_trivia == "b * c"

    def test_and_binds_tighter_than_or(self) -> None:
        expr = _expr("a || b && c")
        assert expr.children[1].token_type is TokenType.OR_OR

    def test_comparison_binds_tighter_than_logic(self) -> None:
        expr = _expr("a < b && b < c")
        assert expr.children[1].token_type is TokenType.AND_AND
        assert expr.children[0].text_without_trivia == "a < b"

    def test_bitwise_and_binds_tighter_than_comparison(self) -> None:
        expr = _expr("x & 1 == 0")
        assert expr.children[1].token_type is TokenType.EQ_EQ
        assert expr.children[0].text_without_trivia == "x & 1"

    def test_binary_is_left_associative(self) -> None:
        expr = _expr("a - b - c")
        assert expr.children[0].text_without_trivia == "a - b"

    def test_parenthesized_and_tuples(self) -> None:
        assert _expr("(a)").kind is SyntaxKind.EXPR_PARENTHESIZED
        assert _expr("()").kind is SyntaxKind.EXPR_TUPLE
        assert _expr("(a, b)").kind is SyntaxKind.EXPR_TUPLE
        nested = _expr("((a))")
        assert nested.children[1].kind is SyntaxKind.EXPR_PARENTHESIZED

    def test_unary_operators(self) -> None:
        for source in ("!a", "-a", "@a", "*a"):
            assert _expr(source).kind is SyntaxKind.EXPR_UNARY

    def test_method_call_is_member_access(self) -> None:
        expr = _expr("a.b(1)")
        assert expr.kind is SyntaxKind.EXPR_BINARY
        assert expr.children[1].token_type is TokenType.DOT
        assert expr.children[2].kind is SyntaxKind.EXPR_CALL

    def test_calls_and_macros(self) -> None:
        assert _expr("f(1, 2)").kind is SyntaxKind.EXPR_CALL
        assert _expr("core::panics::panic(array![])").kind is SyntaxKind.EXPR_CALL
        macro = _expr("panic!(\"boom\")")
        assert macro.kind is SyntaxKind.EXPR_INLINE_MACRO
        assert macro.children[0].text_without_trivia == "panic"

    def test_struct_constructor(self) -> None:
        expr = _expr("S { x: 1, y }")
        assert expr.kind is SyntaxKind.EXPR_STRUCT_CTOR
        assert len(expr.children_of_kind(SyntaxKind.STRUCT_ARG)) == 2

    def test_if_condition_is_not_a_struct(self) -> None:
        tree = parse("fn f() { if a { b } else { c } }")
        if_expr = _first(tree, SyntaxKind.EXPR_IF)
        assert _kinds(if_expr.children[1:]) == [
            SyntaxKind.EXPR_PATH,
            SyntaxKind.BLOCK,
            SyntaxKind.ELSE_CLAUSE,
        ]

    def test_else_if_chain(self) -> None:
        tree = parse("fn f() { if a { } else if b { } else { } }")
        clause = _first(tree, SyntaxKind.ELSE_CLAUSE)
        assert clause.children[1].kind is SyntaxKind.EXPR_IF

    def test_if_let_condition(self) -> None:
        tree = parse("fn f() { if let Option::Some(x) = y { } }")
        condition = _first(tree, SyntaxKind.CONDITION_LET)
        assert condition.children[1].kind is SyntaxKind.PATTERN_ENUM

    def test_match_arms(self) -> None:
        tree = parse("fn f() { match x { 0 => 1, _ => { 2 } } }")
        match = _first(tree, SyntaxKind.EXPR_MATCH)
        assert len(match.children_of_kind(SyntaxKind.MATCH_ARM)) == 2

    def test_assignment_is_binary(self) -> None:
        tree = parse("fn f() { x += 1; }")
        expr = _first(tree, SyntaxKind.EXPR_BINARY)
        assert expr.children[1].token_type is TokenType.PLUS_EQ

    def test_while_and_for(self) -> None:
        tree = parse("fn f() { while i < n { i += 1; } for x in a { } }")
        assert _first(tree, SyntaxKind.EXPR_WHILE).children[1].text_without_trivia == "i < n"
        assert _first(tree, SyntaxKind.EXPR_FOR) is not None

    def test_error_propagation_and_indexing(self) -> None:
        assert _expr("f()?").kind is SyntaxKind.EXPR_ERROR_PROPAGATE
        assert _expr("a[0]").kind is SyntaxKind.EXPR_INDEXED


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestParseErrors:
    def test_missing_semicolon_raises(self) -> None:
        with pytest.raises(ParseErrorCollection) as exc_info:
            parse("fn f() { let x = 1 let y = 2; }")
        assert exc_info.value.has_errors
        assert exc_info.value.errors[0].recovery is RecoveryStrategy.SYNCHRONIZE_STATEMENT

    def test_errors_are_collected_across_items(self) -> None:
        with pytest.raises(ParseErrorCollection) as exc_info:
            parse("fn f() { let = 1; }\nstruct;\nfn g() {}\n", file_id="broken.cairo")
        collection = exc_info.value
        assert collection.file_id == "broken.cairo"
        assert len(collection.errors) >= 2
        assert "broken.cairo" in str(collection)

    def test_unknown_item_keyword(self) -> None:
        with pytest.raises(ParseErrorCollection) as exc_info:
            parse("let x = 1;")
        assert exc_info.value.errors[0].recovery is RecoveryStrategy.SYNCHRONIZE_ITEM
        assert "Expected an item" in str(exc_info.value.errors[0])
