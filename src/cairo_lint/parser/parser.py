"""Recursive descent parser for the Cairo subset understood by cairo-lint.

Consumes the trivia-attached token list from the lexer and builds a
``SyntaxTree``.  Every token becomes a terminal node, so the tree covers
the source text exactly and every node can report its span with or
without trivia.

Grammar summary (informal)::

    file        := item* EOF
    item        := attribute* 'pub'? ( use | fn | mod | enum | struct
                                     | const | impl | trait )
    attribute   := '#' '[' path ( '(' args ')' )? ']'
    use         := 'use' use_tree ';'
    use_tree    := IDENT '::' use_tree | IDENT ('as' IDENT)?
                 | '{' use_tree (',' use_tree)* ','? '}' | '*'
    fn          := 'fn' IDENT generics? '(' params ')' ('->' type)? block
    block       := '{' statement* '}'
    statement   := attribute* ( let | return | break | continue | expr ';'? )
    expr        := assignment with precedence climbing over
                   || && (== != < > <= >=) | ^ & (+ -) (* / %)
    unary       := ('!' | '-' | '@' | '*') unary | postfix
    postfix     := primary ( '.' member | '?' | '[' expr ']' )*

Errors are collected.  The parser recovers at statement and item
boundaries and raises a single ``ParseErrorCollection`` once the whole
file has been read.
"""
from __future__ import annotations

from dataclasses import replace

from cairo_lint.grammar.tokens import Token, TokenType
from cairo_lint.lexer.lexer import tokenize
from cairo_lint.parser.errors import ParseError, ParseErrorCollection, RecoveryStrategy
from cairo_lint.syntax.kinds import BLOCK_LIKE_KINDS, SyntaxKind
from cairo_lint.syntax.tree import SyntaxTree, TextSpan

# ---------------------------------------------------------------------------
# Operator tables
# ---------------------------------------------------------------------------

_BINARY_PRECEDENCE: dict[TokenType, int] = {
    TokenType.DOT_DOT: 2,
    TokenType.OR_OR: 3,
    TokenType.AND_AND: 4,
    TokenType.EQ_EQ: 5,
    TokenType.NEQ: 5,
    TokenType.LT: 5,
    TokenType.GT: 5,
    TokenType.LE: 5,
    TokenType.GE: 5,
    TokenType.OR: 6,
    TokenType.XOR: 7,
    TokenType.AND: 8,
    TokenType.PLUS: 9,
    TokenType.MINUS: 9,
    TokenType.STAR: 10,
    TokenType.SLASH: 10,
    TokenType.PERCENT: 10,
}

_ASSIGN_OPS = frozenset(
    {
        TokenType.EQ,
        TokenType.PLUS_EQ,
        TokenType.MINUS_EQ,
        TokenType.STAR_EQ,
        TokenType.SLASH_EQ,
        TokenType.PERCENT_EQ,
    }
)

_UNARY_OPS = frozenset({TokenType.NOT, TokenType.MINUS, TokenType.AT, TokenType.STAR})

_LITERAL_TYPES = frozenset(
    {
        TokenType.NUMBER,
        TokenType.STRING,
        TokenType.SHORT_STRING,
        TokenType.TRUE,
        TokenType.FALSE,
    }
)

_ITEM_START = frozenset(
    {
        TokenType.USE,
        TokenType.FN,
        TokenType.MOD,
        TokenType.ENUM,
        TokenType.STRUCT,
        TokenType.CONST,
        TokenType.IMPL,
        TokenType.TRAIT,
        TokenType.PUB,
        TokenType.HASH,
    }
)

_BLOCK_LIKE_START = frozenset(
    {
        TokenType.LBRACE,
        TokenType.IF,
        TokenType.LOOP,
        TokenType.WHILE,
        TokenType.FOR,
        TokenType.MATCH,
    }
)

_FUNCTION_MODIFIERS = frozenset({"nopanic"})


class Parser:
    """Recursive descent parser that produces a ``SyntaxTree`` from tokens.

    Parameters
    ----------
    tokens:
        The significant tokens produced by ``cairo_lint.lexer.tokenize``.
        Must end with the ``EOF`` token.
    source:
        The source text the tokens were scanned from.
    file_id:
        Identifier of the file being parsed.
    """

    def __init__(self, tokens: list[Token], source: str, file_id: str = "lib.cairo") -> None:
        self._tokens: list[Token] = tokens
        self._pos: int = 0
        self._tree: SyntaxTree = SyntaxTree(source, file_id)
        self._errors: ParseErrorCollection = ParseErrorCollection(file_id=file_id)
        self._no_struct: bool = False

    # ------------------------------------------------------------------
    # Navigation helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current token without consuming it."""
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return self._tokens[-1]  # EOF

    def _peek(self, offset: int = 1) -> Token:
        """Return the token ``offset`` positions ahead without consuming."""
        idx = self._pos + offset
        if idx < len(self._tokens):
            return self._tokens[idx]
        return self._tokens[-1]

    def _advance(self) -> Token:
        """Consume and return the current token."""
        tok = self._current()
        if tok.type != TokenType.EOF:
            self._pos += 1
        return tok

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types."""
        return self._current().type in types

    def _bump(self) -> int:
        """Consume the current token and return its terminal node index."""
        return self._tree.add_terminal(self._advance())

    def _expect(self, token_type: TokenType, message: str | None = None) -> int:
        """Consume a token of ``token_type`` or raise a ``ParseError``."""
        if self._check(token_type):
            return self._bump()
        raise self._error(message or f"Expected {token_type.name}", (token_type,))

    def _node(self, kind: SyntaxKind, children: list[int]) -> int:
        return self._tree.add_node(kind, children)

    def _kind(self, index: int) -> SyntaxKind:
        return self._tree.data(index).kind

    def _error(
        self,
        message: str,
        expected: tuple[TokenType, ...] = (),
        recovery: RecoveryStrategy = RecoveryStrategy.SKIP_TOKEN,
    ) -> ParseError:
        tok = self._current()
        return ParseError(
            message=message,
            span=TextSpan(tok.offset, tok.end),
            line=tok.line,
            col=tok.col,
            expected=expected,
            found=tok,
            recovery=recovery,
        )

    def _record(self, error: ParseError, recovery: RecoveryStrategy) -> None:
        self._errors.add(replace(error, recovery=recovery))

    def _synchronize_item(self, start_pos: int) -> None:
        """Skip tokens until something that can start an item."""
        if self._pos == start_pos:
            self._advance()
        while not self._check(TokenType.EOF, TokenType.RBRACE):
            if self._current().type in _ITEM_START:
                return
            self._advance()

    def _synchronize_statement(self, start_pos: int) -> None:
        """Skip tokens until the end of the statement or enclosing block."""
        if self._pos == start_pos and not self._check(TokenType.RBRACE, TokenType.EOF):
            self._advance()
        depth = 0
        while not self._check(TokenType.EOF):
            tok_type = self._current().type
            if tok_type is TokenType.LBRACE:
                depth += 1
            elif tok_type is TokenType.RBRACE:
                if depth == 0:
                    return
                depth -= 1
            elif tok_type is TokenType.SEMICOLON and depth == 0:
                self._advance()
                return
            self._advance()

    # ------------------------------------------------------------------
    # Top-level parse
    # ------------------------------------------------------------------

    def parse(self) -> SyntaxTree:
        """Parse the token stream and return the finished ``SyntaxTree``.

        Raises
        ------
        ParseErrorCollection
            If any errors were recorded during parsing.
        """
        children = self._parse_items()
        children.append(self._tree.add_terminal(self._current()))  # EOF
        self._tree.set_root(self._node(SyntaxKind.SYNTAX_FILE, children))
        if self._errors.has_errors:
            raise self._errors
        return self._tree

    def _parse_items(self, nested: bool = False) -> list[int]:
        items: list[int] = []
        while not self._check(TokenType.EOF):
            if nested and self._check(TokenType.RBRACE):
                break
            start = self._pos
            try:
                items.append(self._parse_item())
            except ParseError as err:
                self._record(err, RecoveryStrategy.SYNCHRONIZE_ITEM)
                self._synchronize_item(start)
        return items

    def _parse_item_body(self) -> int:
        """Parse: ``'{' item* '}'``"""
        children = [self._expect(TokenType.LBRACE, "Expected '{' to open item body")]
        children.extend(self._parse_items(nested=True))
        children.append(self._expect(TokenType.RBRACE, "Expected '}' to close item body"))
        return self._node(SyntaxKind.ITEM_BODY, children)

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def _parse_item(self) -> int:
        children: list[int] = []
        attrs = self._parse_attributes()
        if attrs is not None:
            children.append(attrs)
        if self._check(TokenType.PUB):
            children.append(self._node(SyntaxKind.VISIBILITY, [self._bump()]))

        tok_type = self._current().type
        if tok_type is TokenType.USE:
            return self._parse_use(children)
        if tok_type is TokenType.FN:
            return self._parse_function(children)
        if tok_type is TokenType.MOD:
            return self._parse_module(children)
        if tok_type is TokenType.ENUM:
            return self._parse_enum(children)
        if tok_type is TokenType.STRUCT:
            return self._parse_struct(children)
        if tok_type is TokenType.CONST:
            return self._parse_const(children)
        if tok_type is TokenType.IMPL:
            return self._parse_impl(children)
        if tok_type is TokenType.TRAIT:
            return self._parse_trait(children)
        raise self._error(
            f"Expected an item, got {tok_type.name} {self._current().value!r}",
            (TokenType.USE, TokenType.FN, TokenType.MOD, TokenType.ENUM, TokenType.STRUCT),
        )

    def _parse_attributes(self) -> int | None:
        """Parse: ``('#' '[' path ('(' args ')')? ']')*`` into an ATTRIBUTE_LIST."""
        attrs: list[int] = []
        while self._check(TokenType.HASH):
            children = [self._bump()]
            children.append(self._expect(TokenType.LBRACKET, "Expected '[' after '#'"))
            children.append(self._parse_path())
            if self._check(TokenType.LPAREN):
                children.append(self._parse_arg_list(TokenType.LPAREN, TokenType.RPAREN))
            children.append(self._expect(TokenType.RBRACKET, "Expected ']' to close attribute"))
            attrs.append(self._node(SyntaxKind.ATTRIBUTE, children))
        if not attrs:
            return None
        return self._node(SyntaxKind.ATTRIBUTE_LIST, attrs)

    def _expect_name(self, message: str) -> int:
        return self._expect(TokenType.IDENT, message)

    # -- use ------------------------------------------------------------

    def _parse_use(self, children: list[int]) -> int:
        """Parse: ``'use' use_tree ';'``"""
        children.append(self._bump())
        children.append(self._parse_use_tree())
        children.append(self._expect(TokenType.SEMICOLON, "Expected ';' after use declaration"))
        return self._node(SyntaxKind.ITEM_USE, children)

    def _parse_use_tree(self) -> int:
        if self._check(TokenType.LBRACE):
            return self._parse_use_multi()
        if self._check(TokenType.STAR):
            return self._node(SyntaxKind.USE_PATH_STAR, [self._bump()])
        name = self._expect_name("Expected path segment in use declaration")
        if self._check(TokenType.COLON_COLON):
            sep = self._bump()
            rest = self._parse_use_tree()
            return self._node(SyntaxKind.USE_PATH_SINGLE, [name, sep, rest])
        children = [name]
        if self._check(TokenType.AS):
            alias = [self._bump(), self._expect_name("Expected alias name after 'as'")]
            children.append(self._node(SyntaxKind.ALIAS_CLAUSE, alias))
        return self._node(SyntaxKind.USE_PATH_LEAF, children)

    def _parse_use_multi(self) -> int:
        """Parse: ``'{' use_tree (',' use_tree)* ','? '}'``"""
        children = [self._bump()]
        entries: list[int] = []
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            entries.append(self._parse_use_tree())
            if not self._check(TokenType.COMMA):
                break
            entries.append(self._bump())
        if entries:
            children.append(self._node(SyntaxKind.USE_PATH_LIST, entries))
        children.append(self._expect(TokenType.RBRACE, "Expected '}' to close use list"))
        return self._node(SyntaxKind.USE_PATH_MULTI, children)

    # -- fn -------------------------------------------------------------

    def _parse_function(self, children: list[int]) -> int:
        """Parse: ``'fn' IDENT generics? '(' params ')' ('->' type)? (block | ';')``"""
        children.append(self._bump())
        children.append(self._expect_name("Expected function name"))
        if self._check(TokenType.LT):
            children.append(self._parse_angle_group(SyntaxKind.GENERIC_PARAMS))
        signature = [self._parse_param_list()]
        if self._check(TokenType.ARROW):
            signature.append(
                self._node(SyntaxKind.RETURN_TYPE, [self._bump(), self._parse_type()])
            )
        while self._check(TokenType.IDENT) and self._current().value in _FUNCTION_MODIFIERS:
            signature.append(self._bump())
        children.append(self._node(SyntaxKind.FUNCTION_SIGNATURE, signature))
        if self._check(TokenType.SEMICOLON):
            children.append(self._bump())
            return self._node(SyntaxKind.TRAIT_FUNCTION, children)
        children.append(self._parse_block())
        return self._node(SyntaxKind.ITEM_FUNCTION, children)

    def _parse_param_list(self) -> int:
        children = [self._expect(TokenType.LPAREN, "Expected '(' to open parameter list")]
        while not self._check(TokenType.RPAREN, TokenType.EOF):
            children.append(self._parse_param())
            if not self._check(TokenType.COMMA):
                break
            children.append(self._bump())
        children.append(self._expect(TokenType.RPAREN, "Expected ')' to close parameter list"))
        return self._node(SyntaxKind.PARAM_LIST, children)

    def _parse_param(self) -> int:
        children: list[int] = []
        while self._check(TokenType.REF, TokenType.MUT):
            children.append(self._bump())
        if self._check(TokenType.UNDERSCORE):
            children.append(self._bump())
        else:
            children.append(self._expect_name("Expected parameter name"))
        children.append(self._parse_type_clause())
        return self._node(SyntaxKind.PARAM, children)

    def _parse_type_clause(self) -> int:
        colon = self._expect(TokenType.COLON, "Expected ':' before type")
        return self._node(SyntaxKind.TYPE_CLAUSE, [colon, self._parse_type()])

    # -- mod / enum / struct / const / impl / trait ------------------------

    def _parse_module(self, children: list[int]) -> int:
        """Parse: ``'mod' IDENT (';' | '{' item* '}')``"""
        children.append(self._bump())
        children.append(self._expect_name("Expected module name"))
        if self._check(TokenType.SEMICOLON):
            children.append(self._bump())
        else:
            children.append(self._parse_item_body())
        return self._node(SyntaxKind.ITEM_MODULE, children)

    def _parse_enum(self, children: list[int]) -> int:
        children.append(self._bump())
        children.append(self._expect_name("Expected enum name"))
        if self._check(TokenType.LT):
            children.append(self._parse_angle_group(SyntaxKind.GENERIC_PARAMS))
        children.append(self._parse_member_list(SyntaxKind.VARIANT))
        return self._node(SyntaxKind.ITEM_ENUM, children)

    def _parse_struct(self, children: list[int]) -> int:
        children.append(self._bump())
        children.append(self._expect_name("Expected struct name"))
        if self._check(TokenType.LT):
            children.append(self._parse_angle_group(SyntaxKind.GENERIC_PARAMS))
        children.append(self._parse_member_list(SyntaxKind.MEMBER))
        return self._node(SyntaxKind.ITEM_STRUCT, children)

    def _parse_member_list(self, member_kind: SyntaxKind) -> int:
        """Parse: ``'{' (attribute* 'pub'? IDENT (':' type)?) ,* '}'``"""
        children = [self._expect(TokenType.LBRACE, "Expected '{' to open member list")]
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            member: list[int] = []
            attrs = self._parse_attributes()
            if attrs is not None:
                member.append(attrs)
            if self._check(TokenType.PUB):
                member.append(self._node(SyntaxKind.VISIBILITY, [self._bump()]))
            member.append(self._expect_name("Expected member name"))
            if self._check(TokenType.COLON):
                member.append(self._parse_type_clause())
            elif member_kind is SyntaxKind.MEMBER:
                raise self._error("Expected ':' after struct member name", (TokenType.COLON,))
            children.append(self._node(member_kind, member))
            if not self._check(TokenType.COMMA):
                break
            children.append(self._bump())
        children.append(self._expect(TokenType.RBRACE, "Expected '}' to close member list"))
        return self._node(SyntaxKind.MEMBER_LIST, children)

    def _parse_const(self, children: list[int]) -> int:
        """Parse: ``'const' IDENT ':' type '=' expr ';'``"""
        children.append(self._bump())
        children.append(self._expect_name("Expected constant name"))
        children.append(self._parse_type_clause())
        children.append(self._expect(TokenType.EQ, "Expected '=' in constant declaration"))
        children.append(self._parse_expr())
        children.append(self._expect(TokenType.SEMICOLON, "Expected ';' after constant"))
        return self._node(SyntaxKind.ITEM_CONST, children)

    def _parse_impl(self, children: list[int]) -> int:
        """Parse: ``'impl' IDENT generics? ('of' type body | '=' type ';')``"""
        children.append(self._bump())
        children.append(self._expect_name("Expected impl name"))
        if self._check(TokenType.LT):
            children.append(self._parse_angle_group(SyntaxKind.GENERIC_PARAMS))
        if self._check(TokenType.EQ):
            children.append(self._bump())
            children.append(self._parse_type())
            children.append(self._expect(TokenType.SEMICOLON, "Expected ';' after impl alias"))
            return self._node(SyntaxKind.ITEM_IMPL, children)
        children.append(self._expect(TokenType.OF, "Expected 'of' after impl name"))
        children.append(self._parse_type())
        children.append(self._parse_item_body())
        return self._node(SyntaxKind.ITEM_IMPL, children)

    def _parse_trait(self, children: list[int]) -> int:
        children.append(self._bump())
        children.append(self._expect_name("Expected trait name"))
        if self._check(TokenType.LT):
            children.append(self._parse_angle_group(SyntaxKind.GENERIC_PARAMS))
        children.append(self._parse_item_body())
        return self._node(SyntaxKind.ITEM_TRAIT, children)

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def _parse_type(self) -> int:
        children: list[int] = []
        if self._check(TokenType.AT, TokenType.STAR):
            children.append(self._bump())
            children.append(self._parse_type())
        elif self._check(TokenType.LPAREN):
            children.append(self._bump())
            while not self._check(TokenType.RPAREN, TokenType.EOF):
                children.append(self._parse_type())
                if not self._check(TokenType.COMMA):
                    break
                children.append(self._bump())
            children.append(self._expect(TokenType.RPAREN, "Expected ')' to close tuple type"))
        elif self._check(TokenType.LBRACKET):
            children.append(self._bump())
            children.append(self._parse_type())
            children.append(self._expect(TokenType.SEMICOLON, "Expected ';' in fixed size array type"))
            children.append(self._parse_expr())
            children.append(self._expect(TokenType.RBRACKET, "Expected ']' to close array type"))
        elif self._check(TokenType.UNDERSCORE):
            children.append(self._bump())
        else:
            children.append(self._expect_name("Expected type"))
            while self._check(TokenType.COLON_COLON, TokenType.LT):
                if self._check(TokenType.LT):
                    children.append(self._parse_angle_group(SyntaxKind.GENERIC_ARGS))
                    continue
                children.append(self._bump())
                if self._check(TokenType.LT):
                    children.append(self._parse_angle_group(SyntaxKind.GENERIC_ARGS))
                else:
                    children.append(self._expect_name("Expected type path segment"))
        return self._node(SyntaxKind.TYPE, children)

    def _parse_angle_group(self, kind: SyntaxKind) -> int:
        """Consume a balanced ``'<' ... '>'`` group as flat terminals."""
        children = [self._expect(TokenType.LT, "Expected '<'")]
        depth = 1
        while depth > 0:
            if self._check(TokenType.EOF):
                raise self._error("Unterminated generic argument list", (TokenType.GT,))
            if self._check(TokenType.LT):
                depth += 1
            elif self._check(TokenType.GT):
                depth -= 1
            children.append(self._bump())
        return self._node(kind, children)

    # ------------------------------------------------------------------
    # Blocks and statements
    # ------------------------------------------------------------------

    def _parse_block(self) -> int:
        """Parse: ``'{' statement* '}'``"""
        saved = self._no_struct
        self._no_struct = False
        try:
            children = [self._expect(TokenType.LBRACE, "Expected '{' to open block")]
            while not self._check(TokenType.RBRACE, TokenType.EOF):
                start = self._pos
                try:
                    children.append(self._parse_statement())
                except ParseError as err:
                    self._record(err, RecoveryStrategy.SYNCHRONIZE_STATEMENT)
                    self._synchronize_statement(start)
            children.append(self._expect(TokenType.RBRACE, "Expected '}' to close block"))
        finally:
            self._no_struct = saved
        return self._node(SyntaxKind.BLOCK, children)

    def _parse_statement(self) -> int:
        children: list[int] = []
        attrs = self._parse_attributes()
        if attrs is not None:
            children.append(attrs)

        tok_type = self._current().type
        if tok_type is TokenType.LET:
            children.append(self._bump())
            children.append(self._parse_pattern())
            if self._check(TokenType.COLON):
                children.append(self._parse_type_clause())
            if self._check(TokenType.EQ):
                children.append(self._bump())
                children.append(self._parse_expr())
            children.append(self._expect(TokenType.SEMICOLON, "Expected ';' after let statement"))
            return self._node(SyntaxKind.STATEMENT_LET, children)

        if tok_type is TokenType.RETURN:
            children.append(self._bump())
            if not self._check(TokenType.SEMICOLON, TokenType.RBRACE):
                children.append(self._parse_expr())
            self._finish_statement(children, "return")
            return self._node(SyntaxKind.STATEMENT_RETURN, children)

        if tok_type is TokenType.BREAK:
            children.append(self._bump())
            if not self._check(TokenType.SEMICOLON, TokenType.RBRACE):
                children.append(self._parse_expr())
            self._finish_statement(children, "break")
            return self._node(SyntaxKind.STATEMENT_BREAK, children)

        if tok_type is TokenType.CONTINUE:
            children.append(self._bump())
            self._finish_statement(children, "continue")
            return self._node(SyntaxKind.STATEMENT_CONTINUE, children)

        if tok_type in _BLOCK_LIKE_START:
            expr = self._parse_block_like()
            children.append(expr)
            if self._check(TokenType.SEMICOLON):
                children.append(self._bump())
            return self._node(SyntaxKind.STATEMENT_EXPR, children)

        expr = self._parse_expr()
        children.append(expr)
        if self._check(TokenType.SEMICOLON):
            children.append(self._bump())
        elif not self._check(TokenType.RBRACE) and self._kind(expr) not in BLOCK_LIKE_KINDS:
            raise self._error("Expected ';' after expression", (TokenType.SEMICOLON,))
        return self._node(SyntaxKind.STATEMENT_EXPR, children)

    def _finish_statement(self, children: list[int], what: str) -> None:
        if self._check(TokenType.SEMICOLON):
            children.append(self._bump())
        elif not self._check(TokenType.RBRACE):
            raise self._error(f"Expected ';' after {what} statement", (TokenType.SEMICOLON,))

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    def _parse_pattern(self) -> int:
        tok = self._current()
        if tok.type is TokenType.UNDERSCORE:
            return self._node(SyntaxKind.PATTERN_WILDCARD, [self._bump()])
        if tok.type is TokenType.LPAREN:
            children = [self._bump()]
            while not self._check(TokenType.RPAREN, TokenType.EOF):
                children.append(self._parse_pattern())
                if not self._check(TokenType.COMMA):
                    break
                children.append(self._bump())
            children.append(self._expect(TokenType.RPAREN, "Expected ')' to close tuple pattern"))
            return self._node(SyntaxKind.PATTERN_TUPLE, children)
        if tok.type in _LITERAL_TYPES:
            return self._node(SyntaxKind.PATTERN_LITERAL, [self._bump()])
        if tok.type is TokenType.MINUS and self._peek().type is TokenType.NUMBER:
            return self._node(SyntaxKind.PATTERN_LITERAL, [self._bump(), self._bump()])
        if tok.type in (TokenType.REF, TokenType.MUT):
            children = []
            while self._check(TokenType.REF, TokenType.MUT):
                children.append(self._bump())
            children.append(self._expect_name("Expected binding name"))
            return self._node(SyntaxKind.PATTERN_IDENT, children)
        if tok.type is not TokenType.IDENT:
            raise self._error(
                f"Expected pattern, got {tok.type.name} {tok.value!r}",
                (TokenType.IDENT, TokenType.UNDERSCORE, TokenType.LPAREN),
            )

        if not (self._peek().type in (TokenType.COLON_COLON, TokenType.LPAREN, TokenType.LBRACE)):
            return self._node(SyntaxKind.PATTERN_IDENT, [self._bump()])
        children = [self._parse_path()]
        if self._check(TokenType.LPAREN):
            children.append(self._bump())
            children.append(self._parse_pattern())
            children.append(self._expect(TokenType.RPAREN, "Expected ')' to close enum pattern"))
        elif self._check(TokenType.LBRACE):
            children.extend(self._consume_balanced(TokenType.LBRACE, TokenType.RBRACE))
        return self._node(SyntaxKind.PATTERN_ENUM, children)

    def _consume_balanced(self, open_type: TokenType, close_type: TokenType) -> list[int]:
        children = [self._expect(open_type)]
        depth = 1
        while depth > 0:
            if self._check(TokenType.EOF):
                raise self._error(f"Expected {close_type.name}", (close_type,))
            if self._check(open_type):
                depth += 1
            elif self._check(close_type):
                depth -= 1
            children.append(self._bump())
        return children

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expr(self, no_struct: bool = False) -> int:
        """Entry point for expression parsing (lowest precedence).

        ``no_struct`` disables struct constructor syntax, which is
        ambiguous with the block of ``if``, ``while``, ``for`` and
        ``match``.
        """
        saved = self._no_struct
        self._no_struct = no_struct
        try:
            return self._parse_assignment()
        finally:
            self._no_struct = saved

    def _parse_assignment(self) -> int:
        """Parse: ``binary (assign_op assignment)?`` (right associative)"""
        left = self._parse_binary(1)
        if self._current().type in _ASSIGN_OPS:
            op = self._bump()
            right = self._parse_assignment()
            return self._node(SyntaxKind.EXPR_BINARY, [left, op, right])
        return left

    def _parse_binary(self, min_precedence: int) -> int:
        """Precedence climbing over the binary operator table."""
        left = self._parse_unary()
        while True:
            precedence = _BINARY_PRECEDENCE.get(self._current().type)
            if precedence is None or precedence < min_precedence:
                return left
            op = self._bump()
            right = self._parse_binary(precedence + 1)
            left = self._node(SyntaxKind.EXPR_BINARY, [left, op, right])

    def _parse_unary(self) -> int:
        """Parse: ``('!' | '-' | '@' | '*') unary | postfix``"""
        if self._current().type in _UNARY_OPS:
            op = self._bump()
            return self._node(SyntaxKind.EXPR_UNARY, [op, self._parse_unary()])
        return self._parse_postfix(self._parse_primary())

    def _parse_postfix(self, expr: int) -> int:
        """Parse member access, method calls, '?' and indexing."""
        while True:
            if self._check(TokenType.DOT):
                dot = self._bump()
                if self._check(TokenType.NUMBER):
                    member = self._node(SyntaxKind.EXPR_LITERAL, [self._bump()])
                else:
                    member = self._parse_path()
                    if self._check(TokenType.LPAREN):
                        args = self._parse_arg_list(TokenType.LPAREN, TokenType.RPAREN)
                        member = self._node(SyntaxKind.EXPR_CALL, [member, args])
                expr = self._node(SyntaxKind.EXPR_BINARY, [expr, dot, member])
            elif self._check(TokenType.QUESTION):
                expr = self._node(SyntaxKind.EXPR_ERROR_PROPAGATE, [expr, self._bump()])
            elif self._check(TokenType.LBRACKET):
                children = [expr, self._bump(), self._parse_expr()]
                children.append(self._expect(TokenType.RBRACKET, "Expected ']' after index"))
                expr = self._node(SyntaxKind.EXPR_INDEXED, children)
            else:
                return expr

    def _parse_block_like(self) -> int:
        tok_type = self._current().type
        if tok_type is TokenType.LBRACE:
            return self._parse_block()
        if tok_type is TokenType.IF:
            return self._parse_if()
        if tok_type is TokenType.LOOP:
            return self._node(SyntaxKind.EXPR_LOOP, [self._bump(), self._parse_block()])
        if tok_type is TokenType.WHILE:
            children = [self._bump(), self._parse_condition(), self._parse_block()]
            return self._node(SyntaxKind.EXPR_WHILE, children)
        if tok_type is TokenType.FOR:
            children = [self._bump(), self._parse_pattern()]
            children.append(self._expect(TokenType.IN, "Expected 'in' in for loop"))
            children.append(self._parse_expr(no_struct=True))
            children.append(self._parse_block())
            return self._node(SyntaxKind.EXPR_FOR, children)
        return self._parse_match()

    def _parse_if(self) -> int:
        """Parse: ``'if' condition block ('else' (if | block))?``"""
        children = [self._bump(), self._parse_condition(), self._parse_block()]
        if self._check(TokenType.ELSE):
            else_children = [self._bump()]
            if self._check(TokenType.IF):
                else_children.append(self._parse_if())
            else:
                else_children.append(self._parse_block())
            children.append(self._node(SyntaxKind.ELSE_CLAUSE, else_children))
        return self._node(SyntaxKind.EXPR_IF, children)

    def _parse_condition(self) -> int:
        if not self._check(TokenType.LET):
            return self._parse_expr(no_struct=True)
        children = [self._bump(), self._parse_pattern()]
        children.append(self._expect(TokenType.EQ, "Expected '=' in let condition"))
        children.append(self._parse_expr(no_struct=True))
        return self._node(SyntaxKind.CONDITION_LET, children)

    def _parse_match(self) -> int:
        """Parse: ``'match' expr '{' (pattern ('|' pattern)* '=>' expr ','?)* '}'``"""
        children = [self._bump(), self._parse_expr(no_struct=True)]
        children.append(self._expect(TokenType.LBRACE, "Expected '{' after match expression"))
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            arm = [self._parse_pattern()]
            while self._check(TokenType.OR):
                arm.append(self._bump())
                arm.append(self._parse_pattern())
            arm.append(self._expect(TokenType.MATCH_ARROW, "Expected '=>' in match arm"))
            body = self._parse_expr()
            arm.append(body)
            if self._check(TokenType.COMMA):
                arm.append(self._bump())
            elif not self._check(TokenType.RBRACE) and self._kind(body) not in BLOCK_LIKE_KINDS:
                raise self._error("Expected ',' after match arm", (TokenType.COMMA,))
            children.append(self._node(SyntaxKind.MATCH_ARM, arm))
        children.append(self._expect(TokenType.RBRACE, "Expected '}' to close match"))
        return self._node(SyntaxKind.EXPR_MATCH, children)

    def _parse_primary(self) -> int:
        """Parse a primary expression."""
        tok = self._current()

        if tok.type in _LITERAL_TYPES:
            return self._node(SyntaxKind.EXPR_LITERAL, [self._bump()])

        if tok.type is TokenType.LPAREN:
            return self._parse_parenthesized()

        if tok.type in _BLOCK_LIKE_START:
            return self._parse_block_like()

        if tok.type is TokenType.LBRACKET:
            children = [self._bump()]
            while not self._check(TokenType.RBRACKET, TokenType.EOF):
                children.append(self._parse_expr())
                if not self._check(TokenType.COMMA):
                    break
                children.append(self._bump())
            children.append(self._expect(TokenType.RBRACKET, "Expected ']' to close array"))
            return self._node(SyntaxKind.EXPR_ARRAY, children)

        if tok.type is TokenType.IDENT:
            path = self._parse_path()
            if self._check(TokenType.NOT) and self._peek().type in (
                TokenType.LPAREN,
                TokenType.LBRACKET,
            ):
                bang = self._bump()
                if self._check(TokenType.LPAREN):
                    args = self._parse_arg_list(TokenType.LPAREN, TokenType.RPAREN)
                else:
                    args = self._parse_arg_list(TokenType.LBRACKET, TokenType.RBRACKET)
                return self._node(SyntaxKind.EXPR_INLINE_MACRO, [path, bang, args])
            if self._check(TokenType.LPAREN):
                args = self._parse_arg_list(TokenType.LPAREN, TokenType.RPAREN)
                return self._node(SyntaxKind.EXPR_CALL, [path, args])
            if self._check(TokenType.LBRACE) and not self._no_struct:
                return self._parse_struct_ctor(path)
            return path

        raise self._error(
            f"Expected expression, got {tok.type.name} {tok.value!r}",
            (TokenType.IDENT, TokenType.NUMBER, TokenType.LPAREN),
        )

    def _parse_parenthesized(self) -> int:
        """Parse ``()`` / ``(expr)`` / ``(expr, ...)``."""
        children = [self._bump()]
        if self._check(TokenType.RPAREN):
            children.append(self._bump())
            return self._node(SyntaxKind.EXPR_TUPLE, children)
        first = self._parse_expr()
        children.append(first)
        if not self._check(TokenType.COMMA):
            children.append(self._expect(TokenType.RPAREN, "Expected ')' to close parentheses"))
            return self._node(SyntaxKind.EXPR_PARENTHESIZED, children)
        while self._check(TokenType.COMMA):
            children.append(self._bump())
            if self._check(TokenType.RPAREN):
                break
            children.append(self._parse_expr())
        children.append(self._expect(TokenType.RPAREN, "Expected ')' to close tuple"))
        return self._node(SyntaxKind.EXPR_TUPLE, children)

    def _parse_path(self) -> int:
        """Parse: ``IDENT ('::' (IDENT | generic_args))*``"""
        children = [self._expect_name("Expected identifier")]
        while self._check(TokenType.COLON_COLON):
            children.append(self._bump())
            if self._check(TokenType.LT):
                children.append(self._parse_angle_group(SyntaxKind.GENERIC_ARGS))
            else:
                children.append(self._expect_name("Expected path segment after '::'"))
        return self._node(SyntaxKind.EXPR_PATH, children)

    def _parse_arg_list(self, open_type: TokenType, close_type: TokenType) -> int:
        """Parse: ``open (arg (',' arg)* ','?)? close``

        An argument is an expression, optionally preceded by ``ref`` or
        ``mut``, or a named argument ``IDENT ':' expr``.
        """
        children = [self._expect(open_type)]
        saved = self._no_struct
        self._no_struct = False
        try:
            while not self._check(close_type, TokenType.EOF):
                if self._check(TokenType.IDENT) and self._peek().type is TokenType.COLON:
                    named = [self._bump(), self._bump(), self._parse_expr()]
                    children.append(self._node(SyntaxKind.NAMED_ARG, named))
                else:
                    while self._check(TokenType.REF, TokenType.MUT):
                        children.append(self._bump())
                    children.append(self._parse_expr())
                if not self._check(TokenType.COMMA):
                    break
                children.append(self._bump())
            children.append(self._expect(close_type, f"Expected {close_type.name} to close arguments"))
        finally:
            self._no_struct = saved
        return self._node(SyntaxKind.ARG_LIST, children)

    def _parse_struct_ctor(self, path: int) -> int:
        """Parse: ``path '{' (IDENT (':' expr)? | '..' expr),* '}'``"""
        children = [path, self._bump()]
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            if self._check(TokenType.DOT_DOT):
                arg = [self._bump(), self._parse_expr()]
            else:
                arg = [self._expect_name("Expected member name in struct constructor")]
                if self._check(TokenType.COLON):
                    arg.append(self._bump())
                    arg.append(self._parse_expr())
            children.append(self._node(SyntaxKind.STRUCT_ARG, arg))
            if not self._check(TokenType.COMMA):
                break
            children.append(self._bump())
        children.append(self._expect(TokenType.RBRACE, "Expected '}' to close struct constructor"))
        return self._node(SyntaxKind.EXPR_STRUCT_CTOR, children)


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def parse(source: str, file_id: str = "lib.cairo") -> SyntaxTree:
    """Parse a Cairo source string and return its ``SyntaxTree``.

    Parameters
    ----------
    source:
        Complete Cairo source text.
    file_id:
        Identifier of the file, carried by every node of the tree.

    Returns
    -------
    SyntaxTree
        The parsed tree; ``tree.root`` is the ``SYNTAX_FILE`` node.

    Raises
    ------
    cairo_lint.lexer.LexError
        If the source contains invalid characters.
    ParseErrorCollection
        If the source contains syntax errors.

    Example
    -------
    ::

        from cairo_lint.parser import parse
        tree = parse("fn main() { let _y = 1 + 0; }")
    """
    tokens = tokenize(source)
    return Parser(tokens, source, file_id).parse()
