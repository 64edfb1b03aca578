"""Arena-backed syntax tree for Cairo source files.

A ``SyntaxTree`` owns a flat list of node records.  Each record stores
its kind, the indices of its children, the index of its parent and the
four offsets that delimit it in the source text:

* ``full_start`` / ``full_end`` include the leading trivia of the first
  token and the trailing trivia of the last token;
* ``start`` / ``end`` exclude them.

``SyntaxNode`` is a lightweight, hashable handle ``(tree, index)``.
Handles compare equal when they point at the same record of the same
tree, which makes them usable as dictionary keys (the import pruner
keys its state by node).  Walking to the root is a chain of index
lookups, so ancestor queries are O(depth) and never allocate.

Trees are built bottom-up by the parser: children are added before
their parent, and ``set_root`` closes the tree.
"""
from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterator
from dataclasses import dataclass

from cairo_lint.grammar.tokens import Token, TokenType
from cairo_lint.syntax.kinds import SyntaxKind

# ---------------------------------------------------------------------------
# Text spans
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TextSpan:
    """Half-open character range ``[start, end)`` within a file's text.

    Parameters
    ----------
    start:
        0-based offset of the first character.
    end:
        0-based offset *past* the last character.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid text span [{self.start}, {self.end})")

    def __repr__(self) -> str:
        return f"TextSpan({self.start}, {self.end})"

    @property
    def length(self) -> int:
        """Number of characters covered by the span."""
        return self.end - self.start

    def contains(self, other: TextSpan) -> bool:
        """Return True if ``other`` lies entirely within this span."""
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: TextSpan) -> bool:
        """Return True if the two spans share at least one character."""
        return self.start < other.end and other.start < self.end


# ---------------------------------------------------------------------------
# Node records
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class _NodeData:
    kind: SyntaxKind
    children: tuple[int, ...]
    token: Token | None
    full_start: int
    start: int
    end: int
    full_end: int
    parent: int | None = None


class SyntaxTree:
    """Flat arena of syntax nodes for one source file.

    Parameters
    ----------
    source:
        The complete text the tree was parsed from.
    file_id:
        Identifier of the file, used in rendered diagnostics and as the
        key of per-file fix sets.
    """

    __slots__ = ("source", "file_id", "_nodes", "_root", "_line_starts")

    def __init__(self, source: str, file_id: str = "lib.cairo") -> None:
        self.source = source
        self.file_id = file_id
        self._nodes: list[_NodeData] = []
        self._root: int | None = None
        self._line_starts: list[int] = [0]
        for idx, ch in enumerate(source):
            if ch == "\n":
                self._line_starts.append(idx + 1)

    def __repr__(self) -> str:
        return f"SyntaxTree({self.file_id!r}, nodes={len(self._nodes)})"

    def __len__(self) -> int:
        return len(self._nodes)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_terminal(self, token: Token) -> int:
        """Add a terminal node wrapping ``token`` and return its index."""
        start = token.offset
        end = token.end
        self._nodes.append(
            _NodeData(
                kind=SyntaxKind.TERMINAL,
                children=(),
                token=token,
                full_start=start - len(token.leading_trivia),
                start=start,
                end=end,
                full_end=end + len(token.trailing_trivia),
            )
        )
        return len(self._nodes) - 1

    def add_node(self, kind: SyntaxKind, children: list[int] | tuple[int, ...]) -> int:
        """Add an interior node over already-built ``children``.

        Raises
        ------
        ValueError
            If ``children`` is empty or one of them already has a parent.
        """
        if not children:
            raise ValueError(f"{kind.name} node requires at least one child")
        index = len(self._nodes)
        for child in children:
            data = self._nodes[child]
            if data.parent is not None:
                raise ValueError(f"Node {child} already has a parent")
            data.parent = index
        first = self._nodes[children[0]]
        last = self._nodes[children[-1]]
        self._nodes.append(
            _NodeData(
                kind=kind,
                children=tuple(children),
                token=None,
                full_start=first.full_start,
                start=first.start,
                end=last.end,
                full_end=last.full_end,
            )
        )
        return index

    def set_root(self, index: int) -> None:
        """Mark ``index`` as the root of the tree."""
        self._root = index

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def root(self) -> SyntaxNode:
        """Return the root node (the ``SYNTAX_FILE`` node).

        Raises
        ------
        RuntimeError
            If the tree has not been closed with ``set_root``.
        """
        if self._root is None:
            raise RuntimeError("Syntax tree has no root")
        return SyntaxNode(self, self._root)

    def node(self, index: int) -> SyntaxNode:
        """Return a handle to the node stored at ``index``."""
        if not 0 <= index < len(self._nodes):
            raise IndexError(f"No syntax node at index {index}")
        return SyntaxNode(self, index)

    def data(self, index: int) -> _NodeData:
        return self._nodes[index]

    def line_col(self, offset: int) -> tuple[int, int]:
        """Return the 1-based ``(line, col)`` of a character offset."""
        line_idx = bisect_right(self._line_starts, offset) - 1
        return line_idx + 1, offset - self._line_starts[line_idx] + 1

    def line_text(self, line: int) -> str:
        """Return the text of 1-based ``line`` without its newline."""
        begin = self._line_starts[line - 1]
        if line < len(self._line_starts):
            end = self._line_starts[line] - 1
        else:
            end = len(self.source)
        return self.source[begin:end].rstrip("\r")

    def line_start(self, line: int) -> int:
        """Return the offset of the first character of 1-based ``line``."""
        return self._line_starts[line - 1]


# ---------------------------------------------------------------------------
# Node handles
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """Handle to one node of a ``SyntaxTree``.

    Parameters
    ----------
    tree:
        The tree that owns the node.
    index:
        Position of the node record in the tree's arena.
    """

    tree: SyntaxTree
    index: int

    def __repr__(self) -> str:
        token = self.token
        if token is not None:
            return f"SyntaxNode({token.type.name}, {token.value!r})"
        return f"SyntaxNode({self.kind.name}, {self.span_without_trivia})"

    @property
    def _data(self) -> _NodeData:
        return self.tree.data(self.index)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def kind(self) -> SyntaxKind:
        """The syntax kind of this node."""
        return self._data.kind

    @property
    def file_id(self) -> str:
        """Identifier of the file the node belongs to."""
        return self.tree.file_id

    @property
    def is_terminal(self) -> bool:
        """Return True for single-token nodes."""
        return self._data.kind is SyntaxKind.TERMINAL

    @property
    def token(self) -> Token | None:
        """The wrapped token for terminals, None for interior nodes."""
        return self._data.token

    @property
    def token_type(self) -> TokenType | None:
        """The token type for terminals, None for interior nodes."""
        token = self._data.token
        return token.type if token is not None else None

    @property
    def parent(self) -> SyntaxNode | None:
        """The parent node, or None for the root."""
        parent = self._data.parent
        return SyntaxNode(self.tree, parent) if parent is not None else None

    @property
    def children(self) -> list[SyntaxNode]:
        """The direct children in source order."""
        return [SyntaxNode(self.tree, idx) for idx in self._data.children]

    def child(self, kind: SyntaxKind) -> SyntaxNode | None:
        """Return the first direct child of ``kind``, or None."""
        for idx in self._data.children:
            if self.tree.data(idx).kind is kind:
                return SyntaxNode(self.tree, idx)
        return None

    def children_of_kind(self, kind: SyntaxKind) -> list[SyntaxNode]:
        """Return every direct child of ``kind``."""
        return [
            SyntaxNode(self.tree, idx)
            for idx in self._data.children
            if self.tree.data(idx).kind is kind
        ]

    def terminal(self, token_type: TokenType) -> SyntaxNode | None:
        """Return the first direct terminal child of ``token_type``, or None."""
        for idx in self._data.children:
            token = self.tree.data(idx).token
            if token is not None and token.type is token_type:
                return SyntaxNode(self.tree, idx)
        return None

    def ancestors(self) -> Iterator[SyntaxNode]:
        """Yield the parent, grandparent, ... up to the root."""
        parent = self._data.parent
        while parent is not None:
            yield SyntaxNode(self.tree, parent)
            parent = self.tree.data(parent).parent

    def ancestors_with_self(self) -> Iterator[SyntaxNode]:
        """Yield this node followed by all of its ancestors."""
        yield self
        yield from self.ancestors()

    def descendants(self) -> Iterator[SyntaxNode]:
        """Yield every node below this one in pre-order (self excluded)."""
        stack = list(reversed(self._data.children))
        while stack:
            idx = stack.pop()
            yield SyntaxNode(self.tree, idx)
            stack.extend(reversed(self.tree.data(idx).children))

    @property
    def depth(self) -> int:
        """Number of ancestors between this node and the root."""
        return sum(1 for _ in self.ancestors())

    def is_descendant_of(self, other: SyntaxNode) -> bool:
        """Return True if ``other`` is a strict ancestor of this node."""
        return any(ancestor == other for ancestor in self.ancestors())

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    @property
    def span(self) -> TextSpan:
        """Span including the surrounding trivia."""
        data = self._data
        return TextSpan(data.full_start, data.full_end)

    @property
    def span_without_trivia(self) -> TextSpan:
        """Span of the node's own text, trivia excluded."""
        data = self._data
        return TextSpan(data.start, data.end)

    @property
    def text(self) -> str:
        """Source text of the node including surrounding trivia."""
        data = self._data
        return self.tree.source[data.full_start:data.full_end]

    @property
    def text_without_trivia(self) -> str:
        """Source text of the node without surrounding trivia."""
        data = self._data
        return self.tree.source[data.start:data.end]

    @property
    def line_col(self) -> tuple[int, int]:
        """1-based ``(line, col)`` of the first non-trivia character."""
        return self.tree.line_col(self._data.start)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def attributes(self) -> list[SyntaxNode]:
        """Return the ``ATTRIBUTE`` nodes attached to this node."""
        attr_list = self.child(SyntaxKind.ATTRIBUTE_LIST)
        if attr_list is None:
            return []
        return attr_list.children_of_kind(SyntaxKind.ATTRIBUTE)

    def has_attr(self, attr: str) -> bool:
        """Return True if an attribute named ``attr`` is attached."""
        return any(_attribute_name(node) == attr for node in self.attributes())

    def has_attr_with_arg(self, attr: str, arg: str) -> bool:
        """Return True if ``#[attr(..., arg, ...)]`` is attached to this node."""
        for node in self.attributes():
            if _attribute_name(node) != attr:
                continue
            if arg in _attribute_args(node):
                return True
        return False


def _attribute_name(attribute: SyntaxNode) -> str:
    path = attribute.child(SyntaxKind.EXPR_PATH)
    return path.text_without_trivia if path is not None else ""


def _attribute_args(attribute: SyntaxNode) -> list[str]:
    arg_list = attribute.child(SyntaxKind.ARG_LIST)
    if arg_list is None:
        return []
    return [
        child.text_without_trivia
        for child in arg_list.children
        if not child.is_terminal
    ]
