"""Parse error types for the Cairo parser.

All parse errors carry source-location information so that the CLI can
display precise, actionable error messages.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from cairo_lint.grammar.tokens import Token, TokenType
from cairo_lint.syntax.tree import TextSpan


class RecoveryStrategy(Enum):
    """How the parser continued after an error.

    SYNCHRONIZE_ITEM
        Skip tokens until the next token that can start a module item.
    SYNCHRONIZE_STATEMENT
        Skip tokens until the end of the current statement (``;``) or
        the end of the enclosing block (``}``).
    SKIP_TOKEN
        Consume the unexpected token and continue from the next one.
    """

    SYNCHRONIZE_ITEM = auto()
    SYNCHRONIZE_STATEMENT = auto()
    SKIP_TOKEN = auto()


@dataclass(frozen=True)
class ParseError(Exception):
    """A single parse error with location and recovery hint.

    Parameters
    ----------
    message:
        Human-readable description of the error.
    span:
        Source range of the offending token.
    line:
        1-based line of the offending token.
    col:
        1-based column of the offending token.
    expected:
        What token types were expected at this position.
    found:
        The actual token that was encountered, if available.
    recovery:
        Recovery strategy the parser applied.
    """

    message: str
    span: TextSpan
    line: int
    col: int
    expected: tuple[TokenType, ...]
    found: Token | None
    recovery: RecoveryStrategy

    def __str__(self) -> str:
        loc = f"{self.line}:{self.col}"
        if self.found is not None:
            return (
                f"ParseError at {loc}: {self.message} "
                f"(found {self.found.type.name} {self.found.value!r})"
            )
        return f"ParseError at {loc}: {self.message}"

    # dataclass(frozen=True) doesn't call Exception.__init__ automatically
    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (str(self),))


@dataclass
class ParseErrorCollection(Exception):
    """Aggregates multiple ``ParseError`` instances from a single parse run.

    The parser continues past errors and collects them all rather than
    aborting at the first problem.

    Parameters
    ----------
    errors:
        Ordered list of errors encountered during parsing.
    file_id:
        Identifier of the file being parsed.
    """

    errors: list[ParseError] = field(default_factory=list)
    file_id: str = "lib.cairo"

    def add(self, error: ParseError) -> None:
        """Append a new error to the collection."""
        self.errors.append(error)

    @property
    def has_errors(self) -> bool:
        """Return True if any errors were recorded."""
        return bool(self.errors)

    def __str__(self) -> str:
        if not self.errors:
            return f"ParseErrorCollection for {self.file_id} (no errors)"
        lines = [f"ParseErrorCollection for {self.file_id} ({len(self.errors)} error(s)):"]
        for err in self.errors:
            lines.append(f"  {err}")
        return "\n".join(lines)
