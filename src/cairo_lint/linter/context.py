"""Rule registry and dispatch for the Cairo linter.

A *rule group* is one checker function together with the rules
(``RuleDescriptor``) whose messages it can emit.  Several rules share a
checker when one check can report several distinct problems, e.g. the
``eq_op`` group reports six different identical-operand messages.

``LintContext`` indexes registered groups by message and by
``LintKind``, keeps the checker list deduplicated by identity so a
shared checker runs once per item, and resolves a diagnostic back to the
rule that owns it.

The process-wide registry is built lazily, at most once, by
``get_lint_context``.  After construction it is only read.

Example
-------
::

    from cairo_lint.linter.context import get_lint_context

    context = get_lint_context()
    rule = context.resolve("Leaving `panic` in the code is discouraged.")
    assert rule.allowed_name == "panic"
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from cairo_lint.diagnostics.diagnostic import Diagnostic, Severity
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.tree import SyntaxNode

logger = logging.getLogger(__name__)

CheckFunction = Callable[[SyntaxNode, SemanticModel], list[Diagnostic]]
"""Checker signature: ``(item, model) -> diagnostics``."""

FixFunction = Callable[[SyntaxNode], tuple[SyntaxNode, str] | None]
"""Fixer signature: ``(anchor) -> (node to replace, replacement) | None``."""

_PLACEHOLDER = "{}"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class UnknownLintError(LookupError):
    """Raised when a message or kind has no registered rule."""

    def __init__(self, message: str) -> None:
        self.lint_message = message
        super().__init__(
            f"No lint rule is registered for {message!r}. "
            "Every message a checker emits must belong to exactly one rule."
        )


class DuplicateRuleError(ValueError):
    """Raised when a rule's message or kind is registered twice."""

    def __init__(self, what: str, value: str) -> None:
        self.what = what
        self.value = value
        super().__init__(f"A lint rule with {what} {value!r} is already registered.")


# ---------------------------------------------------------------------------
# Rule descriptors and groups
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RuleDescriptor:
    """Metadata binding a message to its suppression name, kind and fixer.

    Parameters
    ----------
    kind:
        Unique tag of the rule.
    allowed_name:
        Name accepted by ``#[allow(...)]`` and by the project
        configuration.  Several rules may share one.
    message:
        The exact diagnostic message.  A single ``{}`` placeholder turns
        it into a template matched by prefix and suffix.
    enabled_by_default:
        Whether the rule runs when the configuration does not mention it.
    fixer:
        Optional function producing the replacement for a diagnostic.
    severity:
        Severity of the diagnostics the rule emits.
    """

    kind: LintKind
    allowed_name: str
    message: str
    enabled_by_default: bool = True
    fixer: FixFunction | None = field(default=None, compare=False)
    severity: Severity = Severity.WARNING

    @property
    def has_fixer(self) -> bool:
        """Return True if the rule can produce automatic fixes."""
        return self.fixer is not None

    @property
    def is_template(self) -> bool:
        """Return True if the message carries a ``{}`` placeholder."""
        return _PLACEHOLDER in self.message

    def matches(self, message: str) -> bool:
        """Return True if ``message`` was produced by this rule."""
        if not self.is_template:
            return message == self.message
        prefix, suffix = self.message.split(_PLACEHOLDER, 1)
        return (
            len(message) >= len(prefix) + len(suffix)
            and message.startswith(prefix)
            and message.endswith(suffix)
        )

    def diagnostic(self, anchor: SyntaxNode, *args: str) -> Diagnostic:
        """Build a diagnostic of this rule anchored at ``anchor``."""
        message = self.message.format(*args) if self.is_template else self.message
        return Diagnostic(anchor=anchor, message=message, severity=self.severity, kind=self.kind)


@dataclass(frozen=True)
class RuleGroup:
    """One checker and the rules whose messages it emits.

    Parameters
    ----------
    name:
        Display name of the group.
    rules:
        The rules owned by the group.
    check:
        Checker run once per item for the whole group.
    """

    name: str
    rules: tuple[RuleDescriptor, ...]
    check: CheckFunction = field(compare=False)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class LintContext:
    """Registry of rule groups with message and kind indexes.

    Parameters
    ----------
    groups:
        Groups to register, in order.
    """

    def __init__(self, groups: Iterable[RuleGroup] = ()) -> None:
        self._groups: list[RuleGroup] = []
        self._by_message: dict[str, RuleDescriptor] = {}
        self._templates: list[RuleDescriptor] = []
        self._by_kind: dict[LintKind, RuleDescriptor] = {}
        self._checkers: list[CheckFunction] = []
        for group in groups:
            self.register(group)

    @classmethod
    def default(cls) -> LintContext:
        """Build a fresh registry holding every shipped rule group."""
        from cairo_lint.linter.rules import ALL_RULE_GROUPS

        return cls(ALL_RULE_GROUPS)

    def __len__(self) -> int:
        return sum(len(group.rules) for group in self._groups)

    def __repr__(self) -> str:
        return f"LintContext(groups={len(self._groups)}, rules={len(self)})"

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, group: RuleGroup) -> None:
        """Add ``group`` and index its rules.

        Raises
        ------
        DuplicateRuleError
            If a message or kind of the group is already registered,
            or appears twice within the group.  A template clashes with
            every message it matches.  ``UNKNOWN`` may be shared by any
            number of rules.
        """
        pending: list[RuleDescriptor] = []
        seen_kinds: set[LintKind] = set()
        for rule in group.rules:
            if self._message_clashes(rule, pending):
                raise DuplicateRuleError("message", rule.message)
            if rule.kind is not LintKind.UNKNOWN:
                if rule.kind in self._by_kind or rule.kind in seen_kinds:
                    raise DuplicateRuleError("kind", rule.kind.value)
                seen_kinds.add(rule.kind)
            pending.append(rule)

        self._groups.append(group)
        for rule in group.rules:
            if rule.is_template:
                self._templates.append(rule)
            else:
                self._by_message[rule.message] = rule
            # Custom rules share UNKNOWN and are found by message only.
            if rule.kind is not LintKind.UNKNOWN:
                self._by_kind[rule.kind] = rule
        if not any(checker is group.check for checker in self._checkers):
            self._checkers.append(group.check)
        logger.debug(
            "Registered lint group %r with %d rule(s)", group.name, len(group.rules)
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def groups(self) -> tuple[RuleGroup, ...]:
        """Registered groups in registration order."""
        return tuple(self._groups)

    @property
    def rules(self) -> tuple[RuleDescriptor, ...]:
        """Every registered rule in registration order."""
        return tuple(rule for group in self._groups for rule in group.rules)

    @property
    def checkers(self) -> tuple[CheckFunction, ...]:
        """Distinct checker functions in registration order."""
        return tuple(self._checkers)

    def lint_kind(self, message: str) -> LintKind:
        """Return the kind of the rule owning ``message``, or ``UNKNOWN``."""
        rule = self._lookup(message)
        return rule.kind if rule is not None else LintKind.UNKNOWN

    def resolve(self, message: str) -> RuleDescriptor:
        """Return the rule owning ``message``.

        Raises
        ------
        UnknownLintError
            If no registered rule produces ``message``.
        """
        rule = self._lookup(message)
        if rule is None:
            raise UnknownLintError(message)
        return rule

    def descriptor(self, kind: LintKind) -> RuleDescriptor:
        """Return the rule tagged ``kind``.

        Raises
        ------
        UnknownLintError
            If no rule with ``kind`` is registered.
        """
        try:
            return self._by_kind[kind]
        except KeyError:
            raise UnknownLintError(kind.value) from None

    def rule_for(self, diagnostic: Diagnostic) -> RuleDescriptor:
        """Return the rule owning ``diagnostic`` (by kind, else by message)."""
        if diagnostic.kind is not LintKind.UNKNOWN:
            return self.descriptor(diagnostic.kind)
        return self.resolve(diagnostic.message)

    def find_by_name(self, allowed_name: str) -> RuleDescriptor | None:
        """Return the first rule suppressed by ``allowed_name``, if any."""
        for rule in self.rules:
            if rule.allowed_name == allowed_name:
                return rule
        return None

    def allowed_names(self) -> list[str]:
        """Return the distinct suppression names in registration order."""
        names: list[str] = []
        for rule in self.rules:
            if rule.allowed_name not in names:
                names.append(rule.allowed_name)
        return names

    def is_enabled_by_default(self, allowed_name: str) -> bool:
        """Return the default enablement of the rules named ``allowed_name``."""
        rule = self.find_by_name(allowed_name)
        return rule.enabled_by_default if rule is not None else False

    def _message_clashes(self, rule: RuleDescriptor, pending: list[RuleDescriptor]) -> bool:
        """Return True if ``rule``'s message could be confused with another rule's."""
        others = [*self._by_message.values(), *self._templates, *pending]
        return any(
            other.message == rule.message
            or other.matches(rule.message)
            or rule.matches(other.message)
            for other in others
        )

    def _lookup(self, message: str) -> RuleDescriptor | None:
        rule = self._by_message.get(message)
        if rule is not None:
            return rule
        for template in self._templates:
            if template.matches(message):
                return template
        return None

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
        """Run every distinct checker against ``item``.

        Parameters
        ----------
        item:
            A module item of the file described by ``model``.
        model:
            Semantic facts about the file.

        Returns
        -------
        list[Diagnostic]
            The concatenated diagnostics, in checker registration order.
        """
        diagnostics: list[Diagnostic] = []
        for checker in self._checkers:
            diagnostics.extend(checker(item, model))
        return diagnostics


# ---------------------------------------------------------------------------
# Process-wide registry
# ---------------------------------------------------------------------------

_context: LintContext | None = None
_context_lock = threading.Lock()


def get_lint_context() -> LintContext:
    """Return the shared registry, building it on first use."""
    global _context
    if _context is None:
        with _context_lock:
            if _context is None:
                _context = LintContext.default()
    return _context


def is_panic_diagnostic(diagnostic: Diagnostic, context: LintContext | None = None) -> bool:
    """Return True if ``diagnostic`` was produced by the ``panic`` rule."""
    ctx = context if context is not None else get_lint_context()
    return ctx.lint_kind(diagnostic.message) is LintKind.PANIC or diagnostic.kind is LintKind.PANIC
