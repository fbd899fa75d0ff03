"""Traversal Context.

Carries everything a comparison run accumulates while walking two documents:
the path-segment stack, the document pair, the request/response direction and
the ordered list of findings. One context is used by exactly one run.
"""

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from specdiff.exceptions import ComparisonLimitExceeded
from specdiff.types import (
    ComparisonMessage,
    ComparisonSettings,
    DataDirection,
    MessageType,
    OpenApiDocument,
    Severity,
)

from .rules import ComparisonRule, get_rule


logger = logging.getLogger("specdiff.comparator")

_DIRECTION_WORDING = {
    DataDirection.REQUEST: " (in the request)",
    DataDirection.RESPONSE: " (in the response)",
}


def escape_segment(segment: Any) -> str:
    """Escape a path segment the way JSON pointers do."""
    return str(segment).replace("~", "~0").replace("/", "~1")


def summarize_value(value: Any) -> str:
    """Create a short summary of a value for reporting."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        if len(value) > 50:
            return f"{value[:50]}..."
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(summarize_value(item) for item in value)
    text = json.dumps(value, sort_keys=True, default=str)
    if len(text) > 50:
        return f"{text[:50]}..."
    return text


class ComparisonContext:
    """Mutable state shared by all comparators during one run.

    Not safe for concurrent use: compare several document pairs by giving
    each its own context.
    """

    def __init__(
        self,
        old_document: OpenApiDocument,
        new_document: OpenApiDocument,
        settings: ComparisonSettings | None = None,
    ):
        self.old_document = old_document
        self.new_document = new_document
        self.settings = settings or ComparisonSettings()
        self.direction = DataDirection.NONE
        self.operation: str | None = None
        self.messages: list[ComparisonMessage] = []
        self.nodes_visited = 0
        # (old key, new key) pairs of schemas currently on the traversal stack
        self.schemas_in_progress: set[tuple[Any, Any]] = set()
        # pairs compared in full within the current operation, with their direction
        self.schemas_compared: set[tuple[Any, Any, DataDirection]] = set()
        self._segments: list[str] = []

    # ------------------------------------------------------------------
    # Path stack
    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        return "".join(f"/{segment}" for segment in self._segments)

    @property
    def depth(self) -> int:
        return len(self._segments)

    def push_property(self, name: Any) -> None:
        """Push a named object-field segment."""
        self._push(name)

    def push_named_item(self, name: Any) -> None:
        """Push a segment for an array item identified by its logical name."""
        self._push(name)

    def pop(self) -> str:
        return self._segments.pop()

    def _push(self, segment: Any) -> None:
        if len(self._segments) >= self.settings.max_depth:
            raise ComparisonLimitExceeded("max_depth", self.settings.max_depth, self.path)
        self._segments.append(escape_segment(segment))

    @contextmanager
    def in_property(self, name: Any) -> Iterator[None]:
        """Scope a block under a property segment, popping it on every exit."""
        self.push_property(name)
        try:
            yield
        finally:
            self.pop()

    @contextmanager
    def in_named_item(self, name: Any) -> Iterator[None]:
        """Scope a block under a named array item segment."""
        self.push_named_item(name)
        try:
            yield
        finally:
            self.pop()

    @contextmanager
    def in_direction(self, direction: DataDirection) -> Iterator[None]:
        """Mark a sub-tree as request or response side; resets to NONE on exit."""
        self.direction = direction
        try:
            yield
        finally:
            self.direction = DataDirection.NONE

    # ------------------------------------------------------------------
    # Limits
    # ------------------------------------------------------------------

    def visit(self) -> None:
        """Count one visited node against the run's budget."""
        self.nodes_visited += 1
        if self.nodes_visited > self.settings.max_nodes:
            raise ComparisonLimitExceeded("max_nodes", self.settings.max_nodes, self.path)

    # ------------------------------------------------------------------
    # Findings
    # ------------------------------------------------------------------

    def emit(
        self,
        rule: ComparisonRule,
        *,
        old: Any = None,
        new: Any = None,
        name: Any = None,
    ) -> ComparisonMessage:
        """Record a finding for ``rule`` at the current path."""
        definition = get_rule(rule)
        message = definition.template.format(
            old=summarize_value(old),
            new=summarize_value(new),
            name=summarize_value(name),
        )
        message += _DIRECTION_WORDING.get(self.direction, "")

        finding = ComparisonMessage(
            code=rule.value,
            kind=definition.kind,
            severity=definition.severity,
            path=self.path,
            old_summary=_summary(old, name if definition.kind == MessageType.REMOVAL else None),
            new_summary=_summary(new, name if definition.kind == MessageType.ADDITION else None),
            message=message,
            operation=self.operation,
        )
        logger.debug(f"{finding.severity.value}: {finding.code} at {finding.path}")
        self.messages.append(finding)
        return finding

    def emit_breaking(self, rule: ComparisonRule, **values: Any) -> ComparisonMessage:
        """Record a finding for a rule the catalog marks as breaking."""
        _check_severity(rule, Severity.BREAKING)
        return self.emit(rule, **values)

    def emit_info(self, rule: ComparisonRule, **values: Any) -> ComparisonMessage:
        """Record a finding for a rule the catalog marks as informational."""
        _check_severity(rule, Severity.INFO)
        return self.emit(rule, **values)


def _summary(value: Any, fallback: Any) -> str:
    if value is not None:
        return summarize_value(value)
    if fallback is not None:
        return summarize_value(fallback)
    return ""


def _check_severity(rule: ComparisonRule, expected: Severity) -> None:
    actual = get_rule(rule).severity
    if actual != expected:
        raise ValueError(f"Rule {rule.value} is {actual.value}, not {expected.value}")
