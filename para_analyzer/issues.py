"""Rule descriptor and finding data model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from .classifier import Classification, Trigger
from .syntax import Span


class Severity(Enum):
    HIDDEN = "hidden"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Rule:
    id: str
    title: str
    message_format: str
    description: str
    category: str
    severity: Severity = Severity.WARNING
    enabled_by_default: bool = True

    def format_message(self, *arguments: str) -> str:
        return self.message_format.format(*arguments)


PARALLELIZABLE_RULE = Rule(
    id="PARA01",
    title="Method contains async tasks that might be parallelizable",
    message_format="Method '{0}' contains async tasks that might be parallelizable",
    description="Consider parallelizing execution of async tasks",
    category="Parallelism",
)


@dataclass(frozen=True)
class Finding:
    """One reported diagnostic, anchored at a declaration identifier."""

    rule_id: str
    severity: Severity
    message: str
    arguments: Tuple[str, ...]
    span: Span
    trigger: Trigger
    path: Optional[Path] = None

    @property
    def line(self) -> int:
        return self.span.line

    @property
    def col(self) -> int:
        return self.span.col

    def __str__(self) -> str:
        where = f"{self.path}:{self.span}" if self.path is not None else str(self.span)
        return f"{where}: {self.severity.value} {self.rule_id}: {self.message}"


def make_finding(
    classification: Classification,
    name: str,
    path: Optional[Path] = None,
    rule: Rule = PARALLELIZABLE_RULE,
) -> Finding:
    """Create a Finding on the identifier of the attributed declaration."""
    return Finding(
        rule_id=rule.id,
        severity=rule.severity,
        message=rule.format_message(name),
        arguments=(name,),
        span=Span.of(classification.identifier),
        trigger=classification.trigger,
        path=path,
    )
