"""Reporting channel and the adapter that feeds it."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Set, Tuple, runtime_checkable

from .classifier import Classification
from .context import AnalysisContext, CodeBlock
from .issues import PARALLELIZABLE_RULE, Finding, Rule, make_finding

log = logging.getLogger(__name__)


@runtime_checkable
class Reporter(Protocol):
    """Sink for findings. Findings may arrive in any order."""

    def report(self, finding: Finding) -> None: ...


class ListReporter:
    """Collects findings in emission order."""

    def __init__(self):
        self.findings: List[Finding] = []

    def report(self, finding: Finding) -> None:
        self.findings.append(finding)


class ReporterAdapter:
    """
    Turns classifications into findings on a reporting channel.

    Holds the set of code blocks already reported in this pass so that a
    block never produces more than one finding.
    """

    def __init__(self, ctx: AnalysisContext, sink: Reporter, rule: Rule = PARALLELIZABLE_RULE):
        self.ctx = ctx
        self.sink = sink
        self.rule = rule
        self._reported: Set[Tuple[int, int]] = set()

    def emit(self, block: CodeBlock, classification: Classification) -> Optional[Finding]:
        key = (block.declaration.start_byte, block.declaration.end_byte)
        if key in self._reported:
            return None
        self._reported.add(key)

        name = self.ctx.text(classification.identifier)
        finding = make_finding(classification, name, path=self.ctx.path, rule=self.rule)
        log.debug("parallelizable: %s", finding)
        self.sink.report(finding)
        return finding
