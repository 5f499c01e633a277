"""Coordinator that runs the parallelizable-await pass over one file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import tree_sitter

from .classifier import evaluate
from .collector import SuspensionPoint, collect
from .context import AnalysisContext, CodeBlock
from .issues import Finding
from .reporter import ListReporter, Reporter, ReporterAdapter
from .utils import create_csharp_parser

log = logging.getLogger(__name__)


class ParallelizableFinder:
    """
    Wraps the analysis context and drives the per-code-block pipeline.

    Every function-like declaration is its own code block; each of its
    suspension points is delivered as a separate notification, the same
    way a host analyzer delivers one callback per await node.
    """

    def __init__(
        self,
        tree: tree_sitter.Tree,
        source_bytes: bytes,
        path: Optional[Path] = None,
        reporter: Optional[Reporter] = None,
    ):
        self.context = AnalysisContext(tree, source_bytes, path)
        self.reporter = reporter if reporter is not None else ListReporter()
        self.findings: List[Finding] = []
        self._adapter = ReporterAdapter(self.context, self.reporter)
        self._run_pass()

    def _run_pass(self):
        for block in self.context.code_blocks:
            for point in collect(block):
                self._notify(block, point)

    def _notify(self, block: CodeBlock, point: SuspensionPoint):
        classification = evaluate(block, point)
        if classification is None:
            return
        finding = self._adapter.emit(block, classification)
        if finding is not None:
            self.findings.append(finding)


def analyze_source(
    source: str | bytes,
    path: Optional[Path] = None,
    parser: Optional[tree_sitter.Parser] = None,
) -> List[Finding]:
    """Parse C# source and return its findings."""
    source_bytes = source.encode("utf-8") if isinstance(source, str) else source
    parser = parser or create_csharp_parser()
    tree = parser.parse(source_bytes)
    if tree.root_node.has_error:
        log.debug("partial parse for %s", path or "<source>")
    return ParallelizableFinder(tree, source_bytes, path).findings


def analyze_file(path: str | Path, parser: Optional[tree_sitter.Parser] = None) -> List[Finding]:
    """Read and analyze one C# source file."""
    path = Path(path)
    log.debug("parse sourcefile %s", path)
    return analyze_source(path.read_bytes(), path=path, parser=parser)
