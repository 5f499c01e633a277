"""
para_analyzer

Static detector for C# code whose awaited tasks might run concurrently
instead of one after another.

A code block (method, constructor or anonymous function body) is
reported when it awaits more than once, or awaits exactly once inside
a loop. Findings are anchored at the enclosing method or
constructor identifier; the tree is parsed with tree-sitter and never
modified.
"""

from .classifier import Classification, Trigger, attribute, classify, evaluate
from .collector import SuspensionPoint, collect, enclosing_loop
from .context import AnalysisContext, CodeBlock
from .finder import ParallelizableFinder, analyze_file, analyze_source
from .issues import PARALLELIZABLE_RULE, Finding, Rule, Severity
from .reporter import ListReporter, Reporter
from .syntax import NodeKind, Span, kind_of
from .utils import create_csharp_parser


__all__ = [
    # Tree adapter
    "NodeKind",
    "Span",
    "kind_of",
    "create_csharp_parser",

    # Pipeline
    "AnalysisContext",
    "CodeBlock",
    "SuspensionPoint",
    "collect",
    "enclosing_loop",
    "Trigger",
    "Classification",
    "classify",
    "attribute",
    "evaluate",

    # Reporting
    "Rule",
    "Severity",
    "Finding",
    "PARALLELIZABLE_RULE",
    "Reporter",
    "ListReporter",

    # Driver
    "ParallelizableFinder",
    "analyze_source",
    "analyze_file",
]
