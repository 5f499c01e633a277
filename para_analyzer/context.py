"""Analysis context shared by the collector, classifier and finder."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

import tree_sitter

from .syntax import NodeKind, declaration_body, kind_of
from .utils import iter_nodes, node_text


@dataclass(frozen=True)
class CodeBlock:
    """
    Body of one function-like declaration.

    Identity is the owning declaration. `body` is None for members
    declared without one (abstract, extern, interface) and for
    declarations cut short by a parse error.
    """

    declaration: tree_sitter.Node
    body: Optional[tree_sitter.Node]
    kind: NodeKind

    @classmethod
    def of(cls, declaration: tree_sitter.Node) -> CodeBlock:
        return cls(
            declaration=declaration,
            body=declaration_body(declaration),
            kind=kind_of(declaration),
        )


@dataclass
class AnalysisContext:
    tree: tree_sitter.Tree
    source_bytes: bytes
    path: Optional[Path] = None
    code_blocks: List[CodeBlock] = field(init=False, default_factory=list)

    def __post_init__(self):
        self._collect_code_blocks()

    def text(self, node: tree_sitter.Node | None) -> str:
        return node_text(node, self.source_bytes)

    def iter_nodes(self) -> Iterator[tree_sitter.Node]:
        return iter_nodes(self.tree.root_node)

    def _collect_code_blocks(self):
        # nested anonymous functions are blocks of their own, in document order
        for node in self.iter_nodes():
            if kind_of(node).is_function_like:
                self.code_blocks.append(CodeBlock.of(node))
