"""
Suspension point collection.

A suspension point is an `await` expression inside a code block's scan
boundary. The scan descends the whole body in document order but stops
at nested function-like declarations: those are code blocks of their
own and are collected separately.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import tree_sitter

from .context import CodeBlock
from .syntax import NodeKind, ancestors, kind_of
from .utils import iter_nodes


@dataclass(frozen=True)
class SuspensionPoint:
    node: tree_sitter.Node
    index: int  # position in document order within the block
    loop: Optional[tree_sitter.Node]  # nearest enclosing loop inside the block

    @property
    def in_loop(self) -> bool:
        return self.loop is not None


def enclosing_loop(node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    """
    Walk up from node's parent to the nearest repetition construct.

    Stops without a result at the first function-like boundary, so a loop
    in an outer scope never counts for an await inside a nested lambda.
    """
    for ancestor in ancestors(node):
        kind = kind_of(ancestor)
        if kind.is_repetition:
            return ancestor
        if kind.is_function_like:
            return None
    return None


def _in_scope(node: tree_sitter.Node) -> bool:
    return not kind_of(node).is_function_like


def collect(block: CodeBlock) -> List[SuspensionPoint]:
    """Return the block's suspension points in document order."""
    if block.body is None or kind_of(block.body).is_function_like:
        return []

    points: List[SuspensionPoint] = []
    for node in iter_nodes(block.body, enter=_in_scope):
        if kind_of(node) is NodeKind.AWAIT:
            points.append(
                SuspensionPoint(node=node, index=len(points), loop=enclosing_loop(node))
            )
    return points
