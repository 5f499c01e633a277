"""
Candidate classification, deduplication and attribution.

The host notifies once per suspension point, so every notification
recomputes the block's points and only the first one (document order)
is allowed to drive classification. That keeps the result at zero or
one finding per code block no matter how many awaits it holds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

import tree_sitter

from .collector import SuspensionPoint, collect
from .context import CodeBlock
from .syntax import ancestors, declaration_identifier, kind_of
from .utils import same_node

log = logging.getLogger(__name__)


class Trigger(Enum):
    MULTIPLE = "multiple"  # two or more awaits, loop nesting irrelevant
    SINGLE_IN_LOOP = "single_in_loop"  # one await inside a repetition construct


@dataclass(frozen=True)
class Classification:
    """Outcome for one code block that qualifies as a candidate."""

    trigger: Trigger
    point: SuspensionPoint
    declaration: tree_sitter.Node
    identifier: tree_sitter.Node


def classify(points: Sequence[SuspensionPoint]) -> Optional[Trigger]:
    if len(points) >= 2:
        return Trigger.MULTIPLE
    if len(points) == 1 and points[0].in_loop:
        return Trigger.SINGLE_IN_LOOP
    return None


def attribute(node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    """
    Find the named declaration a finding for node is reported on.

    Anonymous functions have no identifier to anchor to, so the walk
    continues outward through them until a method or constructor
    is reached.
    """
    for ancestor in ancestors(node):
        if kind_of(ancestor).is_named_declaration:
            return ancestor
    return None


def evaluate(block: CodeBlock, point: SuspensionPoint) -> Optional[Classification]:
    """
    Handle one suspension point notification for block.

    Returns None when the point is not the block's first, when the block
    does not qualify, or when no named declaration can be attributed.
    """
    points = collect(block)
    if not points or not same_node(points[0].node, point.node):
        return None

    trigger = classify(points)
    if trigger is None:
        return None

    triggering = points[0]
    declaration = attribute(triggering.node)
    if declaration is None:
        log.warning(
            "no enclosing method or constructor for await at %d:%d; finding dropped",
            triggering.node.start_point[0] + 1,
            triggering.node.start_point[1] + 1,
        )
        return None

    identifier = declaration_identifier(declaration)
    if identifier is None:
        log.warning(
            "declaration at %d:%d has no identifier; finding dropped",
            declaration.start_point[0] + 1,
            declaration.start_point[1] + 1,
        )
        return None

    return Classification(
        trigger=trigger,
        point=triggering,
        declaration=declaration,
        identifier=identifier,
    )
