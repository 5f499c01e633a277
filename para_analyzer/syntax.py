"""
Read-only view over the tree-sitter C# syntax tree.

Node types are folded into a closed NodeKind enumeration so the detector
only ever asks two structural questions:

- is this node a repetition construct (for / foreach / while / do)?
- is this node a function-like boundary (method, constructor,
  lambda, anonymous method)?

Local functions are not boundaries: their bodies belong to the
enclosing code block.

Anything the grammar produces that the detector does not care about
maps to NodeKind.OTHER.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

import tree_sitter


class NodeKind(Enum):
    """Syntax node kinds the detector distinguishes."""
    METHOD = auto()
    CONSTRUCTOR = auto()
    ANONYMOUS_FUNCTION = auto()
    FOR = auto()
    FOREACH = auto()
    WHILE = auto()
    DO = auto()
    AWAIT = auto()
    INVOCATION = auto()
    IDENTIFIER = auto()
    BLOCK = auto()
    ERROR = auto()
    OTHER = auto()

    @property
    def is_repetition(self) -> bool:
        return self in REPETITION_KINDS

    @property
    def is_function_like(self) -> bool:
        return self in FUNCTION_LIKE_KINDS

    @property
    def is_named_declaration(self) -> bool:
        return self in NAMED_DECLARATION_KINDS


REPETITION_KINDS = frozenset({
    NodeKind.FOR,
    NodeKind.FOREACH,
    NodeKind.WHILE,
    NodeKind.DO,
})

NAMED_DECLARATION_KINDS = frozenset({
    NodeKind.METHOD,
    NodeKind.CONSTRUCTOR,
})

FUNCTION_LIKE_KINDS = NAMED_DECLARATION_KINDS | {NodeKind.ANONYMOUS_FUNCTION}


# tree-sitter-c-sharp type name -> NodeKind.
# Older grammar releases spell foreach as "for_each_statement".
_KIND_BY_TYPE: dict[str, NodeKind] = {
    "method_declaration": NodeKind.METHOD,
    "constructor_declaration": NodeKind.CONSTRUCTOR,
    "lambda_expression": NodeKind.ANONYMOUS_FUNCTION,
    "anonymous_method_expression": NodeKind.ANONYMOUS_FUNCTION,
    "for_statement": NodeKind.FOR,
    "foreach_statement": NodeKind.FOREACH,
    "for_each_statement": NodeKind.FOREACH,
    "while_statement": NodeKind.WHILE,
    "do_statement": NodeKind.DO,
    "await_expression": NodeKind.AWAIT,
    "invocation_expression": NodeKind.INVOCATION,
    "identifier": NodeKind.IDENTIFIER,
    "block": NodeKind.BLOCK,
    "ERROR": NodeKind.ERROR,
}

_BODY_TYPES = ("block", "arrow_expression_clause")


def kind_of(node: tree_sitter.Node) -> NodeKind:
    return _KIND_BY_TYPE.get(node.type, NodeKind.OTHER)


@dataclass(frozen=True)
class Span:
    """1-based source range of a node."""

    line: int
    col: int
    end_line: int
    end_col: int

    @classmethod
    def of(cls, node: tree_sitter.Node) -> Span:
        start_row, start_col = node.start_point
        end_row, end_col = node.end_point
        return cls(
            line=start_row + 1,
            col=start_col + 1,
            end_line=end_row + 1,
            end_col=end_col + 1,
        )

    def __str__(self) -> str:
        return f"{self.line}:{self.col}"


def ancestors(node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Yield the parent chain of a node, nearest first."""
    current = node.parent
    while current is not None:
        yield current
        current = current.parent


def declaration_body(decl: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    """
    Return the body subtree of a function-like declaration.

    Block bodies and expression bodies (`=> expr`) both count.
    Abstract, extern and interface members have no body.
    """
    body = decl.child_by_field_name("body")
    if body is not None:
        return body

    # anonymous methods and some grammar releases leave the body unnamed
    for child in reversed(decl.named_children):
        if child.type in _BODY_TYPES:
            return child
    return None


def declaration_identifier(decl: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    """
    Return the identifier node naming a method or constructor.

    Falls back to the identifier right before the parameter list, since a
    return type may itself be a bare identifier.
    """
    name = decl.child_by_field_name("name")
    if name is not None:
        return name

    candidate = None
    for child in decl.named_children:
        if child.type == "parameter_list":
            return candidate
        if child.type == "identifier":
            candidate = child
    return None
