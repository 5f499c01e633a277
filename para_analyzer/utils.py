"""Shared utilities for Tree-sitter parsing and node helpers."""

from __future__ import annotations

from typing import Callable, Iterator, Optional

import tree_sitter
import tree_sitter_c_sharp


def create_csharp_parser() -> tree_sitter.Parser:
    """
    Create a Tree-sitter parser configured for C#.

    Supports both the modern bindings (Parser(language)) and
    older releases that expect set_language after construction.
    """

    language = tree_sitter.Language(tree_sitter_c_sharp.language())
    try:
        parser = tree_sitter.Parser(language)
    except TypeError:
        parser = tree_sitter.Parser()
        parser.set_language(language)
    return parser


def node_text(node: Optional[tree_sitter.Node], source_bytes: bytes) -> str:
    """Source text of a node; empty for a missing node."""
    if node is None:
        return ""
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def iter_nodes(
    root: tree_sitter.Node,
    enter: Optional[Callable[[tree_sitter.Node], bool]] = None,
) -> Iterator[tree_sitter.Node]:
    """
    Preorder traversal in document order.

    When given, `enter` decides which children are visited; a rejected
    child is skipped together with its subtree. The root is always yielded.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        children = reversed(node.children)
        if enter is not None:
            children = (child for child in children if enter(child))
        stack.extend(children)


def same_node(a: tree_sitter.Node | None, b: tree_sitter.Node | None) -> bool:
    """Node identity by kind and byte range; wrappers are re-created on each access."""
    if a is None or b is None:
        return a is b
    return (a.type, a.start_byte, a.end_byte) == (b.type, b.start_byte, b.end_byte)
