"""
Depth-first walk over a Java syntax tree that drives a rule listener.

The listener sees class-like constructs on entry (pre-order) and exit
(post-order) and every variable/parameter declaration on entry, in source
order. The walk uses a tree cursor instead of recursion so long expression
chains cannot exhaust the interpreter stack.
"""
from __future__ import annotations
from typing import Protocol

from tree_sitter import Node, Tree

from .java_parser import CLASS_LIKE_KINDS, DECLARATION_KINDS


class TreeListener(Protocol):
    def on_enter(self, node: Node) -> None: ...

    def on_leave(self, node: Node) -> None: ...

    def on_declaration(self, node: Node) -> None: ...


def _enter(node: Node, listener: TreeListener) -> None:
    if node.type in CLASS_LIKE_KINDS:
        listener.on_enter(node)
    elif node.type in DECLARATION_KINDS:
        listener.on_declaration(node)


def walk_tree(tree: Tree, listener: TreeListener) -> None:
    cursor = tree.walk()
    while True:
        _enter(cursor.node, listener)
        if cursor.goto_first_child():
            continue
        while True:
            node = cursor.node
            if node.type in CLASS_LIKE_KINDS:
                listener.on_leave(node)
            if cursor.goto_next_sibling():
                break
            if not cursor.goto_parent():
                return
