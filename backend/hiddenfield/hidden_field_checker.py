"""
Hidden-field detection.
A local variable or parameter that reuses the name of a field visible at
that point hides the field. Fields come only from the bodies of lexically
enclosing classes, enums, enum constants and records; inherited fields are
not considered.
"""
from __future__ import annotations
import logging
from typing import Callable, Optional

from tree_sitter import Node, Tree

from javasrc.java_parser import (
    declared_name,
    field_declarators,
    has_modifier,
    node_text,
    parse_source,
)
from javasrc.traversal import walk_tree
from .config import HiddenFieldConfig
from .declaration import Declaration
from .diagnostic import Diagnostic, Violation
from .exemptions import is_exempt
from .scope_stack import ScopeStack

log = logging.getLogger(__name__)

ViolationSink = Callable[[Violation], None]


class ShadowEvaluator:
    """
    Listener for javasrc.traversal.walk_tree.

    Keeps one field frame per entered type body and decides, for each
    variable or parameter declaration, whether it hides a field.
    """

    def __init__(self, config: Optional[HiddenFieldConfig] = None, sink: Optional[ViolationSink] = None):
        self.config = config or HiddenFieldConfig()
        self.violations: list[Violation] = []
        self.sink: ViolationSink = sink or self.violations.append
        self.scopes = ScopeStack()

    def check(self, tree: Tree) -> list[Violation]:
        """Run over a whole tree. Frames left by an aborted walk are discarded."""
        self.violations.clear()
        self.scopes.reset()
        try:
            walk_tree(tree, self)
        finally:
            self.scopes.reset()
        return list(self.violations)

    def on_enter(self, node: Node) -> None:
        frame = self.scopes.push(_is_static_type(node), _type_name(node))
        body = node.child_by_field_name("body")
        # enum constants may not have bodies
        if body is not None:
            for field_decl, declarator in field_declarators(body):
                name_node = declared_name(declarator)
                if name_node is None:
                    continue
                if has_modifier(field_decl, "static"):
                    self.scopes.add_static_field(frame, node_text(name_node))
                else:
                    self.scopes.add_instance_field(frame, node_text(name_node))
        if node.type == "record_declaration":
            for name in _record_components(node):
                self.scopes.add_instance_field(frame, name)

    def on_leave(self, node: Node) -> None:
        self.scopes.pop()

    def on_declaration(self, node: Node) -> None:
        decl = Declaration(node, self.scopes.enclosing_type_name())
        if decl.in_interface_or_annotation_block or not decl.is_checked_kind:
            return
        name = decl.name
        is_shadow = self.scopes.contains_static_field(name) or (
            not decl.in_static_context and self.scopes.contains_instance_field(name)
        )
        if is_shadow and not is_exempt(decl, self.config):
            log.debug("%r hides a field", decl)
            self.sink(Violation(line=decl.line, column=decl.column, name=name))


def _is_static_type(node: Node) -> bool:
    if node.type == "class_declaration":
        return has_modifier(node, "static")
    # records never capture an enclosing instance
    return node.type == "record_declaration"


def _type_name(node: Node) -> Optional[str]:
    if node.type == "enum_constant":
        return None
    name_node = node.child_by_field_name("name")
    return node_text(name_node) if name_node is not None else None


def _record_components(node: Node) -> list[str]:
    params = node.child_by_field_name("parameters")
    if params is None:
        return []
    names = []
    for c in params.children:
        name_node = declared_name(c) if c.type in ("formal_parameter", "spread_parameter") else None
        if name_node is not None:
            names.append(node_text(name_node))
    return names


def check_hidden_fields(
    source: bytes | str,
    file_path: str,
    config: Optional[HiddenFieldConfig] = None,
) -> list[Diagnostic]:
    """Parse Java source and return a diagnostic for every declaration that hides a field."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    return check_tree(parse_source(source), file_path, config)


def check_tree(tree: Tree, file_path: str, config: Optional[HiddenFieldConfig] = None) -> list[Diagnostic]:
    if tree.root_node.has_error:
        log.warning("Syntax errors in %s; checking the recovered tree", file_path)
    violations = ShadowEvaluator(config).check(tree)
    return [Diagnostic.from_violation(v, file_path) for v in violations]
