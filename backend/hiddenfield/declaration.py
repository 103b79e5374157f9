"""
Transient view of one variable or parameter declaration node.
Context (enclosing construct, static-ness, interface membership) is derived
from the tree on demand and cached for the single visit.
"""
from __future__ import annotations
from enum import Enum
from functools import cached_property
from typing import Optional

from tree_sitter import Node

from javasrc.java_parser import (
    PARAMETER_KINDS,
    PARAMETER_LIST_ENTRY_KINDS,
    VARIABLE_KINDS,
    column_of,
    declared_name,
    has_modifier,
    line_of,
    node_text,
)
from .errors import MalformedTreeError


class DeclarationKind(str, Enum):
    VARIABLE = "variable"
    PARAMETER = "parameter"


# Nearest enclosing construct that decides whether a declaration sits in an interface body.
_TYPE_BOUNDARY_KINDS = frozenset({
    "class_declaration",
    "enum_declaration",
    "record_declaration",
    "object_creation_expression",
})
_INTERFACE_KINDS = frozenset({"interface_declaration", "annotation_type_declaration"})


class Declaration:
    def __init__(self, node: Node, enclosing_type_name: Optional[str] = None):
        if node.type in VARIABLE_KINDS:
            self.kind = DeclarationKind.VARIABLE
        elif node.type in PARAMETER_KINDS:
            self.kind = DeclarationKind.PARAMETER
        else:
            raise MalformedTreeError(f"{node.type} is not a variable or parameter declaration")
        self.node = node
        self.enclosing_type_name = enclosing_type_name

    @cached_property
    def name_node(self) -> Node:
        name_node = declared_name(self.node)
        if name_node is None:
            raise MalformedTreeError(f"{self.node.type} at line {line_of(self.node)} has no name")
        return name_node

    @property
    def name(self) -> str:
        return node_text(self.name_node)

    @property
    def line(self) -> int:
        return line_of(self.name_node)

    @property
    def column(self) -> int:
        return column_of(self.name_node)

    @property
    def is_parameter(self) -> bool:
        return self.kind is DeclarationKind.PARAMETER

    @cached_property
    def parameter_list(self) -> Optional[Node]:
        """formal_parameters node holding a method/constructor parameter; None for catch parameters."""
        if not self.is_parameter or self.node.type == "catch_formal_parameter":
            return None
        parent = self.node.parent
        if parent is None or parent.type != "formal_parameters":
            raise MalformedTreeError(f"parameter '{self.name}' at line {self.line} is outside a parameter list")
        return parent

    @cached_property
    def enclosing_construct(self) -> Optional[Node]:
        """Method, constructor, record, lambda or catch clause owning a parameter."""
        if not self.is_parameter:
            return None
        if self.node.type == "catch_formal_parameter":
            return self.node.parent
        return self.parameter_list.parent

    @property
    def is_record_component(self) -> bool:
        return self.in_construct("record_declaration")

    @property
    def is_local_variable(self) -> bool:
        if self.node.type == "enhanced_for_statement":
            return True
        if self.node.type == "variable_declarator":
            parent = self.node.parent
            return parent is not None and parent.type == "local_variable_declaration"
        return False

    @property
    def is_checked_kind(self) -> bool:
        """
        Local variables and method, constructor or catch parameters.
        Typed lambda parameters, try-with-resources variables and pattern
        variables are skipped.
        """
        if self.is_parameter:
            return not (self.is_record_component or self.in_construct("lambda_expression"))
        return self.is_local_variable

    @cached_property
    def in_interface_or_annotation_block(self) -> bool:
        parent = self.node.parent
        while parent is not None:
            if parent.type in _TYPE_BOUNDARY_KINDS:
                return False
            if parent.type in _INTERFACE_KINDS:
                return True
            parent = parent.parent
        return False

    @cached_property
    def in_static_context(self) -> bool:
        """
        Walk outward: a static initializer reached first is static; a method reached
        first is static iff it is declared static; anything else is instance.
        Constructors and nested types do not stop the walk.
        """
        parent = self.node.parent
        while parent is not None:
            if parent.type == "static_initializer":
                return True
            if parent.type == "method_declaration":
                return has_modifier(parent, "static")
            parent = parent.parent
        return False

    @property
    def parameter_count(self) -> int:
        params = self.parameter_list
        if params is None:
            return 0
        return sum(1 for c in params.children if c.type in PARAMETER_LIST_ENTRY_KINDS)

    def in_construct(self, kind: str) -> bool:
        construct = self.enclosing_construct
        return construct is not None and construct.type == kind

    def __repr__(self) -> str:
        return f"Declaration({self.kind.value} {self.name!r} at {self.line}:{self.column})"
