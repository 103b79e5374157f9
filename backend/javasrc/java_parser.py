"""
Java parsing using Tree-sitter.
Builds the parser for the Java grammar and exposes small node accessors
(identifier text, positions, modifier flags, return types) used by the checks.
"""
from __future__ import annotations
from functools import lru_cache
from typing import Optional

import tree_sitter_java
from tree_sitter import Language, Node, Parser, Tree


# Constructs that open a field scope.
CLASS_LIKE_KINDS = frozenset({
    "class_declaration",
    "enum_declaration",
    "enum_constant",
    "record_declaration",
})

INTERFACE_LIKE_KINDS = frozenset({
    "interface_declaration",
    "annotation_type_declaration",
})

VARIABLE_KINDS = frozenset({"variable_declarator", "enhanced_for_statement"})
PARAMETER_KINDS = frozenset({"formal_parameter", "spread_parameter", "catch_formal_parameter"})
DECLARATION_KINDS = VARIABLE_KINDS | PARAMETER_KINDS

# Every entry of a formal_parameters list, as opposed to punctuation and comments.
PARAMETER_LIST_ENTRY_KINDS = frozenset({"formal_parameter", "spread_parameter", "receiver_parameter"})


@lru_cache(maxsize=1)
def get_language() -> Language:
    return Language(tree_sitter_java.language())


def get_parser() -> Parser:
    return Parser(get_language())


def parse_source(source: bytes) -> Tree:
    return get_parser().parse(source)


def node_text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace")


def line_of(node: Node) -> int:
    return node.start_point[0] + 1


def column_of(node: Node) -> int:
    """1-based column in characters. start_point counts bytes, so decode the line prefix."""
    line_start = node.start_byte - node.start_point[1]
    root = node
    while root.parent is not None:
        root = root.parent
    # the root node starts after leading whitespace, which is all ASCII
    lead = max(root.start_byte - line_start, 0)
    prefix = root.text[max(line_start - root.start_byte, 0):node.start_byte - root.start_byte]
    return lead + len(prefix.decode("utf-8", errors="replace")) + 1


def modifiers_of(node: Node) -> Optional[Node]:
    """Return the `modifiers` child of a declaration, if it has one."""
    for c in node.children:
        if c.type == "modifiers":
            return c
    return None


def has_modifier(node: Node, keyword: str) -> bool:
    """Check whether a declaration carries a modifier keyword such as 'static' or 'abstract'."""
    mods = modifiers_of(node)
    if mods is None:
        return False
    return any(c.type == keyword for c in mods.children)


def declared_name(node: Node) -> Optional[Node]:
    """Identifier node naming a variable declarator or parameter."""
    name_node = node.child_by_field_name("name")
    if name_node is not None:
        return name_node
    # spread_parameter wraps its name in a variable_declarator
    for c in node.children:
        if c.type == "variable_declarator":
            return c.child_by_field_name("name")
    return None


def field_declarators(body: Node) -> list[tuple[Node, Node]]:
    """
    Direct field declarations of a type body as (field_declaration, variable_declarator) pairs.
    Enum bodies keep their members in enum_body_declarations after the constant list.
    """
    members: list[Node] = []
    for c in body.children:
        if c.type == "enum_body_declarations":
            members.extend(c.children)
        else:
            members.append(c)
    result: list[tuple[Node, Node]] = []
    for member in members:
        if member.type != "field_declaration":
            continue
        for c in member.children:
            if c.type == "variable_declarator":
                result.append((member, c))
    return result


def return_type_identifier(method: Node) -> Optional[str]:
    """
    Identifier of a method's declared return type: 'void' for void methods,
    the raw type name for simple and generic class types. Qualified types
    (Outer.Inner) have no single identifier and return None.
    """
    type_node = method.child_by_field_name("type")
    if type_node is None:
        return None
    if type_node.type == "void_type":
        return "void"
    if type_node.type == "type_identifier":
        return node_text(type_node)
    if type_node.type == "generic_type":
        first = type_node.named_children[0] if type_node.named_children else None
        if first is not None and first.type == "type_identifier":
            return node_text(first)
        return None
    if type_node.type == "scoped_type_identifier":
        return None
    return node_text(type_node)
