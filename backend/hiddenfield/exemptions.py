"""
Exemptions for the hidden-field check.

Each exemption is an independent predicate over a declaration and the rule
options; a shadowing declaration is not reported when any of them holds.
"""
from __future__ import annotations
from typing import Callable

from javasrc.java_parser import has_modifier, node_text, return_type_identifier
from .config import HiddenFieldConfig
from .declaration import Declaration

Exemption = Callable[[Declaration, HiddenFieldConfig], bool]


def capitalize(name: str) -> str:
    """
    JavaBeans property capitalization: setXYzz() is the setter of property
    XYzz, not xYzz, so a name whose second character is already upper case
    is returned unchanged.
    """
    if not name:
        return name
    if len(name) > 1 and name[1].isupper():
        return name
    return name[0].upper() + name[1:]


def matches_ignore_format(decl: Declaration, config: HiddenFieldConfig) -> bool:
    return config.ignore_format is not None and config.ignore_format.search(decl.name) is not None


def is_ignored_setter_param(decl: Declaration, config: HiddenFieldConfig) -> bool:
    if not decl.is_parameter or not config.ignore_setter:
        return False
    if decl.parameter_count != 1 or not decl.in_construct("method_declaration"):
        return False

    method = decl.enclosing_construct
    name_node = method.child_by_field_name("name")
    if name_node is None or node_text(name_node) != "set" + capitalize(decl.name):
        return False

    return_type = return_type_identifier(method)
    if return_type == "void":
        return True
    if not config.setter_can_return_its_class:
        return False
    # Chain setter: returns the type it is declared in.
    return return_type is not None and return_type == decl.enclosing_type_name


def is_ignored_constructor_param(decl: Declaration, config: HiddenFieldConfig) -> bool:
    if not decl.is_parameter or not config.ignore_constructor_parameter:
        return False
    return decl.in_construct("constructor_declaration")


def is_ignored_abstract_method_param(decl: Declaration, config: HiddenFieldConfig) -> bool:
    if not decl.is_parameter or not config.ignore_abstract_methods:
        return False
    if not decl.in_construct("method_declaration"):
        return False
    return has_modifier(decl.enclosing_construct, "abstract")


EXEMPTIONS: tuple[Exemption, ...] = (
    matches_ignore_format,
    is_ignored_setter_param,
    is_ignored_constructor_param,
    is_ignored_abstract_method_param,
)


def is_exempt(decl: Declaration, config: HiddenFieldConfig) -> bool:
    return any(exemption(decl, config) for exemption in EXEMPTIONS)
