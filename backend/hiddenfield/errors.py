"""Exceptions raised by the hidden-field check."""
from __future__ import annotations


class HiddenFieldError(Exception):
    pass


class ConfigurationError(HiddenFieldError, ValueError):
    """Rule options were rejected; the check must not run with them."""


class ScopeStackError(HiddenFieldError):
    pass


class MalformedTreeError(HiddenFieldError):
    """The syntax tree does not have the shape the traversal contract promises."""
