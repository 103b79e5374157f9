# Java source parsing package
from .java_parser import get_parser, parse_source
from .traversal import TreeListener, walk_tree

__all__ = [
    'get_parser',
    'parse_source',
    'TreeListener',
    'walk_tree',
]
