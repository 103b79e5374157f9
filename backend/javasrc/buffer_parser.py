"""
Parse unsaved buffer content for live analysis.
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional

from tree_sitter import Tree

from .java_parser import parse_source


def get_language_from_path(file_path: str) -> Optional[str]:
    ext = Path(file_path).suffix.lower()
    if ext == ".java":
        return "java"
    return None


def parse_unsaved_buffer(
    buffer_content: str,
    file_path: str,
    language: Optional[str] = None,
) -> Optional[Tree]:
    if language is None:
        language = get_language_from_path(file_path)
    if language != "java":
        return None
    return parse_source(buffer_content.encode("utf-8"))
