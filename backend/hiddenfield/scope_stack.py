"""
Field scopes for the hidden-field check.

One frame per lexically entered type body, holding the names of the fields
declared directly in that body split into static and instance sets. Frames
live in an arena and refer to their parent by index, so the chain from the
innermost frame to the root never owns anything twice.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .errors import ScopeStackError

NO_PARENT = -1
ROOT = 0


@dataclass
class ScopeFrame:
    parent: int
    is_static_type: bool
    type_name: Optional[str] = None
    instance_fields: set[str] = field(default_factory=set)
    static_fields: set[str] = field(default_factory=set)


class ScopeStack:
    """
    Stack of field frames synchronized with type-body nesting.

    The root frame exists from construction, is treated as a static type
    (nothing above it can be captured) and can never be popped.
    """

    def __init__(self) -> None:
        self._frames: list[ScopeFrame] = []
        self._top = NO_PARENT
        self.reset()

    def reset(self) -> None:
        self._frames = [ScopeFrame(parent=NO_PARENT, is_static_type=True)]
        self._top = ROOT

    @property
    def top(self) -> int:
        return self._top

    @property
    def depth(self) -> int:
        """Number of frames above the root."""
        depth = 0
        index = self._top
        while self._frames[index].parent != NO_PARENT:
            depth += 1
            index = self._frames[index].parent
        return depth

    def frame(self, index: int) -> ScopeFrame:
        return self._frames[index]

    def push(self, is_static_type: bool, type_name: Optional[str] = None) -> int:
        self._frames.append(ScopeFrame(parent=self._top, is_static_type=is_static_type, type_name=type_name))
        self._top = len(self._frames) - 1
        return self._top

    def pop(self) -> int:
        current = self._frames[self._top]
        if current.parent == NO_PARENT:
            raise ScopeStackError("cannot pop the root scope frame")
        # Frames are strictly nested, so the top frame is always the last arena slot.
        self._frames.pop()
        self._top = current.parent
        return self._top

    def add_instance_field(self, frame: int, name: str) -> None:
        self._frames[frame].instance_fields.add(name)

    def add_static_field(self, frame: int, name: str) -> None:
        self._frames[frame].static_fields.add(name)

    def contains_static_field(self, name: str) -> bool:
        # Static members stay reachable across static type boundaries.
        index = self._top
        while index != NO_PARENT:
            current = self._frames[index]
            if name in current.static_fields:
                return True
            index = current.parent
        return False

    def contains_instance_field(self, name: str) -> bool:
        index = self._top
        while index != NO_PARENT:
            current = self._frames[index]
            if name in current.instance_fields:
                return True
            if current.is_static_type:
                return False
            index = current.parent
        return False

    def enclosing_type_name(self) -> Optional[str]:
        """Simple name of the innermost named type, or None at top level."""
        index = self._top
        while index != NO_PARENT:
            current = self._frames[index]
            if current.type_name is not None:
                return current.type_name
            index = current.parent
        return None
