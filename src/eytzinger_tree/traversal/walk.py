# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Handler-driven cursor movement.

A walk hands the current entry to a handler, which answers with a WalkAction:
stop, go to the parent, or go to a child. Nothing is allocated per step apart
from the cursor itself, so a walk is the cheapest way to follow a single
root-to-leaf path (for example a search-tree descent).

A walk never climbs above the entry it started from: asking for the parent
while at the start stops the walk, even when the start has a parent in the
tree. A walk also stops when the requested move is impossible, i.e. a child
of a vacant entry or the parent of the root.

Example:
    Descend along the leftmost branch::

        def leftmost(entry):
            if entry.is_occupied:
                seen.append(entry.get())
                return WalkAction.child(0)
            return WalkAction.STOP

        tree.walk(leftmost)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, TYPE_CHECKING

if TYPE_CHECKING:
    from ..entry import Entry, EntryMut

_STOP = 'stop'
_PARENT = 'parent'
_CHILD = 'child'


@dataclass(frozen=True)
class WalkAction:
    """What a walk handler wants to do next.

    Use the ``STOP`` and ``PARENT`` constants and the ``child(offset)``
    constructor rather than building instances directly.
    """

    kind: str
    offset: int | None = None

    STOP: ClassVar[WalkAction]
    PARENT: ClassVar[WalkAction]

    @classmethod
    def child(cls, offset: int) -> WalkAction:
        """Move to the child at the given offset."""
        return cls(_CHILD, offset)

    @property
    def is_stop(self) -> bool:
        return self.kind == _STOP

    @property
    def is_parent(self) -> bool:
        return self.kind == _PARENT

    @property
    def is_child(self) -> bool:
        return self.kind == _CHILD


WalkAction.STOP = WalkAction(_STOP)
WalkAction.PARENT = WalkAction(_PARENT)

WalkHandler = Callable[['Entry'], WalkAction]
WalkMutHandler = Callable[['EntryMut'], WalkAction]


def _next_action(handler: Callable, entry: Entry | EntryMut) -> WalkAction:
    action = handler(entry)
    if not isinstance(action, WalkAction) or action.kind not in (_STOP, _PARENT, _CHILD):
        raise TypeError(
            f"walk handler must return a WalkAction, not {type(action).__name__}"
        )
    return action


def walk(entry: Entry, handler: WalkHandler) -> None:
    """Walk read-only from entry, driven by handler.

    Args:
        entry: Starting entry (occupied or vacant).
        handler: Called with the current Entry, returns a WalkAction.
    """
    tree = entry.tree
    current = entry
    level = 0
    while True:
        action = _next_action(handler, current)
        if action.is_stop:
            return
        if action.is_parent:
            if level == 0:
                return
            parent = current.parent()
            if parent is None:
                return
            current = tree._entry(parent.index)
            level -= 1
        else:
            node = current.node()
            if node is None:
                return
            current = node.child_entry(action.offset)
            level += 1


def walk_mut(entry: EntryMut, handler: WalkMutHandler) -> None:
    """Walk from entry with write access, driven by handler.

    The handler receives an EntryMut and may insert, modify or remove through
    it before answering. The walk keeps the exclusive cursor moving with the
    consuming ``to_parent``/``to_child_entry`` navigation and counts how many
    levels below the start it is; the starting entry itself is never consumed.

    Args:
        entry: Starting mutable entry.
        handler: Called with the current EntryMut, returns a WalkAction.
    """
    action = _next_action(handler, entry)
    if not action.is_child:
        return
    node = entry.node_mut()
    if node is None:
        return
    current = node.child_entry(action.offset)
    level = 1

    while True:
        action = _next_action(handler, current)
        if action.is_stop:
            return
        if action.is_parent:
            if level == 0:
                return
            result = current.to_parent()
            if not result.moved:
                return
            current = result.handle.to_entry()
            level -= 1
        else:
            result = current.to_child_entry(action.offset)
            if not result.moved:
                return
            current = result.handle
            level += 1
