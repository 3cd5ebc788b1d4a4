# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""EytzingerTree node handles.

A handle is nothing more than a (tree, index) pair: the value stays in the
tree's slot array and is looked up on every access.

- Node: read-only view of an occupied position.
- NodeMut: write cursor. Moving it with ``to_parent``/``to_child`` consumes
  it and returns ``Moved(new_cursor)``, or hands it back as ``Unmoved(self)``
  when there is nowhere to go. A consumed cursor raises ConsumedHandleError.

Example:
    >>> tree = EytzingerTree(2)
    >>> root = tree.set_root_value(5)
    >>> left = root.set_child_value(0, 2)
    >>> left.to_parent()
    Moved(handle=NodeMut(index=0, value=5))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, TYPE_CHECKING

from .exceptions import ConsumedHandleError, MissingValueError
from .traversal import (
    BreadthFirstIter,
    DepthFirstIter,
    DepthFirstOrder,
    NodeChildIter,
    WalkAction,
    walk,
    walk_mut,
)

if TYPE_CHECKING:
    from .entry import Entry, EntryMut
    from .store import EytzingerTree


@dataclass(frozen=True)
class Moved:
    """Navigation succeeded; ``handle`` is the cursor at the new position."""

    handle: Any
    moved: ClassVar[bool] = True


@dataclass(frozen=True)
class Unmoved:
    """Navigation was impossible; ``handle`` is the original cursor, still usable."""

    handle: Any
    moved: ClassVar[bool] = False


def _value_of(tree: EytzingerTree, index: int) -> Any:
    if not tree.is_occupied(index):
        raise MissingValueError(f"no value at index {index}")
    return tree._slots[index]


class Node:
    """Read-only handle on an occupied position of an EytzingerTree.

    Two nodes are equal when they refer to the same tree object and index.
    """

    __slots__ = ('_tree', '_index')

    def __init__(self, tree: EytzingerTree, index: int) -> None:
        self._tree = tree
        self._index = index

    def __repr__(self) -> str:
        value_repr = repr(self._tree.value_at(self._index))
        return f"Node(index={self._index}, value={value_repr})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._tree is other._tree and self._index == other._index

    def __hash__(self) -> int:
        return hash((id(self._tree), self._index))

    @property
    def tree(self) -> EytzingerTree:
        return self._tree

    @property
    def index(self) -> int:
        """Position of this node in the tree's slot array."""
        return self._index

    @property
    def value(self) -> Any:
        """The value stored at this node.

        Raises:
            MissingValueError: If the slot was emptied after the handle was made.
        """
        return _value_of(self._tree, self._index)

    @property
    def depth(self) -> int:
        """Number of edges between this node and the root."""
        return self._tree.index_calculator.depth(self._index)

    @property
    def child_offset(self) -> int | None:
        """Slot number of this node under its parent, None for the root."""
        return self._tree.index_calculator.child_offset(self._index)

    def parent(self) -> Node | None:
        """Return the parent node, or None for the root."""
        parent_index = self._tree.index_calculator.parent_index(self._index)
        if parent_index is None:
            return None
        return self._tree._node(parent_index)

    def child(self, offset: int) -> Node | None:
        """Return the child at offset, or None if that slot is vacant."""
        return self._tree._node(self._tree.index_calculator.child_index(self._index, offset))

    def child_entry(self, offset: int) -> Entry:
        """Return a read-only entry for the child position at offset."""
        return self._tree._entry(self._tree.index_calculator.child_index(self._index, offset))

    def child_iter(self) -> NodeChildIter:
        """Iterate over the occupied immediate children."""
        return NodeChildIter(self)

    def depth_first_iter(
        self, order: DepthFirstOrder = DepthFirstOrder.PRE_ORDER
    ) -> DepthFirstIter:
        """Iterate depth-first over this node and all of its descendants."""
        return DepthFirstIter(self._tree, self, order)

    def breadth_first_iter(self) -> BreadthFirstIter:
        """Iterate breadth-first over this node and all of its descendants."""
        return BreadthFirstIter(self._tree, self)

    def walk(self, handler: Callable[[Entry], WalkAction]) -> None:
        """Run a read-only walk starting at this node."""
        walk(self._tree._entry(self._index), handler)


class _Cursor:
    """Shared plumbing for write cursors that can be consumed."""

    __slots__ = ('_tree', '_index', '_consumed')

    def __init__(self, tree: EytzingerTree, index: int) -> None:
        self._tree = tree
        self._index = index
        self._consumed = False

    def _live_tree(self) -> EytzingerTree:
        if self._consumed:
            raise ConsumedHandleError(
                f"{type(self).__name__} at index {self._index} was already consumed"
            )
        return self._tree

    def _consume(self) -> None:
        self._live_tree()
        self._consumed = True

    @property
    def tree(self) -> EytzingerTree:
        return self._live_tree()

    @property
    def index(self) -> int:
        """Position of this cursor in the tree's slot array."""
        return self._index

    @property
    def consumed(self) -> bool:
        """True once the cursor has been moved, removed or split off."""
        return self._consumed


class NodeMut(_Cursor):
    """Write cursor on an occupied position of an EytzingerTree.

    Besides reading, a NodeMut can replace its value, create or clear
    children, remove itself (with its whole subtree) and split its subtree off
    into a new tree.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        if self._consumed:
            return f"NodeMut(index={self._index}, consumed)"
        value_repr = repr(self._tree.value_at(self._index))
        return f"NodeMut(index={self._index}, value={value_repr})"

    @property
    def value(self) -> Any:
        """The value stored at this node; assignable."""
        return _value_of(self._live_tree(), self._index)

    @value.setter
    def value(self, new_value: Any) -> None:
        tree = self._live_tree()
        _value_of(tree, self._index)
        tree._slots[self._index] = new_value

    @property
    def depth(self) -> int:
        return self._live_tree().index_calculator.depth(self._index)

    def as_node(self) -> Node:
        """Return a read-only view of this position."""
        return Node(self._live_tree(), self._index)

    def to_entry(self) -> EntryMut:
        """Consume this cursor and return a mutable entry at the same position."""
        tree = self._live_tree()
        self._consume()
        return tree._entry_mut(self._index)

    # ==================== Navigation ====================

    def parent(self) -> Node | None:
        return self.as_node().parent()

    def child(self, offset: int) -> Node | None:
        return self.as_node().child(offset)

    def child_mut(self, offset: int) -> NodeMut | None:
        """Return a cursor on the child at offset without consuming this one."""
        tree = self._live_tree()
        return tree._node_mut(tree.index_calculator.child_index(self._index, offset))

    def to_parent(self) -> Moved | Unmoved:
        """Move to the parent.

        Returns:
            Moved(parent cursor), consuming this cursor, or Unmoved(self) at
            the root.
        """
        tree = self._live_tree()
        parent_index = tree.index_calculator.parent_index(self._index)
        parent = tree._node_mut(parent_index) if parent_index is not None else None
        if parent is None:
            return Unmoved(self)
        self._consume()
        return Moved(parent)

    def to_child(self, offset: int) -> Moved | Unmoved:
        """Move to the child at offset.

        Returns:
            Moved(child cursor), consuming this cursor, or Unmoved(self) if the
            child slot is vacant.

        Raises:
            ChildOffsetError: If offset is out of range.
        """
        child = self.child_mut(offset)
        if child is None:
            return Unmoved(self)
        self._consume()
        return Moved(child)

    # ==================== Children ====================

    def set_child_value(self, offset: int, value: Any) -> NodeMut:
        """Replace the child at offset, dropping any subtree it had.

        Returns:
            A cursor on the new child.
        """
        tree = self._live_tree()
        child_index = tree.index_calculator.child_index(self._index, offset)
        _value_of(tree, self._index)
        tree._remove(child_index)
        return tree._set_value(child_index, value)

    def remove_child_value(self, offset: int) -> Any:
        """Remove the child at offset and its subtree.

        Returns:
            The removed child value, or None if there was no child.
        """
        return self.child_entry(offset).remove()[0]

    def child_entry(self, offset: int) -> EntryMut:
        """Return a mutable entry for the child position at offset."""
        tree = self._live_tree()
        child_index = tree.index_calculator.child_index(self._index, offset)
        return tree._entry_mut(child_index)

    def to_child_entry(self, offset: int) -> EntryMut:
        """Like child_entry, but consumes this cursor."""
        entry = self.child_entry(offset)
        self._consume()
        return entry

    # ==================== Removal ====================

    def remove(self) -> Any:
        """Remove this node and every descendant, consuming the cursor.

        Returns:
            The value this node held.
        """
        tree = self._live_tree()
        value = _value_of(tree, self._index)
        self._consume()
        tree._remove(self._index)
        return value

    def split_off(self) -> EytzingerTree:
        """Move this node's subtree into a new tree, consuming the cursor.

        Returns:
            A new EytzingerTree rooted at this node's value.
        """
        tree = self._live_tree()
        self._consume()
        return tree._split_off(self._index)

    # ==================== Traversal ====================

    def child_iter(self) -> NodeChildIter:
        return self.as_node().child_iter()

    def depth_first_iter(
        self, order: DepthFirstOrder = DepthFirstOrder.PRE_ORDER
    ) -> DepthFirstIter:
        return self.as_node().depth_first_iter(order)

    def breadth_first_iter(self) -> BreadthFirstIter:
        return self.as_node().breadth_first_iter()

    def walk(self, handler: Callable[[Entry], WalkAction]) -> None:
        self.as_node().walk(handler)

    def walk_mut(self, handler: Callable[[EntryMut], WalkAction]) -> None:
        """Run a mutable walk starting at this node."""
        tree = self._live_tree()
        walk_mut(tree._entry_mut(self._index), handler)
