# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Entries: cursors on a tree position that may or may not hold a value.

An entry is a (tree, index) pair whose occupancy is read from the tree each
time it is asked for, so inserting through an entry turns it occupied and
removing through it turns it vacant. Map-style helpers mirror ``dict``:

    >>> tree = EytzingerTree(2)
    >>> root = tree.root_entry_mut().or_insert(10)
    >>> root.child_entry(0).or_insert(5).value
    5
    >>> root.child_entry(0).and_modify(lambda v: v + 1).get()
    6
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, TYPE_CHECKING

from .exceptions import OccupiedEntryError
from .node import Moved, Node, NodeMut, Unmoved, _Cursor, _value_of
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
    from .store import EytzingerTree


class Entry:
    """Read-only entry on a tree position."""

    __slots__ = ('_tree', '_index')

    def __init__(self, tree: EytzingerTree, index: int) -> None:
        self._tree = tree
        self._index = index

    def __repr__(self) -> str:
        state = 'occupied' if self.is_occupied else 'vacant'
        return f"Entry(index={self._index}, {state})"

    @property
    def tree(self) -> EytzingerTree:
        return self._tree

    @property
    def index(self) -> int:
        return self._index

    @property
    def is_occupied(self) -> bool:
        return self._tree.is_occupied(self._index)

    @property
    def is_vacant(self) -> bool:
        return not self._tree.is_occupied(self._index)

    @property
    def value(self) -> Any:
        """The value at this position.

        Raises:
            MissingValueError: If the entry is vacant.
        """
        return _value_of(self._tree, self._index)

    def get(self, default: Any = None) -> Any:
        """Return the value at this position, or default when vacant."""
        return self._tree.value_at(self._index, default)

    def node(self) -> Node | None:
        """Return the node at this position, None when vacant."""
        return self._tree._node(self._index)

    def parent(self) -> Node | None:
        """Return the parent node, None for the root position."""
        parent_index = self._tree.index_calculator.parent_index(self._index)
        if parent_index is None:
            return None
        return self._tree._node(parent_index)

    def child_iter(self) -> NodeChildIter | Iterator[Node]:
        node = self.node()
        return node.child_iter() if node is not None else iter(())

    def depth_first_iter(
        self, order: DepthFirstOrder = DepthFirstOrder.PRE_ORDER
    ) -> DepthFirstIter:
        return DepthFirstIter(self._tree, self.node(), order)

    def breadth_first_iter(self) -> BreadthFirstIter:
        return BreadthFirstIter(self._tree, self.node())

    def walk(self, handler: Callable[[Entry], WalkAction]) -> None:
        walk(self, handler)


class EntryMut(_Cursor):
    """Mutable entry on a tree position.

    Only ``to_parent`` and ``to_child_entry`` consume the entry; the
    insert/modify/remove helpers leave it usable at the same position.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        if self._consumed:
            return f"EntryMut(index={self._index}, consumed)"
        state = 'occupied' if self.is_occupied else 'vacant'
        return f"EntryMut(index={self._index}, {state})"

    @property
    def is_occupied(self) -> bool:
        return self._live_tree().is_occupied(self._index)

    @property
    def is_vacant(self) -> bool:
        return not self.is_occupied

    @property
    def value(self) -> Any:
        return _value_of(self._live_tree(), self._index)

    def get(self, default: Any = None) -> Any:
        """Return the value at this position, or default when vacant."""
        return self._live_tree().value_at(self._index, default)

    def node(self) -> Node | None:
        return self._live_tree()._node(self._index)

    def node_mut(self) -> NodeMut | None:
        """Return a write cursor on this position, None when vacant."""
        return self._live_tree()._node_mut(self._index)

    def as_entry(self) -> Entry:
        """Return a read-only view of this entry."""
        return Entry(self._live_tree(), self._index)

    def parent(self) -> Node | None:
        return self.as_entry().parent()

    # ==================== Insertion ====================

    def insert(self, value: Any) -> NodeMut:
        """Insert a value into a vacant position.

        Raises:
            OccupiedEntryError: If the position already holds a value.
            OrphanedNodeError: If the parent position was emptied after this
                entry was created.
        """
        tree = self._live_tree()
        if tree.is_occupied(self._index):
            raise OccupiedEntryError(f"entry at index {self._index} is occupied")
        return tree._set_value(self._index, value)

    def or_insert(self, value: Any) -> NodeMut:
        """Insert value if vacant; an existing value is left untouched.

        Returns:
            A cursor on the (new or existing) node.
        """
        node = self.node_mut()
        if node is not None:
            return node
        return self._tree._set_value(self._index, value)

    def or_insert_with(self, factory: Callable[[], Any]) -> NodeMut:
        """Like or_insert, but only calls factory when the entry is vacant."""
        node = self.node_mut()
        if node is not None:
            return node
        return self._tree._set_value(self._index, factory())

    def and_modify(self, func: Callable[[Any], Any]) -> EntryMut:
        """Replace the value with func(value) if occupied; no-op otherwise.

        Returns:
            This entry, for chaining.
        """
        tree = self._live_tree()
        if tree.is_occupied(self._index):
            tree._slots[self._index] = func(tree._slots[self._index])
        return self

    def set_value(self, value: Any) -> tuple[Any, NodeMut]:
        """Remove whatever is here (with its subtree), then insert value.

        Returns:
            Tuple of (old value or None, cursor on the new node).
        """
        old_value, _ = self.remove()
        return old_value, self._tree._set_value(self._index, value)

    # ==================== Removal ====================

    def remove(self) -> tuple[Any, EntryMut]:
        """Remove the node here and all of its descendants.

        Returns:
            Tuple of (removed value or None, this now vacant entry).
        """
        tree = self._live_tree()
        if not tree.is_occupied(self._index):
            return None, self
        return tree._remove(self._index), self

    # ==================== Navigation ====================

    def to_parent(self) -> Moved | Unmoved:
        """Move to the parent node.

        Returns:
            Moved(parent NodeMut), consuming this entry, or Unmoved(self) for
            the root position.
        """
        tree = self._live_tree()
        parent_index = tree.index_calculator.parent_index(self._index)
        parent = tree._node_mut(parent_index) if parent_index is not None else None
        if parent is None:
            return Unmoved(self)
        self._consume()
        return Moved(parent)

    def to_child_entry(self, offset: int) -> Moved | Unmoved:
        """Move to the child position at offset.

        Returns:
            Moved(child EntryMut), consuming this entry, or Unmoved(self) when
            this position is vacant.

        Raises:
            ChildOffsetError: If offset is out of range.
        """
        tree = self._live_tree()
        child_index = tree.index_calculator.child_index(self._index, offset)
        if not tree.is_occupied(self._index):
            return Unmoved(self)
        self._consume()
        return Moved(tree._entry_mut(child_index))

    # ==================== Traversal ====================

    def child_iter(self) -> NodeChildIter | Iterator[Node]:
        return self.as_entry().child_iter()

    def depth_first_iter(
        self, order: DepthFirstOrder = DepthFirstOrder.PRE_ORDER
    ) -> DepthFirstIter:
        return self.as_entry().depth_first_iter(order)

    def breadth_first_iter(self) -> BreadthFirstIter:
        return self.as_entry().breadth_first_iter()

    def walk(self, handler: Callable[[Entry], WalkAction]) -> None:
        walk(self.as_entry(), handler)

    def walk_mut(self, handler: Callable[[EntryMut], WalkAction]) -> None:
        walk_mut(self, handler)
