# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""EytzingerTree - An N-ary tree stored in a flat array.

This module provides the EytzingerTree class, the single owner of every value
in the tree. Positions follow the Eytzinger (heap) layout computed by
IndexCalculator, so the store keeps no parent or child links at all: a slot
list, a branching factor and a cached count are the whole state.

Key Features:
    - **Implicit structure**: children of index ``p`` live at ``p*k+1 .. p*k+k``
    - **Cursors**: Node/NodeMut handles and Entry/EntryMut positions
    - **Cascading removal**: removing a node removes its whole subtree
    - **Split-off**: move a subtree into an independent, renumbered tree
    - **Iteration**: depth-first, breadth-first and draining iterators
    - **Walks**: handler-driven navigation without building an iterator

Invariants:
    - Every occupied index other than 0 has an occupied parent.
    - ``len(tree)`` equals the number of occupied slots.
    - Slots beyond the end of the list are vacant.

Example:
    Building the tree 5(2(1, 4(3)), 7(_, 8))::

        tree = EytzingerTree(2)
        root = tree.set_root_value(5)
        left = root.set_child_value(0, 2)
        left.set_child_value(0, 1)
        left.set_child_value(1, 4).set_child_value(0, 3)
        root.set_child_value(1, 7).set_child_value(1, 8)

        [n.value for n in tree.breadth_first_iter()]  # [5, 2, 7, 1, 4, 8, 3]
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, TYPE_CHECKING

from ..config import runtime_config
from ..entry import Entry, EntryMut
from ..exceptions import OrphanedNodeError
from ..index import IndexCalculator
from ..logging import get_logger
from ..node import Node, NodeMut
from ..traversal import (
    BreadthFirstDrain,
    BreadthFirstIter,
    DepthFirstDrain,
    DepthFirstIter,
    DepthFirstOrder,
    walk,
    walk_mut,
)

if TYPE_CHECKING:
    from ..traversal import WalkAction

LOGGER = get_logger("store")


class _Vacant:
    """Marker for a slot without a value (None is a legal value)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return '<vacant>'


_VACANT = _Vacant()


class EytzingerTree:
    """An N-ary tree with implicit, arithmetic parent/child positions.

    EytzingerTree provides:
    - set_root_value / root_entry_mut: create the root
    - root / root_mut / root_entry: reach the tree through cursors
    - depth_first_iter / breadth_first_iter: borrowing traversal
    - drain_depth_first / drain_breadth_first: consuming traversal
    - walk / walk_mut: handler-driven navigation

    Children are only ever created through a cursor on an occupied parent,
    which is what keeps occupancy connected and rooted.

    Example:
        >>> tree = EytzingerTree(3)
        >>> tree.root_entry_mut().or_insert('a').child_entry(2).or_insert('b')
        NodeMut(index=3, value='b')
        >>> len(tree)
        2
    """

    __slots__ = (
        '_slots', '_calc', '_len', '_version',
        '_doubling',
    )

    def __init__(self, branching_factor: int) -> None:
        """Initialize an empty EytzingerTree.

        Args:
            branching_factor: Maximum number of children per node (>= 1).
                Fixed for the lifetime of the tree.

        Raises:
            BranchingFactorError: If branching_factor is not an int >= 1.
        """
        self._calc = IndexCalculator(branching_factor)
        self._slots: list[Any] = [_VACANT]
        self._len = 0
        # bumped whenever a node appears or disappears
        self._version = 0

        self._doubling = runtime_config().doubles_capacity

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"EytzingerTree(k={self.branching_factor}, len={self._len})"

    def __len__(self) -> int:
        """Return the number of nodes in the tree."""
        return self._len

    def __iter__(self) -> Iterator[Any]:
        """Iterate over values in pre-order."""
        return self.iter_values()

    def __eq__(self, other: object) -> bool:
        """Trees are equal when they hold equal values at the same positions.

        Unused capacity at the end of the slot list is ignored.
        """
        if not isinstance(other, EytzingerTree):
            return NotImplemented
        return (
            self._calc == other._calc
            and self._len == other._len
            and self._used_slots() == other._used_slots()
        )

    __hash__ = None  # type: ignore[assignment]

    # ==================== Properties ====================

    @property
    def branching_factor(self) -> int:
        """Maximum number of children per node."""
        return self._calc.branching_factor

    @property
    def index_calculator(self) -> IndexCalculator:
        return self._calc

    @property
    def capacity(self) -> int:
        """Number of slots currently allocated, vacant ones included."""
        return len(self._slots)

    def is_empty(self) -> bool:
        return self._len == 0

    # ==================== Slot Access ====================

    def is_occupied(self, index: int) -> bool:
        """True if the slot at index holds a value."""
        return 0 <= index < len(self._slots) and self._slots[index] is not _VACANT

    def value_at(self, index: int, default: Any = None) -> Any:
        """Return the value at index, or default if the slot is vacant."""
        if self.is_occupied(index):
            return self._slots[index]
        return default

    def _used_slots(self) -> list[Any]:
        end = len(self._slots)
        while end > 1 and self._slots[end - 1] is _VACANT:
            end -= 1
        return self._slots[:end]

    def _ensure_capacity(self, index: int) -> None:
        size = len(self._slots)
        if index < size:
            return
        new_size = index + 1
        if self._doubling:
            new_size = max(new_size, size * 2)
        self._slots.extend([_VACANT] * (new_size - size))
        LOGGER.debug("Grew slots from %d to %d", size, new_size)

    # ==================== Mutation Primitives ====================

    def _set_value(self, index: int, value: Any) -> NodeMut:
        """Store value at index and return a cursor on it.

        An existing value is replaced and keeps its children; the count only
        changes when the slot was vacant.

        Raises:
            OrphanedNodeError: If the parent of index is vacant, e.g. when a
                stale entry outlived the removal of its parent.
        """
        parent_index = self._calc.parent_index(index)
        if parent_index is not None and not self.is_occupied(parent_index):
            raise OrphanedNodeError(
                f"cannot set index {index}: parent index {parent_index} is vacant"
            )
        self._ensure_capacity(index)
        if self._slots[index] is _VACANT:
            self._len += 1
            self._version += 1
        self._slots[index] = value
        return NodeMut(self, index)

    def _take(self, index: int) -> Any:
        """Move the value out of an occupied slot, leaving descendants alone."""
        value = self._slots[index]
        self._slots[index] = _VACANT
        self._len -= 1
        return value

    def _remove(self, index: int) -> Any:
        """Remove the node at index and its whole subtree.

        Descendants are cleared in post-order, the node itself last.

        Returns:
            The value that was at index, or None if the slot was vacant.
        """
        if not self.is_occupied(index):
            return None
        value = self._slots[index]
        cleared = [
            node.index
            for node in DepthFirstIter(self, Node(self, index), DepthFirstOrder.POST_ORDER)
        ]
        for cleared_index in cleared:
            self._slots[cleared_index] = _VACANT
        self._len -= len(cleared)
        self._version += 1
        LOGGER.debug("Removed %d node(s) rooted at index %d", len(cleared), index)
        return value

    def _split_off(self, index: int) -> EytzingerTree:
        """Move the subtree rooted at index into a new tree.

        Values are moved, not dropped. The new tree's root is the old subtree
        root and relative positions are preserved. A vacant index yields an
        empty tree and leaves this one untouched.
        """
        split = EytzingerTree(self.branching_factor)
        if not self.is_occupied(index):
            return split

        calc = self._calc
        visited = [
            node.index
            for node in DepthFirstIter(self, Node(self, index), DepthFirstOrder.PRE_ORDER)
        ]

        # source_cursor is the source index mirrored by dest_cursor
        source_cursor = index
        dest_cursor = 0
        split._set_value(dest_cursor, self._take(source_cursor))
        for source_index in visited[1:]:
            source_parent = calc.parent_index(source_index)
            while source_cursor != source_parent:
                source_cursor = calc.parent_index(source_cursor)
                dest_cursor = calc.parent_index(dest_cursor)
            dest_cursor = calc.child_index(dest_cursor, calc.child_offset(source_index))
            source_cursor = source_index
            split._set_value(dest_cursor, self._take(source_index))

        self._version += 1
        LOGGER.debug("Split off %d node(s) rooted at index %d", len(visited), index)
        return split

    def _take_all(self) -> EytzingerTree:
        """Hand every slot over to a new tree, leaving this one empty."""
        owner = EytzingerTree(self.branching_factor)
        owner._slots, self._slots = self._slots, [_VACANT]
        owner._len, self._len = self._len, 0
        self._version += 1
        return owner

    # ==================== Cursor Factories ====================

    def _node(self, index: int) -> Node | None:
        if self.is_occupied(index):
            return Node(self, index)
        return None

    def _node_mut(self, index: int) -> NodeMut | None:
        if self.is_occupied(index):
            return NodeMut(self, index)
        return None

    def _entry(self, index: int) -> Entry:
        return Entry(self, index)

    def _entry_mut(self, index: int) -> EntryMut:
        return EntryMut(self, index)

    # ==================== Root Access ====================

    def root(self) -> Node | None:
        """Return the root node, None for an empty tree."""
        return self._node(0)

    def root_mut(self) -> NodeMut | None:
        """Return a write cursor on the root, None for an empty tree."""
        return self._node_mut(0)

    def set_root_value(self, value: Any) -> NodeMut:
        """Set the root value, keeping any existing children.

        Returns:
            A write cursor on the root.
        """
        return self._set_value(0, value)

    def root_entry(self) -> Entry:
        """Return a read-only entry on the root position."""
        return self._entry(0)

    def root_entry_mut(self) -> EntryMut:
        """Return a mutable entry on the root position."""
        return self._entry_mut(0)

    def clear(self) -> None:
        """Remove every node from the tree."""
        removed = self._len
        self._slots = [_VACANT]
        self._len = 0
        self._version += 1
        LOGGER.debug("Cleared %d node(s)", removed)

    # ==================== Iteration ====================

    def depth_first_iter(
        self, order: DepthFirstOrder = DepthFirstOrder.PRE_ORDER
    ) -> DepthFirstIter:
        """Iterate depth-first over every node."""
        return DepthFirstIter(self, self.root(), order)

    def breadth_first_iter(self) -> BreadthFirstIter:
        """Iterate breadth-first over every node."""
        return BreadthFirstIter(self, self.root())

    def iter_values(
        self, order: DepthFirstOrder = DepthFirstOrder.PRE_ORDER
    ) -> Iterator[Any]:
        """Yield values depth-first in the given order."""
        for node in self.depth_first_iter(order):
            yield node.value

    def values(self, order: DepthFirstOrder = DepthFirstOrder.PRE_ORDER) -> list[Any]:
        """Return list of values depth-first in the given order."""
        return list(self.iter_values(order))

    def drain_depth_first(
        self, order: DepthFirstOrder = DepthFirstOrder.PRE_ORDER
    ) -> DepthFirstDrain:
        """Take every value out of the tree, depth-first.

        The tree is empty as soon as this returns; the values live on in the
        returned iterator and are handed out one at a time.
        """
        return DepthFirstDrain(self._take_all(), order)

    def drain_breadth_first(self) -> BreadthFirstDrain:
        """Take every value out of the tree, breadth-first."""
        return BreadthFirstDrain(self._take_all())

    # ==================== Walk ====================

    def walk(self, handler: Callable[[Entry], WalkAction]) -> None:
        """Run a read-only walk from the root entry."""
        walk(self.root_entry(), handler)

    def walk_mut(self, handler: Callable[[EntryMut], WalkAction]) -> None:
        """Run a mutable walk from the root entry."""
        walk_mut(self.root_entry_mut(), handler)
