# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Depth-first iteration over borrowed nodes.

The iterator keeps an explicit stack of child iterators instead of recursing,
so the depth of the tree is bounded by memory, not by the interpreter's
recursion limit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .child_iter import NodeChildIter, check_unchanged
from .order import DepthFirstOrder

if TYPE_CHECKING:
    from ..node import Node
    from ..store import EytzingerTree


class DepthFirstIter:
    """Depth-first iterator yielding Node handles.

    Siblings are always visited in increasing child offset order. With
    PRE_ORDER a node is yielded when it is first reached; with POST_ORDER it
    is yielded once all of its descendants have been.

    Example:
        >>> [n.value for n in tree.depth_first_iter(DepthFirstOrder.POST_ORDER)]
        [1, 3, 4, 2, 8, 7, 5]
    """

    __slots__ = ('_tree', '_order', '_start', '_pending', '_stack', '_version', '_yielded')

    def __init__(
        self,
        tree: EytzingerTree,
        node: Node | None,
        order: DepthFirstOrder = DepthFirstOrder.PRE_ORDER,
    ) -> None:
        """Initialize the iterator.

        Args:
            tree: The tree being traversed.
            node: Starting node, or None for an empty tree.
            order: PRE_ORDER or POST_ORDER.
        """
        if not isinstance(order, DepthFirstOrder):
            raise TypeError(f"order must be a DepthFirstOrder, not {type(order).__name__}")
        self._tree = tree
        self._order = order
        self._start = node
        self._pending = node
        self._stack: list[NodeChildIter] = []
        self._version = tree._version
        self._yielded = 0

    def __repr__(self) -> str:
        return f"DepthFirstIter(order={self._order.name}, depth={len(self._stack)})"

    @property
    def order(self) -> DepthFirstOrder:
        """The order of depth-first iteration."""
        return self._order

    @property
    def starting_node(self) -> Node | None:
        """The node iteration started from, None for an empty tree."""
        return self._start

    @property
    def tree(self) -> EytzingerTree:
        return self._tree

    def __iter__(self) -> DepthFirstIter:
        return self

    def __next__(self) -> Node:
        check_unchanged(self._tree, self._version)
        node = self._advance()
        self._yielded += 1
        return node

    def _advance(self) -> Node:
        pre_order = self._order is DepthFirstOrder.PRE_ORDER

        first = self._pending
        if first is not None:
            self._pending = None
            self._stack.append(first.child_iter())
            if pre_order:
                return first

        stack = self._stack
        while stack:
            current = stack[-1]
            child = next(current, None)
            if child is not None:
                stack.append(child.child_iter())
                if pre_order:
                    return child
            else:
                stack.pop()
                if not pre_order:
                    return current.node
        raise StopIteration

    def __length_hint__(self) -> int:
        """Exact for a whole-tree traversal; no hint when started at a subtree."""
        if self._start is None:
            return 0
        if self._start.index != 0:
            return NotImplemented
        return len(self._tree) - self._yielded
