# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Draining iterators that own a tree and take its values out as they go.

Both iterators are handed a tree nobody else references (see
``EytzingerTree.drain_depth_first`` and ``EytzingerTree.drain_breadth_first``)
and return plain values rather than node handles. The order matches the
corresponding borrowing iterator.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Iterator, TYPE_CHECKING

from .order import DepthFirstOrder

if TYPE_CHECKING:
    from ..store import EytzingerTree


class DepthFirstDrain:
    """Depth-first draining iterator.

    Navigation is pure index arithmetic: no stack is kept. A vacant slot means
    either "no node here" or "already visited", which is why post-order takes
    a parent's value only after stepping back up from its last child slot.
    """

    __slots__ = ('_tree', '_order', '_index', '_done')

    def __init__(
        self,
        tree: EytzingerTree,
        order: DepthFirstOrder = DepthFirstOrder.PRE_ORDER,
    ) -> None:
        if not isinstance(order, DepthFirstOrder):
            raise TypeError(f"order must be a DepthFirstOrder, not {type(order).__name__}")
        self._tree = tree
        self._order = order
        self._index = 0
        self._done = False

    def __repr__(self) -> str:
        return f"DepthFirstDrain(order={self._order.name}, remaining={len(self._tree)})"

    @property
    def order(self) -> DepthFirstOrder:
        return self._order

    @property
    def remaining(self) -> int:
        """Number of values not yet drained."""
        return len(self._tree)

    def __iter__(self) -> DepthFirstDrain:
        return self

    def __next__(self) -> Any:
        if self._done:
            raise StopIteration
        tree = self._tree
        calc = tree.index_calculator
        last_offset = tree.branching_factor - 1
        pre_order = self._order is DepthFirstOrder.PRE_ORDER

        while True:
            index = self._index
            if tree.is_occupied(index):
                self._index = calc.child_index(index, 0)
                if pre_order:
                    return tree._take(index)
                continue

            parent = calc.parent_index(index)
            if parent is None:
                # back at the root
                self._done = True
                raise StopIteration

            if calc.child_offset(index) < last_offset:
                self._index = index + 1
                continue

            # last child slot visited, climb back up
            self._index = parent
            if not pre_order:
                return tree._take(parent)

    def __length_hint__(self) -> int:
        return len(self._tree)


class BreadthFirstDrain:
    """Breadth-first draining iterator.

    The queue holds ranges of sibling slot indices still to be examined.
    """

    __slots__ = ('_tree', '_pending')

    def __init__(self, tree: EytzingerTree) -> None:
        self._tree = tree
        self._pending: deque[Iterator[int]] = deque()
        if tree.is_occupied(0):
            self._pending.append(iter(range(0, 1)))

    def __repr__(self) -> str:
        return f"BreadthFirstDrain(remaining={len(self._tree)})"

    @property
    def remaining(self) -> int:
        """Number of values not yet drained."""
        return len(self._tree)

    def __iter__(self) -> BreadthFirstDrain:
        return self

    def __next__(self) -> Any:
        tree = self._tree
        pending = self._pending
        while pending:
            index = next(pending[0], None)
            if index is None:
                pending.popleft()
                continue
            if tree.is_occupied(index):
                pending.append(iter(tree.index_calculator.child_index_range(index)))
                return tree._take(index)
        raise StopIteration

    def __length_hint__(self) -> int:
        return len(self._tree)
