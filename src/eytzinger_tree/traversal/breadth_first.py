# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Breadth-first (level order) iteration over borrowed nodes."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from .child_iter import NodeChildIter, check_unchanged

if TYPE_CHECKING:
    from ..node import Node
    from ..store import EytzingerTree


class BreadthFirstIter:
    """Breadth-first iterator yielding Node handles.

    The queue holds one child iterator per discovered node. The front iterator
    is advanced one child at a time, each child's own iterator joining the back
    of the queue; once the front iterator is exhausted its node is yielded.
    Parents therefore come out before any of their children, level by level.
    """

    __slots__ = ('_tree', '_start', '_queue', '_version', '_yielded')

    def __init__(self, tree: EytzingerTree, node: Node | None) -> None:
        self._tree = tree
        self._start = node
        self._queue: deque[NodeChildIter] = deque()
        if node is not None:
            self._queue.append(node.child_iter())
        self._version = tree._version
        self._yielded = 0

    def __repr__(self) -> str:
        return f"BreadthFirstIter(pending={len(self._queue)})"

    @property
    def starting_node(self) -> Node | None:
        """The node iteration started from, None for an empty tree."""
        return self._start

    @property
    def tree(self) -> EytzingerTree:
        return self._tree

    def __iter__(self) -> BreadthFirstIter:
        return self

    def __next__(self) -> Node:
        check_unchanged(self._tree, self._version)
        node = self._advance()
        self._yielded += 1
        return node

    def _advance(self) -> Node:
        queue = self._queue
        while queue:
            current = queue[0]
            child = next(current, None)
            if child is not None:
                queue.append(child.child_iter())
            else:
                queue.popleft()
                return current.node
        raise StopIteration

    def __length_hint__(self) -> int:
        """Exact for a whole-tree traversal; no hint when started at a subtree."""
        if self._start is None:
            return 0
        if self._start.index != 0:
            return NotImplemented
        return len(self._tree) - self._yielded
