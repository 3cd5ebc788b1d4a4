# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Iteration over the immediate children of one node."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import ConcurrentMutationError

if TYPE_CHECKING:
    from ..node import Node
    from ..store import EytzingerTree


def check_unchanged(tree: EytzingerTree, version: int) -> None:
    """Raise ConcurrentMutationError if nodes were added or removed since version."""
    if tree._version != version:
        raise ConcurrentMutationError("tree changed size during iteration")


class NodeChildIter:
    """Yields the occupied children of a node in increasing offset order.

    Vacant child slots are skipped, so at most ``branching_factor`` nodes are
    produced.
    """

    __slots__ = ('_node', '_offset', '_version')

    def __init__(self, node: Node) -> None:
        self._node = node
        self._offset = 0
        self._version = node.tree._version

    def __repr__(self) -> str:
        return f"NodeChildIter(index={self._node.index}, offset={self._offset})"

    @property
    def node(self) -> Node:
        """The node whose children are being iterated."""
        return self._node

    def __iter__(self) -> NodeChildIter:
        return self

    def __next__(self) -> Node:
        tree = self._node.tree
        check_unchanged(tree, self._version)
        branching_factor = tree.branching_factor
        first = tree.index_calculator.child_index_range(self._node.index).start
        while self._offset < branching_factor:
            child = tree._node(first + self._offset)
            self._offset += 1
            if child is not None:
                return child
        raise StopIteration

    def __length_hint__(self) -> int:
        return self._node.tree.branching_factor - self._offset
