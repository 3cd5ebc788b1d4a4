# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Eytzinger-Tree - N-ary trees stored in a flat array.

A lightweight, zero-dependency library: node positions are computed from the
parent's position and a child slot number, so no links are stored. Cursors,
entries, cascading removal, split-off and non-recursive traversals are built
on that arithmetic.
"""

__version__ = "0.1.0"

from .entry import Entry, EntryMut
from .exceptions import (
    BranchingFactorError,
    ChildOffsetError,
    ConcurrentMutationError,
    ConsumedHandleError,
    EytzingerTreeError,
    MissingValueError,
    OccupiedEntryError,
    OrphanedNodeError,
)
from .index import IndexCalculator
from .node import Moved, Node, NodeMut, Unmoved
from .store import EytzingerTree
from .traversal import (
    BreadthFirstDrain,
    BreadthFirstIter,
    DepthFirstDrain,
    DepthFirstIter,
    DepthFirstOrder,
    NodeChildIter,
    WalkAction,
)

__all__ = [
    # Core classes
    "EytzingerTree",
    "IndexCalculator",
    # Cursors
    "Node",
    "NodeMut",
    "Moved",
    "Unmoved",
    "Entry",
    "EntryMut",
    # Traversal
    "DepthFirstOrder",
    "NodeChildIter",
    "DepthFirstIter",
    "BreadthFirstIter",
    "DepthFirstDrain",
    "BreadthFirstDrain",
    "WalkAction",
    # Exceptions
    "EytzingerTreeError",
    "BranchingFactorError",
    "ChildOffsetError",
    "MissingValueError",
    "OrphanedNodeError",
    "OccupiedEntryError",
    "ConsumedHandleError",
    "ConcurrentMutationError",
]
