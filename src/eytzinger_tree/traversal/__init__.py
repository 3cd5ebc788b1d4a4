# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Traversal package - iterators and walks over an EytzingerTree.

The package is organized into:
- child_iter: Occupied children of a single node
- depth_first: Pre-order and post-order iteration over Node handles
- breadth_first: Level order iteration over Node handles
- drain: Owning iterators that take values out of the tree
- walk: Handler-driven cursor movement
"""

from .breadth_first import BreadthFirstIter
from .child_iter import NodeChildIter
from .depth_first import DepthFirstIter
from .drain import BreadthFirstDrain, DepthFirstDrain
from .order import DepthFirstOrder
from .walk import WalkAction, WalkHandler, WalkMutHandler, walk, walk_mut

__all__ = [
    "BreadthFirstDrain",
    "BreadthFirstIter",
    "DepthFirstDrain",
    "DepthFirstIter",
    "DepthFirstOrder",
    "NodeChildIter",
    "WalkAction",
    "WalkHandler",
    "WalkMutHandler",
    "walk",
    "walk_mut",
]
