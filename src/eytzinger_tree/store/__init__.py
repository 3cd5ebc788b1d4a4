# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store package - The slot array that owns every value of a tree.

The package is organized into:
- core: EytzingerTree with its mutation primitives, cursors and iteration

Example:
    >>> from eytzinger_tree import EytzingerTree
    >>> tree = EytzingerTree(2)
    >>> tree.set_root_value(5).set_child_value(1, 7).value
    7
    >>> len(tree)
    2
"""

from .core import EytzingerTree

__all__ = ["EytzingerTree"]
