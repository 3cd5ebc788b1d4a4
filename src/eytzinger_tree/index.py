# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Eytzinger index arithmetic.

A tree with branching factor ``k`` is laid out in a flat array: the root lives
at index 0 and the children of the node at ``p`` occupy the contiguous run
``p * k + 1 .. p * k + k``. Parent and child positions are therefore computed,
never stored.

Example:
    >>> calc = IndexCalculator(2)
    >>> calc.child_index(0, 1)
    2
    >>> calc.parent_index(2)
    0
    >>> list(calc.child_index_range(1))
    [3, 4]
"""

from __future__ import annotations

from .exceptions import BranchingFactorError, ChildOffsetError


class IndexCalculator:
    """Maps parent and child positions for a fixed branching factor.

    Instances are immutable and compare equal when their branching factors do.
    """

    __slots__ = ('_branching_factor',)

    def __init__(self, branching_factor: int) -> None:
        """Initialize the calculator.

        Args:
            branching_factor: Maximum number of children per node (>= 1).

        Raises:
            BranchingFactorError: If branching_factor is not an int >= 1.
        """
        if isinstance(branching_factor, bool) or not isinstance(branching_factor, int):
            raise BranchingFactorError(
                f"branching_factor must be an int, not {type(branching_factor).__name__}"
            )
        if branching_factor < 1:
            raise BranchingFactorError(
                f"branching_factor must be at least 1, got {branching_factor}"
            )
        self._branching_factor = branching_factor

    def __repr__(self) -> str:
        return f"IndexCalculator({self._branching_factor})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexCalculator):
            return NotImplemented
        return self._branching_factor == other._branching_factor

    def __hash__(self) -> int:
        return hash((IndexCalculator, self._branching_factor))

    @property
    def branching_factor(self) -> int:
        """Maximum number of children per node."""
        return self._branching_factor

    def check_offset(self, child_offset: int) -> None:
        """Raise ChildOffsetError unless 0 <= child_offset < branching_factor."""
        if not 0 <= child_offset < self._branching_factor:
            raise ChildOffsetError(
                f"child offset {child_offset} out of range (0-{self._branching_factor - 1})"
            )

    def child_index(self, parent_index: int, child_offset: int) -> int:
        """Return the array index of a child.

        Args:
            parent_index: Index of the parent node.
            child_offset: Child slot number under the parent.

        Raises:
            ChildOffsetError: If child_offset is out of range.
        """
        self.check_offset(child_offset)
        return parent_index * self._branching_factor + child_offset + 1

    def parent_index(self, child_index: int) -> int | None:
        """Return the parent's index, or None for the root."""
        if child_index == 0:
            return None
        return (child_index - 1) // self._branching_factor

    def child_index_range(self, parent_index: int) -> range:
        """Return the range of indices reserved for the children of a node."""
        first = parent_index * self._branching_factor + 1
        return range(first, first + self._branching_factor)

    def child_offset(self, child_index: int) -> int | None:
        """Return the slot number of a node under its parent, None for the root."""
        if child_index == 0:
            return None
        return (child_index - 1) % self._branching_factor

    def depth(self, index: int) -> int:
        """Return the number of edges between index and the root."""
        depth = 0
        while index != 0:
            index = (index - 1) // self._branching_factor
            depth += 1
        return depth
