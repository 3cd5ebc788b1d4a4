# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""EytzingerTree exceptions.

Every exception here signals misuse of the API. Expected absence (a vacant
slot, a missing child, the parent of the root) is never reported by raising.
"""

from __future__ import annotations


class EytzingerTreeError(Exception):
    """Base exception for EytzingerTree errors."""

    pass


class BranchingFactorError(EytzingerTreeError, ValueError):
    """Raised when a branching factor is not an int of at least 1."""

    pass


class ChildOffsetError(EytzingerTreeError, IndexError):
    """Raised when a child offset is outside 0 <= offset < branching_factor."""

    pass


class MissingValueError(EytzingerTreeError, LookupError):
    """Raised when a node handle points at a slot that holds no value."""

    pass


class OrphanedNodeError(EytzingerTreeError, ValueError):
    """Raised when a write would leave a node without an occupied parent."""

    pass


class OccupiedEntryError(EytzingerTreeError, ValueError):
    """Raised when inserting into an entry that already holds a value."""

    pass


class ConsumedHandleError(EytzingerTreeError, RuntimeError):
    """Raised when a cursor is used after it was moved, removed or split off."""

    pass


class ConcurrentMutationError(EytzingerTreeError, RuntimeError):
    """Raised when nodes are added or removed while an iterator is alive."""

    pass
