# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Depth-first visiting order."""

from __future__ import annotations

from enum import Enum


class DepthFirstOrder(Enum):
    """The order of depth-first iteration.

    There is no in-order variant: an Eytzinger tree makes no promise about how
    values are ordered by content.
    """

    # parents before their children
    PRE_ORDER = 'pre_order'
    # children before their parents
    POST_ORDER = 'post_order'
