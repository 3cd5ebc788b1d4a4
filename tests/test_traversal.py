# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for traversal iterators, draining iterators and walks."""

import pytest

from eytzinger_tree import (
    ConcurrentMutationError,
    ConsumedHandleError,
    DepthFirstOrder,
    EytzingerTree,
    WalkAction,
)

PRE = DepthFirstOrder.PRE_ORDER
POST = DepthFirstOrder.POST_ORDER


def _values(nodes):
    return [n.value for n in nodes]


class TestChildIter:
    """Tests for NodeChildIter."""

    def test_skips_vacant_children(self):
        """Test only occupied children are yielded, in offset order."""
        tree = EytzingerTree(8)
        root = tree.set_root_value(5)
        root.set_child_value(2, 3)
        root.set_child_value(0, 1)
        assert _values(root.child_iter()) == [1, 3]

    def test_length_hint(self):
        """Test the hint is bounded by the branching factor."""
        import operator

        tree = EytzingerTree(4)
        tree.set_root_value(0).set_child_value(1, 1)
        children = tree.root().child_iter()
        assert operator.length_hint(children) == 4
        next(children)
        assert operator.length_hint(children) == 2

    def test_leaf_has_no_children(self, reference_tree):
        """Test a leaf yields nothing."""
        assert list(reference_tree.root().child(0).child(0).child_iter()) == []


class TestDepthFirstIter:
    """Tests for DepthFirstIter."""

    def test_pre_order(self, reference_tree):
        """Test pre-order visits parents first."""
        assert _values(reference_tree.depth_first_iter(PRE)) == [5, 2, 1, 4, 3, 7, 8]

    def test_post_order(self, reference_tree):
        """Test post-order visits children first."""
        assert _values(reference_tree.depth_first_iter(POST)) == [1, 3, 4, 2, 8, 7, 5]

    def test_default_order_is_pre_order(self, reference_tree):
        """Test the default order."""
        iterator = reference_tree.depth_first_iter()
        assert iterator.order is PRE
        assert iterator.starting_node == reference_tree.root()

    def test_empty_tree(self):
        """Test iteration over an empty tree."""
        tree = EytzingerTree(2)
        assert list(tree.depth_first_iter(PRE)) == []
        assert list(tree.depth_first_iter(POST)) == []
        assert tree.depth_first_iter().starting_node is None

    def test_subtree(self, reference_tree):
        """Test iteration from an inner node stays inside its subtree."""
        left = reference_tree.root().child(0)
        assert _values(left.depth_first_iter(PRE)) == [2, 1, 4, 3]
        assert _values(left.depth_first_iter(POST)) == [1, 3, 4, 2]

    def test_exhaustion_is_permanent(self, reference_tree):
        """Test an exhausted iterator stays exhausted."""
        iterator = reference_tree.depth_first_iter(POST)
        assert len(list(iterator)) == 7
        assert next(iterator, None) is None
        assert list(iterator) == []

    def test_deep_tree_does_not_recurse(self):
        """Test a path far deeper than the recursion limit."""
        tree = EytzingerTree(1)
        node = tree.set_root_value(0)
        for value in range(1, 5000):
            node = node.set_child_value(0, value)
        assert _values(tree.depth_first_iter(POST))[:3] == [4999, 4998, 4997]
        assert len(list(tree.breadth_first_iter())) == 5000

    def test_invalid_order_raises(self, reference_tree):
        """Test order must be a DepthFirstOrder."""
        with pytest.raises(TypeError):
            reference_tree.depth_first_iter('pre')

    def test_mutation_during_iteration_raises(self, reference_tree):
        """Test adding a node while iterating fails fast."""
        iterator = reference_tree.depth_first_iter()
        next(iterator)
        reference_tree.root_mut().child_mut(1).set_child_value(0, 6)
        with pytest.raises(ConcurrentMutationError):
            next(iterator)

    def test_value_update_during_iteration_is_allowed(self, reference_tree):
        """Test replacing values in place is not a structural change."""
        seen = []
        for node in reference_tree.depth_first_iter():
            seen.append(node.value)
            reference_tree.root_mut().value = 50
        assert seen == [5, 2, 1, 4, 3, 7, 8]

    def test_values_helper(self, reference_tree):
        """Test values() in both orders."""
        assert reference_tree.values() == [5, 2, 1, 4, 3, 7, 8]
        assert reference_tree.values(POST) == [1, 3, 4, 2, 8, 7, 5]


class TestBreadthFirstIter:
    """Tests for BreadthFirstIter."""

    def test_level_order(self, reference_tree):
        """Test level order visiting."""
        assert _values(reference_tree.breadth_first_iter()) == [5, 2, 7, 1, 4, 8, 3]

    def test_empty_tree(self):
        """Test iteration over an empty tree."""
        assert list(EytzingerTree(3).breadth_first_iter()) == []

    def test_wide_tree(self):
        """Test level order with a larger branching factor."""
        tree = EytzingerTree(3)
        root = tree.set_root_value('r')
        a = root.set_child_value(0, 'a')
        root.set_child_value(2, 'c')
        a.set_child_value(1, 'a1')
        assert _values(tree.breadth_first_iter()) == ['r', 'a', 'c', 'a1']

    def test_exhaustion_and_hint(self, reference_tree):
        """Test exhaustion and the length hint."""
        import operator

        iterator = reference_tree.breadth_first_iter()
        assert operator.length_hint(iterator) == 7
        assert len(list(iterator)) == 7
        assert list(iterator) == []

    def test_removal_during_iteration_raises(self, reference_tree):
        """Test removing a node while iterating fails fast."""
        iterator = reference_tree.breadth_first_iter()
        next(iterator)
        reference_tree.root_mut().remove_child_value(0)
        with pytest.raises(ConcurrentMutationError, match="during iteration"):
            next(iterator)


class TestLengthHints:
    """Tests for __length_hint__ on borrowing iterators."""

    @pytest.mark.parametrize("make", [
        lambda node: node.depth_first_iter(PRE),
        lambda node: node.depth_first_iter(POST),
        lambda node: node.breadth_first_iter(),
    ], ids=["pre", "post", "breadth"])
    def test_whole_tree_hint_counts_down(self, reference_tree, make):
        """Test the hint is the number of nodes still to come."""
        import operator

        iterator = make(reference_tree.root())
        assert operator.length_hint(iterator) == 7
        next(iterator)
        next(iterator)
        assert operator.length_hint(iterator) == 5
        list(iterator)
        assert operator.length_hint(iterator) == 0

    @pytest.mark.parametrize("make", [
        lambda node: node.depth_first_iter(PRE),
        lambda node: node.breadth_first_iter(),
    ], ids=["depth", "breadth"])
    def test_subtree_hint_never_overstates(self, reference_tree, make):
        """Test a subtree iterator gives no hint rather than the tree size."""
        import operator

        iterator = make(reference_tree.root().child(1))
        assert operator.length_hint(iterator, -1) == -1
        assert len(list(iterator)) == 2

    def test_empty_tree_hint(self):
        """Test iterators over an empty tree hint zero."""
        import operator

        tree = EytzingerTree(2)
        assert operator.length_hint(tree.depth_first_iter(), -1) == 0
        assert operator.length_hint(tree.breadth_first_iter(), -1) == 0


class TestDrain:
    """Tests for draining iterators."""

    def test_drain_pre_order(self, reference_tree):
        """Test pre-order draining matches pre-order iteration."""
        drain = reference_tree.drain_depth_first(PRE)
        assert len(reference_tree) == 0
        assert list(drain) == [5, 2, 1, 4, 3, 7, 8]
        assert drain.remaining == 0

    def test_drain_post_order(self, reference_tree):
        """Test post-order draining matches post-order iteration."""
        assert list(reference_tree.drain_depth_first(POST)) == [1, 3, 4, 2, 8, 7, 5]

    def test_drain_breadth_first(self, reference_tree):
        """Test breadth-first draining matches level order."""
        assert list(reference_tree.drain_breadth_first()) == [5, 2, 7, 1, 4, 8, 3]

    def test_drain_counts_down(self, reference_tree):
        """Test each step takes exactly one value out."""
        drain = reference_tree.drain_breadth_first()
        assert drain.remaining == 7
        next(drain)
        next(drain)
        assert drain.remaining == 5

    def test_drain_empty_tree(self):
        """Test draining an empty tree yields nothing."""
        assert list(EytzingerTree(2).drain_depth_first()) == []
        assert list(EytzingerTree(2).drain_breadth_first()) == []

    def test_drained_tree_is_reusable(self, reference_tree):
        """Test the source tree can be rebuilt while the drain is alive."""
        drain = reference_tree.drain_depth_first(POST)
        reference_tree.set_root_value('new')
        assert list(drain) == [1, 3, 4, 2, 8, 7, 5]
        assert reference_tree.values() == ['new']

    def test_drain_invalidates_iterators(self, reference_tree):
        """Test borrowing iterators notice the tree was drained."""
        iterator = reference_tree.depth_first_iter()
        reference_tree.drain_depth_first()
        with pytest.raises(ConcurrentMutationError):
            next(iterator)

    def test_drain_unary_tree(self):
        """Test draining with branching factor 1."""
        tree = EytzingerTree(1)
        tree.set_root_value(1).set_child_value(0, 2).set_child_value(0, 3)
        assert list(tree.drain_depth_first(POST)) == [3, 2, 1]


class TestWalk:
    """Tests for walk and walk_mut."""

    def test_walk_action_constants(self):
        """Test WalkAction constructors."""
        assert WalkAction.STOP.is_stop
        assert WalkAction.PARENT.is_parent
        assert WalkAction.child(1).is_child
        assert WalkAction.child(1).offset == 1
        assert WalkAction.child(1) == WalkAction.child(1)

    def test_walk_leftmost_path(self, reference_tree):
        """Test a handler following offset 0 until a vacant entry."""
        seen = []

        def leftmost(entry):
            seen.append(entry.get())
            return WalkAction.child(0)

        reference_tree.walk(leftmost)
        # the vacant entry below 1 is visited once, then the walk stops
        assert seen == [5, 2, 1, None]

    def test_walk_stop(self, reference_tree):
        """Test the walk stops when asked."""
        seen = []

        def once(entry):
            seen.append(entry.index)
            return WalkAction.STOP

        reference_tree.walk(once)
        assert seen == [0]

    def test_walk_parent_at_start_stops(self, reference_tree):
        """Test a walk never climbs above its starting node."""
        seen = []

        def up(entry):
            seen.append(entry.get())
            return WalkAction.PARENT

        reference_tree.root().child(0).walk(up)
        assert seen == [2]

    def test_walk_down_and_up(self, reference_tree):
        """Test moving down then back up within the walk."""
        actions = iter([WalkAction.child(1), WalkAction.child(1), WalkAction.PARENT,
                        WalkAction.PARENT, WalkAction.PARENT])
        seen = []

        def scripted(entry):
            seen.append(entry.get())
            return next(actions)

        reference_tree.walk(scripted)
        assert seen == [5, 7, 8, 7, 5]

    def test_walk_empty_tree(self):
        """Test walking an empty tree visits the vacant root."""
        seen = []

        def handler(entry):
            seen.append(entry.is_vacant)
            return WalkAction.child(0)

        EytzingerTree(2).walk(handler)
        assert seen == [True]

    def test_walk_bad_action_raises(self, reference_tree):
        """Test handlers must return a WalkAction."""
        with pytest.raises(TypeError, match="WalkAction"):
            reference_tree.walk(lambda entry: 'stop')

    def test_walk_mut_inserts_at_vacant(self):
        """Test a search-tree style insert driven by walk_mut."""
        tree = EytzingerTree(2)
        for value in (5, 2, 8, 3):
            def insert(entry, value=value):
                if entry.is_vacant:
                    entry.insert(value)
                    return WalkAction.STOP
                current = entry.get()
                if value == current:
                    return WalkAction.STOP
                return WalkAction.child(0 if value < current else 1)

            tree.walk_mut(insert)
        assert tree.values() == [5, 2, 3, 8]
        assert tree.value_at(4) == 3

    def test_walk_mut_modifies_path(self, reference_tree):
        """Test walk_mut can modify values along its path."""
        def double_left(entry):
            if entry.is_vacant:
                return WalkAction.STOP
            entry.and_modify(lambda v: v * 2)
            return WalkAction.child(0)

        reference_tree.walk_mut(double_left)
        assert reference_tree.values() == [10, 4, 2, 4, 3, 7, 8]

    def test_walk_mut_parent_at_start_stops(self, reference_tree):
        """Test walk_mut does not escape above its starting node."""
        seen = []

        def up(entry):
            seen.append(entry.get())
            return WalkAction.PARENT

        start = reference_tree.root_mut().child_mut(1)
        start.walk_mut(up)
        assert seen == [7]
        assert not start.consumed

    def test_walk_mut_returns_to_start_level(self, reference_tree):
        """Test climbing back to the start then asking for the parent stops."""
        actions = iter([WalkAction.child(0), WalkAction.PARENT, WalkAction.PARENT])
        seen = []

        def scripted(entry):
            seen.append(entry.get())
            return next(actions)

        start = reference_tree.root_entry_mut().to_child_entry(0).handle
        start.walk_mut(scripted)
        assert seen == [2, 1, 2]
        assert start.get() == 2

    def test_walk_mut_removes(self, reference_tree):
        """Test removing through walk_mut cascades."""
        def prune_right(entry):
            if entry.index == 2:
                entry.remove()
                return WalkAction.STOP
            return WalkAction.child(1)

        reference_tree.walk_mut(prune_right)
        assert reference_tree.values() == [5, 2, 1, 4, 3]

    def test_walk_mut_internal_cursors_are_consumed(self, reference_tree):
        """Test cursors left behind by the walk cannot be reused."""
        visited = []

        def collect(entry):
            visited.append(entry)
            return WalkAction.child(0) if len(visited) < 3 else WalkAction.STOP

        reference_tree.walk_mut(collect)
        with pytest.raises(ConsumedHandleError):
            visited[1].get()
        assert visited[2].get() == 1
