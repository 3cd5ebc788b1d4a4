# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

import pytest

from eytzinger_tree import EytzingerTree, config as et_config


def build_reference_tree() -> EytzingerTree:
    """Binary tree 5(2(1, 4(3, _)), 7(_, 8))."""
    tree = EytzingerTree(2)
    root = tree.set_root_value(5)
    left = root.set_child_value(0, 2)
    left.set_child_value(0, 1)
    left.set_child_value(1, 4).set_child_value(0, 3)
    root.set_child_value(1, 7).set_child_value(1, 8)
    return tree


@pytest.fixture
def reference_tree() -> EytzingerTree:
    return build_reference_tree()


@pytest.fixture(autouse=True)
def _fresh_runtime_config(monkeypatch: pytest.MonkeyPatch):
    for key in (
        "EYTZINGER_TREE_GROWTH",
        "EYTZINGER_TREE_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    et_config.reset_runtime_config_cache()
    yield
    et_config.reset_runtime_config_cache()


@pytest.fixture
def tree_factory():
    return build_reference_tree
