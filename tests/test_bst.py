import pytest

from bst.bst_model import BSTModel
from tests.conftest import random_operations


def test_inorder_after_scenario():
    tree = BSTModel()
    for key in (5, 3, 8, 1):
        tree.insert(key)
    assert tree.inorder() == [1, 3, 5, 8]
    assert tree.pre_order() == [5, 3, 1, 8]
    assert tree.post_order() == [1, 3, 8, 5]
    assert tree.level_order() == [5, 3, 8, 1]


def test_delete_two_children_copies_successor_key():
    tree = BSTModel()
    for key in (5, 3, 8, 1):
        tree.insert(key)
    root_id = tree.root

    tree.delete(5)

    assert tree.inorder() == [1, 3, 8]
    # the root node survives, only its key changes
    assert tree.root == root_id
    assert tree.value_of(tree.root) == 8


def test_duplicate_insert_and_absent_delete_are_noops():
    tree = BSTModel()
    tree.create_from_iterable([4, 2, 6])
    before = tree.snapshot()

    tree.insert(4)
    tree.delete(99)

    assert tree.snapshot() == before
    assert tree.length == 3


def test_find_returns_search_path():
    tree = BSTModel()
    tree.create_from_iterable([10, 5, 15, 7])
    found, path = tree.find(7)
    assert tree.value_of(found) == 7
    assert [tree.value_of(node_id) for node_id in path] == [10, 5, 7]

    missing, path = tree.find(6)
    assert missing is None
    assert [tree.value_of(node_id) for node_id in path] == [10, 5, 7]


def test_delete_leaf_and_single_child():
    tree = BSTModel()
    tree.create_from_iterable([10, 5, 15, 12])
    tree.delete(5)
    assert tree.inorder() == [10, 12, 15]
    tree.delete(15)
    assert tree.inorder() == [10, 12]
    assert tree.level_order() == [10, 12]


def test_clear_resets_tree():
    tree = BSTModel()
    tree.create_from_iterable([3, 1, 2])
    tree.clear()
    assert tree.root is None
    assert tree.inorder() == []
    assert tree.height() == 0


@pytest.mark.parametrize("count", [50, 300])
def test_inorder_matches_sorted_distinct_keys(rng, count):
    tree = BSTModel()
    expected = set()
    for op, key in random_operations(rng, count):
        if op == "insert":
            tree.insert(key)
            expected.add(key)
        else:
            tree.delete(key)
            expected.discard(key)
        assert tree.inorder() == sorted(expected)
    assert tree.length == len(expected)
