import pytest

from avl.avl_model import AVLModel
from tests.conftest import random_operations


def check_avl(tree):
    nodes = {node["id"]: node for node in tree.snapshot()["nodes"]}

    def height(node_id):
        if node_id is None:
            return 0
        node = nodes[node_id]
        left = height(node["left"])
        right = height(node["right"])
        assert abs(left - right) <= 1, f"unbalanced at {node['value']}"
        assert node["height"] == 1 + max(left, right)
        return node["height"]

    height(tree.root)


@pytest.mark.parametrize(
    "keys, root",
    [
        ([3, 2, 1], 2),  # LL
        ([1, 2, 3], 2),  # RR
        ([3, 1, 2], 2),  # LR
        ([1, 3, 2], 2),  # RL
    ],
)
def test_single_and_double_rotations(keys, root):
    tree = AVLModel()
    tree.create_from_iterable(keys)
    assert tree.value_of(tree.root) == root
    assert tree.level_order() == [2, 1, 3]
    check_avl(tree)


def test_sorted_inserts_stay_logarithmic():
    tree = AVLModel()
    tree.create_from_iterable(range(1, 128))
    assert tree.height() == 7
    assert tree.inorder() == list(range(1, 128))
    check_avl(tree)


def test_delete_rebalances_using_child_balance():
    tree = AVLModel()
    tree.create_from_iterable([5, 3, 8, 2, 4])
    # left child balanced (0) after removing 8: single right rotation
    tree.delete(8)
    assert tree.value_of(tree.root) == 3
    assert tree.level_order() == [3, 2, 5, 4]
    check_avl(tree)


def test_delete_with_two_children():
    tree = AVLModel()
    tree.create_from_iterable([20, 10, 30, 25, 40])
    tree.delete(20)
    assert tree.inorder() == [10, 25, 30, 40]
    check_avl(tree)


def test_balance_of_absent_node_is_zero():
    assert AVLModel().balance_of(None) == 0


def test_random_operations_keep_invariants(rng):
    tree = AVLModel()
    expected = set()
    for op, key in random_operations(rng, 400):
        if op == "insert":
            tree.insert(key)
            expected.add(key)
        else:
            tree.delete(key)
            expected.discard(key)
        check_avl(tree)
        assert tree.inorder() == sorted(expected)
