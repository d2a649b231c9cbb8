import pytest

from rbtree.rb_model import BLACK, RED, RedBlackModel
from tests.conftest import random_operations


def check_red_black(tree):
    nodes = {node["id"]: node for node in tree.snapshot()["nodes"]}
    if tree.root is None:
        assert not nodes
        return
    assert nodes[tree.root]["color"] == BLACK
    assert nodes[tree.root]["parent"] is None

    def black_height(node_id):
        if node_id is None:
            return 1
        node = nodes[node_id]
        for child in (node["left"], node["right"]):
            if child is not None:
                assert nodes[child]["parent"] == node_id
                if node["color"] == RED:
                    assert nodes[child]["color"] == BLACK, f"red-red at {node['value']}"
        left = black_height(node["left"])
        right = black_height(node["right"])
        assert left == right, f"black heights differ under {node['value']}"
        return left + (1 if node["color"] == BLACK else 0)

    black_height(tree.root)


def test_first_insert_is_black_root():
    tree = RedBlackModel()
    tree.insert(10)
    assert tree.color_of(tree.root) == BLACK
    assert tree.black_height() == 1


def test_ascending_inserts_recolor_and_rotate():
    tree = RedBlackModel()
    tree.create_from_iterable([10, 20, 30])
    assert tree.value_of(tree.root) == 20
    assert tree.level_order() == [20, 10, 30]
    left, right = (tree.find(v)[0] for v in (10, 30))
    assert tree.color_of(left) == RED
    assert tree.color_of(right) == RED

    # red uncle: recolor only
    tree.insert(40)
    assert tree.color_of(left) == BLACK
    assert tree.color_of(right) == BLACK
    assert tree.color_of(tree.find(40)[0]) == RED
    check_red_black(tree)


def test_inner_child_double_rotation():
    tree = RedBlackModel()
    tree.create_from_iterable([30, 10, 20])
    assert tree.level_order() == [20, 10, 30]
    check_red_black(tree)


def test_absent_child_counts_as_black():
    assert RedBlackModel().color_of(None) == BLACK


def test_delete_until_empty(rng):
    tree = RedBlackModel()
    keys = list(range(50))
    rng.shuffle(keys)
    tree.create_from_iterable(keys)
    rng.shuffle(keys)
    for index, key in enumerate(keys):
        tree.delete(key)
        check_red_black(tree)
        assert tree.length == len(keys) - index - 1
    assert tree.root is None


def test_duplicates_and_missing_keys_are_noops():
    tree = RedBlackModel()
    tree.create_from_iterable([2, 1, 3])
    before = tree.snapshot()
    tree.insert(2)
    tree.delete(42)
    assert tree.snapshot() == before


@pytest.mark.parametrize("count", [100, 500])
def test_random_operations_keep_invariants(rng, count):
    tree = RedBlackModel()
    expected = set()
    for op, key in random_operations(rng, count):
        if op == "insert":
            tree.insert(key)
            expected.add(key)
        else:
            tree.delete(key)
            expected.discard(key)
        check_red_black(tree)
        assert tree.inorder() == sorted(expected)
