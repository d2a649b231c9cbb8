import pytest

from btree.bt_layout import compute_btree_positions
from btree.bt_model import BTreeModel
from core.exceptions import InvalidConfigurationError, StructureError
from tests.conftest import random_operations


def node_map(tree):
    return {node["id"]: node for node in tree.snapshot()["nodes"]}


def check_shape(tree):
    nodes = node_map(tree)
    leaf_depths = set()
    stack = [(tree.root, 0)]
    while stack:
        node_id, depth = stack.pop()
        node = nodes[node_id]
        assert node["keys"] == sorted(node["keys"])
        assert len(node["keys"]) <= tree.max_keys
        if node_id != tree.root:
            assert len(node["keys"]) >= tree.min_keys
        if node["leaf"]:
            assert not node["children"]
            leaf_depths.add(depth)
        else:
            assert len(node["children"]) == len(node["keys"]) + 1
            stack.extend((child, depth + 1) for child in node["children"])
    assert len(leaf_depths) == 1


def keys_by_level(tree):
    nodes = node_map(tree)
    levels = []
    frontier = [tree.root]
    while frontier:
        levels.append([nodes[node_id]["keys"] for node_id in frontier])
        frontier = [child for node_id in frontier for child in nodes[node_id]["children"]]
    return levels


def test_degree_three_splits_before_inserting():
    tree = BTreeModel(max_degree=3)
    for key in (10, 20, 30):
        tree.insert(key)
    assert keys_by_level(tree) == [[[20]], [[10], [30]]]

    tree.insert(40)
    tree.insert(50)
    assert keys_by_level(tree) == [[[20, 40]], [[10], [30], [50]]]
    assert tree.to_array() == [10, 20, 30, 40, 50]
    assert tree.height() == 2


def test_low_degree_descending_inserts_leave_empty_leaves():
    tree = BTreeModel(max_degree=3)
    tree.create_from_iterable([30, 20, 10, 5])

    # keys below the promoted median go left, the split-off siblings stay empty
    assert keys_by_level(tree) == [[[20, 30]], [[5, 10], [], []]]
    assert tree.to_array() == [5, 10, 20, 30]
    assert tree.min_keys == 0
    check_shape(tree)

    labels = [pos.label for pos in compute_btree_positions(tree.snapshot())]
    assert labels == ["20, 30", "5, 10", "", ""]


def test_degree_two_matches_degree_three_split_points():
    two = BTreeModel(max_degree=2)
    three = BTreeModel(max_degree=3)
    for tree in (two, three):
        tree.create_from_iterable([30, 20, 10, 5])
    assert two.max_keys == three.max_keys == 2
    assert keys_by_level(two) == keys_by_level(three)


def test_odd_degree_forces_preemptive_split():
    assert BTreeModel(max_degree=5).preemptive_split
    assert not BTreeModel(max_degree=4).preemptive_split
    assert BTreeModel(max_degree=4, preemptive_split=True).max_keys == 3


@pytest.mark.parametrize("kwargs", [{"max_degree": 1}, {"max_degree": 2, "preemptive_split": True}])
def test_invalid_configuration(kwargs):
    with pytest.raises(InvalidConfigurationError):
        BTreeModel(**kwargs)
    # callers may catch either the package or the builtin base
    with pytest.raises(StructureError):
        BTreeModel(**kwargs)
    with pytest.raises(ValueError):
        BTreeModel(**kwargs)


def test_search_and_find_path():
    tree = BTreeModel(max_degree=3)
    tree.create_from_iterable([10, 20, 30, 40, 50])
    assert tree.search(30)
    assert not tree.search(35)

    found, path = tree.find(50)
    assert path[0] == tree.root
    assert node_map(tree)[found]["keys"] == [50]


def test_duplicate_insert_is_ignored():
    tree = BTreeModel(max_degree=4)
    tree.create_from_iterable([1, 2, 3])
    tree.insert(2)
    assert tree.to_array() == [1, 2, 3]
    assert tree.length == 3


def test_delete_rebuilds_without_key():
    tree = BTreeModel(max_degree=3)
    tree.create_from_iterable([10, 20, 30, 40, 50])
    tree.delete(20)
    assert tree.to_array() == [10, 30, 40, 50]
    assert not tree.search(20)

    before = tree.snapshot()
    tree.delete(99)
    assert tree.snapshot() == before


def test_clear_leaves_empty_root():
    tree = BTreeModel()
    tree.create_from_iterable([3, 1, 2])
    tree.clear()
    assert tree.to_array() == []
    assert tree.length == 0
    assert tree.height() == 1


@pytest.mark.parametrize(
    "degree, preemptive",
    [(2, False), (3, False), (4, False), (4, True), (5, False), (6, False), (6, True), (7, False)],
)
def test_random_operations_keep_shape(rng, degree, preemptive):
    tree = BTreeModel(max_degree=degree, preemptive_split=preemptive)
    expected = set()
    for op, key in random_operations(rng, 250):
        if op == "insert":
            tree.insert(key)
            expected.add(key)
        else:
            tree.delete(key)
            expected.discard(key)
        assert tree.inorder_traversal() == sorted(expected)
        if expected:
            check_shape(tree)
