import pytest

from avl.avl_layout import compute_avl_positions
from avl.avl_model import AVLModel
from bst.bst_layout import compute_bst_positions
from bst.bst_model import BSTModel
from btree.bt_layout import compute_btree_positions
from btree.bt_model import BTreeModel
from core.layout import format_key
from heap.heap_layout import compute_heap_positions
from rbtree.rb_layout import compute_rb_positions
from rbtree.rb_model import BLACK, RED, RedBlackModel
from trie.trie_layout import ROOT_LABEL, compute_trie_positions
from trie.trie_model import TrieModel


def by_label(positions):
    return {pos.label: pos for pos in positions}


def test_bst_positions_follow_inorder_and_depth():
    tree = BSTModel()
    tree.create_from_iterable([5, 3, 8, 1])
    positions = by_label(compute_bst_positions(tree.snapshot()))

    assert [positions[k].x for k in ("1", "3", "5", "8")] == [510, 570, 630, 690]
    assert positions["5"].y == 50
    assert positions["3"].y == positions["8"].y == 100
    assert positions["1"].y == 150
    assert positions["5"].parent_id is None
    assert positions["1"].parent_id == tree.find(3)[0]


def test_binary_layout_is_pure(rng):
    tree = AVLModel()
    tree.create_from_iterable(rng.sample(range(500), 40))
    snapshot = tree.snapshot()
    first = compute_avl_positions(snapshot)
    assert compute_avl_positions(snapshot) == first
    assert tree.snapshot() == snapshot

    xs = [pos.x for pos in sorted(first, key=lambda pos: int(pos.label))]
    assert xs == sorted(xs)
    assert (min(xs) + max(xs)) / 2 == pytest.approx(600)


def test_tags_carry_height_and_color():
    avl = AVLModel()
    avl.create_from_iterable([2, 1, 3])
    assert by_label(compute_avl_positions(avl.snapshot()))["2"].tag == 2

    rb = RedBlackModel()
    rb.create_from_iterable([2, 1, 3])
    tags = {pos.label: pos.tag for pos in compute_rb_positions(rb.snapshot())}
    assert tags == {"1": RED, "2": BLACK, "3": RED}


def test_empty_structures_have_no_positions():
    assert compute_bst_positions(BSTModel().snapshot()) == []
    assert compute_btree_positions(BTreeModel().snapshot()) == []
    assert compute_heap_positions([]) == []


def test_heap_positions_by_level():
    positions = compute_heap_positions([1, 3, 8, 5])
    assert [(p.node_id, p.x, p.y, p.parent_id) for p in positions] == [
        (0, 600, 40, None),
        (1, 400, 110, 0),
        (2, 800, 110, 0),
        (3, 600, 180, 1),
    ]
    assert [p.label for p in positions] == ["1", "3", "8", "5"]


def test_btree_parent_centred_over_children():
    tree = BTreeModel(max_degree=3)
    tree.create_from_iterable([10, 20, 30])
    positions = by_label(compute_btree_positions(tree.snapshot()))

    assert positions["20"].x == 600
    assert positions["10"].x == 550
    assert positions["30"].x == 650
    assert positions["10"].y == 100
    assert positions["10"].parent_id == positions["20"].node_id

    tree.insert(40)
    assert "30, 40" in by_label(compute_btree_positions(tree.snapshot()))


def test_trie_positions():
    trie = TrieModel()
    trie.create_from_iterable(["ab", "ac"])
    positions = compute_trie_positions(trie.snapshot())

    assert [(p.label, p.x, p.y, p.tag) for p in positions] == [
        (ROOT_LABEL, 600, 40, False),
        ("a", 600, 110, False),
        ("b", 570, 180, True),
        ("c", 630, 180, True),
    ]
    # the root alone still gets a node
    assert len(compute_trie_positions(TrieModel().snapshot())) == 1


def test_format_key_drops_integral_fraction():
    assert format_key(3.0) == "3"
    assert format_key(2.5) == "2.5"
    assert format_key(7) == "7"
