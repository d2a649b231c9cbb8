import bisect
import itertools
import logging
from typing import Any, Dict, List, Optional, Tuple

from core.exceptions import InvalidConfigurationError

logger = logging.getLogger(__name__)


class BTreeModel:
    """
    Multiway search tree with a configurable fan-out.

    ``max_degree`` bounds the number of keys a node may hold. With
    ``preemptive_split`` a child holding ``max_degree - 1`` keys is split on
    the way down before descending into it; otherwise a child is split once
    it holds ``max_degree`` keys, still before the new key goes in. Odd
    degrees always split preemptively.

    Both configurations are fixed for the lifetime of the instance.
    """

    def __init__(self, max_degree: int = 3, preemptive_split: bool = False):
        if max_degree < 2:
            raise InvalidConfigurationError(f"max_degree must be >= 2, got {max_degree}")
        preemptive = preemptive_split or max_degree % 2 == 1
        if preemptive and max_degree < 3:
            raise InvalidConfigurationError("preemptive splitting needs max_degree >= 3")

        self._max_degree = max_degree
        self._preemptive = preemptive
        self._id_iter = itertools.count()
        self._nodes: Dict[int, Dict[str, Any]] = {}
        self._root = self._make_node(leaf=True)["id"]

    @property
    def max_degree(self) -> int:
        return self._max_degree

    @property
    def preemptive_split(self) -> bool:
        return self._preemptive

    @property
    def max_keys(self) -> int:
        """Largest key count a node can be left with after an insert."""
        return self._max_degree - 1 if self._preemptive else self._max_degree

    @property
    def min_keys(self) -> int:
        """Smallest key count a non-root node can be left with after a split."""
        return (self.max_keys - 1) // 2

    @property
    def root(self) -> int:
        return self._root

    @property
    def length(self) -> int:
        return sum(len(node["keys"]) for node in self._nodes.values())

    def clear(self):
        self._nodes.clear()
        self._id_iter = itertools.count()
        self._root = self._make_node(leaf=True)["id"]

    def create_from_iterable(self, values):
        self.clear()
        for value in values:
            self.insert(value)

    def insert(self, key):
        if self.search(key):
            logger.debug("duplicate key %r ignored", key)
            return

        root = self._nodes[self._root]
        if len(root["keys"]) >= self.max_keys:
            new_root = self._make_node(leaf=False)
            new_root["children"].append(self._root)
            self._root = new_root["id"]
            logger.debug("root full, growing tree")
            self._split_child(new_root["id"], 0)

        self._insert_non_full(self._root, key)

    def search(self, key) -> bool:
        return self.find(key)[0] is not None

    def find(self, key) -> Tuple[Optional[int], List[int]]:
        """Return (id of the node holding key or None, node ids visited from the root)."""
        path: List[int] = []
        node = self._nodes[self._root]
        while True:
            path.append(node["id"])
            index = bisect.bisect_left(node["keys"], key)
            if index < len(node["keys"]) and node["keys"][index] == key:
                return node["id"], path
            if node["leaf"]:
                return None, path
            node = self._nodes[node["children"][index]]

    def delete(self, key):
        """
        Rebuild without ``key``: collect the keys in order, drop the target,
        re-insert the rest into an empty tree. Node ids change, the key set
        is what callers should rely on.
        """
        if not self.search(key):
            return
        remaining = [k for k in self.inorder_traversal() if k != key]
        logger.debug("rebuilding tree without %r (%d keys)", key, len(remaining))
        self.create_from_iterable(remaining)

    def inorder_traversal(self) -> List:
        result = []
        # (node id, index of the next key to emit)
        stack = [(self._root, 0)]
        while stack:
            node_id, index = stack.pop()
            node = self._nodes[node_id]
            if node["leaf"]:
                result.extend(node["keys"])
                continue
            if index > 0:
                result.append(node["keys"][index - 1])
            if index < len(node["keys"]):
                stack.append((node_id, index + 1))
            stack.append((node["children"][index], 0))
        return result

    def to_array(self) -> List:
        return self.inorder_traversal()

    def height(self) -> int:
        levels = 1
        node = self._nodes[self._root]
        while not node["leaf"]:
            node = self._nodes[node["children"][0]]
            levels += 1
        return levels

    def snapshot(self) -> Dict[str, Any]:
        return {
            "root": self._root,
            "max_degree": self._max_degree,
            "nodes": [
                {
                    "id": node["id"],
                    "keys": list(node["keys"]),
                    "children": list(node["children"]),
                    "leaf": node["leaf"],
                }
                for node in self._nodes.values()
            ],
        }

    # ---------- Internal helpers ----------

    def _make_node(self, leaf: bool) -> Dict[str, Any]:
        node_id = next(self._id_iter)
        node = {"id": node_id, "keys": [], "children": [], "leaf": leaf}
        self._nodes[node_id] = node
        return node

    def _split_child(self, parent_id: int, index: int):
        parent = self._nodes[parent_id]
        child = self._nodes[parent["children"][index]]
        # floor(max_degree / 2) for every full child the configuration produces,
        # except an even degree split preemptively where it picks the true middle
        mid = len(child["keys"]) // 2
        sibling = self._make_node(leaf=child["leaf"])

        median = child["keys"][mid]
        sibling["keys"] = child["keys"][mid + 1:]
        child["keys"] = child["keys"][:mid]
        if not child["leaf"]:
            sibling["children"] = child["children"][mid + 1:]
            child["children"] = child["children"][:mid + 1]

        parent["children"].insert(index + 1, sibling["id"])
        parent["keys"].insert(index, median)
        logger.debug("split node %d, promoted %r", child["id"], median)

    def _insert_non_full(self, node_id: int, key):
        node = self._nodes[node_id]
        while not node["leaf"]:
            index = bisect.bisect_left(node["keys"], key)
            child = self._nodes[node["children"][index]]
            if len(child["keys"]) >= self.max_keys:
                self._split_child(node["id"], index)
                if key > node["keys"][index]:
                    index += 1
            node = self._nodes[node["children"][index]]
        bisect.insort(node["keys"], key)
