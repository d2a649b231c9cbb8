import itertools
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class TrieModel:
    """
    Prefix tree over character sequences, stored in an id arena.

    Each node keeps ``char`` ("" for the root), ``children`` (char -> id, in
    insertion order), ``parent`` id and ``end`` (a stored word ends here).
    A node that is neither an end nor has children is pruned on delete.
    """

    def __init__(self):
        self._id_iter = itertools.count()
        self._nodes: Dict[int, Dict[str, Any]] = {}
        self._root = self._make_node("", None)["id"]

    @property
    def root(self) -> int:
        return self._root

    @property
    def length(self) -> int:
        return sum(1 for node in self._nodes.values() if node["end"])

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    def clear(self):
        self._nodes.clear()
        self._id_iter = itertools.count()
        self._root = self._make_node("", None)["id"]

    def create_from_iterable(self, words):
        self.clear()
        for word in words:
            self.insert(word)

    def insert(self, word: str):
        node = self._nodes[self._root]
        for char in word:
            child_id = node["children"].get(char)
            if child_id is None:
                child_id = self._make_node(char, node["id"])["id"]
                node["children"][char] = child_id
            node = self._nodes[child_id]
        node["end"] = True

    def delete(self, word: str) -> bool:
        """Remove ``word``; returns False (and changes nothing) if it was not stored."""
        node_id = self._find_node(word)
        if node_id is None or not self._nodes[node_id]["end"]:
            return False

        node = self._nodes[node_id]
        node["end"] = False
        while not node["end"] and not node["children"] and node["parent"] is not None:
            parent = self._nodes[node["parent"]]
            del parent["children"][node["char"]]
            del self._nodes[node["id"]]
            logger.debug("pruned %r node %d", node["char"], node["id"])
            node = parent
        return True

    def contains(self, word: str) -> bool:
        node_id = self._find_node(word)
        return node_id is not None and self._nodes[node_id]["end"]

    def starts_with(self, prefix: str) -> bool:
        return self._find_node(prefix) is not None

    def words(self) -> List[str]:
        result: List[str] = []
        stack = [(self._root, "")]
        while stack:
            node_id, prefix = stack.pop()
            node = self._nodes[node_id]
            if node["end"]:
                result.append(prefix)
            for char, child_id in reversed(list(node["children"].items())):
                stack.append((child_id, prefix + char))
        return result

    def snapshot(self) -> Dict[str, Any]:
        return {
            "root": self._root,
            "nodes": [
                {
                    "id": node["id"],
                    "char": node["char"],
                    "children": list(node["children"].values()),
                    "parent": node["parent"],
                    "end": node["end"],
                }
                for node in self._nodes.values()
            ],
        }

    # ---------- Internal helpers ----------

    def _make_node(self, char: str, parent_id: Optional[int]) -> Dict[str, Any]:
        node_id = next(self._id_iter)
        node = {"id": node_id, "char": char, "children": {}, "parent": parent_id, "end": False}
        self._nodes[node_id] = node
        return node

    def _find_node(self, word: str) -> Optional[int]:
        node_id = self._root
        for char in word:
            node_id = self._nodes[node_id]["children"].get(char)
            if node_id is None:
                return None
        return node_id
