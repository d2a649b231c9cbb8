import itertools
from collections import deque
from typing import Any, Dict, List, Optional, Tuple


class BinaryTreeModel:
    """
    Arena-backed binary search tree shared by the BST, AVL and red-black models.

    Nodes live in ``_nodes`` keyed by an integer id; ``left``/``right`` (and
    ``parent`` where a subclass keeps one) hold ids, never node objects.
    The ids stay stable for the lifetime of a node, which lets the view
    move existing items instead of recreating them.
    """

    def __init__(self):
        self._id_iter = itertools.count()
        self._nodes: Dict[int, Dict[str, Any]] = {}
        self._root: Optional[int] = None

    @property
    def root(self) -> Optional[int]:
        return self._root

    @property
    def length(self) -> int:
        return len(self._nodes)

    def clear(self):
        self._nodes.clear()
        self._root = None
        self._id_iter = itertools.count()

    def create_from_iterable(self, values):
        self.clear()
        for value in values:
            self.insert(value)

    def insert(self, value):
        raise NotImplementedError

    def delete(self, value):
        raise NotImplementedError

    def find(self, value) -> Tuple[Optional[int], List[int]]:
        """Return (node id or None, ids visited from the root)."""
        path: List[int] = []
        current_id = self._root
        while current_id is not None:
            path.append(current_id)
            node = self._nodes[current_id]
            if value == node["value"]:
                return current_id, path
            current_id = node["left"] if value < node["value"] else node["right"]
        return None, path

    def contains(self, value) -> bool:
        return self.find(value)[0] is not None

    def value_of(self, node_id: int):
        node = self._nodes.get(node_id)
        return node["value"] if node else None

    def height(self) -> int:
        levels = 0
        frontier = [self._root] if self._root is not None else []
        while frontier:
            levels += 1
            frontier = [
                child
                for node_id in frontier
                for child in (self._nodes[node_id]["left"], self._nodes[node_id]["right"])
                if child is not None
            ]
        return levels

    # ---------- Traversals ----------

    def inorder(self) -> List:
        result = []
        stack: List[int] = []
        current = self._root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = self._nodes[current]["left"]
            current = stack.pop()
            result.append(self._nodes[current]["value"])
            current = self._nodes[current]["right"]
        return result

    def pre_order(self) -> List:
        result = []
        stack = [self._root] if self._root is not None else []
        while stack:
            node = self._nodes[stack.pop()]
            result.append(node["value"])
            if node["right"] is not None:
                stack.append(node["right"])
            if node["left"] is not None:
                stack.append(node["left"])
        return result

    def post_order(self) -> List:
        # root-right-left reversed is left-right-root
        result = []
        stack = [self._root] if self._root is not None else []
        while stack:
            node = self._nodes[stack.pop()]
            result.append(node["value"])
            if node["left"] is not None:
                stack.append(node["left"])
            if node["right"] is not None:
                stack.append(node["right"])
        result.reverse()
        return result

    def level_order(self) -> List:
        result = []
        queue = deque([self._root] if self._root is not None else [])
        while queue:
            node = self._nodes[queue.popleft()]
            result.append(node["value"])
            if node["left"] is not None:
                queue.append(node["left"])
            if node["right"] is not None:
                queue.append(node["right"])
        return result

    def snapshot(self) -> Dict[str, Any]:
        return {
            "root": self._root,
            "nodes": [dict(node) for node in self._nodes.values()],
        }

    # ---------- Internal helpers ----------

    def _make_node(self, value, **extra) -> Dict[str, Any]:
        node_id = next(self._id_iter)
        node = {"id": node_id, "value": value, "left": None, "right": None}
        node.update(extra)
        self._nodes[node_id] = node
        return node

    def _leftmost(self, node_id: int) -> int:
        while self._nodes[node_id]["left"] is not None:
            node_id = self._nodes[node_id]["left"]
        return node_id

    def _replace_child(self, parent_id, old_child_id, new_child_id):
        if parent_id is None:
            self._root = new_child_id
        elif self._nodes[parent_id]["left"] == old_child_id:
            self._nodes[parent_id]["left"] = new_child_id
        else:
            self._nodes[parent_id]["right"] = new_child_id
