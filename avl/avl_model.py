import logging
from typing import Optional

from core.binary_tree import BinaryTreeModel

logger = logging.getLogger(__name__)


class AVLModel(BinaryTreeModel):
    """
    Height-balanced BST. Every node keeps ``height`` (leaf = 1, absent = 0);
    after an insert or delete each node on the way back up is rebalanced
    with one of the four LL/RR/LR/RL rotation cases.
    """

    def insert(self, value):
        self._root = self._insert_at(self._root, value)

    def delete(self, value):
        self._root = self._delete_at(self._root, value)

    def height(self) -> int:
        return self._height(self._root)

    def balance_of(self, node_id: Optional[int]) -> int:
        if node_id is None:
            return 0
        node = self._nodes[node_id]
        return self._height(node["left"]) - self._height(node["right"])

    # ---------- Recursive descent ----------

    def _insert_at(self, node_id: Optional[int], value) -> int:
        if node_id is None:
            return self._make_node(value, height=1)["id"]
        node = self._nodes[node_id]
        if value < node["value"]:
            node["left"] = self._insert_at(node["left"], value)
        elif value > node["value"]:
            node["right"] = self._insert_at(node["right"], value)
        else:
            return node_id
        return self._rebalance(node_id)

    def _delete_at(self, node_id: Optional[int], value) -> Optional[int]:
        if node_id is None:
            return None
        node = self._nodes[node_id]
        if value < node["value"]:
            node["left"] = self._delete_at(node["left"], value)
        elif value > node["value"]:
            node["right"] = self._delete_at(node["right"], value)
        elif node["left"] is None or node["right"] is None:
            replacement = node["left"] if node["left"] is not None else node["right"]
            del self._nodes[node_id]
            return replacement
        else:
            successor_value = self._nodes[self._leftmost(node["right"])]["value"]
            node["value"] = successor_value
            node["right"] = self._delete_at(node["right"], successor_value)
        return self._rebalance(node_id)

    # ---------- Balancing ----------

    def _height(self, node_id: Optional[int]) -> int:
        return self._nodes[node_id]["height"] if node_id is not None else 0

    def _update_height(self, node_id: int):
        node = self._nodes[node_id]
        node["height"] = 1 + max(self._height(node["left"]), self._height(node["right"]))

    def _rebalance(self, node_id: int) -> int:
        """Fix heights at ``node_id`` and rotate if needed; returns the new subtree root."""
        self._update_height(node_id)
        balance = self.balance_of(node_id)
        node = self._nodes[node_id]

        if balance > 1:
            if self.balance_of(node["left"]) >= 0:
                logger.debug("LL case at %r", node["value"])
            else:
                logger.debug("LR case at %r", node["value"])
                node["left"] = self._rotate_left(node["left"])
            return self._rotate_right(node_id)

        if balance < -1:
            if self.balance_of(node["right"]) <= 0:
                logger.debug("RR case at %r", node["value"])
            else:
                logger.debug("RL case at %r", node["value"])
                node["right"] = self._rotate_right(node["right"])
            return self._rotate_left(node_id)

        return node_id

    def _rotate_right(self, node_id: int) -> int:
        node = self._nodes[node_id]
        pivot_id = node["left"]
        pivot = self._nodes[pivot_id]

        node["left"] = pivot["right"]
        pivot["right"] = node_id

        # child first, then the node that now sits above it
        self._update_height(node_id)
        self._update_height(pivot_id)
        return pivot_id

    def _rotate_left(self, node_id: int) -> int:
        node = self._nodes[node_id]
        pivot_id = node["right"]
        pivot = self._nodes[pivot_id]

        node["right"] = pivot["left"]
        pivot["left"] = node_id

        self._update_height(node_id)
        self._update_height(pivot_id)
        return pivot_id
