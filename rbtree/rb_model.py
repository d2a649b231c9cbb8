import logging
from typing import Optional

from core.binary_tree import BinaryTreeModel

logger = logging.getLogger(__name__)

RED = "RED"
BLACK = "BLACK"


class RedBlackModel(BinaryTreeModel):
    """
    Red-black tree on top of the id arena.

    Every node carries ``color`` and a ``parent`` id. The parent link is only
    used for navigation and is rewritten on every relink (rotation or
    transplant). Absent children count as BLACK.
    """

    def insert(self, value):
        parent_id = None
        current_id = self._root
        while current_id is not None:
            parent_id = current_id
            node = self._nodes[current_id]
            if value == node["value"]:
                logger.debug("duplicate key %r ignored", value)
                return
            current_id = node["left"] if value < node["value"] else node["right"]

        node = self._make_node(value, color=RED, parent=parent_id)
        if parent_id is None:
            self._root = node["id"]
        elif value < self._nodes[parent_id]["value"]:
            self._nodes[parent_id]["left"] = node["id"]
        else:
            self._nodes[parent_id]["right"] = node["id"]
        self._fix_insert(node["id"])

    def delete(self, value):
        node_id, _ = self.find(value)
        if node_id is not None:
            self._delete_node(node_id)

    def color_of(self, node_id: Optional[int]) -> str:
        return self._nodes[node_id]["color"] if node_id is not None else BLACK

    def black_height(self) -> int:
        """BLACK nodes on the leftmost root-to-leaf path (root included)."""
        count = 0
        node_id = self._root
        while node_id is not None:
            if self.color_of(node_id) == BLACK:
                count += 1
            node_id = self._nodes[node_id]["left"]
        return count

    # ---------- Insert fix-up ----------

    def _fix_insert(self, node_id: int):
        while True:
            parent_id = self._nodes[node_id]["parent"]
            if parent_id is None or self.color_of(parent_id) != RED:
                break
            # a RED parent is never the root, so the grandparent exists
            grand_id = self._nodes[parent_id]["parent"]
            grand = self._nodes[grand_id]
            parent_is_left = grand["left"] == parent_id
            uncle_id = grand["right"] if parent_is_left else grand["left"]

            if self.color_of(uncle_id) == RED:
                logger.debug("insert: red uncle, recolor at %r", grand["value"])
                self._nodes[parent_id]["color"] = BLACK
                self._nodes[uncle_id]["color"] = BLACK
                grand["color"] = RED
                node_id = grand_id
                continue

            inner_child = (
                self._nodes[parent_id]["right"] if parent_is_left else self._nodes[parent_id]["left"]
            )
            if node_id == inner_child:
                logger.debug("insert: inner child, rotate at %r", self._nodes[parent_id]["value"])
                node_id = parent_id
                if parent_is_left:
                    self._rotate_left(node_id)
                else:
                    self._rotate_right(node_id)
                parent_id = self._nodes[node_id]["parent"]

            logger.debug("insert: outer child, rotate at %r", grand["value"])
            self._nodes[parent_id]["color"] = BLACK
            grand["color"] = RED
            if parent_is_left:
                self._rotate_right(grand_id)
            else:
                self._rotate_left(grand_id)

        self._nodes[self._root]["color"] = BLACK

    # ---------- Delete ----------

    def _delete_node(self, node_id: int):
        node = self._nodes[node_id]
        removed_color = node["color"]

        if node["left"] is None:
            child_id = node["right"]
            child_parent = node["parent"]
            self._transplant(node_id, child_id)
        elif node["right"] is None:
            child_id = node["left"]
            child_parent = node["parent"]
            self._transplant(node_id, child_id)
        else:
            succ_id = self._leftmost(node["right"])
            succ = self._nodes[succ_id]
            removed_color = succ["color"]
            child_id = succ["right"]
            if succ["parent"] == node_id:
                child_parent = succ_id
            else:
                child_parent = succ["parent"]
                self._transplant(succ_id, succ["right"])
                succ["right"] = node["right"]
                self._nodes[succ["right"]]["parent"] = succ_id
            self._transplant(node_id, succ_id)
            succ["left"] = node["left"]
            self._nodes[succ["left"]]["parent"] = succ_id
            succ["color"] = node["color"]

        del self._nodes[node_id]
        if removed_color == BLACK:
            self._fix_delete(child_id, child_parent)

    def _fix_delete(self, node_id: Optional[int], parent_id: Optional[int]):
        """
        ``node_id`` carries an extra black and may be absent, so its parent is
        passed explicitly instead of being read from the node.
        """
        while node_id != self._root and self.color_of(node_id) == BLACK:
            parent = self._nodes[parent_id]
            if node_id == parent["left"]:
                sibling_id = parent["right"]
                if self.color_of(sibling_id) == RED:
                    logger.debug("delete: red sibling at %r", parent["value"])
                    self._nodes[sibling_id]["color"] = BLACK
                    parent["color"] = RED
                    self._rotate_left(parent_id)
                    sibling_id = parent["right"]

                sibling = self._nodes[sibling_id]
                if self.color_of(sibling["left"]) == BLACK and self.color_of(sibling["right"]) == BLACK:
                    logger.debug("delete: black nephews, push up from %r", parent["value"])
                    sibling["color"] = RED
                    node_id = parent_id
                    parent_id = parent["parent"]
                    continue

                if self.color_of(sibling["right"]) == BLACK:
                    logger.debug("delete: far nephew black, rotate sibling %r", sibling["value"])
                    self._nodes[sibling["left"]]["color"] = BLACK
                    sibling["color"] = RED
                    self._rotate_right(sibling_id)
                    sibling_id = parent["right"]
                    sibling = self._nodes[sibling_id]

                logger.debug("delete: far nephew red, rotate at %r", parent["value"])
                sibling["color"] = parent["color"]
                parent["color"] = BLACK
                self._nodes[sibling["right"]]["color"] = BLACK
                self._rotate_left(parent_id)
            else:
                sibling_id = parent["left"]
                if self.color_of(sibling_id) == RED:
                    logger.debug("delete: red sibling at %r", parent["value"])
                    self._nodes[sibling_id]["color"] = BLACK
                    parent["color"] = RED
                    self._rotate_right(parent_id)
                    sibling_id = parent["left"]

                sibling = self._nodes[sibling_id]
                if self.color_of(sibling["left"]) == BLACK and self.color_of(sibling["right"]) == BLACK:
                    logger.debug("delete: black nephews, push up from %r", parent["value"])
                    sibling["color"] = RED
                    node_id = parent_id
                    parent_id = parent["parent"]
                    continue

                if self.color_of(sibling["left"]) == BLACK:
                    logger.debug("delete: far nephew black, rotate sibling %r", sibling["value"])
                    self._nodes[sibling["right"]]["color"] = BLACK
                    sibling["color"] = RED
                    self._rotate_left(sibling_id)
                    sibling_id = parent["left"]
                    sibling = self._nodes[sibling_id]

                logger.debug("delete: far nephew red, rotate at %r", parent["value"])
                sibling["color"] = parent["color"]
                parent["color"] = BLACK
                self._nodes[sibling["left"]]["color"] = BLACK
                self._rotate_right(parent_id)

            node_id = self._root
            parent_id = None

        if node_id is not None:
            self._nodes[node_id]["color"] = BLACK

    # ---------- Relinking ----------

    def _transplant(self, old_id: int, new_id: Optional[int]):
        parent_id = self._nodes[old_id]["parent"]
        self._replace_child(parent_id, old_id, new_id)
        if new_id is not None:
            self._nodes[new_id]["parent"] = parent_id

    def _rotate_left(self, node_id: int):
        node = self._nodes[node_id]
        pivot_id = node["right"]
        pivot = self._nodes[pivot_id]

        node["right"] = pivot["left"]
        if pivot["left"] is not None:
            self._nodes[pivot["left"]]["parent"] = node_id
        pivot["parent"] = node["parent"]
        self._replace_child(node["parent"], node_id, pivot_id)
        pivot["left"] = node_id
        node["parent"] = pivot_id

    def _rotate_right(self, node_id: int):
        node = self._nodes[node_id]
        pivot_id = node["left"]
        pivot = self._nodes[pivot_id]

        node["left"] = pivot["right"]
        if pivot["right"] is not None:
            self._nodes[pivot["right"]]["parent"] = node_id
        pivot["parent"] = node["parent"]
        self._replace_child(node["parent"], node_id, pivot_id)
        pivot["right"] = node_id
        node["parent"] = pivot_id
