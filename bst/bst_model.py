import logging
from typing import Optional

from core.binary_tree import BinaryTreeModel

logger = logging.getLogger(__name__)


class BSTModel(BinaryTreeModel):
    """
    不做平衡的二叉搜索树。重复键插入、删除不存在的键均为空操作。
    两个子节点时把中序后继的值拷贝到当前节点，再从右子树删除后继。
    """

    def insert(self, value):
        self._root = self._insert_at(self._root, value)

    def delete(self, value):
        self._root = self._delete_at(self._root, value)

    def _insert_at(self, node_id: Optional[int], value) -> int:
        if node_id is None:
            return self._make_node(value)["id"]
        node = self._nodes[node_id]
        if value < node["value"]:
            node["left"] = self._insert_at(node["left"], value)
        elif value > node["value"]:
            node["right"] = self._insert_at(node["right"], value)
        else:
            logger.debug("duplicate key %r ignored", value)
        return node_id

    def _delete_at(self, node_id: Optional[int], value) -> Optional[int]:
        if node_id is None:
            return None
        node = self._nodes[node_id]
        if value < node["value"]:
            node["left"] = self._delete_at(node["left"], value)
            return node_id
        if value > node["value"]:
            node["right"] = self._delete_at(node["right"], value)
            return node_id

        if node["left"] is None or node["right"] is None:
            replacement = node["left"] if node["left"] is not None else node["right"]
            del self._nodes[node_id]
            return replacement

        successor_value = self._nodes[self._leftmost(node["right"])]["value"]
        logger.debug("replacing %r with successor %r", value, successor_value)
        node["value"] = successor_value
        node["right"] = self._delete_at(node["right"], successor_value)
        return node_id
