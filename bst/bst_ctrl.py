from bst.bst_layout import compute_bst_positions
from bst.bst_model import BSTModel
from core.tree_ctrl import BinaryTreeController


class BSTController(BinaryTreeController):
    title = "Binary Search Tree"

    def _create_model(self):
        return BSTModel()

    def _positions(self):
        return compute_bst_positions(self.model.snapshot())
