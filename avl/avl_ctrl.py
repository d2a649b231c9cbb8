from avl.avl_layout import compute_avl_positions
from avl.avl_model import AVLModel
from core.layout import format_key
from core.tree_ctrl import BinaryTreeController


class AVLController(BinaryTreeController):
    title = "AVL Tree"

    def _create_model(self):
        return AVLModel()

    def _positions(self):
        return compute_avl_positions(self.model.snapshot())

    def _describe(self) -> str:
        root = self.model.root
        summary = f"Height: {self.model.height()}"
        if root is not None:
            summary += (
                f", root {format_key(self.model.value_of(root))}"
                f" (balance {self.model.balance_of(root):+d})"
            )
        return f"{summary}\n{super()._describe()}"
