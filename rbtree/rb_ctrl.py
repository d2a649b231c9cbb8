from core.tree_ctrl import BinaryTreeController
from rbtree.rb_layout import compute_rb_positions
from rbtree.rb_model import RedBlackModel


class RedBlackController(BinaryTreeController):
    title = "Red-Black Tree"

    def _create_model(self):
        return RedBlackModel()

    def _positions(self):
        return compute_rb_positions(self.model.snapshot())

    def _describe(self) -> str:
        return f"Black height: {self.model.black_height()}\n{super()._describe()}"
