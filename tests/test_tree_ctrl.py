from core.tree_ctrl import StructureController


class FakeEdit:
    def __init__(self):
        self.text = None

    def setText(self, text):
        self.text = text


class FakeController:
    """Stands in for a built panel so the handler runs without a QApplication."""

    title = "Fake"

    def __init__(self, locked):
        self._panel_locked = locked
        self.value_edit = FakeEdit()
        self.deleted = 0

    def _value_for_node(self, node_id):
        return str(node_id * 10)

    def _on_delete(self):
        self.deleted += 1


def test_context_delete_ignored_while_locked():
    ctrl = FakeController(locked=True)
    StructureController._handle_delete_from_view(ctrl, 4)
    assert ctrl.deleted == 0
    assert ctrl.value_edit.text is None


def test_context_delete_routes_through_value_edit():
    ctrl = FakeController(locked=False)
    StructureController._handle_delete_from_view(ctrl, 4)
    assert ctrl.value_edit.text == "40"
    assert ctrl.deleted == 1
