import logging

from PyQt5.QtWidgets import QButtonGroup, QHBoxLayout, QRadioButton, QWidget

from core.layout import format_key
from core.tree_ctrl import StructureController
from heap.heap_layout import compute_heap_positions
from heap.heap_model import MinHeapModel

logger = logging.getLogger(__name__)


class HeapController(StructureController):
    title = "Binary Heap"
    delete_label = "Remove Root"
    view_deletable = False

    def _create_model(self):
        return MinHeapModel()

    def _positions(self):
        return compute_heap_positions(self.model.to_array())

    def _extra_controls(self):
        container = QWidget()
        row = QHBoxLayout(container)
        row.setContentsMargins(0, 4, 0, 0)
        self.min_radio = QRadioButton("Min-Heap")
        self.max_radio = QRadioButton("Max-Heap")
        self.min_radio.setChecked(True)
        self.kind_group = QButtonGroup(container)
        self.kind_group.addButton(self.min_radio)
        self.kind_group.addButton(self.max_radio)
        self.min_radio.toggled.connect(self._on_kind_toggled)
        row.addWidget(self.min_radio)
        row.addWidget(self.max_radio)
        return container

    def _apply_insert(self, value):
        trace = self.model.insert(value)
        self._layout_then_play(self._trace_steps(trace))

    def _on_delete(self):
        # 删除总是移除堆顶，不需要输入值
        trace = self.model.remove()
        if not trace.has_value:
            logger.info("Heap: remove on empty heap")
            return
        logger.info("Heap: removed root %r", trace.value)
        steps = self._trace_steps(trace)
        steps.append(([], f"Removed {format_key(trace.value)}"))
        self._layout_then_play(steps)

    def _on_kind_toggled(self, _checked):
        kind = "min" if self.min_radio.isChecked() else "max"
        if kind == self.model.kind:
            return
        logger.info("Heap: converting to %s-heap", kind)
        self.model = self.model.converted(kind)
        self._show_current()

    def _trace_steps(self, trace):
        steps = [([index], f"Visiting index {index}") for index in trace.path]
        steps.extend(([i, j], f"Swapped idx {i} & {j}") for i, j in trace.swapped)
        return steps

    def _describe(self) -> str:
        values = ", ".join(format_key(v) for v in self.model.to_array())
        top = self.model.peek()
        top_text = "—" if top is None else format_key(top)
        return f"{self.model.kind.capitalize()}-heap, root {top_text}\nArray: [{values}]"

    def _refresh_inputs(self):
        super()._refresh_inputs()
        self.min_radio.setDisabled(self._panel_locked)
        self.max_radio.setDisabled(self._panel_locked)
