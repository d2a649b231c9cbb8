import logging

from PyQt5.QtWidgets import QCheckBox, QFormLayout, QPushButton, QSpinBox, QWidget

from btree.bt_layout import compute_btree_positions
from btree.bt_model import BTreeModel
from core.layout import format_key
from core.tree_ctrl import StructureController

logger = logging.getLogger(__name__)

DEFAULT_DEGREE = 3
MAX_DEGREE = 9


class BTreeController(StructureController):
    title = "B-Tree"
    view_shape = "rect"
    view_deletable = False

    def _create_model(self):
        return BTreeModel(DEFAULT_DEGREE)

    def _positions(self):
        return compute_btree_positions(self.model.snapshot())

    def _extra_controls(self):
        container = QWidget()
        form = QFormLayout(container)
        form.setContentsMargins(0, 4, 0, 0)

        self.degree_spin = QSpinBox()
        self.degree_spin.setRange(2, MAX_DEGREE)
        self.degree_spin.setValue(self.model.max_degree)
        self.degree_spin.valueChanged.connect(self._on_config_changed)

        self.preemptive_check = QCheckBox("Preemptive split")
        self.preemptive_check.toggled.connect(self._on_config_changed)

        self.search_btn = QPushButton("Search")
        self.search_btn.clicked.connect(self._on_search)

        form.addRow("Max degree:", self.degree_spin)
        form.addRow(self.preemptive_check)
        form.addRow(self.search_btn)
        self._sync_preemptive_check()
        return container

    def _apply_insert(self, value):
        steps = self._search_steps(value)
        self.model.insert(value)
        self._play_then_layout(steps)

    def _describe(self) -> str:
        keys = ", ".join(format_key(k) for k in self.model.inorder_traversal()) or "—"
        mode = "preemptive" if self.model.preemptive_split else "on overflow"
        return (
            f"Max degree {self.model.max_degree}, split {mode}, height {self.model.height()}\n"
            f"Keys: {keys}"
        )

    def _on_search(self):
        value = self._read_value("search")
        if value is None:
            return
        found_id, _ = self.model.find(value)
        steps = self._search_steps(value)
        verdict = "found" if found_id is not None else "not found"
        steps.append(([found_id] if found_id is not None else [], f"{format_key(value)} {verdict}"))
        self.view.animate_steps(steps)

    def _search_steps(self, value):
        _, path = self.model.find(value)
        snapshot = {node["id"]: node for node in self.model.snapshot()["nodes"]}
        return [
            ([node_id], f"{format_key(value)} vs [{', '.join(format_key(k) for k in snapshot[node_id]['keys'])}]")
            for node_id in path
        ]

    def _on_config_changed(self, *_):
        self._sync_preemptive_check()
        degree = self.degree_spin.value()
        preemptive = self.preemptive_check.isChecked()
        logger.info("B-Tree: reconfigure max_degree=%d preemptive=%s", degree, preemptive)
        # 配置在实例生命周期内固定，修改配置即重新创建模型
        self.model = BTreeModel(degree, preemptive)
        self._show_current(animate=False)

    def _sync_preemptive_check(self):
        degree = self.degree_spin.value()
        forced = degree % 2 == 1
        self.preemptive_check.blockSignals(True)
        if forced:
            self.preemptive_check.setChecked(True)
        elif degree == 2:
            self.preemptive_check.setChecked(False)
        self.preemptive_check.setDisabled(forced or degree == 2)
        self.preemptive_check.blockSignals(False)

    def _refresh_inputs(self):
        super()._refresh_inputs()
        locked = self._panel_locked
        self.degree_spin.setDisabled(locked)
        self.search_btn.setDisabled(locked)
        if not locked:
            self._sync_preemptive_check()
        else:
            self.preemptive_check.setDisabled(True)
