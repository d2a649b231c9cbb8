import logging
import re
from typing import List, Optional

from PyQt5.QtWidgets import (
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.global_ctrl import GlobalController
from core.layout import format_key
from core.tree_view import Step, TreeView

logger = logging.getLogger(__name__)


class StructureController(QWidget):
    """
    构建某个数据结构的操作面板，并负责模型与视图之间的桥接。

    Subclasses provide the model, the layout call and how insert/delete are
    replayed; this class owns the widgets, input validation and locking.
    """

    title = ""
    insert_label = "Insert"
    delete_label = "Delete"
    value_placeholder = "Value"
    view_shape = "ellipse"
    view_deletable = True

    def __init__(self, global_ctrl: GlobalController):
        super().__init__()
        self.global_ctrl = global_ctrl
        self.model = self._create_model()
        self.view = TreeView(global_ctrl, shape=self.view_shape, deletable=self.view_deletable)
        self._panel_locked = False

        self._build_inputs()
        self.panel = self._create_panel()

        self.view.interactionLocked.connect(self._on_lock_state)
        self.view.deleteRequested.connect(self._handle_delete_from_view)

        self._refresh_inputs()

    # ---------- Hooks ----------

    def _create_model(self):
        raise NotImplementedError

    def _positions(self):
        raise NotImplementedError

    def _describe(self) -> str:
        return ""

    def _apply_insert(self, value):
        self.model.insert(value)
        self._show_current()

    def _apply_delete(self, value):
        self.model.delete(value)
        self._show_current()

    def _value_for_node(self, node_id) -> Optional[str]:
        return None

    def _extra_controls(self) -> Optional[QWidget]:
        return None

    # ---------- UI 构建 ----------

    def _build_inputs(self):
        self.value_edit = QLineEdit()
        self.value_edit.setPlaceholderText(self.value_placeholder)
        self.value_edit.returnPressed.connect(self._on_insert)

        self.info_label = QLabel()
        self.info_label.setWordWrap(True)
        self.info_label.setObjectName("structureInfoLabel")

    def _create_panel(self):
        container = QWidget()
        layout = QGridLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setHorizontalSpacing(12)
        layout.setVerticalSpacing(12)
        layout.setColumnStretch(0, 1)
        layout.setColumnStretch(1, 1)

        create_btn = QPushButton("Create From List")
        create_btn.clicked.connect(self._on_create)
        clear_btn = QPushButton("Clear")
        clear_btn.clicked.connect(self._on_clear)
        build_group = QGroupBox("Build")
        build_layout = QVBoxLayout(build_group)
        build_layout.setContentsMargins(12, 10, 12, 12)
        build_layout.addWidget(create_btn)
        build_layout.addWidget(clear_btn)
        extra = self._extra_controls()
        if extra is not None:
            build_layout.addWidget(extra)
        layout.addWidget(build_group, 0, 0)

        edit_group = QGroupBox("Edit")
        edit_layout = QFormLayout(edit_group)
        edit_layout.setContentsMargins(12, 8, 12, 12)
        edit_layout.setSpacing(6)
        edit_layout.addRow("Value:", self.value_edit)
        insert_btn = QPushButton(self.insert_label)
        insert_btn.clicked.connect(self._on_insert)
        delete_btn = QPushButton(self.delete_label)
        delete_btn.clicked.connect(self._on_delete)
        buttons = QHBoxLayout()
        buttons.addWidget(insert_btn)
        buttons.addWidget(delete_btn)
        edit_layout.addRow(buttons)
        layout.addWidget(edit_group, 0, 1)

        info_group = QGroupBox("State")
        info_layout = QVBoxLayout(info_group)
        info_layout.setContentsMargins(12, 8, 12, 12)
        info_layout.addWidget(self.info_label)
        layout.addWidget(info_group, 1, 0, 1, 2)

        layout.setRowStretch(2, 1)

        self.create_btn = create_btn
        self.clear_btn = clear_btn
        self.insert_btn = insert_btn
        self.delete_btn = delete_btn
        return container

    def build_panel(self):
        return self.panel

    # ---------- 生命周期 ----------

    def on_activate(self, graphics_view):
        self.view.bind_canvas(graphics_view)
        self._show_current(animate=False)

    def on_deactivate(self):
        # 切换页面时直接放弃尚未播放完的动画，模型状态不受影响
        self.view.stop_all_animations()

    # ---------- 操作回调 ----------

    def _on_create(self):
        text, ok = QInputDialog.getText(
            self,
            f"Create {self.title}",
            "Enter values (comma-separated):",
        )
        if not ok:
            return
        try:
            values = self._parse_sequence(text)
        except ValueError as exc:
            logger.warning("rejected list %r: %s", text, exc)
            QMessageBox.warning(self, "Invalid Value", str(exc))
            return

        logger.info("%s: create from %d values", self.title, len(values))
        self.model.create_from_iterable(values)
        self.view.reset()
        self._show_current()

    def _on_insert(self):
        value = self._read_value("insert")
        if value is None:
            return
        logger.info("%s: insert %r", self.title, value)
        self._apply_insert(value)
        self.value_edit.clear()

    def _on_delete(self):
        value = self._read_value("delete")
        if value is None:
            return
        logger.info("%s: delete %r", self.title, value)
        self._apply_delete(value)
        self.value_edit.clear()

    def _on_clear(self):
        logger.info("%s: clear", self.title)
        self.model.clear()
        self._show_current(animate=False)

    def _handle_delete_from_view(self, node_id):
        # 播放中忽略节点右键删除，与面板按钮一致
        if self._panel_locked:
            logger.debug("%s: context delete ignored during playback", self.title)
            return
        raw = self._value_for_node(node_id)
        if raw is None:
            return
        self.value_edit.setText(raw)
        self._on_delete()

    # ---------- 播放 ----------

    def _show_current(self, animate: bool = True):
        self._refresh_info()
        if animate:
            self.view.animate_layout(self._positions())
        else:
            self.view.show_layout(self._positions())

    def _play_then_layout(self, steps: List[Step]):
        """Replay steps on the current picture, then move to the new layout."""
        self._refresh_info()
        positions = self._positions()
        self.view.animate_steps(steps, finalizer=lambda: self.view.animate_layout(positions))

    def _layout_then_play(self, steps: List[Step]):
        """Move to the new layout first, then replay steps on it."""
        self._refresh_info()
        self.view.animate_layout(self._positions(), finalizer=lambda: self.view.animate_steps(steps))

    # ---------- 状态管理 ----------

    def _refresh_info(self):
        self.info_label.setText(self._describe())

    def _refresh_inputs(self):
        locked = self._panel_locked
        for widget in (
            self.create_btn,
            self.clear_btn,
            self.insert_btn,
            self.delete_btn,
            self.value_edit,
        ):
            widget.setDisabled(locked)

    def _on_lock_state(self, locked):
        self._panel_locked = locked
        self._refresh_inputs()

    # ---------- Input parsing ----------

    def _read_value(self, action: str):
        raw = self.value_edit.text().strip()
        if not raw:
            QMessageBox.warning(self, "Missing Value", f"Enter a value to {action}.")
            return None
        try:
            return self._parse_value(raw)
        except ValueError as exc:
            logger.warning("rejected %s value %r: %s", action, raw, exc)
            QMessageBox.warning(self, "Invalid Value", str(exc))
            return None

    def _parse_value(self, raw: str):
        return self._coerce_value(raw)

    def _parse_sequence(self, text: str):
        if not text:
            return []
        normalized = text.replace("，", ",")
        tokens = [part.strip() for part in re.split(r"[,\s]+", normalized) if part.strip()]
        return [self._parse_value(token) for token in tokens]

    @staticmethod
    def _coerce_value(value):
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"{value!r} is not a number") from None


class BinaryTreeController(StructureController):
    """Shared wiring for the BST, AVL and red-black pages."""

    def _apply_insert(self, value):
        steps = self._search_steps(value)
        self.model.insert(value)
        self._play_then_layout(steps)

    def _apply_delete(self, value):
        steps = self._search_steps(value)
        self.model.delete(value)
        self._play_then_layout(steps)

    def _search_steps(self, value) -> List[Step]:
        _, path = self.model.find(value)
        steps = []
        for node_id in path:
            current = self.model.value_of(node_id)
            sign = "<" if value < current else ">" if value > current else "="
            steps.append(([node_id], f"{format_key(value)} {sign} {format_key(current)}"))
        return steps

    def _value_for_node(self, node_id):
        value = self.model.value_of(node_id)
        return None if value is None else format_key(value)

    def _describe(self) -> str:
        def fmt(values):
            return ", ".join(format_key(v) for v in values) or "—"

        return (
            f"In-order: {fmt(self.model.inorder())}\n"
            f"Pre-order: {fmt(self.model.pre_order())}\n"
            f"Post-order: {fmt(self.model.post_order())}\n"
            f"Level-order: {fmt(self.model.level_order())}"
        )
