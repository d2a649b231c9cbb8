from functools import partial
from typing import Dict, Iterable, List, Sequence, Tuple

from PyQt5.QtCore import QPointF, QRectF, Qt, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QFont, QPainterPath, QPen
from PyQt5.QtWidgets import (
    QGraphicsItem,
    QGraphicsObject,
    QGraphicsPathItem,
    QGraphicsSimpleTextItem,
    QMenu,
)

from core.base_view import BaseStructureView
from core.layout import PositionedNode

# (fill, stroke, text)
DEFAULT_STYLE = ("#e9e9ef", "#4a4a52", "#1f1f24")
HIGHLIGHT_STYLE = ("#ffe58f", "#d48806", "#1f1f24")
TAG_STYLES = {
    "RED": ("#e05252", "#8e2020", "#ffffff"),
    "BLACK": ("#2d2d33", "#111114", "#ffffff"),
    "END": ("#c8e6c9", "#2f7d32", "#1f1f24"),  # trie node that ends a word
}

# 一次播放步骤：需要高亮的节点 id 与提示文字
Step = Tuple[Sequence[int], str]


class TreeView(BaseStructureView):
    """
    Renders any list of ``PositionedNode`` as nodes plus parent edges.

    Items are keyed by node id, so a new layout moves surviving nodes,
    fades in new ones and fades out the ones that disappeared.
    """

    deleteRequested = pyqtSignal(int)

    def __init__(self, global_ctrl, shape: str = "ellipse", deletable: bool = True):
        super().__init__(global_ctrl)
        self.shape = shape
        self.deletable = deletable
        self.node_items: Dict[int, NodeItem] = {}
        self.edge_items: Dict[Tuple[int, int], EdgeItem] = {}
        self.caption = self._create_caption()
        self._positions: List[PositionedNode] = []

    # ---------- Public API ----------

    def reset(self):
        self.stop_all_animations()
        self.scene.clear()
        self.node_items.clear()
        self.edge_items.clear()
        self.caption = self._create_caption()
        self._positions = []
        self.auto_fit_view()

    def set_caption(self, text: str):
        self.caption.setText(text)

    def show_layout(self, positions: List[PositionedNode]):
        """Place the layout at once, without animation."""
        self.reset()
        for pos in positions:
            item = self._create_node_item(pos)
            item.setPos(self._top_left(item, pos))
            item.set_style(self._style_for(pos.tag))
        self._rebuild_edges(positions)
        self._positions = list(positions)
        self.auto_fit_view()

    def animate_layout(self, positions: List[PositionedNode], finalizer=None):
        targets = {pos.node_id: pos for pos in positions}
        animations = []
        stale = []

        for node_id in list(self.node_items):
            if node_id not in targets:
                item = self.node_items.pop(node_id)
                stale.append(item)
                animations.append(self.anim.fade_item(item, item.opacity(), 0.0))

        for pos in positions:
            item = self.node_items.get(pos.node_id)
            if item is None:
                item = self._create_node_item(pos)
                item.setPos(self._top_left(item, pos))
                item.setOpacity(0.0)
                animations.append(self.anim.fade_item(item, 0.0, 1.0))
            else:
                item.set_label(pos.label)
                animations.append(self.anim.move_item(item, self._top_left(item, pos)))
            item.set_style(self._style_for(pos.tag))

        self._rebuild_edges(positions)
        self._positions = list(positions)

        def _finish():
            for item in stale:
                self.scene.removeItem(item)
            self.auto_fit_view()
            if finalizer:
                finalizer()

        self._track_animation(self.anim.parallel(*animations), _finish)

    def animate_steps(self, steps: Iterable[Step], finalizer=None):
        steps = list(steps)
        if not steps or self.anim.global_ctrl.skip_steps:
            if finalizer:
                finalizer()
            return

        sequence = self.anim.sequential()
        for node_ids, text in steps:
            sequence.addAnimation(self.anim.hold(partial(self._show_step, tuple(node_ids), text)))
        sequence.addAnimation(self.anim.hold(partial(self._show_step, (), ""), duration=120))
        self._track_animation(sequence, finalizer)

    # ---------- Internal helpers ----------

    def _show_step(self, node_ids: Tuple[int, ...], text: str):
        for node_id, item in self.node_items.items():
            item.set_highlighted(node_id in node_ids)
        self.set_caption(text)

    def _create_caption(self):
        caption = QGraphicsSimpleTextItem("")
        font = QFont()
        font.setPointSize(14)
        caption.setFont(font)
        caption.setBrush(QBrush(QColor("#d48806")))
        caption.setPos(20, -40)
        caption.setZValue(5)
        self.scene.addItem(caption)
        return caption

    def _create_node_item(self, pos: PositionedNode) -> "NodeItem":
        item = NodeItem(pos.node_id, pos.label, self.shape)
        if self.deletable:
            item.contextDelete.connect(self.deleteRequested)
        self.scene.addItem(item)
        self.node_items[pos.node_id] = item
        return item

    def _rebuild_edges(self, positions: List[PositionedNode]):
        for edge in self.edge_items.values():
            self.scene.removeItem(edge)
        self.edge_items.clear()

        for pos in positions:
            if pos.parent_id is None:
                continue
            parent_item = self.node_items.get(pos.parent_id)
            child_item = self.node_items.get(pos.node_id)
            if parent_item and child_item:
                edge = EdgeItem(parent_item, child_item)
                self.scene.addItem(edge)
                self.edge_items[(pos.parent_id, pos.node_id)] = edge

    @staticmethod
    def _style_for(tag):
        # AVL heights are ints, so the trie flag must be matched by identity
        if tag is True:
            return TAG_STYLES["END"]
        if isinstance(tag, str):
            return TAG_STYLES.get(tag, DEFAULT_STYLE)
        return DEFAULT_STYLE

    @staticmethod
    def _top_left(item: "NodeItem", pos: PositionedNode) -> QPointF:
        return QPointF(pos.x - item.width / 2, pos.y - item.height / 2)


class NodeItem(QGraphicsObject):
    contextDelete = pyqtSignal(int)
    positionChanged = pyqtSignal()

    height = 40
    min_width = 40

    def __init__(self, node_id: int, label: str, shape: str = "ellipse"):
        super().__init__()
        self.node_id = node_id
        self.shape = shape
        self._label = ""
        self.width = self.min_width
        self._style = DEFAULT_STYLE
        self._highlighted = False
        self.setZValue(2)
        self.setFlag(QGraphicsItem.ItemSendsGeometryChanges, True)
        self.set_label(label)

    def boundingRect(self):
        return QRectF(0, 0, self.width, self.height)

    def paint(self, painter, option, widget=None):
        fill, stroke, text = HIGHLIGHT_STYLE if self._highlighted else self._style
        painter.setRenderHint(painter.Antialiasing)
        painter.setPen(QPen(QColor(stroke), 2))
        painter.setBrush(QBrush(QColor(fill)))
        rect = self.boundingRect().adjusted(1, 1, -1, -1)
        if self.shape == "rect":
            painter.drawRoundedRect(rect, 6, 6)
        else:
            painter.drawEllipse(rect)

        painter.setPen(QColor(text))
        painter.drawText(self.boundingRect(), Qt.AlignCenter, self._label)

    def set_label(self, label: str):
        if label == self._label:
            return
        self.prepareGeometryChange()
        self._label = label
        self.width = max(self.min_width, 16 + 9 * len(label))
        self.update()

    def set_style(self, style: Tuple[str, str, str]):
        self._style = style
        self.update()

    def set_highlighted(self, highlighted: bool):
        if highlighted != self._highlighted:
            self._highlighted = highlighted
            self.update()

    def contextMenuEvent(self, event):
        menu = QMenu()
        delete_action = menu.addAction("Delete")
        if menu.exec_(event.screenPos()) == delete_action:
            self.contextDelete.emit(self.node_id)

    def itemChange(self, change, value):
        if change == QGraphicsItem.ItemPositionHasChanged:
            self.positionChanged.emit()
        return super().itemChange(change, value)

    def bottom_center(self) -> QPointF:
        pos = self.scenePos()
        return QPointF(pos.x() + self.width / 2, pos.y() + self.height)

    def top_center(self) -> QPointF:
        pos = self.scenePos()
        return QPointF(pos.x() + self.width / 2, pos.y())


class EdgeItem(QGraphicsPathItem):
    def __init__(self, parent_item: NodeItem, child_item: NodeItem):
        super().__init__()
        self.parent_item = parent_item
        self.child_item = child_item

        pen = QPen(QColor("#9e9e9e"), 2)
        pen.setCapStyle(Qt.RoundCap)
        self.setPen(pen)
        self.setZValue(1)

        self.parent_item.positionChanged.connect(self.update_geometry)
        self.child_item.positionChanged.connect(self.update_geometry)
        self.update_geometry()

    def update_geometry(self):
        path = QPainterPath(self.parent_item.bottom_center())
        path.lineTo(self.child_item.top_center())
        self.setPath(path)
