from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPainter, QWheelEvent
from PyQt5.QtWidgets import QGraphicsView


class CustomGraphicsView(QGraphicsView):
    """
    Canvas shared by every structure page:
    - normal wheel: vertical panning
    - Shift + wheel: horizontal panning (wide B-trees and tries)
    - Ctrl + wheel: zoom by 1.1, clamped to ``min_zoom`` .. ``max_zoom``
    """

    min_zoom = 0.05
    max_zoom = 4.0

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRenderHints(QPainter.Antialiasing | QPainter.TextAntialiasing)
        self.setDragMode(QGraphicsView.ScrollHandDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)

    def wheelEvent(self, event: QWheelEvent):
        delta = event.angleDelta().y()
        modifiers = event.modifiers()
        if modifiers & Qt.ControlModifier:
            factor = 1.1 if delta > 0 else 1 / 1.1
            current = self.transform().m11()
            if self.min_zoom <= current * factor <= self.max_zoom:
                self.scale(factor, factor)
        elif modifiers & Qt.ShiftModifier:
            bar = self.horizontalScrollBar()
            bar.setValue(bar.value() - int(delta * 0.5))
        else:
            bar = self.verticalScrollBar()
            bar.setValue(bar.value() - int(delta * 0.5))
        event.accept()
