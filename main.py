import argparse
import logging
import os
import sys
from pathlib import Path

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QApplication,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QSlider,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from avl.avl_ctrl import AVLController
from bst.bst_ctrl import BSTController
from btree.bt_ctrl import BTreeController
from core.global_ctrl import MAX_SPEED, MIN_SPEED, GlobalController
from heap.heap_ctrl import HeapController
from rbtree.rb_ctrl import RedBlackController
from trie.trie_ctrl import TrieController
from widgets.graphics_view import CustomGraphicsView

logger = logging.getLogger(__name__)

CONTROLLER_CLASSES = (
    BSTController,
    AVLController,
    RedBlackController,
    BTreeController,
    HeapController,
    TrieController,
)
STYLESHEET = Path(__file__).parent / "resources" / "styles.qss"


class MainWindow(QMainWindow):
    """
    One canvas shared by all structure pages. The combo box picks the page,
    the slider sets the playback speed and the stacked widget below the
    canvas shows the active page's control panel.
    """

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Search Tree Visualizer")
        self.resize(1280, 820)

        self.global_ctrl = GlobalController()
        self.pages = [cls(self.global_ctrl) for cls in CONTROLLER_CLASSES]
        self.current_page = None

        self._setup_widgets()
        self._load_stylesheet()

        self.structure_combo.currentIndexChanged.connect(self.show_page)
        self.speed_slider.valueChanged.connect(self._on_speed_changed)
        self.show_page(0)

    def _setup_widgets(self):
        body = QWidget(self)
        column = QVBoxLayout(body)
        column.setContentsMargins(8, 8, 8, 8)
        column.setSpacing(6)

        header = QHBoxLayout()
        picker_label = QLabel("Data Structure:")
        picker_label.setObjectName("structureSelectLabel")
        self.structure_combo = QComboBox()
        self.structure_combo.setObjectName("structureSelectCombo")
        header.addWidget(picker_label)
        header.addWidget(self.structure_combo, 1)
        header.addSpacing(24)

        self.speed_slider = QSlider(Qt.Horizontal)
        self.speed_slider.setRange(int(MIN_SPEED * 100), int(MAX_SPEED * 100))
        self.speed_slider.setValue(int(self.global_ctrl.speed * 100))
        self.speed_label = QLabel()
        header.addWidget(QLabel("Speed"))
        header.addWidget(self.speed_slider, 1)
        header.addWidget(self.speed_label)
        column.addLayout(header)

        self.canvas = CustomGraphicsView()
        column.addWidget(self.canvas, 1)

        self.panel_stack = QStackedWidget()
        for page in self.pages:
            self.structure_combo.addItem(page.title)
            self.panel_stack.addWidget(page.build_panel())
        column.addWidget(self.panel_stack, 0)

        self.setCentralWidget(body)
        self._update_speed_label(self.global_ctrl.speed)

    def _load_stylesheet(self):
        if STYLESHEET.exists():
            self.setStyleSheet(STYLESHEET.read_text(encoding="utf-8"))

    def show_page(self, index):
        if not 0 <= index < len(self.pages):
            return
        page = self.pages[index]
        if page is self.current_page:
            return

        if self.current_page is not None:
            self.current_page.on_deactivate()
        self.current_page = page
        self.panel_stack.setCurrentIndex(index)
        page.on_activate(self.canvas)
        logger.info("switched to %s", page.title)

    def _on_speed_changed(self, value):
        self.global_ctrl.set_speed(value / 100.0)
        self._update_speed_label(self.global_ctrl.speed)

    def _update_speed_label(self, speed):
        text = f"{speed:.1f}×"
        if speed >= MAX_SPEED:
            text += " (skip steps)"
        self.speed_label.setText(text)


def parse_args(argv):
    parser = argparse.ArgumentParser(description="Interactive search tree visualizer")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("DSV_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="logging level (default: $DSV_LOG_LEVEL or WARNING)",
    )
    # Qt consumes its own options (-style, -platform, ...)
    return parser.parse_known_args(argv)


def main(argv=None):
    argv = sys.argv if argv is None else argv
    args, qt_args = parse_args(argv[1:])
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(argv[:1] + qt_args)
    window = MainWindow()
    window.showMaximized()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
