import logging
import sys

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPainter
from PyQt5.QtWidgets import (
    QApplication,
    QGraphicsView,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QSlider,
    QSplitter,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from core.global_ctrl import GlobalController
from floyd.fd_code import ALGORITHM_THOUGHT
from floyd.fd_ctrl import FloydController
from floyd.fd_prefs import PreferenceStore
from widgets.code_panel import CodePanel


class MainWindow(QMainWindow):
    """Main window: canvas and controls on the left, code and explanation on the right."""

    def __init__(self, prefs=None):
        super().__init__()
        self.setWindowTitle("Find the Duplicate Number: Floyd's Cycle Detection")
        self.resize(1280, 760)

        self.prefs = prefs or PreferenceStore()
        self.prefs.load()
        self.global_ctrl = GlobalController(self.prefs.get("speed"))
        self.controller = FloydController(self.global_ctrl, self.prefs)

        self._build_ui()
        self._connect_signals()
        self.controller.on_activate(self.graphics_view)

    def _build_ui(self):
        central = QWidget(self)
        self.setCentralWidget(central)

        root_layout = QHBoxLayout(central)
        root_layout.setContentsMargins(8, 8, 8, 8)
        root_layout.setSpacing(8)

        # Left panel
        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_layout.setContentsMargins(0, 0, 0, 0)
        left_layout.setSpacing(6)

        self.graphics_view = QGraphicsView()
        self.graphics_view.setRenderHint(QPainter.Antialiasing)
        self.graphics_view.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)
        left_layout.addWidget(self.graphics_view, 1)

        speed_layout = QHBoxLayout()
        speed_label = QLabel("Playback Speed")
        self.speed_value_label = QLabel(f"{self.global_ctrl.speed:.1f}×")
        self.speed_slider = QSlider(Qt.Horizontal)
        self.speed_slider.setRange(50, 300)  # 0.5x – 3x
        self.speed_slider.setValue(int(round(self.global_ctrl.speed * 100)))
        speed_layout.addWidget(speed_label)
        speed_layout.addWidget(self.speed_slider, 1)
        speed_layout.addWidget(self.speed_value_label)
        left_layout.addLayout(speed_layout)

        left_layout.addWidget(self.controller.build_panel(), 0)

        # Right panel
        right_panel = QSplitter(Qt.Vertical)
        self.code_panel = CodePanel(self.prefs.get("language"))
        thought = QTextEdit()
        thought.setReadOnly(True)
        thought.setMarkdown(ALGORITHM_THOUGHT)
        right_panel.addWidget(self.code_panel)
        right_panel.addWidget(thought)

        root_layout.addWidget(left_panel, 14)
        root_layout.addWidget(right_panel, 7)

    def _connect_signals(self):
        self.speed_slider.valueChanged.connect(self._on_speed_slider_changed)
        self.controller.stepChanged.connect(self.code_panel.show_step)
        self.code_panel.languageChanged.connect(
            lambda language: self.controller.remember("language", language)
        )

    def _on_speed_slider_changed(self, value):
        speed = value / 100.0
        self.speed_value_label.setText(f"{speed:.1f}×")
        self.global_ctrl.set_speed(speed)

    def closeEvent(self, event):
        self.controller.on_deactivate()
        super().closeEvent(event)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    window = MainWindow()
    window.showMaximized()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
