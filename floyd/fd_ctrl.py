import logging

from PyQt5.QtCore import Qt, QTimer, pyqtSignal
from PyQt5.QtWidgets import (
    QComboBox,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QSlider,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from core.global_ctrl import GlobalController
from floyd.fd_input import EXAMPLE_DATA, format_numbers, generate_random_array, validate_input
from floyd.fd_playback import PlaybackState
from floyd.fd_prefs import PreferenceStore
from floyd.fd_steps import generate_steps
from floyd.fd_view import FloydView

logger = logging.getLogger(__name__)


class FloydController(QWidget):
    """
    构建输入与播放面板，负责输入 → 步骤序列 → 视图之间的桥接。
    """

    stepChanged = pyqtSignal(object)

    def __init__(self, global_ctrl: GlobalController, prefs: PreferenceStore):
        super().__init__()
        self.global_ctrl = global_ctrl
        self.prefs = prefs
        self.view = FloydView(global_ctrl)
        self.playback = PlaybackState(speed=global_ctrl.speed)
        self.steps = []
        self.nums = []
        self.panel_index = -1

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_tick)

        self.panel = self._create_panel()
        self.global_ctrl.speedChanged.connect(self._on_speed_changed)
        self._refresh_transport()

    # ---------- Panel UI ----------

    def _create_panel(self):
        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(10)

        # Input
        input_group = QGroupBox("Input")
        input_layout = QGridLayout(input_group)
        input_layout.setContentsMargins(12, 8, 12, 12)
        input_layout.setSpacing(6)

        self.input_edit = QLineEdit(self.prefs.get("last_input"))
        self.input_edit.setPlaceholderText("[1,3,4,2,2] or 1,3,4,2,2")
        self.input_edit.returnPressed.connect(self._on_apply)
        apply_btn = QPushButton("Visualize")
        apply_btn.clicked.connect(self._on_apply)
        input_layout.addWidget(self.input_edit, 0, 0, 1, 3)
        input_layout.addWidget(apply_btn, 0, 3)

        self.example_combo = QComboBox()
        self.example_combo.addItem("Examples…", None)
        for label, values in EXAMPLE_DATA:
            self.example_combo.addItem(f"{label}: {format_numbers(values)}", values)
        self.example_combo.activated.connect(self._on_example)
        input_layout.addWidget(self.example_combo, 1, 0, 1, 2)

        self.size_spin = QSpinBox()
        self.size_spin.setRange(2, 20)
        self.size_spin.setValue(8)
        self.size_spin.setPrefix("size ")
        random_btn = QPushButton("Random")
        random_btn.clicked.connect(self._on_random)
        input_layout.addWidget(self.size_spin, 1, 2)
        input_layout.addWidget(random_btn, 1, 3)
        layout.addWidget(input_group)

        # Playback
        playback_group = QGroupBox("Playback")
        playback_layout = QVBoxLayout(playback_group)
        playback_layout.setContentsMargins(12, 8, 12, 12)
        playback_layout.setSpacing(6)

        buttons = QHBoxLayout()
        self.reset_btn = QPushButton("⏮ Reset")
        self.prev_btn = QPushButton("◀ Prev")
        self.play_btn = QPushButton("▶ Play")
        self.next_btn = QPushButton("Next ▶")
        self.reset_btn.clicked.connect(self._on_reset)
        self.prev_btn.clicked.connect(self._on_prev)
        self.play_btn.clicked.connect(self._on_toggle_play)
        self.next_btn.clicked.connect(self._on_next)
        for btn in (self.reset_btn, self.prev_btn, self.play_btn, self.next_btn):
            buttons.addWidget(btn)
        playback_layout.addLayout(buttons)

        slider_row = QHBoxLayout()
        self.step_slider = QSlider(Qt.Horizontal)
        self.step_slider.setRange(0, 0)
        self.step_slider.valueChanged.connect(self._on_slider)
        self.step_label = QLabel("0 / 0")
        slider_row.addWidget(self.step_slider, 1)
        slider_row.addWidget(self.step_label)
        playback_layout.addLayout(slider_row)

        self.description_label = QLabel()
        self.description_label.setObjectName("stepDescription")
        self.description_label.setWordWrap(True)
        playback_layout.addWidget(self.description_label)
        layout.addWidget(playback_group)

        return container

    def build_panel(self):
        return self.panel

    # ---------- Controller lifecycle ----------

    def on_activate(self, graphics_view):
        self.view.bind_canvas(graphics_view)
        if not self.steps:
            data = validate_input(self.input_edit.text())
            self.load_numbers(data.nums if data.valid else EXAMPLE_DATA[0][1])

    def on_deactivate(self):
        self._pause()
        self.save_preferences()

    # ---------- Input handlers ----------

    def _on_apply(self):
        data = validate_input(self.input_edit.text())
        if not data.valid:
            QMessageBox.warning(self, "Invalid Input", data.message)
            return
        self.load_numbers(data.nums)

    def _on_example(self, idx):
        values = self.example_combo.itemData(idx)
        if values is None:
            return
        self.input_edit.setText(format_numbers(values))
        self.load_numbers(values)

    def _on_random(self):
        values = generate_random_array(self.size_spin.value())
        self.input_edit.setText(format_numbers(values))
        self.load_numbers(values)

    def load_numbers(self, nums):
        self._pause()
        self.nums = list(nums)
        self.steps = generate_steps(self.nums)
        logger.info("visualizing %s in %d steps", format_numbers(self.nums), len(self.steps))

        self.playback.load(len(self.steps))
        self.step_slider.blockSignals(True)
        self.step_slider.setRange(0, max(0, len(self.steps) - 1))
        self.step_slider.setValue(0)
        self.step_slider.blockSignals(False)

        self.view.reset()
        self._show_current(animate=False)
        self.prefs.set("last_input", format_numbers(self.nums))

    # ---------- Playback handlers ----------

    def _on_toggle_play(self):
        if self.playback.toggle():
            self._timer.start(self.playback.interval_ms)
        else:
            self._timer.stop()
        # play() 可能从末尾回到第 0 步
        self._show_current(animate=False)

    def _on_tick(self):
        if self.playback.tick():
            self._show_current()
        if not self.playback.playing:
            self._timer.stop()
            self._refresh_transport()

    def _on_next(self):
        self._pause()
        if self.playback.next():
            self._show_current()

    def _on_prev(self):
        self._pause()
        if self.playback.prev():
            self._show_current(animate=False)

    def _on_reset(self):
        self._pause()
        self.playback.reset()
        self._show_current(animate=False)

    def _on_slider(self, value):
        if not self.steps or value == self.playback.current_step:
            return
        self._pause()
        forward = value == self.playback.current_step + 1
        self.playback.seek(value)
        self._show_current(animate=forward)

    def _on_speed_changed(self, speed):
        self.playback.set_speed(speed)
        if self._timer.isActive():
            self._timer.setInterval(self.playback.interval_ms)
        self.prefs.set("speed", self.playback.speed)

    def _pause(self):
        self.playback.pause()
        self._timer.stop()
        self._refresh_transport()

    # ---------- State helpers ----------

    def _show_current(self, animate=True):
        if not self.steps:
            self.description_label.clear()
            self._refresh_transport()
            return

        step = self.steps[self.playback.current_step]
        self.view.render_step(step, animate=animate)

        self.step_slider.blockSignals(True)
        self.step_slider.setValue(step.id)
        self.step_slider.blockSignals(False)
        self.step_label.setText(f"{step.id + 1} / {len(self.steps)}")
        self.description_label.setText(step.description)
        self._refresh_transport()
        self.stepChanged.emit(step)

    def _refresh_transport(self):
        has_steps = bool(self.steps)
        self.reset_btn.setDisabled(not has_steps or self.playback.at_start)
        self.prev_btn.setDisabled(not has_steps or self.playback.at_start)
        self.next_btn.setDisabled(not has_steps or self.playback.at_end)
        self.play_btn.setDisabled(not has_steps)
        self.step_slider.setDisabled(not has_steps)
        self.play_btn.setText("⏸ Pause" if self.playback.playing else "▶ Play")

    def remember(self, key, value):
        """Update a preference in memory; it is written on deactivate."""
        self.prefs.set(key, value)

    def save_preferences(self) -> bool:
        if not self.prefs.dirty:
            return True
        try:
            self.prefs.save()
        except OSError as exc:
            logger.warning("could not write preferences %s: %s", self.prefs.path, exc)
            return False
        return True
