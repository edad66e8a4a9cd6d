"""Tests for the shared speed controller."""

import ast
from pathlib import Path

from core import global_ctrl
from core.global_ctrl import MAX_SPEED, MIN_SPEED, GlobalController
from floyd.fd_playback import PlaybackState


class TestGlobalController:
    def test_clamps_and_emits(self):
        ctrl = GlobalController()
        seen = []
        ctrl.speedChanged.connect(seen.append)

        ctrl.set_speed(5.0)
        ctrl.set_speed(3.0)  # unchanged after clamping, no signal
        ctrl.set_speed(0.5)

        assert seen == [3.0, 0.5]
        assert ctrl.speed == 0.5

    def test_scale_duration(self):
        ctrl = GlobalController(2.0)
        assert ctrl.scale_duration(1500) == 750
        assert ctrl.scale_duration(1) == 1

    def test_initial_speed_clamped(self):
        assert GlobalController(0.01).speed == 0.5

    def test_playback_uses_the_same_bounds(self):
        state = PlaybackState()
        state.set_speed(10)
        assert state.speed == MAX_SPEED == GlobalController(10).speed
        state.set_speed(0)
        assert state.speed == MIN_SPEED

    def test_core_does_not_import_structure_packages(self):
        source = Path(global_ctrl.__file__).read_text(encoding="utf-8")
        imported = []
        for node in ast.walk(ast.parse(source)):
            if isinstance(node, ast.ImportFrom):
                imported.append(node.module or "")
            elif isinstance(node, ast.Import):
                imported.extend(alias.name for alias in node.names)
        assert not [name for name in imported if name.startswith("floyd")]
