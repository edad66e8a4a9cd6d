"""Tests for when the controller writes preferences to disk."""

import json
import logging

import pytest

from core.global_ctrl import GlobalController
from floyd.fd_prefs import PreferenceStore


@pytest.fixture
def make_controller(qapp):
    from PyQt5.QtWidgets import QGraphicsView

    from floyd.fd_ctrl import FloydController

    created = []

    def factory(path):
        prefs = PreferenceStore(path)
        prefs.load()
        global_ctrl = GlobalController(prefs.get("speed"))
        ctrl = FloydController(global_ctrl, prefs)
        view = QGraphicsView()
        ctrl.on_activate(view)
        created.append((ctrl, view))
        return ctrl, global_ctrl

    yield factory
    for ctrl, view in created:
        ctrl.deleteLater()
        view.deleteLater()


class TestPreferenceWrites:
    def test_startup_does_not_write(self, tmp_path, make_controller):
        path = tmp_path / "prefs.json"
        ctrl, _ = make_controller(path)
        assert ctrl.steps
        assert not path.exists()

    def test_speed_changes_written_once_on_deactivate(self, tmp_path, make_controller):
        path = tmp_path / "prefs.json"
        ctrl, global_ctrl = make_controller(path)
        for speed in (1.2, 1.8, 2.5):
            global_ctrl.set_speed(speed)
        assert not path.exists()

        ctrl.on_deactivate()
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload["settings"]["speed"] == 2.5

    def test_loaded_input_remembered(self, tmp_path, make_controller):
        path = tmp_path / "prefs.json"
        ctrl, _ = make_controller(path)
        ctrl.load_numbers([3, 1, 3, 4, 2])
        assert not path.exists()
        ctrl.on_deactivate()
        assert PreferenceStore(path).load()["last_input"] == "[3,1,3,4,2]"

    def test_unchanged_preferences_not_rewritten(self, tmp_path, make_controller):
        path = tmp_path / "prefs.json"
        ctrl, _ = make_controller(path)
        ctrl.on_deactivate()
        assert not path.exists()

    def test_write_failure_is_logged(self, tmp_path, make_controller, caplog):
        path = tmp_path / "prefs.json"
        path.mkdir()
        ctrl, global_ctrl = make_controller(path)
        global_ctrl.set_speed(2.0)

        with caplog.at_level(logging.WARNING, logger="floyd.fd_ctrl"):
            assert ctrl.save_preferences() is False
        assert "could not write preferences" in caplog.text
        assert ctrl.prefs.dirty
