"""
pytest-qt tests for the script launcher panel.

Covers:
- Empty state and folder restore from settings
- Choosing a folder (dialog stubbed) persists scriptPath
- Search filtering and rebuilding on empty search
- Double-click launch resolving filtered rows to the right file
- Python scripts run against the host
- Missing scripts and script errors reported, not raised
- Panel bounds persistence
"""
from unittest.mock import MagicMock

import pytest
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QCloseEvent

from components import script_launcher_panel
from components.script_launcher_panel import ScriptLauncherPanel, format_bounds, parse_bounds
from constants import (
    LAUNCHER_NO_FOLDER, LAUNCHER_MISSING_SCRIPT, SETTINGS_SECTION,
    SETTING_SCRIPT_PATH, SETTING_PANEL_BOUNDS
)


@pytest.fixture
def make_panel(host, qtbot):
    def _make():
        widget = ScriptLauncherPanel(host)
        qtbot.addWidget(widget)
        return widget
    return _make


@pytest.fixture
def loaded_panel(host, script_tree, make_panel):
    host.settings.save_setting(SETTINGS_SECTION, SETTING_SCRIPT_PATH, str(script_tree))
    host.eval_file = MagicMock()
    return make_panel()


def _item_named(panel, name):
    for i in range(panel.script_list.count()):
        if panel.script_list.item(i).text() == name:
            return panel.script_list.item(i)
    raise AssertionError(f"{name} not listed")


class TestBounds:

    def test_round_trip(self):
        assert parse_bounds(format_bounds(10, 20, 300, 400)) == (10, 20, 300, 400)

    @pytest.mark.parametrize("text", ["", "1,2,3", "a,b,c,d", "10,10,5,5"])
    def test_malformed(self, text):
        assert parse_bounds(text) is None


class TestFolder:

    def test_empty_state(self, make_panel):
        panel = make_panel()
        assert panel.path_field.text() == LAUNCHER_NO_FOLDER
        assert not panel.path_field.isEnabled()
        assert panel.script_list.count() == 0

    def test_restores_folder_from_settings(self, loaded_panel, script_tree):
        assert loaded_panel.path_field.text() == str(script_tree)
        assert loaded_panel.visible_names() == ["A_tool", "b_script", "c"]

    def test_icon_applied(self, loaded_panel):
        assert not _item_named(loaded_panel, "A_tool").icon().isNull()

    def test_choose_folder(self, make_panel, host, script_tree, monkeypatch):
        monkeypatch.setattr(script_launcher_panel.QFileDialog, "getExistingDirectory",
                            lambda *args, **kwargs: str(script_tree))
        panel = make_panel()
        panel.choose_folder()
        assert host.settings.get_setting(SETTINGS_SECTION, SETTING_SCRIPT_PATH) == str(script_tree)
        assert panel.visible_names() == ["A_tool", "b_script", "c"]

    def test_cancelled_dialog_changes_nothing(self, make_panel, host, monkeypatch):
        monkeypatch.setattr(script_launcher_panel.QFileDialog, "getExistingDirectory",
                            lambda *args, **kwargs: "")
        panel = make_panel()
        panel.choose_folder()
        assert not host.settings.have_setting(SETTINGS_SECTION, SETTING_SCRIPT_PATH)
        assert panel.path_field.text() == LAUNCHER_NO_FOLDER

    def test_refresh_button_rescans(self, loaded_panel, script_tree, qtbot):
        (script_tree / "new_tool.jsx").write_text("")
        qtbot.mouseClick(loaded_panel.refresh_button, Qt.LeftButton)
        assert "new_tool" in loaded_panel.visible_names()


class TestSearch:

    def test_typing_filters(self, loaded_panel, qtbot):
        qtbot.keyClicks(loaded_panel.search_field, "TOOL")
        assert loaded_panel.visible_names() == ["A_tool"]

    def test_clearing_search_shows_all(self, loaded_panel):
        loaded_panel.search_field.setText("b_")
        assert loaded_panel.visible_names() == ["b_script"]
        loaded_panel.search_field.setText("")
        assert loaded_panel.visible_names() == ["A_tool", "b_script", "c"]

    def test_no_match(self, loaded_panel):
        loaded_panel.search_field.setText("zzz")
        assert loaded_panel.script_list.count() == 0


class TestLaunch:

    def test_double_click_runs_filtered_script(self, loaded_panel, host, script_tree):
        loaded_panel.search_field.setText("b_s")
        item = loaded_panel.script_list.item(0)
        loaded_panel.script_list.itemDoubleClicked.emit(item)
        host.eval_file.assert_called_once_with(script_tree / "b_script.jsx")

    def test_double_click_runs_python_script_against_host(self, make_panel, host, tmp_path):
        folder = tmp_path / "py_scripts"
        folder.mkdir()
        (folder / "half_width.py").write_text(
            "comp = host.active_item\ncomp.width = comp.width // 2\n", encoding="utf-8")
        host.settings.save_setting(SETTINGS_SECTION, SETTING_SCRIPT_PATH, str(folder))
        panel = make_panel()

        assert panel.visible_names() == ["half_width"]
        panel.script_list.itemDoubleClicked.emit(panel.script_list.item(0))

        assert host.active_item.width == 960

    def test_launched_signal(self, loaded_panel, script_tree, qtbot):
        with qtbot.waitSignal(loaded_panel.script_launched, timeout=1000) as blocker:
            loaded_panel.run_script(2)
        assert blocker.args == [script_tree / "sub" / "c.jsxbin"]

    def test_missing_script_warns(self, loaded_panel, host, script_tree, monkeypatch):
        warn = MagicMock()
        monkeypatch.setattr(script_launcher_panel, "show_warning", warn)
        (script_tree / "A_tool.js").unlink()

        assert not loaded_panel.run_script(0)

        host.eval_file.assert_not_called()
        assert warn.call_args[0][0] == LAUNCHER_MISSING_SCRIPT

    def test_script_error_reported(self, loaded_panel, host, monkeypatch):
        report = MagicMock()
        monkeypatch.setattr(script_launcher_panel, "report_error", report)
        host.eval_file.side_effect = RuntimeError("syntax error on line 3")

        assert not loaded_panel.run_script(1)

        assert report.call_args[0][1] == "Error running script: syntax error on line 3"

    def test_run_selected_without_selection(self, loaded_panel, host):
        loaded_panel.script_list.setCurrentItem(None)
        loaded_panel.run_selected()
        host.eval_file.assert_not_called()


class TestGeometry:

    def test_close_saves_bounds(self, make_panel, host):
        panel = make_panel()
        panel.closeEvent(QCloseEvent())
        geometry = panel.geometry()
        expected = format_bounds(geometry.x(), geometry.y(), geometry.width(), geometry.height())
        assert host.settings.get_setting(SETTINGS_SECTION, SETTING_PANEL_BOUNDS) == expected

    def test_restores_bounds(self, make_panel, host):
        host.settings.save_setting(SETTINGS_SECTION, SETTING_PANEL_BOUNDS, "10,20,410,520")
        panel = make_panel()
        assert (panel.width(), panel.height()) == (400, 500)

    def test_docked_panel_does_not_save_bounds(self, host, qtbot):
        from PyQt5.QtWidgets import QWidget
        parent = QWidget()
        qtbot.addWidget(parent)
        panel = ScriptLauncherPanel(host, parent)
        panel.closeEvent(QCloseEvent())
        assert not host.settings.have_setting(SETTINGS_SECTION, SETTING_PANEL_BOUNDS)
