"""
pytest-qt tests for the crop panel.

Covers:
- Initial labels with and without an active composition
- Button click running the crop and updating status / resolution
- Precondition messages shown in the status row
- Refresh timer running only while the panel is visible
- crop_finished signal
"""
import pytest
from PyQt5.QtCore import Qt

from components.crop_panel import CropPanel
from constants import (
    STATUS_READY, INFO_PLACEHOLDER, STATUS_NO_LAYERS, STATUS_NO_COMPOSITION,
    PANEL_REFRESH_INTERVAL_MS
)
from conftest import make_comp, make_layer


@pytest.fixture
def panel(host, qtbot):
    widget = CropPanel(host)
    qtbot.addWidget(widget)
    return widget


class TestCropPanelInfo:

    def test_initial_labels(self, panel):
        assert panel.status_label.text() == STATUS_READY
        assert panel.comp_name_label.text() == "Comp 1"
        assert panel.resolution_label.text() == "1920 x 1080"

    def test_placeholders_without_composition(self, host_factory, qtbot):
        widget = CropPanel(host_factory())
        qtbot.addWidget(widget)
        assert widget.comp_name_label.text() == INFO_PLACEHOLDER
        assert widget.resolution_label.text() == INFO_PLACEHOLDER

    def test_update_follows_active_item(self, panel, host):
        host.project.set_active(None)
        panel.update_panel_info()
        assert panel.resolution_label.text() == INFO_PLACEHOLDER

    def test_minimum_size(self, panel):
        assert panel.minimumWidth() == 250
        assert panel.minimumHeight() == 150


class TestCropPanelActions:

    def test_click_crops(self, panel, qtbot):
        qtbot.mouseClick(panel.crop_button, Qt.LeftButton)
        assert panel.status_label.text() == "Cropped to 1 layer"
        assert panel.resolution_label.text() == "100 x 50"

    def test_no_selection_message(self, host_factory, qtbot):
        comp = make_comp(make_layer("A"))
        widget = CropPanel(host_factory(comp))
        qtbot.addWidget(widget)

        result = widget.crop()

        assert not result.success
        assert widget.status_label.text() == STATUS_NO_LAYERS
        assert widget.resolution_label.text() == "1920 x 1080"

    def test_no_composition_message(self, host_factory, qtbot):
        widget = CropPanel(host_factory())
        qtbot.addWidget(widget)
        widget.crop()
        assert widget.status_label.text() == STATUS_NO_COMPOSITION

    def test_crop_finished_signal(self, panel, qtbot):
        with qtbot.waitSignal(panel.crop_finished, timeout=1000) as blocker:
            panel.crop()
        assert blocker.args[0].success
        assert (blocker.args[0].width, blocker.args[0].height) == (100, 50)


class TestRefreshTimer:

    def test_interval(self, panel):
        assert panel.refresh_timer.interval() == PANEL_REFRESH_INTERVAL_MS

    def test_timer_runs_while_shown(self, panel, qtbot):
        assert not panel.refresh_timer.isActive()
        panel.show()
        assert panel.refresh_timer.isActive()
        panel.hide()
        assert not panel.refresh_timer.isActive()

    def test_timer_refresh_picks_up_changes(self, panel, host, qtbot):
        panel.show()
        host.active_item.width = 640
        qtbot.waitUntil(lambda: panel.resolution_label.text() == "640 x 1080",
                        timeout=PANEL_REFRESH_INTERVAL_MS * 3)
