"""
pytest-qt tests for the standalone project view (comp picker + layer list).
"""
import pytest

from components.project_view import ProjectView, NO_COMPOSITION_LABEL
from conftest import make_comp, make_layer


@pytest.fixture
def view_and_comp(host_factory, qtbot):
    comp = make_comp(make_layer("A"), make_layer("B", selected=True), make_layer("C"), name="Main")
    host = host_factory(comp, make_comp(name="Other"))
    view = ProjectView(host)
    qtbot.addWidget(view)
    return view, host, comp


class TestProjectView:

    def test_lists_compositions(self, view_and_comp):
        view, _, _ = view_and_comp
        names = [view.comp_combo.itemText(i) for i in range(view.comp_combo.count())]
        assert names == [NO_COMPOSITION_LABEL, "Main", "Other"]
        assert view.comp_combo.currentText() == "Main"

    def test_reflects_model_selection(self, view_and_comp):
        view, _, _ = view_and_comp
        selected = [item.text() for item in view.layer_list.selectedItems()]
        assert selected == ["B"]

    def test_selecting_rows_updates_model(self, view_and_comp):
        view, _, comp = view_and_comp
        view.layer_list.clearSelection()
        view.layer_list.item(0).setSelected(True)
        view.layer_list.item(2).setSelected(True)
        assert [layer.name for layer in comp.selected_layers] == ["A", "C"]

    def test_choosing_none_clears_active_item(self, view_and_comp, qtbot):
        view, host, _ = view_and_comp
        with qtbot.waitSignal(view.selection_changed, timeout=1000):
            view.comp_combo.setCurrentIndex(0)
        assert host.active_item is None
        assert view.layer_list.count() == 0

    def test_switching_composition(self, view_and_comp):
        view, host, _ = view_and_comp
        view.comp_combo.setCurrentIndex(2)
        assert host.active_item.name == "Other"
