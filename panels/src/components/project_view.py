# PyQt5 imports
from PyQt5.QtWidgets import QWidget, QVBoxLayout, QLabel, QComboBox, QListWidget, QAbstractItemView
from PyQt5.QtCore import pyqtSignal

NO_COMPOSITION_LABEL = "(none)"


class ProjectView(QWidget):
	"""Active composition picker plus a multi-select layer list

	Stands in for the host's project and timeline panels when running
	standalone: picking a comp sets the project's active item, selecting
	rows sets the layers' selection flags.
	"""

	selection_changed = pyqtSignal()

	def __init__(self, host, parent=None):
		super().__init__(parent)
		self.host = host
		self._updating = False
		self._setup_ui()
		self.refresh()

	def _setup_ui(self):
		layout = QVBoxLayout(self)
		layout.setContentsMargins(6, 6, 6, 6)

		layout.addWidget(QLabel("Composition:"))
		self.comp_combo = QComboBox()
		self.comp_combo.currentIndexChanged.connect(self._on_comp_changed)
		layout.addWidget(self.comp_combo)

		layout.addWidget(QLabel("Layers:"))
		self.layer_list = QListWidget()
		self.layer_list.setSelectionMode(QAbstractItemView.ExtendedSelection)
		self.layer_list.itemSelectionChanged.connect(self._on_layer_selection_changed)
		layout.addWidget(self.layer_list, 1)

	def refresh(self):
		"""Rebuild both widgets from the model"""
		self._updating = True
		try:
			project = self.host.project
			self.comp_combo.clear()
			self.comp_combo.addItem(NO_COMPOSITION_LABEL)
			for comp in project.items:
				self.comp_combo.addItem(comp.name)
			active = project.active_index
			self.comp_combo.setCurrentIndex(0 if active is None else active + 1)
			self._rebuild_layer_list()
		finally:
			self._updating = False

	def _rebuild_layer_list(self):
		self.layer_list.clear()
		comp = self.host.active_composition()
		if comp is None:
			return
		for layer in comp.layers:
			self.layer_list.addItem(layer.name)
			self.layer_list.item(self.layer_list.count() - 1).setSelected(layer.selected)

	def _on_comp_changed(self, index):
		if self._updating:
			return
		project = self.host.project
		project.active_index = None if index <= 0 else index - 1
		self._updating = True
		try:
			self._rebuild_layer_list()
		finally:
			self._updating = False
		self.selection_changed.emit()

	def _on_layer_selection_changed(self):
		if self._updating:
			return
		comp = self.host.active_composition()
		if comp is None:
			return
		rows = {self.layer_list.row(item) for item in self.layer_list.selectedItems()}
		comp.select_layers([layer for i, layer in enumerate(comp.layers) if i in rows])
		self.selection_changed.emit()
