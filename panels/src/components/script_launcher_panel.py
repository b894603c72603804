# PyQt5 imports
from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QListWidget,
    QListWidgetItem, QPushButton, QFileDialog
)
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QIcon

# Standard library imports
import logging
from pathlib import Path

from services.script_catalog import ScriptCatalog
from utils.logger import report_error, show_warning
from utils.path_resolver import get_launcher_script_path
from constants import (
    LAUNCHER_TITLE, LAUNCHER_FOLDER_DIALOG_CAPTION, LAUNCHER_NO_FOLDER,
    LAUNCHER_MISSING_SCRIPT, LAUNCHER_RUN_ERROR_PREFIX, LAUNCHER_LIST_MIN_HEIGHT,
    SETTINGS_SECTION, SETTING_SCRIPT_PATH, SETTING_PANEL_BOUNDS
)

logger = logging.getLogger(__name__)


def parse_bounds(text):
    """'left,top,right,bottom' -> (x, y, w, h), or None if malformed"""
    try:
        left, top, right, bottom = (int(part) for part in text.split(","))
    except ValueError:
        return None
    if right <= left or bottom <= top:
        return None
    return left, top, right - left, bottom - top


def format_bounds(x, y, width, height):
    return f"{x},{y},{x + width},{y + height}"


class ScriptLauncherPanel(QWidget):
    """Searchable list of scripts under a chosen folder; double-click runs one"""

    # Emitted with the script path after it ran without raising
    script_launched = pyqtSignal(object)

    def __init__(self, host, parent=None):
        super().__init__(parent)
        self.host = host
        self.settings = host.settings
        self.show_paths = False
        self.catalog = ScriptCatalog(exclude=get_launcher_script_path())

        self.setWindowTitle(LAUNCHER_TITLE)
        self._setup_ui()
        self._restore_settings()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(4)

        # Search row
        search_layout = QHBoxLayout()
        search_layout.setSpacing(4)
        search_label = QLabel("Search:")
        search_label.setMinimumWidth(40)
        search_layout.addWidget(search_label)
        self.search_field = QLineEdit()
        self.search_field.textChanged.connect(self.filter_scripts_list)
        search_layout.addWidget(self.search_field, 1)
        layout.addLayout(search_layout)

        self.script_list = QListWidget()
        self.script_list.setMinimumHeight(LAUNCHER_LIST_MIN_HEIGHT)
        self.script_list.itemDoubleClicked.connect(self.run_item)
        layout.addWidget(self.script_list, 1)

        self.refresh_button = QPushButton("Refresh Scripts")
        self.refresh_button.clicked.connect(self.build_scripts_list)
        layout.addWidget(self.refresh_button)

        # Folder row
        path_layout = QHBoxLayout()
        path_layout.setSpacing(8)
        self.path_field = QLineEdit(LAUNCHER_NO_FOLDER)
        self.path_field.setEnabled(False)
        path_layout.addWidget(self.path_field, 1)
        self.folder_button = QPushButton("Choose a Folder")
        self.folder_button.setMinimumWidth(60)
        self.folder_button.clicked.connect(self.choose_folder)
        path_layout.addWidget(self.folder_button)
        layout.addLayout(path_layout)

    def _restore_settings(self):
        if self.isWindow() and self.settings.have_setting(SETTINGS_SECTION, SETTING_PANEL_BOUNDS):
            geometry = parse_bounds(self.settings.get_setting(SETTINGS_SECTION, SETTING_PANEL_BOUNDS))
            if geometry:
                self.setGeometry(*geometry)

        if self.settings.have_setting(SETTINGS_SECTION, SETTING_SCRIPT_PATH):
            self.set_script_folder(self.settings.get_setting(SETTINGS_SECTION, SETTING_SCRIPT_PATH))

    # ========================================
    # Folder
    # ========================================

    @property
    def script_folder(self):
        return self.catalog.root

    def set_script_folder(self, folder):
        """Point the list at `folder` and rebuild it"""
        self.catalog.root = Path(folder)
        self.path_field.setText(str(self.catalog.root))
        self.build_scripts_list()

    def choose_folder(self):
        start = str(self.script_folder) if self.script_folder else ""
        folder = QFileDialog.getExistingDirectory(self, LAUNCHER_FOLDER_DIALOG_CAPTION, start)
        if not folder:
            return
        self.settings.save_setting(SETTINGS_SECTION, SETTING_SCRIPT_PATH, folder)
        self.set_script_folder(folder)

    # ========================================
    # List
    # ========================================

    def build_scripts_list(self):
        """Rescan the folder and show the scripts matching the current search"""
        self.script_list.clear()
        if self.script_folder is None:
            return
        self.catalog.refresh(self.show_paths)
        self._show_entries(self.catalog.filtered(self.search_field.text()))

    def filter_scripts_list(self, search_text):
        """Show scripts whose name contains `search_text`; empty rescans"""
        if not search_text:
            self.build_scripts_list()
            return
        self.script_list.clear()
        if self.script_folder is None or not len(self.catalog):
            return
        self._show_entries(self.catalog.filtered(search_text))

    def _show_entries(self, entries):
        for entry in entries:
            item = QListWidgetItem(entry.display_name)
            item.setData(Qt.UserRole, entry.index)
            item.setToolTip(str(entry.path))
            if entry.icon is not None:
                item.setIcon(QIcon(str(entry.icon)))
            self.script_list.addItem(item)

    def visible_names(self):
        return [self.script_list.item(i).text() for i in range(self.script_list.count())]

    # ========================================
    # Launch
    # ========================================

    def run_item(self, item):
        if item is None:
            return
        self.run_script(item.data(Qt.UserRole))

    def run_selected(self):
        self.run_item(self.script_list.currentItem())

    def run_script(self, index):
        """Run the script at `index` in the full list

        Returns:
            True if the script ran, False if it was missing or raised
        """
        path = self.catalog.path_for(index)
        if not path.is_file():
            show_warning(LAUNCHER_MISSING_SCRIPT, LAUNCHER_TITLE, parent=self)
            return False
        try:
            self.host.eval_file(path)
        except Exception as e:
            report_error(e, f"{LAUNCHER_RUN_ERROR_PREFIX}{e}", LAUNCHER_TITLE, parent=self)
            return False
        logger.info(f"Launched {path}")
        self.script_launched.emit(path)
        return True

    # ========================================
    # Geometry persistence
    # ========================================

    def closeEvent(self, event):
        if self.isWindow():
            geometry = self.geometry()
            self.settings.save_setting(
                SETTINGS_SECTION, SETTING_PANEL_BOUNDS,
                format_bounds(geometry.x(), geometry.y(), geometry.width(), geometry.height())
            )
        super().closeEvent(event)
