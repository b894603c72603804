"""Compositing Panels - application entry point.

Runs the crop and script launcher panels against an in-memory project.

Usage:
    python panels/src/main.py [PROJECT_JSON] [--panel crop|launcher|all] [-v]

Examples:
    python panels/src/main.py examples/sample_project.json
    python panels/src/main.py --panel launcher
"""

import sys
import os
import argparse
import logging

# Add panels/src to path so imports work when running directly
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5 import QtWidgets
from PyQt5.QtWidgets import QMainWindow, QDockWidget, QFileDialog, QAction
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPalette, QColor, QKeySequence

from models.composition import Project
from services.desktop_host import DesktopHost
from components.crop_panel import CropPanel
from components.project_view import ProjectView
from components.script_launcher_panel import ScriptLauncherPanel
from utils.logger import loggerRaise, set_main_window
from version import get_version

logger = logging.getLogger(__name__)

APP_TITLE = "Compositing Panels"


class PanelsWindow(QMainWindow):
    """Main window: project view in the centre, panels docked on the right"""

    def __init__(self, host, panels=("crop", "launcher")):
        super().__init__()
        self.host = host
        self.current_file_path = None
        self.setWindowTitle(f"{APP_TITLE} {get_version()}")
        self.resize(900, 600)

        set_main_window(self)

        self.project_view = ProjectView(host, self)
        self.setCentralWidget(self.project_view)

        self.crop_panel = None
        self.launcher_panel = None
        if "crop" in panels:
            dock = QDockWidget("Crop Comp to Layer(s)", self)
            self.crop_panel = CropPanel(host, dock)
            self.crop_panel.crop_finished.connect(lambda result: self.project_view.refresh())
            dock.setWidget(self.crop_panel)
            self.addDockWidget(Qt.RightDockWidgetArea, dock)
        if "launcher" in panels:
            dock = QDockWidget("Tiny Script Launcher", self)
            self.launcher_panel = ScriptLauncherPanel(host, dock)
            dock.setWidget(self.launcher_panel)
            self.addDockWidget(Qt.RightDockWidgetArea, dock)

        self._create_menu_bar()
        self.host.history_manager.add_listener(self._on_history_changed)
        self._on_history_changed(self.host.history_manager.can_undo(), self.host.history_manager.can_redo())

    def _create_menu_bar(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        open_action = QAction("&Open Project...", self)
        open_action.setShortcut(QKeySequence.Open)
        open_action.triggered.connect(self.open_project)
        file_menu.addAction(open_action)

        save_action = QAction("&Save Project As...", self)
        save_action.setShortcut(QKeySequence.SaveAs)
        save_action.triggered.connect(self.save_project)
        file_menu.addAction(save_action)

        file_menu.addSeparator()
        exit_action = QAction("E&xit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menubar.addMenu("&Edit")
        self.undo_action = QAction("&Undo", self)
        self.undo_action.setShortcut(QKeySequence.Undo)
        self.undo_action.triggered.connect(self.undo)
        edit_menu.addAction(self.undo_action)

        self.redo_action = QAction("&Redo", self)
        self.redo_action.setShortcut(QKeySequence.Redo)
        self.redo_action.triggered.connect(self.redo)
        edit_menu.addAction(self.redo_action)

    # ============= History =============

    def _on_history_changed(self, can_undo, can_redo):
        if hasattr(self, 'undo_action'):
            undo_desc = self.host.history_manager.get_undo_description()
            self.undo_action.setEnabled(can_undo)
            self.undo_action.setText(f"&Undo {undo_desc}" if can_undo else "&Undo")
        if hasattr(self, 'redo_action'):
            redo_desc = self.host.history_manager.get_redo_description()
            self.redo_action.setEnabled(can_redo)
            self.redo_action.setText(f"&Redo {redo_desc}" if can_redo else "&Redo")

    def _refresh_views(self):
        self.project_view.refresh()
        if self.crop_panel is not None:
            self.crop_panel.update_panel_info()

    def undo(self):
        if self.host.undo():
            self._refresh_views()

    def redo(self):
        if self.host.redo():
            self._refresh_views()

    # ============= Files =============

    def open_project(self):
        filename, _ = QFileDialog.getOpenFileName(self, "Open Project", "", "Project Files (*.json);;All Files (*)")
        if not filename:
            return
        try:
            self.load_project(filename)
        except Exception as e:
            loggerRaise(e, "Failed to open project")

    def load_project(self, filename):
        self.host.set_project(Project.load(filename))
        self.current_file_path = filename
        self._refresh_views()

    def save_project(self):
        filename, _ = QFileDialog.getSaveFileName(self, "Save Project", "", "Project Files (*.json);;All Files (*)")
        if not filename:
            return
        if not filename.lower().endswith('.json'):
            filename += '.json'
        try:
            self.host.project.save(filename)
            self.current_file_path = filename
        except Exception as e:
            loggerRaise(e, "Failed to save project")


def apply_dark_palette(app):
    """Fusion style with a dark palette"""
    app.setStyle("Fusion")

    dark_palette = QPalette()
    dark_palette.setColor(QPalette.Window, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.WindowText, Qt.white)
    dark_palette.setColor(QPalette.Base, QColor(25, 25, 25))
    dark_palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ToolTipBase, Qt.white)
    dark_palette.setColor(QPalette.ToolTipText, Qt.white)
    dark_palette.setColor(QPalette.Text, Qt.white)
    dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ButtonText, Qt.white)
    dark_palette.setColor(QPalette.BrightText, Qt.red)
    dark_palette.setColor(QPalette.Link, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.HighlightedText, Qt.black)

    app.setPalette(dark_palette)


def build_parser():
    parser = argparse.ArgumentParser(
        description='Crop-to-layers and script launcher panels for a compositing project.',
    )
    parser.add_argument(
        'project',
        nargs='?',
        help='Project JSON file to open (default: empty project).',
    )
    parser.add_argument(
        '-p', '--panel',
        choices=['crop', 'launcher', 'all'],
        default='all',
        help='Which panel(s) to show (default: all).',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    return parser


def main(argv=None):
    """Main entry point for the compositing panels"""
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    app = QtWidgets.QApplication(sys.argv[:1])
    apply_dark_palette(app)

    project = Project()
    if args.project:
        if not os.path.isfile(args.project):
            print(f"Error: Project file not found: {args.project}")
            return 1
        project = Project.load(args.project)

    host = DesktopHost(project)

    if args.panel == 'launcher':
        # Floating launcher remembers its own geometry
        window = ScriptLauncherPanel(host)
    else:
        panels = ("crop", "launcher") if args.panel == 'all' else ("crop",)
        window = PanelsWindow(host, panels)
        window.current_file_path = args.project
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
