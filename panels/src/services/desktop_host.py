"""
Compositing Panels - Desktop Host

Host implementation used when the panels run as a standalone application:

- Project model from models.composition
- Undo groups recorded as snapshots in a HistoryManager
- Settings from SettingsStore
- Scripts run in-process (.py) or through the OS default handler
"""

import logging
import runpy
from pathlib import Path
from typing import Optional

from PyQt5.QtCore import QUrl
from PyQt5.QtGui import QDesktopServices

from models.composition import Project
from models.host import Host
from services.settings_store import SettingsStore
from utils.history_manager import HistoryManager
from constants import MAX_HISTORY_ENTRIES, INITIAL_HISTORY_DESCRIPTION

logger = logging.getLogger(__name__)


class DesktopHost(Host):
    """Standalone host around an in-memory Project

    Undo model: the project's initial state is history entry 0. Each
    outermost begin/end_undo_group pair appends the post-operation state, so
    undo() steps back to the state before that group.
    """

    def __init__(self, project: Optional[Project] = None, settings: Optional[SettingsStore] = None,
                 max_history: int = MAX_HISTORY_ENTRIES):
        self.project = project if project is not None else Project()
        self._settings = settings if settings is not None else SettingsStore()
        self.history_manager = HistoryManager(max_history=max_history)
        self._undo_depth = 0
        self._undo_name = ""
        self.reset_history()

    # ========================================
    # Host API
    # ========================================

    @property
    def active_item(self):
        return self.project.active_item

    @property
    def settings(self) -> SettingsStore:
        return self._settings

    def begin_undo_group(self, name: str):
        if self._undo_depth == 0:
            self._undo_name = name
        self._undo_depth += 1

    def end_undo_group(self):
        if self._undo_depth == 0:
            logger.warning("end_undo_group() without matching begin_undo_group()")
            return
        self._undo_depth -= 1
        if self._undo_depth == 0:
            self.history_manager.save_state(self.project.get_snapshot(), self._undo_name)
            self._undo_name = ""

    def eval_file(self, path):
        """Run a script file

        Raises:
            FileNotFoundError: If the file does not exist
            RuntimeError: If the OS could not open the file
            Exception: Whatever a Python script raises
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"No such script: {path}")

        if path.suffix == '.py':
            logger.info(f"Running {path}")
            runpy.run_path(str(path), init_globals={'host': self}, run_name='__main__')
            return

        logger.info(f"Opening {path} with the system handler")
        if not QDesktopServices.openUrl(QUrl.fromLocalFile(str(path))):
            raise RuntimeError(f"No application available to run {path.name}")

    # ========================================
    # Undo / redo
    # ========================================

    def reset_history(self, description: str = INITIAL_HISTORY_DESCRIPTION):
        """Forget history and record the current project as the base state"""
        self.history_manager.clear()
        self.history_manager.save_state(self.project.get_snapshot(), description)

    def set_project(self, project: Project):
        self.project = project
        self.reset_history()

    def undo(self) -> bool:
        state = self.history_manager.undo()
        if state is None:
            return False
        self._restore(state)
        return True

    def redo(self) -> bool:
        state = self.history_manager.redo()
        if state is None:
            return False
        self._restore(state)
        return True

    def _restore(self, state):
        """Apply a history state but keep the active item and layer selection"""
        active_index = self.project.active_index
        selections = [[layer.selected for layer in item.layers] for item in self.project.items]

        self.project.set_snapshot(state)

        if active_index is None or active_index < len(self.project.items):
            self.project.active_index = active_index
        for item, selected in zip(self.project.items, selections):
            for layer, flag in zip(item.layers, selected):
                layer.selected = flag
