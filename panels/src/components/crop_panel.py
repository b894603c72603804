# PyQt5 imports
from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame, QSizePolicy
)
from PyQt5.QtCore import QTimer, pyqtSignal

from services.crop_operations import crop_comp_to_layers, CropResult
from constants import (
    CROP_PANEL_TITLE, CROP_BUTTON_LABEL, STATUS_READY, INFO_PLACEHOLDER,
    PANEL_REFRESH_INTERVAL_MS, CROP_PANEL_MIN_WIDTH, CROP_PANEL_MIN_HEIGHT
)


class CropPanel(QWidget):
    """Panel with a single crop button and active comp / resolution / status rows

    The info rows are refreshed by a timer while the panel is visible, so
    they follow whatever composition is active in the host.
    """

    # Emitted after every crop attempt
    crop_finished = pyqtSignal(object)

    def __init__(self, host, parent=None):
        super().__init__(parent)
        self.host = host
        self.setWindowTitle(CROP_PANEL_TITLE)
        self.setMinimumSize(CROP_PANEL_MIN_WIDTH, CROP_PANEL_MIN_HEIGHT)

        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(PANEL_REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self.update_panel_info)

        self._setup_ui()
        self.update_panel_info()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(10)

        self.crop_button = QPushButton(CROP_BUTTON_LABEL)
        self.crop_button.setObjectName("cropButton")
        self.crop_button.setFixedHeight(30)
        self.crop_button.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self.crop_button.clicked.connect(self.on_crop_clicked)
        layout.addWidget(self.crop_button)

        divider = QFrame()
        divider.setFrameShape(QFrame.HLine)
        divider.setFrameShadow(QFrame.Sunken)
        layout.addWidget(divider)

        self.comp_name_label = self._add_info_row(layout, "Active Comp:", INFO_PLACEHOLDER)
        self.resolution_label = self._add_info_row(layout, "Resolution:", INFO_PLACEHOLDER)
        self.status_label = self._add_info_row(layout, "Status:", STATUS_READY)

        layout.addStretch()

    def _add_info_row(self, layout, caption, initial_text):
        row = QHBoxLayout()
        row.addWidget(QLabel(caption))
        value = QLabel(initial_text)
        value.setWordWrap(True)
        row.addWidget(value, 1)
        layout.addLayout(row)
        return value

    # ========================================
    # Info rows
    # ========================================

    def update_panel_info(self):
        """Show the active composition's name and size (read-only)"""
        comp = self.host.active_composition()
        if comp is not None:
            self.resolution_label.setText(f"{comp.width} x {comp.height}")
            self.comp_name_label.setText(comp.name)
        else:
            self.resolution_label.setText(INFO_PLACEHOLDER)
            self.comp_name_label.setText(INFO_PLACEHOLDER)

    def set_status(self, message):
        self.status_label.setText(message)

    # ========================================
    # Actions
    # ========================================

    def on_crop_clicked(self):
        self.crop()

    def crop(self) -> CropResult:
        """Run the crop against the host and report the outcome"""
        result = crop_comp_to_layers(self.host)
        self.set_status(result.message)
        self.update_panel_info()
        self.crop_finished.emit(result)
        return result

    # ========================================
    # Timer lifetime
    # ========================================

    def showEvent(self, event):
        super().showEvent(event)
        self.update_panel_info()
        self.refresh_timer.start()

    def hideEvent(self, event):
        self.refresh_timer.stop()
        super().hideEvent(event)

    def closeEvent(self, event):
        self.refresh_timer.stop()
        super().closeEvent(event)
