"""
Compositing Panels - Constants and Configuration

This module contains all constant values used throughout the application:
- Settings namespace and keys
- Status messages shown by the panels
- Script discovery rules
- Panel sizes and timer intervals
"""

# ======================================================================
# SETTINGS
# ======================================================================
# Section/key names match what the host stores, so existing settings carry over

SETTINGS_SECTION = "AE_ScriptLauncher"
SETTING_SCRIPT_PATH = "scriptPath"
SETTING_PANEL_BOUNDS = "panelBounds"

CONFIG_DIR_NAME = ".comppanels"
SETTINGS_FILE_NAME = "settings.json"

# ======================================================================
# CROP PANEL
# ======================================================================

CROP_PANEL_TITLE = "Crop Comp to Layer(s)"
CROP_BUTTON_LABEL = "Crop to Selected Layer(s)"
CROP_UNDO_NAME = "Crop Composition to Layer(s)"

STATUS_READY = "Ready"
STATUS_NO_COMPOSITION = "Please select a composition."
STATUS_NO_LAYERS = "Please select at least one layer."
STATUS_INVALID_GEOMETRY = "Error: selected layers have invalid geometry."
STATUS_EMPTY_BOUNDS = "Error: selected layers have no visible area."
STATUS_ERROR_PREFIX = "Error: "

INFO_PLACEHOLDER = "---"

# Refresh interval for the active comp / resolution rows (milliseconds)
PANEL_REFRESH_INTERVAL_MS = 1000

CROP_PANEL_MIN_WIDTH = 250
CROP_PANEL_MIN_HEIGHT = 150

# ======================================================================
# SCRIPT LAUNCHER
# ======================================================================

LAUNCHER_TITLE = "Tiny Script Launcher"
LAUNCHER_FOLDER_DIALOG_CAPTION = "Select After Effects Scripts folder"
LAUNCHER_NO_FOLDER = "No folder selected"
LAUNCHER_MISSING_SCRIPT = "Cannot locate the selected script."
LAUNCHER_RUN_ERROR_PREFIX = "Error running script: "

# Matched case-sensitively, the same way the host lists them
SCRIPT_EXTENSIONS = ('.js', '.jsx', '.jsxbin', '.py')
SCRIPT_ICON_EXTENSION = '.png'

# Folders named like "(Disabled)" are never scanned
EXCLUDED_FOLDER_PATTERN = r'^\(.*\)$'

LAUNCHER_LIST_MIN_HEIGHT = 150

# ======================================================================
# HISTORY
# ======================================================================

MAX_HISTORY_ENTRIES = 50
INITIAL_HISTORY_DESCRIPTION = "Open Project"

# ======================================================================
# COMPOSITION DEFAULTS
# ======================================================================

DEFAULT_COMP_NAME = "Comp 1"
DEFAULT_COMP_WIDTH = 1920
DEFAULT_COMP_HEIGHT = 1080
DEFAULT_COMP_DURATION = 10.0
DEFAULT_FRAME_RATE = 30.0
