"""Path resolver for per-user configuration and the launcher module.

Locates the per-user configuration directory that holds persisted panel
settings.
"""

import os
from pathlib import Path

from constants import CONFIG_DIR_NAME, SETTINGS_FILE_NAME


def get_config_dir() -> Path:
    """Per-user configuration directory (~/.comppanels)"""
    return Path(os.path.expanduser("~")) / CONFIG_DIR_NAME


def get_settings_path() -> Path:
    """JSON file backing the panel settings"""
    return get_config_dir() / SETTINGS_FILE_NAME


def get_launcher_script_path() -> Path:
    """Path of the launcher module itself, excluded from script listings"""
    return Path(__file__).resolve().parent.parent / "components" / "script_launcher_panel.py"
