"""Global logging and error handling utilities"""
import sys
import logging
import traceback
from PyQt5.QtWidgets import QMessageBox

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

logger = logging.getLogger(__name__)

_main_window = None

def set_main_window(window):
    """Set the main window reference for showing popups"""
    global _main_window
    _main_window = window

def _show_popup(message: str, title: str, parent=None):
    window = parent if parent is not None else _main_window
    if window is not None:
        QMessageBox.critical(window, title, message)
    else:
        logger.error(f"ERROR POPUP (no window): {title} - {message}")

def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Handle exceptions with optional popup in release mode

    Args:
        e: The exception to handle
        user_message: User-friendly message to show in popup (optional)
        title: Title for the popup dialog

    In DEBUG_MODE:
        - Just raises the exception (shows full traceback)

    In RELEASE_MODE:
        - Logs the full traceback
        - Shows popup with user message or exception string
        - Then raises the exception
    """
    if DEBUG_MODE:
        raise e

    logger.error(f"{user_message or title}: {traceback.format_exc()}")
    _show_popup(user_message if user_message else str(e), title)
    raise e

def report_error(e: Exception, user_message: str = None, title: str = "Error", parent=None):
    """Log an exception and tell the user, without re-raising

    Used where a failure belongs to something the panel ran (a user script)
    rather than to the panel itself.

    Args:
        e: The exception to report
        user_message: Text for the popup; defaults to str(e)
        title: Title for the popup dialog
        parent: Widget to parent the popup to (defaults to the main window)
    """
    logger.error(f"{user_message or title}", exc_info=e)
    _show_popup(user_message if user_message else str(e), title, parent)

def show_warning(message: str, title: str = "Warning", parent=None):
    """Non-error notice shown as a popup and logged"""
    logger.warning(f"{title}: {message}")
    window = parent if parent is not None else _main_window
    if window is not None:
        QMessageBox.warning(window, title, message)
