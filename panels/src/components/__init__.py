"""UI components for the compositing panels"""

from .crop_panel import CropPanel
from .project_view import ProjectView
from .script_launcher_panel import ScriptLauncherPanel

__all__ = [
    'CropPanel',
    'ProjectView',
    'ScriptLauncherPanel',
]
