"""
Compositing Panels - Data Models

models.host describes what the panels need from a compositing host.
models.composition is the in-memory implementation of it.
models.transform holds the small geometry value types.
"""

from .transform import Vec2, Rect, Bounds
from .host import Host, CompositionItem, LayerItem, AnimatableProperty, Keyframe, SettingsBackend
from .composition import Project, Composition, Layer, Property

__all__ = [
    'Vec2', 'Rect', 'Bounds',
    'Host', 'CompositionItem', 'LayerItem', 'AnimatableProperty', 'Keyframe', 'SettingsBackend',
    'Project', 'Composition', 'Layer', 'Property',
]
