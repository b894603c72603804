"""
Compositing Panels - In-memory Composition Model

Concrete implementation of the host interface (models.host) that holds the
whole project in plain Python objects:

- Property: static value or sorted keyframes, linear evaluation between keys
- Layer: name, position, anchor point, source rect, selection flag
- Composition: size, time, ordered layers
- Project: compositions plus the active item

Every class round-trips through to_dict/from_dict, which is also what the
undo history snapshots.

Usage:
    comp = Composition("Main", 1920, 1080)
    layer = comp.add_layer(Layer("Logo", position=(960, 540),
                                 source_rect=Rect(-50, -50, 100, 100)))
    layer.position.set_value_at_time(0.0, (100, 100))
    project = Project([comp])
    snapshot = project.get_snapshot()
"""

import bisect
import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from models.host import AnimatableProperty, CompositionItem, Keyframe, LayerItem, Value
from models.transform import Rect
from constants import (
    DEFAULT_COMP_NAME, DEFAULT_COMP_WIDTH, DEFAULT_COMP_HEIGHT,
    DEFAULT_COMP_DURATION, DEFAULT_FRAME_RATE
)


def _coerce_value(value: Sequence[float]) -> Value:
    """Convert a 2 or 3 component sequence to a tuple of floats

    Raises:
        ValueError: If the component count is not 2 or 3
        TypeError: If value is not a sequence of numbers
    """
    try:
        components = tuple(float(v) for v in value)
    except TypeError as e:
        raise TypeError(f"Expected a sequence of numbers, got {value!r}") from e
    if len(components) not in (2, 3):
        raise ValueError(f"Expected 2 or 3 components, got {len(components)}")
    return components


class Property(AnimatableProperty):
    """Animatable 2D/3D property

    While the property has no keyframes, `value` is used everywhere. Once a
    keyframe exists the static value is ignored and evaluation interpolates
    linearly between keys, holding the first/last key outside their range.
    """

    def __init__(self, value: Sequence[float] = (0.0, 0.0), keyframes: Iterable = None):
        self._value = _coerce_value(value)
        self._keys: List[Keyframe] = []
        for key in keyframes or []:
            if isinstance(key, Keyframe):
                self.set_value_at_time(key.time, key.value)
            else:
                time, key_value = key
                self.set_value_at_time(time, key_value)

    # ========================================
    # Host property API
    # ========================================

    @property
    def num_keys(self) -> int:
        return len(self._keys)

    def key_time(self, index: int) -> float:
        return self._keys[index].time

    def key_value(self, index: int) -> Value:
        return self._keys[index].value

    @property
    def value(self) -> Value:
        """Static value (first key's value when animated)"""
        if self._keys:
            return self._keys[0].value
        return self._value

    def value_at_time(self, time: float) -> Value:
        if not self._keys:
            return self._value

        times = [key.time for key in self._keys]
        if time <= times[0]:
            return self._keys[0].value
        if time >= times[-1]:
            return self._keys[-1].value

        i = bisect.bisect_right(times, time)
        before, after = self._keys[i - 1], self._keys[i]
        t = (time - before.time) / (after.time - before.time)
        return tuple(a + (b - a) * t for a, b in zip(before.value, after.value))

    def set_value(self, value: Sequence[float]):
        if self._keys:
            raise ValueError("Property is animated; use set_value_at_time()")
        self._value = _coerce_value(value)

    def set_value_at_time(self, time: float, value: Sequence[float]):
        key = Keyframe(float(time), _coerce_value(value))
        times = [k.time for k in self._keys]
        i = bisect.bisect_left(times, key.time)
        if i < len(self._keys) and self._keys[i].time == key.time:
            self._keys[i] = key
        else:
            self._keys.insert(i, key)

    def remove_keys(self):
        """Drop all keyframes, keeping the current first key as static value"""
        if self._keys:
            self._value = self._keys[0].value
        self._keys = []

    # ========================================
    # Serialization
    # ========================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            'value': list(self._value),
            'keyframes': [{'time': k.time, 'value': list(k.value)} for k in self._keys],
        }

    @classmethod
    def from_dict(cls, data) -> 'Property':
        # A bare list is shorthand for a static value
        if isinstance(data, (list, tuple)):
            return cls(data)
        keys = [(k['time'], k['value']) for k in data.get('keyframes', [])]
        return cls(data.get('value', (0.0, 0.0)), keys)

    def __repr__(self):
        if self._keys:
            return f"Property(keys={len(self._keys)})"
        return f"Property(value={self._value})"


def _as_property(value) -> Property:
    if isinstance(value, Property):
        return value
    return Property(value)


class Layer(LayerItem):
    """A layer with a fixed source rect

    The source rect does not change over time for in-memory layers, so
    `source_rect_at_time` returns the same rect for every time.
    """

    def __init__(self, name: str = "", position=(0.0, 0.0), anchor_point=(0.0, 0.0),
                 source_rect: Optional[Rect] = None, selected: bool = False):
        self.name = name
        self._position = _as_property(position)
        self._anchor_point = _as_property(anchor_point)
        self.source_rect = source_rect if source_rect is not None else Rect(0.0, 0.0, 0.0, 0.0)
        self.selected = selected

    @property
    def position(self) -> Property:
        return self._position

    @property
    def anchor_point(self) -> Property:
        return self._anchor_point

    def source_rect_at_time(self, time: float, include_extents: bool = False) -> Rect:
        return Rect(self.source_rect.left, self.source_rect.top,
                    self.source_rect.width, self.source_rect.height)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'position': self._position.to_dict(),
            'anchor_point': self._anchor_point.to_dict(),
            'source_rect': self.source_rect.to_dict(),
            'selected': self.selected,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Layer':
        return cls(
            name=data.get('name', ''),
            position=Property.from_dict(data.get('position', (0.0, 0.0))),
            anchor_point=Property.from_dict(data.get('anchor_point', (0.0, 0.0))),
            source_rect=Rect.from_dict(data.get('source_rect', {})),
            selected=bool(data.get('selected', False)),
        )

    def __repr__(self):
        return f"Layer({self.name!r})"


class Composition(CompositionItem):
    """Sized canvas owning an ordered list of layers

    Properties:
        name: Composition name
        width, height: Size in pixels (positive integers)
        time: Current time indicator in seconds
        duration: Length in seconds
        frame_rate: Frames per second
        layers: Layers top to bottom
    """

    def __init__(self, name: str = DEFAULT_COMP_NAME, width: int = DEFAULT_COMP_WIDTH,
                 height: int = DEFAULT_COMP_HEIGHT, duration: float = DEFAULT_COMP_DURATION,
                 frame_rate: float = DEFAULT_FRAME_RATE, time: float = 0.0):
        self._logger = logging.getLogger('Composition')
        self.name = name
        self._width = self._validate_size(width, 'width')
        self._height = self._validate_size(height, 'height')
        self.duration = float(duration)
        self.frame_rate = float(frame_rate)
        self._time = float(time)
        self._layers: List[Layer] = []

    @staticmethod
    def _validate_size(value, label: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Composition {label} must be an int, got {type(value).__name__}")
        if value < 1:
            raise ValueError(f"Composition {label} must be positive, got {value}")
        return value

    # ========================================
    # Size and time
    # ========================================

    @property
    def width(self) -> int:
        return self._width

    @width.setter
    def width(self, value: int):
        self._width = self._validate_size(value, 'width')
        self._logger.debug(f"Set width: {value}")

    @property
    def height(self) -> int:
        return self._height

    @height.setter
    def height(self, value: int):
        self._height = self._validate_size(value, 'height')
        self._logger.debug(f"Set height: {value}")

    @property
    def time(self) -> float:
        return self._time

    @time.setter
    def time(self, value: float):
        self._time = float(value)

    # ========================================
    # Layers and selection
    # ========================================

    @property
    def layers(self) -> List[Layer]:
        return list(self._layers)

    @property
    def selected_layers(self) -> List[Layer]:
        return [layer for layer in self._layers if layer.selected]

    def layer(self, index: int) -> Layer:
        """Get layer by 1-based host index"""
        if not 1 <= index <= len(self._layers):
            raise IndexError(f"Layer index {index} out of range 1..{len(self._layers)}")
        return self._layers[index - 1]

    def layer_by_name(self, name: str) -> Optional[Layer]:
        for layer in self._layers:
            if layer.name == name:
                return layer
        return None

    def add_layer(self, layer: Layer) -> Layer:
        self._layers.append(layer)
        self._logger.debug(f"Added layer {layer.name!r}")
        return layer

    def remove_layer(self, layer: Layer):
        self._layers.remove(layer)

    def select_layers(self, layers: Iterable[Layer]):
        """Replace the selection with `layers`"""
        wanted = {id(layer) for layer in layers}
        for layer in self._layers:
            layer.selected = id(layer) in wanted

    def deselect_all(self):
        for layer in self._layers:
            layer.selected = False

    # ========================================
    # Snapshot / serialization
    # ========================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'width': self._width,
            'height': self._height,
            'duration': self.duration,
            'frame_rate': self.frame_rate,
            'time': self._time,
            'layers': [layer.to_dict() for layer in self._layers],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Composition':
        comp = cls(
            name=data.get('name', DEFAULT_COMP_NAME),
            width=int(data.get('width', DEFAULT_COMP_WIDTH)),
            height=int(data.get('height', DEFAULT_COMP_HEIGHT)),
            duration=data.get('duration', DEFAULT_COMP_DURATION),
            frame_rate=data.get('frame_rate', DEFAULT_FRAME_RATE),
            time=data.get('time', 0.0),
        )
        for layer_data in data.get('layers', []):
            comp.add_layer(Layer.from_dict(layer_data))
        return comp

    def get_snapshot(self) -> Dict[str, Any]:
        return self.to_dict()

    def set_snapshot(self, snapshot: Dict[str, Any]):
        """Restore state in place so existing references stay valid"""
        restored = Composition.from_dict(snapshot)
        self.name = restored.name
        self._width = restored._width
        self._height = restored._height
        self.duration = restored.duration
        self.frame_rate = restored.frame_rate
        self._time = restored._time
        self._layers = restored._layers
        self._logger.debug("Restored from snapshot")

    def __repr__(self):
        return f"Composition({self.name!r}, {self._width}x{self._height}, layers={len(self._layers)})"


class Project:
    """Ordered project items plus the active one

    Only compositions are stored; `active_item` is None when nothing is
    active, which the panels treat as "no composition selected".
    """

    def __init__(self, items: Optional[List[Composition]] = None, active_index: Optional[int] = None):
        self._logger = logging.getLogger('Project')
        self.items: List[Composition] = list(items or [])
        if active_index is None and self.items:
            active_index = 0
        self.active_index = active_index

    @property
    def active_item(self) -> Optional[Composition]:
        if self.active_index is None or not 0 <= self.active_index < len(self.items):
            return None
        return self.items[self.active_index]

    def set_active(self, item: Optional[Composition]):
        self.active_index = None if item is None else self.items.index(item)

    def add_item(self, item: Composition) -> Composition:
        self.items.append(item)
        if self.active_index is None:
            self.active_index = len(self.items) - 1
        return item

    def to_dict(self) -> Dict[str, Any]:
        return {
            'active_index': self.active_index,
            'items': [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Project':
        items = [Composition.from_dict(d) for d in data.get('items', [])]
        project = cls(items)
        project.active_index = data.get('active_index', 0 if items else None)
        return project

    def get_snapshot(self) -> Dict[str, Any]:
        return self.to_dict()

    def set_snapshot(self, snapshot: Dict[str, Any]):
        """Restore items in place, reusing Composition objects where possible"""
        item_data = snapshot.get('items', [])
        if len(item_data) == len(self.items):
            for item, data in zip(self.items, item_data):
                item.set_snapshot(data)
        else:
            self.items = [Composition.from_dict(d) for d in item_data]
        self.active_index = snapshot.get('active_index')
        self._logger.debug("Restored from snapshot")

    @classmethod
    def load(cls, path) -> 'Project':
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        project = cls.from_dict(data)
        project._logger.info(f"Project loaded from {path}")
        return project

    def save(self, path):
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)
        self._logger.info(f"Project saved to {path}")
