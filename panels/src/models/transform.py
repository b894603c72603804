"""Geometry value types shared by the models and the crop operation."""
import math
from dataclasses import dataclass


@dataclass
class Vec2:
    """2D vector for coordinate pairs (composition pixels)."""
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))


@dataclass
class Rect:
    """Layer-local rectangle, as returned by source_rect_at_time.

    left/top are relative to the layer's anchor-space origin.
    """
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def top_left(self) -> Vec2:
        return Vec2(self.left, self.top)

    def to_dict(self) -> dict:
        return {'left': self.left, 'top': self.top, 'width': self.width, 'height': self.height}

    @classmethod
    def from_dict(cls, data: dict) -> 'Rect':
        return cls(
            float(data.get('left', 0.0)),
            float(data.get('top', 0.0)),
            float(data.get('width', 0.0)),
            float(data.get('height', 0.0)),
        )


@dataclass
class Bounds:
    """Axis-aligned box in composition space, stored by its edges."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def is_finite(self) -> bool:
        """True when no edge is NaN or infinite"""
        return all(math.isfinite(v) for v in (self.left, self.top, self.right, self.bottom))
