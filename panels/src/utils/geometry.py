"""Bounding-box math for layer rectangles.

Layer boxes are axis aligned: rotation and scale are not applied, matching
how the host's source rect is interpreted by the crop panel.

    world top-left     = position.xy - anchor.xy + rect.top_left
    world bottom-right = world top-left + (rect.width, rect.height)
"""
import math
from typing import Iterable, Sequence

import numpy as np

from models.transform import Bounds, Rect


def layer_world_bounds(position: Sequence[float], anchor: Sequence[float], rect: Rect) -> Bounds:
    """Composition-space box of one layer. Only x/y of position and anchor are used."""
    left = position[0] - anchor[0] + rect.left
    top = position[1] - anchor[1] + rect.top
    return Bounds(left, top, left + rect.width, top + rect.height)


def union_bounds(boxes: Iterable[Bounds]) -> Bounds:
    """Smallest box containing every box in `boxes`

    The accumulator starts at +inf/-inf, so a single box comes back unchanged
    and an empty input gives a non-finite box.
    """
    mins = np.array([np.inf, np.inf])
    maxs = np.array([-np.inf, -np.inf])
    for box in boxes:
        mins = np.minimum(mins, (box.left, box.top))
        maxs = np.maximum(maxs, (box.right, box.bottom))
    return Bounds(float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))


def round_half_away(value: float) -> int:
    """Round to nearest int, ties away from zero (2.5 -> 3, -2.5 -> -3)

    Python's round() uses banker's rounding, which is not what the host does.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def rounded_size(bounds: Bounds):
    """(width, height) of `bounds` rounded for assignment to a composition"""
    return round_half_away(bounds.width), round_half_away(bounds.height)


def shift_value(value: Sequence[float], dx: float, dy: float) -> tuple:
    """Offset x/y of a 2 or 3 component value; depth is left as is"""
    shifted = (value[0] + dx, value[1] + dy)
    if len(value) > 2:
        shifted += tuple(value[2:])
    return shifted
