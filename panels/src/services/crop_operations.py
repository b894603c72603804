"""
Compositing Panels - Crop Operations Service

Crops the active composition to the union bounding box of its selected
layers:

1. Sample each selected layer's source rect at the composition's current time
2. Union their composition-space boxes
3. Shift every layer's position (all keyframes, or the static value) by
   (-left, -top) so the box starts at the origin
4. Resize the composition to the rounded box size

The whole mutation runs inside one host undo group. Precondition failures
and runtime errors are returned as CropResult messages, never raised.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from models.host import CompositionItem, Host, LayerItem
from models.transform import Bounds
from utils.geometry import layer_world_bounds, rounded_size, shift_value, union_bounds
from constants import (
    CROP_UNDO_NAME,
    STATUS_NO_COMPOSITION, STATUS_NO_LAYERS,
    STATUS_INVALID_GEOMETRY, STATUS_EMPTY_BOUNDS, STATUS_ERROR_PREFIX
)

logger = logging.getLogger(__name__)


@dataclass
class CropResult:
    """Outcome of a crop, shown verbatim in the panel's status row"""
    success: bool
    message: str
    width: Optional[int] = None
    height: Optional[int] = None
    bounds: Optional[Bounds] = None


def crop_message(layer_count: int) -> str:
    if layer_count == 1:
        return "Cropped to 1 layer"
    return f"Cropped to {layer_count} layers"


def compute_selection_bounds(comp: CompositionItem, layers: Iterable[LayerItem]) -> Bounds:
    """Union box of `layers` in composition space at the comp's current time"""
    time = comp.time
    boxes = []
    for layer in layers:
        rect = layer.source_rect_at_time(time, False)
        position = layer.position.value_at_time(time)
        anchor = layer.anchor_point.value_at_time(time)
        boxes.append(layer_world_bounds(position, anchor, rect))
    return union_bounds(boxes)


def shift_layer_positions(layers: Iterable[LayerItem], dx: float, dy: float):
    """Move every layer by (dx, dy), keyframe by keyframe when animated"""
    for layer in layers:
        position = layer.position
        if position.num_keys > 0:
            # Snapshot first so rewriting a key can't disturb iteration
            for key in position.keyframes():
                position.set_value_at_time(key.time, shift_value(key.value, dx, dy))
        else:
            # Unanimated: every time evaluates to the static value
            position.set_value(shift_value(position.value_at_time(0.0), dx, dy))


def validate_bounds(bounds: Bounds) -> Optional[str]:
    """Return a failure message if `bounds` can't become a composition size"""
    if not bounds.is_finite():
        return STATUS_INVALID_GEOMETRY
    width, height = rounded_size(bounds)
    if width < 1 or height < 1:
        return STATUS_EMPTY_BOUNDS
    return None


def crop_comp_to_layers(host: Host) -> CropResult:
    """Crop the host's active composition to its selected layers

    Args:
        host: Host providing the active composition and undo grouping

    Returns:
        CropResult with the new size on success, or the status message to
        show on failure. Failures before the undo group opens leave the
        document untouched.
    """
    comp = host.active_composition()
    if comp is None:
        return CropResult(False, STATUS_NO_COMPOSITION)

    selected = comp.selected_layers
    if len(selected) == 0:
        return CropResult(False, STATUS_NO_LAYERS)

    try:
        bounds = compute_selection_bounds(comp, selected)
    except Exception as e:
        logger.exception("Failed to measure selected layers")
        return CropResult(False, f"{STATUS_ERROR_PREFIX}{e}")

    failure = validate_bounds(bounds)
    if failure:
        logger.warning(f"Crop rejected for {comp.name!r}: {failure} ({bounds})")
        return CropResult(False, failure, bounds=bounds)

    new_width, new_height = rounded_size(bounds)

    host.begin_undo_group(CROP_UNDO_NAME)
    try:
        shift_layer_positions(comp.layers, -bounds.left, -bounds.top)
        comp.width = new_width
        comp.height = new_height
    except Exception as e:
        logger.exception(f"Crop of {comp.name!r} failed part way")
        return CropResult(False, f"{STATUS_ERROR_PREFIX}{e}", bounds=bounds)
    finally:
        host.end_undo_group()

    message = crop_message(len(selected))
    logger.info(f"{comp.name}: {message} -> {new_width}x{new_height}")
    return CropResult(True, message, new_width, new_height, bounds)
