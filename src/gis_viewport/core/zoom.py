"""Zooming and wheel panning anchored at the center or at the cursor."""

from enum import Enum
from typing import Literal

from .projection import ViewportProjection

# Fraction of the canvas a single wheel step pans by.
WHEEL_PAN_FRACTION = 0.333


class ZoomOperation(str, Enum):
    NOOP = "noop"
    IN = "in"
    OUT = "out"


def apply_zoom(projection: ViewportProjection, operation: ZoomOperation, factor: float = 2.0) -> bool:
    """Change the scale by ``factor``. False if nothing changed."""
    match operation:
        case ZoomOperation.IN:
            return projection.scale.zoom_in(factor)
        case ZoomOperation.OUT:
            return projection.scale.zoom_out(factor)
    return False


def keep_coordinate_in_center(projection: ViewportProjection, operation: ZoomOperation) -> bool:
    """Zoom around the canvas center; the center coordinate stays put."""
    return apply_zoom(projection, operation)


def move_coordinate_to_center(
    projection: ViewportProjection, operation: ZoomOperation, x: float, y: float
) -> bool:
    """Recenter on the clicked pixel, then zoom. Returns True if anything changed."""
    projection.set_center_from_screen_pos(x, y)
    apply_zoom(projection, operation)
    return True


def keep_coordinate_under_cursor(
    projection: ViewportProjection, operation: ZoomOperation, x: float, y: float
) -> bool:
    """Zoom so that the coordinate under pixel (x, y) is still under it afterwards."""
    coord = projection.screen_to_coord(x, y)
    if not apply_zoom(projection, operation):
        return False

    pos = projection.coord_to_screen_pos(coord)
    if pos is None:
        # Cursor coordinate fell into another UTM zone; plain center zoom then.
        return True
    new_x, new_y = pos
    projection.set_center_from_screen_pos(
        projection.width / 2 + (new_x - x),
        projection.height / 2 + (new_y - y),
    )
    return True


def wheel_pan(projection: ViewportProjection, direction: Literal["up", "down", "left", "right"]) -> None:
    """Pan by a third of the canvas, the way a modifier + wheel step does."""
    dx = WHEEL_PAN_FRACTION * projection.width
    dy = WHEEL_PAN_FRACTION * projection.height
    match direction:
        case "up":
            projection.pan_by_pixels(0, -dy)
        case "down":
            projection.pan_by_pixels(0, dy)
        case "left":
            projection.pan_by_pixels(-dx, 0)
        case "right":
            projection.pan_by_pixels(dx, 0)
        case _:
            raise ValueError(f"Unknown pan direction '{direction}'")
