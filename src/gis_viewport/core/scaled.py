"""Rescaled copies of a viewport for export and printing."""

import logging
from typing import Optional

from ..models import CoordMode, GeoCoord
from .projection import ViewportProjection
from .scale import Scale

logger = logging.getLogger(__name__)


def derive(
    source: ViewportProjection,
    target_width: int,
    target_height: int,
    scale: Optional[Scale] = None,
) -> ViewportProjection:
    """A new projection for a ``target_width`` x ``target_height`` canvas showing the same area.

    The factor is the smaller of the two width/height ratios so that the
    source's whole extent fits; the derived canvas keeps the source's aspect
    ratio and may therefore be smaller than the target along one axis.
    Each axis of the derived scale is the source's ground extent over the
    rounded canvas size, so the framing is exact even when the factor does
    not give whole pixels. An explicit ``scale`` replaces the derived one as-is.
    """
    if target_width <= 0 or target_height <= 0:
        raise ValueError(f"Target size must be positive, got {target_width}x{target_height}")

    factor = min(target_width / source.width, target_height / source.height)
    width = max(1, round(source.width * factor))
    height = max(1, round(source.height * factor))

    if scale is None:
        new_scale = Scale()
        new_scale.set(
            source.width * source.scale.x_mpp / width,
            source.height * source.scale.y_mpp / height,
        )
    else:
        new_scale = scale.model_copy()

    derived = ViewportProjection(
        center=source.center,
        scale=new_scale,
        draw_mode=source.draw_mode,
        width=width,
        height=height,
    )
    logger.debug("Derived %r from %r (factor %.6f)", derived, source, factor)
    return derived


def image_size_for(source: ViewportProjection, x_mpp: float, y_mpp: Optional[float] = None) -> tuple[int, int]:
    """Pixel size of an image covering the same ground as ``source`` at another scale."""
    if y_mpp is None:
        y_mpp = x_mpp
    return (
        round(source.width * source.scale.x_mpp / x_mpp),
        round(source.height * source.scale.y_mpp / y_mpp),
    )


def tile_grid_centers(
    source: ViewportProjection, n_x: int, n_y: int
) -> list[tuple[int, int, GeoCoord]]:
    """Centers of an ``n_x`` x ``n_y`` grid of views the size of ``source`` around its center.

    Returns (row, column, center) triples with 1-based indices, row 1 being
    the northernmost. Only UTM views are supported because the grid is laid
    out in meters.
    """
    if source.mode is not CoordMode.UTM:
        raise ValueError("Tile grids can only be laid out for UTM views")
    if n_x < 1 or n_y < 1:
        raise ValueError(f"Grid needs at least one tile per axis, got {n_x}x{n_y}")

    tile_w_m = source.central_width_m
    tile_h_m = source.central_height_m
    center = source.center.utm

    result = []
    for row in range(1, n_y + 1):
        for col in range(1, n_x + 1):
            easting = center.easting + (col - (n_x + 1) / 2) * tile_w_m
            northing = center.northing - (row - (n_y + 1) / 2) * tile_h_m
            result.append(
                (row, col, GeoCoord.from_utm(center.zone, center.band, easting, northing))
            )
    return result
