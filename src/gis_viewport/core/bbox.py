"""Bounding boxes of a viewport, and zooming a viewport to show a bounding box."""

import logging
from collections.abc import Iterable

from ..models import CoordMode, GeoCoord, LatLon, LatLonBBox
from .projection import ViewportProjection
from .scale import MPP_MAX

logger = logging.getLogger(__name__)

DEFAULT_FIT_SCALE = 1.0


def get_bbox(
    projection: ViewportProjection,
    margin_left: int = 0,
    margin_right: int = 0,
    margin_top: int = 0,
    margin_bottom: int = 0,
) -> LatLonBBox:
    """Lat/Lon box spanned by the canvas corners, each inset by the given pixel margins.

    No antimeridian handling is done: a view straddling 180 degrees yields
    west > east.
    """
    left = margin_left
    right = projection.width - margin_right
    top = margin_top
    bottom = projection.height - margin_bottom

    corners = [
        projection.screen_to_coord(x, y).to_mode(CoordMode.LATLON).lat_lon
        for x, y in ((left, top), (right, top), (left, bottom), (right, bottom))
    ]
    lats = [c.lat for c in corners]
    lons = [c.lon for c in corners]
    return LatLonBBox(north=max(lats), south=min(lats), east=max(lons), west=min(lons))


def zoom_to_show_bbox(
    projection: ViewportProjection,
    target: LatLonBBox,
    initial_mpp: float = DEFAULT_FIT_SCALE,
) -> bool:
    """Center ``projection`` on ``target`` and zoom out until the whole box is visible.

    Starts at ``initial_mpp`` and doubles the scale until the view encloses
    the target on all four sides. Returns False (and logs a warning) if even
    the largest scale cannot show the whole box; the view is then left at
    that largest scale.
    """
    center = target.center
    projection.set_center(GeoCoord.from_lat_lon(center.lat, center.lon))
    projection.scale.set(initial_mpp, initial_mpp)

    while True:
        if get_bbox(projection).contains(target):
            return True
        if not projection.scale.zoom_out(2):
            break

    if projection.scale.x_mpp < MPP_MAX or projection.scale.y_mpp < MPP_MAX:
        projection.scale.set(MPP_MAX, MPP_MAX)
        if get_bbox(projection).contains(target):
            return True

    logger.warning("Could not fit bounding box (%s) even at %s mpp", target, MPP_MAX)
    return False


def bbox_of_lat_lons(points: Iterable[LatLon]) -> LatLonBBox:
    points = list(points)
    if not points:
        raise ValueError("Need at least one point to build a bounding box")
    return LatLonBBox(
        north=max(p.lat for p in points),
        south=min(p.lat for p in points),
        east=max(p.lon for p in points),
        west=min(p.lon for p in points),
    )


def zoom_to_show_lat_lons(
    projection: ViewportProjection,
    first: LatLon,
    second: LatLon,
    initial_mpp: float = DEFAULT_FIT_SCALE,
) -> bool:
    return zoom_to_show_bbox(projection, bbox_of_lat_lons([first, second]), initial_mpp)


def zoom_to_show_coords(
    projection: ViewportProjection,
    coords: Iterable[GeoCoord],
    initial_mpp: float = DEFAULT_FIT_SCALE,
) -> bool:
    """Fit the view to a set of points such as a track or waypoints."""
    bbox = bbox_of_lat_lons(c.to_mode(CoordMode.LATLON).lat_lon for c in coords)
    return zoom_to_show_bbox(projection, bbox, initial_mpp)
