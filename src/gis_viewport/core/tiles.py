"""Tile-pyramid (inverse TMS) math.

Tiles are addressed in spherical Mercator with the Y axis pointing down
(origin at the top-left). A tile scale of ``n`` means ``2**n`` meters per
pixel; negative scales are the sub-meter levels.
"""

from ..models import CoordMode, GeoCoord, TileCoord
from .coords import clamp_lat, demerclat, merclat, wrap_lon
from .scale import Scale

MAX_TILE_SCALE = 17
MIN_TILE_SCALE = -5
INVALID_TILE_SCALE = 255

_PYRAMID_SIZE = 2 ** MAX_TILE_SCALE


def mpp_to_tile_scale(mpp: float) -> int:
    """Tile scale for a meters-per-pixel value, or INVALID_TILE_SCALE if mpp is not a tile level."""
    for i in range(MAX_TILE_SCALE + 1):
        if abs(2 ** i - mpp) < 0.01:
            return i
    for i in range(-MIN_TILE_SCALE + 1):
        if abs(1.0 / 2 ** i - mpp) < 0.000001:
            return -i
    return INVALID_TILE_SCALE


def tile_scale_to_mpp(scale: int) -> float:
    if scale >= 0:
        return float(2 ** scale)
    return 1.0 / 2 ** -scale


def mpp_to_zoom_level(mpp: float) -> int:
    """OSM-style zoom level (0 = whole world) for a meters-per-pixel value."""
    level = MAX_TILE_SCALE - mpp_to_tile_scale(mpp)
    if level < 0:
        level = MAX_TILE_SCALE
    return level


def lat_lon_to_tile(coord: GeoCoord, scale: Scale) -> TileCoord:
    """Tile position of ``coord`` at ``scale``.

    Raises ValueError for a non-square scale or one that is not a tile level.
    """
    if not scale.is_square:
        raise ValueError(
            f"Tile conversion needs a square scale, got {scale.x_mpp}/{scale.y_mpp}"
        )
    tile_scale = mpp_to_tile_scale(scale.x_mpp)
    if tile_scale == INVALID_TILE_SCALE:
        raise ValueError(f"Scale {scale.x_mpp} mpp does not match any tile level")

    ll = coord.to_mode(CoordMode.LATLON).lat_lon
    mpp = scale.x_mpp
    return TileCoord(
        x=(ll.lon + 180) / 360 * _PYRAMID_SIZE / mpp,
        y=(180 - merclat(ll.lat)) / 360 * _PYRAMID_SIZE / mpp,
        scale=tile_scale,
    )


def tile_to_lat_lon(tile: TileCoord, offset: float = 0.5) -> GeoCoord:
    """Lat/Lon of a point inside ``tile``: 0.5 is its center, 0.0 its top-left corner."""
    mpp = tile_scale_to_mpp(tile.scale)
    lon = (tile.x + offset) / _PYRAMID_SIZE * mpp * 360 - 180
    lat = demerclat(180 - (tile.y + offset) / _PYRAMID_SIZE * mpp * 360)
    return GeoCoord.from_lat_lon(clamp_lat(lat), wrap_lon(lon))
