"""Pixel <-> geographic transforms for a viewport.

Pixel space has its origin at the top-left corner of the canvas with Y
growing downwards. Geographic Y (latitude, northing) grows northwards.
"""

import math
from functools import lru_cache
from typing import Optional

import numpy as np

from ..models import UTM, CoordMode, DrawMode, GeoCoord, LatLon
from .coords import (
    UTM_CENTRAL_MERIDIAN_EASTING,
    clamp_lat,
    demerclat,
    demerclat_array,
    lat_lon_to_utm,
    merclat,
    merclat_array,
    utm_band_letter,
    utm_to_lat_lon,
    wrap_lon,
    wrap_zone,
)
from .scale import Scale

# Meters-per-pixel of the Expedia "altitude" scale.
ALTI_TO_MPP = 1.4017295


def mercator_factor(mpp: float) -> float:
    """Pixels per degree of longitude at ``mpp``."""
    return (65536.0 / 180 / mpp) * 256


reverse_mercator_factor = mercator_factor


def _meridian_radius(lat_deg: float) -> float:
    """Radius of curvature in the plane of the meridian, in meters."""
    a = 6378.137
    e2 = 0.081082 * 0.081082
    sin_lat = math.sin(math.radians(lat_deg))
    return a * (1.0 - e2) / (1.0 - e2 * sin_lat * sin_lat) ** 1.5 * 1000.0


_EXPEDIA_RADIUS = [_meridian_radius(lat) for lat in range(-90, 91)]


def _expedia_radius(lat: float) -> float:
    return _EXPEDIA_RADIUS[90 + int(lat)]


def _utm_offset(center: UTM, dx_m: float, dy_m: float, zone_width_m: float) -> UTM:
    """``center`` moved by (dx_m, dy_m) meters, re-expressed in the zone it lands in."""
    easting = center.easting + dx_m
    northing = center.northing + dy_m
    zone = center.zone
    if zone_width_m > 0:
        zone_delta = math.floor((easting - UTM_CENTRAL_MERIDIAN_EASTING) / zone_width_m + 0.5)
        if zone_delta:
            zone = wrap_zone(zone + zone_delta)
            easting -= zone_delta * zone_width_m

    # The latitude and so the band come from the point itself, hemisphere from the center.
    shifted = UTM(zone=zone, band=center.band, easting=easting, northing=northing)
    band = utm_band_letter(utm_to_lat_lon(shifted).lat)
    return UTM(zone=zone, band=band, easting=easting, northing=northing)


@lru_cache(maxsize=256)
def utm_zone_geometry(
    center: UTM, x_mpp: float, y_mpp: float, width: int, height: int
) -> tuple[float, bool]:
    """Return (zone_width_m, is_single_zone) for a UTM view.

    The zone width is measured on the latitude of the bottom edge of the
    canvas, where the view is widest in the northern hemisphere.
    """
    bottom = UTM(
        zone=center.zone,
        band=center.band,
        easting=center.easting,
        northing=center.northing - height * y_mpp / 2,
    )
    bottom_lat = utm_to_lat_lon(bottom).lat
    boundary_lon = (center.zone - 1) * 6 - 180
    edge = lat_lon_to_utm(LatLon(lat=bottom_lat, lon=boundary_lon))
    zone_width_m = abs(edge.easting - UTM_CENTRAL_MERIDIAN_EASTING) * 2

    half_width_m = width / 2 * x_mpp
    top_m = height / 2 * y_mpp
    leftmost = _utm_offset(center, -half_width_m, top_m, zone_width_m).zone
    rightmost = _utm_offset(center, half_width_m, top_m, zone_width_m).zone
    return zone_width_m, leftmost == rightmost


class ViewportProjection:
    """A view of the map: center, scale, draw mode and canvas size.

    Converts between canvas pixel positions and geographic coordinates.
    In UTM mode the zone width and the single-zone flag are derived from
    the current center, scale and canvas size on demand.
    """

    def __init__(
        self,
        center: GeoCoord,
        scale: Optional[Scale] = None,
        draw_mode: DrawMode = DrawMode.MERCATOR,
        width: int = 800,
        height: int = 600,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.scale = scale if scale is not None else Scale()
        self.width = width
        self.height = height
        self._draw_mode = draw_mode
        self._center = self._normalize_center(center)

    # -- state ---------------------------------------------------------------

    @property
    def center(self) -> GeoCoord:
        return self._center

    @property
    def draw_mode(self) -> DrawMode:
        return self._draw_mode

    @property
    def mode(self) -> CoordMode:
        return self._draw_mode.coord_mode

    def _normalize_center(self, coord: GeoCoord) -> GeoCoord:
        coord = coord.to_mode(self.mode)
        if coord.mode is CoordMode.UTM:
            # Re-derive the zone so a center typed in with a neighbouring zone is corrected
            normalized = lat_lon_to_utm(utm_to_lat_lon(coord.utm))
            if normalized.zone != coord.utm.zone:
                coord = GeoCoord(mode=CoordMode.UTM, utm=normalized)
        return coord

    def set_center(self, coord: GeoCoord) -> None:
        self._center = self._normalize_center(coord)

    def set_center_from_screen_pos(self, x: float, y: float) -> None:
        self._center = self._normalize_center(self.screen_to_coord(x, y))

    def pan_by_pixels(self, dx: float, dy: float) -> None:
        """Move the view so that the pixel (w/2 + dx, h/2 + dy) becomes the center."""
        self.set_center_from_screen_pos(self.width / 2 + dx, self.height / 2 + dy)

    def set_draw_mode(self, draw_mode: DrawMode) -> None:
        """Switch draw mode, converting the center to the matching coordinate mode."""
        self._draw_mode = draw_mode
        self._center = self._normalize_center(self._center)

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height

    def clone(self) -> "ViewportProjection":
        """Independent copy; mutating either one never affects the other."""
        return ViewportProjection(
            center=self._center,
            scale=self.scale.model_copy(),
            draw_mode=self._draw_mode,
            width=self.width,
            height=self.height,
        )

    @property
    def central_width_m(self) -> float:
        return self.width * self.scale.x_mpp

    @property
    def central_height_m(self) -> float:
        return self.height * self.scale.y_mpp

    def scale_label(self) -> str:
        return self.scale.to_string("mpp" if self.mode is CoordMode.UTM else "pixelfact")

    # -- UTM zones -----------------------------------------------------------

    def _zone_geometry(self) -> tuple[float, bool]:
        return utm_zone_geometry(
            self._center.utm, self.scale.x_mpp, self.scale.y_mpp, self.width, self.height
        )

    @property
    def zone_width_m(self) -> float:
        """Width of the center's UTM zone in meters; 0.0 outside UTM mode."""
        if self.mode is not CoordMode.UTM:
            return 0.0
        return self._zone_geometry()[0]

    @property
    def is_single_zone(self) -> bool:
        """True if the left and right canvas edges lie in the same UTM zone."""
        if self.mode is not CoordMode.UTM:
            return False
        return self._zone_geometry()[1]

    @property
    def leftmost_zone(self) -> int:
        if self.mode is not CoordMode.UTM:
            return 0
        return self.screen_to_coord(0, 0).utm.zone

    @property
    def rightmost_zone(self) -> int:
        if self.mode is not CoordMode.UTM:
            return 0
        return self.screen_to_coord(self.width, 0).utm.zone

    def center_in_zone(self, zone: int) -> UTM:
        """The current center expressed as if it belonged to ``zone``."""
        if self.mode is not CoordMode.UTM:
            raise ValueError("Viewport is not in UTM mode")
        center = self._center.utm
        zone_diff = zone - center.zone
        return UTM(
            zone=zone,
            band=center.band,
            easting=center.easting - zone_diff * self.zone_width_m,
            northing=center.northing,
        )

    def get_corners_for_zone(self, zone: int) -> tuple[GeoCoord, GeoCoord]:
        """Upper-left and bottom-right corners of the view, in ``zone``'s grid."""
        center = self.center_in_zone(zone)
        half_w = self.central_width_m / 2
        half_h = self.central_height_m / 2
        upper_left = GeoCoord.from_utm(
            zone, center.band, center.easting - half_w, center.northing + half_h
        )
        bottom_right = GeoCoord.from_utm(
            zone, center.band, center.easting + half_w, center.northing - half_h
        )
        return upper_left, bottom_right

    # -- transforms ----------------------------------------------------------

    def screen_to_coord(self, x: float, y: float) -> GeoCoord:
        """Geographic coordinate (in the viewport's mode) under pixel (x, y)."""
        x_mpp = self.scale.x_mpp
        y_mpp = self.scale.y_mpp
        dx = x - self.width / 2
        dy = self.height / 2 - y

        match self._draw_mode:
            case DrawMode.UTM:
                utm = _utm_offset(self._center.utm, dx * x_mpp, dy * y_mpp, self.zone_width_m)
                return GeoCoord(mode=CoordMode.UTM, utm=utm)
            case DrawMode.LATLON:
                c = self._center.lat_lon
                lon = c.lon + dx / reverse_mercator_factor(x_mpp)
                lat = c.lat + dy / reverse_mercator_factor(y_mpp)
            case DrawMode.MERCATOR:
                c = self._center.lat_lon
                lon = c.lon + dx / reverse_mercator_factor(x_mpp)
                # The center row maps back to the center latitude without the float round trip
                lat = c.lat if dy == 0 else demerclat(merclat(c.lat) + dy / reverse_mercator_factor(y_mpp))
            case DrawMode.EXPEDIA:
                lat, lon = self._expedia_screen_to_lat_lon(x, y)
        return GeoCoord.from_lat_lon(clamp_lat(lat), wrap_lon(lon))

    def coord_to_screen_pos(self, coord: GeoCoord) -> Optional[tuple[float, float]]:
        """Pixel position of ``coord``.

        Returns None in UTM mode when the view shows a single zone and
        ``coord`` belongs to another one; such points are simply not visible.
        """
        coord = coord.to_mode(self.mode)
        x_mpp = self.scale.x_mpp
        y_mpp = self.scale.y_mpp
        cx = self.width / 2
        cy = self.height / 2

        match self._draw_mode:
            case DrawMode.UTM:
                center = self._center.utm
                zone_diff = center.zone - coord.utm.zone
                if zone_diff != 0 and self.is_single_zone:
                    return None
                x = (cx + (coord.utm.easting - center.easting) / x_mpp
                     - zone_diff * self.zone_width_m / x_mpp)
                y = cy - (coord.utm.northing - center.northing) / y_mpp
                return x, y
            case DrawMode.LATLON:
                c = self._center.lat_lon
                x = cx + mercator_factor(x_mpp) * (coord.lat_lon.lon - c.lon)
                y = cy + mercator_factor(y_mpp) * (c.lat - coord.lat_lon.lat)
                return x, y
            case DrawMode.MERCATOR:
                c = self._center.lat_lon
                x = cx + mercator_factor(x_mpp) * (coord.lat_lon.lon - c.lon)
                y = cy + mercator_factor(y_mpp) * (merclat(c.lat) - merclat(coord.lat_lon.lat))
                return x, y
            case DrawMode.EXPEDIA:
                return self._expedia_lat_lon_to_screen(coord.lat_lon)
        return None

    def _expedia_screen_to_lat_lon(self, x: float, y: float) -> tuple[float, float]:
        c = self._center.lat_lon
        ra = _expedia_radius(c.lat)
        px = (self.width / 2 - x) * self.scale.x_mpp * ALTI_TO_MPP
        py = (-self.height / 2 + y) * self.scale.y_mpp * ALTI_TO_MPP

        lat = c.lat - py / ra
        lon = c.lon - px / (ra * math.cos(math.radians(lat)))
        dif = lat * (1 - math.cos(math.radians(abs(lon - c.lon))))
        lat = lat - dif / 1.5
        lon = c.lon - px / (ra * math.cos(math.radians(lat)))
        return lat, lon

    def _expedia_lat_lon_to_screen(self, ll: LatLon) -> tuple[float, float]:
        c = self._center.lat_lon
        ra = _expedia_radius(c.lat)
        x = ra * math.cos(math.radians(c.lat)) * (c.lon - ll.lon)
        y = ra * (c.lat - ll.lat)
        dif = ra * math.degrees(1 - math.cos(math.radians(c.lon - ll.lon)))
        y = y + dif / 1.85
        x = x / (self.scale.x_mpp * ALTI_TO_MPP)
        y = y / (self.scale.y_mpp * ALTI_TO_MPP)
        return self.width / 2 - x, y + self.height / 2

    # -- batch transforms ----------------------------------------------------

    def _require_cylindrical(self) -> None:
        if self._draw_mode not in (DrawMode.LATLON, DrawMode.MERCATOR):
            raise ValueError(
                f"Array transforms support latlon and mercator draw modes, not {self._draw_mode.value}"
            )

    def lat_lon_to_screen_array(
        self, lats: np.ndarray, lons: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Vectorized coord_to_screen_pos for the LatLon and Mercator draw modes."""
        self._require_cylindrical()
        c = self._center.lat_lon
        xs = self.width / 2 + mercator_factor(self.scale.x_mpp) * (np.asarray(lons) - c.lon)
        if self._draw_mode is DrawMode.MERCATOR:
            ys = self.height / 2 + mercator_factor(self.scale.y_mpp) * (
                merclat(c.lat) - merclat_array(np.asarray(lats))
            )
        else:
            ys = self.height / 2 + mercator_factor(self.scale.y_mpp) * (c.lat - np.asarray(lats))
        return xs, ys

    def screen_to_lat_lon_array(
        self, xs: np.ndarray, ys: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Vectorized screen_to_coord; returns (lats, lons) without wrapping."""
        self._require_cylindrical()
        c = self._center.lat_lon
        dx = np.asarray(xs) - self.width / 2
        dy = self.height / 2 - np.asarray(ys)
        lons = c.lon + dx / reverse_mercator_factor(self.scale.x_mpp)
        if self._draw_mode is DrawMode.MERCATOR:
            lats = demerclat_array(merclat(c.lat) + dy / reverse_mercator_factor(self.scale.y_mpp))
        else:
            lats = c.lat + dy / reverse_mercator_factor(self.scale.y_mpp)
        return lats, lons

    def __repr__(self) -> str:
        return (
            f"ViewportProjection(center={self._center}, scale={self.scale}, "
            f"draw_mode={self._draw_mode.value}, size={self.width}x{self.height})"
        )
