"""Lat/Lon, UTM and Mercator coordinate math (WGS-84)."""

import math

import numpy as np

from ..models import LatLon, UTM

K0 = 0.9996
EQUATORIAL_RADIUS = 6378137.0
ECCENTRICITY_SQUARED = 0.00669438

UTM_ZONES = 60
UTM_CENTRAL_MERIDIAN_EASTING = 500_000.0
UTM_FALSE_NORTHING = 10_000_000.0

# Mercator Y is unbounded at the poles; inputs are clamped just inside them.
MERCATOR_LAT_LIMIT = 90.0 - 1e-9

# 8 degree latitude stripes from 80S; X is stretched to 84N.
_UTM_BAND_LETTERS = "CDEFGHJKLMNPQRSTUVWX"


def merclat(lat: float) -> float:
    """Latitude in degrees to Mercator Y, also in degrees."""
    lat = max(-MERCATOR_LAT_LIMIT, min(MERCATOR_LAT_LIMIT, lat))
    return math.degrees(math.log(math.tan(math.pi / 4 + 0.5 * math.radians(lat))))


def demerclat(y: float) -> float:
    """Mercator Y in degrees back to latitude in degrees."""
    lat = math.degrees(math.atan(math.sinh(math.radians(y))))
    # Beyond the clamp limit is the pole itself
    if abs(lat) >= MERCATOR_LAT_LIMIT:
        return math.copysign(90.0, lat)
    return lat


def merclat_array(lats: np.ndarray) -> np.ndarray:
    lats = np.clip(lats, -MERCATOR_LAT_LIMIT, MERCATOR_LAT_LIMIT)
    return np.degrees(np.log(np.tan(np.pi / 4 + 0.5 * np.radians(lats))))


def demerclat_array(ys: np.ndarray) -> np.ndarray:
    lats = np.degrees(np.arctan(np.sinh(np.radians(ys))))
    return np.where(np.abs(lats) >= MERCATOR_LAT_LIMIT, np.copysign(90.0, lats), lats)


def wrap_lon(lon: float) -> float:
    """Bring an unbounded longitude back into [-180, 180]."""
    while lon > 180.0:
        lon -= 360.0
    while lon < -180.0:
        lon += 360.0
    return lon


def clamp_lat(lat: float) -> float:
    return max(-90.0, min(90.0, lat))


def wrap_zone(zone: int) -> int:
    return (zone - 1) % UTM_ZONES + 1


def utm_band_letter(lat: float) -> str:
    """Band letter for a latitude. Z north of 84N, A south of 80S."""
    if lat > 84.0:
        return "Z"
    if lat < -80.0:
        return "A"
    if lat >= 72.0:
        return "X"
    return _UTM_BAND_LETTERS[int((lat + 80.0) // 8)]


def utm_zone_for(lat: float, lon: float) -> int:
    zone = int((lon + 180.0) / 6) + 1
    if zone > UTM_ZONES:
        zone = UTM_ZONES

    # Southwest Norway
    if 56.0 <= lat < 64.0 and 3.0 <= lon < 12.0:
        zone = 32

    # Svalbard
    if 72.0 <= lat < 84.0:
        if 0.0 <= lon < 9.0:
            zone = 31
        elif 9.0 <= lon < 21.0:
            zone = 33
        elif 21.0 <= lon < 33.0:
            zone = 35
        elif 33.0 <= lon < 42.0:
            zone = 37
    return zone


def zone_central_meridian(zone: int) -> float:
    return (zone - 1) * 6 - 180 + 3


def lat_lon_to_utm(lat_lon: LatLon) -> UTM:
    """Forward transverse Mercator."""
    lat = lat_lon.lat
    lon = wrap_lon(lat_lon.lon)

    zone = utm_zone_for(lat, lon)
    lat_rad = math.radians(lat)
    lon_rad = math.radians(lon)
    origin_rad = math.radians(zone_central_meridian(zone))

    e2 = ECCENTRICITY_SQUARED
    ep2 = e2 / (1.0 - e2)
    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)
    tan_lat = math.tan(lat_rad)

    n = EQUATORIAL_RADIUS / math.sqrt(1.0 - e2 * sin_lat * sin_lat)
    t = tan_lat * tan_lat
    c = ep2 * cos_lat * cos_lat
    a = cos_lat * (lon_rad - origin_rad)
    m = EQUATORIAL_RADIUS * (
        (1.0 - e2 / 4 - 3 * e2 ** 2 / 64 - 5 * e2 ** 3 / 256) * lat_rad
        - (3 * e2 / 8 + 3 * e2 ** 2 / 32 + 45 * e2 ** 3 / 1024) * math.sin(2 * lat_rad)
        + (15 * e2 ** 2 / 256 + 45 * e2 ** 3 / 1024) * math.sin(4 * lat_rad)
        - (35 * e2 ** 3 / 3072) * math.sin(6 * lat_rad)
    )

    easting = K0 * n * (
        a
        + (1 - t + c) * a ** 3 / 6
        + (5 - 18 * t + t * t + 72 * c - 58 * ep2) * a ** 5 / 120
    ) + UTM_CENTRAL_MERIDIAN_EASTING
    northing = K0 * (
        m
        + n * tan_lat * (
            a * a / 2
            + (5 - t + 9 * c + 4 * c * c) * a ** 4 / 24
            + (61 - 58 * t + t * t + 600 * c - 330 * ep2) * a ** 6 / 720
        )
    )
    if lat < 0.0:
        northing += UTM_FALSE_NORTHING

    return UTM(zone=zone, band=utm_band_letter(lat), easting=easting, northing=northing)


def utm_to_lat_lon(utm: UTM) -> LatLon:
    """Inverse transverse Mercator. Hemisphere is taken from the band letter."""
    x = utm.easting - UTM_CENTRAL_MERIDIAN_EASTING
    y = utm.northing
    if not utm.is_northern:
        y -= UTM_FALSE_NORTHING

    e2 = ECCENTRICITY_SQUARED
    ep2 = e2 / (1.0 - e2)
    e1 = (1.0 - math.sqrt(1.0 - e2)) / (1.0 + math.sqrt(1.0 - e2))

    m = y / K0
    mu = m / (EQUATORIAL_RADIUS * (1.0 - e2 / 4 - 3 * e2 ** 2 / 64 - 5 * e2 ** 3 / 256))
    phi1 = (
        mu
        + (3 * e1 / 2 - 27 * e1 ** 3 / 32) * math.sin(2 * mu)
        + (21 * e1 ** 2 / 16 - 55 * e1 ** 4 / 32) * math.sin(4 * mu)
        + (151 * e1 ** 3 / 96) * math.sin(6 * mu)
    )
    sin_phi1 = math.sin(phi1)
    cos_phi1 = math.cos(phi1)
    tan_phi1 = math.tan(phi1)

    n1 = EQUATORIAL_RADIUS / math.sqrt(1.0 - e2 * sin_phi1 * sin_phi1)
    t1 = tan_phi1 * tan_phi1
    c1 = ep2 * cos_phi1 * cos_phi1
    r1 = EQUATORIAL_RADIUS * (1.0 - e2) / (1.0 - e2 * sin_phi1 * sin_phi1) ** 1.5
    d = x / (n1 * K0)

    lat = phi1 - (n1 * tan_phi1 / r1) * (
        d * d / 2
        - (5 + 3 * t1 + 10 * c1 - 4 * c1 * c1 - 9 * ep2) * d ** 4 / 24
        + (61 + 90 * t1 + 298 * c1 + 45 * t1 * t1 - 252 * ep2 - 3 * c1 * c1) * d ** 6 / 720
    )
    lon = (
        d
        - (1 + 2 * t1 + c1) * d ** 3 / 6
        + (5 - 2 * c1 + 28 * t1 - 3 * c1 * c1 + 8 * ep2 + 24 * t1 * t1) * d ** 5 / 120
    ) / cos_phi1

    return LatLon(
        lat=clamp_lat(math.degrees(lat)),
        lon=wrap_lon(zone_central_meridian(utm.zone) + math.degrees(lon)),
    )


def lat_lon_distance(a: LatLon, b: LatLon) -> float:
    """Great-circle distance in meters."""
    lat1, lon1 = math.radians(a.lat), math.radians(a.lon)
    lat2, lon2 = math.radians(b.lat), math.radians(b.lon)
    cos_angle = (
        math.sin(lat1) * math.sin(lat2)
        + math.cos(lat1) * math.cos(lat2) * math.cos(lon1 - lon2)
    )
    if math.isnan(cos_angle):
        return 0.0
    # Rounding can push identical points just past 1.0
    return EQUATORIAL_RADIUS * math.acos(max(-1.0, min(1.0, cos_angle)))


def bearing(a: LatLon, b: LatLon) -> float:
    """Initial bearing from ``a`` to ``b`` in radians, in [0, 2*pi)."""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    dlon = math.radians(b.lon - a.lon)
    angle = math.atan2(
        math.sin(dlon) * math.cos(lat2),
        math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon),
    )
    return angle % (2 * math.pi)
