"""Pydantic domain models for geographic coordinates and view modes."""

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

# Letters accepted as a UTM band designator. A/B and Y/Z are the polar caps.
UTM_BAND_SYMBOLS = "ABCDEFGHJKLMNPQRSTUVWXYZ"


class CoordMode(str, Enum):
    UTM = "utm"
    LATLON = "latlon"


class LegacyDrawModeError(ValueError):
    """Raised for draw-mode ids that older versions accepted but are no longer supported."""


class DrawMode(str, Enum):
    UTM = "utm"
    EXPEDIA = "expedia"
    MERCATOR = "mercator"
    LATLON = "latlon"

    @property
    def coord_mode(self) -> CoordMode:
        """Coordinate mode a viewport must use while drawing in this mode."""
        return CoordMode.UTM if self is DrawMode.UTM else CoordMode.LATLON

    @classmethod
    def from_id(cls, value: str) -> "DrawMode":
        """Parse a persisted draw-mode id ("utm", "mercator", "latlon", "expedia").

        Matching is case-insensitive. The retired "google" and "kh" ids fail
        with LegacyDrawModeError so that callers can tell the user instead of
        quietly falling back to a default.
        """
        key = value.strip().lower()
        if key in ("google", "kh"):
            logger.warning("Rejecting legacy draw mode id %r", value)
            raise LegacyDrawModeError(
                f"Draw mode '{value}' is no longer supported. "
                "Use one of: utm, mercator, latlon, expedia."
            )
        for mode in cls:
            if mode.value == key:
                return mode
        raise ValueError(
            f"Unknown draw mode '{value}'. Use one of: utm, mercator, latlon, expedia."
        )


class LatLon(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)

    def __str__(self) -> str:
        return f"{self.lat:.6f}, {self.lon:.6f}"


class UTM(BaseModel):
    model_config = ConfigDict(frozen=True)

    zone: int = Field(ge=1, le=60)
    band: str
    easting: float
    northing: float

    @field_validator("band", mode="before")
    @classmethod
    def validate_band(cls, v: str) -> str:
        if not isinstance(v, str) or len(v.strip()) != 1:
            raise ValueError("UTM band must be a single letter")
        v = v.strip().upper()
        if v not in UTM_BAND_SYMBOLS:
            raise ValueError(f"Invalid UTM band letter '{v}'")
        return v

    @property
    def is_northern(self) -> bool:
        return self.band >= "N"

    def __str__(self) -> str:
        return f"{self.zone}{self.band} {self.easting:.1f} {self.northing:.1f}"


class GeoCoord(BaseModel):
    """A geographic position held either as Lat/Lon or as UTM.

    ``mode`` selects which payload is present; the other one is always None.
    """

    model_config = ConfigDict(frozen=True)

    mode: CoordMode
    lat_lon: Optional[LatLon] = None
    utm: Optional[UTM] = None

    @model_validator(mode="after")
    def check_payload_matches_mode(self) -> "GeoCoord":
        if self.mode is CoordMode.LATLON and (self.lat_lon is None or self.utm is not None):
            raise ValueError("LatLon coordinate must carry only a lat_lon payload")
        if self.mode is CoordMode.UTM and (self.utm is None or self.lat_lon is not None):
            raise ValueError("UTM coordinate must carry only a utm payload")
        return self

    @classmethod
    def from_lat_lon(cls, lat: float, lon: float) -> "GeoCoord":
        return cls(mode=CoordMode.LATLON, lat_lon=LatLon(lat=lat, lon=lon))

    @classmethod
    def from_utm(cls, zone: int, band: str, easting: float, northing: float) -> "GeoCoord":
        return cls(
            mode=CoordMode.UTM,
            utm=UTM(zone=zone, band=band, easting=easting, northing=northing),
        )

    def to_mode(self, target: CoordMode) -> "GeoCoord":
        """Return this position expressed in ``target`` mode."""
        from .core.coords import lat_lon_to_utm, utm_to_lat_lon

        if target is self.mode:
            return self
        match target:
            case CoordMode.UTM:
                return GeoCoord(mode=CoordMode.UTM, utm=lat_lon_to_utm(self.lat_lon))
            case CoordMode.LATLON:
                return GeoCoord(mode=CoordMode.LATLON, lat_lon=utm_to_lat_lon(self.utm))
        raise ValueError(f"Unsupported coordinate mode {target!r}")

    def as_lat_lon(self) -> LatLon:
        return self.to_mode(CoordMode.LATLON).lat_lon

    def as_utm(self) -> UTM:
        return self.to_mode(CoordMode.UTM).utm

    def distance_to(self, other: "GeoCoord") -> float:
        """Distance in meters.

        Two UTM positions in the same zone are measured on the grid;
        everything else goes through the great-circle formula.
        """
        from .core.coords import lat_lon_distance

        if (
            self.mode is CoordMode.UTM
            and other.mode is CoordMode.UTM
            and self.utm.zone == other.utm.zone
        ):
            return ((self.utm.easting - other.utm.easting) ** 2
                    + (self.utm.northing - other.utm.northing) ** 2) ** 0.5
        return lat_lon_distance(self.as_lat_lon(), other.as_lat_lon())

    def bearing_to(self, other: "GeoCoord") -> float:
        from .core.coords import bearing

        return bearing(self.as_lat_lon(), other.as_lat_lon())

    def __str__(self) -> str:
        return str(self.lat_lon) if self.mode is CoordMode.LATLON else str(self.utm)


class LatLonBBox(BaseModel):
    """Lat/Lon bounding box.

    ``west`` may exceed ``east`` when the box straddles the antimeridian;
    such boxes are kept as-is and are not unwrapped.
    """

    model_config = ConfigDict(frozen=True)

    north: float = Field(ge=-90, le=90)
    south: float = Field(ge=-90, le=90)
    east: float = Field(ge=-180, le=180)
    west: float = Field(ge=-180, le=180)

    @model_validator(mode="after")
    def check_north_ge_south(self) -> "LatLonBBox":
        if self.north < self.south:
            raise ValueError(f"north ({self.north}) must not be less than south ({self.south})")
        return self

    @property
    def center(self) -> LatLon:
        return LatLon(lat=(self.north + self.south) / 2, lon=(self.east + self.west) / 2)

    def contains(self, other: "LatLonBBox") -> bool:
        """True if ``other`` lies inside this box on all four sides."""
        return (
            self.north >= other.north
            and self.south <= other.south
            and self.east >= other.east
            and self.west <= other.west
        )

    def is_inside(self, point: LatLon) -> bool:
        return self.south <= point.lat <= self.north and self.west <= point.lon <= self.east

    def __str__(self) -> str:
        return (
            f"N={self.north:.6f}, S={self.south:.6f}, "
            f"E={self.east:.6f}, W={self.west:.6f}"
        )


class TileCoord(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    scale: int


class GeocodeCandidate(BaseModel):
    display_name: str
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    place_type: str
    bbox_north: float = Field(ge=-90, le=90)
    bbox_south: float = Field(ge=-90, le=90)
    bbox_east: float = Field(ge=-180, le=180)
    bbox_west: float = Field(ge=-180, le=180)
