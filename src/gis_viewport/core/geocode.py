"""Place-name lookup against Nominatim."""

import logging

import httpx

from ..models import GeocodeCandidate

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
USER_AGENT = "gis-viewport/1.0"


def search_places(query: str, limit: int = 5) -> list[GeocodeCandidate]:
    """Return up to ``limit`` (clamped to 1-10) candidates for ``query``.

    HTTP errors propagate as httpx exceptions.
    """
    limit = max(1, min(10, limit))
    response = httpx.get(
        NOMINATIM_URL,
        params={"q": query, "format": "json", "limit": limit},
        headers={"User-Agent": USER_AGENT},
        timeout=10.0,
    )
    response.raise_for_status()
    results = response.json()
    logger.debug("Nominatim returned %d result(s) for %r", len(results), query)

    candidates = []
    for item in results:
        lat = float(item["lat"])
        lon = float(item["lon"])
        bbox = item.get("boundingbox", [])
        # Nominatim boundingbox order: [south, north, west, east]
        has_bbox = len(bbox) >= 4
        candidates.append(
            GeocodeCandidate(
                display_name=item["display_name"],
                lat=lat,
                lon=lon,
                place_type=item.get("type", "unknown"),
                bbox_south=float(bbox[0]) if has_bbox else lat,
                bbox_north=float(bbox[1]) if has_bbox else lat,
                bbox_west=float(bbox[2]) if has_bbox else lon,
                bbox_east=float(bbox[3]) if has_bbox else lon,
            )
        )
    return candidates
