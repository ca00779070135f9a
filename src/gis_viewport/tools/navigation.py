"""Navigation tools: set_center, set_center_utm, pan, go_to_place, select_geocode_result, fit_bbox, fit_gpx."""

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state
from ..core import navigation
from ..core.geocode import search_places
from ..core.gpx import parse_gpx_file
from ..core.zoom import wheel_pan
from ..models import GeoCoord, GeocodeCandidate, LatLonBBox


def _view_line() -> str:
    p = state.projection
    return f"Center: {p.center} | Scale: {p.scale_label()} | Draw mode: {p.draw_mode.value}"


def _fit_result(fitted: bool) -> str:
    if fitted:
        return f"View fitted. {_view_line()}"
    return f"Warning: area too large to show completely; using the largest scale. {_view_line()}"


def _go_to_candidate(candidate: GeocodeCandidate) -> str:
    state.pending_geocode_candidates = []
    if candidate.bbox_north > candidate.bbox_south and candidate.bbox_east > candidate.bbox_west:
        bbox = LatLonBBox(
            north=candidate.bbox_north,
            south=candidate.bbox_south,
            east=candidate.bbox_east,
            west=candidate.bbox_west,
        )
        fitted = navigation.fit_bbox(
            state.projection, state.history, bbox, state.config.fit_initial_mpp
        )
        return _fit_result(fitted)
    navigation.set_center(
        state.projection, state.history, GeoCoord.from_lat_lon(candidate.lat, candidate.lon)
    )
    return f"Moved. {_view_line()}"


def register_navigation_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_center(lat: float, lon: float, save_position: bool = True) -> str:
        """Move the view center to a latitude/longitude.

        **Next:** get_bbox to see the visible area, or zoom.

        Args:
            lat: Latitude in degrees (-90 to 90).
            lon: Longitude in degrees (-180 to 180).
            save_position: Record the new center in the back/forward history (default true).
        """
        try:
            coord = GeoCoord.from_lat_lon(lat, lon)
        except ValidationError as e:
            return f"Error: Invalid position: {e.errors()[0]['msg']}"
        navigation.set_center(state.projection, state.history, coord, save_position)
        return f"Moved. {_view_line()}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_center_utm(
        zone: int, band: str, easting: float, northing: float, save_position: bool = True
    ) -> str:
        """Move the view center to a UTM position.

        Args:
            zone: UTM zone (1-60).
            band: Latitude band letter, e.g. 'U'.
            easting: Easting in meters (500000 at the zone's central meridian).
            northing: Northing in meters.
            save_position: Record the new center in the back/forward history (default true).
        """
        try:
            coord = GeoCoord.from_utm(zone, band, easting, northing)
        except ValidationError as e:
            return f"Error: Invalid UTM position: {e.errors()[0]['msg']}"
        navigation.set_center(state.projection, state.history, coord, save_position)
        return f"Moved. {_view_line()}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def pan(dx: float = 0.0, dy: float = 0.0, direction: str | None = None) -> str:
        """Pan the view by a pixel offset, or by one wheel step in a direction.

        Pans are not recorded in the history.

        Args:
            dx: Pixels to move right (negative moves left).
            dy: Pixels to move down (negative moves up).
            direction: Instead of dx/dy, one of 'up', 'down', 'left', 'right'
                to pan by a third of the canvas.
        """
        if direction is not None:
            try:
                wheel_pan(state.projection, direction.lower())
            except ValueError as e:
                return f"Error: {e}"
        else:
            state.projection.pan_by_pixels(dx, dy)
        return f"Panned. {_view_line()}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def go_to_place(query: str, limit: int = 5) -> str:
        """Search for a place by name and move the view to it.

        - 1 result: the view is fitted to it right away.
        - 2+ results: a numbered list is returned. Present it to the user,
          then call select_geocode_result with their choice.

        Args:
            query: Place name (e.g., "Mount Hood", "Kraków").
            limit: Maximum number of candidates (1-10, default 5).
        """
        try:
            candidates = search_places(query, limit)
        except httpx.HTTPStatusError as exc:
            return f"Error: Nominatim returned HTTP {exc.response.status_code}."
        except httpx.HTTPError as exc:
            return f"Error contacting geocoding service: {exc}"

        if not candidates:
            return f"No locations found for '{query}'. Try a more specific name."

        if len(candidates) == 1:
            c = candidates[0]
            return f"Found 1 result: '{c.display_name}'. " + _go_to_candidate(c)

        state.pending_geocode_candidates = candidates
        lines = [f"Found {len(candidates)} location(s) for '{query}':"]
        for i, c in enumerate(candidates, 1):
            lines.append(
                f"{i}. {c.display_name}\n"
                f"   Type: {c.place_type} | Center: {c.lat:.5f}, {c.lon:.5f}"
            )
        lines.append(
            f"Ask the user which number (1-{len(candidates)}) they want, "
            "then call select_geocode_result with that number."
        )
        return "\n".join(lines)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def select_geocode_result(number: int) -> str:
        """Move the view to one of the candidates listed by go_to_place.

        Args:
            number: 1-based index of the chosen candidate.
        """
        if not state.pending_geocode_candidates:
            return "Error: No search results pending. Call go_to_place first."
        n = len(state.pending_geocode_candidates)
        if number < 1 or number > n:
            return f"Error: Invalid selection {number}. Choose a number between 1 and {n}."
        candidate = state.pending_geocode_candidates[number - 1]
        return f"Selected '{candidate.display_name}'. " + _go_to_candidate(candidate)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def fit_bbox(
        north: float, south: float, east: float, west: float, initial_mpp: float | None = None
    ) -> str:
        """Center on a bounding box and zoom out until all of it is visible.

        Args:
            north/south/east/west: Box edges in degrees.
            initial_mpp: Scale to start doubling from (default from config, 1 mpp).
        """
        try:
            bbox = LatLonBBox(north=north, south=south, east=east, west=west)
        except ValidationError as e:
            return f"Error: Invalid bounding box: {e.errors()[0]['msg']}"
        try:
            fitted = navigation.fit_bbox(
                state.projection,
                state.history,
                bbox,
                initial_mpp if initial_mpp is not None else state.config.fit_initial_mpp,
            )
        except ValueError as e:
            return f"Error: {e}"
        return _fit_result(fitted)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def fit_gpx(file_path: str) -> str:
        """Load a GPX file and fit the view to its tracks, routes and waypoints.

        Args:
            file_path: Absolute path to a .gpx file.
        """
        try:
            gpx_data = parse_gpx_file(file_path)
        except FileNotFoundError:
            return f"Error: GPX file not found at {file_path}"

        if gpx_data["bounds"] is None:
            return "Error: GPX file contains no positions."

        fitted = navigation.fit_bbox(
            state.projection, state.history, gpx_data["bounds"], state.config.fit_initial_mpp
        )
        counts = gpx_data["counts"]
        return (
            f"GPX loaded: {counts['tracks']} track(s), {counts['routes']} route(s), "
            f"{counts['waypoints']} waypoint(s), {len(gpx_data['points'])} position(s). "
            + _fit_result(fitted)
        )
