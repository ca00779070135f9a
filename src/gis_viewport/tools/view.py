"""View tools: set_draw_mode, set_canvas_size, screen_to_coord, coord_to_screen, get_bbox, tile_for_center."""

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state
from ..core.bbox import get_bbox as compute_bbox
from ..core.tiles import lat_lon_to_tile, mpp_to_zoom_level, tile_to_lat_lon
from ..models import DrawMode, GeoCoord, TileCoord


def register_view_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_draw_mode(mode: str) -> str:
        """Choose how the map is projected onto the canvas.

        Switching to or from 'utm' converts the center between UTM and Lat/Lon.

        Args:
            mode: 'mercator', 'latlon', 'utm' or 'expedia'.
        """
        try:
            draw_mode = DrawMode.from_id(mode)
        except ValueError as e:
            return f"Error: {e}"
        state.projection.set_draw_mode(draw_mode)
        state.config.draw_mode = draw_mode
        return f"Draw mode: {draw_mode.value}. Center: {state.projection.center}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_canvas_size(width: int, height: int) -> str:
        """Tell the engine the canvas size in pixels (call on every resize).

        Args:
            width: Canvas width in pixels.
            height: Canvas height in pixels.
        """
        try:
            state.projection.resize(width, height)
        except ValueError as e:
            return f"Error: {e}"
        return f"Canvas: {width}x{height}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def screen_to_coord(x: float, y: float) -> str:
        """Geographic coordinate under a canvas pixel (origin top-left).

        Args:
            x: Pixel column.
            y: Pixel row.
        """
        coord = state.projection.screen_to_coord(x, y)
        ll = coord.as_lat_lon()
        if coord.utm is not None:
            return f"UTM {coord.utm} (lat {ll.lat:.6f}, lon {ll.lon:.6f})"
        return f"lat {ll.lat:.6f}, lon {ll.lon:.6f}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def coord_to_screen(lat: float, lon: float) -> str:
        """Canvas pixel position of a latitude/longitude.

        Args:
            lat: Latitude in degrees.
            lon: Longitude in degrees.
        """
        try:
            coord = GeoCoord.from_lat_lon(lat, lon)
        except ValidationError as e:
            return f"Error: Invalid position: {e.errors()[0]['msg']}"
        pos = state.projection.coord_to_screen_pos(coord)
        if pos is None:
            return "Not visible: the position is in another UTM zone than the view."
        x, y = pos
        p = state.projection
        inside = 0 <= x < p.width and 0 <= y < p.height
        return f"x {x:.2f}, y {y:.2f} ({'on' if inside else 'off'} canvas)"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_bbox(
        margin_left: int = 0, margin_right: int = 0, margin_top: int = 0, margin_bottom: int = 0
    ) -> str:
        """Lat/Lon bounding box of the visible canvas, optionally inset by pixel margins.

        Args:
            margin_left/margin_right/margin_top/margin_bottom: Insets in pixels.
        """
        bbox = compute_bbox(
            state.projection, margin_left, margin_right, margin_top, margin_bottom
        )
        return f"Visible area: {bbox}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def tile_for_center() -> str:
        """Map tile (inverse TMS) containing the view center at the current scale.

        Only works for square scales that are a power of two meters per pixel.
        """
        p = state.projection
        try:
            tile = lat_lon_to_tile(p.center, p.scale)
        except ValueError as e:
            return f"Error: {e}"
        corner = tile_to_lat_lon(TileCoord(x=int(tile.x), y=int(tile.y), scale=tile.scale), 0.0)
        return (
            f"Tile x={int(tile.x)}, y={int(tile.y)}, scale={tile.scale} "
            f"(zoom level {mpp_to_zoom_level(p.scale.x_mpp)}), top-left {corner}"
        )
