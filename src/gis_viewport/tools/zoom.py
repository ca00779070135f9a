"""Zoom tools: zoom, set_scale."""

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core.scale import MPP_MAX, MPP_MIN
from ..core.zoom import (
    ZoomOperation,
    keep_coordinate_in_center,
    keep_coordinate_under_cursor,
    move_coordinate_to_center,
)


def register_zoom_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def zoom(
        direction: str,
        x: float | None = None,
        y: float | None = None,
        anchor: str = "cursor",
    ) -> str:
        """Zoom in or out by a factor of two.

        Without a pixel position the view zooms around its center. With one,
        ``anchor`` decides what happens to it:
        - 'cursor': the coordinate under (x, y) stays under (x, y).
        - 'center': the coordinate under (x, y) becomes the new center.

        Args:
            direction: 'in' or 'out'.
            x/y: Optional pixel position (origin top-left).
            anchor: 'cursor' (default) or 'center'.
        """
        if direction.lower() not in (ZoomOperation.IN.value, ZoomOperation.OUT.value):
            return f"Error: Unknown zoom direction '{direction}'. Use 'in' or 'out'."
        operation = ZoomOperation(direction.lower())

        p = state.projection
        if x is None or y is None:
            changed = keep_coordinate_in_center(p, operation)
        elif anchor == "cursor":
            changed = keep_coordinate_under_cursor(p, operation, x, y)
        elif anchor == "center":
            changed = move_coordinate_to_center(p, operation, x, y)
        else:
            return f"Error: Unknown anchor '{anchor}'. Use 'cursor' or 'center'."

        if not changed:
            return f"Scale unchanged, limit reached ({MPP_MIN}-{MPP_MAX} mpp). Scale: {p.scale_label()}"
        return f"Zoomed {operation.value}. Center: {p.center} | Scale: {p.scale_label()}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_scale(x_mpp: float, y_mpp: float | None = None) -> str:
        """Set the zoom as meters per pixel.

        Args:
            x_mpp: Meters per pixel horizontally (1/32 to 32768).
            y_mpp: Meters per pixel vertically (default: same as x_mpp).
        """
        try:
            state.projection.scale.set(x_mpp, y_mpp)
        except ValueError as e:
            return f"Error: {e}"
        return f"Scale: {state.projection.scale_label()}"
