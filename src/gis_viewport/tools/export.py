"""Export tools: derive_scaled_view, utm_tile_grid."""

import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core.bbox import get_bbox
from ..core.scale import Scale
from ..core.scaled import derive, image_size_for, tile_grid_centers
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def register_export_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def derive_scaled_view(
        width: int, height: int, x_mpp: float | None = None, y_mpp: float | None = None
    ) -> str:
        """Describe the view that an export or print of the current view at a given size would use.

        The live view is not changed. Without an explicit scale the derived view
        shows exactly the same area, so its canvas keeps the current aspect ratio
        and may be smaller than width x height along one side.

        Args:
            width: Target image width in pixels.
            height: Target image height in pixels.
            x_mpp/y_mpp: Optional explicit scale for the export. The reply then
                also gives the image size that would cover the current area
                at that scale.
        """
        explicit = None
        try:
            if x_mpp is not None:
                explicit = Scale()
                explicit.set(x_mpp, y_mpp)
            derived = derive(state.projection, width, height, explicit)
        except ValueError as e:
            return f"Error: {e}"

        logger.info("Derived %dx%d view for a %dx%d target", derived.width, derived.height, width, height)
        result = (
            f"Image: {derived.width}x{derived.height} px | Scale: {derived.scale_label()} | "
            f"Area: {get_bbox(derived)}"
        )
        if explicit is not None:
            full_w, full_h = image_size_for(state.projection, explicit.x_mpp, explicit.y_mpp)
            result += f" | Current area at this scale: {full_w}x{full_h} px"
        return result

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def utm_tile_grid(columns: int, rows: int) -> str:
        """Centers of a grid of adjacent views around the current one, for saving to a directory.

        **Requires:** UTM draw mode (set_draw_mode('utm')).

        Args:
            columns: Number of views from west to east (1-10).
            rows: Number of views from north to south (1-10).
        """
        try:
            require_state(state, utm=True)
        except ValueError as e:
            return f"Error: {e}"
        if not (1 <= columns <= 10 and 1 <= rows <= 10):
            return "Error: columns and rows must each be between 1 and 10."

        p = state.projection
        lines = [
            f"{columns}x{rows} views of {p.width}x{p.height} px "
            f"({p.central_width_m * columns:.0f}m x {p.central_height_m * rows:.0f}m total):"
        ]
        for row, col, center in tile_grid_centers(p, columns, rows):
            lines.append(f"  y{row}-x{col}: {center}")
        return "\n".join(lines)
