"""MCP server for gis-viewport.

Registers all tools and runs via stdio transport.
"""

import json

from mcp.server.fastmcp import FastMCP

from .state import state
from .tools.navigation import register_navigation_tools
from .tools.zoom import register_zoom_tools
from .tools.view import register_view_tools
from .tools.history import register_history_tools
from .tools.export import register_export_tools
from .tools.status import register_status_tools
from .tools.session import register_session_tools

mcp = FastMCP(
    "gis-viewport",
    instructions=(
        "Navigate a map viewport: center it on places, coordinates or GPX tracks, "
        "zoom, switch between UTM, Mercator, Lat/Lon and Expedia projections, "
        "convert between canvas pixels and geographic coordinates, and move "
        "back and forward through the position history"
    ),
)

# Register all tool groups
register_navigation_tools(mcp)
register_zoom_tools(mcp)
register_view_tools(mcp)
register_history_tools(mcp)
register_export_tools(mcp)
register_status_tools(mcp)
register_session_tools(mcp)


@mcp.resource("state://viewport")
def viewport_state() -> str:
    """Current viewport and history state as JSON."""
    return json.dumps(state.summary(), indent=2)


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
