"""Session persistence tools: save_session, load_session."""

import json
import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state, ViewportConfig

logger = logging.getLogger(__name__)


def _default_path() -> Path:
    return Path.home() / ".cache" / "gis-viewport" / "session.json"


def session_settings() -> dict:
    """The persisted view settings for the current state."""
    p = state.projection
    ll = p.center.as_lat_lon()
    return {
        "viewport_last_latitude": ll.lat,
        "viewport_last_longitude": ll.lon,
        "viewport_last_zoom_xpp": p.scale.x_mpp,
        "viewport_last_zoom_ypp": p.scale.y_mpp,
        "viewport_draw_mode": p.draw_mode.value,
        "viewport_history_size": state.history.max_items,
        "viewport_history_diff_dist": state.history.coalesce_radius_m,
    }


def config_from_settings(data: dict, base: ViewportConfig) -> ViewportConfig:
    """Apply persisted settings on top of ``base``. Raises ValueError on bad values."""
    updates = {}
    for key, field in (
        ("viewport_last_latitude", "default_lat"),
        ("viewport_last_longitude", "default_lon"),
        ("viewport_last_zoom_xpp", "default_x_mpp"),
        ("viewport_last_zoom_ypp", "default_y_mpp"),
        ("viewport_draw_mode", "draw_mode"),
        ("viewport_history_size", "history_size"),
        ("viewport_history_diff_dist", "history_radius_m"),
    ):
        if data.get(key) is not None:
            updates[field] = data[key]
    return ViewportConfig(**{**base.model_dump(), **updates})


def register_session_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def save_session(path: str | None = None) -> str:
        """Save the current view (center, scale, draw mode, history settings) to a JSON file.

        The history entries themselves are not saved.
        **Next:** load_session in a future session to restore this view.

        Args:
            path: Where to save. Default: ~/.cache/gis-viewport/session.json
        """
        save_path = Path(path) if path else _default_path()
        save_path.parent.mkdir(parents=True, exist_ok=True)

        with open(save_path, "w") as f:
            json.dump(session_settings(), f, indent=2)

        logger.info("Session saved to %s", save_path)
        return f"Session saved to {save_path}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def load_session(path: str | None = None) -> str:
        """Restore a view saved with save_session.

        The history is cleared and the restored center becomes its first entry.

        Args:
            path: Path to load from. Default: ~/.cache/gis-viewport/session.json
        """
        load_path = Path(path) if path else _default_path()

        if not load_path.exists():
            return f"Error: Session file not found at {load_path}"

        try:
            with open(load_path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            return f"Error: Invalid session file: {e}"

        try:
            config = config_from_settings(data, state.config)
        except ValidationError as e:
            return f"Error: Invalid session settings: {e.errors()[0]['msg']}"
        except ValueError as e:
            return f"Error: {e}"

        # Keep the canvas the client is currently drawing on
        config.canvas_width = state.projection.width
        config.canvas_height = state.projection.height
        state.reset(config)
        state.history.save_current(state.projection.center)

        logger.info("Session loaded from %s", load_path)
        return (
            f"Session restored from {load_path}. "
            f"Center: {state.projection.center} | Scale: {state.projection.scale_label()} | "
            f"Draw mode: {state.projection.draw_mode.value}"
        )
