"""Prerequisite checking helpers for MCP tools."""

from ..models import CoordMode


def require_state(state, *, utm: bool = False, forward: bool = False) -> None:
    """Raise ValueError with a descriptive message if the viewport is not ready.

    Usage in a tool:
        try:
            require_state(state, utm=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if utm and state.projection.mode is not CoordMode.UTM:
        raise ValueError(
            "Switch to the UTM draw mode first with set_draw_mode('utm')."
        )
    if forward and not state.history.forward_available():
        raise ValueError(
            "No later position in the history."
        )
