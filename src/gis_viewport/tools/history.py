"""History tools: go_back, go_forward, list_history."""

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core import navigation
from ._prereqs import require_state


def register_history_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def go_back() -> str:
        """Return to the previous position in the history.

        If the view has moved away from the newest saved position, the
        current view is saved first so go_forward can come back to it.
        """
        if not navigation.go_back(state.projection, state.history):
            return "Error: Already at the oldest position."
        return f"Back to {state.projection.center}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def go_forward() -> str:
        """Go to the next position in the history (after go_back)."""
        try:
            require_state(state, forward=True)
        except ValueError as e:
            return f"Error: {e}"
        navigation.go_forward(state.projection, state.history)
        return f"Forward to {state.projection.center}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_history() -> str:
        """List saved positions, oldest first, marking [Back], [Current] and [Forward]."""
        entries = state.history.entries()
        if not entries:
            return "History is empty."
        return "\n".join(f"{i}. {label}" for i, label in enumerate(entries, 1))
