"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text


if TYPE_CHECKING:
    from sitecaps.core.models import CapabilitySet


STATE_COLORS = {
    "fresh": "green",
    "stale": "yellow",
    "missing": "red",
}


def format_state(state: str) -> Text:
    """Format a freshness state with color coding.

    Args:
        state: "fresh", "stale", or "missing".

    Returns:
        Rich Text: fresh is green, stale yellow, missing red.
    """
    color = STATE_COLORS.get(state, "")
    return Text(state, style=color) if color else Text(state)


def format_flag(enabled: bool) -> Text:
    """Render a product flag as a colored yes/no."""
    return Text("yes", style="green") if enabled else Text("no", style="dim")


def format_capabilities(capabilities: CapabilitySet) -> str:
    """Join capability names in a stable order, or '-' when empty."""
    if not capabilities:
        return "-"
    return ", ".join(sorted(cap.value for cap in capabilities))
