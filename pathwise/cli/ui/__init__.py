"""CLI UI components."""

from pathwise.cli.ui.display import (
    display_error,
    display_status,
    display_step_header,
    display_summary,
)
from pathwise.cli.ui.prompts import Prompter, RichPrompter, parse_selection, render_menu

__all__ = [
    "display_error",
    "display_status",
    "display_step_header",
    "display_summary",
    "Prompter",
    "RichPrompter",
    "parse_selection",
    "render_menu",
]
