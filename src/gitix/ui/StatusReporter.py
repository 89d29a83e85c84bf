# gitix/ui/StatusReporter.py
"""StatusReporter.py
========================
Passive sink for everything the user reads outside the menus: the static
instruction line, the transient status message, the terminal size readout
and the text shown in the action panel.

The reporter never draws by itself. DrawScreen asks it for the status line
and the wrapped panel lines on every frame.
"""

import logging
import textwrap
from typing import Optional

from gitix.ui.DrawScreen import string_width


logger = logging.getLogger("gitix")

INSTRUCTIONS = "Tab or arrow keys: Move focus between menus"
DEFAULT_PANEL_TEXT = "Select an action from the submenu"


class StatusReporter:
    def __init__(self, instructions: str = INSTRUCTIONS, default_text: str = DEFAULT_PANEL_TEXT):
        self.instructions: str = instructions
        self.default_text: str = default_text
        self.message: Optional[str] = None
        self.terminal_size: str = ""
        self.panel_text: str = default_text

    def set_message(self, message: str) -> None:
        """Shows `message` in the right half of the status bar until cleared."""
        self.message = message
        logger.debug(f"Status: {message}")

    def clear_message(self) -> None:
        self.message = None

    def show_output(self, text: str) -> None:
        self.panel_text = text

    def set_terminal_size(self, width: int, height: int) -> None:
        self.terminal_size = f"Terminal size: {width}x{height}"

    def reset(self) -> None:
        """Drops the transient message and restores the default panel text."""
        self.message = None
        self.panel_text = self.default_text

    def status_line(self, width: int) -> tuple[str, str]:
        """Returns the (left, right) halves of the status bar for `width` columns.

        The transient message takes precedence over the terminal size. The
        right part is dropped when both would not fit side by side.
        """
        left = self.instructions
        right = self.message if self.message else self.terminal_size
        if width <= 0:
            return "", ""
        if string_width(left) + string_width(right) + 1 > width:
            return (right, "") if self.message else (left, "")
        return left, right

    def panel_lines(self, width: int) -> list[str]:
        if width <= 0:
            return []
        lines: list[str] = []
        for raw in self.panel_text.splitlines() or [""]:
            wrapped = textwrap.wrap(raw, width)
            lines.extend(wrapped or [""])
        return lines
