# gitix/ui/MenuList.py
"""MenuList.py
========================
Highlightable list widget used for the main menu and for every submenu.

The widget keeps only list state (highlight, scroll offset, emphasis). It
never acts on a confirmed entry itself: `handle_key` returns the entry's
`Action` and the FocusController decides what happens next. Returning None
means the key was declined and the controller may apply its own default.
"""

import curses
import logging
from typing import Any, Optional

from gitix.core.MenuRegistry import HANDLED, Action, ActionKind, MenuEntry
from gitix.ui.KeyBinder import DOWN_KEYS, ENTER_KEYS, UP_KEYS, key_code


logger = logging.getLogger("gitix")


## ================= MenuList Class ===============================
class MenuList:
    """A vertical list of MenuEntry rows with a single highlighted row.

    Attributes:
        name (str): Title drawn in the frame; the submenu name for submenus.
        entries (tuple[MenuEntry, ...]): Rows in display order.
        selected_idx (int): Index of the highlighted row.
        scroll_offset (int): First row index currently on screen.
        active (bool): Focus emphasis, set by the FocusController only.
        mounted (bool): False once the controller has swapped this list out.
    """

    def __init__(self, name: str, entries: tuple[MenuEntry, ...]):
        self.name: str = name
        self.entries: tuple[MenuEntry, ...] = entries
        self.selected_idx: int = 0
        self.scroll_offset: int = 0
        self.active: bool = False
        self.mounted: bool = True

    def __repr__(self) -> str:
        return f"MenuList({self.name!r}, {len(self.entries)} entries)"

    @property
    def highlighted(self) -> Optional[MenuEntry]:
        if not self.entries:
            return None
        return self.entries[self.selected_idx]

    def move(self, delta: int) -> None:
        if not self.entries:
            return
        self.selected_idx = (self.selected_idx + delta) % len(self.entries)

    def select_index(self, index: int) -> None:
        if self.entries:
            self.selected_idx = max(0, min(index, len(self.entries) - 1))

    def index_of_shortcut(self, ch: str) -> Optional[int]:
        for i, entry in enumerate(self.entries):
            if entry.shortcut == ch:
                return i
        return None

    def confirm(self) -> Action:
        """Returns the action of the highlighted entry (UNBOUND if it has none)."""
        entry = self.highlighted
        if entry is None:
            return HANDLED
        if entry.action is None:
            return Action(ActionKind.UNBOUND, entry.label)
        return entry.action

    def handle_key(self, key: Any) -> Optional[Action]:
        code = key_code(key)
        if code in UP_KEYS:
            self.move(-1)
            return HANDLED
        if code in DOWN_KEYS:
            self.move(1)
            return HANDLED
        if code == curses.KEY_HOME:
            self.select_index(0)
            return HANDLED
        if code == curses.KEY_END:
            self.select_index(len(self.entries) - 1)
            return HANDLED
        if code in ENTER_KEYS:
            return self.confirm()
        if 32 < code < 127:
            index = self.index_of_shortcut(chr(code))
            if index is not None:
                self.select_index(index)
                logger.debug(f"MenuList '{self.name}': shortcut '{chr(code)}' -> {self.entries[index].label}")
                return self.confirm()
        return None

    def visible_range(self, rows: int, row_height: int = 1) -> range:
        """Adjusts the scroll offset so the highlight is on screen and returns the visible indices."""
        per_page = max(1, rows // max(1, row_height))
        if self.selected_idx < self.scroll_offset:
            self.scroll_offset = self.selected_idx
        elif self.selected_idx >= self.scroll_offset + per_page:
            self.scroll_offset = self.selected_idx - per_page + 1
        self.scroll_offset = max(0, min(self.scroll_offset, max(0, len(self.entries) - per_page)))
        return range(self.scroll_offset, min(len(self.entries), self.scroll_offset + per_page))
