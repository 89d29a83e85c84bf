# gitix/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen renders one gitix frame with the curses library.

Every frame starts from a fresh `compute_layout` call for the current
terminal size, so the drawn regions always match the real screen. The
renderer only reads state: the menus and their emphasis come from the
FocusController, the action region from the ActionUIHost (or the
StatusReporter's panel text when no action UI is mounted) and the bottom
row from the StatusReporter.

Drawing is double-buffered: regions are drawn into sub-windows staged with
``noutrefresh()`` and the physical screen is updated by a single
``curses.doupdate()`` in `_update_display`.
"""

import curses
import logging
from typing import TYPE_CHECKING, Any, Optional

from wcwidth import wcwidth

from gitix.ui.LayoutEngine import MIN_HEIGHT, MIN_WIDTH, LayoutGeometry, Region, compute_layout
from gitix.ui.MenuList import MenuList


if TYPE_CHECKING:
    from gitix.core.Gitix import Gitix

CursesWindow = Any


def truncate_string(s: str, max_width: int) -> str:
    """Return `s` clipped to visual width `max_width`.

    Wide characters (e.g. CJK) count as two cells; non-printable characters
    are treated as one cell.
    """
    result: list[str] = []
    consumed = 0
    for ch in s:
        w = wcwidth(ch)
        if w < 0:
            w = 1
        if consumed + w > max_width:
            break
        result.append(ch)
        consumed += w
    return "".join(result)


def string_width(s: str) -> int:
    """Visual width of `s` in terminal cells, measured like `truncate_string`."""
    total = 0
    for ch in s:
        w = wcwidth(ch)
        total += 1 if w < 0 else w
    return total


def draw_frame(win: CursesWindow, region: Region, title: str, attr: int) -> None:
    """Draws a border around `win` with `title` on the top edge."""
    try:
        win.attron(attr)
        win.border()
        win.attroff(attr)
        if title and region.width > 6:
            label = truncate_string(f" {title} ", region.width - 4)
            win.addstr(0, 2, label, attr | curses.A_BOLD)
    except curses.error:
        pass


## ================= DrawScreen Class ==============================
class DrawScreen:
    """Draws the menu, submenu, action and status regions of the gitix screen.

    Attributes:
        app (Gitix): The application whose state is drawn.
        stdscr (curses.window): The main curses window.
        colors (dict[str, int]): Attribute per role ("focused", "unfocused",
            "selected", "status", "error").
        min_width (int), min_height (int): Smallest usable terminal size.
    """

    def __init__(self, app: "Gitix", config: dict[str, Any]) -> None:
        self.app = app
        self.config = config
        self.stdscr = app.stdscr
        self.colors = app.colors
        ui_config = config.get("ui", {})
        self.min_width: int = int(ui_config.get("min_width", MIN_WIDTH))
        self.min_height: int = int(ui_config.get("min_height", MIN_HEIGHT))

    def _attr(self, role: str, default: int = curses.A_NORMAL) -> int:
        return self.colors.get(role, default)

    def draw(self) -> LayoutGeometry:
        """Draws a full frame and returns the geometry it was drawn with."""
        height, width = self.stdscr.getmaxyx()
        geometry = compute_layout(width, height, self.min_width, self.min_height)
        self.app.status.set_terminal_size(geometry.width, geometry.height)

        try:
            self.stdscr.erase()
        except curses.error:
            pass

        if geometry.too_small:
            self._show_small_window_error(geometry.height, geometry.width)
            return geometry

        controller = self.app.controller
        self._draw_menu(geometry.region("menu"), controller.menu)
        self._draw_submenu(geometry.region("submenu"), controller.mounted_widget)
        self._draw_action_region(geometry.region("action"))
        self._draw_status_bar(geometry.region("status"))
        return geometry

    def _region_window(self, region: Region) -> Optional[CursesWindow]:
        if region.empty:
            return None
        try:
            return self.stdscr.derwin(region.height, region.width, region.row, region.col)
        except curses.error:
            logging.debug(f"DrawScreen: cannot create window for {region}")
            return None

    def _frame_attr(self, active: bool) -> int:
        if active:
            return self._attr("focused", curses.A_BOLD) | curses.A_BOLD
        return self._attr("unfocused")

    def _draw_menu(self, region: Region, menu: MenuList) -> None:
        win = self._region_window(region)
        if win is None:
            return
        draw_frame(win, region, "Menu", self._frame_attr(menu.active))
        self._draw_entries(win, region, menu)
        win.noutrefresh()

    def _draw_submenu(self, region: Region, submenu: Optional[MenuList]) -> None:
        win = self._region_window(region)
        if win is None:
            return
        if submenu is None:
            draw_frame(win, region, "", self._frame_attr(False))
        else:
            draw_frame(win, region, submenu.name, self._frame_attr(submenu.active))
            self._draw_entries(win, region, submenu)
        win.noutrefresh()

    def _draw_entries(self, win: CursesWindow, region: Region, menu: MenuList) -> None:
        """Draws the list rows inside the frame; descriptions are shown when there is room."""
        rows = region.height - 2
        inner = region.width - 4
        if rows <= 0 or inner <= 0:
            return
        with_descriptions = rows >= 2 * len(menu.entries)
        row_height = 2 if with_descriptions else 1
        y = 1
        for index in menu.visible_range(rows, row_height):
            entry = menu.entries[index]
            highlighted = index == menu.selected_idx
            if highlighted and menu.active:
                attr = self._attr("selected", curses.A_BOLD) | curses.A_REVERSE
            elif highlighted:
                attr = curses.A_BOLD
            else:
                attr = curses.A_NORMAL
            text = truncate_string(f"({entry.shortcut}) {entry.label}", inner)
            try:
                win.addstr(y, 2, text.ljust(inner), attr)
                if with_descriptions:
                    win.addstr(y + 1, 6, truncate_string(entry.description, max(0, inner - 4)), curses.A_DIM)
            except curses.error:
                pass
            y += row_height

    def _draw_action_region(self, region: Region) -> None:
        win = self._region_window(region)
        if win is None:
            return
        host = self.app.host
        if host.is_active():
            if host.active_panel.region != region:
                host.resize(region)
            host.draw(win)
        else:
            draw_frame(win, region, "Action", self._frame_attr(False))
            inner = region.width - 4
            for i, line in enumerate(self.app.status.panel_lines(inner)[: max(0, region.height - 2)]):
                try:
                    win.addstr(1 + i, 2, truncate_string(line, inner))
                except curses.error:
                    pass
        win.noutrefresh()

    def _draw_status_bar(self, region: Region) -> None:
        if region.empty:
            return
        y = region.row
        width = region.width
        left, right = self.app.status.status_line(width)
        attr = self._attr("status", curses.A_REVERSE)
        try:
            self.stdscr.addstr(y, 0, " " * (width - 1), attr)
            self.stdscr.addstr(y, 0, truncate_string(left, width - 1), attr)
            if right:
                right = truncate_string(right, width - 1)
                right_attr = attr
                if right.startswith("Error"):
                    right_attr = self._attr("error", attr) | curses.A_BOLD
                self.stdscr.addstr(y, max(0, width - 1 - string_width(right)), right, right_attr)
        except curses.error:
            pass

    def _show_small_window_error(self, height: int, width: int) -> None:
        """Displays a message that the terminal is too small."""
        msg = (
            f"Terminal too small ({width}x{height}). "
            f"Minimum is {self.min_width}x{self.min_height}."
        )
        try:
            start_col = max(0, (width - len(msg)) // 2)
            self.stdscr.addstr(height // 2, start_col, truncate_string(msg, max(0, width - 1)))
        except curses.error:
            pass

    def _update_display(self) -> None:
        """Stages the main window and pushes all pending changes to the terminal."""
        try:
            self.stdscr.noutrefresh()
            curses.doupdate()
        except curses.error as e:
            logging.error(f"Curses doupdate error: {e}")
