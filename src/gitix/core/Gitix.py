# gitix/core/Gitix.py
"""Gitix.py
========================
The gitix application: owns the curses screen, the configuration and the
event loop, and wires the components together.

    keys / KEY_RESIZE
          |
          v
        Gitix.on_key ----> on_resize ----> compute_layout
          |
          v
    FocusController ----> MenuRegistry / ActionUIHost
          |
          v
    StatusReporter <---- DrawScreen (reads everything, every frame)

The loop polls input with a 100 ms timeout, drains GitBridge results between
keys and redraws only when something changed.
"""

import curses
import logging
from typing import Any, Optional

from gitix.core.FocusController import FocusController, FocusZone
from gitix.core.MenuRegistry import MenuRegistry
from gitix.integrations.GitBridge import GitBridge
from gitix.ui.ActionHost import ActionUIHost
from gitix.ui.DrawScreen import DrawScreen
from gitix.ui.KeyBinder import describe_key, get_key_input
from gitix.ui.LayoutEngine import MIN_HEIGHT, MIN_WIDTH, LayoutGeometry, Region, compute_layout
from gitix.ui.StatusReporter import StatusReporter
from gitix.utils.logging_config import KEY_LOGGER
from gitix.utils.utils import DEFAULT_CONFIG, color_index


logger = logging.getLogger("gitix")

# role -> (config key for the foreground, extra attribute)
COLOR_ROLES = {
    "focused": ("focused", curses.A_BOLD),
    "unfocused": ("unfocused", curses.A_NORMAL),
    "selected": ("selected", curses.A_BOLD),
    "error": ("error", curses.A_BOLD),
}


## ================= Gitix Class ==============================
class Gitix:
    """Gitix Class
    =========================
    Top-level application object.

    Attributes:
        stdscr (curses.window): Screen handed in by ``curses.wrapper``.
        config (dict): Merged application configuration.
        colors (dict[str, int]): Curses attribute per UI role.
        git (GitBridge): Git executor.
        registry (MenuRegistry): Static menu tree.
        status (StatusReporter): Status bar and action panel text.
        host (ActionUIHost): Owner of the mounted action UI.
        controller (FocusController): Focus state machine.
        drawer (DrawScreen): Frame renderer.
        geometry (LayoutGeometry): Layout of the last resize or render.
        running (bool): Main loop flag.
    """

    def __init__(
        self,
        stdscr: Any,
        config: Optional[dict[str, Any]] = None,
        git: Optional[GitBridge] = None,
        registry: Optional[MenuRegistry] = None,
    ) -> None:
        self.stdscr = stdscr
        self.config: dict[str, Any] = config if config is not None else DEFAULT_CONFIG
        ui_config = self.config.get("ui", {})
        self.min_width: int = int(ui_config.get("min_width", MIN_WIDTH))
        self.min_height: int = int(ui_config.get("min_height", MIN_HEIGHT))

        self.colors: dict[str, int] = {}
        self.init_colors()

        self.git = git if git is not None else GitBridge(self.config)
        self.registry = registry if registry is not None else MenuRegistry.default()
        self.status = StatusReporter()
        self.host = ActionUIHost(self.git, self.status, self.colors)

        height, width = self.stdscr.getmaxyx()
        self.geometry: LayoutGeometry = compute_layout(width, height, self.min_width, self.min_height)
        self.status.set_terminal_size(self.geometry.width, self.geometry.height)

        self.controller = FocusController(
            self.registry, self.host, self.status, self.git, self._action_region
        )
        self.drawer = DrawScreen(self, self.config)
        self.running = False
        self._force_full_redraw = True
        logger.info(f"Gitix initialised at {width}x{height}.")

    def _action_region(self) -> Region:
        return self.geometry.region("action")

    def init_colors(self) -> None:
        """Initializes curses color pairs with graceful degradation to monochrome."""
        self.colors.clear()
        try:
            has_colors = curses.has_colors() and curses.COLORS >= 8
        except curses.error:
            has_colors = False

        if not has_colors:
            logging.warning("Terminal has no or limited color support (< 8). Using monochrome attributes.")
            self.colors.update({
                "focused": curses.A_BOLD,
                "unfocused": curses.A_NORMAL,
                "selected": curses.A_BOLD,
                "error": curses.A_REVERSE | curses.A_BOLD,
                "status": curses.A_REVERSE,
            })
            return

        curses.start_color()
        curses.use_default_colors()
        color_config = self.config.get("colors", {})
        pair = 1
        for role, (key, extra) in COLOR_ROLES.items():
            curses.init_pair(pair, color_index(color_config.get(key, "white")), -1)
            self.colors[role] = curses.color_pair(pair) | extra
            pair += 1
        curses.init_pair(
            pair,
            color_index(color_config.get("status_fg", "white")),
            color_index(color_config.get("status_bg", "blue"), curses.COLOR_BLUE),
        )
        self.colors["status"] = curses.color_pair(pair)

    # --- Loop-facing API ---

    def on_key(self, key: Any) -> bool:
        """Handles one key. Returns True if it changed anything visible."""
        KEY_LOGGER.debug(f"{describe_key(key)} {self.describe_state()}")
        if key == curses.KEY_RESIZE:
            height, width = self.stdscr.getmaxyx()
            self.on_resize(width, height)
            return True

        consumed = self.controller.handle_key(key)
        if self.controller.exit_requested:
            self.running = False
        return consumed

    def on_resize(self, width: int, height: int) -> None:
        self.geometry = compute_layout(width, height, self.min_width, self.min_height)
        self.status.set_terminal_size(self.geometry.width, self.geometry.height)
        self.host.resize(self.geometry.region("action"))
        self._force_full_redraw = True
        logging.debug(f"Window resized to {self.geometry.width}x{self.geometry.height}.")

    def render(self) -> LayoutGeometry:
        """Draws a frame from freshly computed geometry and flushes it to the terminal."""
        self.geometry = self.drawer.draw()
        self.drawer._update_display()
        return self.geometry

    # --- Main loop ---

    def run(self) -> None:
        """The main event loop; runs until Exit is chosen or the loop is interrupted."""
        logger.info("gitix main loop started.")
        self.running = True
        self._force_full_redraw = True

        self.stdscr.keypad(True)
        self.stdscr.timeout(100)
        try:
            curses.curs_set(0)
        except curses.error:
            pass

        while self.running:
            try:
                redraw_needed = self._process_events_and_input()
                self._render_screen(redraw_needed)
            except KeyboardInterrupt:
                logger.info("Main loop interrupted by KeyboardInterrupt.")
                self.running = False
            except Exception as e:
                logger.critical("Unhandled exception in main loop: %s", e, exc_info=True)
                self.running = False

        logger.info("gitix main loop finished.")

    def _process_events_and_input(self) -> bool:
        redraw_needed = self.git.process_queues()

        key = get_key_input(self.stdscr)
        if key is not None and key != curses.ERR:
            if self.on_key(key):
                redraw_needed = True
        return redraw_needed

    def _render_screen(self, redraw_needed: bool) -> None:
        if not redraw_needed and not self._force_full_redraw:
            return
        self.render()
        self._force_full_redraw = False

    def describe_state(self) -> str:
        zone = self.controller.zone
        busy = " busy" if zone == FocusZone.ACTION_UI and self.controller.busy else ""
        return f"zone={zone.name} submenu={self.controller.mounted_submenu}{busy}"
