# gitix/core/FocusController.py
"""FocusController.py
========================
The focus-and-layout state machine of gitix.

Exactly one FocusZone owns keyboard input at any time:

    MENU       the main menu list
    SUBMENU    the currently mounted submenu list
    ACTION_UI  the panel mounted in the ActionUIHost (input-exclusive)

The controller is the only code that changes the zone or the mounted
submenu. Widgets report confirmed entries as `Action` values and the
controller interprets them; after every transition the focus emphasis of
all widgets is recomputed from the zone by `focus_visual_state`.
"""

import curses
import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from gitix.core.MenuRegistry import Action, ActionKind, MenuRegistry
from gitix.integrations.GitBridge import GitBridge
from gitix.ui.ActionHost import ActionUIHost
from gitix.ui.KeyBinder import KEY_BTAB, KEY_ESC, KEY_TAB, key_code
from gitix.ui.LayoutEngine import Region
from gitix.ui.MenuList import MenuList
from gitix.ui.StatusReporter import StatusReporter


logger = logging.getLogger("gitix")

NOT_IMPLEMENTED = "This action is not yet implemented."

FORWARD_KEYS = (KEY_TAB, KEY_BTAB, curses.KEY_RIGHT)
BACKWARD_KEYS = (KEY_TAB, KEY_BTAB, curses.KEY_LEFT)


class FocusZone(enum.Enum):
    MENU = "menu"
    SUBMENU = "submenu"
    ACTION_UI = "action_ui"


@dataclass(frozen=True)
class FocusVisualState:
    menu_active: bool
    submenu_active: bool


def focus_visual_state(zone: FocusZone) -> FocusVisualState:
    """Emphasis of the menu and the mounted submenu for `zone`."""
    return FocusVisualState(
        menu_active=zone == FocusZone.MENU,
        submenu_active=zone == FocusZone.SUBMENU,
    )


## ================= FocusController Class ==============================
class FocusController:
    """Routes keys by focus zone and performs every zone transition.

    Args:
        registry: The static menu tree.
        host: Owner of the input-exclusive action UI.
        status: Sink for user-visible feedback.
        bridge: Executor for the read-only COMMAND entries.
        action_region: Zero-argument callable returning the current action
            region; called at activation time so the panel gets fresh geometry.
    """

    def __init__(
        self,
        registry: MenuRegistry,
        host: ActionUIHost,
        status: StatusReporter,
        bridge: GitBridge,
        action_region: Callable[[], Region],
    ):
        self.registry = registry
        self.host = host
        self.status = status
        self.bridge = bridge
        self._action_region = action_region

        self.menu = MenuList("Menu", registry.main_menu)
        self._submenus: dict[str, MenuList] = {}
        self._mounted: Optional[MenuList] = None
        self._zone = FocusZone.MENU
        self.exit_requested = False
        # bumped by every command and reset; older command results are dropped
        self._command_seq = 0
        self._sync_visual_state()

    # --- Read-only state ---

    @property
    def zone(self) -> FocusZone:
        return self._zone

    @property
    def mounted_submenu(self) -> Optional[str]:
        return self._mounted.name if self._mounted else None

    @property
    def mounted_widget(self) -> Optional[MenuList]:
        return self._mounted

    def mounted_widgets(self) -> list[MenuList]:
        return [w for w in self._submenus.values() if w.mounted]

    def visual_state(self) -> FocusVisualState:
        return focus_visual_state(self._zone)

    @property
    def busy(self) -> bool:
        return self.host.is_busy()

    # --- Transitions ---

    def _set_zone(self, zone: FocusZone) -> None:
        if zone == FocusZone.ACTION_UI:
            assert self.host.is_active(), "ACTION_UI requires a mounted action UI"
        if zone == FocusZone.SUBMENU:
            assert self._mounted is not None, "SUBMENU requires a mounted submenu"
        if zone != self._zone:
            logger.debug(f"FocusController: {self._zone.name} -> {zone.name}")
        self._zone = zone
        self._sync_visual_state()

    def _sync_visual_state(self) -> None:
        state = focus_visual_state(self._zone)
        self.menu.active = state.menu_active
        for widget in self._submenus.values():
            widget.active = state.submenu_active and widget is self._mounted

    def _unmount_submenu(self) -> None:
        if self._mounted is not None:
            logger.debug(f"FocusController: unmount submenu '{self._mounted.name}'")
            self._mounted.mounted = False
            self._mounted = None

    def show_submenu(self, name: str) -> bool:
        """Swaps the mounted submenu for `name`. Returns False if `name` is not registered."""
        definition = self.registry.lookup_submenu(name)
        self._unmount_submenu()
        if definition is None:
            self._sync_visual_state()
            return False
        widget = self._submenus.get(name)
        if widget is None:
            widget = MenuList(definition.name, definition.entries)
            self._submenus[name] = widget
        widget.mounted = True
        widget.select_index(0)
        self._mounted = widget
        logger.debug(f"FocusController: mount submenu '{name}'")
        self._sync_visual_state()
        return True

    def focus_menu(self) -> None:
        self._set_zone(FocusZone.MENU)

    def focus_submenu(self) -> bool:
        """Mounts the submenu of the highlighted main-menu entry and focuses it."""
        entry = self.menu.highlighted
        if entry is None or entry.action is None or entry.action.kind != ActionKind.SUBMENU:
            return False
        if self._mounted is None or self._mounted.name != entry.action.target:
            if not self.show_submenu(entry.action.target):
                return False
        self._set_zone(FocusZone.SUBMENU)
        return True

    def reset(self) -> None:
        """Escape outside an action UI: back to the menu with default status."""
        self._command_seq += 1
        self.status.reset()
        self._set_zone(FocusZone.MENU)

    # --- Key routing ---

    def handle_key(self, key: Any) -> bool:
        """Routes one key according to the current zone. Returns True if consumed."""
        if self._zone == FocusZone.ACTION_UI:
            self.host.handle_key(key)
            return True

        widget = self.menu if self._zone == FocusZone.MENU else self._mounted
        action = widget.handle_key(key) if widget is not None else None
        if action is not None:
            self.dispatch(action)
            return True
        return self._apply_default(key_code(key))

    def _apply_default(self, code: int) -> bool:
        if code == KEY_ESC:
            self.reset()
            return True
        if self._zone == FocusZone.MENU and code in FORWARD_KEYS:
            self.focus_submenu()
            return True
        if self._zone == FocusZone.SUBMENU and code in BACKWARD_KEYS:
            self.focus_menu()
            return True
        return False

    def dispatch(self, action: Action) -> None:
        """Interprets a command value produced by a menu widget."""
        kind = action.kind
        if kind == ActionKind.NONE:
            return
        if kind == ActionKind.SUBMENU:
            if self.show_submenu(action.target):
                self._set_zone(FocusZone.SUBMENU)
            else:
                self._set_zone(FocusZone.MENU)
        elif kind == ActionKind.EXIT:
            logger.info("FocusController: exit requested.")
            self.exit_requested = True
        elif kind == ActionKind.HELP:
            self.status.show_output(self.registry.help_text(action.target))
        elif kind == ActionKind.UNBOUND:
            self.status.set_message(NOT_IMPLEMENTED)
        elif kind == ActionKind.COMMAND:
            self.run_command(action.target)
        elif kind == ActionKind.INTERACTIVE:
            self.activate(action.target, **action.options())
        else:
            logger.warning(f"FocusController: unhandled action {action!r}")

    def run_command(self, name: str) -> None:
        """Runs a read-only git command; its output replaces the action panel text."""
        self._command_seq += 1
        seq = self._command_seq
        self.status.show_output(f"Running {name.replace('_', ' ')}...")

        def done(result: Any, error: Optional[Exception]) -> None:
            if seq != self._command_seq:
                logger.debug(f"FocusController: stale result of '{name}' dropped.")
                return
            if error is not None:
                self.status.set_message(f"Git {name} failed: {error}")
                return
            self.status.show_output(result)

        self.bridge.submit(lambda: self.bridge.run_named(name), done)

    def activate(self, name: str, **params: Any) -> bool:
        """Mounts the action UI `name` and gives it exclusive input."""
        assert self._zone != FocusZone.ACTION_UI, "activate() while ACTION_UI is focused"
        assert not self.host.is_active(), "activate() while an action UI is mounted"
        panel = self.host.activate(name, self._action_region(), self._on_action_complete, **params)
        if panel is None:
            return False
        self._set_zone(FocusZone.ACTION_UI)
        return True

    def _on_action_complete(self, message: Optional[str]) -> None:
        self._command_seq += 1
        self.status.reset()
        if message:
            self.status.set_message(message)
        self._set_zone(FocusZone.MENU)
