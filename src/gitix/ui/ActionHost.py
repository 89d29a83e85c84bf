# gitix/ui/ActionHost.py
"""ActionHost.py
========================
This module defines the ActionUIHost class, which owns the lifecycle of the
single input-exclusive action UI (a panel from `gitix.ui.panels`) mounted in
the action region of the screen.

Lifecycle: ``activate`` mounts a panel and remembers the completion callback;
the panel ends with ``finish(message)`` or ``cancel()``; either one unmounts
the panel and invokes the callback exactly once. At most one panel is
mounted at a time and a second activation is rejected.
"""

import curses
import logging
from typing import Any, Callable, Optional

from gitix.integrations.GitBridge import GitBridge
from gitix.ui.LayoutEngine import Region
from gitix.ui.StatusReporter import StatusReporter

from .panels import BasePanel, CommitPanel, IdentityPanel


CompletionCallback = Callable[[Optional[str]], None]


## ================= ActionUIHost Class ===============================
class ActionUIHost:
    """ActionUIHost Class
    ==========================
    Mounts, drives and unmounts action UI panels.

    Attributes:
        bridge (GitBridge): Git executor handed to every panel.
        status (StatusReporter): Sink for user-visible messages.
        colors (dict[str, int]): Attributes shared with the renderer.
        active_panel (Optional[BasePanel]): The mounted panel, if any.
        registered_panels (dict[str, type[BasePanel]]): Action name -> panel class.

    Methods:
        activate(name, region, on_complete, **params) -> Optional[BasePanel]
        is_active() -> bool
        is_busy() -> bool
        finish(message) -> None
        cancel() -> None
        handle_key(key) -> bool
        draw(win) -> None
        resize(region) -> None
    """

    def __init__(
        self,
        bridge: GitBridge,
        status: StatusReporter,
        colors: Optional[dict[str, int]] = None,
    ):
        self.bridge = bridge
        self.status = status
        self.colors: dict[str, int] = colors if colors is not None else {}
        self.active_panel: Optional[BasePanel] = None
        self._on_complete: Optional[CompletionCallback] = None

        self.registered_panels: dict[str, type[BasePanel]] = {
            "commit": CommitPanel,
            "identity": IdentityPanel,
        }
        logging.info(
            "ActionUIHost initialised with: %s", list(self.registered_panels.keys())
        )

    def is_active(self) -> bool:
        return self.active_panel is not None

    def is_busy(self) -> bool:
        return self.active_panel is not None and self.active_panel.busy

    def activate(
        self,
        name: str,
        region: Region,
        on_complete: CompletionCallback,
        **params: Any,
    ) -> Optional[BasePanel]:
        """Creates, opens and mounts the panel registered under `name`.

        Returns the mounted panel, or None (with no state change) if another
        panel is already active, the name is unknown or the panel fails to open.
        """
        if self.is_active():
            logging.warning(
                "AlreadyActive: '%s' requested while %s is mounted",
                name,
                self.active_panel.__class__.__name__,
            )
            return None

        PanelCls = self.registered_panels.get(name)
        if not PanelCls:
            msg = f"Error: Unknown action '{name}'"
            self.status.set_message(msg)
            logging.error(msg)
            return None

        try:
            panel = PanelCls(self, region, **params)
            panel.open()
        except Exception as exc:
            logging.exception("Failed to open action UI '%s': %s", name, exc)
            self.status.set_message(f"{PanelCls.open_error_prefix}{exc}")
            return None

        self.active_panel = panel
        self._on_complete = on_complete
        logging.info(f"Action UI '{name}' mounted.")
        return panel

    def _unmount(self, message: Optional[str]) -> None:
        panel, callback = self.active_panel, self._on_complete
        self.active_panel = None
        self._on_complete = None
        if panel is not None:
            logging.info("Closing action UI: %s", panel.__class__.__name__)
            try:
                panel.close()
            except Exception:
                logging.exception("Exception while closing action UI")
        if callback is not None:
            callback(message)

    def finish(self, message: Optional[str] = None) -> None:
        """Completes the active action UI successfully and reports `message`."""
        if not self.is_active():
            return
        self._unmount(message)

    def cancel(self) -> None:
        """Unmounts the active action UI without a message. No-op when inactive."""
        if not self.is_active():
            return
        self._unmount(None)

    def handle_key(self, key: Any) -> bool:
        """Passes a key to the active panel. Returns True if the panel consumed it."""
        if self.active_panel is None:
            return False
        try:
            return bool(self.active_panel.handle_key(key))
        except Exception:
            logging.exception("Action UI key-handler crashed")
        return False

    def draw(self, win: Any) -> None:
        if self.active_panel is None:
            return
        try:
            self.active_panel.draw(win)
        except curses.error:
            pass
        except Exception:
            logging.exception("Action UI draw() crashed")

    def resize(self, region: Region) -> None:
        if self.active_panel is None:
            return
        try:
            self.active_panel.resize(region)
        except Exception:
            logging.exception("Action UI resize() crashed")
