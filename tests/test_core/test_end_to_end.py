# tests/test_core/test_end_to_end.py
"""End-to-end scenarios driven through `Gitix.on_key`.
======================================================

Keys go through the same entry point the main loop uses, with a mocked
screen and the inline GitBridge double from conftest.
"""

import curses

from gitix.core.FocusController import FocusZone
from gitix.core.MenuRegistry import SAVE_CHANGES
from gitix.ui.panels import BasePanel, CommitPanel
from gitix.ui.StatusReporter import DEFAULT_PANEL_TEXT


class EscapeSwallowingPanel(BasePanel):
    """An action UI that consumes every key, Escape included."""

    def open(self):
        self.files = self.bridge.list_changed_paths()
        super().open()

    def draw(self, win):
        pass

    def handle_key(self, key):
        return True


def test_save_now_then_cancel(app, mock_git_bridge):
    app.host.registered_panels["commit"] = EscapeSwallowingPanel
    controller, status = app.controller, app.status

    assert controller.zone == FocusZone.MENU
    app.on_key(9)
    assert controller.zone == FocusZone.SUBMENU
    assert controller.mounted_submenu == SAVE_CHANGES
    assert controller.mounted_widget.active

    app.on_key(10)  # "Save Now" is the first entry
    assert controller.zone == FocusZone.ACTION_UI
    panel = app.host.active_panel
    assert panel.files == mock_git_bridge.list_changed_paths.return_value

    status_before = (status.message, status.panel_text)
    assert app.on_key(27) is True
    assert controller.zone == FocusZone.ACTION_UI
    assert app.host.active_panel is panel
    assert (status.message, status.panel_text) == status_before

    app.host.cancel()
    assert controller.zone == FocusZone.MENU
    assert status.panel_text == DEFAULT_PANEL_TEXT
    assert status.message is None


def test_commit_flow(app, mock_git_bridge):
    for key in (9, 10):  # into Save Changes, confirm "Save Now"
        app.on_key(key)
    panel = app.host.active_panel
    assert isinstance(panel, CommitPanel)

    app.on_key(ord(" "))
    app.on_key(9)
    for ch in "Initial import":
        app.on_key(ch)
    app.on_key(10)

    mock_git_bridge.stage.assert_called_once_with(["src/app.py"])
    mock_git_bridge.commit.assert_called_once_with("Initial import")
    assert app.controller.zone == FocusZone.MENU
    assert app.status.message == "Commit successful."


def test_escape_in_commit_panel_cancels(app):
    app.on_key(9)
    app.on_key(ord("n"))
    assert app.controller.zone == FocusZone.ACTION_UI
    app.on_key(27)
    assert app.controller.zone == FocusZone.MENU
    assert not app.host.is_active()


def test_exit_stops_loop(app):
    app.running = True
    app.on_key(ord("q"))
    assert app.running is False


def test_resize_key_recomputes_layout(app, mock_stdscr):
    mock_stdscr.getmaxyx.return_value = (40, 120)
    assert app.on_key(curses.KEY_RESIZE) is True
    assert app.geometry.width == 120
    assert app.geometry.region("action").height == 40 - 20 - 1
    assert app.status.terminal_size == "Terminal size: 120x40"
    assert app.controller.zone == FocusZone.MENU


def test_resize_updates_mounted_panel_region(app):
    app.on_key(9)
    app.on_key(ord("n"))
    app.on_resize(100, 30)
    assert app.host.active_panel.region == app.geometry.region("action")
    assert app.host.active_panel.region.width == 100
