# tests/conftest.py
"""Pytest configuration with shared fixtures for the gitix tests.

The fixtures build the real components (StatusReporter, ActionUIHost,
FocusController, Gitix) around two fakes: a MagicMock standing in for the
curses screen and a `Mock(spec=GitBridge)` whose ``submit`` runs jobs inline,
so every git round trip completes inside the key press that started it.
"""

from __future__ import annotations

import copy
from typing import Any
from unittest.mock import MagicMock, Mock, patch

import pytest

from gitix.core.FocusController import FocusController
from gitix.core.Gitix import Gitix
from gitix.core.MenuRegistry import MenuRegistry
from gitix.integrations.GitBridge import ChangedFile, GitBridge
from gitix.ui.ActionHost import ActionUIHost
from gitix.ui.LayoutEngine import Region
from gitix.ui.StatusReporter import StatusReporter
from gitix.utils.utils import DEFAULT_CONFIG


CHANGED_PATHS = ["src/app.py", "README.md", "docs/guide.md"]
CHANGED_FILES = [
    ChangedFile("src/app.py", " ", "M"),
    ChangedFile("README.md", "M", " "),
    ChangedFile("docs/guide.md", "?", "?"),
]


# --- Base fixtures for curses and configuration ---
@pytest.fixture
def mock_stdscr() -> MagicMock:
    """A mock `stdscr` with the terminal size set to (24, 80)."""
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    return stdscr


@pytest.fixture
def mock_config() -> dict[str, dict[str, Any]]:
    """Default configuration with git jobs executed inline."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["git"]["async_commands"] = False
    return config


# --- Git fixtures ---
@pytest.fixture
def mock_git_bridge() -> Mock:
    """A GitBridge double; `submit` delivers ``(result, error)`` synchronously."""
    bridge = Mock(spec=GitBridge)
    bridge.list_changed_paths.return_value = list(CHANGED_PATHS)
    bridge.changed_files.return_value = list(CHANGED_FILES)
    bridge.get_config.return_value = "Jane Doe"
    bridge.run_named.return_value = "## main\n M src/app.py"
    bridge.commit.return_value = "[main 1a2b3c4] message"
    bridge.is_busy.return_value = False
    bridge.process_queues.return_value = False
    bridge.submit.side_effect = lambda job, callback: callback(*GitBridge._call(job))
    return bridge


# --- Component fixtures ---
@pytest.fixture
def action_region() -> Region:
    return Region(12, 0, 80, 11)


@pytest.fixture
def status() -> StatusReporter:
    return StatusReporter()


@pytest.fixture
def host(mock_git_bridge: Mock, status: StatusReporter) -> ActionUIHost:
    return ActionUIHost(mock_git_bridge, status, {})


@pytest.fixture
def controller(
    mock_git_bridge: Mock, status: StatusReporter, host: ActionUIHost, action_region: Region
) -> FocusController:
    return FocusController(
        MenuRegistry.default(), host, status, mock_git_bridge, lambda: action_region
    )


@pytest.fixture
def app(mock_stdscr: MagicMock, mock_config: dict[str, Any], mock_git_bridge: Mock) -> Gitix:
    """A real Gitix instance on a mocked screen, in monochrome mode."""
    with patch("gitix.core.Gitix.curses.has_colors", return_value=False):
        return Gitix(mock_stdscr, config=mock_config, git=mock_git_bridge)
