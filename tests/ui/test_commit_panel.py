# tests/ui/test_commit_panel.py
"""Unit tests for `CommitPanel`.
=================================

The panel is mounted through a real ActionUIHost backed by the inline
GitBridge double from conftest, so stage/commit results arrive within the
same key press. Scenarios:

- toggling files (idempotent per index) and local validation messages,
- the stage -> commit sequence and its two failure prefixes,
- the busy sub-state and results discarded after cancel.
"""

import curses
import threading
from unittest.mock import MagicMock, call

import pytest

from gitix.integrations.GitBridge import ChangedFile, GitBridge, GitError
from gitix.ui.ActionHost import ActionUIHost
from gitix.ui.LayoutEngine import Region
from gitix.ui.panels import CommitPanel


@pytest.fixture
def completion():
    return MagicMock()


@pytest.fixture
def panel(host, action_region, completion) -> CommitPanel:
    mounted = host.activate("commit", action_region, completion)
    assert isinstance(mounted, CommitPanel)
    return mounted


def _type(panel, text):
    for ch in text:
        panel.handle_key(ord(ch))


def test_open_lists_changed_paths(panel, mock_git_bridge):
    mock_git_bridge.changed_files.assert_called_once_with()
    assert panel.files == ["src/app.py", "README.md", "docs/guide.md"]
    assert panel.focused_field == CommitPanel.FIELD_FILES
    assert panel.selected == {}


def test_toggle_twice_restores_membership(panel):
    panel.toggle(1)
    assert panel.selected == {1: "README.md"}
    panel.toggle(1)
    assert panel.selected == {}
    panel.toggle(99)
    assert panel.selected == {}


def test_space_and_enter_toggle_under_cursor(panel):
    panel.handle_key(ord(" "))
    panel.handle_key(curses.KEY_DOWN)
    panel.handle_key(10)
    assert panel.selected_paths() == ["src/app.py", "README.md"]
    panel.handle_key(curses.KEY_UP)
    panel.handle_key(ord(" "))
    assert panel.selected_paths() == ["README.md"]


def test_tab_cycles_fields(panel):
    fields = []
    for _ in range(4):
        panel.handle_key(9)
        fields.append(panel.focused_field)
    assert fields == ["message", "commit", "cancel", "files"]
    panel.handle_key(curses.KEY_BTAB)
    assert panel.focused_field == "cancel"


def test_empty_selection_rejected(panel, host, status, mock_git_bridge):
    panel.handle_key(9)
    _type(panel, "msg")
    panel.handle_key(10)
    assert status.message == "No files selected to commit."
    assert host.is_active()
    mock_git_bridge.submit.assert_not_called()


def test_empty_message_rejected(panel, host, status, mock_git_bridge):
    panel.toggle(0)
    panel.handle_key(9)
    _type(panel, "   ")
    panel.handle_key(10)
    assert status.message == "Commit message cannot be empty."
    assert host.is_active()
    mock_git_bridge.stage.assert_not_called()
    mock_git_bridge.commit.assert_not_called()


def test_backspace_edits_message(panel):
    panel.handle_key(9)
    _type(panel, "fixx")
    panel.handle_key(curses.KEY_BACKSPACE)
    panel.handle_key("é")
    assert panel.message == "fixé"


def test_successful_commit_stages_in_index_order(panel, host, completion, mock_git_bridge):
    panel.toggle(2)
    panel.toggle(0)
    panel.handle_key(9)
    _type(panel, "Add guide")
    panel.handle_key(10)

    assert mock_git_bridge.method_calls[-2:] == [
        call.stage(["src/app.py", "docs/guide.md"]),
        call.commit("Add guide"),
    ]
    completion.assert_called_once_with("Commit successful.")
    assert not host.is_active()


def test_commit_button_submits(panel, completion):
    panel.toggle(0)
    panel.handle_key(9)
    _type(panel, "msg")
    panel.handle_key(9)
    assert panel.focused_field == "commit"
    panel.handle_key(10)
    completion.assert_called_once_with("Commit successful.")


def test_stage_failure_keeps_panel(panel, host, status, completion, mock_git_bridge):
    mock_git_bridge.stage.side_effect = GitError("pathspec did not match")
    panel.toggle(0)
    panel.handle_key(9)
    _type(panel, "msg")
    panel.handle_key(10)
    assert status.message == "Error staging files: pathspec did not match"
    assert host.is_active()
    assert not panel.busy
    mock_git_bridge.commit.assert_not_called()
    completion.assert_not_called()


def test_commit_failure_keeps_panel(panel, host, status, mock_git_bridge):
    mock_git_bridge.commit.side_effect = GitError("nothing to commit")
    panel.toggle(0)
    panel.handle_key(9)
    _type(panel, "msg")
    panel.handle_key(10)
    assert status.message == "Error committing: nothing to commit"
    assert host.is_active()


def test_escape_cancels(panel, host, completion):
    panel.handle_key(27)
    completion.assert_called_once_with(None)
    assert not host.is_active()


def test_cancel_button(panel, completion):
    for _ in range(3):
        panel.handle_key(9)
    panel.handle_key(10)
    completion.assert_called_once_with(None)


def test_busy_swallows_keys_but_escape_cancels(panel, host, completion, mock_git_bridge):
    pending = []
    mock_git_bridge.submit.side_effect = lambda job, callback: pending.append((job, callback))
    panel.toggle(0)
    panel.handle_key(9)
    _type(panel, "msg")
    panel.handle_key(10)

    assert panel.busy
    assert host.is_busy()
    panel.handle_key(ord("x"))
    assert panel.message == "msg"

    panel.handle_key(27)
    completion.assert_called_once_with(None)
    assert not host.is_active()

    # The worker finishes after the cancel: its result is dropped.
    job, callback = pending[0]
    callback("done", None)
    completion.assert_called_once_with(None)


def test_draw_renders_files_and_buttons(panel):
    panel.toggle(1)
    win = MagicMock()
    panel.draw(win)
    texts = [c.args[2] for c in win.addstr.call_args_list if len(c.args) >= 3]
    assert "[ ] src/app.py" in texts
    assert "[x] README.md" in texts
    assert "Message: " in texts
    assert "[Commit]" in texts
    win.border.assert_called_once()


def test_draw_shows_file_status(panel):
    win = MagicMock()
    panel.draw(win)
    texts = [c.args[2] for c in win.addstr.call_args_list if len(c.args) >= 3]
    assert "Modified" in texts
    assert "Modified (staged)" in texts
    assert "Untracked" in texts
    assert "[ ] docs/guide.md" in texts


def test_status_column_dropped_when_narrow(host, completion):
    narrow = host.activate("commit", Region(12, 0, 30, 11), completion)
    win = MagicMock()
    narrow.draw(win)
    texts = [c.args[2] for c in win.addstr.call_args_list if len(c.args) >= 3]
    assert "Modified" not in texts
    assert "[ ] src/app.py" in texts


@pytest.fixture
def async_host(status):
    """A host over a real GitBridge that runs jobs on its worker thread."""
    bridge = GitBridge({"git": {"async_commands": True}})
    bridge.changed_files = MagicMock(return_value=[ChangedFile("src/app.py", " ", "M")])
    bridge.stage = MagicMock()
    return ActionUIHost(bridge, status, {})


def _commit_then_escape(host, region, completion, commit):
    host.bridge.commit = commit
    panel = host.activate("commit", region, completion)
    panel.toggle(0)
    panel.handle_key(9)
    _type(panel, "msg")
    panel.handle_key(10)
    assert panel.busy
    panel.handle_key(27)
    assert not host.is_active()


def _drain(bridge):
    for thread in threading.enumerate():
        if thread.name == "GitExecThread":
            thread.join(5)
    assert bridge.process_queues() is True


def test_commit_finishing_after_escape_is_reported(async_host, action_region, completion, status):
    release = threading.Event()
    commits = []

    def commit(message):
        release.wait(5)
        commits.append(message)
        return "[main abc123] msg"

    _commit_then_escape(async_host, action_region, completion, commit)
    release.set()
    _drain(async_host.bridge)

    assert commits == ["msg"]
    completion.assert_called_once_with(None)
    assert status.message == "Commit successful."


def test_commit_failing_after_escape_is_reported(async_host, action_region, completion, status):
    release = threading.Event()

    def commit(message):
        release.wait(5)
        raise GitError("nothing to commit")

    _commit_then_escape(async_host, action_region, completion, commit)
    release.set()
    _drain(async_host.bridge)

    completion.assert_called_once_with(None)
    assert status.message == "Error committing: nothing to commit"
