# gitix/ui/panels.py
"""panels.py
=========

Interactive action UIs mounted into the action region of the gitix screen.

Overview:
---------
A panel is created by the `ActionUIHost` when a submenu entry bound to an
interactive action is confirmed. While mounted it receives every key press.
It ends its life by calling ``host.finish(message)`` on success or
``host.cancel()`` when the user backs out; the host then unmounts it and
hands control back to the FocusController.

Key Components:
---------------
- BasePanel: lifecycle (open, close, draw, handle_key) and the busy sub-state
  shared by all panels, including delivery of worker-thread results.
- CommitPanel: pick changed files, write a message, stage and commit them.
- IdentityPanel: edit ``user.name`` or ``user.email`` in the git config.

Git calls are submitted through ``GitBridge.submit``. While a call is in
flight the panel is busy and ignores every key except Escape. If the panel
is closed before the result arrives, the panel is left alone and the outcome
only goes to the status bar.
"""

from __future__ import annotations

import curses
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from gitix.integrations.GitBridge import ChangedFile, GitBridge, GitError
from gitix.ui.DrawScreen import draw_frame, truncate_string
from gitix.ui.KeyBinder import (
    BACKSPACE_KEYS,
    DOWN_KEYS,
    ENTER_KEYS,
    KEY_BTAB,
    KEY_ESC,
    KEY_SPACE,
    KEY_TAB,
    UP_KEYS,
    key_code,
    printable_char,
)
from gitix.ui.LayoutEngine import Region
from gitix.ui.StatusReporter import StatusReporter
from gitix.utils.logging_config import logger


if TYPE_CHECKING:
    from gitix.ui.ActionHost import ActionUIHost

CursesWindow = Any


# ==================== BasePanel Class ====================
class BasePanel:
    """A base class for input-exclusive action UIs."""

    title = "Action"
    # Prefix of the status message shown when `open()` raises.
    open_error_prefix = "Panel error: "

    def __init__(self, host: ActionUIHost, region: Region, **kwargs: Any) -> None:
        self.host: ActionUIHost = host
        self.bridge: GitBridge = host.bridge
        self.status: StatusReporter = host.status
        self.region: Region = region
        self.visible: bool = False
        self.busy: bool = False
        logger.debug(f"Base class initialized for panel '{self.__class__.__name__}'.")

    def resize(self, region: Region) -> None:
        self.region = region
        logger.info(
            f"Resize event in panel '{self.__class__.__name__}'. New region: {region.width}x{region.height}"
        )

    def open(self) -> None:
        """Make the panel visible and mark it as active."""
        self.visible = True
        logger.info(f"Panel '{self.__class__.__name__}' opened.")

    def close(self) -> None:
        """Hide the panel. Pending worker results are dropped from now on."""
        self.visible = False
        self.busy = False
        logger.info(f"Panel '{self.__class__.__name__}' closed.")

    def draw(self, win: CursesWindow) -> None:
        """Draw one frame of the panel into `win`, which covers `self.region`."""
        raise NotImplementedError(
            "The 'draw' method must be implemented in a child class."
        )

    def handle_key(self, key: Any) -> bool:
        """Handles a single key press directed to the panel.

        Returns:
            True if the panel consumed the key.

        Raises:
            NotImplementedError: If the subclass does not implement this method.
        """
        raise NotImplementedError(
            "The 'handle_key' method must be implemented in a child class."
        )

    def _run_job(
        self,
        job: Callable[[], Any],
        on_done: Callable[[Any, Optional[Exception]], None],
        on_orphaned: Optional[Callable[[Any, Optional[Exception]], None]] = None,
    ) -> None:
        """Runs `job` through the bridge and calls `on_done` with its outcome.

        If the panel was closed while the job ran, `on_done` is skipped and
        `on_orphaned` (if given) gets the outcome instead.
        """
        self.busy = True

        def deliver(result: Any, error: Optional[Exception]) -> None:
            if not self.visible:
                logger.info(f"Panel '{self.__class__.__name__}': result arrived after close.")
                if on_orphaned is not None:
                    on_orphaned(result, error)
                return
            self.busy = False
            on_done(result, error)

        self.bridge.submit(job, deliver)

    def _frame_attr(self) -> int:
        return self.host.colors.get("focused", curses.A_BOLD) | curses.A_BOLD

    def _draw_frame(self, win: CursesWindow) -> None:
        title = f"{self.title} [BUSY]" if self.busy else self.title
        draw_frame(win, self.region, title, self._frame_attr())


# ==================== CommitPanel Class ====================
class CommitPanel(BasePanel):
    """Class CommitPanel
    =========================
    Lets the user choose changed files, type a commit message and commit.

    Focusable fields, cycled with Tab and Shift-Tab:
        file list -> message input -> [Commit] -> [Cancel]

    Attributes:
        changes (list[ChangedFile]): Working tree changes listed on open.
        files (list[str]): Their paths, in the same order.
        selected (dict[int, str]): List index -> path of every toggled file.
        cursor (int): Highlighted row of the file list.
        message (str): The commit message being typed.
        focus_idx (int): Index into FIELDS of the focused field.
    """

    title = "Save Now"
    open_error_prefix = "Error getting changed files: "

    FIELD_FILES = "files"
    FIELD_MESSAGE = "message"
    FIELD_COMMIT = "commit"
    FIELD_CANCEL = "cancel"
    FIELDS = (FIELD_FILES, FIELD_MESSAGE, FIELD_COMMIT, FIELD_CANCEL)
    STATUS_COLUMN_WIDTH = 22

    @staticmethod
    def status_label(change: ChangedFile) -> str:
        """Status description of one file, e.g. "Modified" or "New file (staged)"."""
        if change.staged:
            return f"{change.description} (staged)"
        return change.description

    def __init__(self, host: ActionUIHost, region: Region, **kwargs: Any) -> None:
        super().__init__(host, region, **kwargs)
        self.changes: list[ChangedFile] = []
        self.files: list[str] = []
        self.selected: dict[int, str] = {}
        self.cursor: int = 0
        self.scroll_offset: int = 0
        self.message: str = ""
        self.focus_idx: int = 0

    @property
    def focused_field(self) -> str:
        return self.FIELDS[self.focus_idx]

    def open(self) -> None:
        """Lists the changed files. GitError propagates to the host."""
        self.changes = self.bridge.changed_files()
        self.files = [change.path for change in self.changes]
        super().open()
        if not self.files:
            self.status.set_message("No changed files.")
        logger.debug(f"CommitPanel: {len(self.files)} changed files listed.")

    def toggle(self, index: int) -> None:
        """Adds `index` to the selection, or removes it if already selected."""
        if not 0 <= index < len(self.files):
            return
        if index in self.selected:
            del self.selected[index]
        else:
            self.selected[index] = self.files[index]

    def selected_paths(self) -> list[str]:
        return [self.selected[i] for i in sorted(self.selected)]

    def focus_next(self, step: int = 1) -> None:
        self.focus_idx = (self.focus_idx + step) % len(self.FIELDS)

    def submit(self) -> bool:
        """Validates the form and starts stage + commit. Returns False if rejected locally."""
        paths = self.selected_paths()
        if not paths:
            self.status.set_message("No files selected to commit.")
            return False
        message = self.message.strip()
        if not message:
            self.status.set_message("Commit message cannot be empty.")
            return False

        def job() -> str:
            try:
                self.bridge.stage(paths)
            except GitError as e:
                raise GitError(f"Error staging files: {e}") from e
            try:
                return self.bridge.commit(message)
            except GitError as e:
                raise GitError(f"Error committing: {e}") from e

        logger.info(f"CommitPanel: committing {len(paths)} file(s).")
        self._run_job(job, self._on_commit_done, self._report_after_close)
        return True

    def _on_commit_done(self, result: Any, error: Optional[Exception]) -> None:
        if error is not None:
            self.status.set_message(str(error))
            return
        self.host.finish("Commit successful.")

    def _report_after_close(self, result: Any, error: Optional[Exception]) -> None:
        self.status.set_message(str(error) if error is not None else "Commit successful.")

    def handle_key(self, key: Any) -> bool:
        code = key_code(key)
        if code == KEY_ESC:
            self.host.cancel()
            return True
        if self.busy:
            return True
        if code == KEY_TAB:
            self.focus_next(1)
            return True
        if code == KEY_BTAB:
            self.focus_next(-1)
            return True

        field = self.focused_field
        if field == self.FIELD_FILES:
            return self._handle_file_list_key(code)
        if field == self.FIELD_MESSAGE:
            return self._handle_message_key(key, code)
        if code in ENTER_KEYS or code == KEY_SPACE:
            if field == self.FIELD_COMMIT:
                self.submit()
            else:
                self.host.cancel()
            return True
        return False

    def _handle_file_list_key(self, code: int) -> bool:
        if code in UP_KEYS:
            if self.files:
                self.cursor = max(0, self.cursor - 1)
        elif code in DOWN_KEYS:
            if self.files:
                self.cursor = min(len(self.files) - 1, self.cursor + 1)
        elif code == KEY_SPACE or code in ENTER_KEYS:
            self.toggle(self.cursor)
        else:
            return False
        return True

    def _handle_message_key(self, key: Any, code: int) -> bool:
        if code in ENTER_KEYS:
            self.submit()
            return True
        if code in BACKSPACE_KEYS:
            self.message = self.message[:-1]
            return True
        ch = printable_char(key)
        if ch is not None:
            self.message += ch
            return True
        return False

    def draw(self, win: CursesWindow) -> None:
        if not self.visible:
            return
        try:
            self._draw_frame(win)
            inner = self.region.width - 4
            if inner <= 0 or self.region.height < 3:
                return
            # rows: file list, then message line, then buttons
            list_rows = max(1, self.region.height - 2 - 3)
            if self.cursor < self.scroll_offset:
                self.scroll_offset = self.cursor
            elif self.cursor >= self.scroll_offset + list_rows:
                self.scroll_offset = self.cursor - list_rows + 1

            files_focused = self.focused_field == self.FIELD_FILES
            # status column on the right when there is room for it
            status_width = self.STATUS_COLUMN_WIDTH if inner >= 2 * self.STATUS_COLUMN_WIDTH else 0
            path_width = inner - status_width
            y = 1
            if not self.files:
                win.addstr(y, 2, truncate_string("(no changed files)", inner), curses.A_DIM)
            for index in range(self.scroll_offset, min(len(self.files), self.scroll_offset + list_rows)):
                mark = "[x]" if index in self.selected else "[ ]"
                attr = curses.A_NORMAL
                if index == self.cursor:
                    attr = curses.A_REVERSE if files_focused else curses.A_BOLD
                win.addstr(y, 2, truncate_string(f"{mark} {self.files[index]}", path_width - 1), attr)
                if status_width and index < len(self.changes):
                    win.addstr(y, 2 + path_width, self.status_label(self.changes[index]), curses.A_DIM)
                y += 1

            y = max(y, 1 + list_rows)
            if y < self.region.height - 1:
                msg_attr = curses.A_UNDERLINE | (curses.A_BOLD if self.focused_field == self.FIELD_MESSAGE else 0)
                win.addstr(y, 2, truncate_string(f"Message: {self.message}", inner), msg_attr)
            y += 1
            if y < self.region.height - 1:
                x = 2
                for field, label in ((self.FIELD_COMMIT, "[Commit]"), (self.FIELD_CANCEL, "[Cancel (Esc)]")):
                    attr = curses.A_REVERSE if self.focused_field == field else curses.A_NORMAL
                    if x + len(label) <= inner + 2:
                        win.addstr(y, x, label, attr)
                    x += len(label) + 2
        except curses.error:
            pass


# ==================== IdentityPanel Class ====================
class IdentityPanel(BasePanel):
    """Edits one git identity setting (user.name or user.email)."""

    open_error_prefix = "Error reading git config: "

    FIELDS = {
        "name": ("user.name", "Name"),
        "email": ("user.email", "Email"),
    }

    def __init__(self, host: ActionUIHost, region: Region, field: str = "name", **kwargs: Any) -> None:
        super().__init__(host, region, **kwargs)
        if field not in self.FIELDS:
            raise ValueError(f"Unknown identity field '{field}'")
        self.field: str = field
        self.config_key, self.label = self.FIELDS[field]
        self.title = f"Set {self.label}"
        self.value: str = ""

    def open(self) -> None:
        self.value = self.bridge.get_config(self.config_key)
        super().open()

    def save(self) -> bool:
        value = self.value.strip()
        if not value:
            self.status.set_message(f"{self.label} cannot be empty.")
            return False
        logger.info(f"IdentityPanel: setting {self.config_key}.")
        self._run_job(
            lambda: self.bridge.set_config(self.config_key, value), self._on_saved, self._report_after_close
        )
        return True

    def _on_saved(self, result: Any, error: Optional[Exception]) -> None:
        if error is not None:
            self.status.set_message(f"Error saving {self.label.lower()}: {error}")
            return
        self.host.finish(f"{self.label} saved.")

    def _report_after_close(self, result: Any, error: Optional[Exception]) -> None:
        if error is not None:
            self.status.set_message(f"Error saving {self.label.lower()}: {error}")
        else:
            self.status.set_message(f"{self.label} saved.")

    def handle_key(self, key: Any) -> bool:
        code = key_code(key)
        if code == KEY_ESC:
            self.host.cancel()
            return True
        if self.busy:
            return True
        if code in ENTER_KEYS:
            self.save()
            return True
        if code in BACKSPACE_KEYS:
            self.value = self.value[:-1]
            return True
        ch = printable_char(key)
        if ch is not None:
            self.value += ch
            return True
        return False

    def draw(self, win: CursesWindow) -> None:
        if not self.visible:
            return
        try:
            self._draw_frame(win)
            inner = self.region.width - 4
            if inner <= 0 or self.region.height < 4:
                return
            win.addstr(1, 2, truncate_string(f"{self.label}: {self.value}", inner), curses.A_UNDERLINE)
            win.addstr(2, 2, truncate_string("Enter: save   Esc: cancel", inner), curses.A_DIM)
        except curses.error:
            pass
