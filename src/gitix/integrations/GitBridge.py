# gitix/integrations/GitBridge.py
"""GitBridge.py
========================
Git integration backend for gitix.

This module is the external action executor used by the terminal shell. It
contains no UI code: every call either returns normally (optionally with
output text) or raises `GitError` with a human-readable message. Callers never
interpret the message content, they only display it.

Long-running calls can be moved off the event loop with `submit()`: the job
runs on a daemon worker thread and its result is delivered back through a
queue that the main loop drains with `process_queues()`. Callbacks therefore
always run on the event loop thread.
"""

import logging
import os
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from gitix.utils.utils import safe_run


logger = logging.getLogger("gitix")

Job = Callable[[], Any]
Callback = Callable[[Any, Optional[Exception]], None]

STATUS_DESCRIPTIONS = {
    "M": "Modified",
    "A": "New file",
    "D": "Deleted",
    "R": "Renamed",
    "C": "Copied",
    "T": "Type changed",
    "U": "Conflict",
    "?": "Untracked",
}


class GitError(Exception):
    """A git invocation failed; ``str(err)`` is safe to show to the user."""


@dataclass(frozen=True)
class ChangedFile:
    """One line of ``git status --porcelain`` output."""

    path: str
    index_status: str = " "
    worktree_status: str = " "

    @property
    def staged(self) -> bool:
        return self.index_status not in (" ", "?")

    @property
    def code(self) -> str:
        if self.worktree_status != " ":
            return self.worktree_status
        return self.index_status

    @property
    def description(self) -> str:
        return STATUS_DESCRIPTIONS.get(self.code, "Modified")


def parse_porcelain(output: str) -> list[ChangedFile]:
    """Parses ``git status --porcelain`` (v1) output into ChangedFile entries.

    Lines shorter than four characters carry no path and are skipped. For
    renames and copies (``R  old -> new``) the destination path is kept.
    """
    files: list[ChangedFile] = []
    for line in output.splitlines():
        if len(line) < 4:
            continue
        path = line[3:].strip()
        if " -> " in path:
            path = path.split(" -> ", 1)[1]
        if len(path) > 1 and path.startswith('"') and path.endswith('"'):
            path = path[1:-1]
        files.append(ChangedFile(path=path, index_status=line[0], worktree_status=line[1]))
    return files


# ================= GitBridge Class ==============================
class GitBridge:
    """Runs git porcelain commands for the shell.

    Read-only commands exposed to the menus are looked up by name in
    `COMMANDS` so that menu entries carry plain values, not callables.
    """

    COMMANDS: dict[str, list[str]] = {
        "show_changes": ["git", "status", "--short", "--branch"],
        "view_differences": ["git", "diff", "--no-color", "--stat", "--patch"],
        "view_history": ["git", "log", "--oneline", "--decorate"],
        "show_branches": ["git", "branch", "-v"],
    }

    def __init__(self, config: dict, repo_dir: Optional[str] = None):
        self.config: dict = config
        git_config = config.get("git", {})
        self.enabled: bool = git_config.get("enabled", True)
        self.async_commands: bool = git_config.get("async_commands", True)
        self.timeout: float = git_config.get("timeout", 30)
        self.log_limit: int = git_config.get("log_limit", 50)
        self.repo_dir: str = repo_dir or os.getcwd()
        self.result_q: queue.Queue[tuple[Callback, Any, Optional[Exception]]] = queue.Queue()
        self._pending = 0
        self._lock = threading.Lock()

    # --- Synchronous porcelain wrappers ---

    def _run(self, cmd_list: list[str]) -> str:
        if not self.enabled:
            raise GitError("Git integration is disabled in the configuration.")
        logger.debug(f"GitBridge: Running command: {cmd_list}")
        res = safe_run(cmd_list, cwd=self.repo_dir, timeout=self.timeout)
        if res.returncode != 0:
            stderr = (res.stderr or "").strip()
            summary = stderr.splitlines()[0] if stderr else f"exit code {res.returncode}"
            logger.warning(f"GitBridge: {' '.join(cmd_list[:2])} failed: {summary}")
            raise GitError(summary)
        return res.stdout or ""

    def changed_files(self) -> list[ChangedFile]:
        """Returns staged, unstaged and untracked changes of the working tree."""
        return parse_porcelain(self._run(["git", "status", "--porcelain"]))

    def list_changed_paths(self) -> list[str]:
        return [f.path for f in self.changed_files()]

    def stage(self, paths: list[str]) -> None:
        if not paths:
            raise GitError("Nothing to stage.")
        self._run(["git", "add", "--", *paths])

    def commit(self, message: str) -> str:
        return self._run(["git", "commit", "-m", message]).strip()

    def get_config(self, key: str) -> str:
        """Returns a git config value, or "" if it is not set."""
        try:
            return self._run(["git", "config", "--get", key]).strip()
        except GitError:
            return ""

    def set_config(self, key: str, value: str) -> None:
        self._run(["git", "config", key, value])

    def run_named(self, name: str) -> str:
        """Runs one of the read-only `COMMANDS` and returns its output."""
        cmd = self.COMMANDS.get(name)
        if cmd is None:
            raise GitError(f"Unknown git command '{name}'")
        cmd = list(cmd)
        if name == "view_history":
            cmd.append(f"-n{self.log_limit}")
        return self._run(cmd).rstrip() or "Command successful (no output)."

    # --- Worker channel ---

    def submit(self, job: Job, callback: Callback) -> None:
        """Runs `job` and hands ``(result, error)`` to `callback`.

        With ``git.async_commands`` the job runs on a worker thread and the
        callback is deferred until `process_queues()` is called from the event
        loop. Otherwise both run inline.
        """
        if not self.async_commands:
            callback(*self._call(job))
            return

        with self._lock:
            self._pending += 1
        thread = threading.Thread(
            target=self._worker, args=(job, callback), daemon=True, name="GitExecThread"
        )
        thread.start()

    def is_busy(self) -> bool:
        with self._lock:
            return self._pending > 0

    def process_queues(self) -> bool:
        """Delivers all finished jobs to their callbacks. Returns True if any ran."""
        changed = False
        try:
            while True:
                callback, result, error = self.result_q.get_nowait()
                with self._lock:
                    self._pending = max(0, self._pending - 1)
                callback(result, error)
                changed = True
        except queue.Empty:
            pass
        return changed

    def _worker(self, job: Job, callback: Callback) -> None:
        result, error = self._call(job)
        self.result_q.put((callback, result, error))

    @staticmethod
    def _call(job: Job) -> tuple[Any, Optional[Exception]]:
        try:
            return job(), None
        except GitError as e:
            return None, e
        except Exception as e:
            logger.exception("GitBridge: job crashed")
            return None, GitError(f"system error: {e}")
