# gitix/core/MenuRegistry.py
"""MenuRegistry.py
========================
The static menu tree of gitix: one main menu and a set of named submenus.

Entries carry an optional `Action`, a plain command value that the menu
widget hands back when the entry is confirmed and that the FocusController
interprets. Nothing in the registry holds a callable, so the tree can be
built once at startup and never changes afterwards.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger("gitix")

SAVE_CHANGES = "Save Changes"
CHECK_FILES = "Check Files"
BRANCHES = "Branches (Work Areas)"
SYNC_CHANGES = "Sync Changes"
SETTINGS = "Settings"
EXIT = "Exit"


class ActionKind(enum.Enum):
    NONE = "none"  # key handled by the widget, nothing to interpret
    UNBOUND = "unbound"  # entry confirmed but has no action
    SUBMENU = "submenu"
    HELP = "help"
    INTERACTIVE = "interactive"  # mounts an action UI
    COMMAND = "command"  # read-only git command, output to the action panel
    EXIT = "exit"


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    target: str = ""
    params: tuple[tuple[str, str], ...] = ()

    def options(self) -> dict[str, str]:
        return dict(self.params)


HANDLED = Action(ActionKind.NONE)


@dataclass(frozen=True)
class MenuEntry:
    label: str
    description: str
    shortcut: str
    action: Optional[Action] = None


@dataclass(frozen=True)
class SubmenuDefinition:
    name: str
    entries: tuple[MenuEntry, ...]
    help_text: str


HELP_TEXTS: dict[str, str] = {
    SAVE_CHANGES: """Save Changes help:

"Save Now" means to save your current work safely.
Example: You edited files and want to save a snapshot.

"Fix Last Save" lets you change your last saved snapshot.
Example: You forgot to add a file, so you fix the last save.

"Undo Changes" lets you discard changes you made since last save.
Example: You made a mistake and want to go back to the last saved state.

"View History" shows all your saved snapshots.

"Search History" helps find a saved snapshot by keyword.""",
    CHECK_FILES: """Check Files help:

"Show Changes" lets you see what files have changed since last save.
Example: You want to know which files you edited.

"View File Differences" shows line-by-line changes in a file.
Example: See exactly what you changed in a file.""",
    BRANCHES: """Branches (Work Areas) help:

"Show Branches" lists all versions of your work.

"New Branch" starts a new version to work on.
Example: You want to try a new feature without changing main work.

"Remove Branch" deletes a version you no longer need.

"Merge Branch" combines changes from one version into another.
Example: You finished a feature in a separate branch and want to add it to your main work.

"Rename Branch" lets you rename a branch for clarity.

A branch is like a separate workspace for your changes.""",
    SYNC_CHANGES: """Sync Changes help:

"Send Updates" sends your saved work to the central place.

"Get Updates" gets work saved by others.

"Check for Updates" checks if others have new work.

"Sync All" sends your work and gets others' work to keep up to date.""",
    SETTINGS: """Settings help:

"Set Name" sets your name for saved work.

"Set Email" sets your email for saved work.

"Other Options" lets you change extra settings.""",
}


def _help(name: str, description: str) -> MenuEntry:
    return MenuEntry("Help", description, "h", Action(ActionKind.HELP, name))


def _command(name: str) -> Action:
    return Action(ActionKind.COMMAND, name)


# Ordered (name, entries) pairs; order is the display order.
SUBMENU_ENTRIES: tuple[tuple[str, tuple[MenuEntry, ...]], ...] = (
    (SAVE_CHANGES, (
        MenuEntry("Save Now", "Save your current work", "n", Action(ActionKind.INTERACTIVE, "commit")),
        MenuEntry("Fix Last Save", "Change your last saved work", "a"),
        MenuEntry("Undo Changes", "Discard changes since last save", "u"),
        MenuEntry("View History", "See past saved work", "v", _command("view_history")),
        MenuEntry("Search History", "Find saved work by keyword", "s"),
        _help(SAVE_CHANGES, "What is saving?"),
    )),
    (CHECK_FILES, (
        MenuEntry("Show Changes", "See what files changed", "s", _command("show_changes")),
        MenuEntry("View File Differences", "See line-by-line changes", "d", _command("view_differences")),
        _help(CHECK_FILES, "What is checking files?"),
    )),
    (BRANCHES, (
        MenuEntry("Show Branches", "See all versions of your work", "l", _command("show_branches")),
        MenuEntry("New Branch", "Start a new version of your work", "c"),
        MenuEntry("Remove Branch", "Delete a version of your work", "d"),
        MenuEntry("Merge Branch", "Combine changes from one version into another", "m"),
        MenuEntry("Rename Branch", "Rename a branch", "r"),
        _help(BRANCHES, "What is a branch?"),
    )),
    (SYNC_CHANGES, (
        MenuEntry("Send Updates", "Send your work to the central place", "p"),
        MenuEntry("Get Updates", "Get work from others", "l"),
        MenuEntry("Check for Updates", "See if others have new work", "f"),
        MenuEntry("Sync All", "Send and get updates", "s"),
        _help(SYNC_CHANGES, "What is syncing?"),
    )),
    (SETTINGS, (
        MenuEntry("Set Name", "Your name for saved work", "u",
                  Action(ActionKind.INTERACTIVE, "identity", (("field", "name"),))),
        MenuEntry("Set Email", "Your email for saved work", "e",
                  Action(ActionKind.INTERACTIVE, "identity", (("field", "email"),))),
        MenuEntry("Other Options", "Extra settings", "c"),
        _help(SETTINGS, "Settings help"),
    )),
)

MAIN_MENU_DESCRIPTIONS: tuple[tuple[str, str, str], ...] = (
    (SAVE_CHANGES, "Save your work safely", "c"),
    (CHECK_FILES, "See what changed in your files", "s"),
    (BRANCHES, "Manage different versions of your work", "b"),
    (SYNC_CHANGES, "Keep your work up to date", "y"),
    (SETTINGS, "Set your name and options", "o"),
)


# ================= MenuRegistry Class ==============================
class MenuRegistry:
    """Holds the main menu and every named submenu for the process lifetime."""

    def __init__(
        self,
        main_menu: tuple[MenuEntry, ...],
        submenus: tuple[tuple[str, tuple[MenuEntry, ...]], ...],
        help_texts: Optional[dict[str, str]] = None,
    ) -> None:
        self.main_menu: tuple[MenuEntry, ...] = main_menu
        self._entries: dict[str, tuple[MenuEntry, ...]] = {}
        for name, entries in submenus:
            labels = [e.label for e in entries]
            if len(set(labels)) != len(labels):
                raise ValueError(f"Duplicate entry labels in submenu '{name}'")
            if name in self._entries:
                raise ValueError(f"Submenu '{name}' registered twice")
            self._entries[name] = entries
        self._help_sources = help_texts or {}
        self._help_cache: Optional[dict[str, str]] = None
        self._definitions: dict[str, SubmenuDefinition] = {}

    @classmethod
    def default(cls) -> "MenuRegistry":
        main = tuple(
            MenuEntry(label, description, shortcut, Action(ActionKind.SUBMENU, label))
            for label, description, shortcut in MAIN_MENU_DESCRIPTIONS
        ) + (MenuEntry(EXIT, "Close the program", "q", Action(ActionKind.EXIT)),)
        return cls(main, SUBMENU_ENTRIES, HELP_TEXTS)

    def submenu_names(self) -> list[str]:
        return list(self._entries)

    def help_text(self, name: str) -> str:
        if self._help_cache is None:
            self._help_cache = {
                name: self._help_sources.get(name, f"{name} help:\n\nNo help available.")
                for name in self._entries
            }
            logger.debug("MenuRegistry: help texts built for %d submenus", len(self._help_cache))
        return self._help_cache.get(name, "")

    def lookup_submenu(self, name: str) -> Optional[SubmenuDefinition]:
        """Returns the submenu definition, or None if `name` is not registered."""
        entries = self._entries.get(name)
        if entries is None:
            return None
        definition = self._definitions.get(name)
        if definition is None:
            definition = SubmenuDefinition(name, entries, self.help_text(name))
            self._definitions[name] = definition
        return definition

    def submenu(self, name: str) -> tuple[tuple[MenuEntry, ...], str]:
        definition = self.lookup_submenu(name)
        if definition is None:
            raise KeyError(name)
        return definition.entries, definition.help_text
