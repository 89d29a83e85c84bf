# src/gitix/core/__init__.py
"""Public facade for gitix.core: re-export the menu model from its CamelCase module.

FocusController and Gitix are imported from their own modules
(``gitix.core.FocusController``, ``gitix.core.Gitix``) because they depend on
``gitix.ui``, which in turn depends on the menu model.
"""

from .MenuRegistry import Action, ActionKind, MenuEntry, MenuRegistry, SubmenuDefinition  # noqa: F401


__all__ = [
    "Action",
    "ActionKind",
    "MenuEntry",
    "MenuRegistry",
    "SubmenuDefinition",
]
