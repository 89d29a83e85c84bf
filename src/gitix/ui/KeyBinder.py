# gitix/ui/KeyBinder.py
"""KeyBinder.py
========================
Key reading and key-code helpers shared by the gitix widgets.

`get_key_input` reads one key with ``get_wch`` so that non-ASCII characters
arrive as ``str`` while special keys arrive as curses ``int`` codes. Every
widget compares keys through `key_code`, which folds single-character
strings onto their code point, so both forms behave identically.
"""

import curses
import logging
from typing import Any, Optional, Union


Key = Union[int, str]

KEY_TAB = 9
KEY_ESC = 27
KEY_SPACE = 32
KEY_BTAB = getattr(curses, "KEY_BTAB", 353)
ENTER_KEYS = (curses.KEY_ENTER, 10, 13)
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)
UP_KEYS = (curses.KEY_UP, ord("k"))
DOWN_KEYS = (curses.KEY_DOWN, ord("j"))


def key_code(key: Any) -> int:
    """Returns the integer code of `key`, or -1 for anything unrecognised."""
    if isinstance(key, int):
        return key
    if isinstance(key, str) and len(key) == 1:
        return ord(key)
    return -1


def printable_char(key: Any) -> Optional[str]:
    """Returns the character `key` would insert into a text field, if any."""
    if isinstance(key, str):
        return key if len(key) == 1 and key.isprintable() else None
    if isinstance(key, int) and 32 <= key <= 126:
        return chr(key)
    return None


def describe_key(key: Any) -> str:
    info = f"Key: {key!r} (type: {type(key).__name__})"
    if isinstance(key, int):
        info += f" decimal: {key}"
        if 32 <= key <= 126:
            info += f" char: '{chr(key)}'"
    elif isinstance(key, str):
        info += f" ord: {ord(key) if len(key) == 1 else 'N/A'}"
    return info


def get_key_input(window: Any) -> Optional[Key]:
    """Reads a single key from `window`.

    Returns None when the read times out. Control characters delivered as
    ``str`` (Tab, Enter, Esc) are converted to their integer codes.
    """
    try:
        key = window.get_wch()
    except curses.error:
        return None
    except Exception:
        logging.exception("get_key_input: unexpected error while reading a key")
        return None
    if isinstance(key, str) and len(key) == 1 and not key.isprintable():
        return ord(key)
    return key
