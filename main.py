#!/usr/bin/env python3
# /gitix/main.py
"""
gitix Main Entry Point
======================

This script is the primary entry point for launching gitix. It performs:
1) Environment Loading: reads ~/.config/gitix/.env early, so git identity
   overrides and GITIX_KEYTRACE are visible to everything that follows.
2) Path Setup: ensures the gitix package is importable from a source checkout.
3) Configuration & Logging: loads config and initializes logging ASAP.
4) Core Import: imports the Gitix class after logging is ready.
5) Curses Wrapper: safely initializes/tears down curses to avoid terminal corruption.
6) Application Run: instantiates Gitix and starts its main loop.
"""

from __future__ import annotations

import curses
import locale
import logging
import os
import signal
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv


# --- Step 1: Load Environment Variables from the User's Config Directory ---
try:
    dotenv_path = Path.home() / ".config" / "gitix" / ".env"
    load_dotenv(dotenv_path=dotenv_path)
except Exception as e:
    print(f"Warning: could not load .env: {e}", file=sys.stderr)

# --- Step 2: Set up the Python Path ---
project_root = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if os.path.isdir(project_root) and project_root not in sys.path:
    sys.path.insert(0, project_root)

# --- Step 3: Immediate Logging and Configuration Setup ---
try:
    from gitix.utils.logging_config import setup_logging
    from gitix.utils.utils import load_config

    config: dict[str, Any] = load_config()
    setup_logging(config)
    logger = logging.getLogger("gitix")
except Exception as e:
    print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
    import traceback
    traceback.print_exc()
    sys.exit(1)

# --- Step 4: Import the Core Application ---
try:
    from gitix.core.Gitix import Gitix
except ImportError as e:
    logger.critical("Failed to import a critical application component: %s", e, exc_info=True)
    sys.exit(1)


# --- Step 5: Curses Application Runner ---
def main_app_runner(stdscr: curses.window, config: dict[str, Any]) -> None:
    """
    Target for `curses.wrapper`. Sets terminal responsiveness and runs gitix.

    Behavior:
        - Sets a short ESC delay (``ui.escdelay``) so Escape reacts at once.
        - Blocks terminal suspension (SIGTSTP).
        - Stops the main loop cleanly on SIGTERM.
    """
    escdelay = int(config.get("ui", {}).get("escdelay", 25))
    try:
        curses.set_escdelay(escdelay)
    except Exception:
        os.environ.setdefault("ESCDELAY", str(escdelay))

    app = Gitix(stdscr, config=config)

    if hasattr(signal, "SIGTSTP"):
        try:
            signal.signal(signal.SIGTSTP, signal.SIG_IGN)
        except (OSError, ValueError):
            logger.debug("Could not ignore SIGTSTP.", exc_info=True)

    def _stop(signum: int, _frame: Any) -> None:
        logger.info("Signal %s received, stopping.", signum)
        app.running = False

    try:
        signal.signal(signal.SIGTERM, _stop)
    except (OSError, ValueError):
        logger.debug("Could not install SIGTERM handler.", exc_info=True)

    app.run()


def start() -> None:
    """Initializes locale and runs the curses application via wrapper."""
    logger.info("gitix starting up...")

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    try:
        curses.wrapper(main_app_runner, config)
        logger.info("gitix shut down gracefully.")
    except KeyboardInterrupt:
        logger.info("gitix interrupted.")
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    start()
