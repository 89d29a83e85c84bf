# gitix/utils/utils.py
"""
gitix.utils.utils
=================

Core utility functions shared by the gitix terminal shell.

Key functionalities include:
- Automatic User Configuration: creates `~/.config/gitix` with a `config.toml`
  and `.env` template on first run.
- Robust Configuration Loading: starts from the embedded default configuration
  and recursively merges user settings from `~/.config/gitix/config.toml`.
- Safe Subprocess Execution: a wrapper around `subprocess.run` that never
  raises and always returns a `CompletedProcess`.
- Helper Utilities: deep-merging dictionaries and color name resolution.

The application is always runnable, even if the user configuration is missing
or corrupted, by falling back to the embedded defaults.
"""

import copy
import curses
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, List

import toml

logger = logging.getLogger("gitix")

CONFIG_DIR = Path.home() / ".config" / "gitix"

ENV_TEMPLATE = """# Environment for gitix and the git commands it runs.
# GIT_AUTHOR_NAME=
# GIT_AUTHOR_EMAIL=
# Set to 1 to write every key press to keytrace.log
GITIX_KEYTRACE=
"""

CONFIG_TEMPLATE = """# gitix user configuration. Values here override the built-in defaults.

[ui]
min_width = 40
min_height = 10

[git]
async_commands = true
timeout = 30

[logging]
file_level = "INFO"
"""

# Hardcoded fallback; the application can ALWAYS start from this.
DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
        "log_file": "gitix.log",
    },
    "ui": {"min_width": 40, "min_height": 10, "escdelay": 25},
    "git": {"enabled": True, "async_commands": True, "timeout": 30, "log_limit": 50},
    "colors": {
        "focused": "yellow",
        "unfocused": "white",
        "status_fg": "white",
        "status_bg": "blue",
        "error": "red",
        "selected": "green",
    },
}

COLOR_NAMES: Dict[str, int] = {
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
    "default": -1,
}


# --- Helper Functions ---

def ensure_user_config_exists() -> None:
    """Checks for user config files in `~/.config/gitix` and creates them if missing."""
    try:
        user_config_path = CONFIG_DIR / "config.toml"
        user_env_path = CONFIG_DIR / ".env"

        CONFIG_DIR.mkdir(parents=True, exist_ok=True)

        if not user_config_path.exists():
            user_config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
            logger.info(f"Created user config template at: {user_config_path}")

        if not user_env_path.exists():
            user_env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
            logger.info(f"Created user .env template at: {user_env_path}")

    except Exception as e:
        logger.critical(f"Could not create user configuration files: {e}", exc_info=True)


def load_config() -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the application can always run.
    """
    final_config = copy.deepcopy(DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    ensure_user_config_exists()

    user_config_path = CONFIG_DIR / "config.toml"
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except Exception as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def safe_run(cmd: List[str], **kwargs: Any) -> subprocess.CompletedProcess:
    """
    Executes a command safely, capturing output and handling common exceptions.
    """
    try:
        return subprocess.run(
            cmd, capture_output=True, text=True, check=False,
            encoding="utf-8", errors="replace", **kwargs,
        )
    except FileNotFoundError as e:
        logger.error(f"Command not found: {cmd[0]!r}", exc_info=True)
        return subprocess.CompletedProcess(cmd, 127, stdout="", stderr=str(e))
    except subprocess.TimeoutExpired as e:
        logger.warning(f"Command timed out: {' '.join(cmd)}")
        return subprocess.CompletedProcess(cmd, -9, stdout="", stderr=f"Command timed out after {e.timeout}s")
    except Exception as e:
        logger.exception(f"An unexpected error occurred while running command: {' '.join(cmd)}")
        return subprocess.CompletedProcess(cmd, -1, stdout="", stderr=str(e))


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def color_index(name: Any, fallback: int = curses.COLOR_WHITE) -> int:
    """
    Resolves a configured color name (or raw index) to a curses color number.
    """
    if isinstance(name, int):
        return name
    return COLOR_NAMES.get(str(name).strip().lower(), fallback)
