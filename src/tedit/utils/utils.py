# tedit/utils/utils.py
"""
tedit.utils.utils.py
====================

Configuration helpers for the TEDIT editor.

Key functionalities include:
- Automatic User Configuration: creates `~/.config/tedit/config.toml` and
  `~/.config/tedit/.env` templates on first run.
- Layered Configuration Loading: a hardcoded default configuration is
  recursively merged with user settings from `~/.config/tedit/config.toml`.
- Helper Utilities: deep-merging dictionaries, boolean parsing and RGB to
  xterm-256 color conversion.

The editor is always runnable: a missing or corrupted user config falls back
to the embedded defaults.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import toml

logger = logging.getLogger("tedit")

# --- Constants ---
TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
FALSE_WORDS = frozenset({"0", "false", "no", "off"})

ENV_TEMPLATE = """# Environment overrides for tedit
# Set to 1 to write every key press to keytrace.log
TEDIT_KEYTRACE=0
"""

# Embedded defaults. The user config is merged on top of this, so the editor
# can always start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "tab_four_spaces": True,
        "auto_indent": True,
        "default_new_filename": "untitled.txt",
        "mouse": True,
    },
    "limits": {
        "max_line_length": 1024,
        "max_lines": 1000,
        "history_depth": 100,
    },
    "files": {
        "save_dir": "saves",
        "syntax_file": "highlight.syntax",
        "settings_file": "settings.config",
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
    "keybindings": {
        "save_file": "ctrl+s",
        "open_file": "ctrl+o",
        "quit": "ctrl+q",
        "undo": "ctrl+z",
        "redo": "ctrl+y",
        "toggle_highlighting": "ctrl+t",
        "delete": "del",
        "handle_up": ["up"],
        "handle_down": ["down"],
        "handle_left": ["left"],
        "handle_right": ["right"],
        "handle_home": ["home"],
        "handle_end": ["end"],
        "handle_page_up": ["pageup"],
        "handle_page_down": ["pagedown"],
    },
    "colors": {
        "status": "reverse",
        "status_error": "bold",
        "line_numbers": "dim",
    },
}


def config_dir() -> Path:
    return Path.home() / ".config" / "tedit"


def ensure_user_config_exists() -> None:
    """Checks for user config files in `~/.config/tedit` and creates them if missing."""
    try:
        cfg_dir = config_dir()
        user_config_path = cfg_dir / "config.toml"
        user_env_path = cfg_dir / ".env"

        cfg_dir.mkdir(parents=True, exist_ok=True)

        if not user_config_path.exists():
            user_config_path.write_text(toml.dumps(DEFAULT_CONFIG), encoding="utf-8")
            logger.info(f"Created user config template at: {user_config_path}")

        if not user_env_path.exists():
            user_env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
            logger.info(f"Created user .env template at: {user_env_path}")

    except OSError as e:
        logger.critical(f"Could not create user configuration files: {e}", exc_info=True)


def load_config() -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the application can always run.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    ensure_user_config_exists()

    user_config_path = config_dir() / "config.toml"
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


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


def parse_bool(value: Any):
    """Parses true/false, yes/no, on/off, 1/0 (case-insensitive).

    Returns:
        True, False, or None if the value is not a recognised boolean word.
    """
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    return None


def rgb_to_xterm(r: int, g: int, b: int) -> int:
    """
    Converts an RGB triple (0-255 per channel) to the nearest xterm-256 color index.
    Out-of-range components are clamped.
    """
    r, g, b = (max(0, min(255, int(c))) for c in (r, g, b))

    if r == g == b:
        if r < 8: return 16
        if r > 248: return 231
        return round(((r - 8) / 247) * 24) + 232

    return int(
        16
        + (36 * round(r / 255 * 5))
        + (6 * round(g / 255 * 5))
        + round(b / 255 * 5)
    )


def rgb_to_basic(r: int, g: int, b: int) -> int:
    """
    Maps an RGB triple to one of the 8 ANSI colors (black, red, green, yellow,
    blue, magenta, cyan, white) by thresholding each channel.
    """
    return (1 if r > 127 else 0) | (2 if g > 127 else 0) | (4 if b > 127 else 0)
