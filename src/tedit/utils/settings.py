# tedit/utils/settings.py
"""Preferences file (`settings.config`) loader.

The file holds one ``KEY = VALUE;`` assignment per line::

    TAB_FOUR_SPACES = true;
    AUTO_INDENT = no;

Keys are case-insensitive. Unknown keys are ignored, malformed lines are
skipped with a warning and a missing file yields the defaults.
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from tedit.utils.utils import parse_bool


logger = logging.getLogger("tedit.settings")


@dataclass(frozen=True)
class Preferences:
    tab_four_spaces: bool = True
    auto_indent: bool = True

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "Preferences":
        """Builds preferences from the ``[editor]`` section of the app config."""
        editor = config.get("editor", {})
        prefs = cls()
        for name in ("tab_four_spaces", "auto_indent"):
            value = parse_bool(editor.get(name, getattr(prefs, name)))
            if value is not None:
                prefs = replace(prefs, **{name: value})
        return prefs


_KNOWN_KEYS = {
    "TAB_FOUR_SPACES": "tab_four_spaces",
    "AUTO_INDENT": "auto_indent",
}


def parse_settings(lines: Iterable[str], base: Optional[Preferences] = None) -> Preferences:
    """Applies ``KEY = VALUE;`` lines on top of ``base`` (defaults if None)."""
    prefs = base or Preferences()
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith(("#", "/")):
            continue
        if "=" not in line:
            logger.warning("settings: line %d skipped, no '=': %r", line_no, line)
            continue
        key, _, value = line.partition("=")
        key = key.strip().upper()
        value = value.split(";", 1)[0].strip()

        field_name = _KNOWN_KEYS.get(key)
        if field_name is None:
            logger.debug("settings: unknown key %r ignored", key)
            continue
        flag = parse_bool(value)
        if flag is None:
            logger.warning("settings: line %d skipped, %s expects a boolean, got %r", line_no, key, value)
            continue
        prefs = replace(prefs, **{field_name: flag})
    return prefs


def load_settings(path: Union[str, Path], base: Optional[Preferences] = None) -> Preferences:
    """Reads the preferences file; a missing or unreadable file leaves ``base`` unchanged."""
    path = Path(path)
    base = base or Preferences()
    if not path.is_file():
        logger.info("No settings file at '%s', using defaults.", path)
        return base
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            prefs = parse_settings(f, base)
    except OSError as e:
        logger.error("Could not read settings file '%s': %s", path, e)
        return base
    logger.info("Loaded settings from '%s': %s", path, prefs)
    return prefs
