# tedit/main.py
"""
TEDIT Main Entry Point
======================

Primary entry point for launching the TEDIT editor. It performs:
1) Environment Loading: reads ~/.config/tedit/.env early (e.g. TEDIT_KEYTRACE).
2) Configuration & Logging: loads config and initializes logging.
3) Preferences & Rules: reads settings.config and the highlight rule file.
4) Curses Wrapper: safely initializes/tears down curses to avoid terminal corruption.
5) Application Run: instantiates Tedit and starts its main loop.
"""

import curses
import locale
import logging
import os
import signal
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from tedit.core.Session import EditorSession
from tedit.core.Tedit import Tedit
from tedit.syntax.RuleLoader import load_syntax_rules
from tedit.utils.logging_config import setup_logging
from tedit.utils.settings import Preferences, load_settings
from tedit.utils.utils import config_dir, load_config


logger = logging.getLogger("tedit")


def load_environment() -> None:
    """Loads ~/.config/tedit/.env; variables already set in the environment win."""
    dotenv_path = config_dir() / ".env"
    if dotenv_path.is_file():
        load_dotenv(dotenv_path=dotenv_path)


def build_session(config: dict[str, Any], file_to_open: Optional[str]) -> EditorSession:
    """Creates the session: preferences, rule set and the initial document."""
    files = config.get("files", {})
    prefs = load_settings(files.get("settings_file", "settings.config"), Preferences.from_config(config))
    rule_set = load_syntax_rules(files.get("syntax_file", "highlight.syntax"))
    for error in rule_set.errors:
        logger.debug("Rule file: %s", error)

    session = EditorSession(config, rule_set=rule_set, prefs=prefs)
    if file_to_open:
        path = Path(file_to_open).expanduser()
        if path.exists():
            session.open_file(path)
        else:
            session.load_lines([], str(path))
            session.set_status_message(f"New file {path}")
    return session


def main_app_runner(stdscr: Any, config: dict[str, Any], session: EditorSession) -> None:
    """Target for `curses.wrapper`: builds the controller and runs the loop."""
    try:
        curses.set_escdelay(25)
    except (AttributeError, curses.error):
        os.environ.setdefault("ESCDELAY", "25")

    editor = Tedit(stdscr, config, session=session)

    # Ctrl+Z is undo, not job control.
    if hasattr(signal, "SIGTSTP"):
        signal.signal(signal.SIGTSTP, signal.SIG_IGN)

    editor.run()


def start() -> None:
    """Console-script entry point: ``tedit [FILE]``."""
    load_environment()
    try:
        config = load_config()
        setup_logging(config)
    except Exception as e:
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("TEDIT editor starting up...")
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    file_to_open = sys.argv[1] if len(sys.argv) > 1 else None
    session = build_session(config, file_to_open)

    try:
        curses.wrapper(main_app_runner, config, session)
        logger.info("TEDIT editor shut down gracefully.")
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    start()
