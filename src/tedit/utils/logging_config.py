# tedit/utils/logging_config.py
"""tedit.utils.logging_config
============================

Logging configuration for the TEDIT editor. Defines the global logger objects
and `setup_logging`, which attaches handlers and levels based on the
``[logging]`` section of the application configuration.

Features:
    - Rotating file logging for general application events (editor.log).
    - Optional console logging to stderr. Off by default: the editor owns the
      terminal while it runs, so stray stderr output would corrupt the screen.
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Optional key event tracing (keytrace.log) enabled via the TEDIT_KEYTRACE
      environment variable.
    - Safe reconfiguration: existing handlers are cleared on every call.

Globals:
    logger: Main application logger ("tedit").
    KEY_LOGGER: Logger for raw key-press trace events ("tedit.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional

from tedit.utils.utils import parse_bool


# ======================== Global loggers ========================
logger = logging.getLogger("tedit")  # main application logger
KEY_LOGGER = logging.getLogger("tedit.keyevents")  # raw key-press trace

KEYTRACE_ENV_VAR = "TEDIT_KEYTRACE"


def _rotating_handler(filename: str, max_bytes: int, backup_count: int) -> logging.Handler:
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)
    return logging.handlers.RotatingFileHandler(
        filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to four independent handlers are set up:

    1. File handler: rotating editor.log capturing everything from
       ``file_level`` (default DEBUG) upward.
    2. Console handler: optional ``stderr`` output at ``console_level``
       (default WARNING), enabled by ``log_to_console``.
    3. Error-file handler: optional rotating error.log with ERROR and
       CRITICAL events only, enabled by ``separate_error_log``.
    4. Key-event handler: rotating keytrace.log attached to the
       ``tedit.keyevents`` logger when ``TEDIT_KEYTRACE`` is truthy.

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` sub-section is consulted; it may also set
            ``log_file`` to move editor.log elsewhere.

    Notes:
        The function never raises; I/O or permission errors are reported to
        stderr and logging continues with a best-effort configuration.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})
    log_filename = logging_config.get("log_file", "editor.log")
    log_file_level_str = str(logging_config.get("file_level", "DEBUG")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.DEBUG)

    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
    )
    file_handler = None
    try:
        file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5)
    except OSError as e_fh:
        print(f"Error setting up file logger for '{log_filename}': {e_fh}", file=sys.stderr)
        log_filename = os.path.join(tempfile.gettempdir(), "tedit.log")
        print(f"Logging to temporary file: '{log_filename}'", file=sys.stderr)
        try:
            file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5)
        except OSError as e_tmp:
            print(f"File logging disabled: {e_tmp}", file=sys.stderr)
    if file_handler:
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(log_file_level)

    # Console Handler
    console_handler = None
    if logging_config.get("log_to_console", False):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s"))
        console_handler.setLevel(getattr(logging, console_level_str, logging.WARNING))

    # Optional Separate Error Log File
    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        try:
            error_file_handler = _rotating_handler("error.log", 1 * 1024 * 1024, 3)
            error_file_handler.setFormatter(file_formatter)
            error_file_handler.setLevel(logging.ERROR)
        except OSError as e_efh:
            print(f"Error setting up separate error log 'error.log': {e_efh}.", file=sys.stderr)

    root_logger = logging.getLogger()
    root_logger.handlers = []  # avoid duplicates on repeated calls
    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)
    root_logger.setLevel(log_file_level)

    # Key Event Logger
    key_event_logger = logging.getLogger("tedit.keyevents")
    key_event_logger.propagate = False
    key_event_logger.setLevel(logging.DEBUG)
    key_event_logger.handlers = []
    key_event_logger.disabled = False

    if parse_bool(os.environ.get(KEYTRACE_ENV_VAR, "")):
        try:
            key_trace_handler = _rotating_handler("keytrace.log", 1 * 1024 * 1024, 3)
            key_trace_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            key_event_logger.addHandler(key_trace_handler)
            logging.info("Key event tracing enabled, logging to 'keytrace.log'.")
        except OSError as e_keytrace:
            logging.error(f"Failed to set up key trace logging: {e_keytrace}", exc_info=True)
            key_event_logger.disabled = True
    else:
        key_event_logger.addHandler(logging.NullHandler())
        key_event_logger.disabled = True
        logging.debug("Key event tracing is disabled.")

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info(f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}.")
    if console_handler:
        logging.info(f"Console logging to stderr at level: {logging.getLevelName(console_handler.level)}.")
    if error_file_handler:
        logging.info("Error logging to 'error.log' at level: ERROR.")
