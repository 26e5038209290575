# tests/conftest.py
"""Pytest configuration with shared fixtures for the TEDIT editor tests.

The fixtures build editing sessions without a terminal. Tests that touch the
curses layer patch the `curses` module inside the module under test with
`curses_mock`, whose `error` attribute is a real exception class.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional
from unittest.mock import MagicMock

import pytest

from tedit.core.FileStore import FileStore
from tedit.core.Session import EditorSession
from tedit.syntax.RuleLoader import parse_rules
from tedit.syntax.SyntaxRules import SyntaxRuleSet
from tedit.utils.settings import Preferences


C_RULES = """\
SYNTAX ".c" && ".h"
{
    "int", "double" = (255,0,0);
    "for", "while"  = (0,255,0);
}
"""


class CursesError(Exception):
    """Stand-in for `curses.error` in mocked modules."""


@pytest.fixture
def curses_mock() -> MagicMock:
    """A `curses` replacement with the constants the editor reads."""
    mock = MagicMock()
    mock.error = CursesError
    constants = {
        "A_NORMAL": 0,
        "A_BOLD": 1 << 21,
        "A_DIM": 1 << 20,
        "A_REVERSE": 1 << 18,
        "A_UNDERLINE": 1 << 17,
        "A_STANDOUT": 1 << 16,
        "COLORS": 256,
        "COLOR_PAIRS": 256,
        "ERR": -1,
        "KEY_ENTER": 343,
        "KEY_BACKSPACE": 263,
        "KEY_LEFT": 260,
        "KEY_RIGHT": 261,
        "KEY_RESIZE": 410,
        "ALL_MOUSE_EVENTS": 0xFFFFFFF,
        "REPORT_MOUSE_POSITION": 0x10000000,
        "BUTTON1_PRESSED": 0x2,
        "BUTTON1_RELEASED": 0x1,
        "BUTTON1_CLICKED": 0x4,
        "BUTTON4_PRESSED": 0x10000,
        "BUTTON5_PRESSED": 0x200000,
    }
    for name, value in constants.items():
        setattr(mock, name, value)
    mock.color_pair.side_effect = lambda n: n << 8
    mock.has_colors.return_value = True
    mock.can_change_color.return_value = True
    return mock


@pytest.fixture
def c_rules() -> SyntaxRuleSet:
    return parse_rules(C_RULES.splitlines())


@pytest.fixture
def make_session(tmp_path: Path) -> Callable[..., EditorSession]:
    """Factory for sessions whose save directory lives under `tmp_path`."""

    def _make(
        lines: Optional[list[str]] = None,
        config: Optional[dict] = None,
        rule_set: Optional[SyntaxRuleSet] = None,
        prefs: Optional[Preferences] = None,
        filename: Optional[str] = None,
    ) -> EditorSession:
        session = EditorSession(
            config or {},
            rule_set=rule_set,
            prefs=prefs or Preferences(),
            file_store=FileStore(tmp_path / "saves"),
        )
        if lines is not None:
            session.load_lines(lines, filename)
        return session

    return _make
