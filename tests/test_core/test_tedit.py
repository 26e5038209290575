# tests/test_core/test_tedit.py
"""Tests for the curses controller: prompts, file dialogs, quit and mouse."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from tedit.core.Tedit import KEY_HELP, Tedit


@pytest.fixture
def make_editor(curses_mock, make_session):
    """Builds a Tedit on a mocked 24x80 window; ``keys`` feed ``get_wch``."""

    def _make(lines=None, keys=(), config=None, **session_kwargs):
        stdscr = MagicMock()
        stdscr.getmaxyx.return_value = (24, 80)
        stdscr.get_wch.side_effect = list(keys)
        session = make_session(["hello", "world"] if lines is None else lines, **session_kwargs)
        return Tedit(stdscr, config or {}, session=session)

    with patch("tedit.core.Tedit.curses", curses_mock), patch("tedit.ui.DrawScreen.curses", curses_mock):
        yield _make


def test_startup_shows_key_help_and_enables_mouse(make_editor, curses_mock) -> None:
    editor = make_editor()
    assert editor.status_message == KEY_HELP
    curses_mock.raw.assert_called_once()
    curses_mock.mousemask.assert_called_once()


def test_mouse_can_be_disabled(make_editor, curses_mock) -> None:
    make_editor(config={"editor": {"mouse": False}})
    curses_mock.mousemask.assert_not_called()


class TestPrompt:
    def test_enter_returns_stripped_text(self, make_editor, curses_mock) -> None:
        editor = make_editor(keys=[" ", "a", "b", "c", curses_mock.KEY_BACKSPACE, "\n"])
        assert editor.prompt("Name: ") == "ab"

    def test_escape_cancels(self, make_editor) -> None:
        editor = make_editor(keys=["x", "\x1b"])
        assert editor.prompt("Name: ") is None

    def test_initial_text_and_cursor_keys(self, make_editor, curses_mock) -> None:
        editor = make_editor(keys=[curses_mock.KEY_LEFT, curses_mock.KEY_LEFT, "X", curses_mock.KEY_RIGHT, "Y", "\r"])
        assert editor.prompt("Name: ", "abc") == "aXbYc"

    def test_yes_no_prompt_returns_on_first_answer(self, make_editor) -> None:
        editor = make_editor(keys=["q", "Y"])
        assert editor.prompt("Sure? ", is_yes_no_prompt=True) == "y"

    def test_curses_read_error_is_retried(self, make_editor, curses_mock) -> None:
        editor = make_editor(keys=[curses_mock.error("no input"), "z", "\n"])
        assert editor.prompt("Name: ") == "z"


class TestExit:
    def test_clean_buffer_exits_immediately(self, make_editor) -> None:
        editor = make_editor()
        editor.running = True
        assert editor.exit_editor() is True
        assert editor.running is False

    def test_dirty_buffer_needs_confirmation(self, make_editor) -> None:
        editor = make_editor(keys=["n"])
        editor.session.insert_char("x")
        editor.running = True
        editor.exit_editor()
        assert editor.running is True
        assert editor.status_message == "Quit cancelled"

    def test_dirty_buffer_confirmed(self, make_editor) -> None:
        editor = make_editor(keys=["y"])
        editor.session.insert_char("x")
        editor.running = True
        editor.exit_editor()
        assert editor.running is False


class TestFileDialogs:
    def test_save_new_file_into_save_dir(self, make_editor, tmp_path: Path) -> None:
        editor = make_editor(keys=list("out.txt") + ["\n"])
        editor.session.insert_char("x")
        assert editor.save_file() is True
        saved = tmp_path / "saves" / "out.txt"
        assert saved.read_text(encoding="utf-8") == "xhello\nworld\n"
        assert editor.session.filename == str(saved)
        assert editor.session.modified is False

    def test_save_prefills_default_name(self, make_editor, tmp_path: Path) -> None:
        editor = make_editor(keys=["\n"], config={"editor": {"default_new_filename": "untitled.txt"}})
        editor.save_file()
        assert (tmp_path / "saves" / "untitled.txt").is_file()

    def test_save_cancelled(self, make_editor) -> None:
        editor = make_editor(keys=["\x1b"])
        assert editor.save_file() is False
        assert editor.status_message == "Save cancelled"

    def test_open_from_save_dir(self, make_editor, tmp_path: Path) -> None:
        saves = tmp_path / "saves"
        saves.mkdir()
        (saves / "doc.txt").write_text("one\ntwo\n", encoding="utf-8")
        editor = make_editor(keys=list("doc.txt") + ["\n"])
        editor.open_file()
        assert editor.session.buffer.lines == ["one", "two"]
        assert editor.session.filename == str(saves / "doc.txt")

    def test_open_with_unsaved_changes_can_be_declined(self, make_editor) -> None:
        editor = make_editor(keys=list("doc.txt") + ["\n", "n"])
        editor.session.insert_char("x")
        editor.open_file()
        assert editor.session.buffer.lines == ["xhello", "world"]
        assert editor.status_message == "Open cancelled"

    def test_open_missing_file_reports_error(self, make_editor) -> None:
        editor = make_editor(keys=list("missing.txt") + ["\n"])
        editor.open_file()
        assert editor.status_message.startswith("Error: Cannot open")
        assert editor.session.buffer.lines == ["hello", "world"]


class TestMouse:
    def test_left_click_places_cursor(self, make_editor, curses_mock) -> None:
        editor = make_editor()
        curses_mock.getmouse.return_value = (0, 8, 1, 0, curses_mock.BUTTON1_CLICKED)
        assert editor.handle_mouse() is True
        assert (editor.session.view.cursor_y, editor.session.view.cursor_x) == (1, 2)

    def test_click_on_status_row_is_clamped_to_text_area(self, make_editor, curses_mock) -> None:
        editor = make_editor([f"{i}" for i in range(40)])
        curses_mock.getmouse.return_value = (0, 6, 23, 0, curses_mock.BUTTON1_PRESSED)
        editor.handle_mouse()
        assert editor.session.view.cursor_y == 22

    def test_wheel_scrolls_three_lines(self, make_editor, curses_mock) -> None:
        editor = make_editor([""] * 10)
        curses_mock.getmouse.return_value = (0, 0, 0, 0, curses_mock.BUTTON5_PRESSED)
        editor.handle_mouse()
        assert editor.session.view.cursor_y == 3
        curses_mock.getmouse.return_value = (0, 0, 0, 0, curses_mock.BUTTON4_PRESSED)
        editor.handle_mouse()
        assert editor.session.view.cursor_y == 0

    def test_getmouse_error_is_ignored(self, make_editor, curses_mock) -> None:
        editor = make_editor()
        curses_mock.getmouse.side_effect = curses_mock.error("no event")
        assert editor.handle_mouse() is False


class TestRunLoop:
    def test_loop_runs_until_quit(self, make_editor, curses_mock) -> None:
        # "y" answers the unsaved-changes confirmation
        editor = make_editor(keys=["y"])
        editor.drawer.draw = MagicMock()
        editor.keybinder.get_key_input = MagicMock(side_effect=[curses_mock.ERR, "a", 17])
        editor.run()
        assert editor.running is False
        assert editor.session.buffer.lines[0] == "ahello"
        editor.stdscr.get_wch.assert_called_once()
        assert editor.drawer.draw.call_count == 3

    def test_unexpected_exception_stops_loop(self, make_editor) -> None:
        editor = make_editor()
        editor.drawer.draw = MagicMock(side_effect=RuntimeError("broken"))
        editor.run()
        assert editor.running is False
