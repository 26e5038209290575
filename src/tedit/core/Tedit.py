# tedit/core/Tedit.py
"""Tedit Module
================
The curses controller of the TEDIT editor.

`Tedit` owns the curses screen, the `EditorSession`, the `DrawScreen`
renderer and the `KeyBinder`. Its main loop is strictly sequential:

1. render the current state,
2. block until one input event arrives,
3. dispatch it to an editor action.

Editing actions are thin wrappers around session commands; the controller
adds only what needs the terminal: prompts on the status row, the page size
taken from the window height, mouse decoding and the quit confirmation.
"""

import curses
import logging
from typing import Any, Optional

from tedit.core.Session import EditorSession
from tedit.syntax.SyntaxRules import SyntaxRuleSet
from tedit.ui.DrawScreen import DrawScreen
from tedit.ui.KeyBinder import KeyBinder
from tedit.utils.settings import Preferences


logger = logging.getLogger("tedit")

KEY_HELP = "^S Save  ^O Open  ^Q Quit  ^Z Undo  ^Y Redo  ^T Highlight"


## ==================== Tedit Class ====================
class Tedit:
    """Class Tedit
    ==============
    Connects the terminal to an editing session.

    Attributes:
        stdscr: The curses standard screen.
        config (dict): Merged application configuration.
        session (EditorSession): Editing state and commands.
        drawer (DrawScreen): Renderer.
        keybinder (KeyBinder): Input decoding and dispatch.
        running (bool): Cleared by `exit_editor` to stop the main loop.

    Methods:
        run(): The main loop.
        prompt(message, initial, is_yes_no_prompt): One-line input on the status row.
        open_file() / save_file(): Prompt for a name, then delegate to the session.
        exit_editor(): Stops the loop, confirming first if there are unsaved changes.
    """

    def __init__(
        self,
        stdscr: Any,
        config: dict[str, Any],
        rule_set: Optional[SyntaxRuleSet] = None,
        prefs: Optional[Preferences] = None,
        session: Optional[EditorSession] = None,
    ) -> None:
        self.stdscr = stdscr
        self.config = config
        self.session = session or EditorSession(config, rule_set=rule_set, prefs=prefs)
        self.running = False

        self._setup_environment()
        self.drawer = DrawScreen(self, config)
        self.keybinder = KeyBinder(self)
        if self.session.status_message == "Ready":
            self.session.set_status_message(KEY_HELP)

    def _setup_environment(self) -> None:
        """Terminal modes: raw keys, keypad decoding, blocking reads, optional mouse."""
        try:
            curses.raw()
            curses.noecho()
            self.stdscr.keypad(True)
            self.stdscr.nodelay(False)
            self.stdscr.timeout(-1)
            curses.curs_set(1)
        except curses.error as e:
            logger.warning("Terminal setup incomplete: %s", e)

        if self.config.get("editor", {}).get("mouse", True):
            try:
                curses.mousemask(curses.ALL_MOUSE_EVENTS | curses.REPORT_MOUSE_POSITION)
                curses.mouseinterval(0)
            except curses.error as e:
                logger.warning("Mouse support unavailable: %s", e)

    # --- Status ---
    @property
    def status_message(self) -> str:
        return self.session.status_message

    def set_status_message(self, message: str) -> None:
        self.session.set_status_message(message)

    def _rows(self) -> int:
        height, _width = self.stdscr.getmaxyx()
        return height

    # --- Editing actions (bound by KeyBinder) ---
    def insert_text(self, text: str) -> bool:
        return self.session.insert_char(text) if len(text) == 1 else self.session.insert_text(text)

    def handle_enter(self) -> bool:
        return self.session.insert_newline()

    def handle_backspace(self) -> bool:
        return self.session.delete_backward()

    def handle_delete(self) -> bool:
        return self.session.delete_forward()

    def handle_tab(self) -> bool:
        return self.session.insert_tab()

    def undo(self) -> bool:
        return self.session.undo()

    def redo(self) -> bool:
        return self.session.redo()

    def toggle_highlighting(self) -> bool:
        return self.session.toggle_highlighting()

    # --- Movement actions ---
    def handle_up(self) -> bool:
        return self.session.move_up()

    def handle_down(self) -> bool:
        return self.session.move_down()

    def handle_left(self) -> bool:
        return self.session.move_left()

    def handle_right(self) -> bool:
        return self.session.move_right()

    def handle_home(self) -> bool:
        return self.session.move_home()

    def handle_end(self) -> bool:
        return self.session.move_end()

    def handle_page_up(self) -> bool:
        return self.session.page_up(self._rows())

    def handle_page_down(self) -> bool:
        return self.session.page_down(self._rows())

    def handle_mouse(self) -> bool:
        """Left click places the cursor; wheel scrolls three lines."""
        try:
            _id, mx, my, _z, bstate = curses.getmouse()
        except curses.error:
            return False

        wheel_down = getattr(curses, "BUTTON5_PRESSED", 0x200000)
        if bstate & curses.BUTTON4_PRESSED:
            return self.session.wheel(-1)
        if bstate & wheel_down:
            return self.session.wheel(1)
        if bstate & (curses.BUTTON1_CLICKED | curses.BUTTON1_PRESSED | curses.BUTTON1_RELEASED):
            # Status row is not part of the text area.
            my = min(my, self.session.view.text_rows(self._rows()) - 1)
            return self.session.click(my, mx)
        return False

    def handle_resize(self) -> bool:
        height, width = self.stdscr.getmaxyx()
        logger.debug("Window resized to %dx%d", width, height)
        self.session.update_viewport(height, width)
        return True

    # --- Prompt-driven actions ---
    def prompt(self, message: str, initial: str = "", is_yes_no_prompt: bool = False) -> Optional[str]:
        """Reads one line of input on the status row.

        Enter accepts, ESC cancels (returns None). A yes/no prompt returns
        "y" or "n" as soon as either key is pressed.
        """
        logger.debug(f"Prompt called. Message: '{message}', Initial: '{initial}'")
        input_buffer = list(initial)
        cursor_pos = len(input_buffer)

        while True:
            h, w = self.stdscr.getmaxyx()
            prompt_y = h - 1
            shown = f"{message}{''.join(input_buffer)}"
            try:
                self.stdscr.move(prompt_y, 0)
                self.stdscr.clrtoeol()
                self.stdscr.addstr(prompt_y, 0, shown[: max(0, w - 1)], self.drawer.colors["status"])
                self.stdscr.move(prompt_y, min(len(message) + cursor_pos, max(0, w - 1)))
                self.stdscr.refresh()
            except curses.error as e:
                logger.debug("Prompt draw failed: %s", e)

            try:
                key = self.stdscr.get_wch()
            except curses.error:
                continue

            if isinstance(key, str) and len(key) == 1 and ord(key) in (10, 13, 27, 8, 127):
                key = ord(key)

            if key == curses.KEY_ENTER or key in (10, 13):
                return "".join(input_buffer).strip()
            if key == 27:
                return None
            if key in (curses.KEY_BACKSPACE, 127, 8):
                if cursor_pos > 0:
                    cursor_pos -= 1
                    input_buffer.pop(cursor_pos)
            elif key == curses.KEY_LEFT:
                cursor_pos = max(0, cursor_pos - 1)
            elif key == curses.KEY_RIGHT:
                cursor_pos = min(len(input_buffer), cursor_pos + 1)
            elif key == curses.KEY_RESIZE:
                self.handle_resize()
            elif isinstance(key, str) and key.isprintable():
                if is_yes_no_prompt:
                    if key.lower() in ("y", "n"):
                        return key.lower()
                else:
                    input_buffer.insert(cursor_pos, key)
                    cursor_pos += 1

    def open_file(self) -> bool:
        name = self.prompt("Open file: ")
        if not name:
            self.set_status_message("Open cancelled")
            return True
        if self.session.modified:
            ans = self.prompt("Discard unsaved changes? (y/n): ", is_yes_no_prompt=True)
            if ans != "y":
                self.set_status_message("Open cancelled")
                return True
        self.session.open_file(self.session.file_store.resolve(name))
        return True

    def save_file(self) -> bool:
        """Asks for a file name (pre-filled with the current one) and saves."""
        default_name = self.config.get("editor", {}).get("default_new_filename", "")
        name = self.prompt("Save as: ", self.session.filename or default_name)
        if not name:
            self.set_status_message("Save cancelled")
            return False
        target = name if name == self.session.filename else self.session.file_store.resolve(name)
        return self.session.save_file(target)

    def exit_editor(self) -> bool:
        """Signals the main loop to stop. Unsaved changes need a "y" to discard."""
        if self.session.modified:
            ans = self.prompt("Unsaved changes. Quit anyway? (y/n): ", is_yes_no_prompt=True)
            if ans != "y":
                self.set_status_message("Quit cancelled")
                logger.info("User cancelled exit at the confirmation prompt.")
                return True
        self.running = False
        logger.info("Main loop stop signaled.")
        return True

    # --- Main loop ---
    def run(self) -> None:
        """Render, read one event, dispatch; until `exit_editor` clears ``running``."""
        logger.info("Editor main loop started.")
        self.running = True
        while self.running:
            try:
                self.drawer.draw()
                key = self.keybinder.get_key_input()
                if key == curses.ERR:
                    continue
                self.keybinder.handle_input(key)
            except KeyboardInterrupt:
                logger.info("Main loop interrupted by KeyboardInterrupt.")
                self.exit_editor()
            except Exception as e:
                logger.critical("Unhandled exception in main loop: %s", e, exc_info=True)
                self.running = False
        logger.info("Editor main loop finished.")
