# tedit/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen renders the TEDIT editor with curses.

It is responsible for:
- recomputing the viewport from the cursor once per frame,
- drawing the line-number gutter,
- painting the visible slice of the buffer with keyword colors,
- rendering the status bar,
- placing the terminal cursor.

Keyword colors come from the syntax definition selected for the open file.
Rule ``i`` gets color number ``16 + i`` and color pair ``1 + i``. On terminals
that can redefine colors the rule's RGB value is loaded with ``init_color``;
elsewhere the nearest palette color is used. Any failure leaves the rule
painted with the default attribute.
"""

import curses
import logging
from typing import TYPE_CHECKING, Any, Optional

from wcwidth import wcwidth

from tedit.syntax.SyntaxRules import SyntaxDefinition
from tedit.utils.utils import rgb_to_basic, rgb_to_xterm


if TYPE_CHECKING:
    from tedit.core.Tedit import Tedit


SYNTAX_COLOR_BASE = 16
SYNTAX_PAIR_BASE = 1

_ATTRIBUTE_NAMES = {
    "normal": "A_NORMAL",
    "bold": "A_BOLD",
    "dim": "A_DIM",
    "reverse": "A_REVERSE",
    "underline": "A_UNDERLINE",
    "standout": "A_STANDOUT",
}


def char_cells(ch: str) -> int:
    """Screen cells used by ``ch`` as painted (tabs and control chars take one)."""
    w = wcwidth(ch)
    return 1 if w < 0 else w


def display_char(ch: str) -> str:
    """Character actually handed to curses for ``ch``."""
    if ch == "\t":
        return " "
    if 0xD800 <= ord(ch) <= 0xDFFF or wcwidth(ch) < 0:
        return "?"
    return ch


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    =========================
    Paints one frame of the editor.

    Attributes:
        MIN_WINDOW_WIDTH (int): Narrowest window the editor draws in.
        MIN_WINDOW_HEIGHT (int): Shortest window the editor draws in.
        editor (Tedit): The controller (provides ``stdscr`` and ``session``).
        config (dict): Application configuration.
        colors (dict[str, int]): UI attributes (status, status_error, line_numbers).
        rule_attrs (list[int]): Attribute per rule of the allocated definition.

    Methods:
        draw(): Renders the whole screen.
        allocate_syntax_colors(definition): Initializes color pairs for a definition.
        truncate_string(s, max_width): Clips a string to a display width.
    """

    MIN_WINDOW_WIDTH = 10
    MIN_WINDOW_HEIGHT = 2

    def __init__(self, editor: "Tedit", config: dict[str, Any]) -> None:
        self.editor = editor
        self.config = config
        self.stdscr = editor.stdscr
        self.colors: dict[str, int] = {}
        self.rule_attrs: list[int] = []
        self._colors_for: Optional[SyntaxDefinition] = None
        self._has_colors = False
        self._init_ui_colors()

    @property
    def session(self):
        return self.editor.session

    # ---------------------- Colors ----------------------
    def _init_ui_colors(self) -> None:
        """Resolves ``[colors]`` attribute names and prepares curses colors."""
        color_config = self.config.get("colors", {})
        defaults = {"status": "reverse", "status_error": "bold", "line_numbers": "dim"}
        for key, default_name in defaults.items():
            name = str(color_config.get(key, default_name)).lower()
            attr_name = _ATTRIBUTE_NAMES.get(name)
            if attr_name is None:
                logging.warning("Unknown attribute %r for colors.%s, using %r", name, key, default_name)
                attr_name = _ATTRIBUTE_NAMES[default_name]
            self.colors[key] = getattr(curses, attr_name)
        self.colors["status_error"] |= self.colors["status"]

        try:
            self._has_colors = bool(curses.has_colors())
            if self._has_colors:
                curses.start_color()
                curses.use_default_colors()  # allow -1 as the default background
        except curses.error as e:
            logging.warning("Terminal color setup failed: %s", e)
            self._has_colors = False

    def _rule_color_number(self, index: int, rgb: tuple[int, int, int]) -> int:
        """Color number for rule ``index``; redefines it when the terminal allows."""
        r, g, b = rgb
        color_num = SYNTAX_COLOR_BASE + index
        if curses.can_change_color() and color_num < curses.COLORS:
            scaled = [max(0, min(1000, c * 1000 // 255)) for c in (r, g, b)]
            curses.init_color(color_num, *scaled)
            return color_num
        if curses.COLORS >= 256:
            return rgb_to_xterm(r, g, b)
        return rgb_to_basic(r, g, b)

    def allocate_syntax_colors(self, definition: Optional[SyntaxDefinition]) -> None:
        """Initializes one color pair per rule of ``definition``."""
        self._colors_for = definition
        self.rule_attrs = []
        if definition is None:
            return
        for index, rule in enumerate(definition.rules):
            attr = curses.A_NORMAL
            pair = SYNTAX_PAIR_BASE + index
            if self._has_colors and pair < curses.COLOR_PAIRS:
                try:
                    color_num = self._rule_color_number(index, rule.color)
                    curses.init_pair(pair, color_num, -1)
                    attr = curses.color_pair(pair)
                except curses.error as e:
                    logging.warning("Color pair %d for rule %d unavailable: %s", pair, index, e)
                    attr = curses.A_NORMAL
            self.rule_attrs.append(attr)
        logging.debug("Allocated %d syntax color pair(s).", len(self.rule_attrs))

    def _attr_for_rule(self, rule_index: Optional[int]) -> int:
        if rule_index is None or rule_index >= len(self.rule_attrs):
            return curses.A_NORMAL
        return self.rule_attrs[rule_index]

    # ---------------------- Frame ----------------------
    def draw(self) -> None:
        """The main screen drawing method."""
        try:
            height, width = self.stdscr.getmaxyx()
            if height < self.MIN_WINDOW_HEIGHT or width < self.MIN_WINDOW_WIDTH:
                self._show_small_window_error(height, width)
                return

            if self.session.syntax is not self._colors_for:
                self.allocate_syntax_colors(self.session.syntax)

            self.session.update_viewport(height, width)
            self.stdscr.erase()
            self._draw_text(height, width)
            self._draw_status_bar(height, width)
            self._position_cursor(height, width)
            self.stdscr.noutrefresh()
            curses.doupdate()

        except curses.error as e:
            logging.error(f"Curses error in DrawScreen.draw(): {e}", exc_info=True)
            self.session.set_status_message(f"Draw error: {str(e)[:80]}")

    def _show_small_window_error(self, height: int, width: int) -> None:
        msg = f"Window too small ({width}x{height})"
        try:
            self.stdscr.erase()
            self.stdscr.addstr(max(0, height // 2), 0, msg[: max(0, width - 1)])
            self.stdscr.noutrefresh()
            curses.doupdate()
        except curses.error:
            pass  # terminal too small for even this

    def _draw_text(self, height: int, width: int) -> None:
        """Gutter plus the visible slice of every line on screen."""
        view = self.session.view
        gutter = view.gutter_width
        text_rows = view.text_rows(height)
        lines = self.session.buffer.visible_slice(view.row_offset, text_rows)

        for screen_row, line in enumerate(lines):
            line_no = view.row_offset + screen_row + 1
            gutter_text = f"{line_no:4d} |"[:gutter].ljust(gutter)
            try:
                self.stdscr.addstr(screen_row, 0, gutter_text, self.colors["line_numbers"])
            except curses.error as e:
                logging.debug("Gutter draw failed at row %d: %s", screen_row, e)
            self._draw_single_line(screen_row, line, gutter, width)

    def _draw_single_line(self, screen_row: int, line: str, start_x: int, width: int) -> None:
        """Paints ``line`` from ``col_offset`` on, one span per highlight run.

        Wide characters that do not fit at the right edge are not drawn.
        """
        col_offset = self.session.view.col_offset
        if col_offset >= len(line):
            return

        x = start_x
        char_pos = 0
        for text, rule_index in self.session.highlight(line):
            span_start, char_pos = char_pos, char_pos + len(text)
            if char_pos <= col_offset:
                continue
            visible = text[max(0, col_offset - span_start):]

            out: list[str] = []
            start = x
            for ch in visible:
                w = char_cells(ch)
                if x + w > width:
                    break
                out.append(display_char(ch))
                x += w
            if out:
                self._put(screen_row, start, "".join(out), self._attr_for_rule(rule_index))
            if x >= width or len(out) < len(visible):
                break

    def _put(self, y: int, x: int, text: str, attr: int) -> None:
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen and raises.
            logging.debug("addstr clipped at (%d,%d)", y, x)

    def truncate_string(self, s: str, max_width: int) -> str:
        """Returns ``s`` clipped to display width ``max_width``."""
        result: list[str] = []
        consumed = 0
        for ch in s:
            w = char_cells(ch)
            if consumed + w > max_width:
                break
            result.append(ch)
            consumed += w
        return "".join(result)

    def status_text(self, width: int) -> str:
        """Status line: file name (``*`` when dirty), position, highlight state, message."""
        s = self.session
        dirty = "*" if s.modified else ""
        if s.syntax is None:
            hl = "plain"
        else:
            hl = "HL on" if s.highlight_enabled else "HL off"
        left = (
            f" {s.display_name}{dirty} | Ln {s.view.cursor_y + 1}/{s.buffer.num_lines} | "
            f"Col {s.view.cursor_x + 1} | {hl} | "
        )
        line = self.truncate_string(left + (s.status_message or ""), max(0, width - 1))
        return line

    def _draw_status_bar(self, height: int, width: int) -> None:
        y = height - 1
        line = self.status_text(width)
        attr = self.colors["status"]
        if self.session.status_message.lower().startswith("error"):
            attr = self.colors["status_error"]
        try:
            self.stdscr.addstr(y, 0, line.ljust(width - 1), attr)
        except curses.error as e:
            logging.debug("Status bar draw failed: %s", e)

    def _position_cursor(self, height: int, width: int) -> None:
        """Moves the terminal cursor to the session cursor's screen cell."""
        view = self.session.view
        line = self.session.buffer[view.cursor_y]
        before = line[view.col_offset:view.cursor_x]
        screen_y = view.cursor_y - view.row_offset
        screen_x = view.gutter_width + sum(char_cells(ch) for ch in before)

        screen_y = max(0, min(screen_y, view.text_rows(height) - 1))
        screen_x = max(0, min(screen_x, width - 1))
        try:
            self.stdscr.move(screen_y, screen_x)
        except curses.error as e:
            logging.warning(f"Curses error positioning cursor at ({screen_y}, {screen_x}): {e}")
