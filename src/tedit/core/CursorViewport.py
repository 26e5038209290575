# tedit/core/CursorViewport.py
"""CursorViewport Module for the TEDIT Editor
===========================================
Tracks the cursor (row, col) inside a `LineBuffer` and the viewport, i.e. the
top-left buffer cell that is visible on screen.

Scroll offsets are recomputed once per render frame from the cursor position
and the terminal size:

- One terminal row is reserved for the status line, so ``rows - 1`` text rows
  are visible.
- A gutter of ``gutter_width`` columns is reserved for line numbers, so
  ``cols - gutter_width`` text columns are visible.

Movement methods keep the cursor inside the buffer: vertical moves clamp the
column to the destination line, horizontal moves wrap across line boundaries.
None of them touch the history.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from tedit.core.LineBuffer import LineBuffer


LINE_NUMBER_WIDTH = 6
WHEEL_SCROLL_LINES = 3


@dataclass(frozen=True)
class Cursor:
    row: int = 0
    col: int = 0


@dataclass(frozen=True)
class Viewport:
    row_offset: int = 0
    col_offset: int = 0


## ==================== CursorViewport Class ====================
class CursorViewport:
    """Class CursorViewport
    =======================
    Cursor and scroll state plus the movement commands.

    Attributes:
        cursor_y (int): Cursor row in the buffer.
        cursor_x (int): Cursor column; may equal the line length.
        row_offset (int): First buffer row shown on screen.
        col_offset (int): First buffer column shown on screen.
        gutter_width (int): Columns reserved for line numbers.

    Every ``move_*`` method returns True if the cursor moved.
    """

    def __init__(self, gutter_width: int = LINE_NUMBER_WIDTH) -> None:
        self.cursor_y: int = 0
        self.cursor_x: int = 0
        self.row_offset: int = 0
        self.col_offset: int = 0
        self.gutter_width = gutter_width

    # --- State exchange with snapshots ---
    @property
    def cursor(self) -> Cursor:
        return Cursor(self.cursor_y, self.cursor_x)

    @property
    def viewport(self) -> Viewport:
        return Viewport(self.row_offset, self.col_offset)

    def restore(self, cursor: Cursor, viewport: Viewport) -> None:
        self.cursor_y, self.cursor_x = cursor.row, cursor.col
        self.row_offset, self.col_offset = viewport.row_offset, viewport.col_offset

    def reset(self) -> None:
        """Cursor and viewport back to the document start (file load)."""
        self.cursor_y = self.cursor_x = 0
        self.row_offset = self.col_offset = 0

    def set_position(self, row: int, col: int) -> None:
        self.cursor_y, self.cursor_x = row, col

    # --- Scrolling ---
    @staticmethod
    def text_rows(rows: int) -> int:
        """Visible text rows for a terminal of ``rows`` rows (status line excluded)."""
        return max(1, rows - 1)

    def usable_cols(self, cols: int) -> int:
        return max(1, cols - self.gutter_width)

    def scroll(self, rows: int, cols: int) -> bool:
        """Recomputes the scroll offsets so the cursor stays visible.

        Args:
            rows: Terminal height in cells.
            cols: Terminal width in cells.

        Returns:
            bool: True if either offset changed.
        """
        old = (self.row_offset, self.col_offset)

        text_rows = self.text_rows(rows)
        if self.cursor_y < self.row_offset:
            self.row_offset = self.cursor_y
        elif self.cursor_y >= self.row_offset + text_rows:
            self.row_offset = self.cursor_y - text_rows + 1

        usable = self.usable_cols(cols)
        if self.cursor_x < self.col_offset:
            self.col_offset = self.cursor_x
        elif self.cursor_x >= self.col_offset + usable:
            self.col_offset = self.cursor_x - usable + 1

        changed = old != (self.row_offset, self.col_offset)
        if changed:
            logging.debug("Viewport scrolled to (%d,%d)", self.row_offset, self.col_offset)
        return changed

    # --- Helpers ---
    def clamp(self, buffer: "LineBuffer") -> None:
        """Pulls the cursor back inside the buffer."""
        self.cursor_y = max(0, min(self.cursor_y, buffer.num_lines - 1))
        self.cursor_x = max(0, min(self.cursor_x, buffer.line_length(self.cursor_y)))

    def _move_vertically(self, buffer: "LineBuffer", delta: int) -> bool:
        old = (self.cursor_y, self.cursor_x)
        self.cursor_y = max(0, min(self.cursor_y + delta, buffer.num_lines - 1))
        self.cursor_x = min(self.cursor_x, buffer.line_length(self.cursor_y))
        return old != (self.cursor_y, self.cursor_x)

    # --- Movement commands ---
    def move_up(self, buffer: "LineBuffer") -> bool:
        return self._move_vertically(buffer, -1)

    def move_down(self, buffer: "LineBuffer") -> bool:
        return self._move_vertically(buffer, 1)

    def move_left(self, buffer: "LineBuffer") -> bool:
        """One column left, wrapping to the end of the previous line."""
        if self.cursor_x > 0:
            self.cursor_x -= 1
            return True
        if self.cursor_y > 0:
            self.cursor_y -= 1
            self.cursor_x = buffer.line_length(self.cursor_y)
            return True
        return False

    def move_right(self, buffer: "LineBuffer") -> bool:
        """One column right, wrapping to the start of the next line."""
        if self.cursor_x < buffer.line_length(self.cursor_y):
            self.cursor_x += 1
            return True
        if self.cursor_y < buffer.num_lines - 1:
            self.cursor_y += 1
            self.cursor_x = 0
            return True
        return False

    def move_home(self, buffer: "LineBuffer") -> bool:
        moved = self.cursor_x != 0
        self.cursor_x = 0
        return moved

    def move_end(self, buffer: "LineBuffer") -> bool:
        end = buffer.line_length(self.cursor_y)
        moved = self.cursor_x != end
        self.cursor_x = end
        return moved

    def page_up(self, buffer: "LineBuffer", rows: int) -> bool:
        return self._move_vertically(buffer, -self.text_rows(rows))

    def page_down(self, buffer: "LineBuffer", rows: int) -> bool:
        return self._move_vertically(buffer, self.text_rows(rows))

    def wheel(self, buffer: "LineBuffer", direction: int) -> bool:
        """Scrolls a fixed number of lines; negative direction scrolls up."""
        step = WHEEL_SCROLL_LINES if direction > 0 else -WHEEL_SCROLL_LINES
        return self._move_vertically(buffer, step)

    def place_at_screen(self, buffer: "LineBuffer", screen_y: int, screen_x: int) -> bool:
        """Maps a pointer click at screen cell (y, x) to an absolute cursor position.

        Clicks in the gutter land on column ``col_offset``; clicks past the end of
        a line or below the last line are clamped.
        """
        old = (self.cursor_y, self.cursor_x)
        row = self.row_offset + max(0, screen_y)
        col = self.col_offset + max(0, screen_x - self.gutter_width)
        self.cursor_y, self.cursor_x = row, col
        self.clamp(buffer)
        return old != (self.cursor_y, self.cursor_x)
