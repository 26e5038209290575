# tedit/core/LineBuffer.py
"""LineBuffer Module for the TEDIT Editor
=======================================
This module provides the `LineBuffer` class, the ordered sequence of text lines
that makes up the document being edited.

Every mutation primitive enforces two policy limits:

- ``max_line_length`` (L_max): a line never grows beyond ``L_max - 1`` characters.
- ``max_lines`` (N_max): the document never holds more than ``N_max`` lines.

Exceeding either limit is not an error. The primitive simply does nothing and
reports the no-op to its caller (``None`` or ``False``), so the document is
never left half-edited.

Primitives take an explicit (row, col) position and return the cursor
position that results from the edit. They never touch the cursor, the
viewport or the history themselves; that is the session's job.
"""

import logging
from typing import Iterable, Iterator, Optional


DEFAULT_MAX_LINE_LENGTH = 1024
DEFAULT_MAX_LINES = 1000


## ==================== LineBuffer Class ====================
class LineBuffer:
    """Class LineBuffer
    ===================
    Owns the document lines and exposes bounded edit primitives.

    Attributes:
        max_line_length (int): L_max. Lines are limited to ``L_max - 1`` characters.
        max_lines (int): N_max. Upper bound on the number of lines.
        lines (list[str]): The document. Always holds at least one line.

    Methods:
        insert_char(row, col, ch) -> Optional[tuple[int, int]]
        insert_text(row, col, text) -> Optional[tuple[int, int]]
        delete_backward(row, col) -> Optional[tuple[int, int]]
        delete_forward(row, col) -> Optional[tuple[int, int]]
        split_line(row, col, auto_indent) -> Optional[tuple[int, int]]
        replace_lines(lines) -> None
    """

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        max_lines: int = DEFAULT_MAX_LINES,
    ) -> None:
        if max_line_length < 2:
            raise ValueError(f"max_line_length must be at least 2, got {max_line_length}")
        if max_lines < 1:
            raise ValueError(f"max_lines must be at least 1, got {max_lines}")
        self.max_line_length = max_line_length
        self.max_lines = max_lines
        self.lines: list[str] = [""]
        if lines is not None:
            self.replace_lines(lines)

    # --- Read access ---
    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __getitem__(self, row: int) -> str:
        return self.lines[row]

    @property
    def num_lines(self) -> int:
        return len(self.lines)

    @property
    def line_capacity(self) -> int:
        """Largest number of characters a single line may hold (``L_max - 1``)."""
        return self.max_line_length - 1

    def line_length(self, row: int) -> int:
        return len(self.lines[row])

    def visible_slice(self, first_row: int, count: int) -> list[str]:
        """Returns up to ``count`` lines starting at ``first_row`` (for the renderer)."""
        if count <= 0 or first_row >= len(self.lines):
            return []
        return self.lines[max(0, first_row):first_row + count]

    # --- Wholesale replacement ---
    def replace_lines(self, lines: Iterable[str]) -> None:
        """Replaces the whole document, clipping to the policy limits.

        Lines longer than ``L_max - 1`` are truncated and lines past ``N_max``
        are dropped. An empty sequence becomes a single empty line so the
        ``num_lines >= 1`` invariant holds.
        """
        capacity = self.line_capacity
        new_lines: list[str] = []
        clipped = 0
        for line in lines:
            if len(new_lines) >= self.max_lines:
                clipped += 1
                continue
            if len(line) > capacity:
                line = line[:capacity]
            new_lines.append(line)
        if clipped:
            logging.warning(
                "LineBuffer: document exceeds %d lines, %d trailing lines dropped.",
                self.max_lines,
                clipped,
            )
        self.lines = new_lines or [""]

    # --- Character edits ---
    def insert_char(self, row: int, col: int, ch: str) -> Optional[tuple[int, int]]:
        """Inserts a single character at (row, col), shifting the tail right.

        Returns:
            The new cursor position ``(row, col + 1)``, or None when the line
            is already at capacity.
        """
        if len(ch) != 1:
            raise ValueError(f"insert_char expects a single character, got {ch!r}")
        return self.insert_text(row, col, ch)

    def insert_text(self, row: int, col: int, text: str) -> Optional[tuple[int, int]]:
        """Inserts a run of characters on one line as a single all-or-nothing edit."""
        if "\n" in text:
            raise ValueError("insert_text does not accept newlines; use split_line")
        line = self.lines[row]
        if len(line) + len(text) > self.line_capacity:
            logging.debug(
                "LineBuffer: insert of %d char(s) at (%d,%d) rejected, line length %d.",
                len(text), row, col, len(line),
            )
            return None
        self.lines[row] = line[:col] + text + line[col:]
        return row, col + len(text)

    def delete_backward(self, row: int, col: int) -> Optional[tuple[int, int]]:
        """Backspace semantics.

        Removes the character left of the cursor, or joins the current line onto
        the previous one when the cursor sits at column 0. Returns the new cursor
        position, or None for a no-op (document start, or a join that would
        overflow the previous line).
        """
        if col > 0:
            line = self.lines[row]
            self.lines[row] = line[:col - 1] + line[col:]
            return row, col - 1

        if row == 0:
            return None

        prev_len = len(self.lines[row - 1])
        if prev_len + len(self.lines[row]) > self.line_capacity:
            logging.debug("LineBuffer: join of line %d onto %d rejected (too long).", row, row - 1)
            return None
        self.lines[row - 1] += self.lines.pop(row)
        return row - 1, prev_len

    def delete_forward(self, row: int, col: int) -> Optional[tuple[int, int]]:
        """Delete-key semantics: mirror of `delete_backward`.

        Removes the character under the cursor, or pulls the next line up onto
        the current one when the cursor is at end of line. The cursor does not
        move on success.
        """
        line = self.lines[row]
        if col < len(line):
            self.lines[row] = line[:col] + line[col + 1:]
            return row, col

        if row >= len(self.lines) - 1:
            return None

        if len(line) + len(self.lines[row + 1]) > self.line_capacity:
            logging.debug("LineBuffer: join of line %d onto %d rejected (too long).", row + 1, row)
            return None
        self.lines[row] = line + self.lines.pop(row + 1)
        return row, col

    # --- Line edits ---
    def split_line(self, row: int, col: int, auto_indent: bool = True) -> Optional[tuple[int, int]]:
        """Enter key: breaks the line at the cursor.

        The current line keeps the text before the cursor; the remainder moves to
        a new line inserted right after it. With ``auto_indent`` the new line is
        prefixed with as many spaces as the kept part starts with, and the cursor
        lands after that indent.

        Returns:
            The new cursor position, or None when the document already holds
            ``max_lines`` lines.
        """
        if len(self.lines) >= self.max_lines:
            logging.debug("LineBuffer: split rejected, document at %d lines.", self.max_lines)
            return None

        line = self.lines[row]
        head, tail = line[:col], line[col:]

        indent = 0
        if auto_indent:
            indent = len(head) - len(head.lstrip(" "))

        new_line = (" " * indent + tail)[: self.line_capacity]
        self.lines[row] = head
        self.lines.insert(row + 1, new_line)
        return row + 1, indent

    def snapshot(self) -> tuple[str, ...]:
        """Returns an immutable copy of the lines.

        Strings are immutable, so the tuple shares every line with the live
        buffer and only lines rewritten later get new storage.
        """
        return tuple(self.lines)
