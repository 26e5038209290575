# tedit/core/Session.py
"""Session Module for the TEDIT Editor
====================================
This module provides `EditorSession`, the single context object that every
editing command runs against. It bundles:

- the `LineBuffer` (document),
- the `CursorViewport` (cursor and scroll offsets),
- the `History` (undo/redo snapshots),
- the loaded `SyntaxRuleSet` and the definition selected for the open file,
- the user `Preferences`,
- the dirty flag, the file name and the status message.

Commands are plain methods returning ``True`` when they changed anything the
screen shows. Mutating commands capture a snapshot first and commit it to the
history only if the buffer primitive reported success, so a command that hits
a capacity limit leaves no trace in the history.

The session knows nothing about curses; `tedit.core.Tedit` drives it.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional, Union

from tedit.core.CursorViewport import CursorViewport
from tedit.core.FileStore import FileStore, FileStoreError
from tedit.core.History import DEFAULT_HISTORY_DEPTH, History, Snapshot
from tedit.core.LineBuffer import DEFAULT_MAX_LINE_LENGTH, DEFAULT_MAX_LINES, LineBuffer
from tedit.syntax.SyntaxRules import SyntaxDefinition, SyntaxRuleSet
from tedit.syntax.Tokenizer import Span, highlight_line
from tedit.utils.settings import Preferences


TAB_SPACES = "    "

Position = Optional[tuple[int, int]]


## ==================== EditorSession Class ====================
class EditorSession:
    """Class EditorSession
    ======================
    Editing state plus every editing command.

    Attributes:
        buffer (LineBuffer): The document.
        view (CursorViewport): Cursor and viewport.
        history (History): Undo/redo stacks.
        rule_set (SyntaxRuleSet): All loaded highlight definitions.
        syntax (SyntaxDefinition | None): Definition selected for the current file.
        highlight_enabled (bool): Toggled by the user; off paints plain text.
        prefs (Preferences): Tab and auto-indent behavior.
        file_store (FileStore): Resolves prompt names and performs I/O.
        filename (str | None): Path of the open document, None for a new one.
        modified (bool): True if there are unsaved changes.
        status_message (str): Transient message for the status line.
    """

    def __init__(
        self,
        config: Optional[dict[str, Any]] = None,
        rule_set: Optional[SyntaxRuleSet] = None,
        prefs: Optional[Preferences] = None,
        file_store: Optional[FileStore] = None,
    ) -> None:
        config = config or {}
        limits = config.get("limits", {})
        files = config.get("files", {})

        self.buffer = LineBuffer(
            max_line_length=int(limits.get("max_line_length", DEFAULT_MAX_LINE_LENGTH)),
            max_lines=int(limits.get("max_lines", DEFAULT_MAX_LINES)),
        )
        self.view = CursorViewport()
        self.history = History(self, int(limits.get("history_depth", DEFAULT_HISTORY_DEPTH)))
        self.rule_set = rule_set if rule_set is not None else SyntaxRuleSet()
        self.syntax: Optional[SyntaxDefinition] = None
        self.highlight_enabled = True
        self.prefs = prefs or Preferences.from_config(config)
        self.file_store = file_store or FileStore(files.get("save_dir", "saves"))

        self.filename: Optional[str] = None
        self.modified = False
        self.status_message = "Ready"

    # --- Status ---
    def set_status_message(self, message: str) -> None:
        message = str(message)
        if self.status_message != message:
            self.status_message = message
            logging.debug(f"Status message set to: '{self.status_message}'")

    @property
    def display_name(self) -> str:
        return self.filename or "[No Name]"

    # --- Snapshots ---
    def snapshot(self) -> Snapshot:
        return Snapshot(self.buffer.snapshot(), self.view.cursor, self.view.viewport)

    def restore(self, snapshot: Snapshot) -> None:
        """Replaces buffer, cursor and viewport wholesale with a snapshot."""
        self.buffer.lines = list(snapshot.lines)
        self.view.restore(snapshot.cursor, snapshot.viewport)
        self.view.clamp(self.buffer)

    def _edit(self, name: str, mutate: Callable[[int, int], Position]) -> bool:
        """Runs one buffer primitive at the cursor and records it on success."""
        before = self.snapshot()
        new_pos = mutate(self.view.cursor_y, self.view.cursor_x)
        if new_pos is None:
            logging.debug("Session: %s at (%d,%d) was a no-op.", name, self.view.cursor_y, self.view.cursor_x)
            return False
        self.history.record_before_edit(before)
        self.view.set_position(*new_pos)
        return True

    # --- Editing commands ---
    def insert_char(self, ch: str) -> bool:
        """Inserts one printable character (a tab is routed to `insert_tab`)."""
        if ch == "\t":
            return self.insert_tab()
        if ch in ("\n", "\r"):
            return self.insert_newline()
        return self._edit("insert_char", lambda r, c: self.buffer.insert_char(r, c, ch))

    def insert_text(self, text: str) -> bool:
        return self._edit("insert_text", lambda r, c: self.buffer.insert_text(r, c, text))

    def insert_tab(self) -> bool:
        """Four spaces (all or nothing) or a literal tab, per ``prefs.tab_four_spaces``."""
        text = TAB_SPACES if self.prefs.tab_four_spaces else "\t"
        return self._edit("insert_tab", lambda r, c: self.buffer.insert_text(r, c, text))

    def insert_newline(self) -> bool:
        auto_indent = self.prefs.auto_indent
        return self._edit("split_line", lambda r, c: self.buffer.split_line(r, c, auto_indent))

    def delete_backward(self) -> bool:
        return self._edit("delete_backward", self.buffer.delete_backward)

    def delete_forward(self) -> bool:
        return self._edit("delete_forward", self.buffer.delete_forward)

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    # --- Movement commands ---
    def move_up(self) -> bool:
        return self.view.move_up(self.buffer)

    def move_down(self) -> bool:
        return self.view.move_down(self.buffer)

    def move_left(self) -> bool:
        return self.view.move_left(self.buffer)

    def move_right(self) -> bool:
        return self.view.move_right(self.buffer)

    def move_home(self) -> bool:
        return self.view.move_home(self.buffer)

    def move_end(self) -> bool:
        return self.view.move_end(self.buffer)

    def page_up(self, rows: int) -> bool:
        return self.view.page_up(self.buffer, rows)

    def page_down(self, rows: int) -> bool:
        return self.view.page_down(self.buffer, rows)

    def click(self, screen_y: int, screen_x: int) -> bool:
        return self.view.place_at_screen(self.buffer, screen_y, screen_x)

    def wheel(self, direction: int) -> bool:
        return self.view.wheel(self.buffer, direction)

    def update_viewport(self, rows: int, cols: int) -> bool:
        """Called once per frame before painting."""
        return self.view.scroll(rows, cols)

    # --- Highlighting ---
    def toggle_highlighting(self) -> bool:
        self.highlight_enabled = not self.highlight_enabled
        state = "on" if self.highlight_enabled else "off"
        self.set_status_message(f"Syntax highlighting {state}")
        return True

    def highlight(self, line: str) -> list[Span]:
        """Spans for painting ``line`` with the current definition and toggle."""
        return highlight_line(line, self.syntax if self.highlight_enabled else None)

    def select_syntax(self) -> Optional[SyntaxDefinition]:
        self.syntax = self.rule_set.select_for(self.filename)
        if self.syntax is not None:
            logging.info("Syntax definition for '%s': %s", self.filename, ", ".join(self.syntax.extensions))
        return self.syntax

    # --- Files ---
    def load_lines(self, lines: list[str], filename: Optional[str] = None) -> None:
        """Installs a new document: fresh cursor, empty history, clean state."""
        self.buffer.replace_lines(lines)
        self.view.reset()
        self.history.clear()
        self.filename = filename
        self.modified = False
        self.select_syntax()

    def open_file(self, path: Union[str, Path]) -> bool:
        """Loads ``path`` into the session. On failure the session is unchanged."""
        try:
            lines = self.file_store.load(path)
        except FileStoreError as e:
            logging.error(f"Open failed: {e}")
            self.set_status_message(f"Error: {e}")
            return False
        self.load_lines(lines, str(path))
        self.set_status_message(f"Opened {path} ({self.buffer.num_lines} lines)")
        return True

    def save_file(self, path: Union[str, Path, None] = None) -> bool:
        """Writes the buffer to ``path`` (default: the current file name).

        Clears the dirty flag but leaves the history intact.
        """
        target = path if path is not None else self.filename
        if not target:
            self.set_status_message("No file name")
            return False
        try:
            count = self.file_store.save(target, self.buffer)
        except FileStoreError as e:
            logging.error(f"Save failed: {e}")
            self.set_status_message(f"Error: {e}")
            return False
        if str(target) != self.filename:
            self.filename = str(target)
            self.select_syntax()
        self.modified = False
        self.set_status_message(f"Saved {count} lines to {target}")
        return True
