# tedit/core/History.py
"""History Module for TEDIT Editor
===============================
This module provides the `History` class, which manages the undo and redo stacks
for the TEDIT text editor.

Unlike an action log, every entry is a full `Snapshot` of the editing state:
the buffer lines, the cursor and the viewport. Undoing restores a snapshot
wholesale, which makes undo and redo exact inverses of each other.

Key Features:
-------------
- Two bounded stacks (undo and redo), each holding at most ``max_depth`` snapshots.
- Recording a new edit always invalidates the redo stack (no branching history).
- Snapshots are tuples of immutable strings, so untouched lines are shared
  between snapshots rather than copied.
- The document is marked modified on every record, undo and redo.

Classes:
--------
- Snapshot: Immutable copy of {lines, cursor, viewport}.
- History: Undo/redo stacks bound to an `EditorSession`.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tedit.core.CursorViewport import Cursor, Viewport


if TYPE_CHECKING:
    from tedit.core.Session import EditorSession


DEFAULT_HISTORY_DEPTH = 100


@dataclass(frozen=True)
class Snapshot:
    """Editing state at one point in time."""

    lines: tuple[str, ...]
    cursor: Cursor
    viewport: Viewport


## ==================== History Class (Undo/Redo) ====================
class History:
    """Class History
    ===================
    Manages the undo and redo snapshot stacks for an editor session.

    Attributes:
        session (EditorSession): The session whose state is captured and restored.
        max_depth (int): Capacity of each stack.
        _undo_stack (list[Snapshot]): States to return to on undo, newest last.
        _redo_stack (list[Snapshot]): States to return to on redo, newest last.

    Methods:
        record_before_edit(snapshot):
            Stores the pre-edit state, clears the redo stack, marks the session dirty.
        clear():
            Empties both stacks.
        undo() -> bool:
            Restores the state before the last edit. False if there is nothing to undo.
        redo() -> bool:
            Re-applies the last undone edit. False if there is nothing to redo.
    """

    def __init__(self, session: "EditorSession", max_depth: int = DEFAULT_HISTORY_DEPTH):
        if max_depth < 1:
            raise ValueError(f"History depth must be positive, got {max_depth}")
        self.session = session
        self.max_depth = max_depth
        self._undo_stack: list[Snapshot] = []
        self._redo_stack: list[Snapshot] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def record_before_edit(self, snapshot: Snapshot) -> None:
        """Records the state captured just before a successful edit.

        When the undo stack is full the snapshot is not stored; the edit itself
        still goes through.
        """
        if len(self._undo_stack) < self.max_depth:
            self._undo_stack.append(snapshot)
        else:
            logging.debug("History: undo stack full (%d), snapshot not stored.", self.max_depth)
        self._redo_stack.clear()
        self.session.modified = True
        logging.debug("History: edit recorded. Undo depth: %d", len(self._undo_stack))

    def clear(self) -> None:
        """Clears both undo and redo stacks."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        logging.debug("History: Undo/Redo stacks cleared.")

    def undo(self) -> bool:
        """Undoes the last recorded edit.

        The current state is pushed onto the redo stack (dropped silently if that
        stack is full) and the popped snapshot is restored.

        Returns:
            bool: True if the state was restored, False if there was nothing to undo.
        """
        logging.debug(f"UNDO CALLED. Undo depth: {len(self._undo_stack)}")
        if not self._undo_stack:
            self.session.set_status_message("Nothing to undo")
            return False

        target = self._undo_stack.pop()
        current = self.session.snapshot()
        if len(self._redo_stack) < self.max_depth:
            self._redo_stack.append(current)

        self.session.restore(target)
        self.session.modified = True
        self.session.set_status_message("Action undone")
        return True

    def redo(self) -> bool:
        """Redoes the last undone edit.

        Returns:
            bool: True if the state was restored, False if there was nothing to redo.
        """
        logging.debug(f"REDO CALLED. Redo depth: {len(self._redo_stack)}")
        if not self._redo_stack:
            self.session.set_status_message("Nothing to redo")
            return False

        target = self._redo_stack.pop()
        current = self.session.snapshot()
        # Pushed directly: going through record_before_edit would clear the redo stack.
        if len(self._undo_stack) < self.max_depth:
            self._undo_stack.append(current)

        self.session.restore(target)
        self.session.modified = True
        self.session.set_status_message("Action redone")
        return True
