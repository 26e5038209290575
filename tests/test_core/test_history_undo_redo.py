# tests/test_core/test_history_undo_redo.py
"""Undo/redo behavior of `History` driven through `EditorSession` commands."""


def type_text(session, text: str) -> None:
    for ch in text:
        assert session.insert_char(ch)


class TestUndoRedo:
    def test_undo_restores_lines_cursor_and_viewport(self, make_session) -> None:
        session = make_session(["hello"])
        session.view.set_position(0, 5)
        session.view.row_offset = 0
        before = session.snapshot()

        session.insert_char("!")
        assert session.buffer.lines == ["hello!"]

        assert session.undo() is True
        assert session.snapshot() == before
        assert session.status_message == "Action undone"

    def test_redo_reapplies_undone_edit(self, make_session) -> None:
        session = make_session([""])
        type_text(session, "ab")
        session.undo()
        assert session.buffer.lines == ["a"]
        assert session.redo() is True
        assert session.buffer.lines == ["ab"]
        assert (session.view.cursor_y, session.view.cursor_x) == (0, 2)
        assert session.status_message == "Action redone"

    def test_undo_all_then_redo_all(self, make_session) -> None:
        session = make_session(["x"])
        session.view.set_position(0, 1)
        type_text(session, "yz")
        session.insert_newline()
        type_text(session, "w")
        final = session.snapshot()

        while session.undo():
            pass
        assert session.buffer.lines == ["x"]
        while session.redo():
            pass
        assert session.snapshot() == final

    def test_new_edit_invalidates_redo(self, make_session) -> None:
        session = make_session([""])
        type_text(session, "ab")
        session.undo()
        assert session.history.can_redo
        session.insert_char("c")
        assert not session.history.can_redo
        assert session.redo() is False
        assert session.buffer.lines == ["ac"]

    def test_empty_stacks_report_status(self, make_session) -> None:
        session = make_session(["a"])
        assert session.undo() is False
        assert session.status_message == "Nothing to undo"
        assert session.redo() is False
        assert session.status_message == "Nothing to redo"


class TestDepthAndDirtyFlag:
    def test_full_undo_stack_keeps_oldest_entries(self, make_session) -> None:
        """Once the stack is full, later edits still apply but are not undoable."""
        session = make_session([""], config={"limits": {"history_depth": 3}})
        type_text(session, "abcde")
        assert session.buffer.lines == ["abcde"]

        undone = 0
        while session.undo():
            undone += 1
        assert undone == 3
        # The three stored snapshots are the states before "a", "b" and "c".
        assert session.buffer.lines == [""]

    def test_stack_sizes_never_exceed_depth(self, make_session) -> None:
        session = make_session([""], config={"limits": {"history_depth": 2}})
        type_text(session, "abcd")
        assert len(session.history._undo_stack) == 2
        while session.undo():
            pass
        assert len(session.history._redo_stack) == 2

    def test_failed_edit_leaves_no_history(self, make_session) -> None:
        session = make_session(["abc"], config={"limits": {"max_line_length": 4}})
        session.view.set_position(0, 3)
        assert session.insert_char("d") is False
        assert not session.history.can_undo
        assert session.modified is False

    def test_edit_undo_and_redo_mark_modified(self, make_session) -> None:
        session = make_session(["a"])
        session.insert_char("b")
        assert session.modified
        session.modified = False
        session.undo()
        assert session.modified
        session.modified = False
        session.redo()
        assert session.modified

    def test_loading_a_document_clears_history(self, make_session) -> None:
        session = make_session([""])
        type_text(session, "abc")
        session.undo()
        session.load_lines(["fresh"], "new.txt")
        assert not session.history.can_undo
        assert not session.history.can_redo
        assert session.modified is False
