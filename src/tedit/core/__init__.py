# src/tedit/core/__init__.py
"""Public facade for tedit.core: re-export main classes from CamelCase modules.

Keeps Java-like file names (LineBuffer.py, History.py, ...),
but provides flat imports for convenience and stability.
"""

from .CursorViewport import Cursor, CursorViewport, Viewport  # noqa: F401
from .FileStore import FileStore, FileStoreError  # noqa: F401
from .History import History, Snapshot  # noqa: F401
from .LineBuffer import LineBuffer  # noqa: F401
from .Session import EditorSession  # noqa: F401
from .Tedit import Tedit  # noqa: F401


__all__ = [
    "Cursor",
    "CursorViewport",
    "EditorSession",
    "FileStore",
    "FileStoreError",
    "History",
    "LineBuffer",
    "Snapshot",
    "Tedit",
    "Viewport",
]
