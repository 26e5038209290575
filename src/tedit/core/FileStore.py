# tedit/core/FileStore.py
"""FileStore Module for the TEDIT Editor
======================================
Plain-text load and save.

Documents are stored one buffer line per file line, each terminated by
``\\n``. Bytes are decoded and encoded as UTF-8 with ``surrogateescape`` so a
file that is not valid UTF-8 survives a load/save round trip byte for byte.

Bare names typed at the editor prompts resolve inside a save directory; any
path containing a directory component is used as given.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Union


ENCODING = "utf-8"
ERRORS = "surrogateescape"


class FileStoreError(OSError):
    """I/O failure while loading or saving. The original error is kept as ``__cause__``."""

    def __init__(self, message: str, path: Union[str, Path]):
        super().__init__(message)
        self.path = str(path)

    def __str__(self) -> str:
        return self.args[0]


def read_lines(path: Union[str, Path]) -> list[str]:
    """Reads a document and returns its lines without terminators.

    One trailing ``\\n`` is treated as the terminator of the last line, not as
    the start of an extra empty line. An empty file gives ``[""]``.

    Raises:
        FileStoreError: If the file cannot be opened or read.
    """
    try:
        with open(path, "r", encoding=ENCODING, errors=ERRORS, newline="") as f:
            text = f.read()
    except OSError as e:
        raise FileStoreError(f"Cannot open '{path}': {e.strerror or e}", path) from e

    lines = text.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    logging.debug("FileStore: read %d line(s) from '%s'", len(lines), path)
    return lines


def write_lines(path: Union[str, Path], lines: Iterable[str]) -> int:
    """Writes each line followed by ``\\n``, creating parent directories.

    Returns:
        int: Number of lines written.

    Raises:
        FileStoreError: If the directory or the file cannot be written.
    """
    path = Path(path)
    try:
        if not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            logging.info("FileStore: created directory '%s'", path.parent)
        count = 0
        with open(path, "w", encoding=ENCODING, errors=ERRORS, newline="") as f:
            for line in lines:
                f.write(line)
                f.write("\n")
                count += 1
    except OSError as e:
        raise FileStoreError(f"Cannot save '{path}': {e.strerror or e}", path) from e
    logging.debug("FileStore: wrote %d line(s) to '%s'", count, path)
    return count


class FileStore:
    """Resolves prompt input against a save directory and delegates I/O.

    Attributes:
        save_dir (Path): Directory bare file names resolve into.
    """

    def __init__(self, save_dir: Union[str, Path] = "saves") -> None:
        self.save_dir = Path(save_dir)

    def resolve(self, name: str) -> Path:
        """Maps a name typed at a prompt to a path.

        Absolute paths and names with a directory component are used as given.
        """
        name = name.strip()
        if not name:
            raise ValueError("empty file name")
        candidate = Path(os.path.expanduser(name))
        if candidate.is_absolute() or len(candidate.parts) > 1:
            return candidate
        return self.save_dir / candidate

    def load(self, path: Union[str, Path]) -> list[str]:
        return read_lines(path)

    def save(self, path: Union[str, Path], lines: Iterable[str]) -> int:
        return write_lines(path, lines)
