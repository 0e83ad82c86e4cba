"""
files.py

Responsibility: the small read/write primitives every rewriting module shares.

Rules:
- Text is read and written with `newline=""` so line endings survive untouched.
- Rewrites keep the permission bits the file had before the write.
- Any `OSError`, or content that is not UTF-8, is surfaced as
  `FileReadError` / `FileWriteError` with the path.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

from versioned.errors import FileReadError, FileWriteError


def read_text(path: str | Path) -> str:
    try:
        with open(path, encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(path, e) from e


def read_first_line(path: str | Path) -> str:
    """
    Return the first line of `path` with surrounding whitespace trimmed
    ("" for an empty file).
    """
    try:
        with open(path, encoding="utf-8") as fh:
            return fh.readline().strip()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(path, e) from e


def file_mode(path: str | Path) -> int | None:
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        return None
    except OSError as e:
        raise FileReadError(path, e) from e


def write_text(path: str | Path, text: str, *, mode: int | None = None) -> None:
    """
    Replace the content of `path` with `text`.

    When `mode` is None the current permission bits of an existing file are
    kept; new files get the process default.
    """
    if mode is None:
        mode = file_mode(path)
    try:
        with open(path, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)
        if mode is not None:
            os.chmod(path, mode)
    except OSError as e:
        raise FileWriteError(path, e) from e


def ensure_regular_file(path: str | Path) -> Path:
    p = Path(path)
    try:
        st = p.stat()
    except OSError as e:
        raise FileReadError(p, e) from e
    if not stat.S_ISREG(st.st_mode):
        raise FileReadError(p, IsADirectoryError(f"path {p} is not a file"))
    return p
