"""Filesystem/path utility functions for the project.

Pure path arithmetic used by the walker and the copier; nothing here writes
to disk.
"""

# all annotations are stored as strings and not evaluated at runtime, which can provide a minor performance improvement
from __future__ import annotations

import os
import typing as t

if t.TYPE_CHECKING:
    from pathlib import Path

SLASH = "/"


def expand_path(path: str | os.PathLike) -> str:
    """Return the absolute path with user home expanded."""
    return os.path.abspath(os.path.expanduser(os.fspath(path)))


def posix_relpath(path: str | Path, root: str | Path) -> str:
    """Return ``path`` relative to ``root`` with forward slashes.

    ``path`` must lie under ``root``; this is purely lexical.
    """
    rel = os.path.relpath(os.fspath(path), os.fspath(root))
    return rel.replace(os.sep, SLASH) if os.sep != SLASH else rel


def is_under(path: str | Path, root: str | Path) -> bool:
    """Return True if ``path`` is ``root`` or lexically inside it."""
    path = os.path.normpath(os.path.abspath(os.fspath(path)))
    root = os.path.normpath(os.path.abspath(os.fspath(root)))
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:  # different drives on Windows
        return False


def dir_key(path: str | Path) -> tuple[int, int]:
    """Return the (device, inode) identity of a directory, following symlinks."""
    st = os.stat(path)
    return st.st_dev, st.st_ino
