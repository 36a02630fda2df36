"""Ephemeral directories and the paths inside them.

``TempDir`` owns a freshly created directory that is removed again when the
fixture is closed. ``child()`` derives ``ChildPath`` values below it, which can
be filled with content or populated from an existing tree with
``copy_from()``.

    >>> with TempDir() as temp:
    ...     temp.child("foo/bar.txt").path.parent.name
    'foo'
"""

# all annotations are stored as strings and not evaluated at runtime, which can provide a minor performance improvement
from __future__ import annotations

import os
import shutil
import tempfile
import typing as t
import weakref
from pathlib import Path

from fsfixture.config import SPECIAL_ENTRY_POLICIES, get_config, load_config
from fsfixture.errors import CopyError, chain
from fsfixture.utils.fs_utils import is_under
from fsfixture.walk import GlobWalker

PathLike = t.Union[str, os.PathLike]
Relative = t.Union[PathLike, t.Sequence[PathLike]]


def child(root: PathLike, relative: Relative) -> ChildPath:
    """Join ``relative`` onto ``root`` without touching the filesystem.

    ``relative`` is a path or a sequence of path segments.
    """
    if isinstance(relative, (list, tuple)):
        return ChildPath(Path(root).joinpath(*relative))
    return ChildPath(Path(root) / relative)


def touch(path: PathLike) -> None:
    """Create an empty file, truncating an existing one."""
    with open(path, "wb"):
        pass


def write_binary(path: PathLike, data: bytes) -> None:
    """Create or truncate the file at ``path`` and write all of ``data``."""
    with open(path, "wb") as fh:
        fh.write(data)


def write_str(path: PathLike, data: str, encoding: str = "utf-8") -> None:
    write_binary(path, data.encode(encoding))


def create_dir_all(path: PathLike) -> None:
    """Create ``path`` and any missing ancestors; no-op if it already is a directory."""
    os.makedirs(path, exist_ok=True)


def copy_from(
    target: PathLike,
    source: PathLike,
    patterns: str | t.Iterable[str],
    *,
    follow_links: bool | None = None,
    special_entries: str | None = None,
) -> None:
    """Copy the entries of ``source`` selected by ``patterns`` into ``target``.

    Relative structure is preserved: an entry at ``source/a/b.txt`` lands at
    ``target/a/b.txt``. Selected directories are created (also when empty),
    selected files are copied byte for byte over whatever is at the target.
    Symlinks are followed and materialized as regular files and directories.

    Args:
        target: Destination root; created on demand.
        source: Existing directory to copy from.
        patterns: Glob pattern or patterns; an entry is copied if any of them
            matches its path relative to ``source``. See ``fsfixture.walk``.
        follow_links: Treat symlinks as what they point to (config ``copy_from.follow_links``).
        special_entries: ``"skip"`` or ``"error"`` for selected entries that are
            neither file nor directory, such as broken symlinks
            (config ``copy_from.special_entries``).

    Raises:
        PatternError: A pattern is not a valid glob.
        WalkError: ``source`` is missing or a directory below it cannot be read.
        CopyError: Creating a directory or copying a file failed. Entries
            copied before the failure are left in place.
    """
    if follow_links is None:
        follow_links = get_config("copy_from.follow_links")
    if special_entries is None:
        special_entries = get_config("copy_from.special_entries")
    if special_entries not in SPECIAL_ENTRY_POLICIES:
        raise ValueError(f"special_entries must be one of {SPECIAL_ENTRY_POLICIES}, got {special_entries!r}")

    target = Path(target)
    source = Path(source)
    for entry in GlobWalker.from_patterns(source, patterns, follow_links=follow_links):
        target_path = target / entry.relative
        assert is_under(target_path, target), f"{entry.path} escapes {target}"
        if entry.is_dir:
            with chain(CopyError, f"Cannot create directory {str(target_path)!r}"):
                target_path.mkdir(parents=True, exist_ok=True)
        elif entry.is_file:
            with chain(CopyError, f"Cannot copy {str(entry.path)!r} to {str(target_path)!r}"):
                target_path.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(entry.path, target_path)
        elif special_entries == "error":
            raise CopyError(f"{str(entry.path)!r} is neither a regular file nor a directory")


class ChildPath:
    """A path within a ``TempDir``.

    Just a location: nothing has to exist there and the ``ChildPath`` owns
    nothing on disk.
    """

    __slots__ = ("_path",)

    def __init__(self, path: PathLike):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def __fspath__(self) -> str:
        return str(self._path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChildPath):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def child(self, relative: Relative) -> ChildPath:
        return child(self._path, relative)

    def touch(self) -> None:
        touch(self._path)

    def write_binary(self, data: bytes) -> None:
        write_binary(self._path, data)

    def write_str(self, data: str, encoding: str = "utf-8") -> None:
        write_str(self._path, data, encoding=encoding)

    def create_dir_all(self) -> None:
        create_dir_all(self._path)

    def copy_from(self, source: PathLike, patterns: str | t.Iterable[str], **kwargs) -> None:
        """Copy files from ``source`` into this path; see ``fsfixture.fs.copy_from``."""
        copy_from(self._path, source, patterns, **kwargs)


class TempDir:
    """A directory that is deleted again when the fixture is done with it.

    Removal happens on ``close()``, on leaving a ``with`` block, or, as a last
    resort, when the object is garbage collected. ``into_path()`` (or
    ``keep=True``) hands the directory over to the caller instead.

    Args:
        prefix: Directory name prefix (config ``temp_dir.prefix``).
        suffix: Directory name suffix (config ``temp_dir.suffix``).
        base_dir: Parent directory; platform temp dir if unset (config ``temp_dir.base_dir``).
        keep: Leave the directory on disk when closed (config ``temp_dir.keep``).
    """

    def __init__(
        self,
        prefix: str | None = None,
        suffix: str | None = None,
        base_dir: PathLike | None = None,
        keep: bool | None = None,
    ):
        cfg = load_config().temp_dir
        self._path = Path(
            tempfile.mkdtemp(
                prefix=cfg.prefix if prefix is None else prefix,
                suffix=cfg.suffix if suffix is None else suffix,
                dir=cfg.base_dir if base_dir is None else base_dir,
            )
        )
        self._keep = bool(cfg.keep if keep is None else keep)
        self._closed = False
        self._finalizer = weakref.finalize(self, _cleanup, self._path, self._keep)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def __fspath__(self) -> str:
        return str(self._path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r})"

    def __enter__(self) -> TempDir:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def child(self, relative: Relative) -> ChildPath:
        return child(self._path, relative)

    def copy_from(self, source: PathLike, patterns: str | t.Iterable[str], **kwargs) -> None:
        """Copy files from ``source`` into the temp dir; see ``fsfixture.fs.copy_from``."""
        copy_from(self._path, source, patterns, **kwargs)

    def close(self) -> None:
        """Delete the directory and everything in it.

        Safe to call more than once. Removal errors are raised as ``OSError``.
        """
        if self._closed:
            return
        self._closed = True
        self._finalizer.detach()
        if not self._keep:
            shutil.rmtree(self._path)

    def into_path(self) -> Path:
        """Give up ownership: the directory is kept and its path returned."""
        self._keep = True
        self._closed = True
        self._finalizer.detach()
        return self._path


def _cleanup(path: Path, keep: bool) -> None:
    if not keep:
        shutil.rmtree(path, ignore_errors=True)
