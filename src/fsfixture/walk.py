"""Pattern-filtered traversal of a source tree.

Patterns use the gitignore wildcard dialect, evaluated against the path of each
entry relative to the walk root:

- ``*`` matches within one path segment, ``**`` across segments,
  ``?`` and ``[...]`` match single characters;
- a pattern without an inner slash matches at any depth (``*.txt``);
- a pattern with an inner slash is anchored at the root (``docs/*.md``);
- a trailing slash restricts the pattern to directories (``build/``) and a
  matched directory selects its whole subtree;
- a leading ``!`` excludes what it matches.

An entry is selected when any plain pattern selects it and no ``!`` pattern
does. The order of the patterns never changes the result.
"""

# all annotations are stored as strings and not evaluated at runtime, which can provide a minor performance improvement
from __future__ import annotations

import os
import typing as t
from pathlib import Path

import pathspec

from fsfixture.errors import PatternError, WalkError, chain
from fsfixture.utils.data_utils import listify
from fsfixture.utils.fs_utils import SLASH, dir_key, posix_relpath

DIR = "dir"
FILE = "file"
OTHER = "other"


class WalkEntry(t.NamedTuple):
    """A selected entry of the source tree."""

    path: Path
    relative: Path
    kind: t.Literal["dir", "file", "other"]

    @property
    def is_dir(self) -> bool:
        return self.kind == DIR

    @property
    def is_file(self) -> bool:
        return self.kind == FILE


class PatternSet(t.NamedTuple):
    """Compiled patterns: ``include`` holds the plain ones, ``exclude`` the ``!`` ones without the ``!``."""

    include: pathspec.PathSpec
    exclude: pathspec.PathSpec

    def match_file(self, relative: str) -> bool:
        return self.include.match_file(relative) and not self.exclude.match_file(relative)


def compile_patterns(patterns: str | t.Iterable[str]) -> PatternSet:
    """Compile glob patterns into a matcher.

    A single string counts as a one-pattern set.

    Raises:
        PatternError: if a pattern is not a string or is not a valid glob.
    """
    patterns = listify(patterns)
    for pattern in patterns:
        if not isinstance(pattern, str):
            raise PatternError(f"Pattern {pattern!r} is not a string")
    try:
        # compiled as a whole first so that a bare "!" is rejected
        pathspec.PathSpec.from_lines("gitwildmatch", patterns)
        return PatternSet(
            include=pathspec.PathSpec.from_lines("gitwildmatch", [p for p in patterns if not p.startswith("!")]),
            exclude=pathspec.PathSpec.from_lines("gitwildmatch", [p[1:] for p in patterns if p.startswith("!")]),
        )
    except (ValueError, TypeError) as exc:
        raise PatternError(f"Invalid glob pattern in {patterns!r}", cause=exc) from exc


class GlobWalker:
    """Walk ``base`` depth-first and yield entries selected by ``patterns``.

    Entries of each directory are visited in name order and a directory is
    yielded before anything below it. With ``follow_links`` symlinks are
    treated as the entity they point to; a link that leads back into one of
    its own ancestors is a ``WalkError``. Without it symlinks are reported as
    ``other`` entries and never descended into.
    """

    def __init__(self, base: str | os.PathLike, patterns: PatternSet, follow_links: bool = True):
        self.base = Path(base)
        self.patterns = patterns
        self.follow_links = follow_links

    @classmethod
    def from_patterns(
        cls, base: str | os.PathLike, patterns: str | t.Iterable[str], follow_links: bool = True
    ) -> GlobWalker:
        return cls(base, compile_patterns(patterns), follow_links=follow_links)

    def matches(self, relative: str, is_dir: bool = False) -> bool:
        """Return True if the POSIX-style ``relative`` path is selected."""
        return self.patterns.match_file(relative + SLASH if is_dir else relative)

    def __iter__(self) -> t.Iterator[WalkEntry]:
        if not self.base.is_dir():
            raise WalkError(f"Source {str(self.base)!r} is not an existing directory")
        with chain(WalkError, f"Cannot stat source {str(self.base)!r}"):
            root_key = dir_key(self.base)
        yield from self._walk(self.base, frozenset({root_key}))

    def _walk(self, directory: Path, ancestors: frozenset[tuple[int, int]]) -> t.Iterator[WalkEntry]:
        with chain(WalkError, f"Cannot read directory {str(directory)!r}"):
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)

        for entry in entries:
            path = Path(entry.path)
            relative = posix_relpath(path, self.base)
            if entry.is_dir(follow_symlinks=self.follow_links):
                if self.matches(relative, is_dir=True):
                    yield WalkEntry(path, Path(relative), DIR)
                with chain(WalkError, f"Cannot stat directory {str(path)!r}"):
                    key = dir_key(path)
                if key in ancestors:
                    raise WalkError(f"Symlink loop: {str(path)!r} points to one of its ancestors")
                yield from self._walk(path, ancestors | {key})
            elif self.matches(relative):
                kind = FILE if entry.is_file(follow_symlinks=self.follow_links) else OTHER
                yield WalkEntry(path, Path(relative), kind)
