"""Common utilities for tests."""

from pathlib import Path


def get_test_data_dir() -> Path:
    """Return path to the test data directory.

    This is the single source of truth for test data location,
    used by both unittest TestCases and pytest fixtures.
    """
    return Path(__file__).parent.parent / "fixtures" / "data"


def tree_listing(root: Path) -> set[str]:
    """Return every file and directory below ``root`` as POSIX relative paths; dirs end with '/'."""
    root = Path(root)
    return {p.relative_to(root).as_posix() + ("/" if p.is_dir() else "") for p in root.rglob("*")}


def tree_contents(root: Path) -> dict[str, bytes]:
    """Return the bytes of every file below ``root`` keyed by POSIX relative path."""
    root = Path(root)
    return {p.relative_to(root).as_posix(): p.read_bytes() for p in root.rglob("*") if p.is_file()}
