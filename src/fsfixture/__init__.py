"""Filesystem fixtures for tests.

Create a throwaway directory, address paths inside it and fill them with
content or with a filtered copy of an existing tree::

    from fsfixture import TempDir

    with TempDir() as temp:
        temp.child("config/app.yaml").write_str("debug: true\\n")
        temp.child("src").copy_from("tests/fixtures/data", ["*.py"])
"""

from .errors import CopyError, FixtureError, PatternError, WalkError
from .fs import ChildPath, TempDir

__all__ = [
    "ChildPath",
    "TempDir",
    "FixtureError",
    "PatternError",
    "WalkError",
    "CopyError",
]
