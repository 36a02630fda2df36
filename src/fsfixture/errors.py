"""Errors raised while assembling fixtures.

Low-level failures of the file primitives surface as plain ``OSError``. Anything
that goes wrong while populating a tree from a source (``copy_from``) is raised
as a ``FixtureError`` subclass that keeps the underlying exception in ``cause``.
"""

import typing as t
from contextlib import contextmanager

from fsfixture.utils.trace_utils import str_exc


class FixtureError(Exception):
    """Base class for fixture assembly errors."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {str_exc(self.cause)}"


class PatternError(FixtureError):
    """Exception raised when a glob pattern cannot be compiled."""


class WalkError(FixtureError):
    """Exception raised when the source tree cannot be traversed."""


class CopyError(FixtureError):
    """Exception raised when a matched entry cannot be replicated under the destination."""


@contextmanager
def chain(error_cls: type[FixtureError], message: str) -> t.Generator[None, None, None]:
    """Re-raise an ``OSError`` from the with-block as ``error_cls`` with the OSError as cause."""
    try:
        yield
    except OSError as exc:
        raise error_cls(message, cause=exc) from exc
