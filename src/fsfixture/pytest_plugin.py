"""pytest fixtures backed by ``TempDir``.

Enable in a conftest.py with ``pytest_plugins = ["fsfixture.pytest_plugin"]``.
"""

import pytest

from fsfixture.fs import TempDir


@pytest.fixture
def temp_dir():
    """Provide a fresh ``TempDir`` that is removed after the test."""
    with TempDir() as temp:
        yield temp
