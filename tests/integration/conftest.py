"""Integration test configuration and fixtures."""

import os
import sys

import pytest


def pytest_runtest_setup(item):
    """Skip tests that need symlinks or permission checks where the platform cannot provide them."""
    if item.get_closest_marker("symlinks") and sys.platform == "win32":
        pytest.skip("symlinks need elevated privileges on Windows")
    if item.get_closest_marker("permissions") and (sys.platform == "win32" or os.geteuid() == 0):
        pytest.skip("permission bits are not enforced for this user")
