"""Root conftest.py with shared fixtures across all test types."""

import shutil

import pytest
import yaml

from fsfixture.config import load_config
from tests.utils import get_test_data_dir

pytest_plugins = ["fsfixture.pytest_plugin"]


@pytest.fixture
def test_data_dir():
    """Return path to the test data directory."""
    return get_test_data_dir()


@pytest.fixture
def sample_tree(test_data_dir):
    """Return path to the read-only sample source tree."""
    return test_data_dir / "sample_tree"


@pytest.fixture
def source_tree(tmp_path, sample_tree):
    """Provide a writable copy of the sample tree for tests that add links or change modes."""
    dest = tmp_path / "source"
    shutil.copytree(sample_tree, dest)
    return dest


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path_factory):
    """Keep user override files out of the tests and reset the config cache around each test."""
    monkeypatch.delenv("FSFIXTURE_CONFIG", raising=False)
    override = tmp_path_factory.mktemp("cfg") / "override.yaml"
    override.write_text("{}\n", encoding="utf-8")
    monkeypatch.setenv("FSFIXTURE_CONFIG_OVERRIDE", str(override))
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture
def config_override(monkeypatch, tmp_path_factory):
    """Return a function that installs a YAML config override for the current test."""

    def _install(data):
        path = tmp_path_factory.mktemp("cfg") / "fsfixture_override.yaml"
        path.write_text(yaml.dump(data), encoding="utf-8")
        monkeypatch.setenv("FSFIXTURE_CONFIG_OVERRIDE", str(path))
        load_config.cache_clear()
        return path

    return _install
