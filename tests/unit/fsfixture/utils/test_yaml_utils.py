"""Tests for YAML file loading."""

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from fsfixture.utils.yaml_utils import yaml_safe_load_file

pytestmark = pytest.mark.unit


class TestYamlSafeLoadFile(unittest.TestCase):
    """Tests for yaml_safe_load_file."""

    def setUp(self):
        self._tmp = TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_loads_mapping(self):
        path = self.tmp / "cfg.yaml"
        path.write_text("copy_from:\n  follow_links: false\n", encoding="utf-8")
        self.assertEqual(yaml_safe_load_file(path), {"copy_from": {"follow_links": False}})

    def test_missing_file_with_default(self):
        self.assertEqual(yaml_safe_load_file(self.tmp / "nope.yaml", default={}), {})

    def test_missing_file_without_default_raises(self):
        with self.assertRaises(RuntimeError) as ctx:
            yaml_safe_load_file(self.tmp / "nope.yaml")
        self.assertIsInstance(ctx.exception.__cause__, FileNotFoundError)

    def test_empty_file_returns_default(self):
        path = self.tmp / "empty.yaml"
        path.write_text("", encoding="utf-8")
        self.assertEqual(yaml_safe_load_file(path, default={"a": 1}), {"a": 1})
        self.assertIsNone(yaml_safe_load_file(path))

    def test_invalid_yaml_raises_runtime_error(self):
        path = self.tmp / "bad.yaml"
        path.write_text("a: [unclosed\n", encoding="utf-8")
        with self.assertRaises(RuntimeError) as ctx:
            yaml_safe_load_file(path)
        self.assertIn("bad.yaml", str(ctx.exception))

    def test_unsafe_tag_rejected(self):
        path = self.tmp / "unsafe.yaml"
        path.write_text("!!python/object/apply:os.system ['true']\n", encoding="utf-8")
        with self.assertRaises(RuntimeError):
            yaml_safe_load_file(path)
