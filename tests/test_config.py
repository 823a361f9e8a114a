"""Unit tests for the settings file."""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from tedit.config import (
    Config,
    DEFAULT_SETTINGS,
    default_config_path,
    load_settings,
    validate_setting,
    write_default_config,
)


class TestSettingsFile(unittest.TestCase):
    """Test loading and writing the settings file."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "config.json"

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def write(self, content):
        self.config_path.write_text(content, encoding='utf-8')

    def test_missing_file_gives_defaults(self):
        config = Config.resolve(config_path=self.config_path)
        self.assertEqual(config.tab_size, DEFAULT_SETTINGS["tab_size"])
        self.assertIsNone(config.file)
        self.assertEqual(config.config_path, self.config_path)

    def test_tab_size_from_file(self):
        self.write(json.dumps({"tab_size": 8}))
        config = Config.resolve("notes.txt", self.config_path)
        self.assertEqual(config.tab_size, 8)
        self.assertEqual(config.file, Path("notes.txt"))

    def test_corrupted_file_is_ignored(self):
        self.write("{ not json")
        self.assertEqual(load_settings(self.config_path), {})
        self.assertEqual(Config.resolve(config_path=self.config_path).tab_size, 4)

    def test_non_dict_file_is_ignored(self):
        self.write("[1, 2, 3]")
        self.assertEqual(load_settings(self.config_path), {})

    def test_invalid_values_are_dropped(self):
        self.write(json.dumps({"tab_size": 0, "theme": "dark"}))
        self.assertEqual(load_settings(self.config_path), {"theme": "dark"})

    def test_write_default_config(self):
        target = Path(self.temp_dir) / "nested" / "dir" / "config.json"
        written = write_default_config(target)
        self.assertEqual(written, target)
        with open(target, encoding='utf-8') as f:
            self.assertEqual(json.load(f), DEFAULT_SETTINGS)
        self.assertEqual(os.listdir(target.parent), ["config.json"])

    def test_write_default_config_overwrites(self):
        self.write(json.dumps({"tab_size": 2}))
        write_default_config(self.config_path)
        self.assertEqual(load_settings(self.config_path), {"tab_size": 4})

    def test_default_path_uses_platform_config_dir(self):
        with patch("tedit.config.platformdirs.user_config_dir", return_value=self.temp_dir) as mock_dir:
            path = default_config_path()
        mock_dir.assert_called_once_with("tedit")
        self.assertEqual(path, Path(self.temp_dir) / "config.json")


class TestValidateSetting(unittest.TestCase):

    def test_tab_size_range(self):
        self.assertTrue(validate_setting("tab_size", 1))
        self.assertTrue(validate_setting("tab_size", 16))
        self.assertFalse(validate_setting("tab_size", 0))
        self.assertFalse(validate_setting("tab_size", 17))

    def test_tab_size_type(self):
        self.assertFalse(validate_setting("tab_size", "4"))
        self.assertFalse(validate_setting("tab_size", 4.0))
        self.assertFalse(validate_setting("tab_size", True))

    def test_unknown_keys_accepted(self):
        self.assertTrue(validate_setting("something_new", [1]))


if __name__ == '__main__':
    unittest.main()
