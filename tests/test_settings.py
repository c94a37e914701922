# tests/test_settings.py

import os
import shutil
import tempfile
import unittest

import yaml

from engine.game import GameMode
from terminal.settings import Settings, color_number, load_settings, settings_from_dict


class TestSettings(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, "settings.yaml")

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_missing_file_is_created_with_defaults(self):
        settings = load_settings(self.path)
        self.assertEqual(settings, Settings())
        with open(self.path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        self.assertEqual(data["flag_char"], "F")
        self.assertEqual(len(data["count_fg"]), 8)

    def test_values_are_read(self):
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"mine_char": "@", "border_fg": "bright_red", "game_mode": "qol"}, f)
        settings = load_settings(self.path)
        self.assertEqual(settings.mine_char, "@")
        self.assertEqual(settings.border_fg, "bright_red")
        self.assertEqual(settings.mode, GameMode.QOL)
        self.assertEqual(settings.flag_char, "F")

    def test_invalid_values_fall_back(self):
        settings = settings_from_dict({
            "inner_bg": "plaid",
            "count_fg": ["blue"],
            "game_mode": "no_guessing",
            "question_marks": "yes",
            "tile_char": "",
            "unknown": 1,
        })
        self.assertEqual(settings, Settings())

    def test_unreadable_file_falls_back(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("mine_char: [oops")
        self.assertEqual(load_settings(self.path), Settings())

    def test_file_that_is_not_utf8_falls_back(self):
        with open(self.path, "wb") as f:
            f.write(b"mine_char: \xff\n")
        self.assertEqual(load_settings(self.path), Settings())

    def test_glyphs_must_be_one_character(self):
        settings = settings_from_dict({"mine_char": "**", "flag_char": "!"})
        self.assertEqual(settings.mine_char, "*")
        self.assertEqual(settings.flag_char, "!")

    def test_not_a_mapping(self):
        self.assertEqual(settings_from_dict(["a", "b"]), Settings())

    def test_color_number(self):
        self.assertEqual(color_number("default"), -1)
        self.assertEqual(color_number("red"), 1)
        self.assertEqual(color_number("bright_red", colors=8), 1)
        self.assertEqual(color_number("bright_red", colors=256), 9)
        self.assertEqual(color_number("white"), 7)


if __name__ == "__main__":
    unittest.main()
