# tests/test_app.py

import unittest
from contextlib import redirect_stderr
from io import StringIO

from engine.difficulty import BEGINNER
from terminal.app import build_parser, select_difficulty


class TestCommandLine(unittest.TestCase):

    def parse(self, *argv):
        parser = build_parser()
        args = parser.parse_args(list(argv))
        return select_difficulty(args, parser), args

    def test_menu_by_default(self):
        difficulty, args = self.parse()
        self.assertIsNone(difficulty)
        self.assertIsNone(args.seed)
        self.assertTrue(args.stats_file.endswith("stats.yaml"))

    def test_preset(self):
        difficulty, _ = self.parse("--difficulty", "beginner", "--seed", "7")
        self.assertEqual(difficulty, BEGINNER)

    def test_custom(self):
        difficulty, _ = self.parse("--custom", "20", "10", "30")
        self.assertEqual((difficulty.key, difficulty.width, difficulty.height, difficulty.mines),
                         ("custom", 20, 10, 30))

    def test_invalid_custom_exits(self):
        with redirect_stderr(StringIO()), self.assertRaises(SystemExit) as ctx:
            self.parse("--custom", "3", "3", "8")
        self.assertEqual(ctx.exception.code, 2)

    def test_difficulty_and_custom_are_exclusive(self):
        with redirect_stderr(StringIO()), self.assertRaises(SystemExit):
            self.parse("--difficulty", "expert", "--custom", "5", "5", "1")


if __name__ == "__main__":
    unittest.main()
