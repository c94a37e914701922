# terminal/app.py

import argparse
import curses
import logging
import os

from engine.difficulty import PRESETS, Difficulty
from engine.errors import InvalidConfiguration
from engine.stats import StatisticsStore

from .settings import load_settings
from .ui import run

# Data files live next to the program, not in the working directory.
DATA_DIR = os.path.dirname(os.path.abspath(__file__))
STATS_FILE = os.path.join(DATA_DIR, "stats.yaml")
SETTINGS_FILE = os.path.join(DATA_DIR, "settings.yaml")
LOG_FILE = os.path.join(DATA_DIR, "minesweeper.log")


def build_parser():
    parser = argparse.ArgumentParser(prog="tminesweeper", description="Minesweeper in your terminal.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--difficulty", choices=sorted(PRESETS), help="Skip the menu and start this difficulty")
    mode.add_argument("--custom", nargs=3, type=int, metavar=("WIDTH", "HEIGHT", "MINES"),
                      help="Skip the menu and start a custom board")
    parser.add_argument("--seed", type=int, default=None, help="Seed for mine placement")
    parser.add_argument("--stats-file", default=STATS_FILE, help="Statistics file")
    parser.add_argument("--settings-file", default=SETTINGS_FILE, help="Settings file")
    parser.add_argument("--log-file", default=LOG_FILE, help="Log file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def select_difficulty(args, parser):
    if args.difficulty:
        return PRESETS[args.difficulty]
    if args.custom:
        try:
            return Difficulty.custom(*args.custom)
        except InvalidConfiguration as e:
            parser.error(str(e))
    return None


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    difficulty = select_difficulty(args, parser)

    # curses owns the terminal, so log records go to a file.
    level = logging.DEBUG if args.debug else logging.WARNING
    try:
        handler = logging.FileHandler(args.log_file, encoding="utf-8")
    except OSError as e:
        print(f"Warning: could not open log file {args.log_file} ({e}). Logging disabled.")
        handler = logging.NullHandler()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[handler],
    )

    settings = load_settings(args.settings_file)
    store = StatisticsStore.open(args.stats_file)

    curses.wrapper(run, store, settings, difficulty, args.seed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
