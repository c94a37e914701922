# terminal/settings.py

import logging
import os
from dataclasses import asdict, dataclass, field, fields
from typing import List

import yaml

from engine.game import GameMode

logger = logging.getLogger(__name__)

COLOR_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")


def _default_count_colors():
    # 1..8
    return ["blue", "green", "red", "magenta", "yellow", "cyan", "white", "black"]


@dataclass
class Settings:
    """
    Display preferences read from settings.yaml.

    Only the terminal front end looks at these; the engine never does.
    Colors are curses color names, optionally prefixed with "bright_",
    or "default" for the terminal's own color.
    """
    # Characters
    mine_char: str = "*"
    flag_char: str = "F"
    tile_char: str = "#"
    question_char: str = "?"
    # Colors
    border_fg: str = "white"
    border_bg: str = "black"
    inner_fg: str = "white"
    inner_bg: str = "bright_black"
    inner_highlight: str = "bright_white"
    count_fg: List[str] = field(default_factory=_default_count_colors)
    # Gameplay
    game_mode: str = "vanilla"
    question_marks: bool = False

    @property
    def mode(self) -> GameMode:
        return GameMode(self.game_mode)


def color_number(name: str, colors: int = 8) -> int:
    """
    Translate a color name into a curses color number.
    "bright_" variants need a 16-color terminal and degrade to the base color.
    """
    if name == "default":
        return -1
    bright = name.startswith("bright_")
    base = name[len("bright_"):] if bright else name
    number = COLOR_NAMES.index(base)
    if bright and colors >= 16:
        number += 8
    return number


def _valid_color(value) -> bool:
    if not isinstance(value, str):
        return False
    if value == "default":
        return True
    base = value[len("bright_"):] if value.startswith("bright_") else value
    return base in COLOR_NAMES


def _validate(name, value, default):
    if name.endswith("_char"):
        # each cell is drawn one column wide
        return isinstance(value, str) and len(value) == 1
    if name == "count_fg":
        return isinstance(value, list) and len(value) == len(default) and all(_valid_color(v) for v in value)
    if name == "game_mode":
        return value in {m.value for m in GameMode}
    if name == "question_marks":
        return isinstance(value, bool)
    return _valid_color(value)


def settings_from_dict(data) -> Settings:
    """Build Settings from a mapping, keeping defaults for missing or bad values."""
    defaults = Settings()
    if not isinstance(data, dict):
        logger.warning("Settings file is not a mapping, using defaults")
        return defaults

    known = {f.name for f in fields(Settings)}
    values = {}
    for name, value in data.items():
        if name not in known:
            logger.debug("Ignoring unknown setting %r", name)
            continue
        default = getattr(defaults, name)
        if _validate(name, value, default):
            values[name] = value
        else:
            logger.warning("Invalid value %r for setting %s, using %r", value, name, default)
    return Settings(**values)


def load_settings(path: str) -> Settings:
    """
    Load settings, writing a file with the defaults on first run.
    Any problem with the file falls back to defaults.
    """
    if not os.path.exists(path):
        settings = Settings()
        try:
            save_settings(settings, path)
        except OSError as e:
            logger.warning("Could not create settings file %s (%s)", path, e)
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Could not read settings file %s (%s), using defaults", path, e)
        return Settings()
    return settings_from_dict(data)


def save_settings(settings: Settings, path: str):
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(asdict(settings), f, sort_keys=False, allow_unicode=True)
