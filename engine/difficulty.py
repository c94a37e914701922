# engine/difficulty.py

from dataclasses import dataclass

from .errors import InvalidConfiguration


@dataclass(frozen=True)
class Difficulty:
    """
    A named board configuration.

    `key` is the statistics key the difficulty is recorded under. Every custom
    board shares the "custom" key, whatever its dimensions.
    """
    key: str
    width: int
    height: int
    mines: int

    def __post_init__(self):
        validate_dimensions(self.width, self.height, self.mines)

    @classmethod
    def custom(cls, width: int, height: int, mines: int) -> "Difficulty":
        return cls("custom", width, height, mines)

    @property
    def label(self) -> str:
        return f"{self.key.capitalize()} ({self.width}x{self.height}, {self.mines} mines)"


def max_mines(width: int, height: int) -> int:
    """
    Largest mine count that still leaves room for the first-click opening,
    wherever the first click lands.
    """
    return width * height - min(3, width) * min(3, height)


def validate_dimensions(width, height, mines):
    for name, value in (("width", width), ("height", height), ("mines", mines)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    if width < 1 or height < 1:
        raise InvalidConfiguration(f"Board must be at least 1x1, got {width}x{height}")
    if mines < 0:
        raise InvalidConfiguration(f"Mine count cannot be negative, got {mines}")
    limit = max_mines(width, height)
    if mines > limit:
        raise InvalidConfiguration(
            f"Too many mines for the given space count ({mines} mines in {width * height} spaces, "
            f"at most {limit} allowed)"
        )


BEGINNER = Difficulty("beginner", 9, 9, 10)
INTERMEDIATE = Difficulty("intermediate", 16, 16, 40)
EXPERT = Difficulty("expert", 30, 16, 99)

PRESETS = {d.key: d for d in (BEGINNER, INTERMEDIATE, EXPERT)}

# Statistics keys understood by this version, in display order.
KNOWN_KEYS = ("beginner", "intermediate", "expert", "custom")
