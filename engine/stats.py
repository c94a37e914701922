# engine/stats.py

import logging
import math
import os
import tempfile
from dataclasses import asdict, dataclass
from typing import Dict, Optional

import yaml

from .difficulty import KNOWN_KEYS
from .errors import PersistenceError

logger = logging.getLogger(__name__)

FILE_VERSION = 1


def _count(data, name) -> int:
    value = data.get(name, 0)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    return value


def _seconds(data, name) -> float:
    value = data.get(name, 0.0)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
        raise ValueError(f"{name} must be a non-negative number of seconds, got {value!r}")
    return float(value)


@dataclass
class StatisticsRecord:
    """Aggregate results for one difficulty mode."""
    games_played: int = 0
    games_won: int = 0
    total_time_won: float = 0.0
    best_time: Optional[float] = None
    total_playtime: float = 0.0
    total_clicks: int = 0

    @property
    def win_ratio(self) -> float:
        return self.games_won / self.games_played if self.games_played else 0.0

    @property
    def average_time(self) -> Optional[float]:
        return self.total_time_won / self.games_won if self.games_won else None

    def add(self, won: bool, duration: float, moves: int = 0):
        self.games_played += 1
        self.total_playtime += duration
        self.total_clicks += moves
        if won:
            self.games_won += 1
            self.total_time_won += duration
            if self.best_time is None or duration < self.best_time:
                self.best_time = duration

    @classmethod
    def from_dict(cls, data: Dict) -> "StatisticsRecord":
        if not isinstance(data, dict):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")
        best_time = data.get("best_time")
        record = cls(
            games_played=_count(data, "games_played"),
            games_won=_count(data, "games_won"),
            total_time_won=_seconds(data, "total_time_won"),
            best_time=None if best_time is None else _seconds(data, "best_time"),
            total_playtime=_seconds(data, "total_playtime"),
            total_clicks=_count(data, "total_clicks"),
        )
        if not record.games_won <= record.games_played:
            raise ValueError(
                f"games_won ({record.games_won}) must be between 0 and games_played ({record.games_played})"
            )
        return record

    def to_dict(self) -> Dict:
        return asdict(self)


class StatisticsStore:
    """
    Per-difficulty statistics with a load-at-start / save-on-update lifecycle.

    With `path=None` the store lives in memory only. After any load or save
    failure the store keeps working in memory and exposes the problem through
    `degraded` / `last_error`.
    """

    def __init__(self, path: Optional[str] = None, autosave: bool = True):
        self.path = path
        self.autosave = autosave
        self.records: Dict[str, StatisticsRecord] = {}
        self.last_error: Optional[PersistenceError] = None

    @classmethod
    def open(cls, path: Optional[str], autosave: bool = True) -> "StatisticsStore":
        """Create a store and load it, falling back to empty records on failure."""
        store = cls(path, autosave=autosave)
        try:
            store.load()
        except PersistenceError as e:
            store._degrade(e)
        return store

    @property
    def degraded(self) -> bool:
        return self.last_error is not None

    def _degrade(self, error: PersistenceError):
        logger.warning("Statistics unavailable, continuing in memory only: %s", error)
        self.last_error = error

    def get(self, key: str) -> StatisticsRecord:
        return self.records.get(key) or StatisticsRecord()

    def record(self, difficulty, outcome, duration: float, moves: int = 0) -> StatisticsRecord:
        """
        Fold one completed game into the record for its difficulty and save.
        `outcome` is a GameStatus or its string value ("won"/"lost").
        """
        key = getattr(difficulty, "key", difficulty)
        won = getattr(outcome, "value", outcome) == "won"
        entry = self.records.setdefault(key, StatisticsRecord())
        entry.add(won, duration, moves)
        logger.info("Recorded %s game on %s in %.1fs", "won" if won else "lost", key, duration)

        if self.autosave and self.path is not None:
            try:
                self.save()
            except PersistenceError as e:
                self._degrade(e)
        return entry

    def totals(self) -> StatisticsRecord:
        total = StatisticsRecord()
        for entry in self.records.values():
            total.games_played += entry.games_played
            total.games_won += entry.games_won
            total.total_time_won += entry.total_time_won
            total.total_playtime += entry.total_playtime
            total.total_clicks += entry.total_clicks
            if entry.best_time is not None and (total.best_time is None or entry.best_time < total.best_time):
                total.best_time = entry.best_time
        return total

    def load(self):
        """
        Replace the in-memory records with the file's contents.

        A missing file is a first run and yields empty records. Unknown modes
        are ignored; a malformed record is dropped with a warning.
        """
        if self.path is None:
            return
        self.records = {}
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise PersistenceError(f"could not read {self.path}: {e}") from e

        modes = data.get("modes") if isinstance(data, dict) else None
        if not isinstance(modes, dict):
            raise PersistenceError(f"{self.path} has no 'modes' mapping")

        for key, raw in modes.items():
            if key not in KNOWN_KEYS:
                logger.debug("Ignoring statistics for unknown mode %r", key)
                continue
            try:
                self.records[key] = StatisticsRecord.from_dict(raw)
            except (TypeError, ValueError) as e:
                logger.warning("Discarding malformed statistics for %s: %s", key, e)

    def save(self):
        """Write a full snapshot, replacing the file atomically."""
        if self.path is None:
            return
        payload = {
            "version": FILE_VERSION,
            "modes": {key: entry.to_dict() for key, entry in sorted(self.records.items())},
        }
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".stats-", suffix=".yaml", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(payload, f, sort_keys=False)
            os.replace(tmp_path, self.path)
        except (OSError, yaml.YAMLError) as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise PersistenceError(f"could not write {self.path}: {e}") from e
        self.last_error = None
