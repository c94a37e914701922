# engine/game.py

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Set, Tuple

from .board import CellState, MinesweeperBoard
from .difficulty import BEGINNER, Difficulty
from .errors import GameOver, IllegalState
from .placement import place_mines, reserved_cells_around
from .reveal import chord, reveal

logger = logging.getLogger(__name__)


class GameStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST)


class GameMode(str, Enum):
    VANILLA = "vanilla"
    QOL = "qol"  # activating a satisfied number chords its neighbors


@dataclass(frozen=True)
class CompletedGame:
    difficulty: Difficulty
    outcome: GameStatus
    duration: float
    moves: int


class GameSession:
    """
    A wrapper around MinesweeperBoard that manages game state and turn flow.

    The session starts in NOT_STARTED with an empty board. The first
    activate() places the mines around the clicked cell and starts the clock.
    Once WON or LOST, every mutating call raises GameOver.
    """

    def __init__(
        self,
        difficulty: Difficulty = BEGINNER,
        stats=None,
        seed: Optional[int] = None,
        mode: GameMode = GameMode.VANILLA,
        question_marks: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.difficulty = difficulty
        self.stats = stats
        self.seed = seed
        self.mode = GameMode(mode)
        self.question_marks = question_marks
        self.clock = clock

        self.reset()

    @property
    def width(self) -> int:
        return self.difficulty.width

    @property
    def height(self) -> int:
        return self.difficulty.height

    @property
    def num_mines(self) -> int:
        return self.difficulty.mines

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def mines_remaining(self) -> int:
        return self.num_mines - self.flags_placed

    def reset(self):
        """
        Reset the game session to a fresh state with the same parameters.
        """
        self.board = MinesweeperBoard(self.width, self.height, self.num_mines)
        self._status = GameStatus.NOT_STARTED
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.moves_made = 0
        self.flags_placed = 0
        self.abandoned = False
        self.result: Optional[CompletedGame] = None

    def _check_mutable(self):
        if self._status.is_terminal:
            raise GameOver(f"Game is already {self._status.value}")
        if self.abandoned:
            raise IllegalState("Game was abandoned")

    def activate(self, row: int, col: int) -> Set[Tuple[int, int]]:
        """
        Reveal the cell at (row, col) and return the positions newly revealed.
        Marked cells are left alone until they are unmarked.
        """
        self._check_mutable()
        cell = self.board.cell(row, col)

        if self._status is GameStatus.NOT_STARTED:
            excluded = reserved_cells_around(self.board, row, col)
            place_mines(self.board, excluded, self.num_mines, self.seed)
            self._status = GameStatus.IN_PROGRESS
            self.start_time = self.clock()
            logger.debug("Mines placed around first click (%d, %d)", row, col)

        self.moves_made += 1
        if cell.is_revealed and self.mode is GameMode.QOL:
            result = chord(self.board, (row, col))
        else:
            result = reveal(self.board, (row, col))

        if result.hit_mine:
            self._finish(GameStatus.LOST)
        elif self.board.is_complete():
            self.board.flag_all_mines()
            self.flags_placed = self.num_mines
            self._finish(GameStatus.WON)
        return result.revealed

    def toggle_flag(self, row: int, col: int) -> CellState:
        """
        Cycle the marking on a hidden cell. Only allowed while the game runs.
        """
        self._check_mutable()
        if self._status is not GameStatus.IN_PROGRESS:
            raise IllegalState("Cannot place flags before the first reveal")

        before = self.board.cell(row, col).state
        after = self.board.toggle_mark(row, col, self.question_marks)
        if before is not after:
            self.moves_made += 1
            if after is CellState.FLAGGED:
                self.flags_placed += 1
            elif before is CellState.FLAGGED:
                self.flags_placed -= 1
        return after

    def elapsed(self) -> float:
        """Seconds since the first reveal; frozen once the game ends."""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else self.clock()
        return end - self.start_time

    def abandon(self):
        """Discard an unfinished game. Nothing is recorded."""
        if not self._status.is_terminal and not self.abandoned:
            logger.info("Abandoned %s game after %d moves", self.difficulty.key, self.moves_made)
            self.abandoned = True

    def _finish(self, outcome: GameStatus):
        self.end_time = self.clock()
        self._status = outcome
        self.result = CompletedGame(self.difficulty, outcome, self.elapsed(), self.moves_made)
        logger.info("Game %s on %s after %.1fs", outcome.value, self.difficulty.key, self.result.duration)
        if self.stats is not None:
            self.stats.record(self.difficulty, outcome, self.result.duration, self.moves_made)

    def is_game_over(self) -> bool:
        return self._status.is_terminal

    def is_win(self) -> bool:
        return self._status is GameStatus.WON

    def snapshot(self):
        return self.board.get_visible_state(game_over_flag=self.is_game_over())

    def encoded(self):
        return self.board.encoded(game_over_flag=self.is_game_over())

    def get_state(self) -> dict:
        """
        Return the current visible board and game status.
        """
        return {
            "board": self.snapshot(),
            "status": self._status.value,
            "game_over": self.is_game_over(),
            "won": self.is_win(),
            "moves_made": self.moves_made,
            "flags_placed": self.flags_placed,
            "elapsed": self.elapsed(),
            "dimensions": (self.height, self.width),
            "num_mines": self.num_mines,
        }
