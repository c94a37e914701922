# engine/board.py

from enum import Enum

import numpy as np

from .errors import IllegalState, InvalidConfiguration
from .utils import get_neighbors

# Values used by MinesweeperBoard.encoded()
HIDDEN = -3
FLAG = -2
MINE = -1
WRONG_FLAG = -4
QUESTION = -5
EXPLODED = -6


class CellState(str, Enum):
    HIDDEN = "hidden"
    REVEALED = "revealed"
    FLAGGED = "flagged"
    QUESTIONED = "questioned"


class Cell:
    """
    One grid position. `adjacent_mine_count` is written once, when mines are
    placed, and never recomputed afterwards.
    """

    __slots__ = ("row", "col", "is_mine", "adjacent_mine_count", "state")

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        self.is_mine = False
        self.adjacent_mine_count = 0
        self.state = CellState.HIDDEN

    @property
    def position(self):
        return (self.row, self.col)

    @property
    def is_hidden(self):
        return self.state is CellState.HIDDEN

    @property
    def is_revealed(self):
        return self.state is CellState.REVEALED

    @property
    def is_marked(self):
        return self.state in (CellState.FLAGGED, CellState.QUESTIONED)

    def __repr__(self):
        return f"Cell({self.row}, {self.col}, mine={self.is_mine}, count={self.adjacent_mine_count}, {self.state.value})"


class MinesweeperBoard:
    """
    Grid of cells plus the mine layout.

    Mines are not placed at construction time. The placement policy
    (engine.placement.place_mines) fills them in once, on the first reveal,
    so the opening click can be kept clear.
    """

    def __init__(self, width: int, height: int, mine_count: int):
        if width < 1 or height < 1:
            raise InvalidConfiguration(f"Board must be at least 1x1, got {width}x{height}")
        if mine_count < 0 or mine_count >= width * height:
            raise InvalidConfiguration(
                f"Mine count must be in [0, {width * height}), got {mine_count}"
            )
        self.width = width
        self.height = height
        self.mine_count = mine_count
        self.mines_placed = False
        self.exploded = None  # (row, col) of the mine that ended the game

        self.cells = [[Cell(r, c) for c in range(width)] for r in range(height)]

    def is_valid_coord(self, row, col):
        try:
            row = int(row)
            col = int(col)
        except (ValueError, TypeError):
            return False
        return 0 <= row < self.height and 0 <= col < self.width

    def cell(self, row, col) -> Cell:
        if not self.is_valid_coord(row, col):
            raise IndexError(f"({row}, {col}) is outside the {self.width}x{self.height} board")
        return self.cells[int(row)][int(col)]

    def neighbors(self, row, col):
        return [self.cells[r][c] for r, c in get_neighbors(row, col, self.width, self.height)]

    def __iter__(self):
        for row in self.cells:
            yield from row

    def count(self, state: CellState) -> int:
        return sum(1 for cell in self if cell.state is state)

    def mine_positions(self):
        return {cell.position for cell in self if cell.is_mine}

    def toggle_mark(self, row, col, question_marks=False) -> CellState:
        """
        Cycle the player's marking on a cell:
        Hidden -> Flagged -> (Questioned ->) Hidden.
        Revealed cells are left alone.
        """
        cell = self.cell(row, col)
        if cell.state is CellState.HIDDEN:
            cell.state = CellState.FLAGGED
        elif cell.state is CellState.FLAGGED:
            cell.state = CellState.QUESTIONED if question_marks else CellState.HIDDEN
        elif cell.state is CellState.QUESTIONED:
            cell.state = CellState.HIDDEN
        return cell.state

    def is_complete(self):
        if not self.mines_placed:
            return False
        return all(cell.is_mine or cell.is_revealed for cell in self)

    def reveal_all_mines(self):
        """Expose every unflagged mine for the end-of-game display."""
        if not self.mines_placed:
            raise IllegalState("Mines have not been placed yet")
        for cell in self:
            if cell.is_mine and cell.state is not CellState.FLAGGED:
                cell.state = CellState.REVEALED

    def flag_all_mines(self):
        for cell in self:
            if cell.is_mine:
                cell.state = CellState.FLAGGED

    def get_visible_state(self, game_over_flag=False):
        """
        Read-only view of the board as rows of:
            None  hidden cell
            "F"   flag            "?"  question mark
            0-8   revealed count
        and, once the game is over:
            "*"   the mine that was hit
            "M"   other exposed mines
            "X"   flag placed on a cell without a mine
        Mines stay hidden until they are revealed.
        """
        state = []
        for row in self.cells:
            row_cells = []
            for cell in row:
                if cell.is_mine and cell.is_revealed:
                    row_cells.append("*" if cell.position == self.exploded else "M")
                elif cell.state is CellState.FLAGGED:
                    row_cells.append("X" if game_over_flag and not cell.is_mine else "F")
                elif cell.state is CellState.QUESTIONED:
                    row_cells.append("?")
                elif cell.is_revealed:
                    row_cells.append(cell.adjacent_mine_count)
                else:
                    row_cells.append(None)
            state.append(row_cells)
        return state

    def encoded(self, game_over_flag=False):
        """
        Encode the visible state as an int array of shape (height, width).
        """
        codes = {None: HIDDEN, "F": FLAG, "?": QUESTION, "M": MINE, "X": WRONG_FLAG, "*": EXPLODED}
        return np.array(
            [[codes[v] if not isinstance(v, int) else v for v in row]
             for row in self.get_visible_state(game_over_flag)],
            dtype=int,
        )
