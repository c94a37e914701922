# engine/placement.py

import random

from .errors import IllegalState, InvalidConfiguration
from .utils import get_block


def reserved_cells_around(board, row, col, radius=1):
    """
    The opening area kept free of mines: a (2*radius+1) x (2*radius+1) block
    centered on the first click, clipped to the board boundaries.
    """
    return set(get_block(row, col, board.width, board.height, radius))


def place_mines(board, excluded_cells, mine_count=None, rng_seed=None):
    """
    Place mines randomly on the board, excluding `excluded_cells`.

    Exactly `mine_count` distinct cells outside the excluded set become mines,
    sampled uniformly. Adjacency counts are computed for every other cell.
    A board can only be filled once.
    """
    if board.mines_placed:
        raise IllegalState("Mines have already been placed on this board")
    if mine_count is None:
        mine_count = board.mine_count

    exclude_set = set(excluded_cells)
    all_coords = [
        (r, c)
        for r in range(board.height)
        for c in range(board.width)
        if (r, c) not in exclude_set
    ]

    if mine_count > len(all_coords):
        raise InvalidConfiguration(
            f"Cannot place {mine_count} mines: only {len(all_coords)} "
            f"available cells after excluding reserved area."
        )

    rng = random.Random(rng_seed)
    for r, c in rng.sample(all_coords, mine_count):
        board.cells[r][c].is_mine = True

    _compute_adjacent_counts(board)
    board.mine_count = mine_count
    board.mines_placed = True
    return board


def _compute_adjacent_counts(board):
    for cell in board:
        if cell.is_mine:
            continue
        cell.adjacent_mine_count = sum(1 for n in board.neighbors(cell.row, cell.col) if n.is_mine)
