# engine/utils.py

from typing import List, Tuple


def get_neighbors(row: int, col: int, width: int, height: int) -> List[Tuple[int, int]]:
    """
    Return a list of valid neighboring coordinates (8-way) for (row, col).
    """
    neighbors = []
    for dr in [-1, 0, 1]:
        for dc in [-1, 0, 1]:
            nr, nc = row + dr, col + dc
            if (dr != 0 or dc != 0) and 0 <= nr < height and 0 <= nc < width:
                neighbors.append((nr, nc))
    return neighbors


def get_block(row: int, col: int, width: int, height: int, radius: int = 1) -> List[Tuple[int, int]]:
    """
    Return the (2*radius+1) x (2*radius+1) block centered on (row, col),
    clipped to the board boundaries. The center cell is included.
    """
    cells = []
    for dr in range(-radius, radius + 1):
        for dc in range(-radius, radius + 1):
            rr, cc = row + dr, col + dc
            if 0 <= rr < height and 0 <= cc < width:
                cells.append((rr, cc))
    return cells
