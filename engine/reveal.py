# engine/reveal.py

from collections import deque
from dataclasses import dataclass, field
from typing import Set, Tuple

from .board import CellState

Position = Tuple[int, int]


@dataclass
class RevealResult:
    revealed: Set[Position] = field(default_factory=set)
    hit_mine: bool = False
    exploded: Position = None


def reveal(board, origin: Position) -> RevealResult:
    """
    Reveal `origin` and cascade through connected zero-count cells.

    Numbered cells bordering the zero region are revealed but do not
    propagate. Revealed, flagged and questioned cells are skipped. Each cell
    is enqueued at most once, so the walk always terminates.

    Hitting a mine reveals every mine on the board and reports it through
    `hit_mine` instead of returning a reveal set.
    """
    row, col = origin
    start = board.cell(row, col)
    result = RevealResult()

    if not start.is_hidden:
        return result

    if start.is_mine:
        start.state = CellState.REVEALED
        board.exploded = start.position
        board.reveal_all_mines()
        result.hit_mine = True
        result.exploded = start.position
        return result

    queue = deque([start])
    visited = {start.position}
    while queue:
        cell = queue.popleft()
        cell.state = CellState.REVEALED
        result.revealed.add(cell.position)
        if cell.adjacent_mine_count > 0:
            continue
        for neighbor in board.neighbors(cell.row, cell.col):
            if neighbor.position in visited or not neighbor.is_hidden or neighbor.is_mine:
                continue
            visited.add(neighbor.position)
            queue.append(neighbor)

    return result


def chord(board, origin: Position) -> RevealResult:
    """
    Mass reveal around an already revealed number: when the flags around it
    match its count, every remaining hidden neighbor is revealed. A wrong flag
    means one of those neighbors is a mine, which ends the game.
    """
    row, col = origin
    cell = board.cell(row, col)
    result = RevealResult()
    if not cell.is_revealed or cell.is_mine or cell.adjacent_mine_count == 0:
        return result

    neighbors = board.neighbors(row, col)
    flagged = sum(1 for n in neighbors if n.state is CellState.FLAGGED)
    if flagged != cell.adjacent_mine_count:
        return result

    for neighbor in neighbors:
        if not neighbor.is_hidden:
            continue
        sub = reveal(board, neighbor.position)
        result.revealed |= sub.revealed
        if sub.hit_mine:
            result.hit_mine = True
            result.exploded = sub.exploded
            break
    return result
