# tests/test_reveal.py

import unittest
from collections import Counter

from engine.board import CellState, MinesweeperBoard
from engine.placement import place_mines
from engine.reveal import chord, reveal

from tests.test_board import board_with_mines


class CountingBoard(MinesweeperBoard):
    """Records every cell whose neighbors get expanded."""

    def __init__(self, *args):
        super().__init__(*args)
        self.expanded = Counter()

    def neighbors(self, row, col):
        if self.mines_placed:
            self.expanded[(row, col)] += 1
        return super().neighbors(row, col)


class TestReveal(unittest.TestCase):

    def test_numbered_cell_does_not_propagate(self):
        board = board_with_mines(3, 3, [(0, 0)])
        result = reveal(board, (1, 1))
        self.assertEqual(result.revealed, {(1, 1)})
        self.assertFalse(result.hit_mine)

    def test_flood_fill_region(self):
        # Mine in a corner of a 4x4 board: everything else opens from the far corner.
        board = board_with_mines(4, 4, [(0, 0)])
        result = reveal(board, (3, 3))
        expected = {(r, c) for r in range(4) for c in range(4)} - {(0, 0)}
        self.assertEqual(result.revealed, expected)
        self.assertTrue(board.is_complete())

    def test_flood_fill_stops_at_numbers(self):
        # A wall of mines in column 2 splits the board.
        mines = [(r, 2) for r in range(5)]
        board = board_with_mines(5, 5, mines)
        result = reveal(board, (2, 0))
        self.assertEqual(result.revealed, {(r, c) for r in range(5) for c in (0, 1)})
        for r in range(5):
            self.assertTrue(board.cell(r, 3).is_hidden)
            self.assertTrue(board.cell(r, 4).is_hidden)

    def test_flood_fill_skips_flags(self):
        board = board_with_mines(4, 4, [(0, 0)])
        board.toggle_mark(3, 0)
        result = reveal(board, (3, 3))
        self.assertNotIn((3, 0), result.revealed)
        self.assertEqual(board.cell(3, 0).state, CellState.FLAGGED)

    def test_visited_once(self):
        board = CountingBoard(30, 16, 1)
        everything = {(r, c) for r in range(16) for c in range(30)}
        place_mines(board, everything - {(15, 29)}, 1)
        board.expanded.clear()
        result = reveal(board, (0, 0))
        self.assertEqual(len(result.revealed), 30 * 16 - 1)
        self.assertTrue(all(n == 1 for n in board.expanded.values()))

    def test_reveal_is_idempotent(self):
        board = board_with_mines(4, 4, [(0, 0)])
        reveal(board, (3, 3))
        before = board.get_visible_state()
        result = reveal(board, (3, 3))
        self.assertEqual(result.revealed, set())
        self.assertEqual(board.get_visible_state(), before)

    def test_mine_reveals_all_mines(self):
        board = board_with_mines(4, 4, [(0, 0), (3, 3), (0, 3)])
        board.toggle_mark(3, 3)
        result = reveal(board, (0, 0))
        self.assertTrue(result.hit_mine)
        self.assertEqual(result.exploded, (0, 0))
        self.assertEqual(result.revealed, set())
        self.assertTrue(board.cell(0, 3).is_revealed)
        # a correctly flagged mine keeps its flag
        self.assertEqual(board.cell(3, 3).state, CellState.FLAGGED)


class TestChord(unittest.TestCase):

    def test_chord_reveals_when_flags_match(self):
        board = board_with_mines(3, 3, [(0, 0)])
        reveal(board, (1, 1))
        board.toggle_mark(0, 0)
        result = chord(board, (1, 1))
        self.assertFalse(result.hit_mine)
        self.assertEqual(result.revealed, {(0, 1), (0, 2), (1, 0), (1, 2), (2, 0), (2, 1), (2, 2)})

    def test_chord_needs_matching_flags(self):
        board = board_with_mines(3, 3, [(0, 0)])
        reveal(board, (1, 1))
        result = chord(board, (1, 1))
        self.assertEqual(result.revealed, set())

    def test_chord_with_wrong_flag_hits_mine(self):
        board = board_with_mines(3, 3, [(0, 0)])
        reveal(board, (1, 1))
        board.toggle_mark(2, 2)
        result = chord(board, (1, 1))
        self.assertTrue(result.hit_mine)
        self.assertEqual(result.exploded, (0, 0))

    def test_chord_on_hidden_cell_does_nothing(self):
        board = board_with_mines(3, 3, [(0, 0)])
        self.assertEqual(chord(board, (2, 2)).revealed, set())


if __name__ == "__main__":
    unittest.main()
