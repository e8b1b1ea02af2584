import unittest

import numpy as np

from timed_block_puzzle.game import GameGrid, GamePiece, OutOfBounds, PieceType


class GameGridTests(unittest.TestCase):
    def setUp(self):
        self.grid = GameGrid(5, 4)

    def test_get_and_set(self):
        self.assertEqual(self.grid.get(4, 3), 0)
        self.grid.set(4, 3, 7)
        self.assertEqual(self.grid.get(4, 3), 7)
        self.assertEqual(self.grid.grid[3, 4], 7)

    def test_out_of_range_access_is_rejected(self):
        for x, y in [(-1, 0), (0, -1), (5, 0), (0, 4)]:
            with self.assertRaises(OutOfBounds):
                self.grid.get(x, y)
            with self.assertRaises(OutOfBounds):
                self.grid.set(x, y, 1)

    def test_out_of_bounds_is_an_index_error(self):
        with self.assertRaises(IndexError):
            self.grid.get(10, 10)

    def test_can_play_piece_on_empty_grid(self):
        plus = GamePiece(PieceType.PLUS)
        self.assertTrue(self.grid.can_play_piece(plus, 1, 1))
        self.assertTrue(self.grid.can_play_piece(plus, 3, 2))

    def test_can_play_piece_rejects_overhang(self):
        plus = GamePiece(PieceType.PLUS)
        self.assertFalse(self.grid.can_play_piece(plus, 0, 1))
        self.assertFalse(self.grid.can_play_piece(plus, 4, 1))
        self.assertFalse(self.grid.can_play_piece(plus, 2, 3))
        # Dot only covers its centre, so corners are fine
        dot = GamePiece(PieceType.DOT)
        self.assertTrue(self.grid.can_play_piece(dot, 0, 0))
        self.assertFalse(self.grid.can_play_piece(dot, 5, 0))

    def test_can_play_piece_rejects_any_collision(self):
        plus = GamePiece(PieceType.PLUS)
        self.grid.set(2, 1, 3)  # one arm of a plus centred on (2, 2)
        self.assertFalse(self.grid.can_play_piece(plus, 2, 2))
        # Cells the piece does not occupy do not matter
        self.grid.reset()
        self.grid.set(1, 1, 3)
        self.assertTrue(self.grid.can_play_piece(plus, 2, 2))

    def test_play_piece_writes_colour_and_nothing_else(self):
        self.grid.set(0, 0, 9)
        before = self.grid.clone_state()
        piece = GamePiece(PieceType.BIG_T)
        self.grid.play_piece(piece, 2, 2)
        expected = before.copy()
        for x, y in piece.cells_at(2, 2):
            expected[y, x] = piece.value
        np.testing.assert_array_equal(self.grid.grid, expected)
        self.assertEqual(self.grid.get(0, 0), 9)

    def test_set_stores_values_beyond_a_byte(self):
        self.grid.set(0, 0, 200)
        self.grid.set(1, 0, 70000)
        self.assertEqual(self.grid.get(0, 0), 200)
        self.assertEqual(self.grid.get(1, 0), 70000)

    def test_full_rows_and_columns(self):
        self.grid.grid[1, :] = 1
        self.grid.grid[:, 3] = 2
        self.assertEqual(list(self.grid.full_rows()), [1])
        self.assertEqual(list(self.grid.full_columns()), [3])


if __name__ == "__main__":
    unittest.main()
