"""
Tests for the board rules: merge algorithm, sliding in every direction, tile placement and end of game.
"""

from unittest import TestCase, main

import numpy as np

from tilemerge.core.events import MergeEvent
from tilemerge.core.gameboard import (
    empty_cells,
    fill_cell,
    is_done,
    is_valid_board,
    latent_state,
    merge_line,
    slide_and_merge,
)
from tilemerge.core.gamemove import Direction
from tilemerge.core.randomness import ScriptedSource
from tilemerge.errors import InvalidDirectionError

FINISHED_BOARD = np.array([[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 65536]])


class TestMergeLine(TestCase):
    """Test the single pass merge algorithm on one line."""

    def test_four_equal_tiles_merge_in_pairs(self):
        """[2, 2, 2, 2] gives two independent merges."""
        score, line, positions = merge_line(np.array([2, 2, 2, 2]))

        self.assertEqual(score, 8)
        np.testing.assert_array_equal(line, [4, 4, 0, 0])
        self.assertEqual(positions, [0, 1])

    def test_odd_count_leaves_trailing_tile(self):
        """[2, 2, 2] gives [4, 2], the third tile does not chain."""
        score, line, positions = merge_line(np.array([2, 2, 2, 0]))

        self.assertEqual(score, 4)
        np.testing.assert_array_equal(line, [4, 2, 0, 0])
        self.assertEqual(positions, [0])

    def test_merged_tile_does_not_merge_again(self):
        """A tile produced by a merge stays put even when followed by its own value."""
        score, line, _ = merge_line(np.array([4, 4, 8, 0]))

        self.assertEqual(score, 8)
        np.testing.assert_array_equal(line, [8, 8, 0, 0])

    def test_gaps_are_ignored(self):
        """Empty cells between equal tiles do not prevent the merge."""
        score, line, positions = merge_line(np.array([0, 2, 0, 2]))

        self.assertEqual(score, 4)
        np.testing.assert_array_equal(line, [4, 0, 0, 0])
        self.assertEqual(positions, [0])

    def test_two_pairs(self):
        """Two different pairs both merge."""
        score, line, positions = merge_line(np.array([2, 2, 4, 4]))

        self.assertEqual(score, 12)
        np.testing.assert_array_equal(line, [4, 8, 0, 0])
        self.assertEqual(positions, [0, 1])

    def test_no_merge(self):
        """Distinct tiles only slide."""
        score, line, positions = merge_line(np.array([0, 2, 4, 8]))

        self.assertEqual(score, 0)
        np.testing.assert_array_equal(line, [2, 4, 8, 0])
        self.assertEqual(positions, [])

    def test_empty_line(self):
        """An empty line stays empty."""
        score, line, positions = merge_line(np.zeros(4, dtype=np.int64))

        self.assertEqual(score, 0)
        np.testing.assert_array_equal(line, [0, 0, 0, 0])
        self.assertEqual(positions, [])

    def test_input_left_untouched(self):
        """The input line is not modified."""
        line = np.array([2, 2, 0, 0])
        merge_line(line)

        np.testing.assert_array_equal(line, [2, 2, 0, 0])


class TestSlideAndMerge(TestCase):
    """Test sliding a whole board and the coordinates of merge events."""

    def test_left(self):
        """Every row slides left and merges."""
        board = np.array([[2, 2, 4, 4], [0, 2, 2, 4], [2, 0, 0, 2], [2, 2, 2, 2]])
        score, result, events = slide_and_merge(board, Direction.LEFT)

        expected = np.array([[4, 8, 0, 0], [4, 4, 0, 0], [4, 0, 0, 0], [4, 4, 0, 0]])
        self.assertEqual(score, 28)
        np.testing.assert_array_equal(result, expected)
        self.assertEqual(
            events,
            [
                MergeEvent(0, 0, 4),
                MergeEvent(0, 1, 8),
                MergeEvent(1, 0, 4),
                MergeEvent(2, 0, 4),
                MergeEvent(3, 0, 4),
                MergeEvent(3, 1, 4),
            ],
        )

    def test_right(self):
        """Tiles travel to the right edge and the merge lands on it."""
        board = np.zeros((4, 4), dtype=np.int64)
        board[0] = [2, 2, 2, 0]
        score, result, events = slide_and_merge(board, Direction.RIGHT)

        # ##>: Travel order is [2, 2, 2] read from the right, giving [4, 2] from the right edge.
        self.assertEqual(score, 4)
        np.testing.assert_array_equal(result[0], [0, 0, 2, 4])
        self.assertEqual(events, [MergeEvent(0, 3, 4)])

    def test_up(self):
        """A column of four equal tiles merges twice toward the top."""
        board = np.zeros((4, 4), dtype=np.int64)
        board[:, 1] = 2
        score, result, events = slide_and_merge(board, Direction.UP)

        self.assertEqual(score, 8)
        np.testing.assert_array_equal(result[:, 1], [4, 4, 0, 0])
        self.assertEqual(events, [MergeEvent(0, 1, 4), MergeEvent(1, 1, 4)])

    def test_down(self):
        """Tiles travel to the bottom edge, nearest to it merging first."""
        board = np.zeros((4, 4), dtype=np.int64)
        board[:, 0] = [2, 0, 2, 4]
        score, result, events = slide_and_merge(board, Direction.DOWN)

        self.assertEqual(score, 4)
        np.testing.assert_array_equal(result[:, 0], [0, 0, 4, 4])
        self.assertEqual(events, [MergeEvent(2, 0, 4)])

    def test_events_ordered_by_line(self):
        """Events of a vertical move are ordered by column index."""
        board = np.zeros((4, 4), dtype=np.int64)
        board[:2, 3] = 4
        board[:2, 0] = 2
        _, _, events = slide_and_merge(board, Direction.UP)

        self.assertEqual(events, [MergeEvent(0, 0, 4), MergeEvent(0, 3, 8)])

    def test_input_board_left_untouched(self):
        """Sliding returns a new board."""
        board = np.array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        original = board.copy()
        slide_and_merge(board, Direction.LEFT)

        np.testing.assert_array_equal(board, original)

    def test_score_accumulation_multiple_merges(self):
        """Score sums across rows."""
        board = np.array([[2, 2, 0, 0], [4, 4, 0, 0], [8, 8, 0, 0], [16, 16, 0, 0]])
        score, _, _ = slide_and_merge(board, Direction.LEFT)

        # ##>: 4 + 8 + 16 + 32 = 60.
        self.assertEqual(score, 60)


class TestLatentState(TestCase):
    """Test move results and change detection."""

    def test_no_change_detected(self):
        """A move against a packed edge reports no change."""
        board = np.array([[2, 0, 0, 0], [4, 0, 0, 0], [8, 0, 0, 0], [16, 0, 0, 0]])
        new_board, result = latent_state(board, 'left')

        self.assertFalse(result.changed)
        self.assertEqual(result.score, 0)
        self.assertEqual(result.events, ())
        np.testing.assert_array_equal(new_board, board)

    def test_full_board_without_merges_does_not_change(self):
        """No direction changes a finished board."""
        for direction in Direction:
            with self.subTest(direction=direction):
                _, result = latent_state(FINISHED_BOARD, direction)
                self.assertFalse(result.changed)

    def test_change_detected(self):
        """A slide without merge is still a change."""
        board = np.array([[0, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        new_board, result = latent_state(board, Direction.LEFT)

        self.assertTrue(result.changed)
        self.assertEqual(result.score, 0)
        self.assertEqual(new_board[0, 0], 2)

    def test_invalid_direction(self):
        """Unknown direction tokens are rejected."""
        board = np.zeros((4, 4), dtype=np.int64)
        with self.assertRaises(InvalidDirectionError):
            latent_state(board, 'diagonal')


class TestFillCell(TestCase):
    """Test tile placement from a scripted random source."""

    def test_first_draw_picks_cell_second_picks_value(self):
        """Draws map to a row-major empty cell, then to a 2 under 0.9."""
        board = np.zeros((4, 4), dtype=np.int64)
        placed = fill_cell(board, ScriptedSource([0.0, 0.5]))

        self.assertEqual(placed, (0, 0, 2))
        self.assertEqual(board[0, 0], 2)
        self.assertEqual(np.count_nonzero(board), 1)

    def test_high_draws_pick_last_cell_and_four(self):
        """A draw of 0.9 or more spawns a 4."""
        board = np.zeros((4, 4), dtype=np.int64)
        placed = fill_cell(board, ScriptedSource([0.99, 0.9]))

        self.assertEqual(placed, (3, 3, 4))

    def test_only_empty_cells_are_candidates(self):
        """Cell choice ranges over the empty cells only."""
        board = np.full((4, 4), 2, dtype=np.int64)
        board[1, 2] = 0
        board[3, 0] = 0

        self.assertEqual(empty_cells(board), [(1, 2), (3, 0)])
        self.assertEqual(fill_cell(board.copy(), ScriptedSource([0.49, 0.0])), (1, 2, 2))
        self.assertEqual(fill_cell(board.copy(), ScriptedSource([0.5, 0.0])), (3, 0, 2))

    def test_full_board_is_noop(self):
        """A full board is untouched and consumes no draw."""
        board = FINISHED_BOARD.copy()
        source = ScriptedSource([0.0, 0.0])

        self.assertIsNone(fill_cell(board, source))
        np.testing.assert_array_equal(board, FINISHED_BOARD)
        self.assertEqual(source.remaining, 2)

    def test_custom_spawn_probabilities(self):
        """The value threshold follows the given probabilities."""
        board = np.zeros((4, 4), dtype=np.int64)
        placed = fill_cell(board, ScriptedSource([0.0, 0.6]), tile_spawn_probs={2: 0.5, 4: 0.5})

        self.assertEqual(placed, (0, 0, 4))


class TestGameTermination(TestCase):
    """Test game over detection."""

    def test_game_over_full_board_no_merges(self):
        """Game ends when board full and no adjacent equal tiles."""
        self.assertTrue(is_done(FINISHED_BOARD))

    def test_game_not_over_with_empty_cells(self):
        """Game continues when one cell is empty, even without equal neighbours."""
        board = np.array([[2, 4, 8, 0], [16, 32, 64, 128], [256, 512, 1024, 2048], [4096, 8192, 16384, 32768]])

        self.assertFalse(is_done(board))

    def test_game_not_over_with_horizontal_pair(self):
        """Game continues when merge possible despite full board."""
        board = np.array([[2, 2, 4, 8], [16, 32, 64, 128], [256, 512, 1024, 2048], [4096, 8192, 16384, 32768]])

        self.assertFalse(is_done(board))

    def test_game_not_over_with_vertical_pair(self):
        """A vertical pair is enough to continue."""
        board = FINISHED_BOARD.copy()
        board[1, 3] = 16

        self.assertFalse(is_done(board))


class TestValidBoard(TestCase):
    """Test the tile invariant check."""

    def test_valid(self):
        self.assertTrue(is_valid_board(FINISHED_BOARD, 4))
        self.assertTrue(is_valid_board(np.zeros((4, 4), dtype=np.int64), 4))

    def test_invalid_values(self):
        for value in (1, 3, 6, -2):
            with self.subTest(value=value):
                board = np.zeros((4, 4), dtype=np.int64)
                board[2, 2] = value
                self.assertFalse(is_valid_board(board, 4))

    def test_wrong_shape(self):
        self.assertFalse(is_valid_board(np.zeros((3, 4), dtype=np.int64), 4))


if __name__ == '__main__':
    main()
