"""
Unit tests for mine placement.

Tests layout construction, the safe zone around the first click and
configuration errors.
"""
import random

import pytest
from sweeper import MINE, ConfigurationError, RandomPlacer, build_layout


def count_mines(layout) -> int:
    return sum(1 for line in layout for value in line if value == MINE)


def mine_positions(layout):
    return {
        (row, col)
        for row, line in enumerate(layout)
        for col, value in enumerate(line)
        if value == MINE
    }


# ============================================================================
# Layout Construction Tests
# ============================================================================

class TestBuildLayout:
    """Test adjacency counting for a known mine set."""

    def test_single_corner_mine(self) -> None:
        """Corner mine touches exactly three cells."""
        layout = build_layout(3, 3, [(2, 2)])
        assert layout == (
            (0, 0, 0),
            (0, 1, 1),
            (0, 1, MINE),
        )

    def test_center_mine_surrounded_by_ones(self) -> None:
        """Center mine gives every other cell a count of one."""
        layout = build_layout(3, 3, [(1, 1)])
        for row in range(3):
            for col in range(3):
                if (row, col) != (1, 1):
                    assert layout[row][col] == 1

    def test_eight_neighbors(self) -> None:
        """A cell surrounded by mines counts eight."""
        mines = [(r, c) for r in range(3) for c in range(3) if (r, c) != (1, 1)]
        layout = build_layout(3, 3, mines)
        assert layout[1][1] == 8

    def test_layout_is_immutable(self) -> None:
        """Layouts are tuples of tuples."""
        layout = build_layout(2, 2, [])
        assert isinstance(layout, tuple)
        assert all(isinstance(line, tuple) for line in layout)


# ============================================================================
# Random Placer Tests
# ============================================================================

class TestRandomPlacer:
    """Test random mine placement."""

    def test_places_exact_mine_count(self) -> None:
        """Layout contains exactly the requested mines."""
        layout = RandomPlacer(seed=1).place_mines(9, 9, 10, 4, 4)
        assert count_mines(layout) == 10

    def test_layout_has_board_shape(self) -> None:
        """Layout matches rows x cols."""
        layout = RandomPlacer(seed=1).place_mines(16, 30, 99, 0, 0)
        assert len(layout) == 16
        assert all(len(line) == 30 for line in layout)

    def test_adjacency_matches_mines(self) -> None:
        """Non-mine values equal their neighbor mine count."""
        layout = RandomPlacer(seed=7).place_mines(16, 16, 40, 8, 8)
        assert layout == build_layout(16, 16, mine_positions(layout))

    @pytest.mark.parametrize("safe", [(0, 0), (4, 4), (8, 0), (0, 8), (8, 8)])
    def test_safe_zone_is_mine_free(self, safe) -> None:
        """No mine lands in the 3x3 block around the safe cell."""
        for seed in range(20):
            layout = RandomPlacer(seed=seed).place_mines(9, 9, 10, *safe)
            for row in range(safe[0] - 1, safe[0] + 2):
                for col in range(safe[1] - 1, safe[1] + 2):
                    if 0 <= row < 9 and 0 <= col < 9:
                        assert layout[row][col] != MINE

    def test_safe_cell_is_zero_when_zone_fits(self) -> None:
        """With a full safe zone the clicked cell has no adjacent mines."""
        layout = RandomPlacer(seed=3).place_mines(9, 9, 72, 4, 4)
        assert layout[4][4] == 0

    def test_crowded_board_trims_zone_but_keeps_safe_cell(self) -> None:
        """Zone shrinks to fit the mines; the safe cell stays clear."""
        for seed in range(20):
            layout = RandomPlacer(seed=seed).place_mines(3, 3, 5, 1, 1)
            assert count_mines(layout) == 5
            assert layout[1][1] != MINE

    def test_trim_drops_diagonals_before_orthogonals(self) -> None:
        """Farthest cells leave the zone first."""
        # 9 cells, 4 mines: safe zone keeps 5 cells, i.e. the center
        # and its orthogonal neighbors; the diagonals take the mines.
        layout = RandomPlacer(seed=0).place_mines(3, 3, 4, 1, 1)
        assert mine_positions(layout) == {(0, 0), (0, 2), (2, 0), (2, 2)}

    def test_trim_ties_drop_in_row_major_order(self) -> None:
        """Among equally distant cells the earliest leave first."""
        # 9 cells, 7 mines: two safe cells remain; of the orthogonal
        # neighbors only the last one, (2, 1), survives.
        layout = RandomPlacer(seed=0).place_mines(3, 3, 7, 1, 1)
        assert layout[1][1] != MINE
        assert layout[2][1] != MINE
        assert count_mines(layout) == 7

    def test_maximum_mines_leaves_only_safe_cell(self) -> None:
        """rows * cols - 1 mines fill everything but the safe cell."""
        layout = RandomPlacer(seed=0).place_mines(2, 2, 3, 0, 1)
        assert mine_positions(layout) == {(0, 0), (1, 0), (1, 1)}
        assert layout[0][1] == 3

    def test_zero_mines(self) -> None:
        """A mine-free layout is all zeros."""
        layout = RandomPlacer(seed=0).place_mines(4, 4, 0, 2, 2)
        assert all(value == 0 for line in layout for value in line)

    def test_seed_is_reproducible(self) -> None:
        """Same seed, same layout."""
        first = RandomPlacer(seed=42).place_mines(9, 9, 10, 0, 0)
        second = RandomPlacer(seed=42).place_mines(9, 9, 10, 0, 0)
        assert first == second

    def test_injected_rng_is_used(self) -> None:
        """An injected Random drives the placement."""
        first = RandomPlacer(rng=random.Random(5)).place_mines(9, 9, 10, 0, 0)
        second = RandomPlacer(rng=random.Random(5)).place_mines(9, 9, 10, 0, 0)
        assert first == second


# ============================================================================
# Configuration Error Tests
# ============================================================================

class TestPlacerErrors:
    """Test invalid placement requests."""

    def test_zero_rows_raises_error(self) -> None:
        """Non-positive dimensions are rejected."""
        with pytest.raises(ConfigurationError, match="dimensions must be positive"):
            RandomPlacer().place_mines(0, 3, 1, 0, 0)

    def test_negative_mines_raises_error(self) -> None:
        """Negative mine count is rejected."""
        with pytest.raises(ConfigurationError, match="cannot be negative"):
            RandomPlacer().place_mines(3, 3, -1, 0, 0)

    def test_full_board_raises_error(self) -> None:
        """A board with no free cell is rejected."""
        with pytest.raises(ConfigurationError, match="Too many mines"):
            RandomPlacer().place_mines(3, 3, 9, 0, 0)

    def test_configuration_error_is_value_error(self) -> None:
        """Callers catching ValueError still see configuration errors."""
        assert issubclass(ConfigurationError, ValueError)
