"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

# Add src (packages) and the project root (demo script) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import (
    Board,
    BoardConfig,
    CellVisibility,
    MinePlacer,
    RandomPlacer,
    build_layout,
)


# ============================================================================
# Test Doubles
# ============================================================================

class FixedPlacer(MinePlacer):
    """Placer that always puts mines at the given positions."""

    def __init__(self, mines: Iterable[Tuple[int, int]]) -> None:
        self.mines = list(mines)
        self.calls: List[Tuple[int, int, int, int, int]] = []

    def place_mines(self, rows, cols, mine_count, safe_row, safe_col):
        self.calls.append((rows, cols, mine_count, safe_row, safe_col))
        assert len(self.mines) == mine_count
        return build_layout(rows, cols, self.mines)


def make_board(rows: int, cols: int, mines: Iterable[Tuple[int, int]]) -> Board:
    """Create a board whose layout will contain exactly these mines."""
    mines = list(mines)
    return Board(rows, cols, len(mines), FixedPlacer(mines))


def make_state(
    rows: int,
    cols: int,
    mines: Iterable[Tuple[int, int]],
    revealed: Iterable[Tuple[int, int]] = (),
    flagged: Iterable[Tuple[int, int]] = (),
    mine_hits: int = 0,
) -> Board:
    """Create a mid-game board with its layout already placed."""
    mines = list(mines)
    revealed = set(revealed)
    flagged = set(flagged)
    visibility = tuple(
        tuple(
            CellVisibility.REVEALED if (row, col) in revealed
            else CellVisibility.FLAGGED if (row, col) in flagged
            else CellVisibility.HIDDEN
            for col in range(cols)
        )
        for row in range(rows)
    )
    return Board(
        rows,
        cols,
        len(mines),
        FixedPlacer(mines),
        layout=build_layout(rows, cols, mines),
        visibility=visibility,
        revealed_count=len(revealed - set(mines)),
        flagged_count=len(flagged),
        mine_hits=mine_hits,
    )


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def board_factory():
    """Factory building boards with mines at chosen positions."""
    return make_board


@pytest.fixture
def state_factory():
    """Factory building mid-game boards with a placed layout."""
    return make_state


@pytest.fixture
def fixed_placer():
    """The FixedPlacer class, for tests that need the placer itself."""
    return FixedPlacer


@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board.from_config(BoardConfig(), seed=1234)


@pytest.fixture
def corner_mine_board() -> Board:
    """3x3 board with a single mine at (2, 2)."""
    return make_board(3, 3, [(2, 2)])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(5, 5, 0, RandomPlacer(seed=0))


@pytest.fixture
def numbered_board() -> Board:
    """
    4x4 board with mines at (0, 0) and (3, 3), opened from (0, 3).

    Layout:
        * 1 0 0
        1 1 0 0
        0 0 1 1
        0 0 1 *
    """
    return make_board(4, 4, [(0, 0), (3, 3)])


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
