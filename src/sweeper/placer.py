"""
Mine placement strategies.

A placer turns board dimensions and the first clicked cell into a
finished layout: a rows x cols grid where -1 marks a mine and every
other value is the number of mines among the cell's neighbors.
"""
import logging
import random
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MINE = -1

Position = Tuple[int, int]
Layout = Tuple[Tuple[int, ...], ...]


class ConfigurationError(ValueError):
    """Raised when board parameters cannot produce a valid game."""


# ============================================================================
# Layout Helpers (Low-level)
# ============================================================================

def validate_dimensions(rows: int, cols: int, mine_count: int) -> None:
    """
    Ensure board parameters describe a playable board.

    Raises:
        ConfigurationError: On non-positive dimensions or a mine count
            outside [0, rows * cols).
    """
    if rows < 1 or cols < 1:
        raise ConfigurationError("Board dimensions must be positive")
    if mine_count < 0:
        raise ConfigurationError("Number of mines cannot be negative")
    if mine_count >= rows * cols:
        raise ConfigurationError(
            f"Too many mines (max {rows * cols - 1})"
        )


def neighbor_positions(
    row: int, col: int, rows: int, cols: int
) -> List[Position]:
    """Get the in-bounds 8-neighborhood of a cell in row-major order."""
    neighbors = []
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            new_row = row + delta_row
            new_col = col + delta_col
            if 0 <= new_row < rows and 0 <= new_col < cols:
                neighbors.append((new_row, new_col))
    return neighbors


def build_layout(rows: int, cols: int, mines: Iterable[Position]) -> Layout:
    """
    Build an immutable layout from a set of mine positions.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        mines: Positions holding a mine.

    Returns:
        Tuple-of-tuples grid with MINE at each mine and the adjacent
        mine count everywhere else.
    """
    grid = [[0] * cols for _ in range(rows)]
    for row, col in mines:
        grid[row][col] = MINE

    for row in range(rows):
        for col in range(cols):
            if grid[row][col] == MINE:
                continue
            grid[row][col] = sum(
                1 for n_row, n_col in neighbor_positions(row, col, rows, cols)
                if grid[n_row][n_col] == MINE
            )

    return tuple(tuple(line) for line in grid)


# ============================================================================
# Placer Interface
# ============================================================================

class MinePlacer(ABC):
    """
    Strategy that produces the mine layout for a new game.

    Implementations must place exactly ``mine_count`` mines and should
    keep the 8-neighborhood of the safe cell free whenever the grid is
    large enough to allow it.
    """

    @abstractmethod
    def place_mines(
        self,
        rows: int,
        cols: int,
        mine_count: int,
        safe_row: int,
        safe_col: int,
    ) -> Layout:
        """
        Generate a layout for the given board.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            mine_count: Exact number of mines to place.
            safe_row: Row of the first revealed cell.
            safe_col: Column of the first revealed cell.

        Returns:
            Layout grid (see module docstring).

        Raises:
            ConfigurationError: If the mines cannot be placed.
        """


# ============================================================================
# Random Placer
# ============================================================================

class RandomPlacer(MinePlacer):
    """
    Places mines uniformly at random outside a safe zone.

    The safe zone is the 3x3 block around the first click, clipped to
    the board. On crowded boards the zone is trimmed farthest-first
    until enough cells remain for the requested mines.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the placer.

        Args:
            seed: Random seed for reproducibility (ignored if rng given).
            rng: Random source to draw from.
        """
        self.rng = rng if rng is not None else random.Random(seed)

    def place_mines(
        self,
        rows: int,
        cols: int,
        mine_count: int,
        safe_row: int,
        safe_col: int,
    ) -> Layout:
        """Shuffle the cells outside the safe zone and mine the first ones."""
        validate_dimensions(rows, cols, mine_count)

        safe_zone = self._safe_zone(rows, cols, mine_count, safe_row, safe_col)
        candidates = [
            (row, col)
            for row in range(rows)
            for col in range(cols)
            if (row, col) not in safe_zone
        ]
        if mine_count > len(candidates):
            raise ConfigurationError(
                f"Too many mines for size/safe zone: {mine_count} mines, "
                f"{len(candidates)} candidate cells"
            )

        self.rng.shuffle(candidates)
        mines = candidates[:mine_count]
        logger.debug(
            "Placed %d mines on %dx%d board (safe cell %s, safe zone %d)",
            mine_count, rows, cols, (safe_row, safe_col), len(safe_zone),
        )
        return build_layout(rows, cols, mines)

    @staticmethod
    def _safe_zone(
        rows: int,
        cols: int,
        mine_count: int,
        safe_row: int,
        safe_col: int,
    ) -> Set[Position]:
        """Compute the clipped, possibly trimmed, mine-free zone."""
        zone = [
            (row, col)
            for row in range(safe_row - 1, safe_row + 2)
            for col in range(safe_col - 1, safe_col + 2)
            if 0 <= row < rows and 0 <= col < cols
        ]

        max_safe = max(1, rows * cols - mine_count)
        if len(zone) > max_safe:
            # Farthest first; stable, so ties drop in row-major order.
            zone.sort(
                key=lambda pos: -((pos[0] - safe_row) ** 2 + (pos[1] - safe_col) ** 2)
            )
            zone = zone[len(zone) - max_safe:]

        return set(zone)
