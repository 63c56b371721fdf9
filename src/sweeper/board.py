"""
Board module for Minesweeper game.

Implements the game board as an immutable value: every action returns
a new Board, sharing the mine layout and copying only the visibility
grid. Mines are placed lazily on the first reveal.
"""
import logging
from collections import deque
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

import numpy as np

from .cell import CellVisibility
from .placer import (
    MINE,
    ConfigurationError,
    Layout,
    MinePlacer,
    Position,
    RandomPlacer,
    neighbor_positions,
    validate_dimensions,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

VisibilityGrid = Tuple[Tuple[CellVisibility, ...], ...]


class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        validate_dimensions(self.rows, self.cols, self.num_mines)

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.num_mines


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
ADVANCED = BoardConfig(16, 30, 99)

PRESETS: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "advanced": ADVANCED,
}


def get_preset(name: str) -> BoardConfig:
    """Look up a preset difficulty by (case-insensitive) name."""
    try:
        return PRESETS[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown preset {name!r} (choose from {', '.join(PRESETS)})"
        ) from None


# ============================================================================
# Board Class
# ============================================================================

@dataclass(frozen=True)
class Board:
    """
    Immutable Minesweeper game board.

    Holds dimensions, the lazily created mine layout, per-cell
    visibility and derived counters. ``reveal``, ``toggle_flag`` and
    ``chord`` return a new board, or ``self`` when the action has no
    effect.

    The first mine struck in a game is forgiven: only that cell is
    revealed. The second strike reveals every mine and loses the game.
    """

    rows: int
    cols: int
    mine_count: int
    placer: MinePlacer = field(
        default_factory=RandomPlacer, compare=False, repr=False
    )
    layout: Optional[Layout] = field(default=None, repr=False)
    visibility: Optional[VisibilityGrid] = field(default=None, repr=False)
    lost: bool = False
    revealed_count: int = 0
    flagged_count: int = 0
    mine_hits: int = 0

    def __post_init__(self) -> None:
        """Validate dimensions and create the all-hidden grid."""
        validate_dimensions(self.rows, self.cols, self.mine_count)
        if self.placer is None:
            raise ConfigurationError("A mine placer is required")
        if self.visibility is None:
            hidden = tuple(
                tuple(CellVisibility.HIDDEN for _ in range(self.cols))
                for _ in range(self.rows)
            )
            object.__setattr__(self, "visibility", hidden)

    @classmethod
    def from_config(
        cls,
        config: BoardConfig,
        placer: Optional[MinePlacer] = None,
        seed: Optional[int] = None,
    ) -> "Board":
        """
        Create a fresh board from a configuration.

        Args:
            config: Board dimensions and mine count.
            placer: Mine placement strategy (default: RandomPlacer).
            seed: Seed for the default placer.
        """
        if placer is None:
            placer = RandomPlacer(seed=seed)
        return cls(config.rows, config.cols, config.num_mines, placer)

    # ========================================================================
    # Grid Utilities (Low-level)
    # ========================================================================

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def neighbors(self, row: int, col: int) -> List[Position]:
        """Get valid neighboring cell positions."""
        return neighbor_positions(row, col, self.rows, self.cols)

    def _check_position(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(
                f"Position ({row}, {col}) outside {self.rows}x{self.cols} board"
            )

    def _thaw(self) -> List[List[CellVisibility]]:
        """Copy the visibility grid into a mutable scratch grid."""
        return [list(line) for line in self.visibility]

    @staticmethod
    def _freeze(grid: List[List[CellVisibility]]) -> VisibilityGrid:
        return tuple(tuple(line) for line in grid)

    # ========================================================================
    # Queries
    # ========================================================================

    @property
    def has_layout(self) -> bool:
        """Check if mines have been placed."""
        return self.layout is not None

    def is_mine(self, row: int, col: int) -> bool:
        """Check if a cell holds a mine (False before placement)."""
        self._check_position(row, col)
        return self.layout is not None and self.layout[row][col] == MINE

    def adjacent_mines(self, row: int, col: int) -> int:
        """
        Get the stored layout value for a cell.

        Returns:
            0 before placement, -1 for a mine, otherwise the number of
            neighboring mines.
        """
        self._check_position(row, col)
        if self.layout is None:
            return 0
        return self.layout[row][col]

    def visible_at(self, row: int, col: int) -> CellVisibility:
        """Get the visibility of a cell."""
        self._check_position(row, col)
        return self.visibility[row][col]

    @property
    def is_lost(self) -> bool:
        return self.lost

    @property
    def is_won(self) -> bool:
        return not self.lost and self.revealed_count == self.safe_cells

    @property
    def is_playing(self) -> bool:
        return not self.is_lost and not self.is_won

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        if self.lost:
            return GameState.LOST
        if self.is_won:
            return GameState.WON
        return GameState.PLAYING

    @property
    def total_mines(self) -> int:
        return self.mine_count

    @property
    def safe_cells(self) -> int:
        """Number of non-mine cells that must be revealed to win."""
        return self.rows * self.cols - self.mine_count

    def count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        return sum(
            1 for n_row, n_col in self.neighbors(row, col)
            if self.visibility[n_row][n_col].is_flagged
        )

    def can_chord(self, row: int, col: int) -> bool:
        """Check if chording at position would be accepted."""
        if self.lost or self.layout is None:
            return False
        if not self.in_bounds(row, col):
            return False
        if not self.visibility[row][col].is_revealed:
            return False
        required = self.layout[row][col]
        if required <= 0:
            return False
        return self.count_adjacent_flags(row, col) == required

    def hidden_cells(self) -> List[Position]:
        """Get positions of all hidden (unflagged, unrevealed) cells."""
        return [
            (row, col)
            for row in range(self.rows)
            for col in range(self.cols)
            if self.visibility[row][col].is_hidden
        ]

    def observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.full((self.rows, self.cols), -1, dtype=np.int8)
        for row in range(self.rows):
            for col in range(self.cols):
                state = self.visibility[row][col]
                if state.is_flagged:
                    obs[row, col] = -2
                elif state.is_revealed:
                    value = self.layout[row][col]
                    obs[row, col] = 9 if value == MINE else value
        return obs

    def render(self) -> str:
        """Render board as ASCII string."""
        lines = []
        for row in range(self.rows):
            row_str = ""
            for col in range(self.cols):
                state = self.visibility[row][col]
                if state.is_hidden:
                    row_str += "."
                elif state.is_flagged:
                    row_str += "F"
                elif self.layout[row][col] == MINE:
                    row_str += "*"
                elif self.layout[row][col] == 0:
                    row_str += " "
                else:
                    row_str += str(self.layout[row][col])
                row_str += " "
            lines.append(row_str)
        return "\n".join(lines)

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> "Board":
        """
        Reveal a cell at the given position.

        On first reveal, places mines with this cell as the safe cell.
        A safe cell opens its connected zero region; a mine is either
        forgiven (first strike) or loses the game.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            The next board, or self if nothing changed.
        """
        if self.lost or not self.in_bounds(row, col):
            return self
        if not self.visibility[row][col].is_hidden:
            return self

        if self.layout is None:
            return self._with_layout(row, col).reveal(row, col)

        if self.layout[row][col] == MINE:
            return self._strike_mine(row, col)

        return self._flood_reveal(row, col)

    def toggle_flag(self, row: int, col: int) -> "Board":
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The next board, or self if the cell cannot be flagged.
        """
        if self.lost or not self.in_bounds(row, col):
            return self
        current = self.visibility[row][col]
        if current.is_revealed:
            return self

        grid = self._thaw()
        if current.is_flagged:
            grid[row][col] = CellVisibility.HIDDEN
            flagged = max(0, self.flagged_count - 1)
        else:
            grid[row][col] = CellVisibility.FLAGGED
            flagged = self.flagged_count + 1

        return replace(
            self, visibility=self._freeze(grid), flagged_count=flagged
        )

    def chord(self, row: int, col: int) -> "Board":
        """
        Chord action: reveal all hidden neighbors if flag count matches.

        Each neighbor goes through ``reveal`` in turn, so forgiveness,
        losses and cascades apply exactly as for a direct reveal.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The next board, or self if the chord is not allowed.
        """
        if not self.can_chord(row, col):
            return self

        hidden = [
            (n_row, n_col) for n_row, n_col in self.neighbors(row, col)
            if self.visibility[n_row][n_col].is_hidden
        ]

        board = self
        for n_row, n_col in hidden:
            board = board.reveal(n_row, n_col)
        return board

    # ========================================================================
    # Transitions (Internal)
    # ========================================================================

    def _with_layout(self, safe_row: int, safe_col: int) -> "Board":
        """Materialize the mine layout around the first clicked cell."""
        layout = self.placer.place_mines(
            self.rows, self.cols, self.mine_count, safe_row, safe_col
        )
        layout = tuple(tuple(line) for line in layout)
        if len(layout) != self.rows or any(
            len(line) != self.cols for line in layout
        ):
            raise ConfigurationError(
                f"Placer returned a layout of the wrong shape for "
                f"{self.rows}x{self.cols}"
            )
        placed = sum(1 for line in layout for value in line if value == MINE)
        if placed != self.mine_count:
            raise ConfigurationError(
                f"Placer returned {placed} mines, expected {self.mine_count}"
            )
        return replace(self, layout=layout)

    def _strike_mine(self, row: int, col: int) -> "Board":
        """Handle a reveal that landed on a mine."""
        if self.mine_hits > 0:
            logger.debug("Mine struck at (%d, %d): game lost", row, col)
            return self._reveal_all_mines()

        logger.debug("Mine struck at (%d, %d): forgiven", row, col)
        grid = self._thaw()
        flagged = self.flagged_count
        if grid[row][col].is_flagged:
            flagged = max(0, flagged - 1)
        grid[row][col] = CellVisibility.REVEALED
        return replace(
            self,
            visibility=self._freeze(grid),
            flagged_count=flagged,
            mine_hits=self.mine_hits + 1,
        )

    def _reveal_all_mines(self) -> "Board":
        """Reveal every mine and end the game."""
        grid = self._thaw()
        flagged = self.flagged_count
        for row in range(self.rows):
            for col in range(self.cols):
                if self.layout[row][col] != MINE:
                    continue
                if grid[row][col].is_flagged:
                    flagged = max(0, flagged - 1)
                grid[row][col] = CellVisibility.REVEALED

        return replace(
            self,
            visibility=self._freeze(grid),
            lost=True,
            flagged_count=flagged,
            mine_hits=self.mine_hits + 1,
        )

    def _flood_reveal(self, row: int, col: int) -> "Board":
        """
        Open the connected region around a safe cell.

        Zero cells propagate to all their neighbors; numbered cells are
        opened but stop the spread. Mines bordering any opened cell are
        then shown without ending the game or counting as revealed.
        """
        grid = self._thaw()
        opened: List[Position] = []
        queue = deque([(row, col)])

        while queue:
            cur_row, cur_col = queue.popleft()
            if not grid[cur_row][cur_col].is_hidden:
                continue
            grid[cur_row][cur_col] = CellVisibility.REVEALED
            opened.append((cur_row, cur_col))
            if self.layout[cur_row][cur_col] == 0:
                queue.extend(self.neighbors(cur_row, cur_col))

        flagged = self.flagged_count
        bordering_mines = {
            (n_row, n_col)
            for cur_row, cur_col in opened
            for n_row, n_col in self.neighbors(cur_row, cur_col)
            if self.layout[n_row][n_col] == MINE
        }
        for mine_row, mine_col in bordering_mines:
            state = grid[mine_row][mine_col]
            if state.is_revealed:
                continue
            if state.is_flagged:
                flagged = max(0, flagged - 1)
            grid[mine_row][mine_col] = CellVisibility.REVEALED

        return replace(
            self,
            visibility=self._freeze(grid),
            revealed_count=self.revealed_count + len(opened),
            flagged_count=flagged,
        )
