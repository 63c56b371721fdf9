"""
Cell visibility for the Minesweeper board.

The board owns every transition between these states; the enum only
answers what a cell currently looks like to the player.
"""
from enum import Enum, auto


# ============================================================================
# Constants
# ============================================================================

class CellVisibility(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self is CellVisibility.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self is CellVisibility.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self is CellVisibility.FLAGGED
