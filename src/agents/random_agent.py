"""
Random agent for Minesweeper.

Serves as a baseline by revealing random hidden cells.
"""
from typing import Optional

import numpy as np

from .base_agent import BaseAgent


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """
    Agent that reveals hidden cells uniformly at random.

    Only reveal actions are considered while any is valid; otherwise
    the agent falls back to any valid action.
    """

    def __init__(
        self,
        board_rows: int = 9,
        board_cols: int = 9,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the random agent.

        Args:
            board_rows: Number of rows in the board.
            board_cols: Number of columns in the board.
            seed: Random seed for reproducibility.
        """
        super().__init__(board_rows, board_cols)
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select a random valid action, preferring reveals.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Random action index from valid actions.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        reveal_indices = np.where(valid_actions[: self.total_cells])[0]
        if len(reveal_indices) > 0:
            return int(self.rng.choice(reveal_indices))

        valid_indices = np.where(valid_actions)[0]
        if len(valid_indices) == 0:
            # No valid actions, return any action (will be a no-op)
            return 0

        return int(self.rng.choice(valid_indices))
