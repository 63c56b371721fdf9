"""
Base agent interface for Minesweeper AI.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from sweeper.environment import ActionType, decode_action, encode_action


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Minesweeper agents.

    All agents must implement the select_action method to choose an
    action (reveal, flag or chord at some cell) from the current
    observation.
    """

    def __init__(self, board_rows: int, board_cols: int) -> None:
        """
        Initialize the agent.

        Args:
            board_rows: Number of rows in the board.
            board_cols: Number of columns in the board.
        """
        self.board_rows = board_rows
        self.board_cols = board_cols
        self.total_cells = board_rows * board_cols

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Flat action index (see MinesweeperEnv).
        """

    def decode(self, action: int) -> Tuple[ActionType, int, int]:
        """Convert flat action index to (kind, row, col)."""
        return decode_action(action, self.board_cols, self.board_rows)

    def encode(self, kind: ActionType, row: int, col: int) -> int:
        """Convert (kind, row, col) to flat action index."""
        return encode_action(kind, row, col, self.board_cols, self.board_rows)

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get a reveal-only valid action mask from an observation.

        Args:
            observation: 2D array of cell states.

        Returns:
            Boolean mask over the full action space where hidden cells
            (value -1) may be revealed.
        """
        mask = np.zeros(len(ActionType) * self.total_cells, dtype=bool)
        mask[: self.total_cells] = observation.flatten() == -1
        return mask

    def reset(self) -> None:
        """Reset agent state for new episode."""

    def update(
        self,
        observation: np.ndarray,
        action: int,
        reward: float,
        next_observation: np.ndarray,
        done: bool,
    ) -> None:
        """
        Update agent with experience (for learning agents).

        Args:
            observation: State before action.
            action: Action taken.
            reward: Reward received.
            next_observation: State after action.
            done: Whether episode ended.
        """
