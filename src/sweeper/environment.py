"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface over the immutable board. The
environment is the controller: it holds the current board and swaps
in the value returned by each action.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, GameState
from .placer import MinePlacer, RandomPlacer


# ============================================================================
# Actions and Rewards
# ============================================================================

class ActionType(IntEnum):
    """Player intents, in action-space order."""

    REVEAL = 0
    FLAG = 1
    CHORD = 2


def encode_action(kind: ActionType, row: int, col: int, cols: int, rows: int) -> int:
    """Convert an intent at (row, col) to a flat action index."""
    return int(kind) * rows * cols + row * cols + col


def decode_action(action: int, cols: int, rows: int) -> Tuple[ActionType, int, int]:
    """Convert a flat action index to (kind, row, col)."""
    kind, cell = divmod(int(action), rows * cols)
    row, col = divmod(cell, cols)
    return ActionType(kind), row, col


@dataclass
class RewardConfig:
    """Reward values handed out by MinesweeperEnv.step."""

    progress: float = 1.0
    flag: float = 0.0
    forgiven: float = -5.0
    win: float = 10.0
    lose: float = -10.0
    invalid: float = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 3 * rows * cols. The first block
        of rows * cols actions reveals, the second toggles flags and
        the third chords. Within a block, index i is the cell at
        (i // cols, i % cols).

    Rewards:
        See RewardConfig. Actions that leave the board unchanged
        receive the ``invalid`` penalty.
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        placer: Optional[MinePlacer] = None,
        rewards: Optional[RewardConfig] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
            placer: Fixed placer used for every episode (default: a
                RandomPlacer seeded from the environment's RNG).
            rewards: Reward values (default: RewardConfig()).
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.rewards = rewards or RewardConfig()
        self._placer = placer

        cells = self.config.rows * self.config.cols
        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(ActionType) * cells)

        self._steps = 0
        self.board = self._new_board()

    def _new_board(self) -> Board:
        placer = self._placer
        if placer is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
            placer = RandomPlacer(seed=seed)
        return Board.from_config(self.config, placer=placer)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.board = self._new_board()
        self._steps = 0

        return self.board.observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat action index (see class docstring).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        kind, row, col = decode_action(action, self.config.cols, self.config.rows)
        self._steps += 1

        previous = self.board
        if kind is ActionType.REVEAL:
            self.board = previous.reveal(row, col)
        elif kind is ActionType.FLAG:
            self.board = previous.toggle_flag(row, col)
        else:
            self.board = previous.chord(row, col)

        reward = self._calculate_reward(previous, self.board, kind)
        terminated = self.board.game_state is not GameState.PLAYING

        return self.board.observation(), reward, terminated, False, self._get_info()

    def _calculate_reward(
        self, previous: Board, current: Board, kind: ActionType
    ) -> float:
        """Score the transition from previous to current board."""
        if current is previous:
            return self.rewards.invalid
        if current.is_lost:
            return self.rewards.lose
        if current.is_won:
            return self.rewards.win
        if current.mine_hits > previous.mine_hits:
            return self.rewards.forgiven
        if kind is ActionType.FLAG:
            return self.rewards.flag
        return self.rewards.progress

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.revealed_count,
            "total_safe": self.board.safe_cells,
            "flagged": self.board.flagged_count,
            "mine_hits": self.board.mine_hits,
            "game_state": self.board.game_state.name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.board.render()
        if self.render_mode == "human":
            print(self.board.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the board.

        Returns:
            Boolean array where True = valid action.
        """
        rows, cols = self.config.rows, self.config.cols
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.board.is_playing:
            return mask

        for row in range(rows):
            for col in range(cols):
                state = self.board.visible_at(row, col)
                if state.is_hidden:
                    mask[encode_action(ActionType.REVEAL, row, col, cols, rows)] = True
                if not state.is_revealed:
                    mask[encode_action(ActionType.FLAG, row, col, cols, rows)] = True
                if self.board.can_chord(row, col) and any(
                    self.board.visible_at(n_row, n_col).is_hidden
                    for n_row, n_col in self.board.neighbors(row, col)
                ):
                    mask[encode_action(ActionType.CHORD, row, col, cols, rows)] = True
        return mask
