"""
Minesweeper game module.

Provides the immutable board model, mine placement strategies and a
Gymnasium environment on top of them.
"""
from .cell import CellVisibility
from .placer import (
    MINE,
    ConfigurationError,
    Layout,
    MinePlacer,
    RandomPlacer,
    build_layout,
)
from .board import (
    Board,
    BoardConfig,
    GameState,
    BEGINNER,
    INTERMEDIATE,
    ADVANCED,
    PRESETS,
    get_preset,
)
from .environment import (
    ActionType,
    MinesweeperEnv,
    RewardConfig,
    decode_action,
    encode_action,
)

__all__ = [
    "CellVisibility",
    "MINE",
    "ConfigurationError",
    "Layout",
    "MinePlacer",
    "RandomPlacer",
    "build_layout",
    "Board",
    "BoardConfig",
    "GameState",
    "BEGINNER",
    "INTERMEDIATE",
    "ADVANCED",
    "PRESETS",
    "get_preset",
    "ActionType",
    "MinesweeperEnv",
    "RewardConfig",
    "decode_action",
    "encode_action",
]
