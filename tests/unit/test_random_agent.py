"""
Unit tests for RandomAgent.

Tests action selection against masks and full games in the environment.
"""
import numpy as np
from agents import RandomAgent
from sweeper import ActionType, BoardConfig, MinesweeperEnv


class TestRandomAgent:
    """Test random action selection."""

    def test_prefers_reveal_actions(self) -> None:
        """Picks only reveal actions when any is valid."""
        agent = RandomAgent(3, 3, seed=0)
        mask = np.ones(27, dtype=bool)
        for _ in range(50):
            kind, _, _ = agent.decode(agent.select_action(None, mask))
            assert kind is ActionType.REVEAL

    def test_falls_back_to_other_actions(self) -> None:
        """Without reveal actions any valid action is used."""
        agent = RandomAgent(3, 3, seed=0)
        mask = np.zeros(27, dtype=bool)
        mask[agent.encode(ActionType.FLAG, 1, 2)] = True
        assert agent.select_action(None, mask) == agent.encode(
            ActionType.FLAG, 1, 2
        )

    def test_mask_from_observation(self) -> None:
        """Hidden cells in the observation become reveal actions."""
        agent = RandomAgent(2, 2, seed=0)
        obs = np.array([[-1, 1], [-2, -1]], dtype=np.int8)
        mask = agent.get_valid_actions_from_obs(obs)
        assert mask.shape == (12,)
        assert list(np.where(mask)[0]) == [0, 3]

    def test_plays_full_games(self) -> None:
        """Random play always reaches a terminal state."""
        env = MinesweeperEnv(BoardConfig(6, 6, 6))
        agent = RandomAgent(6, 6, seed=1)
        for episode in range(5):
            obs, _ = env.reset(seed=episode)
            done = False
            steps = 0
            while not done:
                action = agent.select_action(obs, env.get_action_mask())
                obs, _, done, _, info = env.step(action)
                steps += 1
                assert steps <= 36
            assert info["game_state"] in ("WON", "LOST")
