#!/usr/bin/env python3
"""Watch the Random agent play Minesweeper."""
import argparse
import os
import time
from typing import List, Optional

from agents import RandomAgent
from sweeper import PRESETS, BoardConfig, ConfigurationError, MinesweeperEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(description="Watch the Random agent play")
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="intermediate",
        help="Board difficulty",
    )
    parser.add_argument("--rows", type=int, default=None, help="Custom row count (overrides preset)")
    parser.add_argument("--cols", type=int, default=None, help="Custom column count (overrides preset)")
    parser.add_argument("--mines", type=int, default=None, help="Custom mine count (overrides preset)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    return parser


def resolve_config(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> BoardConfig:
    """
    Build the board configuration from parsed arguments.

    Any of --rows/--cols/--mines replaces the matching preset value.
    Invalid combinations exit through the parser's error path.
    """
    preset = PRESETS[args.preset]
    try:
        return BoardConfig(
            rows=preset.rows if args.rows is None else args.rows,
            cols=preset.cols if args.cols is None else args.cols,
            num_mines=preset.num_mines if args.mines is None else args.mines,
        )
    except ConfigurationError as exc:
        parser.error(str(exc))


def demo(
    config: BoardConfig,
    delay: float = 0.3,
    games: int = 5,
    seed: Optional[int] = None,
):
    """Run demo games with visualization."""
    env = MinesweeperEnv(config=config, render_mode="ansi")
    agent = RandomAgent(config.rows, config.cols, seed=seed)

    print(f"Board: {config.rows}x{config.cols} with {config.num_mines} mines")
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        obs, _ = env.reset(seed=None if seed is None else seed + game)
        agent.reset()

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            valid_actions = env.get_action_mask()
            action = agent.select_action(obs, valid_actions)
            kind, row, col = agent.decode(action)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins} | Mine hits: {info['mine_hits']}")
            print(f"Last move: {kind.name.lower()} ({row}, {col})\n")
            print(env.render())

            if done:
                if info.get("game_state") == "WON":
                    wins += 1
                    print(f"\n*** WIN! ***")
                else:
                    print(f"\n*** LOST (second mine) ***")

            time.sleep(delay)

        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the demo."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = resolve_config(parser, args)
    demo(config, delay=args.delay, games=args.games, seed=args.seed)


if __name__ == "__main__":
    main()
