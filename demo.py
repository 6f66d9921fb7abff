#!/usr/bin/env python3
"""Watch random play on the minefield."""
import argparse
import logging
import os
import time
from typing import Optional

import numpy as np

from src.minefield import FieldConfig, MinefieldEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(
    delay: float = 0.3,
    games: int = 5,
    size: int = 8,
    mines: int = 10,
    seed: Optional[int] = None,
):
    """Run demo games, picking uniformly among hidden cells."""
    config = FieldConfig(width=size, height=size, mine_count=mines)
    env = MinefieldEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(seed)

    print(f"Field: {size}x{size} with {mines} mines ({100*mines/(size*size):.1f}% density)")
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        env.reset(seed=None if seed is None else seed + game)

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            valid_indices = np.where(env.get_action_mask())[0]
            action = int(rng.choice(valid_indices))
            x, y = env.action_to_position(action)

            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Mines left: {info['mines_remaining']}  Time: {info['elapsed']:.1f}s")
            print(f"Last move: ({x}, {y})\n")
            print(env.render())

            if done:
                if info.get("game_state") == "WON":
                    wins += 1
                    print(f"\n*** CLEARED! ***")
                else:
                    print(f"\n*** LOST (hit mine) ***")

            time.sleep(delay)

        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--size", type=int, default=8, help="Field size (NxN)")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines (default: ~15%% of cells)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    mines = args.mines if args.mines is not None else int(args.size * args.size * 0.15)
    demo(delay=args.delay, games=args.games, size=args.size, mines=mines, seed=args.seed)
