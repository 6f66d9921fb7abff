#!/usr/bin/env python3
"""
Minefield - terminal front end.

Usage:
    python main.py play [--preset NAME | --width W --height H --mines N]
    python main.py show [--seed S]
"""
import argparse
import logging
import random
from typing import List, Optional

from src.minefield import (
    PRESETS,
    Coordinate,
    Field,
    FieldConfig,
    Session,
    ToggleFlagResult,
)

logger = logging.getLogger(__name__)

HELP_TEXT = "Commands: r X Y (reveal), f X Y (flag), n (new game), q (quit)"


def build_config(args: argparse.Namespace) -> FieldConfig:
    """Resolve the field configuration from command-line options."""
    preset = PRESETS[args.preset]
    return FieldConfig(
        width=args.width if args.width is not None else preset.width,
        height=args.height if args.height is not None else preset.height,
        mine_count=args.mines if args.mines is not None else preset.mine_count,
    )


def make_rng(seed: Optional[int]) -> Optional[random.Random]:
    return random.Random(seed) if seed is not None else None


def status_line(session: Session) -> str:
    """Text shown above the field, polled after every command."""
    if session.won:
        state = "Cleared!"
    elif session.lost:
        state = "BOOM"
    else:
        state = "Playing"
    seconds = int(session.timer().total_seconds())
    return f"Mines: {session.mines_remaining:>3}  Time: {seconds:>4}s  {state}"


def parse_coordinates(
    words: List[str], session: Session
) -> Optional[Coordinate]:
    """Read 'X Y' from a command, or None if they are not on the grid."""
    if len(words) != 2:
        return None
    try:
        x, y = int(words[0]), int(words[1])
    except ValueError:
        return None
    field = session.field
    if not (0 <= x < field.width and 0 <= y < field.height):
        return None
    return x, y


def play(args: argparse.Namespace) -> None:
    """Play an interactive game on the terminal."""
    config = build_config(args)
    session = Session(config, rng=make_rng(args.seed))

    print(f"Field: {config.width}x{config.height} with {config.mine_count} mines")
    print(HELP_TEXT)

    while True:
        print()
        print(status_line(session))
        print(session.field.render_ascii())

        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue

        command, *rest = line.split()
        if command in ("q", "quit"):
            break
        if command in ("n", "new"):
            session.reset()
            continue
        if command not in ("r", "reveal", "f", "flag"):
            print(HELP_TEXT)
            continue

        coords = parse_coordinates(rest, session)
        if coords is None:
            print(
                f"Expected X Y with 0 <= X < {session.field.width} "
                f"and 0 <= Y < {session.field.height}"
            )
            continue

        if command in ("f", "flag"):
            if session.toggle_flag(*coords) == ToggleFlagResult.NOTHING:
                print("Cannot flag a revealed cell")
            continue

        if session.game_over:
            print("Game over - 'n' starts a new game")
            continue

        result = session.reveal(*coords)
        if result.is_mine:
            print("*** BOOM ***")
        elif result.is_success:
            logger.debug("Revealed %d cells", len(result.cells))
            if session.won:
                print(f"*** CLEARED in {session.timer().total_seconds():.1f}s ***")


def show(args: argparse.Namespace) -> None:
    """Print a freshly populated field with every cell uncovered."""
    config = build_config(args)
    field = Field.new_populated(
        config.width, config.height, config.mine_count, rng=make_rng(args.seed)
    )
    print(field.render_ascii(reveal_all=True))


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield - a minesweeper game for the terminal"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    for name, help_text in (
        ("play", "Play an interactive game"),
        ("show", "Print a populated field"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--preset", choices=sorted(PRESETS), default="default",
            help="Field size and mine count",
        )
        sub.add_argument("--width", type=int, help="Override field width")
        sub.add_argument("--height", type=int, help="Override field height")
        sub.add_argument("--mines", type=int, help="Override mine count")
        sub.add_argument("--seed", type=int, help="Seed for mine placement")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "show":
            show(args)
        else:
            parser.print_help()
    except ValueError as error:
        parser.error(str(error))


if __name__ == "__main__":
    main()
