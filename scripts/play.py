#!/usr/bin/env python3
"""
Dots and Boxes CLI - Play a match in the terminal.

Usage:
    python scripts/play.py
    python scripts/play.py --size 3 --players "Alice,Bob"
    python scripts/play.py --players Alice --ai Bot:hard
    python scripts/play.py --players "" --ai Easy:easy --ai Hard:hard --seed 7
    python scripts/play.py --size 7 --players Alice --ai Sarah:medium --ai Mike:hard --ai Alex:easy

Players:
    --players   Comma-separated human player names (moves typed on stdin)
    --ai        Computer player as NAME:DIFFICULTY (repeatable)

Difficulties:
    easy    - Completes boxes when it can, otherwise random
    medium  - Never gives a box away while a safe line exists
    hard    - Like medium, and sacrifices the fewest boxes when forced

Lines are typed as h:ROW:COL (horizontal) or v:ROW:COL (vertical).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotsboxes.board import render_board, render_scores  # noqa: E402
from dotsboxes.config import (  # noqa: E402
    AI_AVATARS,
    DEFAULT_GRID_SIZE,
    DIFFICULTIES,
    LOG_LEVEL,
    PLAYER_COLORS,
    SAVES_DIR,
)
from dotsboxes.game import GameEngine, GameState, InvalidConfiguration, Player, dumps  # noqa: E402
from dotsboxes.game.errors import AgentSelectionError  # noqa: E402
from dotsboxes.game.rules import describe_result  # noqa: E402


def parse_ai(value: str) -> tuple[str, str]:
    """Parse NAME:DIFFICULTY for --ai."""
    name, _, difficulty = value.partition(":")
    difficulty = difficulty or "medium"
    if not name or difficulty not in DIFFICULTIES:
        raise argparse.ArgumentTypeError(
            f"expected NAME:DIFFICULTY with difficulty in {', '.join(DIFFICULTIES)}"
        )
    return name, difficulty


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Play Dots and Boxes in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--size",
        type=int,
        default=DEFAULT_GRID_SIZE,
        help=f"Boxes per side (default: {DEFAULT_GRID_SIZE})",
    )
    parser.add_argument(
        "--players",
        type=str,
        default="You",
        help="Comma-separated human player names (default: You)",
    )
    parser.add_argument(
        "--ai",
        type=parse_ai,
        action="append",
        default=None,
        metavar="NAME:DIFFICULTY",
        help="Add a computer player (default: Bot:medium)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for computer players",
    )
    parser.add_argument(
        "--save",
        type=Path,
        default=None,
        help=f"Write the final state as JSON to this path (relative paths go to {SAVES_DIR})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args()


def build_roster(human_names: str, ai_specs: list[tuple[str, str]] | None) -> list[Player]:
    """Humans first, then computer players, in seat order."""
    names = [n.strip() for n in human_names.split(",") if n.strip()]
    if ai_specs is None:
        ai_specs = [("Bot", "medium")]

    players = [Player(id=f"p{i + 1}", name=name) for i, name in enumerate(names)]
    for name, difficulty in ai_specs:
        seat = len(players)
        players.append(
            Player(
                id=f"p{seat + 1}",
                name=name,
                avatar=AI_AVATARS[seat % len(AI_AVATARS)],
                is_ai=True,
                difficulty=difficulty,
            )
        )
    for seat, player in enumerate(players):
        player.color = PLAYER_COLORS[seat % len(PLAYER_COLORS)]
    return players


def show(state: GameState) -> None:
    """Print the board after every move."""
    if state.history:
        print(f"\n{state.history[-1] if not state.is_game_over else state.history[-2]}")
    print(render_board(state))
    print(render_scores(state))


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Set up logging
    log_level = logging.DEBUG if args.verbose else getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    players = build_roster(args.players, args.ai)
    engine = GameEngine(seed=args.seed)
    engine.subscribe(show)

    print("\n" + "=" * 60)
    print("Dots and Boxes")
    print("=" * 60)
    print(f"  Grid:    {args.size}x{args.size}")
    for p in players:
        kind = f"computer ({p.difficulty})" if p.is_ai else "human"
        print(f"  {p.name}: {kind}")
    print("=" * 60 + "\n")

    try:
        engine.start(args.size, players)
        state = engine.run()
    except InvalidConfiguration as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except AgentSelectionError as e:
        print(f"Internal error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user")
        return 130  # Standard exit code for Ctrl+C

    # Print results
    print("\n" + "=" * 60)
    print(describe_result(state))
    print("=" * 60)

    print("\nMove history:")
    for i, entry in enumerate(state.history, 1):
        print(f"  {i:3}. {entry}")

    if args.save:
        path = args.save if args.save.is_absolute() else SAVES_DIR / args.save
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dumps(state), encoding="utf-8")
        print(f"\nSaved final state to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
