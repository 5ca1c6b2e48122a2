"""Command-line interface for Palace."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import ValidationError

from palace_engine.config import ENV_PREFIX, GameConfig
from palace_engine.engine import GameEngine
from palace_engine.state import MAX_PLAYERS, MIN_PLAYERS
from responders.terminal import TerminalResponder

if TYPE_CHECKING:
    from palace_engine.engine import GameResult

logger = logging.getLogger(__name__)


def ask_player_count() -> int | None:
    """Prompt for the number of players. None means setup was cancelled."""
    try:
        response = input(f"How many players? ({MIN_PLAYERS}-{MAX_PLAYERS}) ").strip()
    except EOFError:
        return None
    if not response:
        return None
    try:
        return int(response)
    except ValueError:
        return -1


def play_interactive(config: GameConfig) -> GameResult:
    """Play a hot-seat game in the terminal."""
    engine = GameEngine(TerminalResponder(), player_count=config.player_count, seed=config.seed)

    print("\nWelcome to Palace!")
    print("Tens clear the pile, sevens reverse, twos reset. Type 'q' to quit.\n")
    return engine.run()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Palace card game")
    parser.add_argument("--players", type=int, help=f"Number of players ({MIN_PLAYERS}-{MAX_PLAYERS})")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--log-level", help="Logging level (default WARNING)")
    args = parser.parse_args(argv)

    load_dotenv()
    players = args.players
    if players is None and not os.environ.get(ENV_PREFIX + "PLAYERS"):
        players = ask_player_count()
        if players is None:
            print("Game setup cancelled.")
            return 0

    try:
        config = GameConfig.from_env(player_count=players, seed=args.seed, log_level=args.log_level)
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug(f"Config: {config}")

    try:
        play_interactive(config)
    except KeyboardInterrupt:
        print("\nStopped.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
