"""Entry point: pick a front end and an opponent, then start the game."""

from __future__ import annotations

import argparse
import logging
import random
from typing import Callable, Dict, List, Optional

from .ai import MoveGenerator
from .config import Config, load_config
from .console import ConsoleGame
from .game import RulesEngine
from .log import console, setup_logging

logger = logging.getLogger(__name__)

UI_CHOICES = ("console", "gui")
OPPONENT_ANSWERS: Dict[str, bool] = {"P": False, "C": True}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="checkers", description="Forward-only checkers.")
    parser.add_argument("--ui", choices=UI_CHOICES, help="Front end to use (asked if omitted)")
    parser.add_argument(
        "--opponent",
        choices=("player", "computer"),
        help="Play against another player or the computer (asked if omitted)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the computer's random moves")
    parser.add_argument("--config", default=None, help="Path to a TOML config file")
    parser.add_argument("--log-level", default=None, help="Logging level, e.g. DEBUG")
    return parser


def choose_ui(input_fn: Callable[[str], str] = input) -> str:
    while True:
        answer = input_fn("Choose UI: 'GUI' for graphical interface or 'Console' for text-based interface: ")
        answer = answer.strip().lower()
        if answer in UI_CHOICES:
            return answer
        console.print("Invalid UI type. Please enter 'GUI' or 'Console'.", style="warning")


def choose_opponent(input_fn: Callable[[str], str] = input) -> bool:
    while True:
        answer = input_fn("Enter 'P' to play against another player or 'C' to play against the computer: ")
        answer = answer.strip().upper()
        if answer in OPPONENT_ANSWERS:
            return OPPONENT_ANSWERS[answer]
        console.print("Invalid selection. Please enter 'P' or 'C'.", style="warning")


def resolve(args: argparse.Namespace, cfg: Config, input_fn: Callable[[str], str] = input) -> Config:
    """Fold command-line arguments into ``cfg``, asking for anything still unset."""
    if args.seed is not None:
        cfg.opponent.seed = args.seed
    if args.log_level:
        cfg.log_level = args.log_level.upper()
    if args.ui:
        cfg.ui = args.ui
    if args.opponent:
        cfg.opponent_enabled = args.opponent == "computer"
    if cfg.ui is None:
        cfg.ui = choose_ui(input_fn)
    if cfg.opponent_enabled is None:
        cfg.opponent_enabled = choose_opponent(input_fn)
    return cfg


def run_console(cfg: Config, input_fn: Callable[[str], str] = input) -> None:
    engine = RulesEngine()
    opponent: Optional[MoveGenerator] = None
    if cfg.opponent_enabled:
        opponent = MoveGenerator(engine, cfg.opponent.side_enum, random.Random(cfg.opponent.seed))
    ConsoleGame(engine, opponent, console=console, input_fn=input_fn).run()


def run_gui(cfg: Config) -> None:
    from web import create_app

    app = create_app(cfg)
    console.print(f"Open http://{cfg.web.host}:{cfg.web.port}/ to play.", style="info")
    app.run(host=cfg.web.host, port=cfg.web.port, debug=cfg.web.debug)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
    except ValueError as exc:
        console.print(f"Bad configuration: {exc}", style="error")
        return 2
    cfg = resolve(args, cfg)
    setup_logging(cfg.log_level)
    logger.debug("Starting with %s", cfg)

    if cfg.ui == "gui":
        run_gui(cfg)
    else:
        try:
            run_console(cfg)
        except KeyboardInterrupt:
            console.print("\nBye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
