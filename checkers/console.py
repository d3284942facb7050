"""Text console front end: reads moves like ``3a-4b`` and prints the board."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from rich.console import Console

from .ai import MoveGenerator
from .game import Board, RulesEngine, Side
from .log import console as default_console
from .notation import COLUMNS, parse_move

logger = logging.getLogger(__name__)


def render_board(board: Board) -> str:
    lines = ["  " + "".join(f" {c}" for c in COLUMNS)]
    for index, row in enumerate(board):
        cells = "".join(f"|{cell.value}" for cell in row)
        lines.append(f"{index + 1} {cells}|")
    return "\n".join(lines)


class ConsoleGame:
    """One game in the terminal, optionally against a ``MoveGenerator``."""

    def __init__(
        self,
        engine: Optional[RulesEngine] = None,
        opponent: Optional[MoveGenerator] = None,
        console: Console = default_console,
        input_fn: Callable[[str], str] = input,
    ) -> None:
        self.engine = engine if engine is not None else RulesEngine()
        self.opponent = opponent
        self.console = console
        self.input_fn = input_fn
        self._stalled_side: Optional[Side] = None

    def run(self) -> Optional[Side]:
        """Play until the game ends; return the winner, or None if input ran out."""
        self.console.print("Welcome to Checkers!")
        if self.opponent is not None:
            human = self.opponent.side.opponent.value
            self.console.print(
                f"You (Player {human}) are playing against the computer (Player {self.opponent.side.value})."
            )
        else:
            self.console.print("You are playing against another player.")
        self.print_board()

        while not self._is_over():
            side = self.engine.get_current_side()
            if self.opponent is not None and side is self.opponent.side:
                self._play_computer()
                self.print_board()
                continue

            self.console.print(f"Player {side.value}'s turn", style=f"side.{side.value.lower()}")
            try:
                text = self.input_fn("Enter your move (e.g., '3a-4b'): ")
            except EOFError:
                logger.info("Input closed; leaving the game")
                return None

            try:
                move = parse_move(text)
            except ValueError:
                self.console.print("Invalid input. Please use the format: '3a-4b'.", style="warning")
                continue

            if not self.engine.apply_move(move.start_row, move.start_col, move.end_row, move.end_col):
                self.console.print("Invalid move. Try again.", style="error")
                continue
            self.console.print("Move successful!", style="success")
            if self.engine.get_current_side() is side and not self.engine.is_game_ended():
                self.console.print("Capture again with the same piece!", style="info")
            self.print_board()

        winner = self._winner()
        self.console.print(f"Game over! Player {winner.value} wins!", style="bold")
        return winner

    def _play_computer(self) -> None:
        assert self.opponent is not None
        while not self.engine.is_game_ended() and self.engine.get_current_side() is self.opponent.side:
            move = self.opponent.choose_move()
            if not move:
                self.console.print("No more forward moves. Computer's turn is over.", style="warning")
                self._stalled_side = self.opponent.side
                return
            self.console.print(f"Computer's move: {move}")

    def _is_over(self) -> bool:
        return self.engine.is_game_ended() or self._stalled_side is not None

    def _winner(self) -> Side:
        if self._stalled_side is not None:
            return self._stalled_side.opponent
        winner = self.engine.winner()
        assert winner is not None
        return winner

    def print_board(self) -> None:
        self.console.print(render_board(self.engine.get_board()), markup=False, highlight=False)
