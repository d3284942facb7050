from __future__ import annotations

import io
from typing import Iterable

from checkers import MoveGenerator, RulesEngine, Side
from checkers.console import ConsoleGame, render_board
from checkers.log import make_console


def scripted(lines: Iterable[str]):
    pending = list(lines)

    def read(prompt: str = "") -> str:
        if not pending:
            raise EOFError
        return pending.pop(0)

    return read


def make_game(lines, engine=None, opponent=None):
    out = io.StringIO()
    console = make_console(file=out, width=100, color_system=None)
    game = ConsoleGame(engine, opponent, console=console, input_fn=scripted(lines))
    return game, out


def test_render_board():
    lines = render_board(RulesEngine().get_board()).splitlines()
    assert lines[0] == "   a b c d e f g h"
    assert lines[1] == "1 |_|X|_|X|_|X|_|X|"
    assert lines[4] == "4 |_|_|_|_|_|_|_|_|"
    assert lines[8] == "8 |O|_|O|_|O|_|O|_|"
    assert len(lines) == 9


def test_two_players_take_turns():
    game, out = make_game(["3b-4a", "6a-5b"])
    assert game.run() is None
    text = out.getvalue()
    assert "You are playing against another player." in text
    assert text.count("Move successful!") == 2
    assert game.engine.get_current_side() is Side.X


def test_malformed_and_illegal_input():
    game, out = make_game(["hello", "3b-2a", "3b-4a"])
    game.run()
    text = out.getvalue()
    assert "Invalid input. Please use the format: '3a-4b'." in text
    assert "Invalid move. Try again." in text
    assert "Move successful!" in text


def test_computer_replies_without_reapplying(first_choice):
    engine = RulesEngine()
    opponent = MoveGenerator(engine, Side.O, first_choice)
    game, out = make_game(["3b-4a"], engine=engine, opponent=opponent)
    game.run()
    text = out.getvalue()
    assert "playing against the computer (Player O)" in text
    assert "Computer's move: 6a-5b" in text
    assert engine.count_pieces(Side.O) == 12
    assert engine.get_current_side() is Side.X


def test_game_over_announces_winner():
    engine = RulesEngine(
        """
        ________
        ________
        _X______
        __O_____
        ________
        ________
        ________
        ________
        """
    )
    game, out = make_game(["3b-5d"], engine=engine)
    assert game.run() is Side.X
    assert "Game over! Player X wins!" in out.getvalue()


def test_chain_capture_prompts_same_side():
    engine = RulesEngine(
        """
        ________
        ________
        _X______
        __O_____
        ________
        ____O___
        ________
        O_______
        """
    )
    game, out = make_game(["3b-5d", "5d-7f"], engine=engine)
    game.run()
    text = out.getvalue()
    assert "Capture again with the same piece!" in text
    assert text.count("Player X's turn") == 2
    assert engine.get_current_side() is Side.O
