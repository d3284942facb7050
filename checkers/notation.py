"""Text notation for moves: 1-indexed row digit plus column letter, e.g. ``3a-4b``."""

from __future__ import annotations

import re
from typing import Tuple

from .game import Move

MOVE_PATTERN = re.compile(r"^[1-8][a-h]-[1-8][a-h]$")
COLUMNS = "abcdefgh"


def square_name(row: int, col: int) -> str:
    return f"{row + 1}{COLUMNS[col]}"


def format_move(move: Move) -> str:
    return f"{square_name(move.start_row, move.start_col)}-{square_name(move.end_row, move.end_col)}"


def parse_square(text: str) -> Tuple[int, int]:
    return int(text[0]) - 1, COLUMNS.index(text[1])


def parse_move(text: str) -> Move:
    text = text.strip()
    if not MOVE_PATTERN.match(text):
        raise ValueError(f"Invalid move notation: {text!r} (expected e.g. '3a-4b')")
    start, end = text.split("-")
    start_row, start_col = parse_square(start)
    end_row, end_col = parse_square(end)
    return Move(start_row, start_col, end_row, end_col)
