"""Forward-only checkers: rules engine, random opponent and front ends.

Modules:
- game: board model and the rules engine that owns the board
- ai: random opponent that prefers captures
- notation: ``3a-4b`` style move text
- console: text console front end
- config / log: TOML configuration and Rich logging
"""

from .game import Board, Cell, Move, RulesEngine, Side
from .ai import MoveGenerator
from .notation import format_move, parse_move

__all__ = [
    "Board",
    "Cell",
    "Move",
    "RulesEngine",
    "Side",
    "MoveGenerator",
    "format_move",
    "parse_move",
]
