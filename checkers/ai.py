from __future__ import annotations

import logging
import random
from typing import List, Optional, Protocol, Sequence, Tuple, TypeVar

from .game import BOARD_SIZE, Move, RulesEngine, Side
from .notation import format_move

logger = logging.getLogger(__name__)

T = TypeVar("T")

JUMP_STEPS: Tuple[Tuple[int, int], ...] = ((-2, -2), (-2, 2), (2, -2), (2, 2))


class RandomSource(Protocol):
    def choice(self, seq: Sequence[T]) -> T: ...


class MoveGenerator:
    """Random opponent for one side.

    Captures are mandatory: when any capture is available one of them is
    picked, otherwise a simple move. The chosen move is applied to the engine
    before its notation is returned. Chain captures are left to the caller,
    which should call ``choose_move`` again while this side keeps the turn.
    """

    def __init__(
        self,
        engine: RulesEngine,
        side: Side = Side.O,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.engine = engine
        self.side = side
        self.rng: RandomSource = rng if rng is not None else random.Random()

    def choose_move(self) -> str:
        """Apply one move for ``self.side`` and return it as e.g. ``"6b-5a"``.

        Returns an empty string when no move is available.
        """
        simple_moves, captures = self.candidate_moves()
        if captures:
            move = self.rng.choice(captures)
        elif simple_moves:
            move = self.rng.choice(simple_moves)
        else:
            logger.info("No move available for %s", self.side.value)
            return ""

        applied = self.engine.apply_move(move.start_row, move.start_col, move.end_row, move.end_col)
        if not applied:
            # Candidates are pre-checked with is_legal_move, so this is unreachable
            # unless the engine was changed underneath us.
            logger.warning("Engine rejected generated move %s", format_move(move))
            return ""

        notation = format_move(move)
        logger.debug(
            "%s plays %s (%d captures, %d simple moves available)",
            self.side.value,
            notation,
            len(captures),
            len(simple_moves),
        )
        return notation

    def candidate_moves(self) -> Tuple[List[Move], List[Move]]:
        """Scan the board and return (simple moves, captures) the engine would accept."""
        engine = self.engine
        board = engine.get_board()
        own = self.side.cell
        forward = self.side.forward
        simple_moves: List[Move] = []
        captures: List[Move] = []

        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if board[row][col] is not own:
                    continue
                for col_step in (-1, 1):
                    end_row, end_col = row + forward, col + col_step
                    if engine.is_valid_move(row, col, end_row, end_col):
                        simple_moves.append(Move(row, col, end_row, end_col))
                for row_step, col_step in JUMP_STEPS:
                    end_row, end_col = row + row_step, col + col_step
                    if engine.is_valid_jump(row, col, end_row, end_col):
                        captures.append(Move(row, col, end_row, end_col))

        # Backward jumps pass is_valid_jump but apply_move refuses them, and
        # nothing is legal when it is not this side's turn.
        chain = engine.chain_square
        if chain is not None:
            # Mid-chain only the piece that just captured may move.
            simple_moves = [m for m in simple_moves if m.start == chain]
            captures = [m for m in captures if m.start == chain]
        simple_moves = [m for m in simple_moves if engine.is_legal_move(*m.start, *m.end)]
        captures = [m for m in captures if engine.is_legal_move(*m.start, *m.end)]
        return simple_moves, captures
