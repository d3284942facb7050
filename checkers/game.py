from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

BOARD_SIZE = 8
HOME_ROWS = 3


class Side(Enum):
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Side":
        return Side.O if self is Side.X else Side.X

    @property
    def forward(self) -> int:
        """Row step for this side: X advances to higher rows, O to lower rows."""
        return 1 if self is Side.X else -1

    @property
    def cell(self) -> "Cell":
        return Cell.X if self is Side.X else Cell.O


class Cell(Enum):
    EMPTY = "_"
    X = "X"
    O = "O"

    @property
    def side(self) -> Optional[Side]:
        if self is Cell.X:
            return Side.X
        if self is Cell.O:
            return Side.O
        return None


Board = List[List[Cell]]


@dataclass(frozen=True)
class Move:
    start_row: int
    start_col: int
    end_row: int
    end_col: int

    @property
    def start(self) -> Tuple[int, int]:
        return self.start_row, self.start_col

    @property
    def end(self) -> Tuple[int, int]:
        return self.end_row, self.end_col

    @property
    def distance(self) -> int:
        return abs(self.end_row - self.start_row)


def initial_board() -> Board:
    board = [[Cell.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if (row + col) % 2 == 0:
                continue
            if row < HOME_ROWS:
                board[row][col] = Cell.X
            elif row >= BOARD_SIZE - HOME_ROWS:
                board[row][col] = Cell.O
    return board


def parse_position(text: str) -> Board:
    """Build a board from 8 lines of ``X``/``O``/``_`` characters, row 0 first.

    ``.`` is accepted as an empty cell and surrounding whitespace is ignored.
    """
    rows = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if len(rows) != BOARD_SIZE:
        raise ValueError(f"Position must have {BOARD_SIZE} rows, got {len(rows)}")
    board: Board = []
    for index, line in enumerate(rows):
        if len(line) != BOARD_SIZE:
            raise ValueError(f"Row {index} must have {BOARD_SIZE} cells: {line!r}")
        cells: List[Cell] = []
        for char in line:
            if char in ("_", "."):
                cells.append(Cell.EMPTY)
            elif char in ("X", "O"):
                cells.append(Cell(char))
            else:
                raise ValueError(f"Unknown cell {char!r} in row {index}")
        board.append(cells)
    return board


def render_position(board: Board) -> str:
    return "\n".join("".join(cell.value for cell in row) for row in board)


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


class RulesEngine:
    """Owns the checkers board and is the only thing allowed to change it.

    Pieces only ever move forward (X towards row 7, O towards row 0). A capture
    jumps an adjacent opposing piece; if the landed piece can capture again the
    same side keeps the turn and the caller is expected to continue the chain.
    There are no kings.

    Illegal moves are reported by ``apply_move`` returning False and never
    leave a partial change behind.
    """

    def __init__(self, position: Optional[str] = None, current_side: Side = Side.X) -> None:
        self._board: Board = parse_position(position) if position else initial_board()
        self._current_side = current_side
        self._game_ended = False
        self._chain_square: Optional[Tuple[int, int]] = None
        self.check_game_end()

    def apply_move(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        legal, captured = self._validate(start_row, start_col, end_row, end_col)
        if not legal:
            return False

        side = self._current_side
        self._board[end_row][end_col] = side.cell
        self._board[start_row][start_col] = Cell.EMPTY
        is_capture = captured is not None
        if is_capture:
            self._board[captured[0]][captured[1]] = Cell.EMPTY

        if is_capture and self._can_capture_again(end_row, end_col):
            self._chain_square = (end_row, end_col)
            logger.debug("%s keeps the turn to continue capturing from %s", side.value, (end_row, end_col))
        else:
            self._chain_square = None
            self._current_side = side.opponent

        logger.debug(
            "%s moved %s -> %s%s",
            side.value,
            (start_row, start_col),
            (end_row, end_col),
            f" capturing {captured}" if is_capture else "",
        )
        self.check_game_end()
        return True

    def is_legal_move(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        """Dry run of ``apply_move``: True iff that call would be accepted."""
        legal, _ = self._validate(start_row, start_col, end_row, end_col)
        return legal

    def _validate(
        self, start_row: int, start_col: int, end_row: int, end_col: int
    ) -> Tuple[bool, Optional[Tuple[int, int]]]:
        # (legal, captured square). Checks run in a fixed order and stop at
        # the first failure.
        if self._game_ended:
            return self._reject("game has ended")

        side = self._current_side
        if (end_row - start_row) * side.forward <= 0:
            return self._reject("not a forward move")
        if not (in_bounds(start_row, start_col) and in_bounds(end_row, end_col)):
            return self._reject("out of bounds")
        if self._board[start_row][start_col] is not side.cell:
            return self._reject("start is not the mover's piece")

        row_diff = end_row - start_row
        col_diff = end_col - start_col
        if abs(row_diff) != abs(col_diff):
            return self._reject("not diagonal")
        if self._board[end_row][end_col] is not Cell.EMPTY:
            return self._reject("destination occupied")

        distance = abs(row_diff)
        if distance == 1:
            return True, None
        if distance != 2:
            return self._reject(f"distance {distance}")

        mid_row = start_row + row_diff // 2
        mid_col = start_col + col_diff // 2
        if self._board[mid_row][mid_col] is not side.opponent.cell:
            return self._reject("no opposing piece to capture")
        return True, (mid_row, mid_col)

    @staticmethod
    def _reject(reason: str) -> Tuple[bool, None]:
        logger.debug("Move rejected: %s", reason)
        return False, None

    def _can_capture_again(self, row: int, col: int) -> bool:
        # Only the two forward jumps count for continuing a chain, even though
        # is_valid_jump accepts all four diagonals. Backward continuations are
        # reported but not honoured.
        forward = self._current_side.forward
        for col_step in (2, -2):
            if self._jump_available(row, col, 2 * forward, col_step):
                return True
        for col_step in (2, -2):
            if self._jump_available(row, col, -2 * forward, col_step):
                logger.debug(
                    "Backward continuation capture from %s ignored; chains only continue forward",
                    (row, col),
                )
                break
        return False

    def _jump_available(self, row: int, col: int, row_step: int, col_step: int) -> bool:
        end_row, end_col = row + row_step, col + col_step
        if not in_bounds(end_row, end_col):
            return False
        mid = self._board[row + row_step // 2][col + col_step // 2]
        return mid is self._current_side.opponent.cell and self._board[end_row][end_col] is Cell.EMPTY

    def is_valid_move(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        """Read-only simple-move check: bounds, empty destination and one diagonal step.

        Does not look at whose turn it is or at direction.
        """
        return (
            in_bounds(start_row, start_col)
            and in_bounds(end_row, end_col)
            and self._board[end_row][end_col] is Cell.EMPTY
            and abs(start_row - end_row) == 1
            and abs(start_col - end_col) == 1
        )

    def is_valid_jump(self, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        """Read-only capture check: bounds, two diagonal steps, empty landing
        square and an opposing piece (relative to the start piece) in between.

        Does not look at whose turn it is or at direction.
        """
        if not (in_bounds(start_row, start_col) and in_bounds(end_row, end_col)):
            return False
        if abs(start_row - end_row) != 2 or abs(start_col - end_col) != 2:
            return False
        if self._board[end_row][end_col] is not Cell.EMPTY:
            return False
        mover = self._board[start_row][start_col].side
        if mover is None:
            return False
        middle = self._board[(start_row + end_row) // 2][(start_col + end_col) // 2]
        return middle is mover.opponent.cell

    def check_game_end(self) -> bool:
        """Recompute the end-of-game flag; once set it stays set."""
        if self._game_ended:
            return True
        x_pieces = self.count_pieces(Side.X)
        o_pieces = self.count_pieces(Side.O)
        side = self._current_side
        if x_pieces == 0 or o_pieces == 0 or not self.has_any_move(side):
            self._game_ended = True
            winner = self.winner()
            logger.info(
                "Game over (X=%d, O=%d, %s to move): %s wins",
                x_pieces,
                o_pieces,
                side.value,
                winner.value if winner else "nobody",
            )
        return self._game_ended

    def count_pieces(self, side: Side) -> int:
        return sum(1 for row in self._board for cell in row if cell is side.cell)

    def has_any_move(self, side: Side) -> bool:
        """Whether ``side`` has a forward simple move or forward capture anywhere."""
        forward = side.forward
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if self._board[row][col] is not side.cell:
                    continue
                for col_step in (-1, 1):
                    if self.is_valid_move(row, col, row + forward, col + col_step):
                        return True
                    if self.is_valid_jump(row, col, row + 2 * forward, col + 2 * col_step):
                        return True
        return False

    def get_board(self) -> Board:
        return [list(row) for row in self._board]

    def get_current_side(self) -> Side:
        return self._current_side

    def is_game_ended(self) -> bool:
        return self._game_ended

    @property
    def chain_square(self) -> Optional[Tuple[int, int]]:
        """Square of the piece expected to continue a capture chain, if any."""
        return self._chain_square

    def winner(self) -> Optional[Side]:
        if not self._game_ended:
            return None
        for side in Side:
            if self.count_pieces(side) == 0:
                return side.opponent
        # Otherwise the side to move is the one left without a move.
        return self._current_side.opponent

    def snapshot(self) -> Dict[str, object]:
        winner = self.winner()
        return {
            "board": ["".join(cell.value for cell in row) for row in self._board],
            "turn": self._current_side.value,
            "game_over": self._game_ended,
            "winner": winner.value if winner else None,
            "chain_square": list(self._chain_square) if self._chain_square else None,
            "pieces": {side.value: self.count_pieces(side) for side in Side},
        }
