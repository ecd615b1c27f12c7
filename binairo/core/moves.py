"""Moves, rule-by-rule move validation and manual entry parsing."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from .board import CellValue
from .constraints import (
    has_duplicate_col,
    has_duplicate_row,
    is_balanced,
    is_globally_valid,
    is_locally_valid,
    is_partially_balanced,
)

if TYPE_CHECKING:
    from .board import BinairoBoard


@dataclass(frozen=True)
class Move:
    """Placement of a 0 or 1 at a 0-based (row, col) position."""
    row: int
    col: int
    value: int

    @classmethod
    def from_one_based(cls, row: int, col: int, value: int) -> Move:
        """Build a move from 1-based coordinates, as typed by a player."""
        return cls(row - 1, col - 1, value)

    def check_bounds(self, size: int) -> None:
        """Raise ValueError if the move does not fit a size x size grid."""
        if not (0 <= self.row < size and 0 <= self.col < size):
            raise ValueError(
                f"Position ({self.row + 1}, {self.col + 1}) is outside the {size}x{size} grid"
            )
        if self.value not in (CellValue.ZERO, CellValue.ONE):
            raise ValueError(f"Value must be 0 or 1, got {self.value}")

    def __str__(self) -> str:
        return f"({self.row + 1}, {self.col + 1}) = {self.value}"


class Role(Enum):
    """Who is making a move."""
    HUMAN = "human"
    SOLVER = "solver"


class Rule(Enum):
    """Rule families a move can break, in the order they are checked."""
    OCCUPIED = "occupied"
    TRIPLE = "R1"
    ROW_LIMIT = "R2-row-limit"
    COL_LIMIT = "R2-col-limit"
    ROW_BALANCE = "R2-row"
    ROW_DUPLICATE = "R3-row"
    COL_BALANCE = "R2-col"
    COL_DUPLICATE = "R3-col"
    INCONSISTENT = "general"

    @property
    def description(self) -> str:
        """Human-readable explanation of the violation."""
        descriptions = {
            Rule.OCCUPIED: "The cell already holds a value.",
            Rule.TRIPLE: "R1 (Triple): at most two identical digits side by side.",
            Rule.ROW_LIMIT: "R2 (Row balance): the row already holds more than N/2 of a digit.",
            Rule.COL_LIMIT: "R2 (Column balance): the column already holds more than N/2 of a digit.",
            Rule.ROW_BALANCE: "R2 (Final row balance): a full row must hold N/2 of each digit.",
            Rule.ROW_DUPLICATE: "R3 (Row uniqueness): the row is identical to another complete row.",
            Rule.COL_BALANCE: "R2 (Final column balance): a full column must hold N/2 of each digit.",
            Rule.COL_DUPLICATE: "R3 (Column uniqueness): the column is identical to another complete column.",
            Rule.INCONSISTENT: "General: the grid becomes inconsistent elsewhere.",
        }
        return descriptions[self]


def find_violation(board: BinairoBoard, row: int, col: int) -> Optional[Rule]:
    """
    Report the first rule broken by the value currently at (row, col).

    Checks R1, then partial R2 on the row and the column, then final R2
    and R3 on the row and column if they are complete, and finally the
    global consistency of the whole grid.

    A complete line that passes the partial limit of ceil(N/2) per value
    already holds exactly N/2 of each, so ROW_BALANCE and COL_BALANCE are
    never the first rule reported while the limit checks run first.

    Returns:
        The first violated rule, or None if the placement is admissible.
    """
    if not is_locally_valid(board, row, col):
        return Rule.TRIPLE
    if not is_partially_balanced(board, row, True):
        return Rule.ROW_LIMIT
    if not is_partially_balanced(board, col, False):
        return Rule.COL_LIMIT

    if board.is_row_complete(row):
        if not is_balanced(board, row, True):
            return Rule.ROW_BALANCE
        if has_duplicate_row(board, row):
            return Rule.ROW_DUPLICATE

    if board.is_col_complete(col):
        if not is_balanced(board, col, False):
            return Rule.COL_BALANCE
        if has_duplicate_col(board, col):
            return Rule.COL_DUPLICATE

    if not is_globally_valid(board):
        return Rule.INCONSISTENT
    return None


def apply_move(
    board: BinairoBoard, move: Move, role: Role = Role.HUMAN
) -> Tuple[Optional[BinairoBoard], Optional[Rule]]:
    """
    Play a move on a copy of the board.

    Coordinates and value must already be in range (see Move.check_bounds).
    A human may only fill empty cells; the solver may overwrite.

    Returns:
        (new board, None) on success, (None, violated rule) otherwise.
        The input board is never modified.
    """
    if role is Role.HUMAN and not board.is_empty(move.row, move.col):
        return None, Rule.OCCUPIED

    next_board = board.copy()
    next_board.set(move.row, move.col, move.value)
    rule = find_violation(next_board, move.row, move.col)
    if rule is not None:
        return None, rule
    return next_board, None


def validate_move(board: BinairoBoard, move: Move, role: Role = Role.HUMAN) -> Optional[Rule]:
    """Return the rule the move would break, or None if it is legal."""
    _, rule = apply_move(board, move, role)
    return rule


def find_invalid_given(board: BinairoBoard) -> Optional[Tuple[Move, Rule]]:
    """
    Re-check every given of a grid as if it had just been placed.

    Returns:
        The first offending given (row-major) with its rule, or None.
    """
    for row in range(board.size):
        for col in range(board.size):
            if board.is_empty(row, col):
                continue
            rule = find_violation(board, row, col)
            if rule is not None:
                return Move(row, col, int(board.get(row, col))), rule
    return None


def parse_moves(text: str, size: int) -> List[Move]:
    """
    Parse whitespace-separated 'row col value' triples (1-based).

    Args:
        text: e.g. "1 1 0  1 2 1  2 3 0".
        size: Grid size used to check the coordinates.

    Raises:
        ValueError: If the text is not made of integer triples or a move
                    is out of range.
    """
    tokens = text.split()
    if len(tokens) % 3 != 0:
        raise ValueError("Moves must be given as 'row col value' triples")

    try:
        numbers = [int(t) for t in tokens]
    except ValueError:
        raise ValueError(f"Moves must be integers, got {text!r}") from None

    moves = []
    for i in range(0, len(numbers), 3):
        move = Move.from_one_based(*numbers[i:i + 3])
        move.check_bounds(size)
        moves.append(move)
    return moves
