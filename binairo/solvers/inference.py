"""One-ply inference used to suggest a move to a human player."""

from __future__ import annotations
from typing import Iterator, List, Optional

from ..core.board import BinairoBoard, BINARY_VALUES
from ..core.constraints import is_value_consistent
from ..core.moves import Move


def iter_forced_moves(board: BinairoBoard) -> Iterator[Move]:
    """
    Yield every empty cell that only one value fits, in row-major order.

    A value fits when placing it keeps R1 at the cell and the partial R2
    limit on its row and column. The board's domains are not consulted.
    """
    for row, col in board.get_empty_cells():
        fitting = [v for v in BINARY_VALUES if is_value_consistent(board, row, col, v)]
        if len(fitting) == 1:
            yield Move(row, col, int(fitting[0]))


def find_forced_moves(board: BinairoBoard) -> List[Move]:
    return list(iter_forced_moves(board))


def suggest_move(board: BinairoBoard) -> Optional[Move]:
    """Return the first forced move, or None if no cell is forced."""
    return next(iter_forced_moves(board), None)
