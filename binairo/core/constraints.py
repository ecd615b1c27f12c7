"""Constraint predicates for the three Binairo rules.

R1: no three equal symbols adjacent in a row or column.
R2: a complete line holds as many zeros as ones.
R3: no two complete rows (or columns) are identical.

All functions are pure with respect to the board: they read it and
return a boolean, except for the short-lived grid writes done inside
``is_value_consistent``, which are always undone.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Tuple

import numpy as np

from .board import CellValue

if TYPE_CHECKING:
    from .board import BinairoBoard


def is_locally_valid(board: BinairoBoard, row: int, col: int) -> bool:
    """
    Check R1 around (row, col).

    Looks at the three windows of three consecutive cells that contain
    (row, col) in its row, and the three in its column.

    Returns:
        True if the cell is empty or no window is a run of three copies
        of the cell's value.
    """
    grid = board.grid
    size = board.size
    val = grid[row, col]
    if val == CellValue.EMPTY:
        return True

    # Row windows: [c-2, c], [c-1, c+1], [c, c+2]
    for start in range(col - 2, col + 1):
        if start >= 0 and start + 2 < size:
            if grid[row, start] == val and grid[row, start + 1] == val and grid[row, start + 2] == val:
                return False

    # Column windows
    for start in range(row - 2, row + 1):
        if start >= 0 and start + 2 < size:
            if grid[start, col] == val and grid[start + 1, col] == val and grid[start + 2, col] == val:
                return False

    return True


def has_triple(board: BinairoBoard) -> bool:
    """True if any row or column contains three equal adjacent symbols."""
    g = board.grid
    rows = (g[:, :-2] == g[:, 1:-1]) & (g[:, 1:-1] == g[:, 2:]) & (g[:, :-2] != CellValue.EMPTY)
    cols = (g[:-2, :] == g[1:-1, :]) & (g[1:-1, :] == g[2:, :]) & (g[:-2, :] != CellValue.EMPTY)
    return bool(rows.any() or cols.any())


def count_line(board: BinairoBoard, index: int, is_row: bool) -> Tuple[int, int]:
    """Count (zeros, ones) along a row or column."""
    line = board.get_line(index, is_row)
    return int(np.count_nonzero(line == CellValue.ZERO)), int(np.count_nonzero(line == CellValue.ONE))


def line_limit(size: int) -> int:
    """Largest number of copies of one symbol a line may hold."""
    return (size + 1) // 2


def is_partially_balanced(board: BinairoBoard, index: int, is_row: bool) -> bool:
    """
    Partial R2: neither symbol already exceeds its quota on the line.

    Meant for lines that may still have empty cells, to prune early.
    """
    zeros, ones = count_line(board, index, is_row)
    limit = line_limit(board.size)
    return zeros <= limit and ones <= limit


def is_balanced(board: BinairoBoard, index: int, is_row: bool) -> bool:
    """
    Full R2 on a complete line.

    For even sizes the line needs exactly N/2 of each symbol. Odd sizes
    are not standard Binairo but are tolerated: one symbol appears
    ceil(N/2) times and the other floor(N/2) times.

    Returns:
        False if the line is incomplete or unbalanced.
    """
    zeros, ones = count_line(board, index, is_row)
    size = board.size
    if zeros + ones < size:
        return False

    half = size // 2
    if size % 2 == 0:
        return zeros == half and ones == half
    return (zeros, ones) in ((half, half + 1), (half + 1, half))


def is_row_complete(board: BinairoBoard, row: int) -> bool:
    return board.is_row_complete(row)


def is_col_complete(board: BinairoBoard, col: int) -> bool:
    return board.is_col_complete(col)


def has_duplicate_row(board: BinairoBoard, row: int) -> bool:
    """
    R3 for rows: True if the (complete) row equals another complete row.

    An incomplete row never counts as a duplicate.
    """
    if not board.is_row_complete(row):
        return False
    target = board.grid[row, :]
    for other in range(board.size):
        if other != row and board.is_row_complete(other) and np.array_equal(board.grid[other, :], target):
            return True
    return False


def has_duplicate_col(board: BinairoBoard, col: int) -> bool:
    """R3 for columns: True if the (complete) column equals another complete one."""
    if not board.is_col_complete(col):
        return False
    target = board.grid[:, col]
    for other in range(board.size):
        if other != col and board.is_col_complete(other) and np.array_equal(board.grid[:, other], target):
            return True
    return False


def _lines_valid(lines: np.ndarray, size: int) -> bool:
    """Check R2 and R3 on a stack of lines, ignoring incomplete ones."""
    complete = lines[np.all(lines != CellValue.EMPTY, axis=1)]
    if len(complete) == 0:
        return True

    ones = np.count_nonzero(complete == CellValue.ONE, axis=1)
    zeros = size - ones
    half = size // 2
    if size % 2 == 0:
        if np.any(ones != half):
            return False
    elif np.any(np.abs(ones - zeros) != 1):
        return False

    return len(np.unique(complete, axis=0)) == len(complete)


def is_globally_valid(board: BinairoBoard) -> bool:
    """
    Authoritative admissibility test for a (partial) assignment.

    Requires R1 at every cell, R2 and R3 on every complete row and
    column, and a non-empty domain for every empty cell.
    """
    if has_triple(board):
        return False
    if not _lines_valid(board.grid, board.size):
        return False
    if not _lines_valid(board.grid.T, board.size):
        return False
    return not board.has_domain_wipeout()


def is_value_consistent(board: BinairoBoard, row: int, col: int, value: int) -> bool:
    """
    One-ply lookahead: would ``value`` at (row, col) keep R1 and partial R2?

    The value is written into the grid only for the duration of the check.
    """
    with board.trial(row, col, value):
        return (
            is_locally_valid(board, row, col)
            and is_partially_balanced(board, row, True)
            and is_partially_balanced(board, col, False)
        )
