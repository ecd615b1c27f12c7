"""Variable and value ordering heuristics for the CSP search."""

from __future__ import annotations
from typing import List, Optional, Tuple

from ..core.board import BinairoBoard, CellValue
from ..core.constraints import is_value_consistent

_NEIGHBOUR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def calculate_degree(board: BinairoBoard, row: int, col: int) -> int:
    """
    Degree of a cell: how many unassigned variables it constrains.

    Counts the empty cells among its four grid neighbours, plus every
    other empty cell in its row and in its column. Orthogonal neighbours
    are therefore counted twice, once as neighbours and once as line
    peers.
    """
    size = board.size
    degree = 0

    for dr, dc in _NEIGHBOUR_OFFSETS:
        nr, nc = row + dr, col + dc
        if 0 <= nr < size and 0 <= nc < size and board.is_empty(nr, nc):
            degree += 1

    degree += board.count_empty_in_line(row, True) - int(board.is_empty(row, col))
    degree += board.count_empty_in_line(col, False) - int(board.is_empty(row, col))
    return degree


def select_unassigned_variable(
    board: BinairoBoard, use_mrv: bool = False, use_degree: bool = False
) -> Optional[Tuple[int, int]]:
    """
    Pick the next empty cell to assign.

    - Neither heuristic: first empty cell in row-major order.
    - Degree only: the cell with the highest degree.
    - MRV: the cell with the smallest domain; ties go to the highest
      degree when Degree is enabled.

    Remaining ties always go to the cell found first in row-major order.

    Returns:
        (row, col), or None if the board is full.
    """
    empty_cells = board.get_empty_cells()
    if not empty_cells:
        return None

    if not use_mrv and not use_degree:
        return empty_cells[0]

    if not use_mrv:
        best_cell = empty_cells[0]
        max_degree = calculate_degree(board, *best_cell)
        for cell in empty_cells[1:]:
            degree = calculate_degree(board, *cell)
            if degree > max_degree:
                best_cell, max_degree = cell, degree
        return best_cell

    best_cell = None
    min_domain = board.size + 1
    max_degree = -1

    for cell in empty_cells:
        domain_size = board.domain_size(*cell)

        if domain_size < min_domain:
            best_cell, min_domain = cell, domain_size
            max_degree = calculate_degree(board, *cell) if use_degree else -1
        elif domain_size == min_domain and use_degree:
            degree = calculate_degree(board, *cell)
            if degree > max_degree:
                best_cell, max_degree = cell, degree

    return best_cell


def count_eliminated_options(board: BinairoBoard, row: int, col: int, value: int) -> int:
    """
    Estimate how constraining it is to put ``value`` at (row, col).

    With the value in place, counts the (peer, value) pairs among the empty
    cells of the same row and column whose value is still in the peer's
    domain but would now break R1 or the partial R2 limit.
    """
    eliminated = 0
    with board.trial(row, col, value):
        for r, c in board.get_empty_peers(row, col):
            for candidate in board.get_domain(r, c):
                if not is_value_consistent(board, r, c, candidate):
                    eliminated += 1
    return eliminated


def order_domain_values(board: BinairoBoard, row: int, col: int, use_lcv: bool = False) -> List[CellValue]:
    """
    Order the values of the domain of (row, col) for the search.

    Without LCV the domain is returned in ascending order. With LCV the
    values are sorted by ``count_eliminated_options``, least constraining
    first; ties keep ascending order.
    """
    domain = board.get_domain(row, col)
    if not use_lcv or len(domain) < 2:
        return domain

    scores = {value: count_eliminated_options(board, row, col, value) for value in domain}
    return sorted(domain, key=scores.__getitem__)

