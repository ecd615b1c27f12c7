"""Built-in example grids, given as (row, col, value) clues."""

from __future__ import annotations
from typing import Dict, List, Tuple

from ..core.board import BinairoBoard

EXAMPLE_GRIDS: Dict[int, List[Tuple[int, int, int]]] = {
    6: [
        (0, 0, 1), (0, 3, 0),
        (1, 1, 0), (1, 5, 1),
        (2, 4, 0), (2, 5, 1),
        (3, 0, 0), (3, 2, 1),
        (4, 3, 0), (4, 5, 0),
        (5, 1, 1), (5, 5, 0),
    ],
    8: [
        (0, 2, 1), (0, 4, 0),
        (1, 1, 0), (1, 6, 1),
        (2, 0, 1), (2, 5, 0),
        (3, 3, 0), (3, 7, 1),
        (4, 0, 0), (4, 4, 1),
        (5, 2, 0), (5, 7, 1),
        (6, 1, 1), (6, 6, 0),
        (7, 3, 1), (7, 5, 0),
    ],
    10: [
        (0, 3, 1), (0, 7, 0),
        (1, 1, 0), (1, 5, 1), (1, 9, 0),
        (2, 0, 1), (2, 4, 0), (2, 8, 1),
        (3, 2, 0), (3, 6, 1),
        (4, 1, 1), (4, 5, 0), (4, 9, 1),
        (5, 0, 0), (5, 4, 1), (5, 8, 0),
        (6, 2, 1), (6, 6, 0),
        (7, 1, 0), (7, 5, 1), (7, 9, 1),
        (8, 0, 1), (8, 4, 0), (8, 8, 1),
        (9, 2, 0), (9, 6, 1),
    ],
}


def load_example(size: int) -> BinairoBoard:
    """
    Build the example grid for a size.

    Sizes without a predefined example give an empty board.
    """
    board = BinairoBoard(size)
    for row, col, value in EXAMPLE_GRIDS.get(size, []):
        board.set(row, col, value)
    return board
