"""Domain reduction: one-off preprocessing and forward checking."""

from __future__ import annotations
from typing import List, Tuple

from ..core.board import BinairoBoard, CellValue
from ..core.constraints import is_locally_valid, is_partially_balanced, is_value_consistent
from ..logging_utils import get_logger

logger = get_logger(__name__)


def preprocess_domains(board: BinairoBoard) -> bool:
    """
    Arc-consistency style domain tightening, run once before the search.

    Sweeps every empty cell and drops each candidate value that would
    immediately break R1 or the partial R2 limit. Sweeps repeat until one
    leaves every domain unchanged.

    A sweep stops as soon as a domain becomes empty. Cells it had not
    reached yet keep their old domains; the board is unsolvable and is
    expected to be discarded.

    Returns:
        False if some empty cell has no value left, True otherwise.
    """
    passes = 0
    changed = True
    while changed:
        changed = False
        passes += 1
        for row, col in board.get_empty_cells():
            for value in board.get_domain(row, col):
                if not is_value_consistent(board, row, col, value):
                    board.remove_from_domain(row, col, value)
                    changed = True
                    logger.debug("Preprocessing removed %d from (%d, %d)", value, row + 1, col + 1)

            if board.domain_size(row, col) == 0:
                logger.debug("Preprocessing emptied the domain of (%d, %d)", row + 1, col + 1)
                return False

    logger.debug("Preprocessing reached a fixpoint after %d pass(es)", passes)
    return True


def _opposite_is_impossible(board: BinairoBoard, row: int, col: int, value: int, is_row: bool) -> bool:
    """R1 at (row, col) and partial R2 on the line it shares with the assignment."""
    with board.trial(row, col, value):
        if not is_locally_valid(board, row, col):
            return True
        return not is_partially_balanced(board, row if is_row else col, is_row)


def forward_check(board: BinairoBoard, row: int, col: int, value: int) -> List[Tuple[int, int]]:
    """
    Propagate the assignment of ``value`` at (row, col) to its line peers.

    Collapses the domain of (row, col) to ``value``. Then, for every empty
    cell in the same row or column, the opposite value is simulated there
    together with the assignment: if it breaks R1 at the peer, or the
    partial R2 limit on the line the two cells share, it is removed from
    the peer's domain. The assigned value itself is never removed.

    A peer left with an empty domain is only logged and reported. The
    search drops the branch through ``is_globally_valid``.

    Returns:
        The peers whose domain became empty.
    """
    board.collapse_domain(row, col, value)
    other = CellValue(value).opposite
    wiped = []

    with board.trial(row, col, value):
        for r, c in board.get_empty_peers(row, col):
            is_row = r == row
            if not board.has_value_in_domain(r, c, other):
                continue
            if not _opposite_is_impossible(board, r, c, other, is_row):
                continue

            board.remove_from_domain(r, c, other)
            if board.domain_size(r, c) == 0:
                logger.debug(
                    "Forward checking failure: empty domain at (%d, %d) after (%d, %d) = %d",
                    r + 1, c + 1, row + 1, col + 1, value,
                )
                wiped.append((r, c))

    return wiped
