"""Unit tests for variable and value ordering heuristics."""

import pytest
from binairo.core.board import BinairoBoard, CellValue
from binairo.solvers.heuristics import (
    calculate_degree,
    count_eliminated_options,
    order_domain_values,
    select_unassigned_variable,
)


class TestDegree:
    """Tests for the degree of a cell."""

    def test_corner_and_interior(self):
        """Neighbours are counted on top of the row and column peers."""
        board = BinairoBoard(4)
        assert calculate_degree(board, 0, 0) == 2 + 3 + 3
        assert calculate_degree(board, 1, 1) == 4 + 3 + 3

    def test_filled_cells_do_not_count(self):
        board = BinairoBoard(4)
        board.set(0, 1, 0)
        board.set(2, 0, 1)
        assert calculate_degree(board, 0, 0) == 1 + 2 + 2


class TestVariableSelection:
    """Tests for the MRV / Degree selection matrix."""

    def test_naive_takes_first_empty(self):
        board = BinairoBoard(6)
        board.set(0, 0, 1)
        assert select_unassigned_variable(board) == (0, 1)

    def test_full_board(self):
        board = BinairoBoard.from_string("0101" "1010" "0011" "1100")
        assert select_unassigned_variable(board, True, True) is None

    def test_mrv_picks_smallest_domain(self):
        board = BinairoBoard(6)
        board.remove_from_domain(2, 3, 0)
        assert select_unassigned_variable(board, use_mrv=True) == (2, 3)

    def test_mrv_ties_go_to_first(self):
        board = BinairoBoard(6)
        assert select_unassigned_variable(board, use_mrv=True) == (0, 0)

    def test_degree_alone(self):
        """On an empty grid the first interior cell has the highest degree."""
        board = BinairoBoard(6)
        assert select_unassigned_variable(board, use_degree=True) == (1, 1)

    def test_mrv_with_degree_tiebreak(self):
        board = BinairoBoard(6)
        assert select_unassigned_variable(board, use_mrv=True, use_degree=True) == (1, 1)

    def test_mrv_beats_degree(self):
        """A smaller domain wins even when its degree is lower."""
        board = BinairoBoard(6)
        board.remove_from_domain(0, 0, 1)
        assert select_unassigned_variable(board, use_mrv=True, use_degree=True) == (0, 0)


class TestValueOrdering:
    """Tests for LCV value ordering."""

    def test_count_eliminated_options(self):
        """Next to a lone 0, another 0 rules out a 0 in the following cell."""
        board = BinairoBoard(6)
        board.set(0, 0, 0)
        assert count_eliminated_options(board, 0, 1, 0) == 1
        assert count_eliminated_options(board, 0, 1, 1) == 0
        assert board.is_empty(0, 1)

    def test_default_order(self):
        board = BinairoBoard(6)
        board.set(0, 0, 0)
        assert order_domain_values(board, 0, 1) == [CellValue.ZERO, CellValue.ONE]

    def test_lcv_order(self):
        board = BinairoBoard(6)
        board.set(0, 0, 0)
        assert order_domain_values(board, 0, 1, use_lcv=True) == [CellValue.ONE, CellValue.ZERO]

    def test_lcv_ties_keep_ascending(self):
        board = BinairoBoard(6)
        assert order_domain_values(board, 2, 2, use_lcv=True) == [CellValue.ZERO, CellValue.ONE]

    def test_reduced_domain(self):
        board = BinairoBoard(6)
        board.remove_from_domain(3, 3, 0)
        assert order_domain_values(board, 3, 3, use_lcv=True) == [CellValue.ONE]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
