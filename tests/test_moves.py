"""Unit tests for move validation and manual entry."""

import pytest
from binairo.core.board import BinairoBoard, CellValue
from binairo.core.moves import (
    Move,
    Role,
    Rule,
    apply_move,
    find_invalid_given,
    find_violation,
    parse_moves,
    validate_move,
)


EMPTY_6 = "." * 36


class TestMove:
    """Tests for the Move value object."""

    def test_from_one_based(self):
        move = Move.from_one_based(1, 3, 1)
        assert move == Move(0, 2, 1)
        assert str(move) == "(1, 3) = 1"

    def test_check_bounds(self):
        Move(3, 3, 0).check_bounds(4)
        with pytest.raises(ValueError):
            Move(4, 0, 0).check_bounds(4)
        with pytest.raises(ValueError):
            Move(0, -1, 0).check_bounds(4)
        with pytest.raises(ValueError):
            Move(0, 0, 2).check_bounds(4)


class TestApplyMove:
    """Tests for rule-by-rule move validation."""

    def test_legal_move(self):
        board = BinairoBoard(4)
        new_board, rule = apply_move(board, Move(0, 0, 1))
        assert rule is None
        assert new_board.get(0, 0) == CellValue.ONE
        assert new_board.get_domain(0, 0) == [CellValue.ONE]

    def test_input_board_untouched(self):
        board = BinairoBoard.from_string("00.." "...." "...." "....")
        apply_move(board, Move(0, 2, 1))
        apply_move(board, Move(0, 2, 0))
        assert board.is_empty(0, 2)

    def test_occupied_cell_human(self):
        board = BinairoBoard.from_string("1..." "...." "...." "....")
        new_board, rule = apply_move(board, Move(0, 0, 0), Role.HUMAN)
        assert new_board is None
        assert rule is Rule.OCCUPIED

    def test_occupied_cell_solver(self):
        """The solver role may overwrite a filled cell."""
        board = BinairoBoard.from_string("1..." "...." "...." "....")
        new_board, rule = apply_move(board, Move(0, 0, 0), Role.SOLVER)
        assert rule is None
        assert new_board.get(0, 0) == CellValue.ZERO

    def test_triple_reported_before_limit(self):
        """Filling 0.0. with a zero breaks R1 and the limit; R1 wins."""
        board = BinairoBoard.from_string("0.0." "...." "...." "....")
        assert validate_move(board, Move(0, 1, 0)) is Rule.TRIPLE

    def test_row_limit(self):
        board = BinairoBoard.from_string("0.0.0." + EMPTY_6[6:])
        assert validate_move(board, Move(0, 5, 0)) is Rule.ROW_LIMIT

    def test_col_limit(self):
        board = BinairoBoard(6)
        for row in (0, 2, 4):
            board.set(row, 0, 0)
        assert validate_move(board, Move(5, 0, 0)) is Rule.COL_LIMIT

    def test_row_duplicate(self):
        board = BinairoBoard.from_string("0110" "011." "...." "....")
        assert validate_move(board, Move(1, 3, 0)) is Rule.ROW_DUPLICATE

    def test_unbalanced_complete_row_reported_as_limit(self):
        """Completing 010. with a zero trips the limit before the balance check."""
        board = BinairoBoard.from_string("010." "...." "...." "....")
        assert validate_move(board, Move(0, 3, 0)) is Rule.ROW_LIMIT
        assert validate_move(board, Move(0, 3, 1)) is None

    def test_col_duplicate(self):
        board = BinairoBoard.from_string("00.." "11.." "11.." "0...")
        assert validate_move(board, Move(3, 1, 0)) is Rule.COL_DUPLICATE

    def test_inconsistent_elsewhere(self):
        """A clean move on a grid broken elsewhere is still rejected."""
        board = BinairoBoard.from_string("...." "...." "...." "000.")
        assert validate_move(board, Move(0, 0, 1)) is Rule.INCONSISTENT

    def test_find_violation_reads_current_value(self):
        board = BinairoBoard.from_string("11.." "...." "...." "....")
        assert find_violation(board, 0, 1) is None
        board.set(0, 2, 1)
        assert find_violation(board, 0, 2) is Rule.TRIPLE

    def test_rules_have_descriptions(self):
        for rule in Rule:
            assert rule.description


class TestGivens:
    """Tests for re-checking the givens of a grid."""

    def test_valid_givens(self):
        board = BinairoBoard.from_string("00.." "...." "...." "....")
        assert find_invalid_given(board) is None
        assert find_invalid_given(BinairoBoard(6)) is None

    def test_triple_given(self):
        board = BinairoBoard.from_string("000." "...." "...." "....")
        move, rule = find_invalid_given(board)
        assert move == Move(0, 0, 0)
        assert rule is Rule.TRIPLE

    def test_duplicate_given(self):
        board = BinairoBoard.from_string("...." "0110" "0110" "....")
        move, rule = find_invalid_given(board)
        assert move.row == 1
        assert rule is Rule.ROW_DUPLICATE


class TestParseMoves:
    """Tests for 1-based manual entry."""

    def test_parse(self):
        moves = parse_moves("1 1 0  2 3 1", 4)
        assert moves == [Move(0, 0, 0), Move(1, 2, 1)]

    def test_parse_empty(self):
        assert parse_moves("", 4) == []

    @pytest.mark.parametrize("text", ["1 1", "a b c", "5 1 0", "1 0 1", "1 1 2"])
    def test_parse_errors(self, text):
        with pytest.raises(ValueError):
            parse_moves(text, 4)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
