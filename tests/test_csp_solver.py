"""Unit tests for the configurable CSP solver."""

import pytest
from binairo.core.board import BinairoBoard
from binairo.core.constraints import is_globally_valid
from binairo.core.moves import Move
from binairo.solvers import (
    CSPSolver,
    SolverConfig,
    NAIVE,
    FULL,
    HINT,
    check_resolvability,
)


# A complete, valid 6x6 grid
SOLUTION_6 = (
    "100101"
    "011010"
    "110010"
    "001101"
    "011001"
    "100110"
)

# SOLUTION_6 with half of its cells removed
PUZZLE_6 = (
    "1..1.1"
    ".1..1."
    "1.0..0"
    "..1.0."
    "0.1..1"
    ".0.1.0"
)

# Valid givens, but the first two rows are both forced to 0110
UNSOLVABLE_4 = (
    "0..0"
    "0..0"
    "...."
    "...."
)

# (0, 2) can hold neither symbol
DEAD_CELL_6 = "00.11." + "." * 30

ALL_CONFIGS = list(SolverConfig.all_combinations())


def assert_solves(puzzle: BinairoBoard, solution: BinairoBoard):
    """The solution is complete, valid and keeps every given."""
    assert solution is not None
    assert solution.is_complete()
    assert is_globally_valid(solution)
    for row in range(puzzle.size):
        for col in range(puzzle.size):
            if not puzzle.is_empty(row, col):
                assert solution.get(row, col) == puzzle.get(row, col)


class TestSolverConfig:
    """Tests for the heuristic switches."""

    def test_all_combinations(self):
        assert len(ALL_CONFIGS) == 32
        assert len(set(ALL_CONFIGS)) == 32
        assert len(set(c.label for c in ALL_CONFIGS)) == 32

    def test_labels(self):
        assert NAIVE.label == "Naive"
        assert FULL.label == "MRV+Degree+LCV+AC3+FC"
        assert HINT.label == "MRV+FC"
        assert str(SolverConfig(degree=True, lcv=True)) == "Degree+LCV"

    def test_to_dict(self):
        assert FULL.to_dict() == {
            "mrv": True, "degree": True, "lcv": True, "ac3": True, "forward_checking": True,
        }


class TestCSPSolver:
    """Tests for the backtracking search."""

    def test_solve_puzzle(self):
        """Test solving a known puzzle with every heuristic."""
        board = BinairoBoard.from_string(PUZZLE_6)
        solver = CSPSolver(FULL)

        solution, stats = solver.solve(board)

        assert stats.solved
        assert_solves(board, solution)

    @pytest.mark.parametrize("config", ALL_CONFIGS, ids=lambda c: c.label)
    def test_every_configuration_solves_empty_4x4(self, config):
        board = BinairoBoard(4)
        solution, stats = CSPSolver(config, track_memory=False).solve(board)
        assert stats.solved
        assert_solves(board, solution)

    @pytest.mark.parametrize("config", ALL_CONFIGS, ids=lambda c: c.label)
    def test_every_configuration_solves_puzzle(self, config):
        board = BinairoBoard.from_string(PUZZLE_6)
        solution, _ = CSPSolver(config, track_memory=False).solve(board)
        assert_solves(board, solution)

    @pytest.mark.parametrize("config", ALL_CONFIGS, ids=lambda c: c.label)
    def test_every_configuration_rejects_unsolvable(self, config):
        board = BinairoBoard.from_string(UNSOLVABLE_4)
        solution, stats = CSPSolver(config, track_memory=False).solve(board)
        assert solution is None
        assert not stats.solved

    def test_preprocessing_agrees_with_search(self):
        """Turning AC-3 on never changes whether a grid is solvable."""
        for puzzle in (PUZZLE_6, UNSOLVABLE_4, "00" + "." * 14):
            for config in ALL_CONFIGS:
                if config.ac3:
                    continue
                with_ac3 = SolverConfig(config.mrv, config.degree, config.lcv, True, config.forward_checking)
                plain, _ = CSPSolver(config, track_memory=False).solve(BinairoBoard.from_string(puzzle))
                pruned, _ = CSPSolver(with_ac3, track_memory=False).solve(BinairoBoard.from_string(puzzle))
                assert (plain is None) == (pruned is None), (puzzle, config.label)

    def test_dead_cell_found_by_preprocessing(self):
        board = BinairoBoard.from_string(DEAD_CELL_6)
        solution, stats = CSPSolver(FULL).solve(board)
        assert solution is None
        assert stats.extra["preprocessing"] == "unsolvable"
        assert stats.nodes_explored == 0

    def test_dead_cell_found_by_search(self):
        board = BinairoBoard.from_string(DEAD_CELL_6)
        solution, stats = CSPSolver(NAIVE).solve(board)
        assert solution is None
        assert stats.nodes_explored == 1
        assert stats.backtracks == 2

    def test_complete_grid(self):
        board = BinairoBoard.from_string(SOLUTION_6)
        solution, stats = CSPSolver(NAIVE).solve(board)
        assert solution == board
        assert stats.nodes_explored == 1
        assert stats.backtracks == 0

    def test_input_board_unchanged(self):
        board = BinairoBoard.from_string(PUZZLE_6)
        board.remove_from_domain(0, 1, 1)
        CSPSolver(FULL).solve(board)
        assert board.to_string() == PUZZLE_6
        assert board.get_domain(0, 1) == [0]

    def test_idempotent(self):
        """Solving the same grid twice gives the same first solution."""
        solver = CSPSolver(HINT)
        first, _ = solver.solve(BinairoBoard(6))
        second, _ = solver.solve(BinairoBoard(6))
        assert first == second

    def test_stats_collected(self):
        """Test that statistics are collected."""
        board = BinairoBoard.from_string(PUZZLE_6)
        solver = CSPSolver(FULL)

        _, stats = solver.solve(board)

        assert stats.time_seconds > 0
        assert stats.nodes_explored > 0
        assert stats.memory_bytes > 0
        assert stats.finished_at >= stats.started_at
        assert stats.algorithm == "CSP Backtracking (MRV+Degree+LCV+AC3+FC)"
        assert stats.configuration == FULL.to_dict()
        assert stats.to_dict()["nodes_explored"] == stats.nodes_explored

    def test_performance_report(self):
        solver = CSPSolver(HINT)
        solver.solve(BinairoBoard.from_string(PUZZLE_6))
        report = solver.performance_report()
        assert "Nodes explored" in report
        assert "mrv, forward_checking" in report
        assert "solved" in report

    def test_configure(self):
        solver = CSPSolver()
        assert solver.config == NAIVE
        config = solver.configure(mrv=True, lcv=True)
        assert solver.config == config == SolverConfig(mrv=True, lcv=True)

    def test_timeout(self):
        """An exhausted budget stops the search at the next node."""
        solver = CSPSolver(NAIVE, timeout_seconds=0.0)
        solution, stats = solver.solve(BinairoBoard(10))
        assert solution is None
        assert not stats.solved
        assert stats.extra["error"] == "Timeout"
        assert stats.nodes_explored == 1

    def test_budget_not_reached(self):
        solver = CSPSolver(FULL, timeout_seconds=30)
        solution, stats = solver.solve(BinairoBoard.from_string(PUZZLE_6))
        assert stats.solved
        assert "error" not in stats.extra
        assert_solves(BinairoBoard.from_string(PUZZLE_6), solution)


class TestResolvability:
    """Tests for checking a grid before play."""

    def test_adjacent_pair_is_resolvable(self):
        """Two equal neighbours are legal and the grid can be completed."""
        board = BinairoBoard.from_string("00.." "...." "...." "....")
        resolution = check_resolvability(board)
        assert resolution.is_resolvable
        assert resolution.initial == board
        assert_solves(board, resolution.solution)

    def test_invalid_givens_rejected_without_search(self):
        board = BinairoBoard.from_string("000." "...." "...." "....")
        solver = CSPSolver(FULL)
        resolution = solver.check_resolvability(board)
        assert not resolution.is_resolvable
        assert resolution.initial == board
        assert solver.stats.nodes_explored == 0

    def test_unsolvable(self):
        resolution = check_resolvability(BinairoBoard.from_string(UNSOLVABLE_4))
        assert not resolution.is_resolvable

    def test_initial_is_a_copy(self):
        board = BinairoBoard.from_string(PUZZLE_6)
        resolution = check_resolvability(board)
        board.set(0, 1, 1)
        assert resolution.initial.to_string() == PUZZLE_6

    def test_suggest(self):
        board = BinairoBoard.from_string("00...." + "." * 30)
        assert CSPSolver().suggest(board) == Move(0, 2, 1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
