"""Configurable backtracking CSP solver for Binairo."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import time

from .base_solver import BaseSolver
from .config import SolverConfig, FULL
from .heuristics import select_unassigned_variable, order_domain_values
from .inference import suggest_move
from .propagation import preprocess_domains, forward_check
from ..core.board import BinairoBoard
from ..core.constraints import is_globally_valid
from ..core.moves import Move, find_invalid_given
from ..logging_utils import get_logger

logger = get_logger(__name__)


class SearchTimeout(Exception):
    """Raised inside the search once the time budget is spent."""


@dataclass
class GridResolution:
    """The untouched initial grid paired with its first solution, if any."""
    initial: BinairoBoard
    solution: Optional[BinairoBoard] = None

    @property
    def is_resolvable(self) -> bool:
        return self.solution is not None


class CSPSolver(BaseSolver):
    """
    Binairo solver using depth-first backtracking over cell domains.

    Each heuristic can be switched on or off through a SolverConfig:
    - MRV and Degree choose the next cell.
    - LCV orders the values tried for it.
    - AC-3 style preprocessing tightens the domains once before searching.
    - Forward checking prunes line peers after every assignment.

    Every search node works on its own copy of the board, so a failed
    branch is simply dropped. The first solution found is returned.
    """

    name = "CSP Backtracking"

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        track_memory: bool = True,
        timeout_seconds: Optional[float] = None,
    ):
        """
        Initialize the CSP solver.

        Args:
            config: Heuristics to use. Defaults to the naive search.
            track_memory: Measure peak memory with tracemalloc (slower).
            timeout_seconds: Give up once the search has run this long.
                             None means no limit.
        """
        self.config = config or SolverConfig()
        self.timeout_seconds = timeout_seconds
        self._deadline: Optional[float] = None
        super().__init__(track_memory=track_memory)

    def configure(
        self,
        mrv: bool = False,
        degree: bool = False,
        lcv: bool = False,
        ac3: bool = False,
        forward_checking: bool = False,
    ) -> SolverConfig:
        """Replace the configuration used by the next solves."""
        self.config = SolverConfig(mrv, degree, lcv, ac3, forward_checking)
        return self.config

    def reset_stats(self) -> None:
        super().reset_stats()
        self.stats.algorithm = f"{self.name} ({self.config.label})"
        self.stats.configuration = self.config.to_dict()

    def _solve(self, board: BinairoBoard) -> Optional[BinairoBoard]:
        """Check the givens, optionally preprocess, then search."""
        board.reset_domains()

        if not is_globally_valid(board):
            logger.info("Grid rejected before search: the givens break a rule")
            return None

        if self.config.ac3 and not preprocess_domains(board):
            logger.info("Preprocessing proved the grid unsolvable")
            self.stats.extra["preprocessing"] = "unsolvable"
            return None

        if self.timeout_seconds is not None:
            self._deadline = time.perf_counter() + self.timeout_seconds
        try:
            solution = self._backtrack(board)
        except SearchTimeout:
            logger.warning(
                "%s gave up after %.2fs and %d nodes",
                self.config.label, self.timeout_seconds, self.stats.nodes_explored,
            )
            self.stats.extra["error"] = "Timeout"
            return None
        finally:
            self._deadline = None

        logger.info(
            "%s finished after %d nodes: %s",
            self.config.label, self.stats.nodes_explored,
            "solved" if solution is not None else "no solution",
        )
        return solution

    def _backtrack(self, board: BinairoBoard) -> Optional[BinairoBoard]:
        """
        Recursive backtracking search.

        Returns the completed board, or None if this branch has no solution.
        """
        self.stats.nodes_explored += 1
        if self._deadline is not None and time.perf_counter() >= self._deadline:
            raise SearchTimeout

        if board.is_complete() and is_globally_valid(board):
            return board

        cell = select_unassigned_variable(board, self.config.mrv, self.config.degree)
        if cell is None:
            return None

        row, col = cell
        for value in order_domain_values(board, row, col, self.config.lcv):
            next_board = board.copy()
            next_board.set(row, col, value)

            if self.config.forward_checking:
                forward_check(next_board, row, col, value)

            if is_globally_valid(next_board):
                result = self._backtrack(next_board)
                if result is not None:
                    return result

            self.stats.backtracks += 1

        return None

    def check_resolvability(self, board: BinairoBoard) -> GridResolution:
        """
        Solve a copy of the grid and pair the untouched grid with the result.

        Grids whose givens already break a rule are rejected without
        searching.
        """
        initial = board.copy()
        invalid = find_invalid_given(initial)
        if invalid is not None:
            move, rule = invalid
            logger.warning("Given %s breaks %s", move, rule.value)
            self.reset_stats()
            return GridResolution(initial, None)

        solution, _ = self.solve(initial)
        return GridResolution(initial, solution)

    def suggest(self, board: BinairoBoard) -> Optional[Move]:
        """First cell whose value is forced by a one-ply lookahead."""
        return suggest_move(board)

    def performance_report(self) -> str:
        """Text summary of the last solve."""
        return self.stats.report()


def check_resolvability(board: BinairoBoard, config: SolverConfig = FULL) -> GridResolution:
    """Convenience wrapper solving with all heuristics enabled by default."""
    return CSPSolver(config, track_memory=False).check_resolvability(board)
