"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import time
import tracemalloc

from ..core.board import BinairoBoard
from ..core.constraints import is_globally_valid
from ..logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Search metrics
    nodes_explored: int = 0
    backtracks: int = 0

    # perf_counter() timestamps of the run
    started_at: float = 0.0
    finished_at: float = 0.0

    # Additional metadata
    algorithm: str = ""
    configuration: Dict[str, bool] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "nodes_explored": self.nodes_explored,
            "backtracks": self.backtracks,
            "algorithm": self.algorithm,
            "configuration": dict(self.configuration),
            **self.extra
        }

    def report(self) -> str:
        """Plain-text performance summary for display layers."""
        enabled = [name for name, on in self.configuration.items() if on]
        lines = [
            f"Algorithm: {self.algorithm}",
            f"Heuristics: {', '.join(enabled) if enabled else 'none'}",
            f"Result: {'solved' if self.solved else 'no solution'}",
            f"Nodes explored: {self.nodes_explored:,}",
            f"Backtracks: {self.backtracks:,}",
            f"Time: {self.time_seconds * 1000:.2f} ms",
            f"Peak memory: {self.memory_bytes / 1024:.2f} KB",
        ]
        if "error" in self.extra:
            lines.append(f"Error: {self.extra['error']}")
        return "\n".join(lines)


class BaseSolver(ABC):
    """Abstract base class for Binairo solvers."""

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = True):
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: BinairoBoard) -> tuple[Optional[BinairoBoard], SolverStats]:
        """
        Solve a Binairo puzzle with timing and memory tracking.

        Args:
            board: The puzzle to solve. It is not modified.

        Returns:
            Tuple of (solution or None, stats).
        """
        self.reset_stats()

        if self.track_memory:
            tracemalloc.start()

        self.stats.started_at = time.perf_counter()

        try:
            solution = self._solve(board.copy())
            self.stats.solved = (
                solution is not None and solution.is_complete() and is_globally_valid(solution)
            )
        except Exception as e:
            logger.exception("%s failed on a %dx%d grid", self.name, board.size, board.size)
            self.stats.extra["error"] = str(e)
            solution = None

        self.stats.finished_at = time.perf_counter()
        self.stats.time_seconds = self.stats.finished_at - self.stats.started_at

        if self.track_memory:
            current, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.stats.memory_bytes = peak

        if not self.stats.solved:
            solution = None
        return solution, self.stats

    @abstractmethod
    def _solve(self, board: BinairoBoard) -> Optional[BinairoBoard]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: A copy of the puzzle to solve (can be modified).

        Returns:
            The solved board, or None if no solution found.
        """
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
