"""Benchmarking framework for comparing solver configurations."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Sequence
import json
import os

from tqdm import tqdm

from ..core.board import BinairoBoard
from ..generator import BinairoGenerator, Difficulty
from ..solvers import CSPSolver, SolverConfig
from ..logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle_id: int
    size: int
    difficulty: str
    configuration: str
    solved: bool
    time_seconds: float
    memory_bytes: int
    nodes_explored: int
    backtracks: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "size": self.size,
            "difficulty": self.difficulty,
            "configuration": self.configuration,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "nodes_explored": self.nodes_explored,
            "backtracks": self.backtracks,
            **self.extra
        }


class Benchmark:
    """
    Benchmark framework for comparing heuristic configurations.

    Generates puzzles for each grid size, runs the CSP solver with every
    selected configuration on every puzzle and collects performance metrics.
    """

    def __init__(
        self,
        sizes: Sequence[int] = (6,),
        puzzles_per_size: int = 5,
        difficulty: Difficulty = Difficulty.MEDIUM,
        configs: Optional[List[SolverConfig]] = None,
        timeout_seconds: float = 30.0,
        seed: Optional[int] = None
    ):
        """
        Initialize the benchmark.

        Args:
            sizes: Grid sizes to test.
            puzzles_per_size: Number of puzzles to generate per size.
            difficulty: Difficulty of the generated puzzles.
            configs: Configurations to compare (default: all 32).
            timeout_seconds: Maximum time per puzzle per configuration.
            seed: Random seed for reproducibility.
        """
        self.sizes = list(sizes)
        self.puzzles_per_size = puzzles_per_size
        self.difficulty = difficulty
        self.configs = configs if configs is not None else list(SolverConfig.all_combinations())
        self.timeout_seconds = timeout_seconds
        self.seed = seed

        self.puzzles: Dict[int, List[BinairoBoard]] = {}
        self.results: List[BenchmarkResult] = []

    def generate_puzzles(self) -> None:
        """Generate all puzzles for benchmarking."""
        print("Generating puzzles...")
        for size in tqdm(self.sizes, desc="Sizes"):
            seed = None if self.seed is None else self.seed + size
            generator = BinairoGenerator(size=size, seed=seed)
            self.puzzles[size] = generator.generate_batch(self.puzzles_per_size, self.difficulty)

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.puzzles:
            self.generate_puzzles()

        self.results = []

        total_tests = sum(len(p) for p in self.puzzles.values()) * len(self.configs)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for size, puzzles in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                for config in self.configs:
                    result = self._run_single(puzzle, puzzle_id, config)
                    self.results.append(result)
                    pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(self, puzzle: BinairoBoard, puzzle_id: int, config: SolverConfig) -> BenchmarkResult:
        """Run a single configuration on a single puzzle."""
        solver = CSPSolver(config, timeout_seconds=self.timeout_seconds)
        failed = dict(
            puzzle_id=puzzle_id,
            size=puzzle.size,
            difficulty=self.difficulty.value,
            configuration=config.label,
            solved=False,
            time_seconds=self.timeout_seconds,
            memory_bytes=0,
            nodes_explored=0,
            backtracks=0,
        )

        try:
            _, stats = solver.solve(puzzle)
        except Exception as e:
            logger.exception("%s crashed on puzzle %d", config.label, puzzle_id)
            return BenchmarkResult(**failed, extra={"error": str(e)})

        if stats.extra.get("error") == "Timeout":
            logger.warning("%s timed out on puzzle %d (%dx%d)", config.label, puzzle_id, puzzle.size, puzzle.size)
            failed["nodes_explored"] = stats.nodes_explored
            failed["backtracks"] = stats.backtracks
            return BenchmarkResult(**failed, extra={"error": "Timeout"})

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            size=puzzle.size,
            difficulty=self.difficulty.value,
            configuration=config.label,
            solved=stats.solved,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            nodes_explored=stats.nodes_explored,
            backtracks=stats.backtracks,
            extra=dict(stats.extra)
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        labels = [c.label for c in self.configs]
        summary = {
            "total_puzzles": sum(len(p) for p in self.puzzles.values()),
            "configurations_tested": labels,
            "sizes": self.sizes,
            "difficulty": self.difficulty.value,
            "results_by_configuration": {},
            "results_by_size": {}
        }

        # Group by configuration
        for label in labels:
            config_results = [r for r in self.results if r.configuration == label]
            if config_results:
                solved = [r for r in config_results if r.solved]
                times = [r.time_seconds for r in config_results]
                nodes = [r.nodes_explored for r in config_results]

                summary["results_by_configuration"][label] = {
                    "accuracy": len(solved) / len(config_results) * 100,
                    "avg_time_seconds": sum(times) / len(times),
                    "max_time_seconds": max(times),
                    "min_time_seconds": min(times),
                    "avg_nodes": sum(nodes) / len(nodes),
                    "total_solved": len(solved),
                    "total_tested": len(config_results)
                }

        # Group by size
        for size in self.sizes:
            size_results = [r for r in self.results if r.size == size]
            if not size_results:
                continue
            summary["results_by_size"][str(size)] = {}
            for label in labels:
                rows = [r for r in size_results if r.configuration == label]
                if rows:
                    summary["results_by_size"][str(size)][label] = {
                        "accuracy": sum(1 for r in rows if r.solved) / len(rows) * 100,
                        "avg_time_seconds": sum(r.time_seconds for r in rows) / len(rows),
                        "avg_nodes": sum(r.nodes_explored for r in rows) / len(rows),
                    }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated puzzles to files."""
        os.makedirs(output_dir, exist_ok=True)

        # Save raw results as JSON
        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        # Save summary
        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        # Save puzzles by size
        puzzles_dir = os.path.join(output_dir, "puzzles")
        for size, puzzles in self.puzzles.items():
            size_dir = os.path.join(puzzles_dir, f"{size}x{size}")
            BinairoGenerator.save_to_folder(puzzles, size_dir, prefix=f"puzzle_{size}x{size}")

        print(f"Results and puzzles saved to {output_dir}")
