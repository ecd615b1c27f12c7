"""Binairo puzzle generator with configurable difficulty levels."""

from __future__ import annotations
import os
import random
from enum import Enum
from typing import List, Tuple, Optional

from ..core.board import BinairoBoard, CellValue, BINARY_VALUES
from ..core.constraints import is_locally_valid
from ..core.moves import find_violation


class Difficulty(Enum):
    """Difficulty levels for Binairo puzzles."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def clue_fraction(self) -> Tuple[float, float]:
        """Get the range of the fraction of cells kept as clues (min, max)."""
        ranges = {
            Difficulty.EASY: (0.50, 0.60),
            Difficulty.MEDIUM: (0.40, 0.50),
            Difficulty.HARD: (0.30, 0.40),
            Difficulty.EXPERT: (0.20, 0.30),
        }
        return ranges[self]


def count_solutions(board: BinairoBoard, limit: int = 2) -> int:
    """
    Count the number of solutions for a puzzle (up to limit).

    Plain row-major backtracking that stops early once limit is reached.

    Args:
        board: The puzzle board.
        limit: Maximum solutions to count before stopping.

    Returns:
        Number of solutions found (up to limit).
    """
    work_board = board.copy()
    empty_cells = work_board.get_empty_cells()
    count = [0]  # Use list to allow modification in nested function

    def backtrack(index: int) -> bool:
        """Returns True if limit reached."""
        if index == len(empty_cells):
            count[0] += 1
            return count[0] >= limit

        row, col = empty_cells[index]
        for value in BINARY_VALUES:
            work_board.grid[row, col] = value
            if find_violation(work_board, row, col) is None:
                if backtrack(index + 1):
                    return True
        work_board.grid[row, col] = CellValue.EMPTY
        return False

    backtrack(0)
    return count[0]


def has_unique_solution(board: BinairoBoard) -> bool:
    """Check if a puzzle has exactly one solution."""
    return count_solutions(board, limit=2) == 1


class BinairoGenerator:
    """
    Generator for Binairo puzzles.

    Two modes are available:
    1. ``generate_random``: a quick grid of random, locally valid clues.
       It is not guaranteed to be solvable.
    2. ``generate``: build a complete valid grid with randomized
       backtracking, then remove cells while the solution stays unique.
    """

    def __init__(self, size: int = 6, seed: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            size: Board size (even, at least 4).
            seed: Random seed for reproducibility.
        """
        if size < 4 or size % 2:
            raise ValueError(f"Size must be even and >= 4, got {size}")
        self.size = size
        self.rng = random.Random(seed)

    def generate_random(self) -> BinairoBoard:
        """
        Scatter about size*size/5 random clues over an empty grid.

        A clue is kept only if its cell was empty and it does not create
        three equal symbols in a row.
        """
        board = BinairoBoard(self.size)
        attempts = self.size * self.size // 5

        for _ in range(attempts):
            row = self.rng.randrange(self.size)
            col = self.rng.randrange(self.size)
            value = self.rng.choice(BINARY_VALUES)

            if board.is_empty(row, col):
                board.set(row, col, value)
                if not is_locally_valid(board, row, col):
                    board.clear(row, col)

        return board

    def generate(self, difficulty: Difficulty = Difficulty.MEDIUM) -> BinairoBoard:
        """
        Generate a puzzle with the specified difficulty.

        Args:
            difficulty: Desired difficulty level.

        Returns:
            A BinairoBoard with the puzzle (with clues only, no solution).
        """
        puzzle, _ = self.generate_with_solution(difficulty)
        return puzzle

    def generate_batch(self, count: int, difficulty: Difficulty = Difficulty.MEDIUM) -> List[BinairoBoard]:
        """Generate multiple puzzles of the same difficulty."""
        return [self.generate(difficulty) for _ in range(count)]

    def generate_with_solution(self, difficulty: Difficulty = Difficulty.MEDIUM) -> Tuple[BinairoBoard, BinairoBoard]:
        """
        Generate a puzzle along with its solution.

        Returns:
            Tuple of (puzzle, solution) BinairoBoards.
        """
        solution = self._generate_complete_board()
        puzzle = self._remove_cells(solution, difficulty)
        return puzzle, solution

    def _generate_complete_board(self) -> BinairoBoard:
        """Generate a complete valid grid using randomized backtracking."""
        board = BinairoBoard(self.size)
        if not self._fill_board(board, board.get_empty_cells(), 0):
            raise RuntimeError(f"Could not build a complete {self.size}x{self.size} grid")
        return board

    def _fill_board(self, board: BinairoBoard, cells: List[Tuple[int, int]], index: int) -> bool:
        """Fill cells in row-major order, trying values in random order."""
        if index == len(cells):
            return True

        row, col = cells[index]
        values = list(BINARY_VALUES)
        self.rng.shuffle(values)

        for value in values:
            board.set(row, col, value)
            if find_violation(board, row, col) is None and self._fill_board(board, cells, index + 1):
                return True
        board.clear(row, col)
        return False

    def _remove_cells(self, solution: BinairoBoard, difficulty: Difficulty) -> BinairoBoard:
        """
        Remove cells from a complete solution to create a puzzle.

        Ensures the resulting puzzle has a unique solution, so the final
        clue count may stay above the difficulty target.
        """
        puzzle = solution.copy()
        total_cells = self.size * self.size
        low, high = difficulty.clue_fraction
        target_clues = int(round(total_cells * self.rng.uniform(low, high)))
        cells_to_remove = total_cells - target_clues

        filled_cells = [(i, j) for i in range(self.size) for j in range(self.size)]
        self.rng.shuffle(filled_cells)

        removed = 0
        for row, col in filled_cells:
            if removed >= cells_to_remove:
                break

            original_value = puzzle.get(row, col)
            puzzle.clear(row, col)

            if has_unique_solution(puzzle):
                removed += 1
            else:
                puzzle.set(row, col, original_value)

        return puzzle

    @staticmethod
    def save_to_folder(puzzles: List[BinairoBoard], folder_path: str, prefix: str = "puzzle") -> List[str]:
        """
        Save a list of puzzles to a folder as individual text files.

        Args:
            puzzles: List of BinairoBoard objects.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").

        Returns:
            Paths of the written files.
        """
        os.makedirs(folder_path, exist_ok=True)

        paths = []
        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(puzzle.to_string())
                f.write("\n\nPretty format:\n")
                f.write(str(puzzle))
            paths.append(file_path)
        return paths
