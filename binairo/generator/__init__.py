"""Generator module for creating Binairo puzzles."""

from .generator import BinairoGenerator, Difficulty, count_solutions, has_unique_solution
from .examples import EXAMPLE_GRIDS, load_example

__all__ = [
    "BinairoGenerator",
    "Difficulty",
    "count_solutions",
    "has_unique_solution",
    "EXAMPLE_GRIDS",
    "load_example",
]
