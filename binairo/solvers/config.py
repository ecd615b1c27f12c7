"""Solver configuration: the five heuristic switches."""

from __future__ import annotations
import itertools
from dataclasses import dataclass, asdict
from typing import Dict, Iterator


@dataclass(frozen=True)
class SolverConfig:
    """
    Which heuristics a CSP solve uses.

    Attributes:
        mrv: Pick the empty cell with the fewest remaining values.
        degree: Break ties (or pick alone, without MRV) by the number of
                empty cells a cell is connected to.
        lcv: Try the least constraining value first.
        ac3: Tighten domains once before the search starts.
        forward_checking: Prune row/column neighbour domains after each
                          assignment.
    """
    mrv: bool = False
    degree: bool = False
    lcv: bool = False
    ac3: bool = False
    forward_checking: bool = False

    @property
    def label(self) -> str:
        """Short name such as 'MRV+Degree+FC', or 'Naive' when all are off."""
        names = [
            ("MRV", self.mrv),
            ("Degree", self.degree),
            ("LCV", self.lcv),
            ("AC3", self.ac3),
            ("FC", self.forward_checking),
        ]
        enabled = [name for name, on in names if on]
        return "+".join(enabled) if enabled else "Naive"

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)

    @classmethod
    def all_combinations(cls) -> Iterator[SolverConfig]:
        """Yield all 32 configurations, from Naive to everything enabled."""
        for flags in itertools.product((False, True), repeat=5):
            yield cls(*flags)

    def __str__(self) -> str:
        return self.label


NAIVE = SolverConfig()

# Used to check that a grid can be solved before play starts
FULL = SolverConfig(mrv=True, degree=True, lcv=True, ac3=True, forward_checking=True)

# Reduced configuration used when computing a hint
HINT = SolverConfig(mrv=True, forward_checking=True)
