"""Binairo (Takuzu) constraint-satisfaction solver."""

from .core import BinairoBoard, CellValue, Move, Rule, Role
from .solvers import CSPSolver, SolverConfig, SolverStats, GridResolution

__version__ = "1.0.0"

__all__ = [
    "BinairoBoard",
    "CellValue",
    "Move",
    "Rule",
    "Role",
    "CSPSolver",
    "SolverConfig",
    "SolverStats",
    "GridResolution",
]
