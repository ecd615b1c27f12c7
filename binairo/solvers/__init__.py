"""Solvers module for Binairo puzzles."""

from .base_solver import BaseSolver, SolverStats
from .config import SolverConfig, NAIVE, FULL, HINT
from .csp_solver import CSPSolver, GridResolution, check_resolvability
from .heuristics import select_unassigned_variable, order_domain_values, calculate_degree
from .propagation import preprocess_domains, forward_check
from .inference import suggest_move, find_forced_moves, iter_forced_moves

__all__ = [
    "BaseSolver",
    "SolverStats",
    "SolverConfig",
    "NAIVE",
    "FULL",
    "HINT",
    "CSPSolver",
    "GridResolution",
    "check_resolvability",
    "select_unassigned_variable",
    "order_domain_values",
    "calculate_degree",
    "preprocess_domains",
    "forward_check",
    "suggest_move",
    "find_forced_moves",
    "iter_forced_moves",
]
