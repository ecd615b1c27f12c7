"""Core module for Binairo board representation and constraint checking."""

from .board import BinairoBoard, CellValue, BINARY_VALUES
from .constraints import (
    is_locally_valid,
    is_partially_balanced,
    is_balanced,
    has_duplicate_row,
    has_duplicate_col,
    is_globally_valid,
    is_value_consistent,
)
from .moves import Move, Role, Rule, apply_move, validate_move, find_violation, find_invalid_given, parse_moves

__all__ = [
    "BinairoBoard",
    "CellValue",
    "BINARY_VALUES",
    "is_locally_valid",
    "is_partially_balanced",
    "is_balanced",
    "has_duplicate_row",
    "has_duplicate_col",
    "is_globally_valid",
    "is_value_consistent",
    "Move",
    "Role",
    "Rule",
    "apply_move",
    "validate_move",
    "find_violation",
    "find_invalid_given",
    "parse_moves",
]
