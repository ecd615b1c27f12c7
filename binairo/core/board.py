"""Binairo board representation with per-cell candidate domains."""

from __future__ import annotations
import math
from contextlib import contextmanager
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple

import numpy as np


class CellValue(IntEnum):
    """Tri-state content of a grid cell."""
    EMPTY = -1
    ZERO = 0
    ONE = 1

    @property
    def opposite(self) -> CellValue:
        """The other binary symbol. EMPTY has no opposite."""
        if self is CellValue.EMPTY:
            raise ValueError("EMPTY has no opposite value")
        return CellValue(1 - self.value)


BINARY_VALUES: Tuple[CellValue, CellValue] = (CellValue.ZERO, CellValue.ONE)

# Characters accepted for an empty cell when parsing a grid string
EMPTY_CHARS = frozenset(".-_xX2")


class BinairoBoard:
    """
    Represents a Binairo (Takuzu) grid of configurable size.

    Alongside the N x N matrix of cell values the board carries a dense
    N x N x 2 boolean array of domains: ``domains[r, c, v]`` is True while
    value ``v`` is still admissible at ``(r, c)``. Grid and domains are
    copied together, so a copy is a complete, independent search state.

    The engine does not require N to be even; puzzle front ends should
    only hand it even sizes >= 4.
    """

    def __init__(self, size: int = 6, grid: Optional[np.ndarray] = None):
        """
        Initialize a Binairo board.

        Args:
            size: Board size (number of rows and columns).
            grid: Optional initial grid using -1 for empty cells.
                  If None, creates an empty board.
        """
        if size < 1:
            raise ValueError(f"Size must be positive, got {size}")

        self.size = size

        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (size, size):
                raise ValueError(f"Grid shape must be ({size}, {size})")
            if not np.isin(grid, (-1, 0, 1)).all():
                raise ValueError("Grid values must be -1 (empty), 0 or 1")
            self.grid = grid.astype(np.int8)
        else:
            self.grid = np.full((size, size), CellValue.EMPTY, dtype=np.int8)

        self.domains = np.ones((size, size, 2), dtype=bool)
        self.reset_domains()

    def copy(self) -> BinairoBoard:
        """Create a deep copy of the board (grid and domains)."""
        new_board = BinairoBoard.__new__(BinairoBoard)
        new_board.size = self.size
        new_board.grid = self.grid.copy()
        new_board.domains = self.domains.copy()
        return new_board

    # --- Cell access ---

    def get(self, row: int, col: int) -> CellValue:
        """Get value at position (row, col)."""
        return CellValue(int(self.grid[row, col]))

    def set(self, row: int, col: int, value: int) -> None:
        """
        Set value at position (row, col) and keep its domain in step.

        Assigning 0 or 1 collapses the domain to that value; assigning
        EMPTY clears the cell.
        """
        if value not in (-1, 0, 1):
            raise ValueError(f"Value must be -1, 0 or 1, got {value}")
        if value == CellValue.EMPTY:
            self.clear(row, col)
            return
        self.grid[row, col] = value
        self.collapse_domain(row, col, value)

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at (row, col) and restore its full domain."""
        self.grid[row, col] = CellValue.EMPTY
        self.domains[row, col, :] = True

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty."""
        return bool(self.grid[row, col] == CellValue.EMPTY)

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def get_line(self, index: int, is_row: bool) -> np.ndarray:
        """Get a row (is_row=True) or a column."""
        return self.get_row(index) if is_row else self.get_col(index)

    @contextmanager
    def trial(self, row: int, col: int, value: int) -> Iterator[BinairoBoard]:
        """
        Temporarily write ``value`` into the grid at (row, col).

        Only the grid is touched; domains are left as they are. The
        previous content is restored when the block exits.
        """
        previous = self.grid[row, col]
        self.grid[row, col] = value
        try:
            yield self
        finally:
            self.grid[row, col] = previous

    # --- Domains ---

    def get_domain(self, row: int, col: int) -> List[CellValue]:
        """Values still admissible at (row, col), in ascending order."""
        return [v for v in BINARY_VALUES if self.domains[row, col, v]]

    def domain_size(self, row: int, col: int) -> int:
        """Number of values left in the domain of (row, col)."""
        return int(np.count_nonzero(self.domains[row, col]))

    def has_value_in_domain(self, row: int, col: int, value: int) -> bool:
        return bool(self.domains[row, col, value])

    def remove_from_domain(self, row: int, col: int, value: int) -> bool:
        """
        Remove a value from the domain of (row, col).

        Returns:
            True if the value was present and has been removed.
        """
        if not self.domains[row, col, value]:
            return False
        self.domains[row, col, value] = False
        return True

    def collapse_domain(self, row: int, col: int, value: int) -> None:
        """Reduce the domain of (row, col) to the single given value."""
        self.domains[row, col, :] = False
        self.domains[row, col, value] = True

    def reset_domains(self) -> None:
        """Rebuild all domains from the grid: singletons for givens, {0, 1} elsewhere."""
        self.domains[:, :, CellValue.ZERO] = self.grid != CellValue.ONE
        self.domains[:, :, CellValue.ONE] = self.grid != CellValue.ZERO

    def has_domain_wipeout(self) -> bool:
        """True if some empty cell has no admissible value left."""
        empty = self.grid == CellValue.EMPTY
        wiped = ~self.domains.any(axis=2)
        return bool(np.any(empty & wiped))

    # --- Board state ---

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions, in row-major order."""
        rows, cols = np.nonzero(self.grid == CellValue.EMPTY)
        return list(zip(rows.tolist(), cols.tolist()))

    def get_empty_peers(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Empty cells sharing the row or the column of (row, col), excluding it."""
        peers = []
        for i in range(self.size):
            if i != col and self.grid[row, i] == CellValue.EMPTY:
                peers.append((row, i))
            if i != row and self.grid[i, col] == CellValue.EMPTY:
                peers.append((i, col))
        return peers

    def count_empty_in_line(self, index: int, is_row: bool) -> int:
        return int(np.count_nonzero(self.get_line(index, is_row) == CellValue.EMPTY))

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == CellValue.EMPTY))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.grid != CellValue.EMPTY))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def is_row_complete(self, row: int) -> bool:
        return bool(np.all(self.grid[row, :] != CellValue.EMPTY))

    def is_col_complete(self, col: int) -> bool:
        return bool(np.all(self.grid[:, col] != CellValue.EMPTY))

    # --- Conversion ---

    def to_string(self) -> str:
        """
        Convert board to a compact string representation.
        Uses '.' for empty cells and 0/1 for values, row-major.
        """
        chars = {CellValue.EMPTY: ".", CellValue.ZERO: "0", CellValue.ONE: "1"}
        return "".join(chars[int(v)] for v in self.grid.flatten())

    @classmethod
    def from_string(cls, s: str, size: Optional[int] = None) -> BinairoBoard:
        """
        Create a board from a string representation.

        Args:
            s: Row-major string of 0, 1 and empty markers ('.', '-', '_',
               'x' or '2'). Whitespace is ignored.
            size: Board size. Inferred from the string length if omitted.
        """
        s = "".join(s.split())
        if size is None:
            size = math.isqrt(len(s))
        if size < 1 or len(s) != size * size:
            raise ValueError(f"String length must be a perfect square (size*size), got {len(s)}")

        grid = np.full((size, size), CellValue.EMPTY, dtype=np.int8)
        for idx, c in enumerate(s):
            if c in EMPTY_CHARS:
                continue
            if c not in "01":
                raise ValueError(f"Invalid character {c!r} at position {idx}")
            grid[idx // size, idx % size] = int(c)

        return cls(size, grid)

    @classmethod
    def from_2d_list(cls, data: List[List[Optional[int]]]) -> BinairoBoard:
        """Create a board from a 2D list. None or -1 mark empty cells."""
        rows = [[CellValue.EMPTY if v is None else v for v in row] for row in data]
        arr = np.array(rows, dtype=np.int8)
        if arr.ndim != 2:
            raise ValueError("Data must be a square 2D list")
        return cls(arr.shape[0], arr)

    def to_2d_list(self) -> List[List[int]]:
        return self.grid.astype(int).tolist()

    def display(self) -> str:
        """Render the grid with 1-based row and column headers."""
        lines = ["   " + "".join(f" {j + 1:<2d}" for j in range(self.size))]
        lines.append("  " + "-" * (self.size * 3 + 1))
        for i in range(self.size):
            cells = "".join(
                f" {'.' if v == CellValue.EMPTY else int(v):<2}" for v in self.grid[i]
            )
            lines.append(f"{i + 1:<2d}|{cells}")
        return "\n".join(lines)

    def __str__(self) -> str:
        """Pretty-print the board."""
        return self.display()

    def __repr__(self) -> str:
        return f"BinairoBoard(size={self.size}, filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinairoBoard):
            return False
        return self.size == other.size and np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
