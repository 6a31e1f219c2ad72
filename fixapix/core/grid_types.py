"""
Core grid types for the Fix-a-Pix solver.

This module defines the clue grid model that every downstream component
reads from, plus the small printing helpers used by runners.

Grid: always shape (R, C), dtype=int
  - UNSPECIFIED (-1) marks a cell without a clue
  - 0..9 is a clue: exactly k cells of the 3x3 window centered on the
    clue (clipped to the board, clue cell included) are painted
Cells: addressed as 0-based (row, col) tuples, row-major
Cell variables: 1-based, v(r, c) = r * C + c + 1 (see constraints.indexing)
"""

from typing import List, Sequence, Tuple, TypeAlias

import numpy as np

from fixapix.constraints.indexing import cell_var


# Type aliases
Grid: TypeAlias = np.ndarray   # shape: (R, C), dtype: int, values in {-1, 0, ..., 9}
Cell: TypeAlias = Tuple[int, int]  # (row, col) in {0, ..., R-1} x {0, ..., C-1}

UNSPECIFIED = -1
MAX_CLUE = 9

# 3x3 window offsets in row-major order
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1)
)


class EmptyGridError(Exception):
    """Raised when a clue grid has zero rows or zero columns."""
    pass


class InvalidClueError(Exception):
    """
    Raised when a clue cannot be satisfied by its neighborhood.

    Attributes:
        r: Row of the offending clue (0-based)
        c: Column of the offending clue (0-based)
        k: Clue value
        n: Size of the clue's neighborhood (None when k itself is out of range)
    """

    def __init__(self, r: int, c: int, k: int, n: int | None = None):
        self.r = r
        self.c = c
        self.k = k
        self.n = n
        if n is None:
            msg = (f"Clue at ({r}, {c}) has value {k}; "
                   f"expected {UNSPECIFIED} or 0..{MAX_CLUE}")
        else:
            msg = (f"Clue at ({r}, {c}) asks for {k} painted cells "
                   f"but its neighborhood has only {n}")
        super().__init__(msg)


class ClueGrid:
    """
    Immutable R x C clue grid with neighborhood queries.

    The underlying numpy array is copied on construction and marked
    read-only, so the grid can be shared by every pipeline stage.

    Example:
        >>> g = ClueGrid.from_rows([[4, -1], [-1, -1]])
        >>> g.dims()
        (2, 2)
        >>> g.neighborhood(0, 0)
        [1, 2, 3, 4]
    """

    def __init__(self, clues: Grid):
        arr = np.array(clues, dtype=int)
        if arr.ndim != 2:
            raise ValueError(f"Clue grid must be 2D, got {arr.ndim}D")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise EmptyGridError(f"Clue grid must be non-empty, got shape {arr.shape}")

        bad = np.argwhere((arr < UNSPECIFIED) | (arr > MAX_CLUE))
        if len(bad) > 0:
            r, c = int(bad[0][0]), int(bad[0][1])
            raise InvalidClueError(r, c, int(arr[r, c]))

        arr.setflags(write=False)
        self._clues = arr

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "ClueGrid":
        """
        Build a grid from a list of rows (or any 2D array-like).

        Raises:
            EmptyGridError: if there are no rows or the rows are empty
            ValueError: if the rows have different lengths
        """
        if isinstance(rows, np.ndarray):
            return cls(rows)
        rows = [list(row) for row in rows]
        if not rows:
            raise EmptyGridError("Clue grid must have at least one row")
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise ValueError(f"Clue grid rows have different lengths: {sorted(widths)}")
        return cls(np.array(rows, dtype=int))

    @property
    def clues(self) -> Grid:
        """Read-only (R, C) integer array of clues."""
        return self._clues

    @property
    def num_rows(self) -> int:
        return int(self._clues.shape[0])

    @property
    def num_cols(self) -> int:
        return int(self._clues.shape[1])

    @property
    def num_cells(self) -> int:
        return self.num_rows * self.num_cols

    def dims(self) -> Tuple[int, int]:
        """Return (R, C)."""
        return self.num_rows, self.num_cols

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.num_rows and 0 <= c < self.num_cols

    def clue(self, r: int, c: int) -> int:
        """Return the clue at (r, c), or UNSPECIFIED."""
        if not self.in_bounds(r, c):
            raise IndexError(f"Cell ({r}, {c}) outside grid of shape {self.dims()}")
        return int(self._clues[r, c])

    def neighbor_cells(self, r: int, c: int) -> List[Cell]:
        """
        In-bounds cells of the 3x3 window centered at (r, c), row-major.

        The center cell is included. Result size is 4 (corner), 6 (edge)
        or 9 (interior) on boards of at least 3x3; smaller boards clip further.
        """
        if not self.in_bounds(r, c):
            raise IndexError(f"Cell ({r}, {c}) outside grid of shape {self.dims()}")

        return [
            (r + dr, c + dc)
            for dr, dc in NEIGHBOR_OFFSETS
            if self.in_bounds(r + dr, c + dc)
        ]

    def neighborhood(self, r: int, c: int) -> List[int]:
        """Cell variables of the neighborhood of (r, c), in row-major order."""
        W = self.num_cols
        return [cell_var(rr, cc, W) for rr, cc in self.neighbor_cells(r, c)]

    def neighborhood_size(self, r: int, c: int) -> int:
        return len(self.neighbor_cells(r, c))

    def clue_cells(self) -> List[Cell]:
        """All cells carrying a clue, row-major."""
        coords = np.argwhere(self._clues != UNSPECIFIED)
        return [(int(r), int(c)) for r, c in coords]

    def validate(self) -> None:
        """
        Check every clue against the size of its neighborhood.

        Raises:
            InvalidClueError: for the first clue (row-major) with k > |N|
        """
        for r, c in self.clue_cells():
            k = self.clue(r, c)
            n = self.neighborhood_size(r, c)
            if k > n:
                raise InvalidClueError(r, c, k, n)

    def __repr__(self) -> str:
        R, C = self.dims()
        return f"ClueGrid({R}x{C}, clues={len(self.clue_cells())})"


def as_clue_grid(grid) -> ClueGrid:
    """Accept a ClueGrid, a numpy array or a list of rows and return a ClueGrid."""
    if isinstance(grid, ClueGrid):
        return grid
    return ClueGrid.from_rows(grid)


def format_clues(grid: ClueGrid) -> str:
    """
    Render clues in the dot-and-digit text form, one row per line.

    Example:
        >>> print(format_clues(ClueGrid.from_rows([[1, -1], [-1, 0]])))
        1 .
        . 0
    """
    lines = []
    for row in grid.clues:
        lines.append(' '.join('.' if v == UNSPECIFIED else str(int(v)) for v in row))
    return '\n'.join(lines)


def render_solution(painted: np.ndarray, filled: str = "#", empty: str = ".") -> str:
    """
    Render a boolean painted matrix as text, one row per line.

    Args:
        painted: (R, C) boolean array, True = painted
        filled: character for painted cells
        empty: character for blank cells

    Returns:
        Multi-line string without a trailing newline
    """
    assert painted.ndim == 2, f"Painted matrix must be 2D, got {painted.ndim}D"

    return '\n'.join(
        ''.join(filled if val else empty for val in row)
        for row in painted
    )


def print_grid(grid: ClueGrid) -> None:
    """Print the clue grid for debugging."""
    print(format_clues(grid))


if __name__ == "__main__":
    # Self-test: neighborhood sizes on a 3x3 board
    g = ClueGrid.from_rows([[-1, -1, -1], [-1, 1, -1], [-1, -1, -1]])
    print("Grid:")
    print_grid(g)

    assert g.neighborhood_size(0, 0) == 4
    assert g.neighborhood_size(0, 1) == 6
    assert g.neighborhood_size(1, 1) == 9
    assert g.neighborhood(1, 1) == list(range(1, 10))

    print("Neighborhood self-test passed.")
