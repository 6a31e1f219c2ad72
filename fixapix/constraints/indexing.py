"""
Variable indexing for the CNF encoding.

This module provides canonical mappings between:
  - Cell coordinates (r, c) <-> cell variable v (1 .. R*C)
  - Fresh auxiliary variables (R*C + 1 ..), handed out by VariableAllocator

Conventions:
  - Grid shape: (R, C)
  - Cell ordering: row-major, v = r * C + c + 1
  - Cell coordinates are 0-based (Python convention), variables are 1-based
    (DIMACS convention: 0 is never a literal)

This is pure indexing math with no dependencies on clauses or solver.
"""

from typing import Tuple


def cell_var(r: int, c: int, W: int) -> int:
    """
    Convert row/col coordinates to a cell variable (1 .. R*W).

    Args:
        r: row index, 0 <= r < R
        c: col index, 0 <= c < W
        W: grid width

    Returns:
        v: cell variable, v = r * W + c + 1

    Example:
        >>> # 3x4 grid, cell at row 1, col 2
        >>> cell_var(1, 2, 4)
        7
    """
    if r < 0 or c < 0 or c >= W:
        raise ValueError(f"Cell coordinates out of range: r={r}, c={c}, W={W}")

    return r * W + c + 1


def var_to_cell(v: int, W: int) -> Tuple[int, int]:
    """
    Convert a cell variable back to (row, col).

    This is the inverse of cell_var.

    Example:
        >>> var_to_cell(7, 4)
        (1, 2)
    """
    if v < 1:
        raise ValueError(f"Variable must be positive, got v={v}")

    r = (v - 1) // W
    c = (v - 1) % W
    return (r, c)


class VariableAllocator:
    """
    Hands out variable identifiers for one encoding run.

    Cell variables occupy the fixed prefix [1 .. R*C]; the counter starts at
    R*C and every fresh() call returns the next auxiliary above it. The
    allocator is the only owner of the counter.

    Example:
        >>> alloc = VariableAllocator(2, 2)
        >>> alloc.cell_var(1, 1)
        4
        >>> alloc.fresh(), alloc.fresh()
        (5, 6)
        >>> alloc.num_aux
        2
    """

    def __init__(self, num_rows: int, num_cols: int):
        if num_rows < 1 or num_cols < 1:
            raise ValueError(f"Grid dimensions must be positive, got {num_rows}x{num_cols}")

        self.num_rows = num_rows
        self.num_cols = num_cols
        self.num_cells = num_rows * num_cols
        self._top = self.num_cells

    def cell_var(self, r: int, c: int) -> int:
        """Pure lookup; does not touch the counter."""
        if not (0 <= r < self.num_rows and 0 <= c < self.num_cols):
            raise ValueError(
                f"Cell ({r}, {c}) outside grid {self.num_rows}x{self.num_cols}"
            )
        return cell_var(r, c, self.num_cols)

    def fresh(self) -> int:
        """Allocate and return a new auxiliary variable."""
        self._top += 1
        return self._top

    def is_cell_var(self, v: int) -> bool:
        return 1 <= v <= self.num_cells

    @property
    def top(self) -> int:
        """Largest identifier allocated so far (cells included)."""
        return self._top

    @property
    def num_aux(self) -> int:
        return self._top - self.num_cells


if __name__ == "__main__":
    # Sanity checks for indexing roundtrips
    R, W = 3, 4

    print("Testing cell variable roundtrip...")
    for r in range(R):
        for c in range(W):
            v = cell_var(r, c, W)
            assert var_to_cell(v, W) == (r, c), f"Roundtrip failed at {(r, c)}"
    print("  ✓ Cell variable roundtrip passed")

    print("Testing allocator...")
    alloc = VariableAllocator(R, W)
    first = alloc.fresh()
    assert first == R * W + 1, f"First aux should be {R * W + 1}, got {first}"
    assert alloc.num_aux == 1
    print("  ✓ Allocator starts above the cell prefix")

    print("\n✓ indexing.py sanity checks passed.")
