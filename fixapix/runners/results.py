"""
Result and diagnostics structures for the Fix-a-Pix solver.

This module defines SolveDiagnostics, the single structured object that
captures everything about a solve attempt, and the clue checker used to
confirm a painted matrix against its grid.

Key components:
  - SolveDiagnostics: Complete solve attempt record (status, sizes, mismatches)
  - count_painted_neighbors: 3x3 window sums over a painted matrix
  - compute_clue_mismatches: Clues whose window count differs from k
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

import numpy as np
from scipy import ndimage as ndi

from fixapix.core.grid_types import ClueGrid, UNSPECIFIED


# Status type for solve attempts
SolveStatus = Literal["ok", "unsat", "invalid_clue", "empty_grid", "solver_failure", "error"]


@dataclass
class SolveDiagnostics:
    """
    Complete diagnostics for a single solve attempt.

    Attributes:
        status: Solve outcome - one of:
            - "ok": solver found a painting and it satisfies every clue
            - "unsat": the encoding is unsatisfiable, the puzzle has no solution
            - "invalid_clue": some clue exceeds its neighborhood size
            - "empty_grid": the grid has zero rows or columns
            - "solver_failure": the backend errored or gave no answer
            - "error": unexpected error during solving
        backend: Solver backend name ("pysat" or "pulp")
        solver_status: Raw status string from the backend (e.g. "SAT", "Optimal")
        num_clauses: Clauses in the CNF
        num_variables: Variables in the CNF (cells + auxiliaries)
        num_aux_variables: Auxiliary witness variables
        num_clues: Clues encoded
        num_trivial_clues: Clues with k = 0 or k = |N|
        clue_mismatches: Unsatisfied clues in the decoded painting (should be empty)
        elapsed_seconds: Wall time from encoding start to decoded result
        error_message: Optional error message for non-"ok" statuses
    """
    status: SolveStatus
    backend: str
    solver_status: str = "Unknown"

    num_clauses: int = 0
    num_variables: int = 0
    num_aux_variables: int = 0
    num_clues: int = 0
    num_trivial_clues: int = 0

    clue_mismatches: List[Dict[str, int]] = field(default_factory=list)
    # Each element: {"r": int, "c": int, "clue": int, "painted": int}

    elapsed_seconds: float = 0.0

    # Debug / error information
    error_message: Optional[str] = None


def count_painted_neighbors(painted: np.ndarray) -> np.ndarray:
    """
    Number of painted cells in every 3x3 window, clipped to the board.

    Args:
        painted: (R, C) boolean array

    Returns:
        (R, C) integer array; entry (r, c) counts painted cells in the window
        centered at (r, c), the center included

    Example:
        >>> count_painted_neighbors(np.array([[True, False], [False, False]]))
        array([[1, 1],
               [1, 1]])
    """
    assert painted.ndim == 2, f"Painted matrix must be 2D, got {painted.ndim}D"

    kernel = np.ones((3, 3), dtype=int)
    return ndi.correlate(painted.astype(int), kernel, mode="constant", cval=0)


def compute_clue_mismatches(grid: ClueGrid, painted: np.ndarray) -> List[Dict[str, int]]:
    """
    List the clues that a painted matrix does not satisfy.

    Args:
        grid: Clue grid
        painted: (R, C) boolean array

    Returns:
        One record per unsatisfied clue, row-major:
          {"r": row, "c": col, "clue": k, "painted": count in window}
        Empty list if the painting solves the puzzle.

    Raises:
        ValueError: if painted does not have the grid's shape
    """
    if painted.shape != grid.dims():
        raise ValueError(
            f"Painted shape {painted.shape} does not match grid shape {grid.dims()}"
        )

    counts = count_painted_neighbors(painted)
    clues = grid.clues

    mismatch_mask = (clues != UNSPECIFIED) & (counts != clues)
    if not mismatch_mask.any():
        return []

    mismatches = []
    for coord in np.argwhere(mismatch_mask):
        r, c = int(coord[0]), int(coord[1])
        mismatches.append({
            "r": r,
            "c": c,
            "clue": int(clues[r, c]),
            "painted": int(counts[r, c]),
        })

    return mismatches


def is_solution(grid: ClueGrid, painted: np.ndarray) -> bool:
    """True if `painted` satisfies every clue of `grid`."""
    return not compute_clue_mismatches(grid, painted)
