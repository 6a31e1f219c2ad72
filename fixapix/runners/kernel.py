"""
Core kernel runner for the Fix-a-Pix solver.

This module provides the main entrypoints for solving a clue grid:
  1. Validate clues and encode them into CNF
  2. Decide the CNF with the configured backend
  3. Decode the assignment into a painted matrix
  4. Check the painting against every clue and return diagnostics

Data flow:
  ClueGrid -> clue sites -> exactly-k clauses -> CNF -> solver -> assignment -> painted
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence, Tuple

import numpy as np

from fixapix.constraints.encoder import EncodedPuzzle, encode_puzzle
from fixapix.core.grid_types import ClueGrid, EmptyGridError, InvalidClueError, as_clue_grid
from fixapix.runners.results import SolveDiagnostics, compute_clue_mismatches
from fixapix.solver.decoding import assignment_to_grid
from fixapix.solver.sat_solver import (
    SolveResult,
    SolverConfig,
    SolverFailureError,
    UnsatisfiableError,
    solve_cnf,
)


logger = logging.getLogger(__name__)


def solve_encoded(encoded: EncodedPuzzle, config: SolverConfig | None = None) -> Tuple[np.ndarray, SolveResult]:
    """
    Decide an already-encoded puzzle and decode the cell variables.

    Returns:
        (painted, result): the (R, C) boolean matrix and the raw SolveResult

    Raises:
        UnsatisfiableError: if the puzzle has no solution
        SolverFailureError: if the backend fails
    """
    result = solve_cnf(encoded.cnf, config)
    R, C = encoded.grid.dims()
    painted = assignment_to_grid(result.assignment, R, C)
    return painted, result


def solve_puzzle(grid: ClueGrid | Sequence[Sequence[int]], config: SolverConfig | None = None) -> np.ndarray:
    """
    Solve a Fix-a-Pix grid.

    Args:
        grid: ClueGrid, or rows of ints with -1 for unspecified cells
        config: Solver backend configuration (defaults to pysat/glucose4)

    Returns:
        (R, C) boolean matrix, True = painted

    Raises:
        EmptyGridError: if the grid has no cells
        InvalidClueError: if a clue exceeds its neighborhood size
        UnsatisfiableError: if the clues contradict each other
        SolverFailureError: if the backend fails

    Example:
        >>> solve_puzzle(ClueGrid.from_rows([[4, -1], [-1, -1]]))
        array([[ True,  True],
               [ True,  True]])
    """
    encoded = encode_puzzle(as_clue_grid(grid))
    painted, _ = solve_encoded(encoded, config)
    return painted


def solve_puzzle_with_diagnostics(
    grid: ClueGrid | Sequence[Sequence[int]],
    config: SolverConfig | None = None,
) -> Tuple[Optional[np.ndarray], SolveDiagnostics]:
    """
    Solve a Fix-a-Pix grid and return both the painting and diagnostics.

    Unlike solve_puzzle this never raises for puzzle-level failures; the
    outcome is reported through SolveDiagnostics.status instead.

    Args:
        grid: ClueGrid, or rows of ints with -1 for unspecified cells
        config: Solver backend configuration

    Returns:
        Tuple of (painted, diagnostics):
          - painted: (R, C) boolean matrix, or None if no painting was found
          - diagnostics: SolveDiagnostics with status, CNF sizes, timing and
                         any clue mismatches in the decoded painting
    """
    if config is None:
        config = SolverConfig()

    start = time.perf_counter()
    diagnostics = SolveDiagnostics(status="error", backend=config.backend)
    painted: Optional[np.ndarray] = None

    try:
        grid = as_clue_grid(grid)
        encoded = encode_puzzle(grid)
        diagnostics.num_clauses = encoded.num_clauses
        diagnostics.num_variables = encoded.num_variables
        diagnostics.num_aux_variables = encoded.num_aux_variables
        diagnostics.num_clues = encoded.num_clues
        diagnostics.num_trivial_clues = encoded.num_trivial_clues

        painted, result = solve_encoded(encoded, config)
        diagnostics.solver_status = result.solver_status

        diagnostics.clue_mismatches = compute_clue_mismatches(grid, painted)
        if diagnostics.clue_mismatches:
            diagnostics.status = "error"
            diagnostics.error_message = (
                f"Decoded painting violates {len(diagnostics.clue_mismatches)} clue(s)"
            )
            logger.error("%s: %s", diagnostics.error_message, diagnostics.clue_mismatches)
        else:
            diagnostics.status = "ok"

    except InvalidClueError as e:
        diagnostics.status = "invalid_clue"
        diagnostics.error_message = str(e)
        logger.warning("Invalid clue: %s", e)

    except EmptyGridError as e:
        diagnostics.status = "empty_grid"
        diagnostics.error_message = str(e)
        logger.warning("Empty grid: %s", e)

    except UnsatisfiableError as e:
        diagnostics.status = "unsat"
        diagnostics.solver_status = e.solver_status
        diagnostics.error_message = str(e)
        logger.info("Puzzle has no solution: %s", e)

    except SolverFailureError as e:
        diagnostics.status = "solver_failure"
        diagnostics.error_message = str(e)
        logger.error("Solver failure: %s", e)

    except Exception as e:
        # Unexpected error
        diagnostics.status = "error"
        diagnostics.error_message = f"Unexpected error: {type(e).__name__}: {e}"
        logger.exception("Unexpected error while solving %r", grid)

    diagnostics.elapsed_seconds = time.perf_counter() - start

    return painted, diagnostics
