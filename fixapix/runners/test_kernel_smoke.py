"""
Smoke test for the kernel runner with full solver integration.

This test verifies that the complete pipeline works:
  1. Validate and encode clues
  2. Solve the CNF
  3. Decode the assignment
  4. Report diagnostics

Each status of solve_puzzle_with_diagnostics is exercised once.
"""

import numpy as np

from fixapix.core.grid_types import ClueGrid, InvalidClueError
from fixapix.runners.kernel import solve_puzzle, solve_puzzle_with_diagnostics
from fixapix.runners.results import is_solution
from fixapix.solver.sat_solver import SolverConfig, UnsatisfiableError


# 5x5 puzzle with a unique picture (a plus sign):
#   . # . . .
#   # # # . .
#   . # . . .
#   . . . . .
#   . . . . .
PLUS_PUZZLE = [
    [3, 4, 3, 1, -1],
    [4, 5, 4, 1, 0],
    [3, 4, 3, 1, -1],
    [1, 1, 1, 0, 0],
    [0, -1, -1, 0, 0],
]


def test_kernel_smoke():
    """
    Smoke test: encode, solve and decode a small puzzle.

    Validates the painting against every clue rather than a fixed picture.
    """
    print("\n" + "=" * 70)
    print("KERNEL SMOKE TEST")
    print("=" * 70)

    grid = ClueGrid.from_rows(PLUS_PUZZLE)
    painted = solve_puzzle(grid)

    print(f"  Painted:\n{painted.astype(int)}")

    assert painted.shape == (5, 5)
    assert painted.dtype == bool
    assert is_solution(grid, painted), "Painting does not satisfy the clues"

    expected = np.zeros((5, 5), dtype=bool)
    expected[0, 1] = expected[2, 1] = True
    expected[1, 0:3] = True
    assert np.array_equal(painted, expected), f"Unexpected picture:\n{painted.astype(int)}"

    print("  ✓ Kernel solved successfully")


def test_kernel_with_diagnostics_ok():
    """Status "ok" with CNF sizes filled in."""
    painted, diag = solve_puzzle_with_diagnostics(PLUS_PUZZLE)

    print(f"  Diagnostics: {diag}")

    assert diag.status == "ok", f"Expected ok, got {diag.status}: {diag.error_message}"
    assert painted is not None
    assert diag.backend == "pysat"
    assert diag.solver_status == "SAT"
    assert diag.num_clues == 21
    assert diag.num_clauses > 0
    assert diag.num_variables == 25 + diag.num_aux_variables
    assert diag.clue_mismatches == []
    assert diag.elapsed_seconds >= 0.0


def test_kernel_with_diagnostics_pulp_backend():
    """The pulp backend produces the same (unique) picture."""
    painted_sat = solve_puzzle(PLUS_PUZZLE)
    painted, diag = solve_puzzle_with_diagnostics(PLUS_PUZZLE, SolverConfig(backend="pulp"))

    assert diag.status == "ok", f"{diag.status}: {diag.error_message}"
    assert diag.solver_status == "Optimal"
    assert np.array_equal(painted, painted_sat)


def test_kernel_with_diagnostics_unsat():
    """Contradictory clues give status "unsat" and no painting."""
    painted, diag = solve_puzzle_with_diagnostics([[0, -1], [-1, 4]])

    assert painted is None
    assert diag.status == "unsat"
    assert diag.solver_status == "UNSAT"
    assert diag.num_clauses == 8


def test_kernel_with_diagnostics_invalid_clue():
    """Oversize clues give status "invalid_clue" before any encoding."""
    painted, diag = solve_puzzle_with_diagnostics([[3]])

    assert painted is None
    assert diag.status == "invalid_clue"
    assert diag.num_clauses == 0
    assert "(0, 0)" in diag.error_message


def test_kernel_with_diagnostics_empty_grid():
    """Grids without cells give status "empty_grid"."""
    for rows in ([], [[]]):
        painted, diag = solve_puzzle_with_diagnostics(rows)
        assert painted is None
        assert diag.status == "empty_grid", f"rows={rows}: got {diag.status}"


def test_kernel_with_diagnostics_solver_failure():
    """An unknown backend is reported as "solver_failure"."""
    painted, diag = solve_puzzle_with_diagnostics(
        PLUS_PUZZLE, SolverConfig(backend="no-such-backend")
    )

    assert painted is None
    assert diag.status == "solver_failure"
    assert diag.num_clauses > 0


def test_kernel_with_diagnostics_unknown_pysat_solver():
    """An unknown pysat solver name is a solver failure, not an unexpected error."""
    painted, diag = solve_puzzle_with_diagnostics(
        PLUS_PUZZLE, SolverConfig(backend="pysat", pysat_solver="no-such-solver")
    )

    assert painted is None
    assert diag.status == "solver_failure", f"{diag.status}: {diag.error_message}"
    assert "pysat" in diag.error_message


def test_kernel_with_diagnostics_unsat_keeps_backend_status():
    """On UNSAT the diagnostics carry the backend's own status string."""
    _, diag = solve_puzzle_with_diagnostics([[0, -1], [-1, 4]], SolverConfig(backend="pulp"))

    assert diag.status == "unsat"
    assert diag.solver_status == "Infeasible", f"Got {diag.solver_status}"


def test_solve_puzzle_raises():
    """solve_puzzle surfaces errors directly."""
    try:
        solve_puzzle([[0, -1], [-1, 4]])
        raise AssertionError("Expected UnsatisfiableError")
    except UnsatisfiableError:
        pass

    try:
        solve_puzzle([[3]])
        raise AssertionError("Expected InvalidClueError")
    except InvalidClueError:
        pass


if __name__ == "__main__":
    test_kernel_smoke()
    test_kernel_with_diagnostics_ok()
    test_kernel_with_diagnostics_pulp_backend()
    test_kernel_with_diagnostics_unsat()
    test_kernel_with_diagnostics_invalid_clue()
    test_kernel_with_diagnostics_empty_grid()
    test_kernel_with_diagnostics_solver_failure()
    test_solve_puzzle_raises()
    print("\n✓ Kernel smoke tests passed")
