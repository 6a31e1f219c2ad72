"""
Fix-a-Pix puzzle solver built on a CNF encoding.

Each clue k asks for exactly k painted cells in the 3x3 window around it.
The package encodes every clue as CNF over one variable per cell, hands
the formula to a SAT (pysat) or ILP (pulp) backend and decodes the model
back into a painted matrix.

Key components:
  - core.grid_types: ClueGrid model and neighborhood queries
  - core.puzzle_io: text / JSON puzzle loading
  - constraints.encoder: grid -> CNF (exactly-k per clue)
  - solver.sat_solver: backend adapter (SolverConfig, solve_cnf)
  - solver.decoding: assignment -> painted matrix
  - runners.kernel: end-to-end solve entrypoints
"""

from fixapix.core.grid_types import (
    ClueGrid,
    EmptyGridError,
    InvalidClueError,
    UNSPECIFIED,
    render_solution,
)
from fixapix.core.puzzle_io import PuzzleFormatError, load_puzzle, parse_puzzle
from fixapix.constraints.encoder import EncodedPuzzle, encode_puzzle
from fixapix.solver.sat_solver import (
    SolveError,
    SolverConfig,
    SolverFailureError,
    UnsatisfiableError,
    solve_cnf,
)
from fixapix.solver.decoding import assignment_to_grid
from fixapix.runners.kernel import solve_puzzle, solve_puzzle_with_diagnostics

__all__ = [
    "ClueGrid",
    "EmptyGridError",
    "InvalidClueError",
    "UNSPECIFIED",
    "render_solution",
    "PuzzleFormatError",
    "load_puzzle",
    "parse_puzzle",
    "EncodedPuzzle",
    "encode_puzzle",
    "SolveError",
    "SolverConfig",
    "SolverFailureError",
    "UnsatisfiableError",
    "solve_cnf",
    "assignment_to_grid",
    "solve_puzzle",
    "solve_puzzle_with_diagnostics",
]
