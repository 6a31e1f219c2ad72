"""
Command-line front end: solve a Fix-a-Pix puzzle file.

Usage:
    fixapix-solve puzzles/sample.txt
    python -m fixapix.runners.solve_puzzle puzzles/sample.txt --backend pulp

Prints the input puzzle, the number of generated CNF clauses, whether the
formula is satisfiable, the painted picture and the elapsed time.

Exit codes:
    0  solved
    1  unreadable or malformed puzzle (bad file, bad token, clue too large)
    2  the puzzle has no solution
    3  the solver backend failed
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from fixapix.constraints.encoder import encode_puzzle
from fixapix.core.grid_types import (
    EmptyGridError,
    InvalidClueError,
    format_clues,
    render_solution,
)
from fixapix.core.puzzle_io import PuzzleFormatError, load_puzzle
from fixapix.runners.kernel import solve_encoded
from fixapix.runners.results import compute_clue_mismatches
from fixapix.solver.sat_solver import (
    BACKENDS,
    SolverConfig,
    SolverFailureError,
    UnsatisfiableError,
)


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_UNSAT = 2
EXIT_SOLVER_FAILURE = 3


def solve_puzzle_file(
    puzzle_path: Path,
    config: SolverConfig,
    dimacs_out: Optional[Path] = None,
    filled: str = "#",
    empty: str = ".",
) -> int:
    """
    Load, encode, solve and print one puzzle.

    Args:
        puzzle_path: Text or JSON puzzle file
        config: Solver backend configuration
        dimacs_out: If set, the CNF is also written there in DIMACS form
        filled: Character for painted cells in the printed picture
        empty: Character for blank cells in the printed picture

    Returns:
        Process exit code (see module docstring)
    """
    try:
        grid = load_puzzle(puzzle_path)
    except (OSError, PuzzleFormatError, InvalidClueError, EmptyGridError) as e:
        logger.error("Cannot read puzzle %s: %s", puzzle_path, e)
        return EXIT_INPUT_ERROR

    start = time.perf_counter()

    print("[Input problem]")
    print(format_clues(grid))
    print()

    try:
        encoded = encode_puzzle(grid)
    except InvalidClueError as e:
        logger.error("%s", e)
        return EXIT_INPUT_ERROR

    print(f"Number of generated CNF clauses: {encoded.num_clauses}")
    logger.info(
        "Variables: %d (%d auxiliary), clues: %d (%d trivial)",
        encoded.num_variables, encoded.num_aux_variables,
        encoded.num_clues, encoded.num_trivial_clues,
    )

    if dimacs_out is not None:
        dimacs_out.parent.mkdir(parents=True, exist_ok=True)
        with open(dimacs_out, 'w') as f:
            encoded.cnf.to_dimacs(f, comments=[f"c fixapix {puzzle_path.name}"])
        logger.info("Wrote DIMACS CNF to %s", dimacs_out)

    try:
        painted, result = solve_encoded(encoded, config)
    except UnsatisfiableError as e:
        print("SAT: False")
        logger.info("%s", e)
        return EXIT_UNSAT
    except SolverFailureError as e:
        logger.error("%s", e)
        return EXIT_SOLVER_FAILURE

    print("SAT: True")
    print()
    print(render_solution(painted, filled=filled, empty=empty))
    print()

    mismatches = compute_clue_mismatches(grid, painted)
    if mismatches:
        logger.warning("Painting violates %d clue(s): %s", len(mismatches), mismatches)

    elapsed = time.perf_counter() - start
    print(f"Time: {elapsed:.3f}s")
    logger.info("Solver status: %s (%s)", result.solver_status, result.backend)

    return EXIT_OK


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve a Fix-a-Pix puzzle by SAT encoding."
    )
    parser.add_argument(
        "puzzle",
        type=Path,
        help="Puzzle file: '.'/'-1' for empty cells, 0-9 for clues (or a .json list of rows).",
    )
    parser.add_argument(
        "--backend",
        choices=sorted(BACKENDS),
        default="pysat",
        help="Decision procedure to use (default: pysat).",
    )
    parser.add_argument(
        "--pysat-solver",
        default="glucose4",
        help="Solver name for the pysat backend, e.g. glucose4, cadical153, minisat22.",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=None,
        help="Optional time limit in seconds (pulp backend).",
    )
    parser.add_argument(
        "--dimacs-out",
        type=Path,
        default=None,
        help="Optional path where the generated CNF is written in DIMACS format.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log encoder and solver details.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint for solving a single puzzle."""
    args = build_arg_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s"
    )

    config = SolverConfig(
        backend=args.backend,
        pysat_solver=args.pysat_solver,
        time_limit=args.time_limit,
    )

    return solve_puzzle_file(args.puzzle, config, dimacs_out=args.dimacs_out)


if __name__ == "__main__":
    sys.exit(main())
