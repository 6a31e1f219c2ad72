"""
Solver adapter: decide a FrozenCNF and return a total assignment.

Two interchangeable backends are registered in BACKENDS:
  - "pysat": conflict-driven SAT solvers from python-sat (glucose, cadical,
    minisat, ...), selected by SolverConfig.pysat_solver
  - "pulp":  0/1 ILP via PuLP's CBC solver; each clause becomes
             sum(x_v for v > 0) + sum(1 - x_v for v < 0) >= 1

Both pass variable identifiers through unchanged, so the decoder can read
cell (r, c) at index r * C + c + 1 of the returned assignment.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
import pulp
from pysat.solvers import NoSuchSolverError, Solver

from fixapix.constraints.builder import FrozenCNF


logger = logging.getLogger(__name__)


class SolveError(Exception):
    """Base class for solver adapter errors."""
    pass


class UnsatisfiableError(SolveError):
    """Raised when the formula has no satisfying assignment.

    `solver_status` keeps the backend's raw status ("UNSAT", "Infeasible").
    """

    def __init__(self, message: str, solver_status: str = "UNSAT"):
        self.solver_status = solver_status
        super().__init__(message)


class SolverFailureError(SolveError):
    """Raised when the backend fails or returns no decisive answer."""

    def __init__(self, backend: str, message: str):
        self.backend = backend
        super().__init__(f"{backend} backend failed: {message}")


@dataclass
class SolverConfig:
    """
    Solver adapter configuration.

    Attributes:
        backend: "pysat" or "pulp"
        pysat_solver: Solver name understood by pysat.solvers.Solver
                      (e.g. "glucose4", "cadical153", "minisat22")
        time_limit: Seconds before CBC gives up (pulp backend only)
    """
    backend: str = "pysat"
    pysat_solver: str = "glucose4"
    time_limit: Optional[float] = None


@dataclass
class SolveResult:
    """
    Satisfying assignment returned by solve_cnf.

    Attributes:
        assignment: Boolean array of length num_vars + 1; index v holds the
                    value of variable v, index 0 is unused (always False)
        solver_status: Raw status from the backend (e.g. "SAT", "Optimal")
        backend: Backend that produced the answer
    """
    assignment: np.ndarray
    solver_status: str
    backend: str

    def value(self, v: int) -> bool:
        return bool(self.assignment[v])


# A backend returns (true variables or None for UNSAT, raw status string)
Backend = Callable[[FrozenCNF, SolverConfig], Tuple[Optional[List[int]], str]]


def _solve_with_pysat(cnf: FrozenCNF, config: SolverConfig) -> Tuple[Optional[List[int]], str]:
    try:
        with Solver(name=config.pysat_solver, bootstrap_with=[list(cl) for cl in cnf]) as s:
            if not s.solve():
                return None, "UNSAT"
            model = s.get_model()
    except (NoSuchSolverError, NotImplementedError, ValueError) as e:
        raise SolverFailureError("pysat", str(e)) from e

    if model is None:
        raise SolverFailureError("pysat", "solver reported SAT but returned no model")

    return [lit for lit in model if lit > 0], "SAT"


def _solve_with_pulp(cnf: FrozenCNF, config: SolverConfig) -> Tuple[Optional[List[int]], str]:
    prob = pulp.LpProblem("fixapix_sat", pulp.LpMinimize)

    x = {
        v: pulp.LpVariable(f"x_{v}", lowBound=0, upBound=1, cat=pulp.LpBinary)
        for v in range(1, cnf.num_vars + 1)
    }

    for clause in cnf:
        expr = pulp.lpSum(x[lit] if lit > 0 else 1 - x[-lit] for lit in clause)
        prob += (expr >= 1)

    # Feasibility only
    prob += 0

    try:
        status = prob.solve(pulp.PULP_CBC_CMD(msg=False, timeLimit=config.time_limit))
    except pulp.PulpSolverError as e:
        raise SolverFailureError("pulp", str(e)) from e
    status_str = pulp.LpStatus[status]

    if status_str == "Infeasible":
        return None, status_str
    if status_str != "Optimal":
        raise SolverFailureError("pulp", f"solver status: {status_str}")

    true_vars = []
    for v, var in x.items():
        val = pulp.value(var)
        # Guard against None or float noise (use > 0.5 threshold)
        if val is not None and val > 0.5:
            true_vars.append(v)

    return true_vars, status_str


BACKENDS: Dict[str, Backend] = {
    "pysat": _solve_with_pysat,
    "pulp": _solve_with_pulp,
}


def solve_cnf(cnf: FrozenCNF, config: Optional[SolverConfig] = None) -> SolveResult:
    """
    Decide `cnf` and return an assignment total over all its variables.

    Variables the backend leaves out of its model (for instance cells that
    no clue mentions) are reported as False.

    Args:
        cnf: Frozen formula to decide
        config: Backend selection; defaults to SolverConfig()

    Returns:
        SolveResult whose assignment satisfies every clause of cnf

    Raises:
        UnsatisfiableError: if the formula has no model
        SolverFailureError: on unknown backend names, backend errors,
                            or a non-decisive status (e.g. time limit)

    Example:
        >>> from fixapix.constraints.builder import FrozenCNF
        >>> res = solve_cnf(FrozenCNF(clauses=((-1,), (2,)), num_vars=2, num_cells=2))
        >>> res.assignment.tolist()
        [False, False, True]
    """
    if config is None:
        config = SolverConfig()

    backend = BACKENDS.get(config.backend)
    if backend is None:
        raise SolverFailureError(
            config.backend, f"unknown backend, expected one of {sorted(BACKENDS)}"
        )

    assignment = np.zeros(cnf.num_vars + 1, dtype=bool)

    if cnf.size() == 0:
        logger.debug("Empty formula, trivially satisfiable")
        return SolveResult(assignment=assignment, solver_status="SAT", backend=config.backend)

    logger.debug(
        "Solving %d clauses over %d variables with %s backend",
        cnf.size(), cnf.num_vars, config.backend,
    )

    true_vars, status_str = backend(cnf, config)

    if true_vars is None:
        logger.debug("Backend %s reported %s", config.backend, status_str)
        raise UnsatisfiableError(
            f"No assignment satisfies the {cnf.size()} clauses ({config.backend}: {status_str})",
            solver_status=status_str,
        )

    for v in true_vars:
        if v > cnf.num_vars:
            raise SolverFailureError(
                config.backend, f"model mentions unknown variable {v} > {cnf.num_vars}"
            )
        assignment[v] = True

    logger.debug("Backend %s reported %s", config.backend, status_str)

    return SolveResult(assignment=assignment, solver_status=status_str, backend=config.backend)
