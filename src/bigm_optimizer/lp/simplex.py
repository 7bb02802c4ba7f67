import logging
from typing import Dict, Optional

import numpy as np

from .tableau import Tableau, standardize
from ..schemas import Problem, SolveOptions, Solution, Variable

logger = logging.getLogger(__name__)


def simplex_solve(problem: Problem, opts: SolveOptions | None = None) -> Solution:
    """
    Big-M primal simplex with Bland's rule: standardise the problem into a fresh
    tableau, then pivot it to a terminal state.
    """

    opts = opts or SolveOptions()
    return run(standardize(problem, opts), opts)


def run(tableau: Tableau, opts: SolveOptions | None = None) -> Solution:
    """
    Pivot ``tableau`` in place until it is optimal, unbounded or the iteration
    cap is hit. The tableau must not be shared with any other caller.
    """

    opts = opts or SolveOptions()
    tol = opts.tol
    iterations = 0

    while True:
        entering = _select_entering(tableau, tol)
        if entering is None:
            return _finish(tableau, iterations, tol)

        row = _select_leaving(tableau, entering, tol)
        if row is None:
            logger.info("Unbounded: column %s has no positive entry", entering.name)
            return Solution(
                status="unbounded",
                iterations=iterations,
                message=f"Unbounded along {entering.name}.",
            )

        if iterations >= opts.max_iterations:
            logger.warning(
                "Iteration limit of %d reached with %s still eligible to enter",
                opts.max_iterations,
                entering.name,
            )
            return Solution(
                status="max_iteration_reached",
                iterations=iterations,
                message=f"Hit iteration limit ({opts.max_iterations}).",
            )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Iteration %d: %s enters, %s leaves row %d (ratio %.6g)",
                iterations + 1,
                entering.name,
                tableau.basis[row].name,
                row,
                tableau.rhs[row] / tableau.matrix[row, entering.id],
            )
        _pivot(tableau, row, entering, tol)
        iterations += 1


def _select_entering(tableau: Tableau, tol: float) -> Optional[Variable]:
    # Bland: lowest id with a positive reduced cost, never the largest one.
    for var in tableau.variables:
        if tableau.objective[var.id] > tol:
            return var
    return None


def _select_leaving(tableau: Tableau, entering: Variable, tol: float) -> Optional[int]:
    column = tableau.matrix[:, entering.id]
    best_row: Optional[int] = None
    best_ratio = np.inf
    for row, value in enumerate(column):
        if value <= tol:
            continue
        ratio = tableau.rhs[row] / value
        if best_row is None or ratio < best_ratio - tol:
            best_row, best_ratio = row, ratio
        elif abs(ratio - best_ratio) <= tol and tableau.basis[row].id < tableau.basis[best_row].id:
            best_row, best_ratio = row, ratio
    return best_row


def _pivot(tableau: Tableau, row: int, entering: Variable, tol: float) -> None:
    col = entering.id
    matrix = tableau.matrix
    rhs = tableau.rhs

    pivot = matrix[row, col]
    matrix[row] /= pivot
    rhs[row] /= pivot

    factors = matrix[:, col].copy()
    factors[row] = 0.0
    matrix -= np.outer(factors, matrix[row])
    rhs -= factors * rhs[row]

    factor = tableau.objective[col]
    tableau.objective -= factor * matrix[row]
    tableau.accumulator -= float(factor * rhs[row])

    # Keep the entering column an exact unit vector.
    matrix[:, col] = 0.0
    matrix[row, col] = 1.0
    tableau.objective[col] = 0.0
    rhs[np.abs(rhs) < tol] = 0.0

    tableau.basis[row] = entering


def _finish(tableau: Tableau, iterations: int, tol: float) -> Solution:
    for row, var in enumerate(tableau.basis):
        if var.kind == "artificial" and tableau.rhs[row] > tol:
            logger.info(
                "Unfeasible: artificial %s still basic at %.6g after %d iterations",
                var.name,
                tableau.rhs[row],
                iterations,
            )
            return Solution(
                status="unfeasible",
                iterations=iterations,
                message=f"Artificial variable {var.name} remains positive.",
            )

    values: Dict[int, float] = {idx: 0.0 for idx in range(tableau.num_decision)}
    for row, var in enumerate(tableau.basis):
        if var.kind == "decision":
            values[var.id] = float(tableau.rhs[row])

    if tableau.optimization == "max":
        objective_value = -tableau.accumulator
    else:
        objective_value = tableau.accumulator

    logger.info("Optimal objective %.6g after %d iterations", objective_value, iterations)
    return Solution(
        status="feasible",
        objective_value=float(objective_value),
        x=values,
        iterations=iterations,
        message="",
    )
