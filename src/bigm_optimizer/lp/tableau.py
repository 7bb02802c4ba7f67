import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from ..schemas import Optimization, Problem, SolveOptions, Variable

logger = logging.getLogger(__name__)


@dataclass
class Tableau:
    """
    Dense simplex tableau for a maximisation problem.

    ``matrix`` is rows x columns, ``rhs`` holds the value of the variable in
    ``basis[r]`` for each row ``r`` and ``objective`` is the reduced-cost row.
    ``accumulator`` tracks minus the internal (maximised) objective value.
    """

    matrix: np.ndarray
    rhs: np.ndarray
    objective: np.ndarray
    accumulator: float
    basis: List[Variable]
    variables: List[Variable]
    optimization: Optimization
    num_decision: int

    @property
    def shape(self) -> Tuple[int, int]:
        return self.matrix.shape

    def check_invariants(self, tol: float = 1e-6) -> bool:
        rows = self.matrix.shape[0]
        if len(self.basis) != rows:
            return False
        for row, var in enumerate(self.basis):
            unit = np.zeros(rows)
            unit[row] = 1.0
            if not np.allclose(self.matrix[:, var.id], unit, atol=tol):
                return False
        return True


def standardize(problem: Problem, opts: SolveOptions | None = None) -> Tableau:
    """
    Convert a general LP into a Big-M tableau: non-negative right-hand sides,
    slack/excess/artificial columns and the penalty folded into the objective row.
    The caller's problem is left untouched.
    """

    opts = opts or SolveOptions()
    n = problem.num_variables

    c = np.array(problem.objective_coefficients, dtype=float)
    if problem.optimization == "min":
        c = -c

    variables: List[Variable] = [Variable(kind="decision", id=idx) for idx in range(n)]
    basis: List[Variable] = []
    entries: List[List[Tuple[int, float]]] = []
    coeff_rows: List[np.ndarray] = []
    rhs_values: List[float] = []
    penalised: List[Tuple[int, int | None]] = []

    def add_column(kind: str) -> Variable:
        var = Variable(kind=kind, id=len(variables))
        variables.append(var)
        return var

    for row, cons in enumerate(problem.constraints):
        coeffs = np.array(cons.coefficients, dtype=float)
        b = float(cons.b)
        cmp = cons.cmp
        if b < 0:
            coeffs = -coeffs
            b = -b
            if cmp == "<=":
                cmp = ">="
            elif cmp == ">=":
                cmp = "<="

        if cmp == "<=":
            slack = add_column("slack")
            entries.append([(slack.id, 1.0)])
            basis.append(slack)
        elif cmp == ">=":
            excess = add_column("excess")
            artificial = add_column("artificial")
            entries.append([(excess.id, -1.0), (artificial.id, 1.0)])
            basis.append(artificial)
            penalised.append((row, excess.id))
        else:
            artificial = add_column("artificial")
            entries.append([(artificial.id, 1.0)])
            basis.append(artificial)
            penalised.append((row, None))

        coeff_rows.append(coeffs)
        rhs_values.append(b)

    m = len(problem.constraints)
    width = len(variables)
    matrix = np.zeros((m, width), dtype=float)
    for row in range(m):
        matrix[row, :n] = coeff_rows[row]
        for col, value in entries[row]:
            matrix[row, col] = value
    rhs = np.array(rhs_values, dtype=float)

    objective = np.zeros(width, dtype=float)
    objective[:n] = c
    accumulator = 0.0
    for row, excess_id in penalised:
        accumulator += rhs[row] * opts.big_m
        objective[:n] += matrix[row, :n] * opts.big_m
        if excess_id is not None:
            objective[excess_id] = -opts.big_m

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Standardised %d constraints x %d decision variables into a %dx%d tableau "
            "(%d penalised rows)",
            m,
            n,
            m,
            width,
            len(penalised),
        )

    return Tableau(
        matrix=matrix,
        rhs=rhs,
        objective=objective,
        accumulator=accumulator,
        basis=basis,
        variables=variables,
        optimization=problem.optimization,
        num_decision=n,
    )
