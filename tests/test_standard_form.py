import numpy as np
import pytest

from bigm_optimizer.lp.tableau import standardize
from bigm_optimizer.schemas import Constraint, Problem, SolveOptions

M = 1e9


def make_blending_problem() -> Problem:
    return Problem(
        optimization="min",
        objective_coefficients=[56.0, 42.0],
        constraints=[
            Constraint(cmp="<=", coefficients=[10.0, 11.0], b=10700.0),
            Constraint(cmp=">=", coefficients=[1.0, 1.0], b=1000.0),
            Constraint(cmp="<=", coefficients=[1.0, 0.0], b=700.0),
        ],
    )


def test_auxiliary_columns_and_initial_basis():
    tableau = standardize(make_blending_problem())

    assert [var.name for var in tableau.variables] == ["x0", "x1", "s2", "e3", "a4", "s5"]
    assert [var.name for var in tableau.basis] == ["s2", "a4", "s5"]
    np.testing.assert_array_equal(
        tableau.matrix,
        np.array(
            [
                [10.0, 11.0, 1.0, 0.0, 0.0, 0.0],
                [1.0, 1.0, 0.0, -1.0, 1.0, 0.0],
                [1.0, 0.0, 0.0, 0.0, 0.0, 1.0],
            ]
        ),
    )
    np.testing.assert_array_equal(tableau.rhs, [10700.0, 1000.0, 700.0])
    assert tableau.check_invariants()


def test_big_m_penalty_folded_into_objective_row():
    tableau = standardize(make_blending_problem())

    # Minimisation is negated, then the >= row adds M * coefficients.
    np.testing.assert_allclose(tableau.objective, [M - 56.0, M - 42.0, 0.0, -M, 0.0, 0.0])
    assert tableau.accumulator == pytest.approx(1000.0 * M)
    assert tableau.optimization == "min"
    assert tableau.num_decision == 2


def test_big_m_is_configurable():
    tableau = standardize(make_blending_problem(), SolveOptions(big_m=100.0))

    np.testing.assert_allclose(tableau.objective, [44.0, 58.0, 0.0, -100.0, 0.0, 0.0])
    assert tableau.accumulator == pytest.approx(100_000.0)


def test_negative_rhs_flips_relation_without_touching_input():
    problem = Problem(
        optimization="max",
        objective_coefficients=[1.0, 1.0],
        constraints=[Constraint(cmp="<=", coefficients=[1.0, -1.0], b=-2.0)],
    )
    tableau = standardize(problem)

    # x0 - x1 <= -2  becomes  -x0 + x1 >= 2
    assert [var.kind for var in tableau.variables] == ["decision", "decision", "excess", "artificial"]
    np.testing.assert_array_equal(tableau.matrix, [[-1.0, 1.0, -1.0, 1.0]])
    np.testing.assert_array_equal(tableau.rhs, [2.0])
    assert tableau.basis[0].kind == "artificial"

    assert problem.constraints[0].cmp == "<="
    assert problem.constraints[0].coefficients == [1.0, -1.0]
    assert problem.constraints[0].b == -2.0


def test_equality_gets_single_artificial_and_no_excess_penalty():
    problem = Problem(
        optimization="max",
        objective_coefficients=[3.0, 2.0],
        constraints=[
            Constraint(cmp="==", coefficients=[2.0, 1.0], b=18.0),
            Constraint(cmp=">=", coefficients=[-1.0, 0.0], b=-5.0),
        ],
    )
    tableau = standardize(problem)

    # The second row flips to x0 <= 5 and receives a slack.
    assert [var.name for var in tableau.variables] == ["x0", "x1", "a2", "s3"]
    assert [var.name for var in tableau.basis] == ["a2", "s3"]
    np.testing.assert_allclose(tableau.objective, [3.0 + 2 * M, 2.0 + M, 0.0, 0.0])
    assert tableau.accumulator == pytest.approx(18.0 * M)


def test_no_constraints_gives_empty_tableau():
    tableau = standardize(Problem(optimization="max", objective_coefficients=[1.0, 2.0]))

    assert tableau.shape == (0, 2)
    assert tableau.basis == []
    assert tableau.check_invariants()
