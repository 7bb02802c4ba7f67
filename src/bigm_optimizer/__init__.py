"""Big-M Optimizer: dense Big-M simplex with Bland's anti-cycling rule."""

from .lp.simplex import run, simplex_solve
from .lp.tableau import Tableau, standardize
from .schemas import Constraint, Problem, Solution, SolveOptions, Variable

solve = simplex_solve

__all__ = [
    "Constraint",
    "Problem",
    "Solution",
    "SolveOptions",
    "Tableau",
    "Variable",
    "run",
    "solve",
    "simplex_solve",
    "standardize",
]
